"""Document model."""

import uuid
from datetime import datetime

from sqlalchemy import BigInteger, Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from docportal.database import Base


class Document(Base):
    """Document model - a relocation document offered for download."""

    __tablename__ = "documents"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(Text, nullable=False)
    description = Column(Text)
    category = Column(String(255), nullable=False, index=True)
    file_name = Column(String(512), nullable=False)
    file_path = Column(String(1024), nullable=False)
    file_size = Column(BigInteger, nullable=False, default=0)
    file_type = Column(String(50), nullable=False, index=True)
    mime_type = Column(String(255), nullable=False)
    parent_document_id = Column(String(36), ForeignKey("documents.id", ondelete="SET NULL"), index=True)
    is_active = Column(Boolean, default=True, index=True)
    download_count = Column(Integer, default=0)
    created_by = Column(String(36), index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    tag_rows = relationship("DocumentTag", back_populates="document", cascade="all, delete-orphan")
    download_logs = relationship("DownloadLog", back_populates="document", cascade="all, delete-orphan")
    versions = relationship("UserDocumentVersion", back_populates="document", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_documents_parent_category", "parent_document_id", "category"),
    )

    @property
    def tags(self) -> list:
        return sorted(row.tag for row in self.tag_rows)

    @tags.setter
    def tags(self, values) -> None:
        self.tag_rows = [DocumentTag(tag=tag) for tag in dict.fromkeys(values or [])]

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, title='{self.title}')>"


class DocumentTag(Base):
    """One tag of a document."""

    __tablename__ = "document_tags"

    document_id = Column(String(36), ForeignKey("documents.id", ondelete="CASCADE"), primary_key=True)
    tag = Column(String(255), primary_key=True, index=True)

    document = relationship("Document", back_populates="tag_rows")

    def __repr__(self) -> str:
        return f"<DocumentTag(document_id={self.document_id}, tag='{self.tag}')>"
