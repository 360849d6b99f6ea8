"""User document version model."""

import uuid
from datetime import datetime

from sqlalchemy import BigInteger, Boolean, Column, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from docportal.database import Base


class UserDocumentVersion(Base):
    """A saved edit or export of a document made by a user."""

    __tablename__ = "user_document_versions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    original_document_id = Column(String(36), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(36), nullable=False, index=True)
    version_number = Column(Integer, nullable=False, default=1)
    version_name = Column(String(255))
    exported_file_path = Column(String(1024))
    exported_file_size = Column(BigInteger)
    exported_mime_type = Column(String(255))
    original_file_type = Column(String(50), nullable=False)
    is_draft = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    document = relationship("Document", back_populates="versions")

    __table_args__ = (
        UniqueConstraint("original_document_id", "user_id", "version_number"),
        Index("idx_user_document_versions_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<UserDocumentVersion(id={self.id}, user_id={self.user_id}, version={self.version_number})>"
