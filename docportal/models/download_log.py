"""Download log model."""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship

from docportal.database import Base


class DownloadLog(Base):
    """A single download of a document by a user."""

    __tablename__ = "download_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    document_id = Column(String(36), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(36), nullable=False)
    downloaded_at = Column(DateTime, default=datetime.utcnow)
    ip_address = Column(String(64))
    user_agent = Column(Text)
    context = Column(Text)

    document = relationship("Document", back_populates="download_logs")

    __table_args__ = (
        Index("idx_download_logs_document_id", "document_id", "downloaded_at"),
        Index("idx_download_logs_user_id", "user_id", "downloaded_at"),
        Index("idx_download_logs_downloaded_at", "downloaded_at"),
    )

    def __repr__(self) -> str:
        return f"<DownloadLog(id={self.id}, document_id={self.document_id}, user_id={self.user_id})>"
