"""Profile model."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from docportal.database import Base


class UserRole(str, enum.Enum):
    """User role enum."""

    USER = "user"
    SUBADMIN = "subadmin"
    ADMIN = "admin"


class Profile(Base):
    """Profile of a portal user. The id is the auth provider's user id."""

    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String(100), unique=True, nullable=False, index=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    role = Column(String(20), nullable=False, default=UserRole.USER.value, index=True)
    email_confirmed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    subadmin_permission = relationship("SubadminPermission", back_populates="profile", uselist=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, username='{self.username}', role='{self.role}')>"


class SubadminPermission(Base):
    """Permissions granted to a subadmin."""

    __tablename__ = "subadmin_permissions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), unique=True, nullable=False)
    can_upload_documents = Column(Boolean, nullable=False, default=False)
    can_view_stats = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    profile = relationship("Profile", back_populates="subadmin_permission")

    def __repr__(self) -> str:
        return f"<SubadminPermission(user_id={self.user_id}, can_view_stats={self.can_view_stats})>"
