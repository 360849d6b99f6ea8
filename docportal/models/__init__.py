"""Database models."""

from docportal.models.profile import Profile, UserRole, SubadminPermission
from docportal.models.document import Document, DocumentTag
from docportal.models.download_log import DownloadLog
from docportal.models.version import UserDocumentVersion

__all__ = [
    "Profile",
    "UserRole",
    "SubadminPermission",
    "Document",
    "DocumentTag",
    "DownloadLog",
    "UserDocumentVersion",
]
