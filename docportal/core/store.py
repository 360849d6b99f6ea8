"""Read-only queries backing the statistics report."""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from sqlalchemy import func, or_, text
from sqlalchemy.orm import Session

from docportal.core.filters import DateRange, DocumentFilter, UserFilter, combine
from docportal.models.document import Document, DocumentTag
from docportal.models.download_log import DownloadLog
from docportal.models.profile import Profile, SubadminPermission, UserRole
from docportal.models.version import UserDocumentVersion

logger = logging.getLogger(__name__)


def _user_ids_clause(column, user_ids: Optional[Sequence[str]]):
    # None: no constraint. Empty list: nothing matches on the user axis.
    if user_ids is None:
        return None
    return column.in_(list(user_ids))


class StatsStore:
    """Queryable store over profiles, documents, download logs and versions.

    Wraps a single session; create one per request.
    """

    def __init__(self, session: Session, timeout_ms: int = 0):
        self.session = session
        self.timeout_ms = timeout_ms

    def apply_timeout(self) -> None:
        """Bound every following statement of the current transaction (PostgreSQL only)."""
        if self.timeout_ms and self.session.get_bind().dialect.name == "postgresql":
            self.session.execute(text(f"SET LOCAL statement_timeout = {int(self.timeout_ms)}"))

    # Counts

    def count_profiles(self, user_filter: UserFilter, role: Optional[UserRole] = None) -> int:
        query = self.session.query(func.count(Profile.id)).filter(user_filter.clause())
        if role is not None:
            query = query.filter(Profile.role == role.value)
        return query.scalar() or 0

    def count_documents(self, document_filter: DocumentFilter) -> int:
        return self.session.query(func.count(Document.id)).filter(document_filter.clause()).scalar() or 0

    # Users

    def find_user_ids(self, user_filter: UserFilter) -> List[str]:
        rows = self.session.query(Profile.id).filter(user_filter.clause()).all()
        return [row.id for row in rows]

    def non_admin_profiles(self, user_filter: UserFilter) -> List[Profile]:
        return (
            self.session.query(Profile)
            .filter(Profile.role != UserRole.ADMIN.value, user_filter.clause())
            .order_by(Profile.email.asc(), Profile.id.asc())
            .all()
        )

    def profiles_by_ids(self, user_ids: Sequence[str]) -> Dict[str, Profile]:
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return {}
        profiles = self.session.query(Profile).filter(Profile.id.in_(ids)).all()
        return {p.id: p for p in profiles}

    # Documents and downloads

    def list_documents(self, document_filter: DocumentFilter):
        return (
            self.session.query(Document.id, Document.title, Document.file_name, Document.category)
            .filter(document_filter.clause())
            .order_by(Document.created_at.asc(), Document.id.asc())
            .all()
        )

    def download_totals(self, document_filter: DocumentFilter) -> Dict[str, int]:
        """All-time download counts per document, ignoring date and user filters."""
        rows = (
            self.session.query(DownloadLog.document_id, func.count(DownloadLog.id).label("total"))
            .join(Document, DownloadLog.document_id == Document.id)
            .filter(document_filter.clause())
            .group_by(DownloadLog.document_id)
            .all()
        )
        return {row.document_id: row.total for row in rows}

    def filtered_download_events(
        self,
        document_filter: DocumentFilter,
        date_range: DateRange,
        user_ids: Optional[Sequence[str]],
    ):
        return (
            self.session.query(DownloadLog.id, DownloadLog.document_id, DownloadLog.user_id, DownloadLog.downloaded_at)
            .join(Document, DownloadLog.document_id == Document.id)
            .filter(
                combine(
                    document_filter.clause(),
                    date_range.clause(DownloadLog.downloaded_at),
                    _user_ids_clause(DownloadLog.user_id, user_ids),
                )
            )
            .order_by(DownloadLog.downloaded_at.desc(), DownloadLog.id.asc())
            .all()
        )

    def download_feed(
        self,
        document_filter: DocumentFilter,
        date_range: DateRange,
        user_ids: Optional[Sequence[str]],
        limit: int,
    ):
        return (
            self.session.query(
                DownloadLog.id,
                DownloadLog.user_id,
                DownloadLog.document_id,
                DownloadLog.downloaded_at,
                Document.title.label("document_title"),
                Document.file_name.label("document_file_name"),
                Document.category.label("document_category"),
            )
            .join(Document, DownloadLog.document_id == Document.id)
            .filter(
                combine(
                    document_filter.clause(),
                    date_range.clause(DownloadLog.downloaded_at),
                    _user_ids_clause(DownloadLog.user_id, user_ids),
                )
            )
            .order_by(DownloadLog.downloaded_at.desc(), DownloadLog.id.asc())
            .limit(limit)
            .all()
        )

    # Versions

    def version_counts(
        self,
        document_filter: DocumentFilter,
        date_range: DateRange,
        user_ids: Optional[Sequence[str]],
    ) -> Dict[str, int]:
        rows = (
            self.session.query(UserDocumentVersion.user_id, func.count(UserDocumentVersion.id).label("total"))
            .join(Document, UserDocumentVersion.original_document_id == Document.id)
            .filter(
                combine(
                    document_filter.clause(),
                    date_range.clause(UserDocumentVersion.created_at),
                    _user_ids_clause(UserDocumentVersion.user_id, user_ids),
                )
            )
            .group_by(UserDocumentVersion.user_id)
            .all()
        )
        return {row.user_id: row.total for row in rows}

    def exported_versions(
        self,
        document_filter: DocumentFilter,
        date_range: DateRange,
        user_ids: Optional[Sequence[str]],
    ):
        return (
            self.session.query(
                UserDocumentVersion.id,
                UserDocumentVersion.version_number,
                UserDocumentVersion.version_name,
                UserDocumentVersion.exported_file_path,
                UserDocumentVersion.exported_file_size,
                UserDocumentVersion.created_at,
                Document.id.label("document_id"),
                Document.title.label("document_title"),
                Document.file_name.label("document_file_name"),
            )
            .join(Document, UserDocumentVersion.original_document_id == Document.id)
            .filter(
                combine(
                    UserDocumentVersion.exported_file_path.isnot(None),
                    document_filter.clause(),
                    date_range.clause(UserDocumentVersion.updated_at),
                    _user_ids_clause(UserDocumentVersion.user_id, user_ids),
                )
            )
            .order_by(UserDocumentVersion.created_at.desc(), UserDocumentVersion.id.asc())
            .all()
        )

    # Filter vocabulary

    def distinct_categories(self, root_only: bool = False) -> List[str]:
        query = self.session.query(Document.category).distinct()
        if root_only:
            query = query.filter(Document.parent_document_id.is_(None))
        return [row.category for row in query.order_by(Document.category.asc()).all()]

    def distinct_tags(self, root_only: bool = False) -> List[str]:
        query = self.session.query(DocumentTag.tag).distinct().filter(DocumentTag.tag != "")
        if root_only:
            query = query.join(Document, DocumentTag.document_id == Document.id).filter(
                Document.parent_document_id.is_(None)
            )
        return [row.tag for row in query.order_by(DocumentTag.tag.asc()).all()]

    def distinct_file_types(self, root_only: bool = True) -> List[str]:
        query = self.session.query(Document.file_type).distinct()
        if root_only:
            query = query.filter(Document.parent_document_id.is_(None))
        return [row.file_type for row in query.order_by(Document.file_type.asc()).all()]

    # Dashboard

    def count_active_documents(self, downloaded_only: bool = False) -> int:
        query = self.session.query(func.count(Document.id)).filter(Document.is_active == True)
        if downloaded_only:
            query = query.filter(Document.download_count > 0)
        return query.scalar() or 0

    def count_documents_with_activity(self, updated_since: datetime) -> int:
        """Active documents that were downloaded at least once or updated since the given time."""
        return (
            self.session.query(func.count(Document.id))
            .filter(
                Document.is_active == True,
                or_(Document.download_count > 0, Document.updated_at >= updated_since),
            )
            .scalar()
            or 0
        )

    def count_users(self, role: Optional[UserRole] = None, email_confirmed: Optional[bool] = None) -> int:
        query = self.session.query(func.count(Profile.id))
        if role is not None:
            query = query.filter(Profile.role == role.value)
        if email_confirmed is not None:
            query = query.filter(Profile.email_confirmed == email_confirmed)
        return query.scalar() or 0

    def count_active_subadmin_permissions(self) -> int:
        return (
            self.session.query(func.count(SubadminPermission.id))
            .filter(SubadminPermission.is_active == True)
            .scalar()
            or 0
        )

    def count_downloads(self, since: Optional[datetime] = None) -> int:
        query = self.session.query(func.count(DownloadLog.id))
        if since is not None:
            query = query.filter(DownloadLog.downloaded_at >= since)
        return query.scalar() or 0

    def recent_documents(self, limit: int) -> List[Document]:
        return (
            self.session.query(Document)
            .filter(Document.is_active == True)
            .order_by(Document.created_at.desc(), Document.id.asc())
            .limit(limit)
            .all()
        )
