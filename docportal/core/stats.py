"""Admin statistics report: aggregation and assembly."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError

from docportal.core.filters import StatsFilters
from docportal.core.store import StatsStore
from docportal.models.profile import Profile, UserRole
from docportal.schemas import (
    ActivitySummary,
    CountPair,
    DashboardReport,
    DashboardStatistics,
    DocumentCreator,
    DocumentFilterOptions,
    DocumentSummary,
    DownloadEventRecord,
    DownloadLogEntry,
    FilterOptions,
    RecentDocument,
    StatsReport,
    SummaryCounts,
    VersionCount,
    VersionDownload,
)

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"
MAX_FEED_SIZE = 1000
RECENT_DOCUMENTS = 10
RECENT_DOWNLOADS_WINDOW = timedelta(days=7)
ACTIVITY_WINDOW = timedelta(days=30)


class StatsError(Exception):
    """Raised when the statistics report cannot be computed."""


def describe_store_error(error: SQLAlchemyError) -> str:
    """Driver message of a store error, without the statement or its parameters."""
    orig = getattr(error, "orig", None)
    if orig is not None:
        return str(orig) or type(orig).__name__
    return type(error).__name__


@dataclass
class ResolvedUsers:
    """User-id constraint for the user-scoped queries.

    ``user_ids`` is None when no search is active (no constraint).
    """

    user_ids: Optional[List[str]] = None
    short_circuit: bool = False


def resolve_users(store: StatsStore, filters: StatsFilters, allow_short_circuit: bool = True) -> ResolvedUsers:
    """Resolve the user search to concrete ids.

    When nobody matches the search and no document matches the document
    filter, every aggregate is empty, so the report can be skipped.
    """
    if not filters.has_search:
        return ResolvedUsers()

    user_ids = store.find_user_ids(filters.user_filter)
    if user_ids:
        return ResolvedUsers(user_ids=user_ids)

    if allow_short_circuit and store.count_documents(filters.document_filter) == 0:
        logger.debug("No users or documents match the search, skipping aggregation")
        return ResolvedUsers(user_ids=[], short_circuit=True)
    return ResolvedUsers(user_ids=[])


def resolve_profile(profiles: Dict[str, Profile], user_id: str) -> Tuple[str, str, str]:
    """Return (email, name, username) for a user, or Unknown placeholders."""
    profile = profiles.get(user_id)
    if profile is None:
        return UNKNOWN, UNKNOWN, UNKNOWN
    return profile.email, profile.full_name, profile.username


def assemble_document_summaries(documents, totals: Dict[str, int], events) -> List[DocumentSummary]:
    events_by_document: Dict[str, List[DownloadLogEntry]] = {}
    for event in events:
        events_by_document.setdefault(event.document_id, []).append(
            DownloadLogEntry(id=event.id, user_id=event.user_id, downloaded_at=event.downloaded_at)
        )

    summaries = []
    for doc in documents:
        logs = events_by_document.get(doc.id, [])
        summaries.append(
            DocumentSummary(
                id=doc.id,
                title=doc.title,
                file_name=doc.file_name,
                category=doc.category,
                total_downloads=totals.get(doc.id, 0),
                filtered_downloads=len(logs),
                download_logs=logs,
            )
        )
    # sorted() is stable: ties keep store order
    return sorted(summaries, key=lambda s: s.total_downloads, reverse=True)


def assemble_version_counts(roster: Sequence[Profile], counts: Dict[str, int]) -> List[VersionCount]:
    profiles = {p.id: p for p in roster}
    result = []
    for user_id in profiles:
        email, name, username = resolve_profile(profiles, user_id)
        result.append(
            VersionCount(
                user_id=user_id,
                email=email,
                name=name,
                username=username,
                versions_count=counts.get(user_id, 0),
            )
        )
    return result


def assemble_download_feed(rows, profiles: Dict[str, Profile]) -> List[DownloadEventRecord]:
    feed = []
    for row in rows:
        email, name, _ = resolve_profile(profiles, row.user_id)
        feed.append(
            DownloadEventRecord(
                id=row.id,
                user_id=row.user_id,
                user_email=email,
                user_name=name,
                document_id=row.document_id,
                document_title=row.document_title,
                document_file_name=row.document_file_name,
                document_category=row.document_category,
                downloaded_at=row.downloaded_at,
            )
        )
    return feed


def assemble_version_downloads(rows) -> List[VersionDownload]:
    return [
        VersionDownload(
            id=row.id,
            version_number=row.version_number,
            version_name=row.version_name,
            document_id=row.document_id,
            document_title=row.document_title,
            document_file_name=row.document_file_name,
            exported_file_path=row.exported_file_path,
            exported_file_size=int(row.exported_file_size) if row.exported_file_size is not None else None,
            created_at=row.created_at,
        )
        for row in rows
    ]


def get_filter_options(store: StatsStore) -> FilterOptions:
    """Full-corpus category and tag vocabulary, independent of any filter."""
    return FilterOptions(
        categories=store.distinct_categories(),
        tags=store.distinct_tags(),
    )


def get_document_filter_options(store: StatsStore) -> DocumentFilterOptions:
    """Vocabulary of root documents for the document browser."""
    return DocumentFilterOptions(
        categories=store.distinct_categories(root_only=True),
        file_types=store.distinct_file_types(root_only=True),
        tags=store.distinct_tags(root_only=True),
    )


def document_priority(download_count: int) -> str:
    if download_count > 50:
        return "High"
    if download_count > 20:
        return "Medium"
    return "Low"


def percentage(part: int, total: int) -> int:
    """Whole-number percentage, rounded half up; 0 when there is no total."""
    if total <= 0:
        return 0
    return (part * 200 + total) // (total * 2)


def assemble_recent_documents(documents, creators: Dict[str, Profile]) -> List[RecentDocument]:
    result = []
    for doc in documents:
        downloads = doc.download_count or 0
        creator = creators.get(doc.created_by) if doc.created_by else None
        result.append(
            RecentDocument(
                id=doc.id,
                title=doc.title,
                category=doc.category,
                file_type=doc.file_type,
                download_count=downloads,
                created_at=doc.created_at,
                priority=document_priority(downloads),
                progress=min(100, downloads),
                creators=[DocumentCreator(id=creator.id, name=creator.full_name)] if creator else [],
            )
        )
    return result


class StatsEngine:
    """Computes the admin statistics report from a store.

    Stateless apart from its configuration; every call recomputes the report.
    """

    def __init__(self, store: StatsStore, feed_limit: int = MAX_FEED_SIZE, short_circuit: bool = True):
        self.store = store
        self.feed_limit = max(1, min(feed_limit, MAX_FEED_SIZE))
        self.short_circuit = short_circuit

    def build_report(self, filters: StatsFilters) -> StatsReport:
        """Build the report for the given filters.

        Raises:
            StatsError: if any read from the store fails.
        """
        try:
            return self._build(filters)
        except SQLAlchemyError as e:
            raise StatsError(describe_store_error(e)) from e

    def _build(self, filters: StatsFilters) -> StatsReport:
        store = self.store
        store.apply_timeout()
        resolved = resolve_users(store, filters, allow_short_circuit=self.short_circuit)
        if resolved.short_circuit:
            return StatsReport(filter_options=get_filter_options(store))

        user_ids = resolved.user_ids
        document_filter = filters.document_filter
        date_range = filters.date_range

        summary = SummaryCounts(
            total_users=store.count_profiles(filters.user_filter),
            total_admins=store.count_profiles(filters.user_filter, role=UserRole.ADMIN),
            total_documents=store.count_documents(document_filter),
        )

        documents = assemble_document_summaries(
            store.list_documents(document_filter),
            store.download_totals(document_filter),
            store.filtered_download_events(document_filter, date_range, user_ids),
        )

        version_counts = assemble_version_counts(
            store.non_admin_profiles(filters.user_filter),
            store.version_counts(document_filter, date_range, user_ids),
        )

        feed_rows = store.download_feed(document_filter, date_range, user_ids, self.feed_limit)
        feed = assemble_download_feed(feed_rows, store.profiles_by_ids([row.user_id for row in feed_rows]))

        version_downloads = assemble_version_downloads(
            store.exported_versions(document_filter, date_range, user_ids)
        )

        logger.info(
            f"Built stats report: {summary.total_documents} documents, "
            f"{len(version_counts)} users, {len(feed)} downloads in feed"
        )
        return StatsReport(
            summary=summary,
            downloads_per_document=documents,
            version_downloads=version_downloads,
            user_versions_count=version_counts,
            user_document_downloads=feed,
            filter_options=get_filter_options(store),
        )

    def build_dashboard(self, now: Optional[datetime] = None) -> DashboardReport:
        """Build the admin dashboard tiles and the list of recent documents.

        Raises:
            StatsError: if any read from the store fails.
        """
        try:
            return self._build_dashboard(now or datetime.utcnow())
        except SQLAlchemyError as e:
            raise StatsError(describe_store_error(e)) from e

    def _build_dashboard(self, now: datetime) -> DashboardReport:
        store = self.store
        store.apply_timeout()

        active_documents = store.count_active_documents()
        statistics = DashboardStatistics(
            documents=CountPair(
                total=active_documents,
                completed=store.count_active_documents(downloaded_only=True),
            ),
            downloads=CountPair(
                total=store.count_downloads(),
                completed=store.count_downloads(since=now - RECENT_DOWNLOADS_WINDOW),
            ),
            subadmins=CountPair(
                total=store.count_users(role=UserRole.SUBADMIN),
                completed=store.count_active_subadmin_permissions(),
            ),
            users=CountPair(
                total=store.count_users(),
                completed=store.count_users(email_confirmed=True),
            ),
            activity=ActivitySummary(
                percentage=percentage(store.count_documents_with_activity(now - ACTIVITY_WINDOW), active_documents),
            ),
        )

        documents = store.recent_documents(RECENT_DOCUMENTS)
        creators = store.profiles_by_ids([doc.created_by for doc in documents if doc.created_by])
        logger.info(f"Built dashboard: {active_documents} active documents, {statistics.downloads.total} downloads")
        return DashboardReport(
            statistics=statistics,
            recent_documents=assemble_recent_documents(documents, creators),
        )
