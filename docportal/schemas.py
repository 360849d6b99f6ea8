"""Response schemas for the statistics endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class SummaryCounts(BaseModel):
    """Headline counts."""

    model_config = ConfigDict(populate_by_name=True)

    total_users: int = Field(0, alias="totalUsers")
    total_admins: int = Field(0, alias="totalAdmins")
    total_documents: int = Field(0, alias="totalDocuments")


class DownloadLogEntry(BaseModel):
    id: str
    user_id: str
    downloaded_at: Optional[datetime] = None


class DocumentSummary(BaseModel):
    """Download counts of one document."""

    id: str
    title: str
    file_name: str
    category: str
    total_downloads: int
    filtered_downloads: int
    download_logs: List[DownloadLogEntry] = []


class VersionCount(BaseModel):
    """Number of document versions saved by one user."""

    user_id: str
    email: str
    name: str
    username: str
    versions_count: int


class VersionDownload(BaseModel):
    """An exported document version."""

    id: str
    version_number: int
    version_name: Optional[str] = None
    document_id: str
    document_title: str
    document_file_name: str
    exported_file_path: Optional[str] = None
    exported_file_size: Optional[int] = None
    created_at: Optional[datetime] = None

    @field_serializer("exported_file_size")
    def serialize_file_size(self, size: Optional[int], _info) -> Optional[str]:
        """Serialize the 64-bit file size as a decimal string."""
        return str(size) if size is not None else None


class DownloadEventRecord(BaseModel):
    """One download joined with its document and user."""

    id: str
    user_id: str
    user_email: str
    user_name: str
    document_id: str
    document_title: str
    document_file_name: str
    document_category: str
    downloaded_at: Optional[datetime] = None


class FilterOptions(BaseModel):
    categories: List[str] = []
    tags: List[str] = []


class DocumentFilterOptions(BaseModel):
    """Filter vocabulary for the document browser."""

    model_config = ConfigDict(populate_by_name=True)

    categories: List[str] = []
    file_types: List[str] = Field(default_factory=list, alias="fileTypes")
    tags: List[str] = []


class StatsReport(BaseModel):
    """Admin statistics report."""

    model_config = ConfigDict(populate_by_name=True)

    summary: SummaryCounts = Field(default_factory=SummaryCounts)
    downloads_per_document: List[DocumentSummary] = Field(default_factory=list, alias="downloadsPerDocument")
    version_downloads: List[VersionDownload] = Field(default_factory=list, alias="versionDownloads")
    user_versions_count: List[VersionCount] = Field(default_factory=list, alias="userVersionsCount")
    user_document_downloads: List[DownloadEventRecord] = Field(default_factory=list, alias="userDocumentDownloads")
    filter_options: FilterOptions = Field(default_factory=FilterOptions, alias="filterOptions")


class CountPair(BaseModel):
    """A total and the part of it that meets the tile's condition."""

    total: int = 0
    completed: int = 0


class ActivitySummary(BaseModel):
    percentage: int = 0


class DashboardStatistics(BaseModel):
    """Headline tiles of the admin dashboard.

    ``documents``: active documents / those downloaded at least once.
    ``downloads``: all downloads / those of the last 7 days.
    ``subadmins``: subadmin profiles / active subadmin permissions.
    ``users``: all profiles / those with a confirmed email.
    """

    documents: CountPair = Field(default_factory=CountPair)
    downloads: CountPair = Field(default_factory=CountPair)
    subadmins: CountPair = Field(default_factory=CountPair)
    users: CountPair = Field(default_factory=CountPair)
    activity: ActivitySummary = Field(default_factory=ActivitySummary)


class DocumentCreator(BaseModel):
    id: str
    name: str


class RecentDocument(BaseModel):
    """A recently added document with its popularity."""

    id: str
    title: str
    category: str
    file_type: str
    download_count: int
    created_at: Optional[datetime] = None
    priority: str
    progress: int
    creators: List[DocumentCreator] = []


class DashboardReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    statistics: DashboardStatistics = Field(default_factory=DashboardStatistics)
    recent_documents: List[RecentDocument] = Field(default_factory=list, alias="recentDocuments")
