"""Normalization of raw statistics query parameters into filter predicates.

Each filter part is a small immutable value with an explicit "empty" variant.
A part renders to a SQLAlchemy clause, or to ``None`` when it imposes no
constraint; ``combine`` ANDs whatever is left.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import List, Optional, Tuple

from sqlalchemy import and_, or_, true

from docportal.models.document import Document, DocumentTag
from docportal.models.profile import Profile

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"
END_OF_DAY = time(23, 59, 59, 999000)


def combine(*clauses):
    """AND together the non-empty clauses. No clauses means no constraint."""
    parts = [c for c in clauses if c is not None]
    if not parts:
        return true()
    if len(parts) == 1:
        return parts[0]
    return and_(*parts)


@dataclass(frozen=True)
class DateRange:
    """Inclusive datetime bounds. Both bounds absent means no date constraint."""

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None

    def clause(self, column):
        conditions = []
        if self.start is not None:
            conditions.append(column >= self.start)
        if self.end is not None:
            conditions.append(column <= self.end)
        if not conditions:
            return None
        return and_(*conditions)


@dataclass(frozen=True)
class TextSearch:
    """Free-text search term, expanded per entity domain."""

    term: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.term is None

    def document_clause(self):
        if self.term is None:
            return None
        return or_(
            Document.title.icontains(self.term, autoescape=True),
            Document.description.icontains(self.term, autoescape=True),
            Document.file_name.icontains(self.term, autoescape=True),
            Document.category.icontains(self.term, autoescape=True),
            Document.tag_rows.any(DocumentTag.tag == self.term),
        )

    def user_clause(self):
        if self.term is None:
            return None
        return or_(
            Profile.email.icontains(self.term, autoescape=True),
            Profile.first_name.icontains(self.term, autoescape=True),
            Profile.last_name.icontains(self.term, autoescape=True),
            Profile.username.icontains(self.term, autoescape=True),
        )


@dataclass(frozen=True)
class CategoryMatch:
    """Exact category constraint."""

    category: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.category is None

    def clause(self):
        if self.category is None:
            return None
        return Document.category == self.category


@dataclass(frozen=True)
class TagOverlap:
    """Matches documents carrying any of the given tags."""

    tags: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.tags

    def clause(self):
        if not self.tags:
            return None
        return Document.tag_rows.any(DocumentTag.tag.in_(self.tags))


@dataclass(frozen=True)
class DocumentFilter:
    search: TextSearch = field(default_factory=TextSearch)
    category: CategoryMatch = field(default_factory=CategoryMatch)
    tags: TagOverlap = field(default_factory=TagOverlap)

    @property
    def is_empty(self) -> bool:
        return self.search.is_empty and self.category.is_empty and self.tags.is_empty

    def clause(self):
        return combine(self.search.document_clause(), self.category.clause(), self.tags.clause())


@dataclass(frozen=True)
class UserFilter:
    search: TextSearch = field(default_factory=TextSearch)

    @property
    def is_empty(self) -> bool:
        return self.search.is_empty

    def clause(self):
        return combine(self.search.user_clause())


@dataclass(frozen=True)
class StatsFilters:
    """All predicates derived from one statistics request."""

    date_range: DateRange = field(default_factory=DateRange)
    document_filter: DocumentFilter = field(default_factory=DocumentFilter)
    user_filter: UserFilter = field(default_factory=UserFilter)
    tags: List[str] = field(default_factory=list)

    @property
    def has_search(self) -> bool:
        return not self.user_filter.search.is_empty


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_date(value: Optional[str], name: str = "date") -> Optional[date]:
    """Parse an ISO date (or datetime) string. Unparseable input yields None."""
    value = _clean(value)
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        logger.warning(f"Ignoring unparseable {name} '{value}'")
        return None


def parse_tags(value: Optional[str]) -> List[str]:
    """Split a comma-separated tag list, dropping empty entries."""
    if not value:
        return []
    return [tag.strip() for tag in value.split(",") if tag.strip()]


def build_date_range(from_date: Optional[str], to_date: Optional[str]) -> DateRange:
    start_day = parse_date(from_date, "fromDate")
    end_day = parse_date(to_date, "toDate")
    return DateRange(
        start=datetime.combine(start_day, time.min) if start_day else None,
        end=datetime.combine(end_day, END_OF_DAY) if end_day else None,
    )


def build_filters(
    from_date: Optional[str] = None,
    to_date: Optional[str] = None,
    search: Optional[str] = None,
    category: Optional[str] = None,
    tags: Optional[str] = None,
) -> StatsFilters:
    """Build the date, document and user predicates for a statistics request."""
    term = _clean(search)
    category = _clean(category)
    if category == ALL_CATEGORIES:
        category = None
    tag_list = parse_tags(tags)

    text_search = TextSearch(term)
    return StatsFilters(
        date_range=build_date_range(from_date, to_date),
        document_filter=DocumentFilter(
            search=text_search,
            category=CategoryMatch(category),
            tags=TagOverlap(tuple(tag_list)),
        ),
        user_filter=UserFilter(search=text_search),
        tags=tag_list,
    )
