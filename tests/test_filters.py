"""Tests for statistics filter building."""

from datetime import datetime

from sqlalchemy.dialects import postgresql

from docportal.core.filters import DateRange, build_filters, parse_tags
from docportal.models.download_log import DownloadLog


def test_no_parameters_means_no_constraints():
    filters = build_filters()

    assert filters.date_range.is_empty
    assert filters.document_filter.is_empty
    assert filters.user_filter.is_empty
    assert filters.tags == []
    assert not filters.has_search


def test_to_date_is_end_of_day():
    filters = build_filters(to_date="2023-01-31")
    end = filters.date_range.end

    assert filters.date_range.start is None
    assert (end.year, end.month, end.day) == (2023, 1, 31)
    assert end.hour == 23
    assert end.minute == 59
    assert end.second == 59
    assert end.microsecond == 999000


def test_from_date_is_start_of_day():
    filters = build_filters(from_date="2023-01-01")

    assert filters.date_range.start == datetime(2023, 1, 1, 0, 0, 0)
    assert filters.date_range.end is None


def test_datetime_strings_are_accepted():
    filters = build_filters(from_date="2023-01-01T15:30:00Z")

    assert filters.date_range.start == datetime(2023, 1, 1)


def test_malformed_dates_are_ignored():
    filters = build_filters(from_date="not-a-date", to_date="2023-13-45")

    assert filters.date_range.is_empty


def test_category_all_is_unset():
    assert build_filters(category="all").document_filter.category.is_empty
    assert build_filters(category="  ").document_filter.category.is_empty
    assert build_filters(category="Finance").document_filter.category.category == "Finance"


def test_parse_tags_drops_empty_entries():
    assert parse_tags("urgent,,test, ") == ["urgent", "test"]
    assert parse_tags("") == []
    assert parse_tags(None) == []


def test_tags_become_overlap_constraint():
    filters = build_filters(tags="urgent,test")

    assert filters.tags == ["urgent", "test"]
    assert filters.document_filter.tags.tags == ("urgent", "test")


def test_search_applies_to_documents_and_users():
    filters = build_filters(search="  bob ")

    assert filters.has_search
    assert filters.document_filter.search.term == "bob"
    assert filters.user_filter.search.term == "bob"


def test_blank_search_is_unset():
    assert not build_filters(search="   ").has_search


def test_document_search_clause_covers_text_fields_and_tags():
    clause = build_filters(search="visa").document_filter.clause()
    sql = str(clause.compile(dialect=postgresql.dialect()))

    for column in ("title", "description", "file_name", "category"):
        assert f"documents.{column}" in sql
    assert "ILIKE" in sql
    assert "EXISTS" in sql and "document_tags.tag" in sql


def test_user_search_clause_covers_profile_fields():
    sql = str(build_filters(search="bob").user_filter.clause().compile(dialect=postgresql.dialect()))

    for column in ("email", "first_name", "last_name", "username"):
        assert f"profiles.{column}" in sql


def test_date_range_clause():
    empty = DateRange()
    assert empty.clause(DownloadLog.downloaded_at) is None

    bounded = DateRange(start=datetime(2023, 1, 1), end=datetime(2023, 1, 31, 23, 59, 59, 999000))
    sql = str(bounded.clause(DownloadLog.downloaded_at).compile(dialect=postgresql.dialect()))
    assert "download_logs.downloaded_at >=" in sql
    assert "download_logs.downloaded_at <=" in sql
