"""Tests for the admin dashboard tiles."""

from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from docportal.core.stats import StatsEngine, StatsError, document_priority, percentage
from docportal.core.store import StatsStore
from docportal.models import Document, Profile, SubadminPermission
from docportal.seed import seed_corpus

NOW = datetime(2023, 2, 6, 12, 0)


@pytest.fixture
def dashboard_corpus(corpus):
    """Demo corpus with download counters, an inactive document and a stale one."""
    updates = {
        "doc-tax": {"download_count": 60, "updated_at": datetime(2022, 6, 1), "created_by": "admin-1"},
        "doc-housing": {"download_count": 25, "updated_at": datetime(2022, 6, 1), "created_by": "user-gone"},
        "doc-insurance": {"download_count": 0, "updated_at": datetime(2023, 1, 20)},
    }
    for doc_id, values in updates.items():
        document = corpus.get(Document, doc_id)
        for name, value in values.items():
            setattr(document, name, value)
    corpus.get(Profile, "user-bob").email_confirmed = True
    corpus.add(SubadminPermission(user_id="user-dan", is_active=True))
    corpus.commit()

    seed_corpus(
        corpus,
        {
            "documents": [
                {"id": "doc-permit", "title": "Permit Renewal", "category": "Immigration",
                 "file_name": "permit.pdf", "created_at": datetime(2023, 1, 5), "updated_at": datetime(2022, 6, 1)},
                {"id": "doc-retired", "title": "Old Permit Form", "category": "Immigration",
                 "file_name": "old.pdf", "is_active": False, "download_count": 99,
                 "created_at": datetime(2023, 2, 1)},
            ]
        },
    )
    return corpus


def test_dashboard_tiles(dashboard_corpus):
    stats = StatsEngine(StatsStore(dashboard_corpus)).build_dashboard(now=NOW).statistics

    assert (stats.documents.total, stats.documents.completed) == (4, 2)
    assert (stats.downloads.total, stats.downloads.completed) == (5, 2)
    assert (stats.subadmins.total, stats.subadmins.completed) == (1, 1)
    assert (stats.users.total, stats.users.completed) == (4, 1)
    # doc-tax and doc-housing were downloaded, doc-insurance was updated recently
    assert stats.activity.percentage == 75


def test_recent_documents_newest_first_with_creators(dashboard_corpus):
    recent = StatsEngine(StatsStore(dashboard_corpus)).build_dashboard(now=NOW).recent_documents

    assert [d.id for d in recent] == ["doc-permit", "doc-insurance", "doc-housing", "doc-tax"]

    tax = recent[-1]
    assert (tax.priority, tax.progress) == ("High", 60)
    assert [(c.id, c.name) for c in tax.creators] == [("admin-1", "Alice Admin")]

    housing = recent[-2]
    assert (housing.priority, housing.progress) == ("Medium", 25)
    assert housing.creators == []


def test_recent_documents_are_capped(db):
    seed_corpus(
        db,
        {
            "documents": [
                {"id": f"doc-{i:02d}", "title": f"Doc {i}", "category": "General",
                 "file_name": f"doc-{i}.pdf", "created_at": datetime(2023, 1, i + 1)}
                for i in range(12)
            ]
        },
    )

    recent = StatsEngine(StatsStore(db)).build_dashboard(now=NOW).recent_documents

    assert len(recent) == 10
    assert recent[0].id == "doc-11"


def test_empty_dashboard(db):
    report = StatsEngine(StatsStore(db)).build_dashboard(now=NOW)

    assert report.statistics.activity.percentage == 0
    assert report.recent_documents == []
    assert report.model_dump(by_alias=True)["recentDocuments"] == []


def test_dashboard_store_failure_raises_stats_error(corpus):
    class BrokenStore(StatsStore):
        def count_downloads(self, since=None):
            raise OperationalError("SELECT count(*) FROM download_logs", {}, Exception("Dashboard Crash"))

    with pytest.raises(StatsError, match="Dashboard Crash"):
        StatsEngine(BrokenStore(corpus)).build_dashboard(now=NOW)


def test_document_priority():
    assert document_priority(0) == "Low"
    assert document_priority(20) == "Low"
    assert document_priority(21) == "Medium"
    assert document_priority(50) == "Medium"
    assert document_priority(51) == "High"


def test_percentage_rounds_half_up():
    assert percentage(0, 0) == 0
    assert percentage(2, 3) == 67
    assert percentage(1, 2) == 50
    assert percentage(1, 8) == 13
    assert percentage(5, 5) == 100
