"""Tests for corpus seeding."""

import pytest

from docportal.models import Document, DownloadLog, Profile, UserDocumentVersion
from docportal.seed import seed_corpus, seed_from_yaml

YAML_CORPUS = """
profiles:
  - {id: u1, username: erin, first_name: Erin, last_name: Meier, email: erin@example.com}
documents:
  - id: d1
    title: Residence Permit
    category: Immigration
    file_name: permit.pdf
    tags: [permit, permit, canton]
downloads:
  - document_id: d1
    user_id: u1
    downloaded_at: 2024-05-01T10:00:00
versions:
  - document_id: d1
    user_id: u1
    version_number: 1
    exported_file_path: exports/permit.pdf
    exported_file_size: 2048
"""


def test_seed_from_yaml(db, tmp_path):
    path = tmp_path / "corpus.yaml"
    path.write_text(YAML_CORPUS, encoding="utf-8")

    added = seed_from_yaml(db, str(path))

    assert added == {"profiles": 1, "documents": 1, "downloads": 1, "versions": 1}
    document = db.get(Document, "d1")
    assert document.tags == ["canton", "permit"]
    assert document.file_type == "pdf"
    assert db.query(DownloadLog).count() == 1
    assert db.query(UserDocumentVersion).one().exported_file_size == 2048


def test_seed_skips_existing_ids(db):
    data = {"profiles": [{"id": "u1", "username": "erin", "email": "erin@example.com"}]}

    assert seed_corpus(db, data)["profiles"] == 1
    assert seed_corpus(db, data)["profiles"] == 0
    assert db.query(Profile).count() == 1


def test_seed_rolls_back_on_malformed_entry(db, tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text(
        "profiles:\n"
        "  - {id: u1, username: erin, email: erin@example.com}\n"
        "  - {id: u2, email: nobody@example.com}\n",
        encoding="utf-8",
    )

    with pytest.raises(KeyError):
        seed_from_yaml(db, str(path))

    assert not db.new
    assert db.query(Profile).count() == 0
