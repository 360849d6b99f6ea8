"""Shared fixtures: an in-memory SQLite database and a small demo corpus."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import docportal.models  # noqa: F401
from docportal.database import Base
from docportal.seed import seed_corpus

CORPUS = {
    "profiles": [
        {"id": "admin-1", "username": "admin", "first_name": "Alice", "last_name": "Admin",
         "email": "alice@portal.ch", "role": "admin"},
        {"id": "user-bob", "username": "bobby", "first_name": "Bob", "last_name": "Builder",
         "email": "bob@example.com", "role": "user"},
        {"id": "user-carol", "username": "carol", "first_name": "Carol", "last_name": "Jones",
         "email": "carol@example.com", "role": "user"},
        {"id": "user-dan", "username": "dan", "first_name": "Dan", "last_name": "Brown",
         "email": "dan@example.com", "role": "subadmin"},
    ],
    "documents": [
        {"id": "doc-tax", "title": "Tax Guide", "description": "Swiss tax basics", "category": "Finance",
         "file_name": "tax-guide.pdf", "tags": ["tax", "urgent"], "created_at": datetime(2023, 1, 1)},
        {"id": "doc-housing", "title": "Housing Checklist", "category": "Housing",
         "file_name": "housing.docx", "tags": ["moving"], "created_at": datetime(2023, 1, 2)},
        {"id": "doc-insurance", "title": "Health Insurance", "category": "Finance",
         "file_name": "insurance.pdf", "tags": [], "created_at": datetime(2023, 1, 3)},
    ],
    "downloads": [
        {"document_id": "doc-tax", "user_id": "user-bob", "downloaded_at": datetime(2023, 1, 10, 9, 0)},
        {"document_id": "doc-tax", "user_id": "user-carol", "downloaded_at": datetime(2023, 1, 31, 23, 30)},
        {"document_id": "doc-tax", "user_id": "user-bob", "downloaded_at": datetime(2023, 2, 5, 10, 0)},
        {"document_id": "doc-housing", "user_id": "user-carol", "downloaded_at": datetime(2023, 1, 15, 12, 0)},
        {"document_id": "doc-housing", "user_id": "admin-1", "downloaded_at": datetime(2022, 12, 20, 8, 0)},
    ],
    "versions": [
        {"document_id": "doc-tax", "user_id": "user-bob", "version_number": 1, "version_name": "Draft",
         "exported_file_path": "exports/tax-v1.pdf", "exported_file_size": 1024,
         "created_at": datetime(2023, 1, 12)},
        {"document_id": "doc-tax", "user_id": "user-bob", "version_number": 2,
         "created_at": datetime(2023, 2, 1)},
        {"document_id": "doc-housing", "user_id": "user-carol", "version_number": 1,
         "exported_file_path": "exports/housing-v1.docx", "exported_file_size": 5_000_000_000,
         "created_at": datetime(2023, 1, 20)},
    ],
}


@pytest.fixture
def db():
    """Fresh in-memory database session."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def corpus(db):
    """Database seeded with the demo corpus."""
    seed_corpus(db, CORPUS)
    return db
