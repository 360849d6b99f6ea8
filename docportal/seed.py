"""Seed a demo corpus from a YAML file.

Expected layout::

    profiles:
      - {id: ..., username: ..., first_name: ..., last_name: ..., email: ..., role: user}
    documents:
      - {id: ..., title: ..., category: ..., file_name: ..., tags: [...]}
    downloads:
      - document_id: ...
        user_id: ...
        downloaded_at: 2024-05-01T10:00:00
    versions:
      - {document_id: ..., user_id: ..., version_number: 1, exported_file_size: 1024}
"""

import logging
import uuid
from datetime import datetime

import yaml
from sqlalchemy.orm import Session

from docportal.models import Document, DownloadLog, Profile, UserDocumentVersion

logger = logging.getLogger(__name__)


def _timestamp(value):
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def seed_corpus(db: Session, data: dict) -> dict:
    """Insert profiles, documents, downloads and versions. Existing ids are skipped."""
    added = {"profiles": 0, "documents": 0, "downloads": 0, "versions": 0}

    for item in data.get("profiles", []) or []:
        if item.get("id") and db.get(Profile, item["id"]):
            logger.info(f"Profile {item['id']} already exists, skipping")
            continue
        db.add(
            Profile(
                id=item.get("id") or str(uuid.uuid4()),
                username=item["username"],
                first_name=item.get("first_name", ""),
                last_name=item.get("last_name", ""),
                email=item["email"],
                role=item.get("role", "user"),
                email_confirmed=item.get("email_confirmed", False),
            )
        )
        added["profiles"] += 1

    for item in data.get("documents", []) or []:
        if item.get("id") and db.get(Document, item["id"]):
            logger.info(f"Document {item['id']} already exists, skipping")
            continue
        file_name = item.get("file_name", f"{item['title']}.pdf")
        db.add(
            Document(
                id=item.get("id") or str(uuid.uuid4()),
                title=item["title"],
                description=item.get("description"),
                category=item["category"],
                tags=item.get("tags", []),
                file_name=file_name,
                file_path=item.get("file_path", f"documents/{file_name}"),
                file_size=item.get("file_size", 0),
                file_type=item.get("file_type", file_name.rsplit(".", 1)[-1]),
                mime_type=item.get("mime_type", "application/octet-stream"),
                parent_document_id=item.get("parent_document_id"),
                is_active=item.get("is_active", True),
                download_count=item.get("download_count", 0),
                created_by=item.get("created_by"),
                created_at=_timestamp(item.get("created_at")) or datetime.utcnow(),
                updated_at=_timestamp(item.get("updated_at")) or datetime.utcnow(),
            )
        )
        added["documents"] += 1
    db.flush()

    for item in data.get("downloads", []) or []:
        db.add(
            DownloadLog(
                document_id=item["document_id"],
                user_id=item["user_id"],
                downloaded_at=_timestamp(item.get("downloaded_at")) or datetime.utcnow(),
            )
        )
        added["downloads"] += 1

    for item in data.get("versions", []) or []:
        created_at = _timestamp(item.get("created_at")) or datetime.utcnow()
        db.add(
            UserDocumentVersion(
                original_document_id=item["document_id"],
                user_id=item["user_id"],
                version_number=item.get("version_number", 1),
                version_name=item.get("version_name"),
                exported_file_path=item.get("exported_file_path"),
                exported_file_size=item.get("exported_file_size"),
                original_file_type=item.get("original_file_type", "docx"),
                is_draft=item.get("is_draft", True),
                created_at=created_at,
                updated_at=_timestamp(item.get("updated_at")) or created_at,
            )
        )
        added["versions"] += 1

    db.commit()
    return added


def seed_from_yaml(db: Session, yaml_file: str) -> dict:
    """Seed the corpus described in a YAML file."""
    with open(yaml_file, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    try:
        return seed_corpus(db, data)
    except Exception:
        db.rollback()
        raise
