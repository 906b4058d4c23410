import json
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

import psycopg
from pydantic import ValidationError

from kyc_wallet import config
from kyc_wallet.exceptions import StorageError
from kyc_wallet.models import HolderRecord, StoredHolderRecord

log = logging.getLogger(__name__)

DRAFT_KEY = "holder_form"

# Assigned by persist(), never part of the stored JSON
STORED_KEYS = {"id", "created_at"}


def init_db():
    try:
        with psycopg.connect(config.DATABASE_URL) as conn:
            with conn.cursor() as cur:
                cur.execute("""
                    CREATE TABLE IF NOT EXISTS holders (
                        id UUID PRIMARY KEY,
                        created_at TIMESTAMPTZ NOT NULL,
                        data JSONB NOT NULL
                    )
                """)
                cur.execute("""
                    CREATE TABLE IF NOT EXISTS drafts (
                        key TEXT PRIMARY KEY,
                        data JSONB NOT NULL
                    )
                """)
                conn.commit()
    except psycopg.Error as e:
        log.error("Error initializing storage: %s", e)
        raise StorageError("Failed to initialize storage") from e


# =============================================================================
# Holder records
# =============================================================================


def persist(record: HolderRecord) -> StoredHolderRecord:
    """Store a submitted holder record and return it with its id and timestamp."""
    # A previously stored record gets a fresh id and timestamp
    stored = StoredHolderRecord(
        **record.model_dump(exclude=STORED_KEYS),
        id=str(uuid.uuid4()),
        created_at=datetime.now(timezone.utc),
    )
    data = json.dumps(record.model_dump(mode="json", exclude=STORED_KEYS))
    try:
        with psycopg.connect(config.DATABASE_URL) as conn:
            with conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO holders (id, created_at, data)
                    VALUES (%s, %s, %s)
                """, (stored.id, stored.created_at, data))
                conn.commit()
    except psycopg.Error as e:
        log.error("Error saving holder information: %s", e)
        raise StorageError("Failed to save holder information") from e
    return stored


def load_all() -> List[StoredHolderRecord]:
    try:
        with psycopg.connect(config.DATABASE_URL) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT id, created_at, data FROM holders ORDER BY created_at")
                rows = cur.fetchall()
    except psycopg.Error as e:
        log.error("Error reading holder records: %s", e)
        return []

    results = []
    for record_id, created_at, data in rows:
        # JSONB comes back decoded from psycopg, text from other adapters
        if isinstance(data, str):
            data = json.loads(data)
        try:
            results.append(StoredHolderRecord(**data, id=str(record_id), created_at=created_at))
        except ValidationError as e:
            log.warning("Skipping unreadable holder record %s: %s", record_id, e)
    return results


# =============================================================================
# Draft autosave
# =============================================================================


def save_draft(record: HolderRecord):
    try:
        with psycopg.connect(config.DATABASE_URL) as conn:
            with conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO drafts (key, data)
                    VALUES (%s, %s)
                    ON CONFLICT (key) DO UPDATE SET data = EXCLUDED.data
                """, (DRAFT_KEY, json.dumps(record.model_dump(mode="json", exclude=STORED_KEYS))))
                conn.commit()
    except psycopg.Error as e:
        log.warning("Could not save draft: %s", e)


def load_draft() -> Optional[HolderRecord]:
    try:
        with psycopg.connect(config.DATABASE_URL) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT data FROM drafts WHERE key = %s", (DRAFT_KEY,))
                row = cur.fetchone()
    except psycopg.Error as e:
        log.warning("Could not load draft: %s", e)
        return None

    if not row:
        return None
    data = json.loads(row[0]) if isinstance(row[0], str) else row[0]
    try:
        return HolderRecord(**data)
    except ValidationError as e:
        log.warning("Discarding unreadable draft: %s", e)
        return None


def clear_draft():
    try:
        with psycopg.connect(config.DATABASE_URL) as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM drafts WHERE key = %s", (DRAFT_KEY,))
                conn.commit()
    except psycopg.Error as e:
        log.warning("Could not clear draft: %s", e)
