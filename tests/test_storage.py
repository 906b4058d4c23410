"""Tests for holder record persistence and draft autosave."""

import logging

import pytest

from kyc_wallet import storage
from kyc_wallet.exceptions import StorageError
from kyc_wallet.models import HolderRecord
from tests.factories import make_holder


class TestHolderRecords:
    def test_init_db_creates_tables(self, fake_db):
        storage.init_db()
        assert any(s.startswith("CREATE TABLE IF NOT EXISTS holders") for s in fake_db.statements)
        assert any(s.startswith("CREATE TABLE IF NOT EXISTS drafts") for s in fake_db.statements)

    def test_persist_assigns_id_and_timestamp(self, fake_db, holder):
        stored = storage.persist(holder)
        assert stored.id
        assert stored.created_at.tzinfo is not None
        assert stored.full_name == "Ana"
        assert fake_db.commits == 1

    def test_load_all_in_creation_order(self, fake_db):
        first = storage.persist(make_holder(full_name="Ana"))
        second = storage.persist(make_holder(full_name="Ben"))
        loaded = storage.load_all()
        assert [r.id for r in loaded] == [first.id, second.id]
        assert loaded[1].full_name == "Ben"
        assert loaded[0].assets[0].value == 10000

    def test_persist_a_stored_record_again(self, fake_db, holder):
        first = storage.persist(holder)
        second = storage.persist(first)
        assert second.id != first.id
        assert second.full_name == "Ana"
        assert "id" not in fake_db.holders[1][2]
        assert len(storage.load_all()) == 2

    def test_load_all_empty(self, fake_db):
        assert storage.load_all() == []

    def test_persist_failure_raises_storage_error(self, fake_db, holder):
        fake_db.fail = True
        with pytest.raises(StorageError):
            storage.persist(holder)

    def test_init_db_failure_raises_storage_error(self, fake_db):
        fake_db.fail = True
        with pytest.raises(StorageError):
            storage.init_db()

    def test_load_all_failure_returns_empty(self, fake_db, caplog):
        fake_db.fail = True
        with caplog.at_level(logging.ERROR, logger="kyc_wallet.storage"):
            assert storage.load_all() == []
        assert "Error reading holder records" in caplog.text

    def test_load_all_skips_unreadable_rows(self, fake_db, holder):
        storage.persist(holder)
        fake_db.holders.append(("bad-row", fake_db.holders[0][1], {"annual_income": "lots"}))
        assert len(storage.load_all()) == 1


class TestDrafts:
    def test_no_draft(self, fake_db):
        assert storage.load_draft() is None

    def test_save_and_load(self, fake_db, holder):
        storage.save_draft(HolderRecord(full_name="An"))
        storage.save_draft(holder)
        assert storage.load_draft() == holder
        assert len(fake_db.drafts) == 1

    def test_clear(self, fake_db, holder):
        storage.save_draft(holder)
        storage.clear_draft()
        assert storage.load_draft() is None

    def test_failures_are_swallowed(self, fake_db, holder):
        fake_db.fail = True
        storage.save_draft(holder)
        storage.clear_draft()
        assert storage.load_draft() is None

    def test_unreadable_draft_is_discarded(self, fake_db):
        fake_db.drafts[storage.DRAFT_KEY] = {"assets": "not a list"}
        assert storage.load_draft() is None
