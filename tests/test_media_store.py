"""Unit tests for tvtracker.services.media: entry CRUD, validation, and per-entry ownership."""

import unittest
from unittest.mock import MagicMock

from pydantic import ValidationError
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from helpers import make_session_factory
from tvtracker.models import MediaEntry, UserAccount
from tvtracker.schemas.media import MediaEntryPayload
from tvtracker.services.media import EntryOwnershipError, MediaEntryStore, validate_entry


def _payload(title: str = "Severance", **kwargs: object) -> MediaEntryPayload:
    """Build a MediaEntryPayload for tests."""
    return MediaEntryPayload(title=title, **kwargs)


class MediaStoreTestCase(unittest.TestCase):
    """Fresh in-memory database with accounts alice and bob."""

    def setUp(self) -> None:
        self.engine, SessionTesting = make_session_factory()
        self.db = SessionTesting()
        self.db.add_all(
            [
                UserAccount(username="alice", password_hash="x"),
                UserAccount(username="bob", password_hash="x"),
            ]
        )
        self.db.commit()
        self.store = MediaEntryStore(self.db)

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()


class TestValidateEntry(unittest.TestCase):
    def test_valid_entry(self) -> None:
        self.assertEqual(validate_entry(_payload(status="watching", season=1, episode=3, rating=8)), [])

    def test_each_problem_reported(self) -> None:
        problems = validate_entry(
            _payload(title="  ", media_type="book", status="binging", season=-1, episode=-2, rating=11)
        )
        self.assertEqual(len(problems), 6)

    def test_season_beyond_column_range_reported(self) -> None:
        entry = MediaEntryPayload.model_construct(
            title="X", media_type="tv", status="watching", season=10**20,
            episode=None, rating=None, entry_id=None, username=None, notes=None,
        )
        self.assertEqual(len(validate_entry(entry)), 1)


class TestPayloadBounds(unittest.TestCase):
    def test_integers_beyond_column_range_rejected(self) -> None:
        for field in ("season", "episode", "rating", "entry_id"):
            with self.subTest(field=field), self.assertRaises(ValidationError):
                _payload(**{field: 10**20})

    def test_entry_id_must_be_positive(self) -> None:
        with self.assertRaises(ValidationError):
            _payload(entry_id=0)


class TestFetchMediaEntries(MediaStoreTestCase):
    def test_empty_for_new_user(self) -> None:
        self.assertEqual(self.store.fetch_media_entries_by_username("alice"), [])

    def test_only_owned_entries_in_creation_order(self) -> None:
        self.store.create_media_entry(_payload("First"), "alice")
        self.store.create_media_entry(_payload("Bob's"), "bob")
        self.store.create_media_entry(_payload("Second"), "alice")
        entries = self.store.fetch_media_entries_by_username("alice")
        self.assertEqual([e.title for e in entries], ["First", "Second"])
        self.assertTrue(all(e.username == "alice" for e in entries))

    def test_fault_is_not_an_empty_result(self) -> None:
        db = MagicMock()
        db.query.side_effect = OperationalError("SELECT", {}, Exception("db down"))
        with self.assertRaises(SQLAlchemyError):
            MediaEntryStore(db).fetch_media_entries_by_username("alice")


class TestCreateMediaEntry(MediaStoreTestCase):
    def test_assigns_id_and_owner(self) -> None:
        entry = self.store.create_media_entry(_payload("  Severance  ", status="watching"), "alice")
        self.assertIsNotNone(entry)
        self.assertIsNotNone(entry.id)
        self.assertEqual(entry.username, "alice")
        self.assertEqual(entry.title, "Severance")
        self.assertIsNotNone(entry.created_at)

    def test_ids_unique(self) -> None:
        a = self.store.create_media_entry(_payload("A"), "alice")
        b = self.store.create_media_entry(_payload("B"), "alice")
        self.assertNotEqual(a.id, b.id)

    def test_payload_entry_id_ignored(self) -> None:
        existing = self.store.create_media_entry(_payload("A"), "alice")
        entry = self.store.create_media_entry(_payload("B", entry_id=existing.id), "alice")
        self.assertNotEqual(entry.id, existing.id)

    def test_invalid_entry_returns_none(self) -> None:
        self.assertIsNone(self.store.create_media_entry(_payload(status="binging"), "alice"))
        self.assertIsNone(self.store.create_media_entry(_payload(title=""), "alice"))
        self.assertEqual(self.db.query(MediaEntry).count(), 0)

    def test_matching_payload_username_accepted(self) -> None:
        entry = self.store.create_media_entry(_payload(username="alice"), "alice")
        self.assertEqual(entry.username, "alice")

    def test_other_payload_username_raises(self) -> None:
        with self.assertRaises(EntryOwnershipError):
            self.store.create_media_entry(_payload(username="bob"), "alice")
        self.assertEqual(self.db.query(MediaEntry).count(), 0)

    def test_commit_fault_propagates_and_rolls_back(self) -> None:
        db = MagicMock()
        db.commit.side_effect = OperationalError("INSERT", {}, Exception("db down"))
        with self.assertRaises(SQLAlchemyError):
            MediaEntryStore(db).create_media_entry(_payload(), "alice")
        db.rollback.assert_called_once()


class TestUpdateMediaEntry(MediaStoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.entry = self.store.create_media_entry(_payload("Severance"), "alice")

    def test_updates_descriptive_fields(self) -> None:
        updated = self.store.update_media_entry(
            _payload("Severance", entry_id=self.entry.id, status="completed", season=2, rating=9),
            "alice",
        )
        self.assertIsNotNone(updated)
        self.assertEqual(updated.id, self.entry.id)
        self.assertEqual(updated.status, "completed")
        self.assertEqual(updated.season, 2)
        self.assertEqual(updated.rating, 9)
        self.assertEqual(updated.username, "alice")

    def test_missing_entry_id_returns_none(self) -> None:
        self.assertIsNone(self.store.update_media_entry(_payload(), "alice"))

    def test_unknown_entry_returns_none(self) -> None:
        self.assertIsNone(self.store.update_media_entry(_payload(entry_id=9999), "alice"))

    def test_invalid_update_returns_none_and_leaves_row(self) -> None:
        self.assertIsNone(
            self.store.update_media_entry(_payload(entry_id=self.entry.id, rating=42), "alice")
        )
        self.db.expire_all()
        self.assertIsNone(self.store.fetch_media_entry(self.entry.id).rating)

    def test_other_owner_raises_and_leaves_row(self) -> None:
        with self.assertRaises(EntryOwnershipError):
            self.store.update_media_entry(_payload("Hijacked", entry_id=self.entry.id), "bob")
        self.db.expire_all()
        self.assertEqual(self.store.fetch_media_entry(self.entry.id).title, "Severance")

    def test_own_entry_with_other_payload_username_raises_and_leaves_row(self) -> None:
        with self.assertRaises(EntryOwnershipError):
            self.store.update_media_entry(
                _payload("Hijacked", entry_id=self.entry.id, username="bob"), "alice"
            )
        self.db.expire_all()
        row = self.store.fetch_media_entry(self.entry.id)
        self.assertEqual(row.title, "Severance")
        self.assertEqual(row.username, "alice")

    def test_commit_fault_propagates_and_rolls_back(self) -> None:
        db = MagicMock()
        db.get.return_value = MediaEntry(id=1, username="alice", title="Severance")
        db.commit.side_effect = OperationalError("UPDATE", {}, Exception("db down"))
        with self.assertRaises(SQLAlchemyError):
            MediaEntryStore(db).update_media_entry(_payload(entry_id=1), "alice")
        db.rollback.assert_called_once()


class TestDeleteMediaEntry(MediaStoreTestCase):
    def test_delete_then_repeat_returns_false(self) -> None:
        entry = self.store.create_media_entry(_payload(), "alice")
        self.assertTrue(self.store.delete_media_entry(entry.id, "alice"))
        self.assertFalse(self.store.delete_media_entry(entry.id, "alice"))
        self.assertFalse(self.store.delete_media_entry(entry.id, "alice"))

    def test_unknown_id_returns_false(self) -> None:
        self.assertFalse(self.store.delete_media_entry(12345, "alice"))

    def test_id_beyond_column_range_returns_false(self) -> None:
        self.assertIsNone(self.store.fetch_media_entry(10**20))
        self.assertFalse(self.store.delete_media_entry(10**20, "alice"))

    def test_other_owner_raises_and_keeps_entry(self) -> None:
        entry = self.store.create_media_entry(_payload(), "alice")
        with self.assertRaises(EntryOwnershipError):
            self.store.delete_media_entry(entry.id, "bob")
        self.assertIsNotNone(self.store.fetch_media_entry(entry.id))


if __name__ == "__main__":
    unittest.main()
