"""Tests for the undo store backends."""

from unittest.mock import MagicMock, patch

import pytest

from mangia.models.deduct_undo_snapshot import DeductUndoSnapshot
from mangia.schemas.deduction import PantrySnapshot, UndoEntry
from mangia.services import undo_store as undo_store_module
from mangia.services.undo_store import (
    DatabaseUndoStore,
    InMemoryUndoStore,
    RedisUndoStore,
    get_undo_store,
)


def _entry(clock, user_id=1, ttl=60):
    return UndoEntry(
        user_id=user_id,
        snapshot=[PantrySnapshot(id=3, quantity=2.5), PantrySnapshot(id=4, quantity=None)],
        expires_at=clock() + ttl,
    )


class TestInMemoryUndoStore:
    def test_set_get_delete(self, clock):
        store = InMemoryUndoStore(clock=clock)
        entry = _entry(clock)

        store.set("tok", entry)
        assert store.get("tok") == entry

        store.delete("tok")
        assert store.get("tok") is None

    def test_expired_entries_swept(self, clock):
        store = InMemoryUndoStore(clock=clock)
        store.set("old", _entry(clock, ttl=10))
        store.set("new", _entry(clock, ttl=60))

        clock.advance(10)

        assert len(store) == 1
        assert store.get("old") is None
        assert store.get("new") is not None

    def test_delete_missing_token(self, clock):
        InMemoryUndoStore(clock=clock).delete("nothing")

    def test_take_removes_entry(self, clock):
        store = InMemoryUndoStore(clock=clock)
        entry = _entry(clock)
        store.set("tok", entry)

        assert store.take("tok", 1) == entry
        assert store.take("tok", 1) is None
        assert len(store) == 0

    def test_take_by_other_owner_leaves_entry(self, clock):
        store = InMemoryUndoStore(clock=clock)
        store.set("tok", _entry(clock, user_id=1))

        assert store.take("tok", 2) is None
        assert store.get("tok") is not None

    def test_take_expired(self, clock):
        store = InMemoryUndoStore(clock=clock)
        store.set("tok", _entry(clock, ttl=10))

        clock.advance(10)

        assert store.take("tok", 1) is None


class TestRedisUndoStore:
    def test_set_uses_ttl(self, clock):
        client = MagicMock()
        store = RedisUndoStore(client=client, clock=clock)
        entry = _entry(clock)

        store.set("tok", entry)

        client.set.assert_called_once_with("deduct-undo:tok", entry.model_dump_json(), ex=60)

    def test_ttl_rounded_up_to_a_second(self, clock):
        client = MagicMock()
        store = RedisUndoStore(client=client, clock=clock)

        store.set("tok", _entry(clock, ttl=0.2))

        assert client.set.call_args.kwargs["ex"] == 1

    def test_get(self, clock):
        client = MagicMock()
        entry = _entry(clock)
        client.get.return_value = entry.model_dump_json().encode()
        store = RedisUndoStore(client=client, clock=clock)

        assert store.get("tok") == entry
        client.get.assert_called_once_with("deduct-undo:tok")

    def test_get_missing(self, clock):
        client = MagicMock()
        client.get.return_value = None

        assert RedisUndoStore(client=client, clock=clock).get("tok") is None

    def test_get_expired_before_redis_evicts(self, clock):
        client = MagicMock()
        client.get.return_value = _entry(clock).model_dump_json().encode()
        store = RedisUndoStore(client=client, clock=clock)

        clock.advance(60)

        assert store.get("tok") is None

    def test_delete(self, clock):
        client = MagicMock()
        RedisUndoStore(client=client, clock=clock).delete("tok")
        client.delete.assert_called_once_with("deduct-undo:tok")

    def test_take(self, clock):
        client = MagicMock()
        entry = _entry(clock)
        client.getdel.return_value = entry.model_dump_json().encode()
        store = RedisUndoStore(client=client, clock=clock)

        assert store.take("tok", 1) == entry
        client.getdel.assert_called_once_with("deduct-undo:tok")
        client.set.assert_not_called()

    def test_take_missing(self, clock):
        client = MagicMock()
        client.getdel.return_value = None

        assert RedisUndoStore(client=client, clock=clock).take("tok", 1) is None

    def test_take_by_other_owner_puts_entry_back(self, clock):
        client = MagicMock()
        raw = _entry(clock, user_id=1).model_dump_json().encode()
        client.getdel.return_value = raw
        store = RedisUndoStore(client=client, clock=clock)

        clock.advance(20)

        assert store.take("tok", 2) is None
        client.set.assert_called_once_with("deduct-undo:tok", raw, ex=40, nx=True)

    def test_take_expired_not_put_back(self, clock):
        client = MagicMock()
        client.getdel.return_value = _entry(clock).model_dump_json().encode()
        store = RedisUndoStore(client=client, clock=clock)

        clock.advance(60)

        assert store.take("tok", 2) is None
        client.set.assert_not_called()

    @patch("mangia.services.undo_store.redis.from_url")
    def test_client_created_lazily(self, mock_from_url):
        store = RedisUndoStore()
        mock_from_url.assert_not_called()

        assert store.client is mock_from_url.return_value
        assert store.client is mock_from_url.return_value
        mock_from_url.assert_called_once()


class TestDatabaseUndoStore:
    def test_set_get_delete(self, db, user, clock):
        store = DatabaseUndoStore(db, clock=clock)
        entry = _entry(clock, user_id=user.id)

        store.set("tok", entry)
        loaded = store.get("tok")

        assert loaded.user_id == user.id
        assert loaded.snapshot == entry.snapshot
        assert loaded.expires_at == pytest.approx(entry.expires_at)

        store.delete("tok")
        assert store.get("tok") is None
        assert db.query(DeductUndoSnapshot).count() == 0

    def test_expired_entry_not_returned(self, db, user, clock):
        store = DatabaseUndoStore(db, clock=clock)
        store.set("tok", _entry(clock, user_id=user.id))

        clock.advance(61)

        assert store.get("tok") is None

    def test_expired_rows_swept_on_write(self, db, user, clock):
        store = DatabaseUndoStore(db, clock=clock)
        store.set("old", _entry(clock, user_id=user.id))

        clock.advance(61)
        store.set("new", _entry(clock, user_id=user.id))

        tokens = [row.token for row in db.query(DeductUndoSnapshot).all()]
        assert tokens == ["new"]

    def test_take_removes_row(self, db, user, clock):
        store = DatabaseUndoStore(db, clock=clock)
        user_id = user.id
        store.set("tok", _entry(clock, user_id=user_id))

        taken = store.take("tok", user_id)

        assert taken.user_id == user_id
        assert [s.id for s in taken.snapshot] == [3, 4]
        assert db.query(DeductUndoSnapshot).count() == 0
        assert store.take("tok", user_id) is None

    def test_take_by_other_owner_keeps_row(self, db, user, other_user, clock):
        store = DatabaseUndoStore(db, clock=clock)
        user_id, other_id = user.id, other_user.id
        store.set("tok", _entry(clock, user_id=user_id))

        assert store.take("tok", other_id) is None
        assert db.query(DeductUndoSnapshot).count() == 1
        assert store.take("tok", user_id) is not None

    def test_take_expired(self, db, user, clock):
        store = DatabaseUndoStore(db, clock=clock)
        user_id = user.id
        store.set("tok", _entry(clock, user_id=user_id))

        clock.advance(61)

        assert store.take("tok", user_id) is None
        assert db.query(DeductUndoSnapshot).count() == 0


class TestGetUndoStore:
    @pytest.fixture(autouse=True)
    def fresh_singletons(self, monkeypatch):
        monkeypatch.setattr(undo_store_module, "_memory_store", None)
        monkeypatch.setattr(undo_store_module, "_redis_store", None)

    def _settings(self, backend):
        return patch(
            "mangia.services.undo_store.get_settings",
            return_value=MagicMock(undo_backend=backend, redis_url="redis://localhost:6379/0"),
        )

    def test_memory_backend_is_shared(self):
        with self._settings("memory"):
            store = get_undo_store()
            assert isinstance(store, InMemoryUndoStore)
            assert get_undo_store() is store

    def test_redis_backend(self):
        with self._settings("redis"):
            assert isinstance(get_undo_store(), RedisUndoStore)

    def test_database_backend(self, db):
        with self._settings("database"):
            store = get_undo_store(db)
            assert isinstance(store, DatabaseUndoStore)
            assert store.db is db

    def test_database_backend_needs_session(self):
        with self._settings("database"), pytest.raises(ValueError):
            get_undo_store()
