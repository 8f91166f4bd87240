"""Tests for the storage backends behind the cart."""

from dataclasses import replace

import pytest
from kungfu import Ok, Error
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from storefront.cart import (
    CartStore,
    FileStorage,
    MemoryStorage,
    SQLAlchemyStorage,
    StorageError,
    storage_from,
)
from storefront.cart._sqlalchemy import Base
from storefront.config import settings


def unwrap(result):
    match result:
        case Ok(value):
            return value
        case Error(e):
            pytest.fail(f"unexpected storage error: {e.message}")


@pytest.fixture
def sqlite_storage():
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield SQLAlchemyStorage(sessionmaker(engine))
    engine.dispose()


@pytest.fixture(params=["memory", "file", "sqlalchemy"])
def any_storage(request, tmp_path):
    if request.param == "memory":
        return MemoryStorage()
    if request.param == "file":
        return FileStorage(tmp_path / "storage.json")
    return request.getfixturevalue("sqlite_storage")


class TestStorageContract:
    def test_missing_key_is_ok_none(self, any_storage):
        assert unwrap(any_storage.get("cart")) is None

    def test_set_then_get(self, any_storage):
        assert unwrap(any_storage.set("cart", "[]")) is None
        assert unwrap(any_storage.get("cart")) == "[]"

    def test_overwrite(self, any_storage):
        any_storage.set("cart", "a")
        any_storage.set("cart", "b")
        assert unwrap(any_storage.get("cart")) == "b"

    def test_delete(self, any_storage):
        any_storage.set("cart", "a")
        assert unwrap(any_storage.delete("cart")) is True
        assert unwrap(any_storage.delete("cart")) is False
        assert unwrap(any_storage.get("cart")) is None

    def test_keys_are_independent(self, any_storage):
        any_storage.set("shopping-cart", "new")
        any_storage.set("uniformes-laguna-cart", "old")
        any_storage.delete("uniformes-laguna-cart")
        assert unwrap(any_storage.get("shopping-cart")) == "new"

    def test_cart_round_trip(self, any_storage, polo_m, polo_l):
        store = CartStore(any_storage, "cart")
        store.add_item(polo_m, 2)
        store.add_item(polo_l, 1)
        assert CartStore.load(any_storage, "cart").lines == store.lines


class TestFileStorage:
    def test_survives_new_instance(self, tmp_path):
        path = tmp_path / "nested" / "storage.json"
        FileStorage(path).set("cart", "[1]")
        assert unwrap(FileStorage(path).get("cart")) == "[1]"

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("{broken", encoding="utf-8")
        assert unwrap(FileStorage(path).get("cart")) is None

    def test_invalid_utf8_file_reads_empty(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_bytes(b"\xff\xfe")
        storage = FileStorage(path)
        assert unwrap(storage.get("cart")) is None

        storage.set("cart", "x")
        assert unwrap(storage.get("cart")) == "x"

    def test_deeply_nested_file_reads_empty(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("[" * 100_000, encoding="utf-8")
        assert unwrap(FileStorage(path).get("cart")) is None

    def test_invalid_utf8_file_loads_empty_cart(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_bytes(b"\xff\xfe")
        assert len(CartStore.load(FileStorage(path), "cart")) == 0

    def test_default_path_comes_from_settings(self, monkeypatch, tmp_path):
        path = tmp_path / "default.json"
        monkeypatch.setattr(
            "storefront.cart._storage.settings",
            replace(settings, storage_path=str(path)),
        )
        storage = FileStorage()
        assert storage.path == path
        storage.set("cart", "x")
        assert path.exists()

    def test_non_object_file_is_replaced(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("[]", encoding="utf-8")
        storage = FileStorage(path)
        storage.set("cart", "x")
        assert unwrap(storage.get("cart")) == "x"

    def test_no_temp_files_left_behind(self, tmp_path):
        storage = FileStorage(tmp_path / "storage.json")
        storage.set("cart", "x")
        storage.set("cart", "y")
        assert [p.name for p in tmp_path.iterdir()] == ["storage.json"]

    def test_unreadable_path_is_error(self, tmp_path):
        match FileStorage(tmp_path).get("cart"):
            case Error(e):
                assert isinstance(e, StorageError)
            case other:
                pytest.fail(f"expected Error, got {other!r}")


class TestFunctionalStorage:
    def test_delegates(self):
        data = {}
        storage = storage_from(
            get=lambda k: Ok(data.get(k)),
            set=lambda k, v: Ok(data.__setitem__(k, v)),
            delete=lambda k: Ok(data.pop(k, None) is not None),
        )
        storage.set("cart", "[]")
        assert unwrap(storage.get("cart")) == "[]"
        assert unwrap(storage.delete("cart")) is True


class TestSQLAlchemyStorage:
    def test_missing_table_is_error(self):
        engine = create_engine("sqlite:///:memory:")
        storage = SQLAlchemyStorage(sessionmaker(engine))
        match storage.get("cart"):
            case Error(e):
                assert "cart" in e.message
            case other:
                pytest.fail(f"expected Error, got {other!r}")
        engine.dispose()
