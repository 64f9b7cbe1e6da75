"""Tests for the JSON file store and environment settings."""

import json
from pathlib import Path

import pytest

from ecom.domain.exceptions import ConcurrencyConflictError
from ecom.domain.model.category import Category
from ecom.infrastructure.config import load_settings
from ecom.infrastructure.persistence.document_store import JsonFileStore, MemoryStore
from tests.fakes import make_uow, seed_attribute, seed_category, seed_product


class TestJsonFileStore:

    def test_missing_collection_is_created_empty(self, tmp_path):
        store = JsonFileStore(tmp_path / "data")
        assert store.load("categories") == []
        assert (tmp_path / "data" / "categories.json").exists()

    def test_save_and_load(self, tmp_path):
        store = JsonFileStore(tmp_path)
        store.save("categories", [{"id": "c1", "name": "Electronics"}])
        assert json.loads((tmp_path / "categories.json").read_text()) == [
            {"id": "c1", "name": "Electronics"}
        ]
        assert store.load("categories") == [{"id": "c1", "name": "Electronics"}]
        assert not (tmp_path / "categories.json.tmp").exists()

    def test_full_round_trip_through_files(self, tmp_path):
        uow = make_uow(JsonFileStore(tmp_path))
        size = seed_attribute(
            uow, "size", "Select", is_variant=True, configuration={"values": ["S", "M"]}
        )
        product_id = seed_product(uow, "Shirt", "15.00", sku="SHIRT")

        reloaded = make_uow(JsonFileStore(tmp_path))
        product = reloaded.products.get_by_id(product_id)
        assert str(product.base_price) == "15.00 USD"
        assert product.version == 1
        assert reloaded.attributes.get_by_id(size).configuration_map == {"values": ["S", "M"]}


class TestCommitLock:

    def test_lock_released_after_commit(self, tmp_path):
        store = JsonFileStore(tmp_path)
        seed_category(make_uow(store), "Electronics")
        assert not store.lock_path.exists()

    def test_commit_waits_for_lock_held_elsewhere(self, tmp_path):
        store = JsonFileStore(tmp_path, lock_timeout=0.1, poll_interval=0.01)
        uow = make_uow(store)
        uow.categories.add(Category.create("c1", "Electronics"))

        with store.locked():
            with pytest.raises(TimeoutError, match="commit.lock"):
                uow.commit()

        assert store.load("categories") == []
        assert not store.lock_path.exists()
        uow.commit()
        assert [raw["id"] for raw in store.load("categories")] == ["c1"]

    def test_lock_released_when_version_check_fails(self, tmp_path):
        store = JsonFileStore(tmp_path)
        category_id = seed_category(make_uow(store), "Electronics")
        first, second = make_uow(store), make_uow(store)
        mine = first.categories.get_by_id(category_id)
        theirs = second.categories.get_by_id(category_id)
        second.categories.update(theirs)
        second.commit()

        first.categories.update(mine)
        with pytest.raises(ConcurrencyConflictError):
            first.commit()
        assert not store.lock_path.exists()


class TestMemoryStore:

    def test_load_returns_copies(self):
        store = MemoryStore({"categories": [{"id": "c1"}]})
        store.load("categories")[0]["id"] = "changed"
        assert store.load("categories") == [{"id": "c1"}]


class TestSettings:

    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        for name in ("ECOM_DATA_DIR", "ECOM_LOG_LEVEL", "ECOM_DEFAULT_CURRENCY"):
            monkeypatch.delenv(name, raising=False)
        settings = load_settings()
        assert settings.log_level == "WARNING"
        assert settings.default_currency == "USD"
        assert settings.data_dir.name == "data"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ECOM_DATA_DIR", str(tmp_path / "store"))
        monkeypatch.setenv("ECOM_LOG_LEVEL", "debug")
        monkeypatch.setenv("ECOM_DEFAULT_CURRENCY", "eur")
        settings = load_settings()
        assert settings.data_dir == Path(tmp_path / "store")
        assert settings.log_level == "DEBUG"
        assert settings.default_currency == "EUR"

    def test_dotenv_file_is_read(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("ECOM_DEFAULT_CURRENCY", raising=False)
        (tmp_path / ".env").write_text("ECOM_DEFAULT_CURRENCY=GBP\n")
        # the delenv above also removes the value loaded from .env at teardown
        assert load_settings().default_currency == "GBP"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("ECOM_LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError, match="ECOM_LOG_LEVEL"):
            load_settings()

    def test_invalid_currency(self, monkeypatch):
        monkeypatch.setenv("ECOM_DEFAULT_CURRENCY", "EURO")
        with pytest.raises(ValueError, match="3-letter"):
            load_settings()
