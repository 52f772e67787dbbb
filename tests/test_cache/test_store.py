"""Tests for specloader.cache.store.CacheStore."""

from __future__ import annotations

import json
import re
from pathlib import Path

import pytest

from specloader.cache import CacheStore, file_name_for, namespace_prefix
from specloader.document import OpenAPI
from specloader.exceptions import DecodeError, IOError_


@pytest.fixture
def store(tmp_path: Path) -> CacheStore:
    return CacheStore(tmp_path / "documents")


class TestFileNames:
    def test_unsafe_characters_are_substituted(self) -> None:
        name = file_name_for("FILE:/tmp/api spec.yaml")
        assert name.startswith("FILE__tmp_api_spec.yaml-")
        assert name.endswith(".json")
        assert re.fullmatch(r"[A-Za-z0-9._-]+", name)

    def test_colliding_sanitised_keys_get_distinct_files(self) -> None:
        assert file_name_for("URL:a/b") != file_name_for("URL:a_b")

    def test_long_keys_are_truncated(self) -> None:
        name = file_name_for("URL:https://example.com/" + "x" * 500)
        assert len(name) <= 120 + 1 + 16 + len(".json")

    def test_namespace_changes_the_file(self, tmp_path: Path) -> None:
        plain = CacheStore(tmp_path)
        namespaced = CacheStore(tmp_path, namespace="TEST")
        assert plain.path_for("FILE:/x") != namespaced.path_for("FILE:/x")
        assert namespaced.path_for("FILE:/x").name.startswith(namespace_prefix("TEST") + "FILE__x-")
        assert namespace_prefix("TEST").startswith("TEST-")
        assert namespace_prefix("TEST").endswith("@")
        assert namespace_prefix("") == ""

    def test_similar_namespaces_get_distinct_prefixes(self) -> None:
        assert namespace_prefix("A/B") != namespace_prefix("A_B")


class TestSaveLoad:
    def test_round_trip_preserves_title_and_version(
        self, store: CacheStore, petstore_doc: OpenAPI
    ) -> None:
        store.save("FILE:/petstore.json", petstore_doc)
        loaded = store.load("FILE:/petstore.json")
        assert loaded is not None
        assert loaded.info.title == petstore_doc.info.title
        assert loaded.info.version == petstore_doc.info.version
        assert list(loaded.paths) == list(petstore_doc.paths)

    def test_load_unused_key_returns_none(self, store: CacheStore) -> None:
        assert store.load("FILE:/never-saved") is None

    def test_directory_created_on_first_save(self, store: CacheStore, petstore_doc: OpenAPI) -> None:
        assert not store.directory.exists()
        store.save("k", petstore_doc)
        assert store.directory.is_dir()

    def test_save_overwrites(self, store: CacheStore) -> None:
        store.save("k", OpenAPI.model_validate({"info": {"title": "one"}}))
        store.save("k", OpenAPI.model_validate({"info": {"title": "two"}}))
        assert store.load("k").info.title == "two"

    def test_saved_file_is_json_without_temp_leftovers(
        self, store: CacheStore, petstore_doc: OpenAPI
    ) -> None:
        store.save("FILE:/petstore.json", petstore_doc)
        data = json.loads(store.path_for("FILE:/petstore.json").read_text())
        assert data["info"]["title"] == "Petstore API"
        assert [p.name for p in store.directory.iterdir() if p.name.endswith(".tmp")] == []

    def test_corrupt_file_raises_decode_error(self, store: CacheStore) -> None:
        path = store.path_for("k")
        path.parent.mkdir(parents=True)
        path.write_text("{not json")
        with pytest.raises(DecodeError, match="Corrupt"):
            store.load("k")

    def test_save_failure_raises_io_error(self, tmp_path: Path, petstore_doc: OpenAPI) -> None:
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        with pytest.raises(IOError_):
            CacheStore(blocker).save("k", petstore_doc)


class TestManagement:
    def test_keys_delete_and_clear(self, store: CacheStore, petstore_doc: OpenAPI) -> None:
        assert store.keys() == []
        store.save("a", petstore_doc)
        store.save("b", petstore_doc)
        assert len(store.keys()) == 2

        assert store.delete("a") is True
        assert store.delete("a") is False
        assert store.load("a") is None

        assert store.clear() == 1
        assert store.keys() == []

    def test_namespaces_sharing_a_directory_stay_apart(
        self, tmp_path: Path, petstore_doc: OpenAPI
    ) -> None:
        production = CacheStore(tmp_path)
        testing = CacheStore(tmp_path, namespace="TEST")
        production.save("FILE:/api.yaml", petstore_doc)
        testing.save("FILE:/api.yaml", petstore_doc)

        assert testing.keys() == [testing.path_for("FILE:/api.yaml").name]
        assert production.keys() == [production.path_for("FILE:/api.yaml").name]

        assert testing.clear() == 1
        assert testing.load("FILE:/api.yaml") is None
        assert production.load("FILE:/api.yaml") is not None
        assert production.clear() == 1

    def test_default_directory_is_under_xdg_cache(self, isolated_config: Path) -> None:
        store = CacheStore()
        assert store.directory.name == "documents"
        assert isolated_config in store.directory.parents
