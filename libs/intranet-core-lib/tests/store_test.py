import json

import pytest

from intranet_core_lib.impl.settings.store_settings import StoreSettings
from intranet_core_lib.impl.store.in_memory_store import InMemoryKeyValueStore
from intranet_core_lib.impl.store.json_file_store import JsonFileKeyValueStore
from intranet_core_lib.store.storage_keys import StorageKey


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(StoreSettings(root_dir=str(tmp_path)))


def test_collections_are_stored_under_prefixed_keys(store):
    store.write_collection(StorageKey.PAGES, [{"id": "p1"}])
    assert json.loads(store.get("intranet_pages")) == [{"id": "p1"}]
    assert store.read_collection(StorageKey.PAGES) == [{"id": "p1"}]


def test_missing_collection_reads_as_empty(store):
    assert store.read_collection(StorageKey.USERS) == []
    assert store.read_record(StorageKey.SESSION) is None


@pytest.mark.parametrize("payload", ["{broken", '{"id": "u1"}', '"text"', ""])
def test_unreadable_collection_reads_as_empty(store, payload):
    store.set(store.qualified_key(StorageKey.USERS), payload)
    assert store.read_collection(StorageKey.USERS) == []


def test_non_object_items_are_skipped(store):
    store.set(store.qualified_key(StorageKey.USERS), json.dumps([{"id": "u1"}, 3, "x"]))
    assert store.read_collection(StorageKey.USERS) == [{"id": "u1"}]


def test_single_record_round_trip_and_removal(store):
    store.write_record(StorageKey.SESSION, {"id": "u1", "companyId": "c1"})
    assert store.read_record(StorageKey.SESSION) == {"id": "u1", "companyId": "c1"}
    store.remove(StorageKey.SESSION)
    assert store.read_record(StorageKey.SESSION) is None
    store.remove(StorageKey.SESSION)


def test_custom_prefix_isolates_deployments():
    first, second = InMemoryKeyValueStore("a_"), InMemoryKeyValueStore("b_")
    first.write_collection(StorageKey.SPACES, [{"id": "s1"}])
    assert first.keys() == ["a_spaces"]
    assert second.read_collection(StorageKey.SPACES) == []


def test_file_store_sees_writes_from_another_instance(tmp_path):
    settings = StoreSettings(root_dir=str(tmp_path / "store"))
    reader, writer = JsonFileKeyValueStore(settings), JsonFileKeyValueStore(settings)
    assert reader.read_collection(StorageKey.EVENTS) == []
    writer.write_collection(StorageKey.EVENTS, [{"id": "e1"}])
    assert (tmp_path / "store" / "intranet_events.json").exists()
    assert reader.read_collection(StorageKey.EVENTS) == [{"id": "e1"}]
    writer.remove(StorageKey.EVENTS)
    assert reader.read_collection(StorageKey.EVENTS) == []
