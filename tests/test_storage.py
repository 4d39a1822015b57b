import anyio
import orjson
import pytest

from profilesync.errors import CorruptStateError, PersistenceError
from profilesync.profiles.repository import ProfileRepository
from profilesync.profiles.selector import ActiveProfileSelector
from profilesync.storage.codec import (
    deserialize,
    deserialize_collection,
    serialize,
    serialize_collection,
)
from profilesync.storage.file import JsonFileStore
from profilesync.storage.memory import InMemoryStore


def test_serialize_is_compact_json():
    assert serialize({"profile_name": "alpha", "tel": "1"}) == '{"profile_name":"alpha","tel":"1"}'


@pytest.mark.parametrize(
    "blob",
    ["not json", "[1, 2]", '{"tel": 5}', '"alpha"', None, 42],
)
def test_deserialize_rejects_non_records(blob):
    with pytest.raises(CorruptStateError):
        deserialize(blob)


def test_collection_blob_preserves_order():
    records = [{"profile_name": "b"}, {"profile_name": "a"}]
    assert deserialize_collection(serialize_collection(records)) == records


def test_deserialize_collection_rejects_mapping():
    with pytest.raises(CorruptStateError):
        deserialize_collection('{"profile_name": "a"}')


@pytest.mark.anyio
async def test_memory_store_get_set_remove():
    store = InMemoryStore("local")
    await store.set({"a": "1", "b": "2"})

    assert await store.get(["a", "missing"]) == {"a": "1"}

    await store.remove(["a", "missing"])
    assert await store.get(["a", "b"]) == {"b": "2"}


@pytest.mark.anyio
async def test_file_store_persists_across_instances(tmp_path):
    path = tmp_path / "scopes" / "sync.json"
    store = JsonFileStore(path, name="sync")
    await store.set({"profile_name": "alpha"})
    await store.set({"profileInfo": "{}"})

    reopened = JsonFileStore(path)
    assert reopened.name == "sync"
    assert await reopened.get(["profile_name", "profileInfo"]) == {
        "profile_name": "alpha",
        "profileInfo": "{}",
    }
    assert orjson.loads(path.read_bytes()) == {
        "profile_name": "alpha",
        "profileInfo": "{}",
    }
    assert list((tmp_path / "scopes").glob("*.tmp")) == []


@pytest.mark.anyio
async def test_file_store_missing_file_reads_empty_and_remove_is_noop(tmp_path):
    store = JsonFileStore(tmp_path / "local.json")

    assert await store.get(["csvProfiles"]) == {}
    await store.remove(["csvProfiles"])
    assert not (tmp_path / "local.json").exists()


@pytest.mark.anyio
async def test_file_store_invalid_file_raises_persistence_error(tmp_path):
    path = tmp_path / "local.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileStore(path)

    with pytest.raises(PersistenceError):
        await store.get(["csvProfiles"])


@pytest.mark.anyio
async def test_file_store_write_failure_raises_persistence_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = JsonFileStore(blocker / "sync.json")

    with pytest.raises(PersistenceError):
        await store.set({"profile_name": "alpha"})


@pytest.mark.anyio
async def test_file_store_concurrent_writes_keep_every_key(tmp_path):
    store = JsonFileStore(tmp_path / "local.json", name="local")

    async with anyio.create_task_group() as tg:
        for index in range(20):
            tg.start_soon(store.set, {f"key_{index}": str(index)})

    keys = [f"key_{index}" for index in range(20)]
    assert await store.get(keys) == {key: key.split("_")[1] for key in keys}
    assert list(tmp_path.glob("*.tmp")) == []


@pytest.mark.anyio
async def test_import_survives_concurrent_selection(tmp_path):
    local_store = JsonFileStore(tmp_path / "local.json", name="local")
    sync_store = JsonFileStore(tmp_path / "sync.json", name="sync")
    selector = ActiveProfileSelector(sync_store, local_store)
    repository = ProfileRepository(local_store, selector=selector)

    for _ in range(10):
        await repository.replace_all([{"profile_name": "old"}])

        async with anyio.create_task_group() as tg:
            tg.start_soon(repository.replace_all, [{"profile_name": "new"}])
            tg.start_soon(selector.select, {"profile_name": "old"})

        assert await repository.list() == [{"profile_name": "new"}]
        assert await selector.current() == {"profile_name": "old"}
