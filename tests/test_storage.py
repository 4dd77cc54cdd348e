import json
import sqlite3

import pytest

from config import ConfigurationManager
from cardbook.contacts import Contact
from cardbook.storage import (
    ContactStore,
    InMemoryContactStore,
    JsonFileContactStore,
    SQLiteContactStore,
    create_store,
)
from cardbook.utils.exceptions import PersistenceError


def sample_contacts():
    return [
        Contact(
            id=1792411200000,
            name="Ada Lovelace",
            phone="+442079460018",
            email="ada@example.com",
            image_urls=["front.png", "back.png"],
            created_at="2026-10-19T12:00:00.000Z",
            updated_at="2026-10-19T12:05:00.000Z",
        ),
        Contact(
            id=1792411200001,
            name="Zoë Ünal",
            phone="555-0100",
            email="",
            image_urls=[],
            created_at="2026-10-19T12:00:00.001Z",
            updated_at="2026-10-19T12:00:00.001Z",
        ),
    ]


@pytest.fixture(params=["json", "sqlite", "memory"])
def store(request, tmp_path):
    if request.param == "json":
        return JsonFileContactStore(tmp_path, key="testContacts", quota_bytes=0)
    if request.param == "sqlite":
        return SQLiteContactStore(tmp_path / "contacts.db", key="testContacts", quota_bytes=0)
    return InMemoryContactStore(key="testContacts", quota_bytes=0)


def test_save_then_load_round_trips(store):
    contacts = sample_contacts()
    store.save(contacts)
    assert store.load() == contacts


def test_load_without_data_is_empty(store):
    assert store.load() == []


def test_clear_removes_entry(store):
    store.save(sample_contacts())
    store.clear()
    assert store.load() == []
    store.clear()


def test_persisted_layout_uses_camel_case_keys():
    record = json.loads(ContactStore.serialize(sample_contacts()[:1]))[0]
    assert sorted(record) == sorted(
        ["id", "name", "phone", "email", "imageUrls", "createdAt", "updatedAt"]
    )


@pytest.mark.parametrize("payload", [
    "not json at all",
    '{"id": 1}',
    '[{"name": "missing id"}]',
    '[{"id": 1, "name": "A", "phone": "1", "createdAt": "yesterday"}]',
])
def test_corrupt_data_loads_as_empty(payload):
    store = InMemoryContactStore(key="k", quota_bytes=0, entries={"k": payload})
    assert store.load() == []


def test_missing_optional_keys_get_defaults():
    payload = '[{"id": 7, "name": "A", "phone": "1", "createdAt": "2026-10-19T12:00:00.000Z"}]'
    store = InMemoryContactStore(key="k", quota_bytes=0, entries={"k": payload})

    [contact] = store.load()

    assert contact.email == ""
    assert contact.image_urls == []
    assert contact.updated_at == contact.created_at


def test_quota_rejects_large_payload_and_keeps_old_value():
    store = InMemoryContactStore(key="k", quota_bytes=400)
    store.save(sample_contacts()[1:])

    with pytest.raises(PersistenceError) as excinfo:
        store.save(sample_contacts() * 3)

    assert excinfo.value.user_message == "Storage is full. Please delete some contacts."
    assert store.load() == sample_contacts()[1:]


def test_json_store_writes_one_file_per_key(tmp_path):
    JsonFileContactStore(tmp_path, key="a", quota_bytes=0).save(sample_contacts())
    JsonFileContactStore(tmp_path, key="b", quota_bytes=0).save([])

    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.json", "b.json"]
    assert JsonFileContactStore(tmp_path, key="a").load() == sample_contacts()


def test_json_store_unreadable_file_loads_as_empty(tmp_path):
    (tmp_path / "k.json").write_text("[{broken", encoding="utf-8")
    assert JsonFileContactStore(tmp_path, key="k").load() == []


def test_sqlite_store_shares_file_between_keys(tmp_path):
    db_path = tmp_path / "shared.db"
    SQLiteContactStore(db_path, key="a", quota_bytes=0).save(sample_contacts())
    SQLiteContactStore(db_path, key="b", quota_bytes=0).save([])

    conn = sqlite3.connect(db_path)
    try:
        keys = [row[0] for row in conn.execute("SELECT key FROM kv_store ORDER BY key")]
    finally:
        conn.close()

    assert keys == ["a", "b"]


def test_create_store_from_config(tmp_path):
    config = ConfigurationManager()
    config.set("paths.data_dir", str(tmp_path))
    config.set("storage.backend", "sqlite")

    store = create_store()

    assert isinstance(store, SQLiteContactStore)
    assert store.db_path == tmp_path / "contacts.db"
    assert isinstance(create_store("memory"), InMemoryContactStore)


def test_create_store_rejects_unknown_backend():
    with pytest.raises(ValueError):
        create_store("floppy")
