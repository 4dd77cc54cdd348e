from datetime import datetime, timezone

import pytest

from cardbook.contacts import ContactCollectionManager, ContactFields, ContactValidator
from cardbook.storage import InMemoryContactStore
from cardbook.utils.exceptions import NotFoundError, PersistenceError, ValidationError


class FailingStore(InMemoryContactStore):
    def __init__(self):
        super().__init__(key="failing", quota_bytes=0)
        self.fail = False

    def _write(self, payload):
        if self.fail:
            raise OSError("disk full")
        super()._write(payload)

    def _remove(self):
        if self.fail:
            raise OSError("read-only file system")
        super()._remove()


def test_add_assigns_id_and_timestamps(manager, memory_store):
    contact = manager.add(ContactFields(name="  Ada Lovelace ", phone=" 555-0100 "))

    assert contact.name == "Ada Lovelace"
    assert contact.phone == "555-0100"
    assert contact.email == ""
    assert contact.created_at == "2026-10-19T12:00:00.000Z"
    assert contact.updated_at == contact.created_at
    assert contact.id == 1792411200000
    assert memory_store.load() == [contact]


def test_ids_are_unique_within_the_same_millisecond(memory_store):
    frozen = datetime(2026, 10, 19, tzinfo=timezone.utc)
    manager = ContactCollectionManager(memory_store, clock=lambda: frozen)

    first = manager.add(ContactFields(name="Ada", phone="1"))
    second = manager.add(ContactFields(name="Bob", phone="2"))

    assert second.id == first.id + 1


def test_add_requires_name_and_phone(manager):
    with pytest.raises(ValidationError) as excinfo:
        manager.add(ContactFields(name="   ", phone="555"))

    assert excinfo.value.details["field"] == "name"
    assert excinfo.value.user_message == "Name and Phone are required fields!"
    assert len(manager) == 0


def test_too_many_images_rejected(manager):
    fields = ContactFields(name="Ada", phone="1", image_urls=[f"{i}.png" for i in range(6)])

    with pytest.raises(ValidationError) as excinfo:
        manager.add(fields)

    assert excinfo.value.details["field"] == "image_urls"


def test_validator_reports_every_problem():
    valid, problems = ContactValidator(max_images=5).validate(ContactFields())
    assert not valid
    assert problems == ["name is required", "phone is required"]


def test_validator_honours_a_zero_image_limit():
    validator = ContactValidator(max_images=0)
    valid, problems = validator.validate(ContactFields(name="Ada", phone="1", image_urls=["a.png"]))

    assert validator.max_images == 0
    assert not valid
    assert problems == ["1 images attached, at most 0 allowed"]


def test_update_keeps_id_and_created_at(manager):
    contact = manager.add(ContactFields(name="Ada", phone="1"))

    updated = manager.update(contact.id, ContactFields(name="Ada L.", phone="2", email="ada@example.com"))

    assert updated.id == contact.id
    assert updated.created_at == contact.created_at
    assert updated.updated_at == "2026-10-19T12:00:01.000Z"
    assert updated.email == "ada@example.com"
    assert manager.contacts == [updated]


def test_update_preserves_collection_order(manager):
    a = manager.add(ContactFields(name="Ada", phone="1"))
    b = manager.add(ContactFields(name="Bob", phone="2"))

    manager.update(a.id, ContactFields(name="Ada", phone="3"))

    assert [c.id for c in manager.contacts] == [a.id, b.id]


def test_update_unknown_id_raises(manager):
    with pytest.raises(NotFoundError):
        manager.update(42, ContactFields(name="Ada", phone="1"))


def test_delete_is_idempotent(manager, memory_store):
    contact = manager.add(ContactFields(name="Ada", phone="1"))

    assert manager.delete(contact.id) is True
    assert manager.delete(contact.id) is False
    assert manager.contacts == []
    assert memory_store.load() == []


def test_clear_round_trips_to_empty(manager, memory_store):
    manager.add(ContactFields(name="Ada", phone="1"))
    manager.add(ContactFields(name="Bob", phone="2"))

    manager.clear()

    assert manager.contacts == []
    assert memory_store.load() == []
    assert manager.load() == []


def test_failed_save_leaves_collection_unchanged(clock):
    store = FailingStore()
    manager = ContactCollectionManager(store, clock=clock)
    kept = manager.add(ContactFields(name="Ada", phone="1"))

    store.fail = True
    with pytest.raises(PersistenceError):
        manager.add(ContactFields(name="Bob", phone="2"))
    with pytest.raises(PersistenceError):
        manager.update(kept.id, ContactFields(name="Changed", phone="9"))
    with pytest.raises(PersistenceError):
        manager.delete(kept.id)
    with pytest.raises(PersistenceError):
        manager.clear()

    assert manager.contacts == [kept]
    assert store.load() == [kept]


def test_quota_exceeded_reports_storage_full(clock):
    store = InMemoryContactStore(key="tiny", quota_bytes=50)
    manager = ContactCollectionManager(store, clock=clock)

    with pytest.raises(PersistenceError) as excinfo:
        manager.add(ContactFields(name="Ada Lovelace", phone="555-0100"))

    assert excinfo.value.user_message == "Storage is full. Please delete some contacts."
    assert manager.contacts == []


def test_load_restores_saved_collection(memory_store, clock):
    first = ContactCollectionManager(memory_store, clock=clock)
    contact = first.add(ContactFields(name="Ada", phone="1", image_urls=["card.png"]))

    second = ContactCollectionManager(memory_store)
    assert second.load() == [contact]
    assert second.get(contact.id).image_urls == ["card.png"]
