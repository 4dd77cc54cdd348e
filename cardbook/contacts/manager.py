"""
Contact Collection Manager Module.

This module owns the in-memory contact collection. Every mutation is
handled as a transaction: the new collection is built, persisted in
full through the injected ContactStore, and only then becomes the
current collection. If the store fails, the in-memory collection is left
exactly as it was.

Usage:
    from cardbook.contacts import ContactCollectionManager, ContactFields

    manager = ContactCollectionManager(store)
    manager.load()
    contact = manager.add(ContactFields(name="Ada", phone="555-0100"))
    manager.delete(contact.id)

Author: cardbook maintainers
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable, List, Optional

from cardbook.utils.logger import get_logger
from cardbook.utils.helpers import parse_iso_timestamp, to_iso_timestamp, utc_now
from cardbook.utils.exceptions import NotFoundError
from .models import Contact, ContactFields
from .validators import ContactValidator

if TYPE_CHECKING:
    from cardbook.storage.base import ContactStore

logger = get_logger(__name__)


class ContactCollectionManager:
    """
    Add, update, delete and clear contacts with full-collection persistence.

    Attributes:
        store: Persistence backend for the whole collection.
        validator: Rules applied before add and update.

    Example:
        >>> manager = ContactCollectionManager(InMemoryContactStore())
        >>> manager.add(ContactFields(name="Ada", phone="555-0100"))
        Contact(id=..., name='Ada', phone='555-0100')
        >>> len(manager)
        1
    """

    def __init__(
        self,
        store: 'ContactStore',
        validator: Optional[ContactValidator] = None,
        clock: Optional[Callable[[], datetime]] = None
    ) -> None:
        """
        Initialize the manager with an empty collection.

        Args:
            store: Contact store used for every mutation.
            validator: Contact validator. Defaults to ContactValidator().
            clock: Returns "now"; defaults to the current UTC time.
        """
        self.store = store
        self.validator = validator or ContactValidator()
        self._clock = clock or utc_now
        self._contacts: List[Contact] = []

    @property
    def contacts(self) -> List[Contact]:
        """A copy of the current collection, in insertion order."""
        return list(self._contacts)

    def __len__(self) -> int:
        return len(self._contacts)

    def load(self) -> List[Contact]:
        """
        Replace the in-memory collection with what the store holds.

        Returns:
            The loaded contacts.
        """
        self._contacts = list(self.store.load())
        logger.info(f"Loaded {len(self._contacts)} contacts")
        return self.contacts

    def get(self, contact_id: int) -> Contact:
        """
        Look up a contact by id.

        Raises:
            NotFoundError: If no contact has this id.
        """
        for contact in self._contacts:
            if contact.id == contact_id:
                return contact
        raise NotFoundError(contact_id)

    def add(self, fields: ContactFields) -> Contact:
        """
        Create a contact and append it to the collection.

        Args:
            fields: Editable fields; name and phone are required.

        Returns:
            The stored contact with its new id and timestamps.

        Raises:
            ValidationError: If required fields are empty.
            PersistenceError: If the store cannot save.
        """
        fields = self.validator.check(fields)
        now = self._clock()
        timestamp = to_iso_timestamp(now)

        contact = Contact(
            id=self._new_id(now),
            name=fields.name,
            phone=fields.phone,
            email=fields.email,
            image_urls=list(fields.image_urls),
            created_at=timestamp,
            updated_at=timestamp
        )

        self._commit(self._contacts + [contact])
        logger.info(f"Added contact {contact.id} ({contact.name})")
        return contact

    def update(self, contact_id: int, fields: ContactFields) -> Contact:
        """
        Replace the editable fields of an existing contact.

        The id and creation timestamp are preserved.

        Raises:
            NotFoundError: If no contact has this id.
            ValidationError: If required fields are empty.
            PersistenceError: If the store cannot save.
        """
        existing = self.get(contact_id)
        fields = self.validator.check(fields)

        updated = existing.with_fields(fields, self._updated_timestamp(existing))
        self._commit([
            updated if contact.id == contact_id else contact
            for contact in self._contacts
        ])
        logger.info(f"Updated contact {contact_id}")
        return updated

    def delete(self, contact_id: int) -> bool:
        """
        Remove a contact if present.

        Deleting an id that does not exist is not an error; the
        unchanged collection is persisted again.

        Returns:
            True if a contact was removed.

        Raises:
            PersistenceError: If the store cannot save.
        """
        remaining = [c for c in self._contacts if c.id != contact_id]
        removed = len(remaining) != len(self._contacts)

        self._commit(remaining)
        if removed:
            logger.info(f"Deleted contact {contact_id}")
        else:
            logger.debug(f"Delete of unknown contact {contact_id} ignored")
        return removed

    def clear(self) -> None:
        """
        Remove every contact and the stored entry.

        Raises:
            PersistenceError: If the store cannot clear.
        """
        self.store.clear()
        count = len(self._contacts)
        self._contacts = []
        logger.info(f"Cleared {count} contacts")

    def _commit(self, contacts: List[Contact]) -> None:
        """Persist ``contacts``, then make them the current collection."""
        self.store.save(contacts)
        self._contacts = contacts

    def _new_id(self, now: datetime) -> int:
        """Time-based id, bumped until it is unique in the collection."""
        taken = {contact.id for contact in self._contacts}
        candidate = int(now.timestamp() * 1000)
        while candidate in taken:
            candidate += 1
        return candidate

    def _updated_timestamp(self, existing: Contact) -> str:
        """Current timestamp, never earlier than the creation time."""
        now = self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        created = parse_iso_timestamp(existing.created_at)
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        return to_iso_timestamp(max(now, created))
