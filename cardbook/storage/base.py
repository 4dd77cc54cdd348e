"""
Contact Store Base Module.

A ContactStore persists the whole contact collection as one JSON array
under a single namespaced key. Subclasses only provide raw read, write
and remove of that string; serialization, the storage quota and error
translation live here.

Load never fails: missing data loads as an empty list, and so does
unreadable or corrupt data (with a warning in the log).
"""

import json
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from config import get_config
from cardbook.utils.logger import get_logger
from cardbook.utils.helpers import parse_iso_timestamp
from cardbook.utils.exceptions import PersistenceError
from cardbook.contacts.models import Contact

logger = get_logger(__name__)

STORAGE_FULL_MESSAGE = "Storage is full. Please delete some contacts."


class ContactStore(ABC):
    """
    Key-value persistence for the contact collection.

    Attributes:
        key: Namespaced key the collection is stored under.
        quota_bytes: Largest serialized payload accepted, or None.
    """

    backend_name = "abstract"

    def __init__(self, key: Optional[str] = None, quota_bytes: Optional[int] = None) -> None:
        self.key = key or get_config("storage.key", "saveLifeContacts")
        self.quota_bytes = quota_bytes if quota_bytes is not None else \
            get_config("storage.quota_bytes", None)

    # ------------------------------------------------------------------
    # Backend hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _read(self) -> Optional[str]:
        """Return the stored string for ``self.key``, or None if absent."""
        raise NotImplementedError

    @abstractmethod
    def _write(self, payload: str) -> None:
        """Store ``payload`` under ``self.key``, replacing any old value."""
        raise NotImplementedError

    @abstractmethod
    def _remove(self) -> None:
        """Delete the entry for ``self.key`` if it exists."""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def save(self, contacts: Sequence[Contact]) -> None:
        """
        Persist the full collection.

        Args:
            contacts: Every contact, in collection order.

        Raises:
            PersistenceError: If the payload exceeds the quota or the
                              backend cannot write.
        """
        payload = self.serialize(contacts)
        size = len(payload.encode('utf-8'))

        if self.quota_bytes and size > self.quota_bytes:
            logger.error(f"Storage quota exceeded: {size} > {self.quota_bytes} bytes")
            raise PersistenceError(
                "save",
                f"payload of {size} bytes exceeds quota of {self.quota_bytes}",
                user_message=STORAGE_FULL_MESSAGE
            )

        try:
            self._write(payload)
        except Exception as e:
            logger.error(f"Save error: {e}")
            raise PersistenceError("save", str(e)) from e

        logger.debug(f"Saved {len(contacts)} contacts ({size} bytes) to {self.backend_name}")

    def load(self) -> List[Contact]:
        """
        Load the collection.

        Returns:
            Stored contacts, or an empty list if nothing is stored or the
            stored data cannot be read.
        """
        try:
            payload = self._read()
        except Exception as e:
            logger.warning(f"Load error, starting with no contacts: {e}")
            return []

        if payload is None:
            return []
        return self.deserialize(payload)

    def clear(self) -> None:
        """
        Remove the stored collection.

        Raises:
            PersistenceError: If the backend cannot remove the entry.
        """
        try:
            self._remove()
        except Exception as e:
            logger.error(f"Clear error: {e}")
            raise PersistenceError("clear", str(e)) from e

        logger.debug(f"Cleared '{self.key}' from {self.backend_name}")

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    @staticmethod
    def serialize(contacts: Sequence[Contact]) -> str:
        """Serialize contacts to the persisted JSON array."""
        return json.dumps([contact.to_dict() for contact in contacts], ensure_ascii=False)

    @staticmethod
    def deserialize(payload: str) -> List[Contact]:
        """
        Parse a persisted JSON array.

        Any malformed payload yields an empty list.
        """
        try:
            records = json.loads(payload)
            if not isinstance(records, list):
                raise ValueError(f"expected a JSON array, got {type(records).__name__}")

            contacts = [Contact.from_dict(record) for record in records]
            for contact in contacts:
                parse_iso_timestamp(contact.created_at)
                parse_iso_timestamp(contact.updated_at)
            return contacts

        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Stored contacts are unreadable, starting empty: {e}")
            return []
