"""
In-Memory Contact Store.

Keeps serialized collections in a dictionary. Nothing survives the
process; useful for tests and for dry runs of the CLI.
"""

from typing import Dict, Optional

from .base import ContactStore


class InMemoryContactStore(ContactStore):
    """ContactStore backed by a plain dictionary."""

    backend_name = "memory"

    def __init__(
        self,
        key: Optional[str] = None,
        quota_bytes: Optional[int] = None,
        entries: Optional[Dict[str, str]] = None
    ) -> None:
        super().__init__(key=key, quota_bytes=quota_bytes)
        self.entries: Dict[str, str] = entries if entries is not None else {}

    def _read(self) -> Optional[str]:
        return self.entries.get(self.key)

    def _write(self, payload: str) -> None:
        self.entries[self.key] = payload

    def _remove(self) -> None:
        self.entries.pop(self.key, None)
