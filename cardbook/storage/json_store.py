"""
JSON File Contact Store.

Stores the collection as ``<data_dir>/<key>.json``. Writes go to a
temporary file in the same directory that then replaces the target, so
a crash mid-write never leaves a half-written collection behind.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from config import get_config
from cardbook.utils.logger import get_logger
from cardbook.utils.helpers import ensure_directory
from .base import ContactStore

logger = get_logger(__name__)


class JsonFileContactStore(ContactStore):
    """
    ContactStore backed by a JSON file per key.

    Attributes:
        data_dir: Directory holding the store files.
        file_path: File for this store's key.

    Example:
        >>> store = JsonFileContactStore("data")
        >>> store.save(contacts)
        >>> store.load() == contacts
        True
    """

    backend_name = "json"

    def __init__(
        self,
        data_dir: Optional[Union[str, Path]] = None,
        key: Optional[str] = None,
        quota_bytes: Optional[int] = None
    ) -> None:
        super().__init__(key=key, quota_bytes=quota_bytes)
        self.data_dir = Path(data_dir or get_config("paths.data_dir", "data"))
        self.file_path = self.data_dir / f"{self.key}.json"
        logger.debug(f"JsonFileContactStore initialized (file: {self.file_path})")

    def _read(self) -> Optional[str]:
        if not self.file_path.exists():
            return None
        return self.file_path.read_text(encoding='utf-8')

    def _write(self, payload: str) -> None:
        ensure_directory(self.data_dir)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.key}.", suffix=".tmp", dir=str(self.data_dir)
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(payload)
            os.replace(tmp_name, self.file_path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise

    def _remove(self) -> None:
        if self.file_path.exists():
            self.file_path.unlink()
