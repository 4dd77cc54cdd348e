"""
Image Payload Module.

An ImagePayload is one selected file headed for OCR. It remembers the
MIME type so a batch can reject non-image selections before any
recognition work starts, and it opens lazily as a PIL Image.

Author: cardbook maintainers
"""

import io
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from PIL import Image

# Formats browsers label as image/* but mimetypes may not know on every platform
mimetypes.add_type("image/webp", ".webp")


@dataclass
class ImagePayload:
    """
    A single image selected for recognition.

    Attributes:
        name: Display name (usually the filename).
        mime_type: Declared MIME type, e.g. "image/png".
        path: Location on disk, if the payload came from a file.
        data: Raw bytes, if the payload was provided in memory.

    Example:
        >>> payload = ImagePayload.from_path("cards/alice.png")
        >>> payload.is_image
        True
    """
    name: str
    mime_type: str
    path: Optional[Path] = None
    data: Optional[bytes] = None

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> 'ImagePayload':
        """Build a payload from a file path, guessing its MIME type."""
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            mime_type=mime_type or "application/octet-stream",
            path=path
        )

    @classmethod
    def from_bytes(cls, name: str, data: bytes, mime_type: Optional[str] = None) -> 'ImagePayload':
        """Build a payload from in-memory bytes."""
        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(name)
        return cls(
            name=name,
            mime_type=mime_type or "application/octet-stream",
            data=data
        )

    @property
    def is_image(self) -> bool:
        """True when the declared MIME type is an image type."""
        return self.mime_type.startswith("image/")

    @property
    def reference(self) -> str:
        """String stored on a contact to point back at this image."""
        return str(self.path) if self.path is not None else self.name

    def open_image(self) -> Image.Image:
        """
        Load the payload as a PIL Image.

        Returns:
            Loaded PIL Image.

        Raises:
            OSError: If the file is missing or not a readable image.
            ValueError: If the payload has neither a path nor data.
        """
        if self.data is not None:
            image = Image.open(io.BytesIO(self.data))
        elif self.path is not None:
            image = Image.open(self.path)
        else:
            raise ValueError(f"Image payload '{self.name}' has no content")

        image.load()
        return image

    def __repr__(self) -> str:
        return f"ImagePayload(name='{self.name}', mime_type='{self.mime_type}')"
