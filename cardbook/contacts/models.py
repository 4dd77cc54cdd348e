"""
Contact Data Classes.

Contact is the persisted record; ContactFields is the user-editable part
of it, used as the input of add and update.

The persisted dictionary layout (``to_dict``/``from_dict``) uses the keys
``id, name, phone, email, imageUrls, createdAt, updatedAt``.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List


@dataclass(frozen=True)
class ContactFields:
    """
    Editable contact fields.

    Attributes:
        name: Full name (required at save time).
        phone: Phone number (required at save time).
        email: Email address, may be empty.
        image_urls: References to the card images, at most five.
    """
    name: str = ""
    phone: str = ""
    email: str = ""
    image_urls: List[str] = field(default_factory=list)

    def normalized(self) -> 'ContactFields':
        """Return a copy with text fields trimmed."""
        return ContactFields(
            name=(self.name or "").strip(),
            phone=(self.phone or "").strip(),
            email=(self.email or "").strip(),
            image_urls=list(self.image_urls or [])
        )


@dataclass(frozen=True)
class Contact:
    """
    A stored contact.

    Attributes:
        id: Unique, time-based identifier (milliseconds since epoch).
        name: Full name.
        phone: Phone number.
        email: Email address, may be empty.
        image_urls: References to the card images.
        created_at: ISO-8601 creation timestamp.
        updated_at: ISO-8601 last update timestamp.

    Example:
        >>> contact = Contact.from_dict({"id": 1, "name": "Ada", "phone": "123",
        ...                              "createdAt": "...", "updatedAt": "..."})
        >>> contact.to_dict()["imageUrls"]
        []
    """
    id: int
    name: str
    phone: str
    email: str
    image_urls: List[str]
    created_at: str
    updated_at: str

    @property
    def fields(self) -> ContactFields:
        """The editable part of this contact."""
        return ContactFields(
            name=self.name,
            phone=self.phone,
            email=self.email,
            image_urls=list(self.image_urls)
        )

    def with_fields(self, fields: ContactFields, updated_at: str) -> 'Contact':
        """Return a copy with new editable fields; id and created_at are kept."""
        return replace(
            self,
            name=fields.name,
            phone=fields.phone,
            email=fields.email,
            image_urls=list(fields.image_urls),
            updated_at=updated_at
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the persisted dictionary format.

        Returns:
            JSON-serializable dictionary.
        """
        return {
            'id': self.id,
            'name': self.name,
            'phone': self.phone,
            'email': self.email,
            'imageUrls': list(self.image_urls),
            'createdAt': self.created_at,
            'updatedAt': self.updated_at
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Contact':
        """
        Create a Contact from its persisted dictionary.

        Args:
            data: Dictionary with contact data.

        Returns:
            Contact instance.

        Raises:
            KeyError: If a required key is missing.
            TypeError: If ``data`` is not a mapping.
        """
        return cls(
            id=data['id'],
            name=data['name'],
            phone=data['phone'],
            email=data.get('email') or '',
            image_urls=list(data.get('imageUrls') or []),
            created_at=data['createdAt'],
            updated_at=data.get('updatedAt') or data['createdAt']
        )

    def __repr__(self) -> str:
        return f"Contact(id={self.id}, name={self.name!r}, phone={self.phone!r})"
