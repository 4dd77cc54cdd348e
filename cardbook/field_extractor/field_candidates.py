"""
Field Candidates Data Class.

Holds the name, phone and email guessed from recognized card text.
Each field is either None (nothing found) or a best-guess string that
the user still has to confirm.
"""

from dataclasses import dataclass, fields
from typing import Dict, Optional


@dataclass(frozen=True)
class FieldCandidates:
    """
    Best-guess contact fields derived from OCR text.

    Attributes:
        name: First "clean" line of the card, if any.
        phone: First phone-like match with separators removed.
        email: First email address found.

    Example:
        >>> candidates = FieldCandidates(name="John Doe", email="john@example.com")
        >>> candidates.to_dict()
        {'name': 'John Doe', 'email': 'john@example.com'}
    """
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Return only the fields that were found."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @property
    def is_empty(self) -> bool:
        """True when nothing could be extracted."""
        return not self.to_dict()

    def __repr__(self) -> str:
        return (
            f"FieldCandidates(name={self.name!r}, "
            f"phone={self.phone!r}, email={self.email!r})"
        )
