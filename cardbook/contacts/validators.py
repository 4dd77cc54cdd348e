"""
Contact Validators Module.

Checks the rules a contact must satisfy before it is persisted:
    - name and phone are non-empty after trimming
    - at most ``contacts.max_images`` image references
"""

from typing import List, Optional, Tuple

from config import get_config
from cardbook.utils.logger import get_logger
from cardbook.utils.exceptions import ValidationError
from .models import ContactFields

logger = get_logger(__name__)


class ContactValidator:
    """
    Validates editable contact fields.

    Example:
        >>> validator = ContactValidator()
        >>> validator.validate(ContactFields(name="Ada", phone=""))
        (False, ['phone is required'])
    """

    REQUIRED_FIELDS = ('name', 'phone')

    def __init__(self, max_images: Optional[int] = None) -> None:
        """Initialize the validator."""
        self.max_images = max_images if max_images is not None else \
            get_config("contacts.max_images", 5)

    def validate(self, fields: ContactFields) -> Tuple[bool, List[str]]:
        """
        Validate fields with detailed feedback.

        Args:
            fields: Fields to check (trimmed before checking).

        Returns:
            Tuple of (is_valid, list of problems).
        """
        fields = fields.normalized()
        problems = []

        for name in self.REQUIRED_FIELDS:
            if not getattr(fields, name):
                problems.append(f"{name} is required")

        if len(fields.image_urls) > self.max_images:
            problems.append(
                f"{len(fields.image_urls)} images attached, at most {self.max_images} allowed"
            )

        return not problems, problems

    def check(self, fields: ContactFields) -> ContactFields:
        """
        Validate and return the trimmed fields.

        Raises:
            ValidationError: If any rule is broken.
        """
        normalized = fields.normalized()
        valid, problems = self.validate(normalized)
        if valid:
            return normalized

        logger.debug(f"Contact validation failed: {problems}")
        missing = [name for name in self.REQUIRED_FIELDS if not getattr(normalized, name)]
        if missing:
            raise ValidationError(missing[0], "; ".join(problems))
        raise ValidationError(
            "image_urls",
            problems[-1],
            user_message=f"Maximum {self.max_images} images allowed per contact."
        )
