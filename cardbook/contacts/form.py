"""
Contact Form Module.

Holds the state of the contact form: the three text fields, the images
attached to the record, the text extracted by the last OCR batch, and
the contact being edited (if any). Submitting the form adds a new
contact or updates the one being edited.
"""

from typing import List, Optional

from cardbook.utils.logger import get_logger
from cardbook.field_extractor.field_candidates import FieldCandidates
from .manager import ContactCollectionManager
from .models import Contact, ContactFields

logger = get_logger(__name__)


class ContactForm:
    """
    Editable form state backed by a ContactCollectionManager.

    Attributes:
        name: Name field.
        phone: Phone field.
        email: Email field.
        selected_images: Image references attached to the record.
        extracted_text: Combined text of the last successful OCR batch.
        editing_contact: Contact loaded for editing, or None when adding.

    Example:
        >>> form = ContactForm(manager)
        >>> form.apply_candidates(result.fields)
        >>> form.phone = "+1 555 0100"
        >>> contact = form.submit()
    """

    def __init__(self, manager: ContactCollectionManager) -> None:
        self.manager = manager
        self.editing_contact: Optional[Contact] = None
        self.reset()

    @property
    def is_editing(self) -> bool:
        return self.editing_contact is not None

    def reset(self) -> None:
        """Empty every field, image and the extracted text."""
        self.name = ""
        self.phone = ""
        self.email = ""
        self.selected_images: List[str] = []
        self.extracted_text = ""

    def to_fields(self) -> ContactFields:
        """Current form content as ContactFields."""
        return ContactFields(
            name=self.name,
            phone=self.phone,
            email=self.email,
            image_urls=list(self.selected_images)
        )

    def apply_candidates(self, candidates: FieldCandidates) -> None:
        """
        Pre-fill fields from OCR candidates.

        Only fields that were found are overwritten; anything the user
        already typed in the other fields stays.
        """
        for field_name, value in candidates.to_dict().items():
            setattr(self, field_name, value)
        logger.debug(f"Applied OCR candidates: {candidates.to_dict()}")

    def remove_image(self, index: int) -> None:
        """
        Detach the image at ``index``.

        Raises:
            IndexError: If there is no image at ``index``.
        """
        del self.selected_images[index]

    def edit(self, contact: Contact) -> None:
        """Load an existing contact into the form for editing."""
        self.editing_contact = contact
        self.name = contact.name
        self.phone = contact.phone
        self.email = contact.email or ""
        self.selected_images = list(contact.image_urls)
        self.extracted_text = ""
        logger.debug(f"Editing contact {contact.id}")

    def cancel_edit(self) -> None:
        """Discard in-progress edits and clear the form."""
        self.editing_contact = None
        self.reset()

    def submit(self) -> Contact:
        """
        Save the form as a new contact or as an update of the one edited.

        The form is cleared only after the contact has been stored; on
        any error its content is kept so the user can retry.

        Returns:
            The stored contact.

        Raises:
            ValidationError: If name or phone is empty.
            NotFoundError: If the edited contact no longer exists.
            PersistenceError: If the store cannot save.
        """
        fields = self.to_fields()

        if self.editing_contact is not None:
            contact = self.manager.update(self.editing_contact.id, fields)
        else:
            contact = self.manager.add(fields)

        self.editing_contact = None
        self.reset()
        return contact
