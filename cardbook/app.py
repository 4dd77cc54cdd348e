"""
Contact Book Application Module.

ContactBookApp wires the pipeline components together and exposes the
user-facing operations: scan business cards, add, edit, update, delete,
clear and export contacts.

Architecture:
    file selection -> InputHandler -> BatchOCREngine -> FieldExtractor
                                                     |
                                                 ContactForm -> ContactCollectionManager -> ContactStore

Usage:
    from cardbook.app import ContactBookApp

    app = ContactBookApp()
    app.start()
    app.scan_images(["card.jpg"], on_progress=print)
    app.form.phone = "+1 555 0100"
    contact = app.submit_form()

Author: cardbook maintainers
"""

from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from cardbook.utils.logger import get_logger
from cardbook.contacts import Contact, ContactCollectionManager, ContactFields, ContactForm
from cardbook.input_handler import InputHandler
from cardbook.ocr_engine import BatchOCREngine, BatchResult, CancellationToken
from cardbook.ocr_engine.engine import BatchProgressCallback
from cardbook.output_handler import ContactExcelExporter
from cardbook.storage import ContactStore, create_store

logger = get_logger(__name__)

ConfirmCallback = Callable[[str], bool]

DELETE_CONFIRMATION = "Are you sure you want to delete this contact?"
CLEAR_CONFIRMATION = "Are you sure you want to delete ALL contacts? This cannot be undone!"


class ContactBookApp:
    """
    Facade over the whole contact book.

    Attributes:
        store: Contact store (injected or built from configuration).
        manager: Contact collection manager.
        form: Form state used for adding and editing.
        input_handler: File selection validation.
        exporter: Excel exporter.

    Example:
        >>> app = ContactBookApp(store=InMemoryContactStore(), ocr_engine=engine)
        >>> app.start()
        >>> app.add_contact(ContactFields(name="Ada", phone="555-0100"))
    """

    def __init__(
        self,
        store: Optional[ContactStore] = None,
        ocr_engine: Optional[BatchOCREngine] = None,
        input_handler: Optional[InputHandler] = None,
        exporter: Optional[ContactExcelExporter] = None,
        manager: Optional[ContactCollectionManager] = None
    ) -> None:
        """
        Initialize the application.

        Args:
            store: Contact store. If None, built from ``storage.backend``.
            ocr_engine: OCR engine. If None, created on first scan.
            input_handler: Input handler. Defaults to InputHandler().
            exporter: Excel exporter. Created on first export if None.
            manager: Collection manager. Defaults to one over ``store``.
        """
        if manager is not None:
            self.store = store or manager.store
            self.manager = manager
        else:
            self.store = store or create_store()
            self.manager = ContactCollectionManager(self.store)
        self.form = ContactForm(self.manager)
        self.input_handler = input_handler or InputHandler()
        self._ocr_engine = ocr_engine
        self._exporter = exporter

        logger.info(f"ContactBookApp initialized (store={self.store.backend_name})")

    @property
    def ocr_engine(self) -> BatchOCREngine:
        """Get or create the OCR engine."""
        if self._ocr_engine is None:
            self._ocr_engine = BatchOCREngine()
        return self._ocr_engine

    @property
    def exporter(self) -> ContactExcelExporter:
        """Get or create the Excel exporter."""
        if self._exporter is None:
            self._exporter = ContactExcelExporter()
        return self._exporter

    @property
    def contacts(self) -> List[Contact]:
        return self.manager.contacts

    def start(self) -> List[Contact]:
        """Load the stored collection."""
        return self.manager.load()

    # ------------------------------------------------------------------
    # OCR
    # ------------------------------------------------------------------

    def scan_images(
        self,
        paths: Sequence[Union[str, Path]],
        on_progress: Optional[BatchProgressCallback] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> Optional[BatchResult]:
        """
        Run OCR over selected business-card images and pre-fill the form.

        Args:
            paths: Selected image files (1-5).
            on_progress: Receives the overall percentage.
            cancel_token: Optional cancellation token.

        Returns:
            BatchResult, or None when the selection was empty.

        Raises:
            InvalidInputError: If any file is not an image.
            TooManyInputsError: If more than five files are selected.
            RecognitionError: If OCR fails; the form fields are untouched.
            BatchCancelledError: If the batch was cancelled.
        """
        payloads = self.input_handler.select(paths)
        if not payloads:
            return None

        self.form.selected_images = [payload.reference for payload in payloads]

        # Fields are only touched once the whole batch has succeeded
        result = self.ocr_engine.run_batch(payloads, on_progress, cancel_token)
        self.form.extracted_text = result.combined_text
        self.form.apply_candidates(result.fields)
        return result

    # ------------------------------------------------------------------
    # Contact operations
    # ------------------------------------------------------------------

    def add_contact(self, fields: ContactFields) -> Contact:
        """Add a contact directly, bypassing the form."""
        return self.manager.add(fields)

    def edit_contact(self, contact_id: int) -> Contact:
        """
        Load a contact into the form for editing.

        Raises:
            NotFoundError: If no contact has this id.
        """
        contact = self.manager.get(contact_id)
        self.form.edit(contact)
        return contact

    def update_contact(self, contact_id: int, fields: ContactFields) -> Contact:
        """Update a contact directly, bypassing the form."""
        return self.manager.update(contact_id, fields)

    def submit_form(self) -> Contact:
        """Save the form as a new contact or as the edited one."""
        return self.form.submit()

    def cancel_edit(self) -> None:
        """Discard in-progress edits and clear the form."""
        self.form.cancel_edit()

    def delete_contact(self, contact_id: int, confirm: ConfirmCallback) -> bool:
        """
        Delete a contact after the user confirms.

        Args:
            contact_id: Contact to delete.
            confirm: Asked the confirmation question; must return True.

        Returns:
            True if the user confirmed and the delete was persisted.
        """
        if not confirm(DELETE_CONFIRMATION):
            logger.debug(f"Delete of contact {contact_id} not confirmed")
            return False

        self.manager.delete(contact_id)
        if self.form.editing_contact is not None and self.form.editing_contact.id == contact_id:
            self.form.cancel_edit()
        return True

    def clear_all(self, confirm: ConfirmCallback) -> bool:
        """
        Delete every contact after the user confirms.

        Returns:
            True if the user confirmed and the store was cleared.
        """
        if not confirm(CLEAR_CONFIRMATION):
            logger.debug("Clear all not confirmed")
            return False

        self.manager.clear()
        self.form.cancel_edit()
        return True

    def export_contacts(self, filepath: Optional[Union[str, Path]] = None) -> str:
        """Export every contact to an Excel workbook."""
        return self.exporter.export(self.manager.contacts, filepath)
