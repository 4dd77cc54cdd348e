"""
Custom Exceptions Module.

This module defines all custom exceptions used throughout the contact
book. Every exception carries a technical ``message`` for the logs and a
``user_message`` that the CLI shows to the user.

Exception Hierarchy:
    ContactBookError (base)
    ├── InputError
    │   ├── InvalidInputError
    │   └── TooManyInputsError
    ├── OCRError
    │   ├── OCREngineNotAvailableError
    │   ├── RecognitionError
    │   └── BatchCancelledError
    ├── ValidationError
    ├── NotFoundError
    ├── PersistenceError
    └── ExportError
"""


class ContactBookError(Exception):
    """
    Base exception for all contact book errors.

    All custom exceptions in this system inherit from this class,
    allowing for easy catching of all system-specific errors.

    Attributes:
        message: Technical error message.
        details: Optional dictionary with additional error details.
        user_message: Message suitable for showing to the user.
    """

    default_user_message = "Something went wrong. Please try again."

    def __init__(self, message: str, details: dict = None, user_message: str = None):
        """
        Initialize the exception.

        Args:
            message: Technical error message.
            details: Optional dictionary with additional context.
            user_message: Override for the user-facing message.
        """
        self.message = message
        self.details = details or {}
        self.user_message = user_message or self.default_user_message
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(ContactBookError):
    """Base exception for file selection errors."""
    pass


class InvalidInputError(InputError):
    """
    Raised when a selected file is not an image.

    Example:
        >>> raise InvalidInputError(["notes.txt"])
    """

    default_user_message = "Please select only image files (JPG, PNG, WebP)"

    def __init__(self, invalid_names: list, reason: str = None):
        message = reason or f"Not an image: {', '.join(invalid_names)}"
        details = {"invalid": invalid_names}
        super().__init__(message, details)


class TooManyInputsError(InputError):
    """Raised when more images are selected than a batch allows."""

    def __init__(self, count: int, limit: int):
        message = f"{count} images selected, at most {limit} allowed"
        details = {"count": count, "limit": limit}
        super().__init__(
            message,
            details,
            user_message=f"Maximum {limit} images allowed. Please select fewer images."
        )


# =============================================================================
# OCR ERRORS
# =============================================================================

class OCRError(ContactBookError):
    """Base exception for OCR-related errors."""

    default_user_message = (
        "OCR processing failed. Please try other images or enter manually."
    )


class OCREngineNotAvailableError(OCRError):
    """Raised when the configured OCR engine is not available."""

    def __init__(self, engine_name: str):
        message = f"OCR engine not available: {engine_name}"
        details = {"engine": engine_name}
        super().__init__(message, details)


class RecognitionError(OCRError):
    """Raised when recognition of any image in a batch fails."""

    def __init__(self, image_name: str, reason: str = None, image_index: int = None):
        message = f"Text recognition failed for: {image_name}"
        details = {"image": image_name, "index": image_index, "reason": reason}
        super().__init__(message, details)


class BatchCancelledError(OCRError):
    """Raised when a batch is cancelled between two images."""

    def __init__(self, completed: int, total: int):
        message = f"OCR batch cancelled after {completed}/{total} images"
        details = {"completed": completed, "total": total}
        super().__init__(message, details, user_message="OCR processing cancelled.")


# =============================================================================
# CONTACT ERRORS
# =============================================================================

class ValidationError(ContactBookError):
    """Raised when contact fields fail validation."""

    def __init__(self, field: str, reason: str = None, user_message: str = None):
        message = f"Validation failed for field '{field}'"
        details = {"field": field, "reason": reason}
        super().__init__(
            message,
            details,
            user_message=user_message or "Name and Phone are required fields!"
        )


class NotFoundError(ContactBookError):
    """Raised when no contact has the requested id."""

    def __init__(self, contact_id):
        message = f"Contact not found: {contact_id}"
        details = {"id": contact_id}
        super().__init__(message, details, user_message=f"No contact with id {contact_id}.")


class PersistenceError(ContactBookError):
    """Raised when the contact store cannot save or clear."""

    default_user_message = "Failed to save contacts. Please try again."

    def __init__(self, operation: str, reason: str = None, user_message: str = None):
        message = f"Storage operation failed: {operation}"
        details = {"operation": operation, "reason": reason}
        super().__init__(message, details, user_message=user_message)


# =============================================================================
# OUTPUT ERRORS
# =============================================================================

class ExportError(ContactBookError):
    """Raised when exporting contacts to a file fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to export contacts to: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details, user_message=f"Export failed: {reason or filepath}")


# Export all exceptions
__all__ = [
    'ContactBookError',
    'InputError',
    'InvalidInputError',
    'TooManyInputsError',
    'OCRError',
    'OCREngineNotAvailableError',
    'RecognitionError',
    'BatchCancelledError',
    'ValidationError',
    'NotFoundError',
    'PersistenceError',
    'ExportError',
]
