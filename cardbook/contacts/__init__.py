"""
Contacts Module for the contact book.

This module provides:
    - Contact / ContactFields data classes
    - Validation of required fields
    - The transactional collection manager
    - Form state for adding and editing contacts
"""

from .models import Contact, ContactFields
from .validators import ContactValidator
from .manager import ContactCollectionManager
from .form import ContactForm

__all__ = [
    'Contact',
    'ContactFields',
    'ContactValidator',
    'ContactCollectionManager',
    'ContactForm'
]
