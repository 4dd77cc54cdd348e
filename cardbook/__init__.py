"""
cardbook - Business-Card Contact Manager.

This package contains all core modules of the contact book. Each module
has a single responsibility.

Modules:
    - input_handler: Image selection and validation
    - ocr_engine: Batch text recognition with progress
    - field_extractor: Name / phone / email heuristics
    - contacts: Contact model, validation, collection manager, form
    - storage: Key-value persistence of the collection
    - output_handler: Excel export
    - utils: Logging, exceptions, helpers

Architecture:
    Input → OCR → Field Extraction → Form → Collection Manager → Storage
                                                               ↓
                                                          Excel Export
"""

__version__ = "1.0.0"

__all__ = [
    'input_handler',
    'ocr_engine',
    'field_extractor',
    'contacts',
    'storage',
    'output_handler',
    'utils'
]
