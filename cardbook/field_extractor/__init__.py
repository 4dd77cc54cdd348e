"""
Field Extractor Module for the contact book.

Derives name, phone and email candidates from recognized card text.
Pure and deterministic: no I/O, no state.
"""

from .extractor import FieldExtractor, extract_fields, image_delimiter
from .field_candidates import FieldCandidates

__all__ = ['FieldExtractor', 'FieldCandidates', 'extract_fields', 'image_delimiter']
