"""
Input Handler Module for the contact book.

Turns file selections into image payloads and enforces the
selection rules (images only, at most five per batch).
"""

from .handler import InputHandler, validate_payloads
from .image_payload import ImagePayload

__all__ = ['InputHandler', 'ImagePayload', 'validate_payloads']
