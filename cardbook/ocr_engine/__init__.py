"""
OCR Engine Module for the contact book.

This module provides batch text recognition for business cards:
    - Recognition adapter interfaces (backend / session)
    - Tesseract implementation
    - Batch orchestration with aggregate progress
    - Field extraction on the combined text

Author: cardbook maintainers
"""

from .engine import (
    BatchOCREngine,
    CancellationToken,
    build_combined_text,
    compute_overall_progress,
    create_backend,
)
from .ocr_result import BatchResult
from .session import RecognitionBackend, RecognitionSession
from .tesseract_backend import TesseractBackend, TesseractSession

__all__ = [
    'BatchOCREngine',
    'BatchResult',
    'CancellationToken',
    'RecognitionBackend',
    'RecognitionSession',
    'TesseractBackend',
    'TesseractSession',
    'build_combined_text',
    'compute_overall_progress',
    'create_backend',
]
