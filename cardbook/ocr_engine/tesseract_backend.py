"""
Tesseract OCR Backend.

This module provides text recognition using Tesseract (pytesseract).

Features:
    - One session per batch, reused for every image
    - Progress notification before and after each image
    - Configurable Tesseract parameters

Requirements:
    - Tesseract OCR installed on the system
    - pytesseract Python package

Author: cardbook maintainers
"""

import time
from typing import Optional

from config import get_config
from cardbook.utils.logger import get_logger
from cardbook.utils.exceptions import OCREngineNotAvailableError, OCRError
from cardbook.input_handler.image_payload import ImagePayload
from .session import ProgressCallback, RecognitionBackend, RecognitionSession

logger = get_logger(__name__)


class TesseractSession(RecognitionSession):
    """
    An open Tesseract "worker".

    Tesseract itself is a subprocess per call, so the session only holds
    the resolved configuration and tracks whether it has been closed.

    Attributes:
        language: Tesseract language code (e.g., "eng")
        config: Tesseract command-line configuration string
    """

    def __init__(self, pytesseract_module, language: str, config: str) -> None:
        self._pytesseract = pytesseract_module
        self.language = language
        self.config = config
        self.closed = False

    def recognize(self, image: ImagePayload, on_progress: ProgressCallback) -> str:
        """
        Run Tesseract over a single image.

        Args:
            image: Image payload to read.
            on_progress: Receives 0.0 before and 1.0 after recognition.

        Returns:
            Recognized text.

        Raises:
            OCRError: If the session has already been closed.
        """
        if self.closed:
            raise OCRError(f"Recognition session is closed (image: {image.name})")

        on_progress(0.0)
        start_time = time.time()

        pil_image = image.open_image()
        if pil_image.mode != 'RGB':
            pil_image = pil_image.convert('RGB')

        logger.debug(f"Running Tesseract OCR on {image.name} (config: {self.config})")
        text = self._pytesseract.image_to_string(
            pil_image,
            lang=self.language,
            config=self.config
        )

        logger.info(
            f"OCR completed for {image.name}: {len(text)} characters "
            f"({time.time() - start_time:.2f}s)"
        )
        on_progress(1.0)
        return text

    def close(self) -> None:
        """Mark the session closed. Further calls are ignored."""
        if self.closed:
            logger.debug("Tesseract session already closed")
            return
        self.closed = True
        logger.debug("Tesseract session closed")


class TesseractBackend(RecognitionBackend):
    """
    Tesseract OCR backend implementation.

    Uses pytesseract to extract text from images. Tesseract must be
    installed on the system for this to work.

    Attributes:
        psm: Page Segmentation Mode (1-13)
        oem: OCR Engine Mode (0-3)
        extra_config: Additional Tesseract configuration

    Example:
        >>> backend = TesseractBackend()
        >>> session = backend.open("eng")
        >>> text = session.recognize(payload, print)
        >>> session.close()
    """

    name = "tesseract"

    def __init__(
        self,
        psm: Optional[int] = None,
        oem: Optional[int] = None,
        extra_config: Optional[str] = None
    ) -> None:
        """Initialize the Tesseract backend with configuration."""
        self.psm = psm if psm is not None else get_config("ocr.tesseract.psm", 3)
        self.oem = oem if oem is not None else get_config("ocr.tesseract.oem", 3)
        self.extra_config = extra_config if extra_config is not None else \
            get_config("ocr.tesseract.config", "")
        self._pytesseract = None

        logger.debug(f"TesseractBackend initialized (psm={self.psm}, oem={self.oem})")

    def _check_dependencies(self) -> None:
        """
        Check if Tesseract is available.

        Raises:
            OCREngineNotAvailableError: If Tesseract is not installed.
        """
        if self._pytesseract is not None:
            return

        try:
            import pytesseract

            version = pytesseract.get_tesseract_version()
            logger.info(f"Tesseract version: {version}")
            self._pytesseract = pytesseract

        except ImportError:
            raise OCREngineNotAvailableError(
                "pytesseract (install with: pip install pytesseract)"
            )
        except Exception as e:
            raise OCREngineNotAvailableError(
                f"Tesseract OCR (not installed or not in PATH): {e}"
            )

    def _build_config(self) -> str:
        """
        Build Tesseract configuration string.

        Returns:
            Configuration string for Tesseract.
        """
        config_parts = [
            f"--psm {self.psm}",
            f"--oem {self.oem}"
        ]

        if self.extra_config:
            config_parts.append(self.extra_config)

        return ' '.join(config_parts)

    def open(self, language: str) -> TesseractSession:
        """
        Open a Tesseract session for ``language``.

        Raises:
            OCREngineNotAvailableError: If Tesseract cannot be found.
        """
        self._check_dependencies()
        logger.debug(f"Opening Tesseract session (lang={language})")
        return TesseractSession(self._pytesseract, language, self._build_config())

