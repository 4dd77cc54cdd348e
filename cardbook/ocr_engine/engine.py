"""
Batch OCR Engine Module.

This module provides the BatchOCREngine class that runs text recognition
over a batch of business-card images and turns the result into contact
field candidates.

Pipeline:
    validate selection -> open session -> recognize each image in order
    (reporting progress) -> close session -> combine text -> extract fields

Usage:
    from cardbook.ocr_engine import BatchOCREngine

    engine = BatchOCREngine()
    result = engine.run_batch(payloads, on_progress=print)

    print(result.combined_text)
    print(result.fields.to_dict())

Author: cardbook maintainers
"""

import threading
import time
from typing import Callable, List, Optional, Sequence

from config import get_config
from cardbook.utils.logger import get_logger
from cardbook.utils.helpers import round_half_up
from cardbook.utils.exceptions import (
    BatchCancelledError,
    InvalidInputError,
    RecognitionError,
)
from cardbook.field_extractor import FieldExtractor, image_delimiter
from cardbook.input_handler.handler import validate_payloads
from cardbook.input_handler.image_payload import ImagePayload
from .ocr_result import BatchResult
from .session import RecognitionBackend, RecognitionSession
from .tesseract_backend import TesseractBackend

logger = get_logger(__name__)

BatchProgressCallback = Callable[[int], None]


def compute_overall_progress(index: int, total: int, fraction: float) -> int:
    """
    Overall batch progress as an integer percentage.

    Image ``index`` (0-based) of ``total`` contributes ``index / total``
    of the batch as already done, plus its own ``fraction`` scaled down
    to its share.

    Example:
        >>> compute_overall_progress(0, 2, 0.5)
        25
        >>> compute_overall_progress(1, 2, 1.0)
        100
    """
    fraction = min(max(fraction, 0.0), 1.0)
    overall = (index / total) * 100 + (fraction * 100) / total
    return round_half_up(overall)


def build_combined_text(page_texts: Sequence[str]) -> str:
    """Join per-image texts, each preceded by its delimiter line."""
    return "".join(
        f"\n{image_delimiter(position)}\n{text}\n"
        for position, text in enumerate(page_texts, start=1)
    )


def create_backend(name: Optional[str] = None) -> RecognitionBackend:
    """
    Build the recognition backend named in configuration.

    Args:
        name: Backend name. If None, uses ``ocr.engine``.

    Returns:
        RecognitionBackend instance.
    """
    backend_name = name or get_config("ocr.engine", "tesseract")
    if backend_name in ("tesseract", "pytesseract"):
        return TesseractBackend()

    logger.warning(f"Unknown backend '{backend_name}', falling back to tesseract")
    return TesseractBackend()


class CancellationToken:
    """
    Cooperative cancellation flag for an OCR batch.

    The engine checks the token before starting each image; an image
    that is already being recognized always runs to completion.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation of the batch."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class BatchOCREngine:
    """
    Runs OCR over an ordered batch of images and extracts contact fields.

    Images are processed one at a time with a single recognition session,
    which is always closed before run_batch() returns or raises. If any
    image fails, the whole batch fails and no fields are extracted.

    Attributes:
        backend: Recognition backend used to open sessions.
        extractor: FieldExtractor applied to the combined text.
        language: Recognition language code.
        max_images: Largest batch accepted.

    Example:
        >>> engine = BatchOCREngine()
        >>> result = engine.run_batch([ImagePayload.from_path("card.png")])
        >>> result.fields.name
        'John Doe'
    """

    def __init__(
        self,
        backend: Optional[RecognitionBackend] = None,
        extractor: Optional[FieldExtractor] = None,
        language: Optional[str] = None,
        max_images: Optional[int] = None
    ) -> None:
        """
        Initialize the batch engine.

        Args:
            backend: Recognition backend. If None, built from configuration.
            extractor: Field extractor. Defaults to FieldExtractor().
            language: Override for ``ocr.language``.
            max_images: Override for ``ocr.max_images``.
        """
        self.backend = backend or create_backend()
        self.extractor = extractor or FieldExtractor()
        self.language = language or get_config("ocr.language", "eng")
        self.max_images = max_images if max_images is not None else \
            get_config("ocr.max_images", 5)
        self._progress = 0

        logger.info(
            f"Batch OCR engine initialized with backend: "
            f"{getattr(self.backend, 'name', type(self.backend).__name__)}"
        )

    @property
    def progress(self) -> int:
        """Last overall progress value emitted, 0-100."""
        return self._progress

    def run_batch(
        self,
        images: Sequence[ImagePayload],
        on_progress: Optional[BatchProgressCallback] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> BatchResult:
        """
        Recognize a batch of images and extract contact fields.

        Args:
            images: Image payloads, in the order they were selected.
            on_progress: Called with the overall percentage on every tick.
            cancel_token: Optional token checked before each image.

        Returns:
            BatchResult with the combined text and field candidates.

        Raises:
            InvalidInputError: If the batch is empty or holds a non-image.
            TooManyInputsError: If the batch exceeds ``max_images``.
            RecognitionError: If the engine fails on any image.
            BatchCancelledError: If the token is cancelled mid-batch.
        """
        images = list(images)
        if not images:
            raise InvalidInputError([], reason="No images selected")
        validate_payloads(images, self.max_images)

        start_time = time.time()
        self._progress = 0
        self._emit(0, on_progress)

        logger.info(f"Starting OCR batch of {len(images)} image(s)")
        session = self._open_session()
        try:
            page_texts = self._recognize_all(session, images, on_progress, cancel_token)
        except BaseException:
            # No partial progress survives a failed or cancelled batch
            self._progress = 0
            raise
        finally:
            self._close_session(session)

        combined_text = build_combined_text(page_texts)
        fields = self.extractor.extract(combined_text)

        if self._progress < 100:
            self._emit(100, on_progress)

        result = BatchResult(
            combined_text=combined_text,
            page_texts=page_texts,
            fields=fields,
            processing_time=time.time() - start_time
        )
        logger.info(f"OCR batch complete: {result}")
        return result

    def _open_session(self) -> RecognitionSession:
        """
        Open a recognition session.

        Raises:
            RecognitionError: If the backend cannot start.
        """
        try:
            return self.backend.open(self.language)
        except Exception as e:
            logger.error(f"Could not open recognition session: {e}")
            raise RecognitionError("batch", f"Could not open session: {e}") from e

    def _close_session(self, session: RecognitionSession) -> None:
        """Close the session; a teardown failure is logged, not raised."""
        try:
            session.close()
        except Exception as e:
            logger.warning(f"Recognition session did not close cleanly: {e}")

    def _recognize_all(
        self,
        session: RecognitionSession,
        images: List[ImagePayload],
        on_progress: Optional[BatchProgressCallback],
        cancel_token: Optional[CancellationToken]
    ) -> List[str]:
        """
        Recognize every image in order with one session.

        Returns:
            Recognized text per image.
        """
        total = len(images)
        page_texts = []

        for index, image in enumerate(images):
            if cancel_token is not None and cancel_token.cancelled:
                logger.info(f"OCR batch cancelled before image {index + 1}/{total}")
                raise BatchCancelledError(index, total)

            logger.debug(f"Processing image {index + 1}/{total}: {image.name}")

            def tick(fraction: float, index: int = index) -> None:
                self._report(index, total, fraction, on_progress)

            try:
                text = session.recognize(image, tick)
            except Exception as e:
                logger.error(f"Failed to process image {index + 1}: {e}")
                raise RecognitionError(image.name, str(e), image_index=index + 1) from e

            page_texts.append(text)

        return page_texts

    def _report(
        self,
        index: int,
        total: int,
        fraction: float,
        on_progress: Optional[BatchProgressCallback]
    ) -> None:
        """Turn one per-image tick into an overall, non-decreasing value."""
        value = min(compute_overall_progress(index, total, fraction), 100)
        self._emit(max(value, self._progress), on_progress)

    def _emit(self, value: int, on_progress: Optional[BatchProgressCallback]) -> None:
        self._progress = value
        if on_progress is not None:
            on_progress(value)
