"""
Main Input Handler Module.

This module provides the InputHandler class that turns a user's file
selection into image payloads for the OCR batch.

Usage:
    from cardbook.input_handler import InputHandler

    handler = InputHandler()
    payloads = handler.select(["front.jpg", "back.jpg"])
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union

from config import get_config
from cardbook.utils.logger import get_logger
from cardbook.utils.exceptions import InvalidInputError, TooManyInputsError
from .image_payload import ImagePayload

logger = get_logger(__name__)


def validate_payloads(payloads: Sequence[ImagePayload], max_images: int) -> None:
    """
    Check the file-selection contract for a batch.

    Every payload must be an image and there may be at most
    ``max_images`` of them.

    Raises:
        InvalidInputError: If any payload is not an image.
        TooManyInputsError: If more than ``max_images`` are given.
    """
    invalid = [p.name for p in payloads if not p.is_image]
    if invalid:
        raise InvalidInputError(invalid)

    if len(payloads) > max_images:
        raise TooManyInputsError(len(payloads), max_images)


class InputHandler:
    """
    Validates business-card image selections.

    Attributes:
        max_images: Largest number of images accepted in one selection.

    Example:
        >>> handler = InputHandler()
        >>> payloads = handler.select(["card.png"])
        >>> payloads[0].mime_type
        'image/png'
    """

    def __init__(self, max_images: Optional[int] = None) -> None:
        """
        Initialize the input handler.

        Args:
            max_images: Override for ``ocr.max_images``.
        """
        self.max_images = max_images if max_images is not None else \
            get_config("ocr.max_images", 5)
        logger.debug(f"InputHandler initialized (max_images={self.max_images})")

    def select(self, paths: Sequence[Union[str, Path]]) -> List[ImagePayload]:
        """
        Turn selected file paths into validated image payloads.

        An empty selection is not an error and yields an empty list.

        Args:
            paths: Selected file paths, in selection order.

        Returns:
            List of ImagePayload objects in the same order.

        Raises:
            InvalidInputError: If any file is not an image.
            TooManyInputsError: If too many files are selected.
        """
        payloads = [ImagePayload.from_path(p) for p in paths]
        if not payloads:
            return []

        try:
            validate_payloads(payloads, self.max_images)
        except (InvalidInputError, TooManyInputsError) as e:
            logger.warning(f"Rejected selection: {e}")
            raise

        logger.info(f"Selected {len(payloads)} image(s)")
        return payloads
