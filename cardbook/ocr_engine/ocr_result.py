"""
OCR Batch Result Data Class.

This module defines the result of running recognition over a batch of
business-card images.

Author: cardbook maintainers
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List

from cardbook.field_extractor.field_candidates import FieldCandidates


@dataclass
class BatchResult:
    """
    Outcome of a successful OCR batch.

    Attributes:
        combined_text: Every image's text, each preceded by its
                       ``--- Image <n> ---`` delimiter, in input order.
        page_texts: Raw text per image, in input order.
        fields: Candidates extracted from combined_text.
        processing_time: Wall-clock seconds spent on the batch.

    Example:
        >>> result = engine.run_batch(payloads)
        >>> print(result.combined_text)
        >>> result.fields.email
        'john.doe@example.com'
    """
    combined_text: str
    page_texts: List[str] = field(default_factory=list)
    fields: FieldCandidates = field(default_factory=FieldCandidates)
    processing_time: float = 0.0

    @property
    def image_count(self) -> int:
        """Number of images in the batch."""
        return len(self.page_texts)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Returns:
            Dictionary representation of the batch result.
        """
        return {
            'combined_text': self.combined_text,
            'page_texts': list(self.page_texts),
            'fields': self.fields.to_dict(),
            'image_count': self.image_count,
            'processing_time': self.processing_time
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def __repr__(self) -> str:
        return (
            f"BatchResult(images={self.image_count}, "
            f"fields={self.fields.to_dict()}, "
            f"time={self.processing_time:.2f}s)"
        )
