"""
Contact Field Extractor Module.

This module turns the combined OCR text of a business-card batch into
candidate contact fields using regular expressions and a simple
positional heuristic.

Approach:
    - Email: first address-shaped substring.
    - Phone: first loose phone-number match, separators stripped.
    - Name: first line that is not itself an email or phone line.

The heuristics are deliberately approximate. A card whose first line is
a company name or job title will produce that line as the name.

Author: cardbook maintainers
"""

import re
from typing import List, Optional

from cardbook.utils.logger import get_logger
from .field_candidates import FieldCandidates

logger = get_logger(__name__)


# Delimiter line written between images of a batch
IMAGE_DELIMITER_RE = re.compile(r"--- Image \d+ ---")

EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

# Optional "+" and country digit, then 3-3-4..6 digit groups with optional
# space, dot, dash or parenthesis separators
PHONE_RE = re.compile(
    r"\+?[1-9]?[-\s.]?\(?[0-9]{3}\)?[-\s.]?[0-9]{3}[-\s.]?[0-9]{4,6}"
)

# Everything except digits and "+" is dropped from a phone match
PHONE_STRIP_RE = re.compile(r"[^0-9+]")

MIN_NAME_LENGTH = 3


def image_delimiter(position: int) -> str:
    """Return the delimiter line for the image at 1-based ``position``."""
    return f"--- Image {position} ---"


class FieldExtractor:
    """
    Regex-based extractor for business-card fields.

    The extractor is stateless: calling extract() twice on the same text
    always returns equal results.

    Example:
        >>> extractor = FieldExtractor()
        >>> text = "John Doe\\nCTO\\njohn.doe@example.com\\n+1 415-555-2671"
        >>> extractor.extract(text)
        FieldCandidates(name='John Doe', phone='+14155552671', email='john.doe@example.com')
    """

    def extract(self, combined_text: str) -> FieldCandidates:
        """
        Extract name, phone and email candidates from recognized text.

        Args:
            combined_text: Text of one or more images, possibly containing
                          ``--- Image <n> ---`` delimiter lines.

        Returns:
            FieldCandidates with each field set or None.
        """
        text = self.strip_delimiters(combined_text or "")

        candidates = FieldCandidates(
            name=self.extract_name(text),
            phone=self.extract_phone(text),
            email=self.extract_email(text)
        )

        logger.debug(f"Extracted candidates: {candidates}")
        return candidates

    @staticmethod
    def strip_delimiters(text: str) -> str:
        """Remove every image delimiter from ``text``."""
        return IMAGE_DELIMITER_RE.sub("", text)

    @staticmethod
    def extract_email(text: str) -> Optional[str]:
        """Return the first email address in ``text``, if any."""
        match = EMAIL_RE.search(text)
        return match.group(0) if match else None

    @staticmethod
    def extract_phone(text: str) -> Optional[str]:
        """
        Return the first phone number in ``text``, if any.

        Spaces, dashes, dots and parentheses are removed; digits and a
        leading "+" are kept.
        """
        match = PHONE_RE.search(text)
        if not match:
            return None
        return PHONE_STRIP_RE.sub("", match.group(0))

    @staticmethod
    def candidate_name_lines(text: str) -> List[str]:
        """
        Lines that could be a person's name.

        A line qualifies when, trimmed, it is longer than two characters
        and contains neither an email address nor a phone number.
        """
        lines = []
        for line in text.split("\n"):
            stripped = line.strip()
            if len(stripped) < MIN_NAME_LENGTH:
                continue
            if PHONE_RE.search(line) or EMAIL_RE.search(line):
                continue
            lines.append(stripped)
        return lines

    def extract_name(self, text: str) -> Optional[str]:
        """Return the first qualifying name line, if any."""
        lines = self.candidate_name_lines(text)
        if not lines:
            return None

        name = lines[0].strip()
        return name if len(name) >= MIN_NAME_LENGTH else None


def extract_fields(combined_text: str) -> FieldCandidates:
    """
    Convenience function wrapping FieldExtractor().extract().

    Args:
        combined_text: Recognized text to analyse.

    Returns:
        Extracted FieldCandidates.
    """
    return FieldExtractor().extract(combined_text)
