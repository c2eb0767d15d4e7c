from abc import ABC, abstractmethod

from prospect_scanner.session.models import Prospect


class BaseExtractor(ABC):
    """Contract for all prospect extraction adapters."""

    @abstractmethod
    def extract(self, image_base64: str, mime_type: str) -> list[Prospect]:
        """Read contact records off a page image.

        Args:
            image_base64: Base64-encoded image bytes.
            mime_type: Mime type of the image, e.g. ``image/jpeg``.

        Returns:
            Extracted prospects in page order; empty when none were found.

        Raises:
            ExtractionError: on any failure.
        """
