import asyncio
import base64

from prospect_scanner.processor.exceptions import FileReadError
from prospect_scanner.session.models import ImageSource


class ImageEncoder:
    """Reads an image off disk and encodes it for the extraction call."""

    def load(self, source: ImageSource) -> bytes:
        """Read raw image bytes.

        Raises:
            FileReadError: if the file is gone or unreadable.
        """
        try:
            return source.path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Cannot read {source.path}: {exc}") from exc

    async def encode(self, source: ImageSource) -> str:
        """Base64 text of the image, read without blocking the event loop."""
        raw_bytes = await asyncio.to_thread(self.load, source)
        return base64.b64encode(raw_bytes).decode("ascii")
