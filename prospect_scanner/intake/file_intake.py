import mimetypes
from collections.abc import Iterable
from pathlib import Path

from prospect_scanner.intake.exceptions import IntakeError
from prospect_scanner.session.models import ImageSource

DEFAULT_ACCEPTED_MIME_TYPES = ("image/png", "image/jpeg", "image/webp")

mimetypes.add_type("image/webp", ".webp")


def guess_mime_type(path: Path) -> str:
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or "application/octet-stream"


class FileIntake:
    """Turns user-selected paths into image candidates for a session."""

    def __init__(self, accepted_mime_types: Iterable[str] = DEFAULT_ACCEPTED_MIME_TYPES) -> None:
        self._accepted = frozenset(m.lower() for m in accepted_mime_types)

    def from_paths(self, paths: Iterable[Path]) -> list[ImageSource]:
        """File-picker path: keep only the accepted image types."""
        return [s for s in self._collect(paths) if s.mime_type in self._accepted]

    def from_drop(self, paths: Iterable[Path]) -> list[ImageSource]:
        """Drag-and-drop path: keep anything typed as an image."""
        return [s for s in self._collect(paths) if s.is_image]

    def _collect(self, paths: Iterable[Path]) -> list[ImageSource]:
        sources: list[ImageSource] = []
        for path in paths:
            if not path.exists():
                raise IntakeError(f"File not found: {path}")
            if path.is_dir():
                sources.extend(
                    self._to_source(child) for child in sorted(path.iterdir()) if child.is_file()
                )
            else:
                sources.append(self._to_source(path))
        return sources

    @staticmethod
    def _to_source(path: Path) -> ImageSource:
        return ImageSource(path=path, name=path.name, mime_type=guess_mime_type(path))
