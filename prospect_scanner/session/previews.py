import shutil
import tempfile
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from prospect_scanner.logging.logger import Log
from prospect_scanner.session.models import ImageSource, PreviewHandle


class PreviewStore:
    """Owns the on-disk thumbnails shown next to each uploaded file.

    Each handle is created once and released once; the store lives in a
    private temporary directory removed on ``close``.
    """

    def __init__(self, max_size: int = 256, root: Path | None = None) -> None:
        self._max_size = max_size
        self._root = root if root is not None else Path(tempfile.mkdtemp(prefix="prospect-previews-"))
        self._live: dict[str, Path | None] = {}

    @property
    def root(self) -> Path:
        return self._root

    def create(self, handle: PreviewHandle, source: ImageSource) -> Path | None:
        """Write a thumbnail for ``source`` and register it under ``handle``.

        The handle is registered even when nothing could be written; its
        path is then None.
        """
        if handle.key in self._live:
            return self._live[handle.key]
        self._root.mkdir(parents=True, exist_ok=True)
        target = self._root / f"{handle.key}.png"
        try:
            with Image.open(source.path) as image:
                image.thumbnail((self._max_size, self._max_size))
                image.save(target, format="PNG")
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            target = self._copy_original(handle, source, exc)
        self._live[handle.key] = target
        Log.debug(f"Created preview {target} for {source.name}")
        return target

    def _copy_original(
        self, handle: PreviewHandle, source: ImageSource, reason: Exception
    ) -> Path | None:
        # Not decodable here; the extraction service may still read it.
        Log.warning(f"Cannot render preview for {source.name}, using original bytes: {reason}")
        target = self._root / f"{handle.key}{source.path.suffix}"
        try:
            shutil.copyfile(source.path, target)
        except OSError as exc:
            Log.warning(f"No preview for {source.name}: {exc}")
            return None
        return target

    def path_for(self, handle: PreviewHandle) -> Path | None:
        return self._live.get(handle.key)

    def is_live(self, handle: PreviewHandle) -> bool:
        return handle.key in self._live

    def release(self, handle: PreviewHandle) -> None:
        """Delete the preview behind ``handle``; a second release is ignored."""
        if handle.key not in self._live:
            Log.warning(f"Preview {handle.key} already released")
            return
        path = self._live.pop(handle.key)
        if path is not None:
            path.unlink(missing_ok=True)

    def close(self) -> None:
        for key in list(self._live):
            self.release(PreviewHandle(key=key))
        shutil.rmtree(self._root, ignore_errors=True)
