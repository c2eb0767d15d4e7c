from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

from prospect_scanner.session.models import ImageSource
from prospect_scanner.session.previews import PreviewStore
from prospect_scanner.session.session import Session


def _draw_page(path: Path, text: str, image_format: str) -> Path:
    image = Image.new("RGB", (600, 800), "white")
    ImageDraw.Draw(image).text((40, 40), text, fill="black")
    image.save(path, format=image_format)
    return path


@pytest.fixture()
def page_png(tmp_path: Path) -> Path:
    """A contact-list page rendered as PNG."""
    return _draw_page(tmp_path / "page-1.png", "Alice Rahman 01712345678", "PNG")


@pytest.fixture()
def page_jpeg(tmp_path: Path) -> Path:
    return _draw_page(tmp_path / "page-2.jpg", "Bob Karim 01898765432", "JPEG")


@pytest.fixture()
def make_pages(tmp_path: Path) -> Callable[..., list[ImageSource]]:
    """Factory writing ``count`` PNG pages and returning them as image sources."""

    def _make(count: int, prefix: str = "page") -> list[ImageSource]:
        sources = []
        for i in range(count):
            path = _draw_page(tmp_path / f"{prefix}-{i}.png", f"Contact {i}", "PNG")
            sources.append(ImageSource(path=path, name=path.name, mime_type="image/png"))
        return sources

    return _make


@pytest.fixture()
def preview_store(tmp_path: Path) -> Generator[PreviewStore, None, None]:
    store = PreviewStore(max_size=64, root=tmp_path / "previews")
    yield store
    store.close()


@pytest.fixture()
def session(preview_store: PreviewStore) -> Session:
    return Session(preview_store, max_files=20)
