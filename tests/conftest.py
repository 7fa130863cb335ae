import io
import struct
import sys
import zlib
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import epub_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from epub_toolkit.core.models import ImageAsset  # noqa: E402


def encode_image(fmt: str = "PNG", size=(60, 80), color="white") -> bytes:
    """Encode a small solid-colour image."""
    img = Image.new("RGB", size, color=color)
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


def oversized_png(width: int = 20000, height: int = 20000) -> bytes:
    """PNG whose header declares dimensions past Pillow's decompression bomb limit."""
    def chunk(kind: bytes, payload: bytes) -> bytes:
        crc = zlib.crc32(kind + payload) & 0xFFFFFFFF
        return struct.pack(">I", len(payload)) + kind + payload + struct.pack(">I", crc)

    header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", header)
        + chunk(b"IDAT", zlib.compress(b""))
        + chunk(b"IEND", b"")
    )


# Common test fixtures
@pytest.fixture
def encode():
    """The encode_image helper, for tests that need custom formats."""
    return encode_image


@pytest.fixture
def png_bytes() -> bytes:
    return encode_image("PNG")


@pytest.fixture
def huge_png_bytes() -> bytes:
    return oversized_png()


@pytest.fixture
def jpeg_bytes() -> bytes:
    return encode_image("JPEG", color="gray")


@pytest.fixture
def make_asset():
    """Factory for in-memory ImageAssets."""
    def _create(name: str = "page.png", fmt: str = "PNG", position: int = 0) -> ImageAsset:
        mime_type = "image/jpeg" if fmt == "JPEG" else f"image/{fmt.lower()}"
        return ImageAsset(name=name, mime_type=mime_type, data=encode_image(fmt), position=position)
    return _create


@pytest.fixture
def images(make_asset):
    """Three PNG content images."""
    return [make_asset(f"{i + 1:03d}.png", position=i) for i in range(3)]


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    """Directory of page images with names that sort differently as text."""
    directory = tmp_path / "pages"
    directory.mkdir()
    for name in ("p1.png", "p2.png", "p10.png"):
        (directory / name).write_bytes(encode_image("PNG"))
    (directory / "notes.txt").write_text("not an image")
    (directory / ".hidden.png").write_bytes(encode_image("PNG"))
    return directory


@pytest.fixture
def sample_image(tmp_path: Path) -> Path:
    """Create a simple test image."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
