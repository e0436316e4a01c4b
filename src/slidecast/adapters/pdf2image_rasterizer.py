"""Deck rasterizer backed by pdf2image (poppler) and Pillow."""

import asyncio
import io
from dataclasses import dataclass

from pdf2image import convert_from_bytes
from PIL import Image

from slidecast.services.decks import DeckRasterizer

_PNG_SAFE_MODES = {"1", "L", "LA", "P", "RGB", "RGBA", "I"}


@dataclass
class Pdf2ImageRasterizer(DeckRasterizer):
    """Render every PDF page, or a single JPG, to PNG bytes."""

    dpi: int = 150
    thread_count: int = 1

    async def rasterize(self, data: bytes, extension: str) -> list[bytes]:
        """Rasterize off the event loop; poppler runs as a subprocess."""
        return await asyncio.to_thread(self._rasterize_sync, data, extension)

    def _rasterize_sync(self, data: bytes, extension: str) -> list[bytes]:
        if extension != ".pdf":
            with Image.open(io.BytesIO(data)) as image:
                return [_encode_png(image)]
        pages = convert_from_bytes(data, dpi=self.dpi, thread_count=self.thread_count)
        return [_encode_png(page) for page in pages]


def _encode_png(image: Image.Image) -> bytes:
    if image.mode not in _PNG_SAFE_MODES:
        image = image.convert("RGB")
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
