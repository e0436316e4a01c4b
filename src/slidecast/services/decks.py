"""Deck ingestion: rasterize an uploaded deck and publish each page."""

import asyncio
import contextlib
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from slidecast.config import DEFAULT_MAX_UPLOAD_BYTES
from slidecast.domain.decks import DeckIngestResult, PagePublishResult
from slidecast.domain.errors import DeckProcessingError, UploadValidationError

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_EXTENSIONS = frozenset({".pdf", ".jpg"})

_SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


class DeckRasterizer(Protocol):
    """Interface for turning an uploaded deck into page images."""

    async def rasterize(self, data: bytes, extension: str) -> list[bytes]:
        """Return PNG-encoded page images in page order."""


class DeckStorage(Protocol):
    """Interface for the object-storage bucket holding page images."""

    async def upload_png(self, path: str, data: bytes) -> None:
        """Upload a PNG, overwriting any object already at ``path``."""

    def public_url(self, path: str) -> str:
        """Return the public URL of the object at ``path``."""


def page_path(session_id: str, page_number: int) -> str:
    """Return the storage path for a 1-based page of a session deck."""
    return f"session/{session_id}/page-{page_number}.png"


@dataclass
class DeckIngestionService:
    """Rasterize decks and fan page uploads out to object storage.

    A page whose upload fails is recorded as failed and logged; it never
    aborts the other pages. Callers detect partial failure by comparing
    ``len(result.image_urls)`` with ``result.total_pages`` or by reading
    ``result.failed_pages``.
    """

    rasterizer: DeckRasterizer
    storage: DeckStorage
    allowed_extensions: frozenset[str] = DEFAULT_ALLOWED_EXTENSIONS
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    scratch_dir: Path | None = None
    upload_concurrency: int | None = None

    def validate_upload(self, session_id: str, filename: str | None, size: int) -> str:
        """Check the upload and return its normalized extension."""
        if not _SESSION_ID_PATTERN.match(session_id):
            raise UploadValidationError("Invalid session id")
        extension = Path(filename or "").suffix.lower()
        if extension not in self.allowed_extensions:
            allowed = " and ".join(
                sorted(ext.lstrip(".") for ext in self.allowed_extensions)
            )
            raise UploadValidationError(f"Only {allowed} files are allowed.")
        if size > self.max_upload_bytes:
            raise UploadValidationError("File too large")
        return extension

    async def ingest(
        self, session_id: str, filename: str | None, content: bytes
    ) -> DeckIngestResult:
        """Rasterize ``content`` and publish every page for the session."""
        extension = self.validate_upload(session_id, filename, len(content))
        logger.info(
            "Deck received",
            extra={"session_id": session_id, "size_bytes": len(content)},
        )
        images = await self.rasterizer.rasterize(content, extension)
        if not images:
            raise DeckProcessingError("Failed to process PDF into images")
        logger.info(
            "Deck rasterized",
            extra={"session_id": session_id, "pages": len(images)},
        )

        limiter: contextlib.AbstractAsyncContextManager[object] = (
            asyncio.Semaphore(self.upload_concurrency)
            if self.upload_concurrency
            else contextlib.nullcontext()
        )
        pages = await asyncio.gather(
            *(
                self._publish_page(session_id, number, image, limiter)
                for number, image in enumerate(images, start=1)
            )
        )
        self._cleanup_scratch(session_id, len(images))

        result = DeckIngestResult(
            session_id=session_id, total_pages=len(images), pages=list(pages)
        )
        if result.failed_pages:
            logger.warning(
                "Deck published with failures",
                extra={
                    "session_id": session_id,
                    "failed": [page.page_number for page in result.failed_pages],
                },
            )
        return result

    async def _publish_page(
        self,
        session_id: str,
        page_number: int,
        image: bytes,
        limiter: contextlib.AbstractAsyncContextManager[object],
    ) -> PagePublishResult:
        path = page_path(session_id, page_number)
        try:
            async with limiter:
                await self.storage.upload_png(path, image)
            url = self.storage.public_url(path)
        except Exception as exc:
            logger.exception(
                "Failed to upload deck page",
                extra={"session_id": session_id, "page": page_number},
            )
            return PagePublishResult(
                page_number=page_number,
                path=path,
                error=str(exc) or type(exc).__name__,
            )
        return PagePublishResult(page_number=page_number, path=path, url=url)

    def _cleanup_scratch(self, session_id: str, total_pages: int) -> None:
        """Best-effort removal of local page files; never raises."""
        if self.scratch_dir is None:
            return
        session_dir = self.scratch_dir / session_id
        for page_number in range(1, total_pages + 1):
            try:
                (session_dir / f"page-{page_number}.png").unlink(missing_ok=True)
            except OSError:
                logger.warning(
                    "Failed to remove scratch page",
                    extra={"session_id": session_id, "page": page_number},
                    exc_info=True,
                )
