"""Deck upload endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from slidecast.domain.errors import (
    DeckProcessingError,
    NoFileUploadedError,
    UploadValidationError,
)

if TYPE_CHECKING:
    from slidecast.containers import AppContainer
    from slidecast.domain.decks import DeckIngestResult

logger = logging.getLogger(__name__)

router = APIRouter(tags=["decks"])


@router.post("/session/{session_id}/slides/pdf")
async def upload_deck(session_id: str, request: Request) -> JSONResponse:
    """Rasterize an uploaded deck and publish one image per page.

    Malformed multipart bodies are reported in the same ``{"error": ...}`` shape
    as every other upload failure.
    """
    container: AppContainer = request.app.state.container
    deck_service = container.deck_service
    form: FormData | None = None
    try:
        form = await _read_form(request)
        file = form.get("file")
        if not isinstance(file, UploadFile) or not file.filename:
            raise NoFileUploadedError()
        # Read one byte past the cap so oversized uploads are detectable.
        content = await file.read(deck_service.max_upload_bytes + 1)
        result = await deck_service.ingest(session_id, file.filename, content)
    except UploadValidationError as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
        )
    except DeckProcessingError as exc:
        logger.error(
            "Deck rasterization produced no pages", extra={"session_id": session_id}
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc)},
        )
    except Exception as exc:
        logger.exception(
            "Error processing deck upload", extra={"session_id": session_id}
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "details": str(exc) or type(exc).__name__,
            },
        )
    finally:
        if form is not None:
            await form.close()
    return JSONResponse(content=_deck_payload(result))


def _deck_payload(result: DeckIngestResult) -> dict[str, object]:
    return {
        "message": "PDF processed successfully",
        "totalPages": result.total_pages,
        "imageUrls": result.image_urls,
        "failedPages": [
            {"page": page.page_number, "error": page.error}
            for page in result.failed_pages
        ],
    }


async def _read_form(request: Request) -> FormData:
    try:
        return await request.form()
    except HTTPException as exc:
        raise UploadValidationError(f"Malformed upload: {exc.detail}") from exc
    except MultiPartException as exc:
        raise UploadValidationError(f"Malformed upload: {exc.message}") from exc
