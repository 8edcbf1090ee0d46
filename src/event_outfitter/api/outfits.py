"""Outfit generation endpoints."""

from __future__ import annotations

import logging
from collections.abc import Callable, Coroutine
from typing import TYPE_CHECKING, Any

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    Header,
    HTTPException,
    Request,
    Response,
    UploadFile,
    status,
)
from fastapi.routing import APIRoute
from pydantic import ValidationError as PydanticValidationError

from event_outfitter.api.models import GenerateRequest, SwapStyleRequest
from event_outfitter.domain.errors import ValidationError
from event_outfitter.services.media import resolve_mime_type

if TYPE_CHECKING:
    from starlette.types import Message, Receive

    from event_outfitter.containers import AppContainer

logger = logging.getLogger(__name__)

SESSION_HEADER = "X-Session-ID"


class UploadLimitRoute(APIRoute):
    """Route that refuses request bodies above the configured upload size.

    The limit is enforced while the body is received, before form parsing,
    whether or not the client sent ``Content-Length``.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()

        async def limited_route_handler(request: Request) -> Response:
            max_bytes = _get_container(request).settings.max_upload_bytes
            raw_length = request.headers.get("content-length")
            if raw_length and raw_length.isdigit() and int(raw_length) > max_bytes:
                logger.warning(
                    "Rejected %s with Content-Length %s over %d bytes",
                    request.url.path,
                    raw_length,
                    max_bytes,
                )
                raise _too_big(max_bytes)
            limited = Request(
                request.scope, _limited_receive(request.receive, max_bytes)
            )
            return await original_route_handler(limited)

        return limited_route_handler


router = APIRouter(prefix="/api/v1", tags=["outfits"], route_class=UploadLimitRoute)


def _get_container(request: Request) -> AppContainer:
    return request.app.state.container


async def require_session_id(x_session_id: str | None = Header(default=None)) -> str:
    """Ensure requests carry the session header."""
    if not x_session_id:
        logger.warning("Missing X-Session-ID header")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing X-Session-ID header.",
        )
    return x_session_id


@router.post("/generate")
async def generate(
    request: Request,
    data: str | None = Form(default=None),
    image: UploadFile | None = File(default=None),
) -> Response:
    """Suggest outfits for an event and render the first one on the photo."""
    container = _get_container(request)

    try:
        payload = GenerateRequest.model_validate_json(data or "")
    except PydanticValidationError as exc:
        logger.warning("Invalid generate payload: %s", exc.errors())
        raise ValidationError("Invalid JSON data provided.") from exc
    event = payload.to_event()

    if image is None:
        raise ValidationError("Invalid image file provided.")
    image_bytes = await image.read()
    if not image_bytes:
        raise ValidationError("Invalid image file provided.")
    mime_type = resolve_mime_type(image.filename, image.content_type, image_bytes)
    logger.info(
        "Received generation request for %s: %s (%d bytes, %s)",
        event,
        image.filename,
        len(image_bytes),
        mime_type,
    )

    generated, session_id = await container.outfit_service.generate_session(
        image_bytes, mime_type, event
    )
    return Response(
        content=generated.data,
        media_type=generated.mime_type,
        headers={SESSION_HEADER: session_id},
    )


@router.get("/styles")
async def list_styles(
    request: Request, session_id: str = Depends(require_session_id)
) -> list[str]:
    """Return the style suggestions of a session."""
    container = _get_container(request)
    return container.outfit_service.list_styles(session_id)


@router.post("/swap-style")
async def swap_style(
    body: SwapStyleRequest,
    request: Request,
    session_id: str = Depends(require_session_id),
) -> Response:
    """Render the session photo in another suggested style."""
    container = _get_container(request)
    generated = await container.outfit_service.swap_style(session_id, body.style_index)
    return Response(content=generated.data, media_type=generated.mime_type)


def _limited_receive(receive: Receive, max_bytes: int) -> Receive:
    received = 0

    async def limited() -> Message:
        nonlocal received
        message = await receive()
        if message["type"] == "http.request":
            received += len(message.get("body", b""))
            if received > max_bytes:
                logger.warning("Rejected request body over %d bytes", max_bytes)
                raise _too_big(max_bytes)
        return message

    return limited


def _too_big(max_bytes: int) -> HTTPException:
    megabytes = max_bytes / (1024 * 1024)
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=(
            "The uploaded file is too big. Please choose an image that is less "
            f"than {megabytes:g}MB in size."
        ),
    )
