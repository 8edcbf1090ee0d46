"""Outfit session orchestration."""

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Protocol, TypeVar

from event_outfitter.domain.errors import (
    AIServiceError,
    InvalidStyleIndexError,
    NoStylesReturnedError,
    SessionNotFoundError,
)
from event_outfitter.domain.events import EventDetails
from event_outfitter.domain.images import GeneratedImage
from event_outfitter.domain.sessions import SessionRecord
from event_outfitter.services.session_store import SessionStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

STYLES_FAILED_MESSAGE = "Failed to get style suggestions."
INITIAL_IMAGE_FAILED_MESSAGE = "Failed to generate initial image."
SWAPPED_IMAGE_FAILED_MESSAGE = "Failed to generate swapped image."


class OutfitClient(Protocol):
    """Interface for the external generation model."""

    async def describe_styles(
        self,
        event: EventDetails,
        *,
        photo_bytes: bytes | None = None,
        photo_mime_type: str | None = None,
    ) -> list[str]:
        """Return outfit descriptions suited to the event."""

    async def generate_styled_image(
        self,
        photo_bytes: bytes,
        photo_mime_type: str,
        event: EventDetails,
        style_description: str,
    ) -> GeneratedImage:
        """Return the photo re-rendered in the described outfit."""


@dataclass
class OutfitService:
    """Creates sessions and renders outfits for them."""

    client: OutfitClient
    store: SessionStore
    timeout_seconds: float | None = None

    async def generate_session(
        self, image_bytes: bytes, mime_type: str, event: EventDetails
    ) -> tuple[GeneratedImage, str]:
        """Suggest styles, open a session and render the first style.

        The session is discarded again when the first render fails or is
        cancelled, so an identifier is only ever addressable once it has been
        handed out.
        """
        try:
            styles = await self._call(
                self.client.describe_styles(
                    event, photo_bytes=image_bytes, photo_mime_type=mime_type
                )
            )
        except AIServiceError as exc:
            logger.exception("Failed to get style suggestions for %s", event)
            raise exc.with_public_message(STYLES_FAILED_MESSAGE)
        if not styles:
            logger.error("No style suggestions returned for %s", event)
            raise NoStylesReturnedError("The model returned no styles")

        record = SessionRecord(
            styles=tuple(styles),
            image_bytes=image_bytes,
            mime_type=mime_type,
            request_params=event,
        )
        session_id = self.store.create(record)
        logger.info("Created session %s with %d styles", session_id, len(styles))
        try:
            image = await self._render(record, 0)
        except AIServiceError as exc:
            self.store.discard(session_id)
            logger.exception(
                "Failed to generate initial image for session %s (%s), "
                "session discarded",
                session_id,
                event,
            )
            raise exc.with_public_message(INITIAL_IMAGE_FAILED_MESSAGE)
        except BaseException:
            self.store.discard(session_id)
            logger.warning(
                "Initial image for session %s interrupted, session discarded",
                session_id,
            )
            raise
        return image, session_id

    def list_styles(self, session_id: str) -> list[str]:
        """Return the session's styles in their original order."""
        return list(self._get(session_id).styles)

    async def swap_style(self, session_id: str, style_index: int) -> GeneratedImage:
        """Render the stored photo in another of the session's styles."""
        record = self._get(session_id)
        if not 0 <= style_index < len(record.styles):
            logger.warning(
                "Invalid style index %d for session %s with %d styles",
                style_index,
                session_id,
                len(record.styles),
            )
            raise InvalidStyleIndexError(style_index, len(record.styles))
        try:
            return await self._render(record, style_index)
        except AIServiceError as exc:
            logger.exception(
                "Failed to generate swapped image for session %s, style %d (%s)",
                session_id,
                style_index,
                record.request_params,
            )
            raise exc.with_public_message(SWAPPED_IMAGE_FAILED_MESSAGE)

    def _get(self, session_id: str) -> SessionRecord:
        record = self.store.get(session_id)
        if record is None:
            logger.warning("Session %s not found", session_id)
            raise SessionNotFoundError(session_id)
        return record

    async def _render(self, record: SessionRecord, style_index: int) -> GeneratedImage:
        return await self._call(
            self.client.generate_styled_image(
                record.image_bytes,
                record.mime_type,
                record.request_params,
                record.styles[style_index],
            )
        )

    async def _call(self, call: Awaitable[T]) -> T:
        """Await a model call under the configured deadline."""
        try:
            return await asyncio.wait_for(call, timeout=self.timeout_seconds)
        except TimeoutError as exc:
            raise AIServiceError(
                f"Model call exceeded {self.timeout_seconds} seconds"
            ) from exc
