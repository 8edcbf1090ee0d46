"""Shared test fixtures."""

import asyncio
import logging
from dataclasses import dataclass, field

import pytest

from event_outfitter.app_logging import configure_logging
from event_outfitter.config import Settings
from event_outfitter.containers import AppContainer
from event_outfitter.domain.events import EventDetails
from event_outfitter.domain.images import GeneratedImage
from event_outfitter.services.outfits import OutfitClient, OutfitService
from event_outfitter.services.session_store import InMemorySessionStore

WEDDING_STYLES = [
    "an ivory silk kurta with a gold brocade dupatta",
    "a pastel lehenga with mirror work and kolhapuri sandals",
    "a cream linen bandhgala with tan loafers",
    "a kanjeevaram saree in temple red with jasmine in the hair",
    "a mint green sherwani with a patterned stole",
]

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"photo-bytes"


@dataclass
class FakeOutfitClient(OutfitClient):
    """Fake outfit client returning canned styles and images."""

    styles: list[str] = field(default_factory=lambda: list(WEDDING_STYLES))
    mime_type: str = "image/png"
    style_error: Exception | None = None
    image_error: Exception | None = None
    delay: float = 0.0
    style_calls: list[EventDetails] = field(default_factory=list)
    image_calls: list[tuple[bytes, str, EventDetails, str]] = field(
        default_factory=list
    )

    async def describe_styles(
        self,
        event: EventDetails,
        *,
        photo_bytes: bytes | None = None,
        photo_mime_type: str | None = None,
    ) -> list[str]:
        self.style_calls.append(event)
        if self.style_error is not None:
            raise self.style_error
        return list(self.styles)

    async def generate_styled_image(
        self,
        photo_bytes: bytes,
        photo_mime_type: str,
        event: EventDetails,
        style_description: str,
    ) -> GeneratedImage:
        self.image_calls.append(
            (photo_bytes, photo_mime_type, event, style_description)
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.image_error is not None:
            raise self.image_error
        return GeneratedImage(
            data=f"image:{style_description}".encode(), mime_type=self.mime_type
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="test-key")


@pytest.fixture
def event() -> EventDetails:
    return EventDetails(
        event_type="Wedding", venue="Goa, India", theme="South style wedding"
    )


@pytest.fixture
def outfit_client() -> FakeOutfitClient:
    return FakeOutfitClient()


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def container(
    settings: Settings,
    outfit_client: FakeOutfitClient,
    session_store: InMemorySessionStore,
) -> AppContainer:
    outfit_service = OutfitService(
        client=outfit_client,
        store=session_store,
        timeout_seconds=settings.ai_timeout_seconds,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        outfit_client=outfit_client,
        session_store=session_store,
        outfit_service=outfit_service,
        close_resources=close_resources,
    )


@pytest.fixture
def app_logs(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> pytest.LogCaptureFixture:
    """Capture records from the application logger."""
    configure_logging()
    monkeypatch.setattr(logging.getLogger("event_outfitter"), "propagate", True)
    caplog.set_level(logging.INFO, logger="event_outfitter")
    return caplog
