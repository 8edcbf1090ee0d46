"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from event_outfitter.adapters.gemini_client import GeminiOutfitClient
from event_outfitter.config import Settings
from event_outfitter.services.outfits import OutfitClient, OutfitService
from event_outfitter.services.session_store import InMemorySessionStore, SessionStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    outfit_client: OutfitClient
    session_store: SessionStore
    outfit_service: OutfitService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    outfit_client = GeminiOutfitClient.create(
        resolved_settings.gemini_api_key,
        text_model=resolved_settings.gemini_text_model,
        image_model=resolved_settings.gemini_image_model,
        style_count=resolved_settings.style_count,
    )
    session_store = InMemorySessionStore(capacity=resolved_settings.session_capacity)
    outfit_service = OutfitService(
        client=outfit_client,
        store=session_store,
        timeout_seconds=resolved_settings.ai_timeout_seconds,
    )

    async def close_resources() -> None:
        await outfit_client.close()

    return AppContainer(
        settings=resolved_settings,
        outfit_client=outfit_client,
        session_store=session_store,
        outfit_service=outfit_service,
        close_resources=close_resources,
    )
