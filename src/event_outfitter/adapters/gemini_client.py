"""Gemini API client for outfit suggestions and image generation."""

import logging
from dataclasses import dataclass, field

import httpx
from google import genai
from google.genai import errors, types

from event_outfitter.domain.errors import (
    AIServiceError,
    NoImageReturnedError,
    ResponseFormatError,
)
from event_outfitter.domain.events import EventDetails
from event_outfitter.domain.images import GeneratedImage
from event_outfitter.prompts import (
    build_image_prompt,
    build_style_prompt,
    parse_style_list,
)
from event_outfitter.services.outfits import OutfitClient

logger = logging.getLogger(__name__)

_UNBLOCKED_CATEGORIES = (
    types.HarmCategory.HARM_CATEGORY_HARASSMENT,
    types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
)


def _safety_settings() -> list[types.SafetySetting]:
    return [
        types.SafetySetting(
            category=category, threshold=types.HarmBlockThreshold.BLOCK_NONE
        )
        for category in _UNBLOCKED_CATEGORIES
    ]


@dataclass
class GeminiOutfitClient(OutfitClient):
    """Outfit client backed by the Gemini API."""

    client: genai.Client
    text_model: str = "gemini-2.5-flash"
    image_model: str = "gemini-2.5-flash-image-preview"
    style_count: int = 5
    safety_settings: list[types.SafetySetting] = field(
        default_factory=_safety_settings
    )

    @classmethod
    def create(
        cls,
        api_key: str,
        *,
        text_model: str,
        image_model: str,
        style_count: int,
    ) -> "GeminiOutfitClient":
        """Create a Gemini outfit client."""
        return cls(
            client=genai.Client(api_key=api_key),
            text_model=text_model,
            image_model=image_model,
            style_count=style_count,
        )

    async def describe_styles(
        self,
        event: EventDetails,
        *,
        photo_bytes: bytes | None = None,
        photo_mime_type: str | None = None,
    ) -> list[str]:
        """Ask the text model for outfit descriptions and parse the JSON array."""
        prompt = build_style_prompt(event, self.style_count)
        parts = [types.Part.from_text(text=prompt)]
        if photo_bytes and photo_mime_type:
            parts.append(
                types.Part.from_bytes(data=photo_bytes, mime_type=photo_mime_type)
            )
        logger.debug("Style suggestion prompt: %s", prompt)

        response = await self._generate(
            model=self.text_model,
            contents=[types.Content(role="user", parts=parts)],
            config=None,
        )
        text = "".join(part.text for part in _response_parts(response) if part.text)
        if not text:
            raise ResponseFormatError("No text content found in Gemini response")
        logger.info("Received style suggestions (%d chars)", len(text))
        return parse_style_list(text)

    async def generate_styled_image(
        self,
        photo_bytes: bytes,
        photo_mime_type: str,
        event: EventDetails,
        style_description: str,
    ) -> GeneratedImage:
        """Re-render the photo in the described outfit."""
        prompt = build_image_prompt(event, style_description)
        parts = [
            types.Part.from_text(text=prompt),
            types.Part.from_bytes(data=photo_bytes, mime_type=photo_mime_type),
        ]
        config = types.GenerateContentConfig(
            response_modalities=["IMAGE", "TEXT"],
            safety_settings=self.safety_settings,
        )
        response = await self._generate(
            model=self.image_model,
            contents=[types.Content(role="user", parts=parts)],
            config=config,
        )
        for part in _response_parts(response):
            inline = part.inline_data
            if inline is not None and inline.data:
                mime_type = inline.mime_type or "image/png"
                logger.info(
                    "Generated %s image of %d bytes", mime_type, len(inline.data)
                )
                return GeneratedImage(data=inline.data, mime_type=mime_type)
        raise NoImageReturnedError("No image data found in Gemini response")

    async def close(self) -> None:
        """Close the underlying async HTTP session."""
        await self.client.aio.aclose()

    async def _generate(
        self,
        *,
        model: str,
        contents: list[types.Content],
        config: types.GenerateContentConfig | None,
    ) -> types.GenerateContentResponse:
        try:
            return await self.client.aio.models.generate_content(
                model=model, contents=contents, config=config
            )
        except errors.APIError as exc:
            raise AIServiceError(
                f"Gemini request to {model} failed with status {exc.code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise AIServiceError(f"Gemini request to {model} failed: {exc}") from exc


def _response_parts(response: types.GenerateContentResponse) -> list[types.Part]:
    """Return the parts of the first candidate, or an empty list."""
    if not response.candidates:
        return []
    content = response.candidates[0].content
    if content is None or not content.parts:
        return []
    return list(content.parts)
