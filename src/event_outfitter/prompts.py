"""Prompt templates and response parsing for the generation model."""

import json

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from event_outfitter.domain.errors import ResponseFormatError
from event_outfitter.domain.events import EventDetails

_STYLE_LIST = TypeAdapter(list[str])

STYLE_PROMPT_TEMPLATE = (
    "Based on the person in the user's photo, identify their likely gender. "
    "Then, for an event '{event_type}' at location '{venue}' with the theme "
    "'{theme}', generate a JSON array of {count} distinct and creative fashion "
    "apparel descriptions for them. Be specific and evocative. "
    'Example for a man: ["a crisp white linen shirt with tailored khaki shorts '
    'and leather sandals", "a lightweight navy blazer over a crew-neck t-shirt '
    'and chinos"]. '
    'Example for a woman: ["a vibrant tropical print maxi dress with woven '
    'sandals", "bohemian chic with a crochet top and a flowy tiered skirt"].'
)

IMAGE_PROMPT_TEMPLATE = """
A photorealistic close-up portrait of the people from the provided image.
Place them in a new context for a '{event_type}' at '{venue}' with the theme '{theme}'.

**CRITICAL INSTRUCTION:** Dress the people in a very specific, stylish, high-fashion outfit that perfectly matches this detailed description: {style}.

Ensure the background, lighting, and mood are photorealistic and match the event.
Preserve the people's faces and features from the original photo. Style and pose can be changed to fit the outfit.
The final image should be captured with an 85mm portrait lens with a soft, blurred background.
"""


def build_style_prompt(event: EventDetails, count: int) -> str:
    """Return the prompt asking for a JSON array of outfit descriptions."""
    return STYLE_PROMPT_TEMPLATE.format(
        event_type=event.event_type,
        venue=event.venue,
        theme=event.theme,
        count=count,
    )


def build_image_prompt(event: EventDetails, style_description: str) -> str:
    """Return the image-to-image prompt for a single outfit."""
    return IMAGE_PROMPT_TEMPLATE.format(
        event_type=event.event_type,
        venue=event.venue,
        theme=event.theme,
        style=style_description,
    )


def parse_style_list(text: str) -> list[str]:
    """Extract the JSON string array embedded in a model response.

    The span from the first ``[`` to the last ``]`` is parsed; anything around
    it (prose, markdown fences) is ignored.
    """
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end == -1 or end < start:
        raise ResponseFormatError("Could not find a JSON array in the model response")
    span = text[start : end + 1]
    try:
        return _STYLE_LIST.validate_python(json.loads(span))
    except (json.JSONDecodeError, PydanticValidationError) as exc:
        raise ResponseFormatError(
            f"Failed to parse style suggestions: {exc}"
        ) from exc
