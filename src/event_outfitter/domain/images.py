"""Generated image payloads."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GeneratedImage:
    """Binary image returned by the generation model."""

    data: bytes
    mime_type: str
