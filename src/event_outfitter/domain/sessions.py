"""Domain models for outfit sessions."""

from dataclasses import dataclass

from event_outfitter.domain.events import EventDetails


@dataclass(frozen=True)
class SessionRecord:
    """Inputs and style suggestions captured by a generate call.

    Records are never mutated after creation, so concurrent readers always see
    a complete record.
    """

    styles: tuple[str, ...]
    image_bytes: bytes
    mime_type: str
    request_params: EventDetails
