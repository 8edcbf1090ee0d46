"""Event details supplied with a generation request."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EventDetails:
    """Describes the event a user is dressing for."""

    event_type: str
    venue: str
    theme: str
