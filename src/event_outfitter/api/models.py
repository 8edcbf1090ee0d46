"""Request payloads for the outfit API."""

from pydantic import BaseModel, ConfigDict, Field

from event_outfitter.domain.events import EventDetails


class GenerateRequest(BaseModel):
    """JSON sent in the ``data`` field of a generate upload."""

    model_config = ConfigDict(populate_by_name=True)

    event_type: str = Field(alias="eventType")
    venue: str
    theme: str

    def to_event(self) -> EventDetails:
        return EventDetails(
            event_type=self.event_type, venue=self.venue, theme=self.theme
        )


class SwapStyleRequest(BaseModel):
    """Body of a swap-style request."""

    model_config = ConfigDict(populate_by_name=True)

    style_index: int = Field(alias="styleIndex", strict=True)
