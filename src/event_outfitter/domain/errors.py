"""Error taxonomy for outfit generation."""


class OutfitterError(Exception):
    """Base error carrying a message that is safe to show to clients."""

    public_message = "Request failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message)

    def with_public_message(self, message: str) -> "OutfitterError":
        """Replace the client-facing message and return the same error."""
        self.public_message = message
        return self

    @property
    def detail(self) -> str:
        """Message returned in HTTP error bodies."""
        return self.public_message


class ValidationError(OutfitterError):
    """Client supplied malformed or out-of-range input."""

    public_message = "Invalid request."

    @property
    def detail(self) -> str:
        return str(self)


class InvalidStyleIndexError(ValidationError):
    """Requested style index is outside the session's style list."""

    public_message = "Invalid style index."

    def __init__(self, style_index: int, style_count: int) -> None:
        super().__init__(
            f"Style index {style_index} is outside [0, {style_count})."
        )
        self.style_index = style_index
        self.style_count = style_count


class SessionNotFoundError(OutfitterError):
    """No session exists for the supplied identifier."""

    public_message = "Session expired or invalid."

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session {session_id!r} not found.")
        self.session_id = session_id


class AIServiceError(OutfitterError):
    """The generation model failed or could not be reached."""

    public_message = "The image generation service failed."


class ResponseFormatError(AIServiceError):
    """The model answered, but not in the expected shape."""


class NoImageReturnedError(AIServiceError):
    """The model response contained no image payload."""


class NoStylesReturnedError(AIServiceError):
    """The model returned an empty style list."""

    public_message = "No style suggestions could be generated."
