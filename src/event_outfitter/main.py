"""Command line entrypoint that serves the API with uvicorn."""

import uvicorn

from event_outfitter.config import Settings


def main() -> None:
    """Run the API server on the configured host and port."""
    settings = Settings()
    uvicorn.run(
        "event_outfitter.api.asgi:app",
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=60,
    )


if __name__ == "__main__":
    main()
