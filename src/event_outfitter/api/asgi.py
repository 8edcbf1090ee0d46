"""ASGI entrypoint for the event outfitter API."""

from event_outfitter.api.app import create_app
from event_outfitter.containers import build_container

app = create_app(build_container())
