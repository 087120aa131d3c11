"""ASGI entrypoint for the Event Snaps API."""

from event_snaps.api.app import create_app
from event_snaps.containers import build_container

app = create_app(build_container())
