"""ASGI entrypoint for the Pixel Quest API."""

from pixel_quest.api.app import create_app
from pixel_quest.containers import build_container

app = create_app(build_container())
