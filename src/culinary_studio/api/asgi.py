"""ASGI entrypoint for the culinary studio API."""

from culinary_studio.api.app import create_app
from culinary_studio.containers import build_container

app = create_app(build_container())
