"""ASGI entrypoint for the coach trends API."""

from coach_trends.api.app import create_app
from coach_trends.containers import build_container

app = create_app(build_container())
