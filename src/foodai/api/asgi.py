"""ASGI entrypoint for the FoodAI tracker API."""

from foodai.api.app import create_app
from foodai.containers import build_container

app = create_app(build_container())
