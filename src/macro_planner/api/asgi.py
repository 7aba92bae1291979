"""ASGI entrypoint for the meal planner API."""

from macro_planner.api.app import create_app
from macro_planner.containers import build_container

app = create_app(build_container())
