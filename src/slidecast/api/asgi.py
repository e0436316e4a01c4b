"""ASGI entrypoint for the slidecast API."""

from slidecast.api.app import create_app
from slidecast.containers import build_container

app = create_app(build_container())
