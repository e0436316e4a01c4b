"""Tests for container wiring."""

import asyncio

from slidecast.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.session_service.end_mode == "advisory"
    assert container.deck_service.allowed_extensions == {".pdf", ".jpg"}
    asyncio.run(container.close_resources())
