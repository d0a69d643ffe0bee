"""Tests for container wiring."""

import asyncio

from diet_assistant.config import Settings
from diet_assistant.containers import build_container


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.log_book.registry is container.registry
    assert container.summary_service.profile_service is container.profile_service
    assert container.nutrition_service is not None
    asyncio.run(container.close_resources())


def test_lookup_disabled_without_api_key(settings: Settings) -> None:
    container = build_container(settings.model_copy(update={"fdc_api_key": None}))

    assert container.nutrition_service is None
    asyncio.run(container.close_resources())


def test_container_uses_data_dir(settings: Settings) -> None:
    container = build_container(settings)
    container.registry.add_simple("bread", ["grain"], 80)

    container.registry.save()

    assert (settings.data_dir / "basic_foods.json").exists()
    assert (settings.data_dir / "composite_foods.json").exists()
    asyncio.run(container.close_resources())
