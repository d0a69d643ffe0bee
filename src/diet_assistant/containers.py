"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from diet_assistant.adapters.fdc_client import HttpxFdcClient
from diet_assistant.adapters.json_repositories import (
    JsonDailyLogRepository,
    JsonFoodCatalogRepository,
    JsonProfileRepository,
)
from diet_assistant.config import Settings, lookup_enabled
from diet_assistant.services.cache import InMemoryCache
from diet_assistant.services.logs import CommandHistory, LogBook
from diet_assistant.services.nutrition import NutritionLookupService
from diet_assistant.services.profile import ProfileService
from diet_assistant.services.registry import FoodRegistry
from diet_assistant.services.summary import SummaryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    registry: FoodRegistry
    log_book: LogBook
    profile_service: ProfileService
    summary_service: SummaryService
    nutrition_service: NutritionLookupService | None
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    registry = FoodRegistry(
        JsonFoodCatalogRepository(
            basic_path=resolved_settings.data_path(resolved_settings.basic_foods_file),
            composite_path=resolved_settings.data_path(
                resolved_settings.composite_foods_file
            ),
        )
    )
    log_book = LogBook(
        registry=registry,
        repository=JsonDailyLogRepository(
            resolved_settings.data_path(resolved_settings.daily_logs_file)
        ),
        history=CommandHistory(resolved_settings.undo_history_limit),
    )
    profile_service = ProfileService(
        repository=JsonProfileRepository(
            resolved_settings.data_path(resolved_settings.profile_file)
        ),
        default_method=resolved_settings.default_calculation_method,
    )
    summary_service = SummaryService(log_book, profile_service)

    fdc_client: HttpxFdcClient | None = None
    nutrition_service: NutritionLookupService | None = None
    if lookup_enabled(resolved_settings.fdc_api_key):
        fdc_client = HttpxFdcClient.create(
            api_key=resolved_settings.fdc_api_key or "",
            base_url=resolved_settings.fdc_base_url,
        )
        nutrition_service = NutritionLookupService(
            fdc_client=fdc_client, cache=InMemoryCache()
        )

    async def close_resources() -> None:
        if fdc_client is not None:
            await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        registry=registry,
        log_book=log_book,
        profile_service=profile_service,
        summary_service=summary_service,
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )
