"""Shared test fixtures."""

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from diet_assistant.adapters.fdc_client import FdcClient
from diet_assistant.config import Settings
from diet_assistant.domain.foods import CompositeFood, Food, SimpleFood
from diet_assistant.domain.logs import LogEntry
from diet_assistant.domain.profile import UserProfile
from diet_assistant.services.logs import DailyLogRepository, LogBook
from diet_assistant.services.profile import ProfileRepository, ProfileService
from diet_assistant.services.registry import FoodCatalogRepository, FoodRegistry


@dataclass
class InMemoryFoodCatalogRepository(FoodCatalogRepository):
    """In-memory catalog repository for tests."""

    foods: list[Food] = field(default_factory=list)
    saved_simple: list[SimpleFood] | None = None
    saved_composite: list[CompositeFood] | None = None

    def load_foods(self) -> list[Food]:
        return list(self.foods)

    def save_foods(
        self, simple: list[SimpleFood], composite: list[CompositeFood]
    ) -> None:
        self.saved_simple = simple
        self.saved_composite = composite


@dataclass
class InMemoryDailyLogRepository(DailyLogRepository):
    """In-memory daily log repository for tests."""

    logs: dict[str, list[LogEntry]] = field(default_factory=dict)
    saved: dict[str, list[LogEntry]] | None = None

    def load_logs(self) -> dict[str, list[LogEntry]]:
        return {day: list(entries) for day, entries in self.logs.items()}

    def save_logs(self, logs: dict[str, list[LogEntry]]) -> None:
        self.saved = logs


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profile: UserProfile | None = None

    def load_profile(self) -> UserProfile | None:
        return self.profile

    def save_profile(self, profile: UserProfile) -> None:
        self.profile = profile


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with an in-memory search response."""

    search_payload: dict[str, object] = field(
        default_factory=lambda: {
            "foods": [
                {
                    "fdcId": 171705,
                    "description": "Avocados, raw, all commercial varieties",
                    "foodNutrients": [
                        {"nutrientName": "Energy", "value": 160, "unitName": "KCAL"},
                        {"nutrientName": "Protein", "value": 2.0, "unitName": "G"},
                        {"nutrientName": "Total lipid (fat)", "value": 14.7},
                    ],
                },
                {"fdcId": 1, "description": "Second match", "foodNutrients": []},
            ]
        }
    )
    search_calls: int = 0

    async def search_foods(self, query: str, page_size: int = 1) -> dict[str, object]:
        self.search_calls += 1
        return self.search_payload


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(data_dir=tmp_path, fdc_api_key="fdc-key")


@pytest.fixture
def catalog_repository() -> InMemoryFoodCatalogRepository:
    return InMemoryFoodCatalogRepository()


@pytest.fixture
def registry(catalog_repository: InMemoryFoodCatalogRepository) -> FoodRegistry:
    registry = FoodRegistry(catalog_repository)
    registry.add_simple("bread", ["grain", "breakfast"], 80, "Whole wheat bread")
    registry.add_simple("cheese", ["dairy", "lunch"], 110, "Cheddar", 7, 0.4, 9)
    return registry


@pytest.fixture
def log_repository() -> InMemoryDailyLogRepository:
    return InMemoryDailyLogRepository()


@pytest.fixture
def log_book(
    registry: FoodRegistry, log_repository: InMemoryDailyLogRepository
) -> LogBook:
    return LogBook(registry=registry, repository=log_repository)


@pytest.fixture
def profile_service() -> ProfileService:
    return ProfileService(InMemoryProfileRepository())
