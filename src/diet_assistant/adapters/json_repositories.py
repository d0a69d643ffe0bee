"""JSON file repositories for the catalog, daily logs and profile."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

from pydantic import Field, TypeAdapter, ValidationError

from diet_assistant.adapters.records import (
    BasicFoodRecord,
    CompositeFoodRecord,
    LogEntryRecord,
    ProfileRecord,
)
from diet_assistant.domain.errors import PersistenceFailure
from diet_assistant.domain.foods import CompositeFood, Food, SimpleFood
from diet_assistant.domain.logs import LogEntry
from diet_assistant.domain.profile import UserProfile
from diet_assistant.services.logs import DailyLogRepository
from diet_assistant.services.profile import ProfileRepository
from diet_assistant.services.registry import FoodCatalogRepository

_logger = logging.getLogger(__name__)

_FoodRecord = Annotated[
    BasicFoodRecord | CompositeFoodRecord, Field(discriminator="type")
]
_CATALOG_ADAPTER = TypeAdapter(list[_FoodRecord])
_LOGS_ADAPTER = TypeAdapter(dict[str, list[LogEntryRecord]])


@dataclass
class JsonFoodCatalogRepository(FoodCatalogRepository):
    """Stores simple and composite foods in two JSON array files."""

    basic_path: Path
    composite_path: Path

    def load_foods(self) -> list[Food]:
        """Read both files; either may hold records of either type."""
        foods: list[Food] = []
        for path in (self.basic_path, self.composite_path):
            raw = _read_json(path, default=[])
            try:
                records = _CATALOG_ADAPTER.validate_python(raw)
            except ValidationError as exc:
                raise PersistenceFailure(
                    f"Invalid food records in {path}: {exc}"
                ) from exc
            foods.extend(record.to_food() for record in records)
        return foods

    def save_foods(
        self, simple: list[SimpleFood], composite: list[CompositeFood]
    ) -> None:
        """Overwrite both files."""
        _write_json(
            self.basic_path,
            [BasicFoodRecord.from_food(food).model_dump() for food in simple],
        )
        _write_json(
            self.composite_path,
            [CompositeFoodRecord.from_food(food).model_dump() for food in composite],
        )


@dataclass
class JsonDailyLogRepository(DailyLogRepository):
    """Stores every day's entries in one JSON object keyed by date."""

    path: Path

    def load_logs(self) -> dict[str, list[LogEntry]]:
        raw = _read_json(self.path, default={})
        try:
            records = _LOGS_ADAPTER.validate_python(raw)
        except ValidationError as exc:
            raise PersistenceFailure(
                f"Invalid daily log in {self.path}: {exc}"
            ) from exc
        return {
            day: [record.to_entry() for record in entries]
            for day, entries in records.items()
        }

    def save_logs(self, logs: dict[str, list[LogEntry]]) -> None:
        _write_json(
            self.path,
            {
                day: [
                    {"foodId": entry.food_id, "servings": entry.servings}
                    for entry in entries
                ]
                for day, entries in logs.items()
            },
        )


@dataclass
class JsonProfileRepository(ProfileRepository):
    """Stores the profile as a single JSON object."""

    path: Path

    def load_profile(self) -> UserProfile | None:
        raw = _read_json(self.path, default=None)
        if raw is None:
            return None
        try:
            record = ProfileRecord.model_validate(raw)
        except ValidationError as exc:
            raise PersistenceFailure(f"Invalid profile in {self.path}: {exc}") from exc
        return record.to_profile()

    def save_profile(self, profile: UserProfile) -> None:
        _write_json(
            self.path, ProfileRecord.from_profile(profile).model_dump(by_alias=True)
        )


def _read_json(path: Path, default: object) -> object:
    """Return parsed JSON, or the default when the file does not exist."""
    try:
        with path.open(encoding="utf-8") as handle:
            return json.load(handle)
    except FileNotFoundError:
        _logger.info("%s not found, starting empty", path)
        return default
    except (OSError, ValueError) as exc:
        raise PersistenceFailure(f"Could not read {path}: {exc}") from exc


def _write_json(path: Path, payload: object) -> None:
    """Write JSON to a sibling temp file, then move it over the target."""
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_name = handle.name
            json.dump(payload, handle, indent=2, ensure_ascii=False)
            handle.write("\n")
        os.replace(tmp_name, path)
    except (OSError, TypeError, ValueError) as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise PersistenceFailure(f"Could not write {path}: {exc}") from exc
    _logger.debug("Wrote %s", path)
