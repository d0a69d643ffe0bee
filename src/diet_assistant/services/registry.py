"""Food registry owning simple and composite food records."""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from graphlib import CycleError, TopologicalSorter
from typing import Protocol

from diet_assistant.domain.errors import (
    DietAssistantError,
    DuplicateId,
    InvalidValue,
    PersistenceFailure,
    SelfReference,
    UnknownComponent,
    UnknownFood,
)
from diet_assistant.domain.foods import (
    CompositeFood,
    Food,
    FoodKind,
    SimpleFood,
    normalize_keywords,
)

_logger = logging.getLogger(__name__)


class FoodCatalogRepository(Protocol):
    """Persistence interface for the food catalog."""

    def load_foods(self) -> list[Food]:
        """Return every stored food, simple and composite."""

    def save_foods(
        self, simple: list[SimpleFood], composite: list[CompositeFood]
    ) -> None:
        """Overwrite the stored catalog."""


@dataclass
class FoodRegistry:
    """Resolves food ids and keeps composite calories in sync with components."""

    repository: FoodCatalogRepository | None = None
    modified: bool = field(default=False, init=False)
    _foods: dict[str, Food] = field(default_factory=dict, init=False, repr=False)

    def __len__(self) -> int:
        return len(self._foods)

    def __contains__(self, food_id: object) -> bool:
        return food_id in self._foods

    def add_simple(  # noqa: PLR0913
        self,
        food_id: str,
        keywords: Iterable[str],
        calories_per_serving: float,
        description: str = "",
        protein_g: float = 0.0,
        carbs_g: float = 0.0,
        fat_g: float = 0.0,
    ) -> SimpleFood:
        """Create a simple food and store it."""
        food_id = _require_id(food_id)
        if food_id in self._foods:
            raise DuplicateId(food_id)
        tags = _require_keywords(keywords)
        values = {
            "calories": calories_per_serving,
            "protein": protein_g,
            "carbs": carbs_g,
            "fat": fat_g,
        }
        for name, value in values.items():
            _require_non_negative(name, value)
        food = SimpleFood(
            id=food_id,
            keywords=tags,
            calories_per_serving=float(calories_per_serving),
            description=description,
            protein_g=float(protein_g),
            carbs_g=float(carbs_g),
            fat_g=float(fat_g),
        )
        self._foods[food_id] = food
        self.modified = True
        _logger.info("Added simple food %s", food_id)
        return food

    def add_composite(
        self, food_id: str, keywords: Iterable[str], components: Mapping[str, int]
    ) -> CompositeFood:
        """Create a composite food from foods already in the registry."""
        food_id = _require_id(food_id)
        if food_id in self._foods:
            raise DuplicateId(food_id)
        tags = _require_keywords(keywords)
        if not components:
            raise InvalidValue(
                "A composite food needs at least one component", "components"
            )
        if food_id in components:
            raise SelfReference(food_id)
        for component_id, servings in components.items():
            _require_servings(servings)
            if component_id not in self._foods:
                raise UnknownComponent(food_id, component_id)
        resolved = dict(components)
        calories, _ = _sum_components(resolved, self._foods)
        food = CompositeFood(
            id=food_id,
            keywords=tags,
            components=resolved,
            calories_per_serving=calories,
        )
        self._foods[food_id] = food
        self.modified = True
        _logger.info("Added composite food %s (%s calories)", food_id, calories)
        return food

    def get(self, food_id: str) -> Food | None:
        """Return a food by id, if present."""
        return self._foods.get(food_id)

    def list_foods(self) -> list[Food]:
        """Return all foods sorted by id."""
        return [self._foods[food_id] for food_id in sorted(self._foods)]

    def search(self, keywords: Iterable[str], match_all: bool = False) -> list[Food]:
        """Return foods tagged with all (or any) of the keywords, sorted by id."""
        wanted = [keyword for keyword in keywords if keyword]
        if not wanted:
            return [] if match_all else self.list_foods()
        results = []
        for food in self.list_foods():
            tags = set(food.keywords)
            if match_all:
                matched = all(keyword in tags for keyword in wanted)
            else:
                matched = any(keyword in tags for keyword in wanted)
            if matched:
                results.append(food)
        return results

    def recompute_composite(self, food_id: str) -> CompositeFood:
        """Re-derive a composite's calories from current component values."""
        food = self._foods.get(food_id)
        if food is None:
            raise UnknownFood(food_id)
        if food.kind is not FoodKind.COMPOSITE:
            raise InvalidValue(f"Food '{food_id}' is not a composite", "food_id")
        updated = _recomputed(food, self._foods)
        self._foods[food_id] = updated
        return updated

    def recompute_all(self) -> list[str]:
        """Recompute every composite, dependencies first; return evaluation order."""
        order = _composite_order(self._foods)
        for food_id in order:
            self._foods[food_id] = _recomputed(self._foods[food_id], self._foods)
        return order

    def load(self) -> int:
        """Replace the catalog with stored foods and recompute composites."""
        repository = self._require_repository()
        loaded = repository.load_foods()
        foods: dict[str, Food] = {}
        for food in loaded:
            if food.id in foods:
                raise PersistenceFailure(f"Duplicate food id '{food.id}' in catalog")
            foods[food.id] = food
        try:
            order = _composite_order(foods)
        except DietAssistantError as exc:
            raise PersistenceFailure(f"Invalid food catalog: {exc.message}") from exc
        for food_id in order:
            foods[food_id] = _recomputed(foods[food_id], foods)
        self._foods = foods
        self.modified = False
        _logger.info(
            "Loaded %s foods (%s composite)", len(foods), len(order)
        )
        return len(foods)

    def save(self) -> None:
        """Write the whole catalog to storage."""
        repository = self._require_repository()
        foods = self.list_foods()
        simple = [food for food in foods if food.kind is FoodKind.SIMPLE]
        composite = [food for food in foods if food.kind is FoodKind.COMPOSITE]
        repository.save_foods(simple, composite)
        self.modified = False
        _logger.info(
            "Saved %s simple and %s composite foods", len(simple), len(composite)
        )

    def _require_repository(self) -> FoodCatalogRepository:
        if self.repository is None:
            raise PersistenceFailure("No food catalog storage configured")
        return self.repository


def _composite_order(foods: Mapping[str, Food]) -> list[str]:
    """Return composite ids so every composite follows the composites it uses."""
    sorter: TopologicalSorter[str] = TopologicalSorter()
    for food_id in sorted(foods):
        food = foods[food_id]
        if food.kind is not FoodKind.COMPOSITE:
            continue
        if food_id in food.components:
            raise SelfReference(food_id)
        dependencies = [
            component_id
            for component_id in food.components
            if (component := foods.get(component_id)) is not None
            and component.kind is FoodKind.COMPOSITE
        ]
        sorter.add(food_id, *dependencies)
    try:
        return list(sorter.static_order())
    except CycleError as exc:
        cycle = " -> ".join(exc.args[1])
        raise InvalidValue(f"Composite cycle: {cycle}", "components") from exc


def _recomputed(food: CompositeFood, foods: Mapping[str, Food]) -> CompositeFood:
    calories, missing = _sum_components(food.components, foods)
    if missing:
        _logger.warning(
            "Composite %s references missing foods: %s", food.id, ", ".join(missing)
        )
    return replace(food, calories_per_serving=calories)


def _sum_components(
    components: Mapping[str, int], foods: Mapping[str, Food]
) -> tuple[float, list[str]]:
    total = 0.0
    missing: list[str] = []
    for component_id, servings in components.items():
        component = foods.get(component_id)
        if component is None:
            missing.append(component_id)
            continue
        total += component.calories_per_serving * servings
    return total, missing


def _require_id(food_id: str) -> str:
    if not isinstance(food_id, str) or not food_id.strip():
        raise InvalidValue("Food id must be a non-empty string", "food_id")
    return food_id.strip()


def _require_keywords(keywords: Iterable[str]) -> tuple[str, ...]:
    tags = normalize_keywords(keywords)
    if not tags:
        raise InvalidValue("At least one keyword is required", "keywords")
    return tags


def _require_non_negative(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidValue(f"{name} must be a number", name)
    if not math.isfinite(value) or value < 0:
        raise InvalidValue(f"{name} must be a non-negative number", name)


def _require_servings(servings: int) -> None:
    if isinstance(servings, bool) or not isinstance(servings, int) or servings <= 0:
        raise InvalidValue("Servings must be a positive integer", "servings")
