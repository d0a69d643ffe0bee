"""Domain models for simple and composite foods."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class FoodKind(Enum):
    """Discriminant carried by every food; values match the stored ``type`` tag."""

    SIMPLE = "basic"
    COMPOSITE = "composite"


@dataclass(frozen=True)
class SimpleFood:
    """Leaf food with fixed per-serving nutrition."""

    id: str
    keywords: tuple[str, ...]
    calories_per_serving: float
    description: str = ""
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    kind: FoodKind = field(default=FoodKind.SIMPLE, init=False)


@dataclass(frozen=True)
class CompositeFood:
    """Food whose calories derive from other foods and their servings."""

    id: str
    keywords: tuple[str, ...]
    components: Mapping[str, int]
    calories_per_serving: float = 0.0
    kind: FoodKind = field(default=FoodKind.COMPOSITE, init=False)

    def __post_init__(self) -> None:
        # Read-only copy; only the registry derives new composites.
        object.__setattr__(self, "components", MappingProxyType(dict(self.components)))


Food = SimpleFood | CompositeFood


def normalize_keywords(raw: Iterable[str]) -> tuple[str, ...]:
    """Strip tags and drop blanks and repeats, keeping first-seen order."""
    seen: dict[str, None] = {}
    for keyword in raw:
        cleaned = keyword.strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return tuple(seen)


def describe_food(food: Food) -> str:
    """Return a human-readable description of a food."""
    match food.kind:
        case FoodKind.SIMPLE:
            lines = [
                food.description or food.id,
                "Nutritional info per serving:",
                f"- Calories: {food.calories_per_serving:g}",
                f"- Proteins: {food.protein_g:g}g",
                f"- Carbs: {food.carbs_g:g}g",
                f"- Fats: {food.fat_g:g}g",
            ]
        case FoodKind.COMPOSITE:
            lines = [
                "Composite food made of multiple ingredients:",
                *(
                    f"- {component_id} x{servings}"
                    for component_id, servings in food.components.items()
                ),
                f"Calories per serving: {food.calories_per_serving:g}",
            ]
    return "\n".join(lines)
