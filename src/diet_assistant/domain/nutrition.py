"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutrientValue:
    """Single nutrient reading from an online lookup."""

    name: str
    value: float
    unit: str


@dataclass(frozen=True)
class OnlineFood:
    """First matching record from FoodData Central."""

    fdc_id: int
    description: str
    nutrients: list[NutrientValue]


@dataclass(frozen=True)
class CalorieSummary:
    """Consumed calories for a day compared with the profile target."""

    day: str
    consumed: float
    target: float
    difference: float
    percent: float
    status: str
