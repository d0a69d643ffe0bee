"""Calorie target formulas."""

from dataclasses import dataclass
from typing import Protocol

from diet_assistant.domain.errors import InvalidValue
from diet_assistant.domain.profile import (
    HARRIS_BENEDICT,
    MIFFLIN_ST_JEOR,
    ActivityLevel,
    UserProfile,
)

PROFILE_INCOMPLETE = 0.0

_ACTIVITY_FACTORS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}


def activity_factor(label: str) -> float:
    """Return the multiplier for a label; unknown labels count as sedentary."""
    try:
        level = ActivityLevel(label)
    except ValueError:
        level = ActivityLevel.SEDENTARY
    return _ACTIVITY_FACTORS[level]


class CalorieStrategy(Protocol):
    """Formula turning profile attributes into daily calories."""

    def calculate(  # noqa: PLR0913
        self,
        gender: str,
        height_cm: float,
        age_years: int,
        weight_kg: float,
        activity_level: str,
    ) -> float:
        """Return daily calories for the given attributes."""


@dataclass(frozen=True)
class HarrisBenedictStrategy:
    """Revised Harris-Benedict equation."""

    def calculate(  # noqa: PLR0913
        self,
        gender: str,
        height_cm: float,
        age_years: int,
        weight_kg: float,
        activity_level: str,
    ) -> float:
        if gender == "male":
            bmr = 88.362 + 13.397 * weight_kg + 4.799 * height_cm - 5.677 * age_years
        else:
            bmr = 447.593 + 9.247 * weight_kg + 3.098 * height_cm - 4.330 * age_years
        return bmr * activity_factor(activity_level)


@dataclass(frozen=True)
class MifflinStJeorStrategy:
    """Mifflin-St Jeor equation."""

    def calculate(  # noqa: PLR0913
        self,
        gender: str,
        height_cm: float,
        age_years: int,
        weight_kg: float,
        activity_level: str,
    ) -> float:
        offset = 5 if gender == "male" else -161
        bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age_years + offset
        return bmr * activity_factor(activity_level)


STRATEGIES: dict[str, CalorieStrategy] = {
    HARRIS_BENEDICT: HarrisBenedictStrategy(),
    MIFFLIN_ST_JEOR: MifflinStJeorStrategy(),
}


def get_strategy(method: str) -> CalorieStrategy:
    """Return the strategy registered under a method id."""
    strategy = STRATEGIES.get(method)
    if strategy is None:
        known = ", ".join(sorted(STRATEGIES))
        raise InvalidValue(
            f"Unknown calculation method '{method}' (expected one of: {known})",
            "calculation_method",
        )
    return strategy


def target_calories(
    profile: UserProfile, strategy: CalorieStrategy | None = None
) -> float:
    """Return the daily target, or PROFILE_INCOMPLETE when fields are missing."""
    if not profile.is_complete:
        return PROFILE_INCOMPLETE
    resolved = strategy or STRATEGIES.get(profile.calculation_method)
    if resolved is None:
        return PROFILE_INCOMPLETE
    return resolved.calculate(
        profile.gender,
        profile.height_cm,
        profile.age_years,
        profile.weight_kg,
        profile.activity_level,
    )
