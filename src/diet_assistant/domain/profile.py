"""Domain models for the user profile."""

from dataclasses import dataclass
from enum import Enum

HARRIS_BENEDICT = "harris-benedict"
MIFFLIN_ST_JEOR = "mifflin-st-jeor"


class ActivityLevel(Enum):
    """Self-reported exercise frequency."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very active"


@dataclass(frozen=True)
class UserProfile:
    """Attributes used to compute a daily calorie target."""

    gender: str = ""
    height_cm: float = 0.0
    age_years: int = 0
    weight_kg: float = 0.0
    activity_level: str = ""
    calculation_method: str = HARRIS_BENEDICT

    @property
    def is_complete(self) -> bool:
        """Return True when every field needed by a formula is set."""
        return bool(
            self.gender
            and self.activity_level
            and self.height_cm > 0
            and self.age_years > 0
            and self.weight_kg > 0
        )
