"""User profile service."""

import logging
from dataclasses import dataclass, field, replace
from typing import Literal, Protocol

from pydantic import BaseModel, Field, ValidationError

from diet_assistant.domain.errors import InvalidValue, PersistenceFailure
from diet_assistant.domain.profile import HARRIS_BENEDICT, UserProfile
from diet_assistant.services.calories import (
    STRATEGIES,
    get_strategy,
    target_calories,
)

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for the user profile."""

    def load_profile(self) -> UserProfile | None:
        """Return the stored profile, if any."""

    def save_profile(self, profile: UserProfile) -> None:
        """Overwrite the stored profile."""


class ProfileUpdate(BaseModel):
    """Bounds checked before a profile change is accepted."""

    gender: Literal["male", "female"]
    height_cm: float = Field(ge=50, le=272)
    age_years: int = Field(ge=1, le=130)
    weight_kg: float = Field(ge=2, le=650)
    activity_level: Literal["sedentary", "light", "moderate", "active", "very active"]


@dataclass
class ProfileService:
    """Holds the profile and the selected calorie formula."""

    repository: ProfileRepository | None = None
    default_method: str = HARRIS_BENEDICT
    profile: UserProfile = field(init=False)
    modified: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        get_strategy(self.default_method)
        self.profile = UserProfile(calculation_method=self.default_method)

    def update(  # noqa: PLR0913
        self,
        gender: str,
        height_cm: float,
        age_years: int,
        weight_kg: float,
        activity_level: str,
    ) -> UserProfile:
        """Validate and store new profile attributes."""
        try:
            values = ProfileUpdate(
                gender=gender,
                height_cm=height_cm,
                age_years=age_years,
                weight_kg=weight_kg,
                activity_level=activity_level,
            )
        except ValidationError as exc:
            error = exc.errors()[0]
            name = ".".join(str(part) for part in error["loc"])
            raise InvalidValue(f"{name}: {error['msg']}", name) from exc
        self.profile = UserProfile(
            **values.model_dump(),
            calculation_method=self.profile.calculation_method,
        )
        self.modified = True
        return self.profile

    def set_calculation_method(self, method: str) -> None:
        """Select the formula used for the calorie target."""
        get_strategy(method)
        self.profile = replace(self.profile, calculation_method=method)
        self.modified = True

    def target_calories(self) -> float:
        """Return the daily target; zero while the profile is incomplete."""
        return target_calories(
            self.profile, get_strategy(self.profile.calculation_method)
        )

    def load(self) -> bool:
        """Load the stored profile; returns False when none exists."""
        repository = self._require_repository()
        stored = repository.load_profile()
        if stored is None:
            _logger.info("No stored profile")
            return False
        method = stored.calculation_method or self.default_method
        if method not in STRATEGIES:
            raise PersistenceFailure(
                f"Unknown calculation method '{method}' in profile"
            )
        self.profile = replace(stored, calculation_method=method)
        self.modified = False
        return True

    def save(self) -> None:
        """Write the profile to storage."""
        self._require_repository().save_profile(self.profile)
        self.modified = False

    def _require_repository(self) -> ProfileRepository:
        if self.repository is None:
            raise PersistenceFailure("No profile storage configured")
        return self.repository
