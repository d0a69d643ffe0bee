"""Pydantic models for the JSON files on disk."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from diet_assistant.domain.foods import CompositeFood, SimpleFood, normalize_keywords
from diet_assistant.domain.logs import LogEntry
from diet_assistant.domain.profile import UserProfile

Amount = Annotated[float, Field(ge=0, allow_inf_nan=False)]


def _clean_keywords(value: list[str]) -> list[str]:
    tags = normalize_keywords(value)
    if not tags:
        raise ValueError("at least one non-blank keyword is required")
    return list(tags)


class BasicFoodRecord(BaseModel):
    """Stored simple food."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    keywords: list[str] = Field(min_length=1)
    calories: Amount
    type: Literal["basic"] = "basic"
    description: str = ""
    proteins: Amount = 0.0
    carbs: Amount = 0.0
    fats: Amount = 0.0

    @field_validator("keywords")
    @classmethod
    def clean_keywords(cls, value: list[str]) -> list[str]:
        return _clean_keywords(value)

    @classmethod
    def from_food(cls, food: SimpleFood) -> "BasicFoodRecord":
        return cls(
            id=food.id,
            keywords=list(food.keywords),
            calories=food.calories_per_serving,
            description=food.description,
            proteins=food.protein_g,
            carbs=food.carbs_g,
            fats=food.fat_g,
        )

    def to_food(self) -> SimpleFood:
        return SimpleFood(
            id=self.id,
            keywords=tuple(self.keywords),
            calories_per_serving=self.calories,
            description=self.description,
            protein_g=self.proteins,
            carbs_g=self.carbs,
            fat_g=self.fats,
        )


class CompositeFoodRecord(BaseModel):
    """Stored composite food; ``calories`` is recomputed after loading."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    keywords: list[str] = Field(min_length=1)
    calories: Amount = 0.0
    type: Literal["composite"] = "composite"
    components: dict[str, PositiveInt] = Field(min_length=1)

    @field_validator("keywords")
    @classmethod
    def clean_keywords(cls, value: list[str]) -> list[str]:
        return _clean_keywords(value)

    @classmethod
    def from_food(cls, food: CompositeFood) -> "CompositeFoodRecord":
        return cls(
            id=food.id,
            keywords=list(food.keywords),
            calories=food.calories_per_serving,
            components=dict(food.components),
        )

    def to_food(self) -> CompositeFood:
        return CompositeFood(
            id=self.id,
            keywords=tuple(self.keywords),
            components=dict(self.components),
            calories_per_serving=self.calories,
        )


class LogEntryRecord(BaseModel):
    """Stored log entry."""

    model_config = ConfigDict(populate_by_name=True)

    food_id: str = Field(alias="foodId", min_length=1)
    servings: PositiveInt

    def to_entry(self) -> LogEntry:
        return LogEntry(food_id=self.food_id, servings=self.servings)


class ProfileRecord(BaseModel):
    """Stored user profile."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    gender: str = ""
    height: float = 0.0
    age: int = 0
    weight: float = 0.0
    activity_level: str = Field(default="", alias="activityLevel")
    calculation_method: str = Field(default="", alias="calculationMethod")

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "ProfileRecord":
        return cls(
            gender=profile.gender,
            height=profile.height_cm,
            age=profile.age_years,
            weight=profile.weight_kg,
            activity_level=profile.activity_level,
            calculation_method=profile.calculation_method,
        )

    def to_profile(self) -> UserProfile:
        return UserProfile(
            gender=self.gender,
            height_cm=self.height,
            age_years=self.age,
            weight_kg=self.weight,
            activity_level=self.activity_level,
            calculation_method=self.calculation_method,
        )
