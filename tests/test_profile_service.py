"""Tests for the profile service."""

import pytest

from diet_assistant.domain.errors import InvalidValue, PersistenceFailure
from diet_assistant.domain.profile import HARRIS_BENEDICT, MIFFLIN_ST_JEOR, UserProfile
from diet_assistant.services.profile import ProfileService
from tests.conftest import InMemoryProfileRepository


def test_update_and_target(profile_service: ProfileService) -> None:
    profile_service.update("male", 180, 30, 80, "moderate")

    assert profile_service.modified is True
    assert profile_service.profile.calculation_method == HARRIS_BENEDICT
    assert profile_service.target_calories() == pytest.approx(2873.1296)


def test_target_zero_before_update(profile_service: ProfileService) -> None:
    assert profile_service.target_calories() == 0.0


@pytest.mark.parametrize(
    ("gender", "height", "age", "weight", "activity"),
    [
        ("other", 180, 30, 80, "moderate"),
        ("male", 0, 30, 80, "moderate"),
        ("male", 180, -1, 80, "moderate"),
        ("male", 180, 30, 1000, "moderate"),
        ("male", 180, 30, 80, "couch"),
    ],
)
def test_update_rejects_out_of_bounds(  # noqa: PLR0913
    profile_service: ProfileService,
    gender: str,
    height: float,
    age: int,
    weight: float,
    activity: str,
) -> None:
    with pytest.raises(InvalidValue):
        profile_service.update(gender, height, age, weight, activity)

    assert profile_service.profile == UserProfile()
    assert profile_service.modified is False


def test_method_change_keeps_attributes(profile_service: ProfileService) -> None:
    profile_service.update("female", 165, 40, 60, "light")

    profile_service.set_calculation_method(MIFFLIN_ST_JEOR)

    assert profile_service.profile.weight_kg == 60
    assert profile_service.target_calories() == pytest.approx(1270.25 * 1.375)


def test_method_change_rejects_unknown(profile_service: ProfileService) -> None:
    with pytest.raises(InvalidValue):
        profile_service.set_calculation_method("guesswork")


def test_method_survives_save_and_load() -> None:
    repository = InMemoryProfileRepository()
    service = ProfileService(repository)
    service.update("female", 165, 40, 60, "light")
    service.set_calculation_method(MIFFLIN_ST_JEOR)
    service.save()

    reloaded = ProfileService(repository)
    assert reloaded.load() is True

    assert reloaded.profile.calculation_method == MIFFLIN_ST_JEOR
    assert reloaded.modified is False


def test_load_without_method_uses_default() -> None:
    repository = InMemoryProfileRepository(
        UserProfile("male", 180, 30, 80, "moderate", calculation_method="")
    )
    service = ProfileService(repository, default_method=MIFFLIN_ST_JEOR)

    service.load()

    assert service.profile.calculation_method == MIFFLIN_ST_JEOR


def test_load_missing_profile(profile_service: ProfileService) -> None:
    assert profile_service.load() is False


def test_load_rejects_unknown_method() -> None:
    repository = InMemoryProfileRepository(
        UserProfile("male", 180, 30, 80, "moderate", calculation_method="magic")
    )
    service = ProfileService(repository)

    with pytest.raises(PersistenceFailure):
        service.load()

    assert service.profile == UserProfile()


def test_unknown_default_method_rejected() -> None:
    with pytest.raises(InvalidValue):
        ProfileService(default_method="magic")
