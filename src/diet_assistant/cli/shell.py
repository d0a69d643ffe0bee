"""Interactive menu shell over the registry, log book and profile."""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from diet_assistant.containers import AppContainer
from diet_assistant.domain.errors import DietAssistantError, InvalidValue
from diet_assistant.domain.foods import Food, FoodKind, describe_food
from diet_assistant.domain.logs import validate_day
from diet_assistant.domain.profile import HARRIS_BENEDICT, MIFFLIN_ST_JEOR
from diet_assistant.menu_commands import (
    FoodMenu,
    LogMenu,
    MainMenu,
    ProfileMenu,
    menu_lines,
    resolve_choice,
)

_logger = logging.getLogger(__name__)

_BAR_WIDTH = 40


@dataclass
class Shell:
    """Menu-driven presentation layer; holds the active date for log calls."""

    container: AppContainer
    day: str
    read: Callable[[str], str] = input
    write: Callable[[str], None] = print
    run_async: Callable[[Coroutine[Any, Any, Any]], Any] = asyncio.run
    running: bool = field(default=True, init=False)

    def __post_init__(self) -> None:
        validate_day(self.day)

    def initialize(self) -> None:
        """Load every store, reporting failures without stopping."""
        loaders = (
            ("food database", self.container.registry.load),
            ("daily log", self.container.log_book.load),
            ("user profile", self.container.profile_service.load),
        )
        for name, load in loaders:
            try:
                load()
            except DietAssistantError as exc:
                self.write(f"Error loading {name}: {exc.message}")

    def run(self, load: bool = True) -> None:
        """Run the main menu loop until the user exits or input ends."""
        if load:
            self.initialize()
        handlers: dict[Enum, Callable[[], None]] = {
            MainMenu.FOODS: self._food_menu,
            MainMenu.LOG: self._log_menu,
            MainMenu.PROFILE: self._profile_menu,
            MainMenu.SAVE_ALL: self.save_all,
            MainMenu.EXIT: self._exit,
        }
        try:
            while self.running:
                choice = self._choose("Diet Assistant", MainMenu)
                if choice is not None:
                    handlers[choice]()
        except EOFError:
            self.write("")

    def save_all(self) -> bool:
        """Save every store; returns True when all writes succeed."""
        savers = (
            ("food database", self.container.registry.save),
            ("daily log", self.container.log_book.save),
            ("user profile", self.container.profile_service.save),
        )
        success = True
        for name, save in savers:
            try:
                save()
            except DietAssistantError as exc:
                self.write(f"Error saving {name}: {exc.message}")
                success = False
        if success:
            self.write("All data saved successfully.")
        return success

    def _exit(self) -> None:
        container = self.container
        unsaved = (
            container.registry.modified
            or container.log_book.modified
            or container.profile_service.modified
        )
        if unsaved and self._ask("Save changes before exiting? (y/n): ").lower() == "y":
            self.save_all()
        self.running = False

    def _choose(self, title: str, menu: type[Enum]) -> Enum | None:
        self.write(f"\n=== {title} ===")
        for line in menu_lines(menu):
            self.write(line)
        choice = resolve_choice(menu, self._ask("Choice: "))
        if choice is None:
            self.write("Invalid choice.")
        return choice

    def _submenu(
        self, title: str, menu: type[Enum], handlers: dict[Enum, Callable[[], None]]
    ) -> None:
        while True:
            choice = self._choose(title, menu)
            if choice is None:
                continue
            if choice.name == "BACK":
                return
            try:
                handlers[choice]()
            except DietAssistantError as exc:
                self.write(f"Error: {exc.message}")

    def _ask(self, prompt: str) -> str:
        return self.read(prompt).strip()

    def _save(self, name: str, save: Callable[[], None]) -> None:
        save()
        self.write(f"{name} saved.")

    # Foods

    def _food_menu(self) -> None:
        self._submenu(
            "Food Database",
            FoodMenu,
            {
                FoodMenu.LIST: self.list_foods,
                FoodMenu.SEARCH: self.search_foods,
                FoodMenu.DETAILS: self.food_details,
                FoodMenu.ADD_SIMPLE: self.add_simple_food,
                FoodMenu.ADD_COMPOSITE: self.add_composite_food,
                FoodMenu.SAVE: lambda: self._save(
                    "Food database", self.container.registry.save
                ),
                FoodMenu.LOOKUP: self.lookup_online,
            },
        )

    def list_foods(self) -> None:
        self._print_foods(self.container.registry.list_foods())

    def search_foods(self) -> None:
        keywords = _split_keywords(self._ask("Keywords (comma separated): "))
        match_all = self._ask("Match all keywords? (y/n): ").lower() == "y"
        self._print_foods(self.container.registry.search(keywords, match_all))

    def food_details(self) -> None:
        food_id = self._ask("Food id: ")
        food = self.container.registry.get(food_id)
        if food is None:
            self.write(f"Food '{food_id}' not found.")
            return
        keywords = ", ".join(food.keywords)
        self.write(f"{food.id} [{food.kind.value}] keywords: {keywords}")
        self.write(describe_food(food))

    def add_simple_food(self) -> None:
        food = self.container.registry.add_simple(
            self._ask("Food id: "),
            _split_keywords(self._ask("Keywords (comma separated): ")),
            _parse_float(self._ask("Calories per serving: "), "calories"),
            description=self._ask("Description: "),
            protein_g=_parse_float(self._ask("Proteins (g): "), "protein"),
            carbs_g=_parse_float(self._ask("Carbs (g): "), "carbs"),
            fat_g=_parse_float(self._ask("Fats (g): "), "fat"),
        )
        self.write(f"Added '{food.id}'.")

    def add_composite_food(self) -> None:
        food_id = self._ask("Composite food id: ")
        keywords = _split_keywords(self._ask("Keywords (comma separated): "))
        components: dict[str, int] = {}
        self.write("Enter components as '<food id> <servings>', blank line to finish.")
        while line := self._ask("Component: "):
            component_id, _, servings = line.rpartition(" ")
            if not component_id:
                self.write("Expected '<food id> <servings>'.")
                continue
            components[component_id.strip()] = _parse_int(servings, "servings")
        food = self.container.registry.add_composite(food_id, keywords, components)
        self.write(
            f"Created '{food.id}' with "
            f"{food.calories_per_serving:g} calories per serving."
        )

    def lookup_online(self) -> None:
        service = self.container.nutrition_service
        if service is None:
            self.write("Online search is disabled: set DIET_FDC_API_KEY to enable it.")
            return
        result = self.run_async(service.search(self._ask("Food to search: ")))
        if result is None:
            self.write("No results found.")
            return
        self.write(f"{result.description} (FDC id {result.fdc_id})")
        if not result.nutrients:
            self.write("  (No nutrient data available)")
        for nutrient in result.nutrients:
            self.write(f"  - {nutrient.name}: {nutrient.value:g} {nutrient.unit}")

    def _print_foods(self, foods: list[Food]) -> None:
        if not foods:
            self.write("No foods found.")
            return
        for food in foods:
            marker = "*" if food.kind is FoodKind.COMPOSITE else " "
            self.write(
                f"{marker} {food.id}: {food.calories_per_serving:g} cal "
                f"[{', '.join(food.keywords)}]"
            )

    # Daily log

    def _log_menu(self) -> None:
        self._submenu(
            f"Daily Log ({self.day})",
            LogMenu,
            {
                LogMenu.VIEW: self.view_log,
                LogMenu.ADD: self.add_to_log,
                LogMenu.REMOVE: self.remove_from_log,
                LogMenu.UNDO: self.undo,
                LogMenu.CHANGE_DATE: self.change_date,
                LogMenu.SUMMARY: self.calorie_summary,
                LogMenu.DATES: self.list_dates,
                LogMenu.SAVE: lambda: self._save(
                    "Daily log", self.container.log_book.save
                ),
            },
        )

    def view_log(self) -> None:
        log_book = self.container.log_book
        entries = log_book.entries(self.day)
        if not entries:
            self.write(f"No entries for {self.day}.")
            return
        for position, entry in enumerate(entries, start=1):
            food = self.container.registry.get(entry.food_id)
            calories = food.calories_per_serving * entry.servings if food else 0.0
            self.write(
                f"{position}. {entry.food_id} x{entry.servings} = {calories:g} cal"
            )
        self.write(f"Total: {log_book.total_calories(self.day):g} cal")

    def add_to_log(self) -> None:
        food_id = self._ask("Food id: ")
        servings = _parse_int(self._ask("Servings: "), "servings")
        self.container.log_book.add_food(self.day, food_id, servings)
        self.write(f"Logged {servings} x '{food_id}' on {self.day}.")

    def remove_from_log(self) -> None:
        self.view_log()
        position = _parse_int(self._ask("Entry number to remove: "), "index")
        entry = self.container.log_book.remove_food(self.day, position - 1)
        self.write(f"Removed '{entry.food_id}'.")

    def undo(self) -> None:
        command = self.container.log_book.undo()
        self.write(f"Last action on {command.day} undone.")

    def change_date(self) -> None:
        self.day = validate_day(self._ask("New date (YYYY-MM-DD): "))
        self.write(f"Current date set to {self.day}.")

    def list_dates(self) -> None:
        dates = self.container.log_book.dates()
        self.write("\n".join(dates) if dates else "No logged dates.")

    def calorie_summary(self) -> None:
        summary = self.container.summary_service.for_day(self.day)
        self.write(f"Calorie summary for {summary.day}")
        self.write(f"Total calories consumed: {summary.consumed:g}")
        if summary.status == "no-target":
            self.write("No target calories set. Please update your profile.")
            return
        filled = min(_BAR_WIDTH, int(summary.percent / 100 * _BAR_WIDTH))
        self.write(f"Target calories: {summary.target:.0f}")
        bar = "#" * filled + "." * (_BAR_WIDTH - filled)
        self.write(f"[{bar}] {summary.percent:.0f}%")
        self.write(
            f"Difference: {summary.difference:+.0f} calories ({summary.status} target)"
        )

    # Profile

    def _profile_menu(self) -> None:
        self._submenu(
            "User Profile",
            ProfileMenu,
            {
                ProfileMenu.VIEW: self.view_profile,
                ProfileMenu.UPDATE: self.update_profile,
                ProfileMenu.METHOD: self.change_method,
                ProfileMenu.SAVE: lambda: self._save(
                    "Profile", self.container.profile_service.save
                ),
            },
        )

    def view_profile(self) -> None:
        service = self.container.profile_service
        profile = service.profile
        if not profile.is_complete:
            self.write("Profile is incomplete. Please update your profile.")
        self.write(f"Gender: {profile.gender or '-'}")
        self.write(f"Height: {profile.height_cm:g} cm")
        self.write(f"Age: {profile.age_years} years")
        self.write(f"Weight: {profile.weight_kg:g} kg")
        self.write(f"Activity level: {profile.activity_level or '-'}")
        self.write(f"Calculation method: {profile.calculation_method}")
        self.write(f"Target calories: {service.target_calories():.0f}")

    def update_profile(self) -> None:
        profile = self.container.profile_service.update(
            gender=self._ask("Gender (male/female): ").lower(),
            height_cm=_parse_float(self._ask("Height (cm): "), "height"),
            age_years=_parse_int(self._ask("Age (years): "), "age"),
            weight_kg=_parse_float(self._ask("Weight (kg): "), "weight"),
            activity_level=self._ask(
                "Activity level (sedentary/light/moderate/active/very active): "
            ).lower(),
        )
        _logger.info("Profile updated (%s)", profile.calculation_method)
        self.write("Profile updated.")

    def change_method(self) -> None:
        self.write(f"1. Harris-Benedict ({HARRIS_BENEDICT})")
        self.write(f"2. Mifflin-St Jeor ({MIFFLIN_ST_JEOR})")
        methods = {"1": HARRIS_BENEDICT, "2": MIFFLIN_ST_JEOR}
        choice = self._ask("Choice: ")
        self.container.profile_service.set_calculation_method(
            methods.get(choice, choice)
        )
        self.write("Calculation method updated.")


def _split_keywords(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def _parse_float(raw: str, name: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise InvalidValue(f"{name} must be a number", name) from exc


def _parse_int(raw: str, name: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise InvalidValue(f"{name} must be a whole number", name) from exc
