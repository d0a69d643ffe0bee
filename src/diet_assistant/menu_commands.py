"""Interactive menu definitions."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class MenuItem:
    """Declarative menu entry."""

    key: str
    description: str


class MainMenu(Enum):
    """Top-level menu (single source of truth)."""

    FOODS = MenuItem("1", "Food database")
    LOG = MenuItem("2", "Daily log")
    PROFILE = MenuItem("3", "User profile")
    SAVE_ALL = MenuItem("4", "Save all")
    EXIT = MenuItem("5", "Exit")


class FoodMenu(Enum):
    """Food database actions."""

    LIST = MenuItem("1", "View all foods")
    SEARCH = MenuItem("2", "Search foods by keywords")
    DETAILS = MenuItem("3", "View food details")
    ADD_SIMPLE = MenuItem("4", "Add new basic food")
    ADD_COMPOSITE = MenuItem("5", "Create composite food")
    SAVE = MenuItem("6", "Save database")
    LOOKUP = MenuItem("7", "Search online (FoodData Central)")
    BACK = MenuItem("8", "Back to main menu")


class LogMenu(Enum):
    """Daily log actions."""

    VIEW = MenuItem("1", "View daily log")
    ADD = MenuItem("2", "Add food to log")
    REMOVE = MenuItem("3", "Remove food from log")
    UNDO = MenuItem("4", "Undo last action")
    CHANGE_DATE = MenuItem("5", "Change current date")
    SUMMARY = MenuItem("6", "View calorie summary")
    DATES = MenuItem("7", "List logged dates")
    SAVE = MenuItem("8", "Save log")
    BACK = MenuItem("9", "Back to main menu")


class ProfileMenu(Enum):
    """Profile actions."""

    VIEW = MenuItem("1", "View profile")
    UPDATE = MenuItem("2", "Update profile")
    METHOD = MenuItem("3", "Change calorie calculation method")
    SAVE = MenuItem("4", "Save profile")
    BACK = MenuItem("5", "Back to main menu")


def menu_lines(menu: type[Enum]) -> list[str]:
    """Return printable lines for a menu."""
    return [f"{entry.value.key}. {entry.value.description}" for entry in menu]


def resolve_choice(menu: type[Enum], choice: str) -> Enum | None:
    """Return the menu entry selected by a key, if any."""
    for entry in menu:
        if entry.value.key == choice.strip():
            return entry
    return None
