"""Daily log engine with reversible mutations."""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Protocol

from diet_assistant.domain.errors import (
    IndexOutOfRange,
    InvalidValue,
    NothingToUndo,
    PersistenceFailure,
    UnknownFood,
)
from diet_assistant.domain.logs import LogEntry, validate_day
from diet_assistant.services.registry import FoodRegistry

_logger = logging.getLogger(__name__)


class DailyLogRepository(Protocol):
    """Persistence interface for daily logs."""

    def load_logs(self) -> dict[str, list[LogEntry]]:
        """Return stored entries keyed by date."""

    def save_logs(self, logs: dict[str, list[LogEntry]]) -> None:
        """Overwrite the stored logs."""


class DailyLog:
    """Ordered entries for one day; a food id appears at most once."""

    def __init__(self, entries: list[LogEntry] | None = None) -> None:
        self._entries: list[LogEntry] = []
        for entry in entries or []:
            self.add(entry.food_id, entry.servings)

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> list[LogEntry]:
        """Return a copy of the entries in display order."""
        return list(self._entries)

    def index_of(self, food_id: str) -> int | None:
        """Return the position of a food's entry, if logged."""
        for index, entry in enumerate(self._entries):
            if entry.food_id == food_id:
                return index
        return None

    def add(self, food_id: str, servings: int) -> bool:
        """Merge servings into an existing entry or append; True if appended."""
        index = self.index_of(food_id)
        if index is None:
            self._entries.append(LogEntry(food_id, servings))
            return True
        current = self._entries[index]
        self._entries[index] = LogEntry(food_id, current.servings + servings)
        return False

    def subtract(self, food_id: str, servings: int) -> None:
        """Reduce an entry's servings, dropping it once nothing is left."""
        index = self.index_of(food_id)
        if index is None:
            return
        remaining = self._entries[index].servings - servings
        if remaining <= 0:
            del self._entries[index]
        else:
            self._entries[index] = LogEntry(food_id, remaining)

    def remove_at(self, index: int) -> LogEntry:
        """Delete and return the entry at a position."""
        if not 0 <= index < len(self._entries):
            raise IndexOutOfRange(index, len(self._entries))
        return self._entries.pop(index)

    def insert_at(self, index: int, entry: LogEntry) -> None:
        """Restore an entry at a position, or append when the position is gone."""
        if self.index_of(entry.food_id) is not None:
            self.add(entry.food_id, entry.servings)
            return
        if 0 <= index <= len(self._entries):
            self._entries.insert(index, entry)
        else:
            self._entries.append(entry)


class LogCommand(Protocol):
    """Reversible mutation of the daily logs."""

    day: str

    def apply(self, logs: dict[str, DailyLog]) -> None:
        """Apply the mutation."""

    def revert(self, logs: dict[str, DailyLog]) -> None:
        """Reverse a previously applied mutation."""


@dataclass
class AddFoodCommand:
    """Adds servings of a food to a day."""

    day: str
    food_id: str
    servings: int
    created_entry: bool = False

    def apply(self, logs: dict[str, DailyLog]) -> None:
        self.created_entry = logs.setdefault(self.day, DailyLog()).add(
            self.food_id, self.servings
        )

    def revert(self, logs: dict[str, DailyLog]) -> None:
        daily = logs.get(self.day)
        if daily is None:
            return
        if self.created_entry:
            index = daily.index_of(self.food_id)
            if index is not None:
                daily.remove_at(index)
        else:
            daily.subtract(self.food_id, self.servings)
        if not daily:
            del logs[self.day]


@dataclass
class RemoveFoodCommand:
    """Removes the entry at a position in a day."""

    day: str
    index: int
    removed: LogEntry | None = None

    def apply(self, logs: dict[str, DailyLog]) -> None:
        daily = logs.get(self.day) or DailyLog()
        self.removed = daily.remove_at(self.index)
        if not daily:
            logs.pop(self.day, None)

    def revert(self, logs: dict[str, DailyLog]) -> None:
        if self.removed is None:
            return
        logs.setdefault(self.day, DailyLog()).insert_at(self.index, self.removed)


class CommandHistory:
    """Bounded LIFO stack of applied commands; never persisted."""

    def __init__(self, limit: int | None = None) -> None:
        if limit is not None and limit <= 0:
            raise InvalidValue("History limit must be positive", "limit")
        self._commands: deque[LogCommand] = deque(maxlen=limit)

    def __len__(self) -> int:
        return len(self._commands)

    def push(self, command: LogCommand) -> None:
        """Record an applied command, dropping the oldest past the limit."""
        self._commands.append(command)

    def pop(self) -> LogCommand:
        """Remove and return the most recent command."""
        if not self._commands:
            raise NothingToUndo
        return self._commands.pop()

    def clear(self) -> None:
        self._commands.clear()


@dataclass
class LogBook:
    """Applies log mutations through commands so they can be undone."""

    registry: FoodRegistry
    repository: DailyLogRepository | None = None
    history: CommandHistory = field(default_factory=CommandHistory)
    modified: bool = field(default=False, init=False)
    _logs: dict[str, DailyLog] = field(default_factory=dict, init=False, repr=False)

    def add_food(self, day: str, food_id: str, servings: int) -> AddFoodCommand:
        """Log servings of a food on a day, merging with an existing entry."""
        validate_day(day)
        if isinstance(servings, bool) or not isinstance(servings, int) or servings <= 0:
            raise InvalidValue("Servings must be a positive integer", "servings")
        if self.registry.get(food_id) is None:
            raise UnknownFood(food_id)
        command = AddFoodCommand(day=day, food_id=food_id, servings=servings)
        self._execute(command)
        return command

    def remove_food(self, day: str, index: int) -> LogEntry:
        """Remove the entry at a position on a day and return it."""
        validate_day(day)
        size = len(self._logs.get(day) or ())
        valid = isinstance(index, int) and not isinstance(index, bool)
        if not valid or not 0 <= index < size:
            raise IndexOutOfRange(index, size)
        command = RemoveFoodCommand(day=day, index=index)
        self._execute(command)
        return command.removed  # type: ignore[return-value]

    def undo(self) -> LogCommand:
        """Reverse the most recent command."""
        command = self.history.pop()
        command.revert(self._logs)
        self.modified = True
        _logger.info("Undid %s on %s", type(command).__name__, command.day)
        return command

    def can_undo(self) -> bool:
        """Return True when there is a command to reverse."""
        return len(self.history) > 0

    def entries(self, day: str) -> list[LogEntry]:
        """Return the entries logged on a day."""
        daily = self._logs.get(validate_day(day))
        return daily.entries() if daily else []

    def total_calories(self, day: str) -> float:
        """Sum calories for a day; unresolved foods contribute nothing."""
        total = 0.0
        for entry in self.entries(day):
            food = self.registry.get(entry.food_id)
            if food is None:
                _logger.warning("Log entry references missing food %s", entry.food_id)
                continue
            total += food.calories_per_serving * entry.servings
        return total

    def dates(self) -> list[str]:
        """Return logged dates, newest first."""
        return sorted(self._logs, reverse=True)

    def load(self) -> int:
        """Replace all logs with stored ones and clear the undo history."""
        repository = self._require_repository()
        stored = repository.load_logs()
        logs: dict[str, DailyLog] = {}
        for day, entries in stored.items():
            try:
                validate_day(day)
            except InvalidValue as exc:
                raise PersistenceFailure(f"Invalid daily log: {exc.message}") from exc
            daily = DailyLog(entries)
            if daily:
                logs[day] = daily
        self._logs = logs
        self.history.clear()
        self.modified = False
        _logger.info("Loaded logs for %s days", len(logs))
        return len(logs)

    def save(self) -> None:
        """Write every day's entries to storage."""
        repository = self._require_repository()
        repository.save_logs(
            {day: self._logs[day].entries() for day in sorted(self._logs)}
        )
        self.modified = False
        _logger.info("Saved logs for %s days", len(self._logs))

    def _execute(self, command: LogCommand) -> None:
        command.apply(self._logs)
        self.history.push(command)
        self.modified = True

    def _require_repository(self) -> DailyLogRepository:
        if self.repository is None:
            raise PersistenceFailure("No daily log storage configured")
        return self.repository
