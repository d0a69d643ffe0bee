"""Tests for the daily log engine and undo history."""

import pytest

from diet_assistant.domain.errors import (
    IndexOutOfRange,
    InvalidValue,
    NothingToUndo,
    PersistenceFailure,
    UnknownFood,
)
from diet_assistant.domain.logs import LogEntry
from diet_assistant.services.logs import (
    AddFoodCommand,
    CommandHistory,
    DailyLog,
    LogBook,
    RemoveFoodCommand,
)
from diet_assistant.services.registry import FoodRegistry
from tests.conftest import InMemoryDailyLogRepository

DAY = "2024-01-01"


def test_sandwich_scenario(registry: FoodRegistry, log_book: LogBook) -> None:
    registry.add_composite("sandwich", ["lunch"], {"bread": 2, "cheese": 1})

    log_book.add_food(DAY, "sandwich", 1)
    assert log_book.total_calories(DAY) == 270

    log_book.undo()

    assert log_book.entries(DAY) == []
    assert log_book.total_calories(DAY) == 0


def test_add_same_food_merges(log_book: LogBook) -> None:
    log_book.add_food(DAY, "bread", 2)
    log_book.add_food(DAY, "bread", 3)

    assert log_book.entries(DAY) == [LogEntry("bread", 5)]


def test_undo_merge_restores_prior_servings(log_book: LogBook) -> None:
    log_book.add_food(DAY, "bread", 2)
    log_book.add_food(DAY, "cheese", 1)
    before = log_book.entries(DAY)

    command = log_book.add_food(DAY, "bread", 3)
    assert command.created_entry is False
    log_book.undo()

    assert log_book.entries(DAY) == before


@pytest.mark.parametrize("servings", [0, -1, 1.5, True])
def test_add_food_rejects_bad_servings(log_book: LogBook, servings: int) -> None:
    with pytest.raises(InvalidValue):
        log_book.add_food(DAY, "bread", servings)

    assert log_book.entries(DAY) == []
    assert not log_book.can_undo()


def test_add_food_rejects_unknown_food(log_book: LogBook) -> None:
    with pytest.raises(UnknownFood):
        log_book.add_food(DAY, "ghost", 1)

    assert not log_book.can_undo()


def test_add_food_rejects_bad_date(log_book: LogBook) -> None:
    with pytest.raises(InvalidValue):
        log_book.add_food("2024-13-01", "bread", 1)
    with pytest.raises(InvalidValue):
        log_book.add_food("2024-1-1", "bread", 1)


def test_remove_then_undo_restores_entry_and_order(log_book: LogBook) -> None:
    log_book.add_food(DAY, "bread", 2)
    log_book.add_food(DAY, "cheese", 1)
    before = log_book.entries(DAY)
    total_before = log_book.total_calories(DAY)

    removed = log_book.remove_food(DAY, 0)
    assert removed == LogEntry("bread", 2)
    assert log_book.entries(DAY) == [LogEntry("cheese", 1)]

    log_book.undo()

    assert log_book.entries(DAY) == before
    assert log_book.total_calories(DAY) == total_before


def test_remove_out_of_range(log_book: LogBook) -> None:
    log_book.add_food(DAY, "bread", 1)

    with pytest.raises(IndexOutOfRange):
        log_book.remove_food(DAY, 1)
    with pytest.raises(IndexOutOfRange):
        log_book.remove_food(DAY, -1)
    with pytest.raises(IndexOutOfRange):
        log_book.remove_food("2024-01-02", 0)


def test_undo_on_empty_history(log_book: LogBook) -> None:
    with pytest.raises(NothingToUndo):
        log_book.undo()


def test_undo_is_lifo_across_days(log_book: LogBook) -> None:
    log_book.add_food(DAY, "bread", 1)
    log_book.add_food("2024-01-02", "cheese", 2)

    undone = log_book.undo()

    assert undone.day == "2024-01-02"
    assert log_book.entries("2024-01-02") == []
    assert log_book.entries(DAY) == [LogEntry("bread", 1)]


def test_days_are_independent(log_book: LogBook) -> None:
    log_book.add_food(DAY, "bread", 1)
    log_book.add_food("2024-01-02", "bread", 4)

    assert log_book.total_calories(DAY) == 80
    assert log_book.total_calories("2024-01-02") == 320
    assert log_book.dates() == ["2024-01-02", DAY]


def test_total_ignores_unresolved_food(registry: FoodRegistry) -> None:
    repository = InMemoryDailyLogRepository(
        logs={DAY: [LogEntry("bread", 1), LogEntry("deleted", 3)]}
    )
    log_book = LogBook(registry=registry, repository=repository)
    log_book.load()

    assert log_book.total_calories(DAY) == 80


def test_load_merges_duplicates_and_clears_history(registry: FoodRegistry) -> None:
    repository = InMemoryDailyLogRepository(
        logs={DAY: [LogEntry("bread", 1), LogEntry("cheese", 1), LogEntry("bread", 2)]}
    )
    log_book = LogBook(registry=registry, repository=repository)
    log_book.add_food(DAY, "cheese", 1)

    log_book.load()

    assert log_book.entries(DAY) == [LogEntry("bread", 3), LogEntry("cheese", 1)]
    assert not log_book.can_undo()
    assert log_book.modified is False


def test_load_rejects_bad_date_keys(registry: FoodRegistry) -> None:
    repository = InMemoryDailyLogRepository(logs={"yesterday": [LogEntry("bread", 1)]})
    log_book = LogBook(registry=registry, repository=repository)

    with pytest.raises(PersistenceFailure):
        log_book.load()


def test_save_writes_days_in_order(
    log_book: LogBook, log_repository: InMemoryDailyLogRepository
) -> None:
    log_book.add_food("2024-01-02", "cheese", 1)
    log_book.add_food(DAY, "bread", 2)

    log_book.save()

    assert list(log_repository.saved) == [DAY, "2024-01-02"]
    assert log_repository.saved[DAY] == [LogEntry("bread", 2)]
    assert log_book.modified is False


def test_history_limit_drops_oldest(registry: FoodRegistry) -> None:
    log_book = LogBook(registry=registry, history=CommandHistory(limit=2))
    for _ in range(3):
        log_book.add_food(DAY, "bread", 1)

    log_book.undo()
    log_book.undo()

    assert log_book.entries(DAY) == [LogEntry("bread", 1)]
    with pytest.raises(NothingToUndo):
        log_book.undo()


def test_history_rejects_non_positive_limit() -> None:
    with pytest.raises(InvalidValue):
        CommandHistory(limit=0)


def test_remove_command_restores_original_index() -> None:
    logs = {DAY: DailyLog([LogEntry("a", 1), LogEntry("b", 1), LogEntry("c", 1)])}
    command = RemoveFoodCommand(day=DAY, index=1)

    command.apply(logs)
    command.revert(logs)

    assert logs[DAY].entries() == [LogEntry("a", 1), LogEntry("b", 1), LogEntry("c", 1)]


def test_remove_revert_appends_when_index_gone() -> None:
    logs = {DAY: DailyLog([LogEntry("a", 1), LogEntry("b", 1), LogEntry("c", 1)])}
    command = RemoveFoodCommand(day=DAY, index=2)
    command.apply(logs)
    logs[DAY].remove_at(0)

    command.revert(logs)

    assert logs[DAY].entries() == [LogEntry("b", 1), LogEntry("c", 1)]


def test_remove_revert_merges_with_existing_entry() -> None:
    logs = {DAY: DailyLog([LogEntry("a", 2)])}
    command = RemoveFoodCommand(day=DAY, index=0)
    command.apply(logs)
    logs.setdefault(DAY, DailyLog()).add("a", 1)

    command.revert(logs)

    assert logs[DAY].entries() == [LogEntry("a", 3)]


def test_add_command_revert_drops_entry_at_zero() -> None:
    logs = {DAY: DailyLog([LogEntry("a", 2)])}
    command = AddFoodCommand(day=DAY, food_id="a", servings=3)
    command.apply(logs)
    logs[DAY].subtract("a", 3)

    command.revert(logs)

    assert DAY not in logs
