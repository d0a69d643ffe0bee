"""Error taxonomy shared by the registry, log engine and persistence adapters."""


class DietAssistantError(Exception):
    """Base class for recoverable diet assistant errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DuplicateId(DietAssistantError):
    """Raised when a food id is already present in the registry."""

    def __init__(self, food_id: str) -> None:
        self.food_id = food_id
        super().__init__(f"Food '{food_id}' already exists")


class UnknownFood(DietAssistantError):
    """Raised when a food id does not resolve in the registry."""

    def __init__(self, food_id: str) -> None:
        self.food_id = food_id
        super().__init__(f"Food '{food_id}' not found")


class UnknownComponent(UnknownFood):
    """Raised when a composite references a food that does not exist."""

    def __init__(self, food_id: str, component_id: str) -> None:
        super().__init__(component_id)
        self.composite_id = food_id
        self.message = f"Composite '{food_id}' references unknown food '{component_id}'"
        self.args = (self.message,)


class SelfReference(DietAssistantError):
    """Raised when a composite lists itself as a component."""

    def __init__(self, food_id: str) -> None:
        self.food_id = food_id
        super().__init__(f"Composite '{food_id}' cannot contain itself")


class InvalidValue(DietAssistantError):
    """Raised for out-of-range or malformed input."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class IndexOutOfRange(DietAssistantError):
    """Raised when a log entry index is outside the day's entries."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Entry {index} is out of range (day has {size} entries)")


class NothingToUndo(DietAssistantError):
    """Raised by undo when the history is empty."""

    def __init__(self) -> None:
        super().__init__("Nothing to undo")


class PersistenceFailure(DietAssistantError):
    """Raised when reading or writing stored state fails."""


class LookupFailure(DietAssistantError):
    """Raised when the online nutrition lookup cannot be completed."""
