"""Daily calorie summary against the profile target."""

from dataclasses import dataclass

from diet_assistant.domain.nutrition import CalorieSummary
from diet_assistant.services.logs import LogBook
from diet_assistant.services.profile import ProfileService


@dataclass
class SummaryService:
    """Combines logged calories with the profile's calorie target."""

    log_book: LogBook
    profile_service: ProfileService

    def for_day(self, day: str) -> CalorieSummary:
        """Return consumed vs. target calories for a day."""
        consumed = self.log_book.total_calories(day)
        target = self.profile_service.target_calories()
        if target <= 0:
            return CalorieSummary(
                day=day,
                consumed=consumed,
                target=0.0,
                difference=0.0,
                percent=0.0,
                status="no-target",
            )
        difference = consumed - target
        return CalorieSummary(
            day=day,
            consumed=consumed,
            target=target,
            difference=difference,
            percent=consumed / target * 100,
            status="under" if difference < 0 else "over",
        )
