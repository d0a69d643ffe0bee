"""Online nutrition lookup backed by USDA FoodData Central."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx

from diet_assistant.adapters.fdc_client import FdcClient
from diet_assistant.domain.errors import InvalidValue, LookupFailure
from diet_assistant.domain.nutrition import NutrientValue, OnlineFood
from diet_assistant.services.cache import Cache

_logger = logging.getLogger(__name__)

_MISS = "miss"


@dataclass
class NutritionLookupService:
    """Searches FDC for the first matching food, with caching and a short retry."""

    fdc_client: FdcClient
    cache: Cache
    ttl_seconds: int = 3600
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str) -> OnlineFood | None:
        """Return the first FDC match for a query, or None when nothing matches."""
        cleaned = query.strip()
        if not cleaned:
            raise InvalidValue("Search query must not be empty", "query")
        cache_key = f"fdc:search:{cleaned.lower()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, OnlineFood):
            return cached
        if cached == _MISS:
            return None

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(cleaned, page_size=1)
        )
        try:
            result = _first_food(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise LookupFailure(f"Malformed FoodData Central response: {exc}") from exc
        self.cache.set(cache_key, result or _MISS, ttl_seconds=self.ttl_seconds)
        _logger.info(
            "FDC search query=%s matched=%s", cleaned, result.fdc_id if result else None
        )
        return result

    async def _call_with_retry(
        self, func: Callable[[], Awaitable[dict[str, object]]]
    ) -> dict[str, object]:
        attempt = 0
        while True:
            try:
                return await func()
            except httpx.HTTPError as exc:
                attempt += 1
                _logger.warning(
                    "FDC search failed (attempt %s/%s, status=%s): %s",
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise LookupFailure(
                        f"FoodData Central request failed: {exc}"
                    ) from exc
                await asyncio.sleep(self.retry_delay_seconds)
            except ValueError as exc:
                raise LookupFailure(
                    f"FoodData Central returned invalid JSON: {exc}"
                ) from exc


def _status_code_from_exception(exc: Exception) -> str:
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _first_food(payload: dict[str, object]) -> OnlineFood | None:
    foods = payload.get("foods") or []
    if not isinstance(foods, list):
        raise TypeError("'foods' is not a list")
    if not foods:
        return None
    food = foods[0]
    nutrients = [
        NutrientValue(
            name=str(nutrient["nutrientName"]),
            value=float(nutrient["value"]),
            unit=str(nutrient["unitName"]),
        )
        for nutrient in food.get("foodNutrients", [])
        if all(key in nutrient for key in ("nutrientName", "value", "unitName"))
    ]
    return OnlineFood(
        fdc_id=int(food["fdcId"]),
        description=str(food.get("description", "")),
        nutrients=nutrients,
    )
