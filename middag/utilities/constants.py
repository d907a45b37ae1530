from typing import Final

WEEKDAY_KEYS: Final[tuple[str, ...]] = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
)
DAYS_IN_PLAN: Final[int] = len(WEEKDAY_KEYS)

NO_CATEGORY: Final[str] = "-"
MANUAL_CATEGORY: Final[str] = "Manual"

# Translation keys of the placeholder dishes the generator emits
NO_DISHES_AVAILABLE: Final[str] = "noDishesAvailable"
NO_DISH_FOUND: Final[str] = "noDishFound"
ERROR_KEPT_LOCKED: Final[str] = "errorKeptLocked"
SENTINEL_KEYS: Final[tuple[str, ...]] = (NO_DISHES_AVAILABLE, NO_DISH_FOUND, ERROR_KEPT_LOCKED)

SUPPORTED_LANGUAGES: Final[dict[str, str]] = {"en": "EN", "no": "NO", "es": "ES"}
