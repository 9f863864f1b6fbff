"""User settings service."""

import logging
from dataclasses import asdict, dataclass, fields, replace

from foodai.domain.settings import DEFAULT_TARGET_CALORIES, Goal, UserSettings
from foodai.services.store import SETTINGS_KEY, JsonStore

ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very-active": 1.9,
}
GOAL_ADJUSTMENT_KCAL = 500

_SETTINGS_FIELDS = (
    ("gender", str),
    ("age", int),
    ("height_cm", float),
    ("weight_kg", float),
    ("activity_level", str),
    ("goal", Goal),
    ("target_calories", int),
)
# Zero or negative values fall back to the default.
POSITIVE_FIELDS = frozenset({"age", "height_cm", "weight_kg", "target_calories"})
SETTINGS_ALIASES: dict[str, tuple[str, ...]] = {
    "height_cm": ("heightCm", "height"),
    "weight_kg": ("weightKg", "weight"),
    "activity_level": ("activityLevel", "activity"),
    "target_calories": ("targetCalories",),
}

_logger = logging.getLogger(__name__)


@dataclass
class UserSettingsService:
    """Reads and writes the single user settings record."""

    store: JsonStore

    def ensure_defaults(self) -> bool:
        """Write default settings if none are stored. Returns True if written."""
        if self.store.get(SETTINGS_KEY) is not None:
            return False
        self.save(UserSettings())
        _logger.info("Initialized default user settings")
        return True

    def get(self) -> UserSettings:
        """Return stored settings, or defaults when missing or corrupt."""
        raw = self.store.get(SETTINGS_KEY)
        if raw is None:
            return UserSettings()
        return settings_from_record(raw)

    def save(self, settings: UserSettings) -> None:
        """Replace the stored settings."""
        self.store.set(SETTINGS_KEY, settings_to_record(settings))

    def update(self, **changes: object) -> UserSettings:
        """Merge changes into the stored settings and save them."""
        allowed = {item.name for item in fields(UserSettings)}
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(f"Unknown settings fields: {sorted(unknown)}")
        invalid = sorted(
            name
            for name, value in changes.items()
            if name in POSITIVE_FIELDS
            and isinstance(value, int | float)
            and value <= 0
        )
        if invalid:
            raise ValueError(f"Settings fields must be positive: {invalid}")
        current = settings_to_record(self.get())
        current.update(changes)
        updated = settings_from_record(current)
        self.save(updated)
        return updated

    def target_calories(self) -> int:
        """Return the calorie target, falling back to the default."""
        target = self.get().target_calories
        return target if target > 0 else DEFAULT_TARGET_CALORIES

    def apply_calculated_target(self) -> UserSettings:
        """Recompute the calorie target from the profile and save it."""
        settings = self.get()
        target = calculate_target_calories(settings)
        if target <= 0:
            _logger.warning(
                "Calculated target %s is not positive, using default", target
            )
            target = DEFAULT_TARGET_CALORIES
        updated = replace(settings, target_calories=target)
        self.save(updated)
        return updated


def calculate_target_calories(settings: UserSettings) -> int:
    """Estimate a daily calorie target with the Harris-Benedict equation."""
    if settings.gender == "male":
        bmr = (
            88.362
            + 13.397 * settings.weight_kg
            + 4.799 * settings.height_cm
            - 5.677 * settings.age
        )
    else:
        bmr = (
            447.593
            + 9.247 * settings.weight_kg
            + 3.098 * settings.height_cm
            - 4.330 * settings.age
        )
    tdee = bmr * ACTIVITY_MULTIPLIERS.get(settings.activity_level, 1.55)
    if settings.goal is Goal.LOSE:
        tdee -= GOAL_ADJUSTMENT_KCAL
    elif settings.goal is Goal.GAIN:
        tdee += GOAL_ADJUSTMENT_KCAL
    return round(tdee)


def settings_to_record(settings: UserSettings) -> dict[str, object]:
    """Serialize settings for storage."""
    record = asdict(settings)
    record["goal"] = settings.goal.value
    return record


def settings_from_record(raw: object) -> UserSettings:
    """Parse stored settings, replacing bad fields with their defaults.

    Export documents written with camelCase names
    (``targetCalories``, ``height``, ``activity``) are accepted when the
    snake_case field is absent.
    """
    defaults = UserSettings()
    if not isinstance(raw, dict):
        _logger.warning("Ignoring stored settings with unexpected type %s", type(raw))
        return defaults
    values: dict[str, object] = {}
    for name, cast in _SETTINGS_FIELDS:
        stored = _lookup(raw, name)
        if stored is None:
            continue
        try:
            value = cast(stored)
        except (TypeError, ValueError):
            _logger.warning("Invalid stored setting %s=%r, using default", name, stored)
            continue
        if name in POSITIVE_FIELDS and value <= 0:
            _logger.warning(
                "Non-positive stored setting %s=%r, using default", name, stored
            )
            continue
        values[name] = value
    return replace(defaults, **values)


def _lookup(raw: dict, name: str) -> object:
    if raw.get(name) is not None:
        return raw[name]
    for alias in SETTINGS_ALIASES.get(name, ()):
        if raw.get(alias) is not None:
            return raw[alias]
    return None
