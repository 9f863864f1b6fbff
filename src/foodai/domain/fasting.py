"""Domain models for the intermittent-fasting timer."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum


class InvalidFastingModeError(ValueError):
    """Raised when a fasting mode string cannot be parsed."""


class FastingTransitionError(ValueError):
    """Raised when a fasting transition is not allowed from the current phase."""


class FastingPhase(StrEnum):
    """Phase of an enabled fasting cycle."""

    IDLE = "idle"
    FASTING = "fasting"
    EATING = "eating"


DISABLED_STATUS = "disabled"


@dataclass(frozen=True)
class FastingMode:
    """Fasting and eating window lengths in hours."""

    fast_hours: int = 16
    eat_hours: int = 8

    @classmethod
    def parse(cls, raw: str) -> "FastingMode":
        """Parse an ``"H:E"`` string such as ``"16:8"``."""
        text = raw.strip() if isinstance(raw, str) else ""
        fast_text, separator, eat_text = text.partition(":")
        if not separator:
            raise InvalidFastingModeError(f"Invalid fasting mode: {raw!r}")
        try:
            fast_hours, eat_hours = int(fast_text), int(eat_text)
        except ValueError as exc:
            raise InvalidFastingModeError(f"Invalid fasting mode: {raw!r}") from exc
        if fast_hours <= 0 or eat_hours <= 0:
            raise InvalidFastingModeError(f"Invalid fasting mode: {raw!r}")
        return cls(fast_hours=fast_hours, eat_hours=eat_hours)

    def duration_for(self, phase: FastingPhase) -> timedelta:
        """Return the window length of a phase."""
        if phase is FastingPhase.FASTING:
            return timedelta(hours=self.fast_hours)
        if phase is FastingPhase.EATING:
            return timedelta(hours=self.eat_hours)
        return timedelta(0)

    def __str__(self) -> str:
        return f"{self.fast_hours}:{self.eat_hours}"


@dataclass(frozen=True)
class FastingState:
    """Persisted fasting timer state."""

    enabled: bool = False
    mode: FastingMode = FastingMode()
    phase: FastingPhase = FastingPhase.IDLE
    phase_start: datetime | None = None
    phase_end: datetime | None = None


@dataclass(frozen=True)
class FastingStatus:
    """Timer readout for the current phase."""

    status: str
    mode: FastingMode
    phase_start: datetime | None = None
    phase_end: datetime | None = None
    elapsed_hours: int = 0
    elapsed_minutes: int = 0
    remaining_hours: int = 0
    remaining_minutes: int = 0
    progress: int = 0
    is_completed: bool = False

    @property
    def enabled(self) -> bool:
        """Return True unless the timer is switched off."""
        return self.status != DISABLED_STATUS
