"""Intermittent-fasting timer state machine."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from foodai.domain.fasting import (
    DISABLED_STATUS,
    FastingMode,
    FastingPhase,
    FastingState,
    FastingStatus,
    FastingTransitionError,
    InvalidFastingModeError,
)
from foodai.services.store import FASTING_KEY, JsonStore

_logger = logging.getLogger(__name__)


@dataclass
class FastingService:
    """Drives the fasting timer through disabled, idle, fasting and eating.

    Phases never advance on their own: ``status()`` reports completion and
    the caller decides when to switch.
    """

    store: JsonStore
    clock: Callable[[], datetime]

    def state(self) -> FastingState:
        """Return the stored state, or the default when missing or corrupt."""
        raw = self.store.get(FASTING_KEY)
        if raw is None:
            return FastingState()
        return fasting_from_record(raw)

    def set_mode(self, mode: str | FastingMode) -> FastingState:
        """Change the fasting/eating split; takes effect on the next phase."""
        parsed = mode if isinstance(mode, FastingMode) else FastingMode.parse(mode)
        return self._save(replace(self.state(), mode=parsed))

    def enable(self, enabled: bool) -> FastingState:
        """Switch the timer on (idle) or off (disabled)."""
        state = self.state()
        if state.enabled == enabled:
            return state
        # Timestamps survive disabling and are only cleared by end().
        return self._save(replace(state, enabled=enabled, phase=FastingPhase.IDLE))

    def start_fasting(self) -> FastingState:
        """Begin a fasting window from idle or eating."""
        return self._begin(
            FastingPhase.FASTING, allowed=(FastingPhase.IDLE, FastingPhase.EATING)
        )

    def start_eating(self) -> FastingState:
        """Begin an eating window after fasting."""
        return self._begin(FastingPhase.EATING, allowed=(FastingPhase.FASTING,))

    def toggle(self) -> FastingState:
        """Switch to eating while fasting, otherwise start fasting."""
        if self.state().phase is FastingPhase.FASTING:
            return self.start_eating()
        return self.start_fasting()

    def end(self) -> FastingState:
        """Stop the current window, clear its timestamps and return to idle."""
        state = self.state()
        return self._save(
            replace(state, phase=FastingPhase.IDLE, phase_start=None, phase_end=None)
        )

    def status(self) -> FastingStatus:
        """Report elapsed, remaining and progress for the current phase."""
        state = self.state()
        if not state.enabled:
            return FastingStatus(status=DISABLED_STATUS, mode=state.mode)
        if (
            state.phase is FastingPhase.IDLE
            or state.phase_start is None
            or state.phase_end is None
        ):
            return FastingStatus(status=FastingPhase.IDLE.value, mode=state.mode)

        now = self.clock()
        elapsed = now - state.phase_start
        remaining = state.phase_end - now
        total = state.phase_end - state.phase_start
        elapsed_hours, elapsed_minutes = _hours_minutes(elapsed)
        remaining_hours, remaining_minutes = _hours_minutes(
            max(remaining, timedelta(0))
        )
        if total > timedelta(0):
            progress = round(elapsed / total * 100)
        else:
            progress = 100
        return FastingStatus(
            status=state.phase.value,
            mode=state.mode,
            phase_start=state.phase_start,
            phase_end=state.phase_end,
            elapsed_hours=elapsed_hours,
            elapsed_minutes=elapsed_minutes,
            remaining_hours=remaining_hours,
            remaining_minutes=remaining_minutes,
            progress=max(0, min(100, progress)),
            is_completed=remaining <= timedelta(0),
        )

    def _begin(
        self, phase: FastingPhase, allowed: tuple[FastingPhase, ...]
    ) -> FastingState:
        state = self.state()
        if not state.enabled:
            raise FastingTransitionError("Fasting timer is disabled")
        if state.phase not in allowed:
            raise FastingTransitionError(
                f"Cannot start {phase} from phase {state.phase}"
            )
        now = self.clock()
        updated = replace(
            state,
            phase=phase,
            phase_start=now,
            phase_end=now + state.mode.duration_for(phase),
        )
        _logger.info("Fasting timer: %s -> %s (mode=%s)", state.phase, phase, state.mode)
        return self._save(updated)

    def _save(self, state: FastingState) -> FastingState:
        self.store.set(FASTING_KEY, fasting_to_record(state))
        return state


def _hours_minutes(delta: timedelta) -> tuple[int, int]:
    total_minutes = int(delta.total_seconds() // 60)
    return total_minutes // 60, total_minutes % 60


def fasting_to_record(state: FastingState) -> dict[str, object]:
    """Serialize fasting state for storage."""
    return {
        "enabled": state.enabled,
        "mode": str(state.mode),
        "phase": state.phase.value,
        "phase_start": state.phase_start.isoformat() if state.phase_start else None,
        "phase_end": state.phase_end.isoformat() if state.phase_end else None,
    }


def fasting_from_record(raw: object) -> FastingState:
    """Parse stored fasting state, falling back to the default on bad data."""
    if not isinstance(raw, dict):
        _logger.warning("Ignoring stored fasting state with unexpected type %s", type(raw))
        return FastingState()
    try:
        mode = FastingMode.parse(str(raw.get("mode") or FastingMode()))
        phase_start = raw.get("phase_start")
        phase_end = raw.get("phase_end")
        return FastingState(
            enabled=bool(raw.get("enabled", False)),
            mode=mode,
            phase=FastingPhase(raw.get("phase") or FastingPhase.IDLE),
            phase_start=datetime.fromisoformat(phase_start) if phase_start else None,
            phase_end=datetime.fromisoformat(phase_end) if phase_end else None,
        )
    except (InvalidFastingModeError, TypeError, ValueError):
        _logger.warning("Ignoring malformed fasting state: %r", raw)
        return FastingState()
