"""Fasting timer API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from foodai.api.models import FastingModePayload  # noqa: TC001
from foodai.domain.fasting import FastingTransitionError, InvalidFastingModeError

if TYPE_CHECKING:
    from collections.abc import Callable

    from foodai.containers import AppContainer
    from foodai.domain.fasting import FastingState

router = APIRouter(prefix="/fasting", tags=["fasting"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _transition(action: Callable[[], FastingState]) -> dict[str, object]:
    try:
        state = action()
    except FastingTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return {"state": _state_payload(state)}


def _state_payload(state: FastingState) -> dict[str, object]:
    return {
        "enabled": state.enabled,
        "mode": str(state.mode),
        "phase": state.phase.value,
        "phase_start": state.phase_start,
        "phase_end": state.phase_end,
    }


@router.get("")
async def fasting_status(request: Request) -> dict[str, object]:
    """Return the timer readout for the current phase."""
    readout = _container(request).fasting_service.status()
    return {
        "status": readout.status,
        "enabled": readout.enabled,
        "mode": str(readout.mode),
        "phase_start": readout.phase_start,
        "phase_end": readout.phase_end,
        "elapsed_hours": readout.elapsed_hours,
        "elapsed_minutes": readout.elapsed_minutes,
        "remaining_hours": readout.remaining_hours,
        "remaining_minutes": readout.remaining_minutes,
        "progress": readout.progress,
        "is_completed": readout.is_completed,
    }


@router.post("/enable")
async def enable_fasting(request: Request) -> dict[str, object]:
    """Switch the fasting timer on."""
    service = _container(request).fasting_service
    return _transition(lambda: service.enable(True))


@router.post("/disable")
async def disable_fasting(request: Request) -> dict[str, object]:
    """Switch the fasting timer off."""
    service = _container(request).fasting_service
    return _transition(lambda: service.enable(False))


@router.post("/start")
async def start_fasting(request: Request) -> dict[str, object]:
    """Start a fasting window."""
    return _transition(_container(request).fasting_service.start_fasting)


@router.post("/eat")
async def start_eating(request: Request) -> dict[str, object]:
    """Start an eating window."""
    return _transition(_container(request).fasting_service.start_eating)


@router.post("/toggle")
async def toggle_fasting(request: Request) -> dict[str, object]:
    """Switch between fasting and eating."""
    return _transition(_container(request).fasting_service.toggle)


@router.post("/end")
async def end_fasting(request: Request) -> dict[str, object]:
    """End the current window."""
    return _transition(_container(request).fasting_service.end)


@router.put("/mode")
async def set_fasting_mode(
    payload: FastingModePayload, request: Request
) -> dict[str, object]:
    """Change the fasting/eating split."""
    try:
        state = _container(request).fasting_service.set_mode(payload.mode)
    except InvalidFastingModeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return {"state": _state_payload(state)}
