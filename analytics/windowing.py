"""Zoom and pan windowing over ordered time series."""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Final, Sequence, TypeVar

from core.models import PanDirection, VisibleRange, WindowState

__all__ = [
    "MIN_VISIBLE_POINTS",
    "MAX_ZOOM",
    "ZOOM_FACTOR",
    "PAN_DIVISIONS",
    "visible_count",
    "compute_visible_range",
    "visible_slice",
    "zoom_in",
    "zoom_out",
    "reset",
    "pan_step",
    "pan",
    "can_pan",
    "can_zoom_in",
    "can_zoom_out",
]

T = TypeVar("T")

MIN_VISIBLE_POINTS: Final[int] = 10
MAX_ZOOM: Final[float] = 5.0
ZOOM_FACTOR: Final[float] = 1.5
PAN_DIVISIONS: Final[int] = 20


def visible_count(total_length: int, zoom: float, *, min_visible: int = MIN_VISIBLE_POINTS) -> int:
    """Number of points a window should show before clipping to the series."""

    if total_length < 0:
        raise ValueError(f"total_length must be >= 0, got {total_length}")
    if zoom < 1:
        raise ValueError(f"zoom must be >= 1, got {zoom}")
    return max(min_visible, math.floor(total_length / zoom))


def _max_start(total_length: int, zoom: float, min_visible: int) -> int:
    return max(0, total_length - visible_count(total_length, zoom, min_visible=min_visible))


def compute_visible_range(
    total_length: int,
    zoom: float,
    pan: int,
    *,
    min_visible: int = MIN_VISIBLE_POINTS,
) -> VisibleRange:
    """Return the ``[start, end)`` slice visible at the given zoom and pan.

    Series shorter than the minimum window are shown in full.
    """

    count = visible_count(total_length, zoom, min_visible=min_visible)
    start = min(max(pan, 0), max(0, total_length - count))
    end = min(total_length, start + count)
    return VisibleRange(start=start, end=end)


def visible_slice(
    series: Sequence[T],
    state: WindowState,
    *,
    min_visible: int = MIN_VISIBLE_POINTS,
) -> list[T]:
    window = compute_visible_range(
        len(series), state.zoom_level, state.pan_offset, min_visible=min_visible
    )
    return list(series[window.start : window.end])


def zoom_in(
    state: WindowState,
    *,
    factor: float = ZOOM_FACTOR,
    max_zoom: float = MAX_ZOOM,
) -> WindowState:
    return replace(state, zoom_level=min(state.zoom_level * factor, max_zoom))


def zoom_out(state: WindowState, *, factor: float = ZOOM_FACTOR) -> WindowState:
    return replace(state, zoom_level=max(state.zoom_level / factor, 1.0))


def reset() -> WindowState:
    return WindowState(zoom_level=1.0, pan_offset=0)


def pan_step(total_length: int, *, divisions: int = PAN_DIVISIONS) -> int:
    return max(1, total_length // divisions)


def pan(
    state: WindowState,
    total_length: int,
    direction: PanDirection,
    *,
    min_visible: int = MIN_VISIBLE_POINTS,
    divisions: int = PAN_DIVISIONS,
) -> WindowState:
    """Move the window one step back (earlier) or forward (later).

    The stored offset is clamped first so a window left past the end by a
    zoom-out moves immediately on the next step.
    """

    if direction not in ("back", "forward"):
        raise ValueError(f"Unknown pan direction: {direction!r}")

    max_start = _max_start(total_length, state.zoom_level, min_visible)
    current = min(state.pan_offset, max_start)
    step = pan_step(total_length, divisions=divisions)
    target = current - step if direction == "back" else current + step
    return replace(state, pan_offset=min(max(target, 0), max_start))


def can_pan(
    total_length: int,
    state: WindowState,
    direction: PanDirection,
    *,
    min_visible: int = MIN_VISIBLE_POINTS,
) -> bool:
    window = compute_visible_range(
        total_length, state.zoom_level, state.pan_offset, min_visible=min_visible
    )
    if direction == "back":
        return window.start > 0
    return window.start < _max_start(total_length, state.zoom_level, min_visible)


def can_zoom_in(state: WindowState, *, max_zoom: float = MAX_ZOOM) -> bool:
    return state.zoom_level < max_zoom


def can_zoom_out(state: WindowState) -> bool:
    return state.zoom_level > 1.0
