"""Event wiring between chart controls and the engine computations.

Keyboard, button and slider events are translated into window transitions
and scenario projections. Scenario edits go through a :class:`Debouncer`
so a burst of slider moves triggers one projection with the final values.
The timer is an injected :class:`Scheduler`, keeping the computations
themselves free of any event-loop coupling.
"""

from __future__ import annotations

import logging
import threading
from functools import partial
from typing import Callable, Final, Generic, Optional, Protocol, TypeVar

from analytics import windowing
from analytics.scenarios import project, validate_scenario
from config import Settings, get_settings
from core.models import (
    BaseFinancials,
    ForecastScenario,
    KeyEvent,
    PanDirection,
    ScenarioProjection,
    VisibleRange,
    WindowState,
)

__all__ = [
    "KEY_BINDINGS",
    "TimerHandle",
    "Scheduler",
    "ThreadingScheduler",
    "Debouncer",
    "InteractionController",
    "bind_controller",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")

KEY_BINDINGS: Final[dict[str, str]] = {
    "+": "zoom_in",
    "=": "zoom_in",
    "-": "zoom_out",
    "0": "reset",
    "ArrowLeft": "pan_back",
    "ArrowRight": "pan_forward",
}

WindowCallback = Callable[[WindowState, VisibleRange], None]
ProjectionCallback = Callable[[ForecastScenario, ScenarioProjection], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Runs a callback once after ``delay`` seconds unless cancelled."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class ThreadingScheduler:
    """Scheduler backed by ``threading.Timer``."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class Debouncer(Generic[T]):
    """Collapse bursts of values into one callback after a quiet period.

    Each :meth:`trigger` cancels the pending call and restarts the timer; the
    callback receives the most recent value.
    """

    def __init__(self, scheduler: Scheduler, delay: float, callback: Callable[[T], None]) -> None:
        self._scheduler = scheduler
        self._delay = delay
        self._callback = callback
        self._lock = threading.Lock()
        self._handle: Optional[TimerHandle] = None
        self._latest: Optional[T] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._handle is not None

    def trigger(self, value: T) -> None:
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
            self._latest = value
            self._generation += 1
            self._handle = self._scheduler.schedule(
                self._delay, partial(self._fire, self._generation)
            )

    def cancel(self) -> None:
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
            self._handle = None
            self._generation += 1

    def flush(self) -> None:
        """Run the pending callback now instead of waiting for the timer."""

        with self._lock:
            if self._handle is None:
                return
            self._handle.cancel()
            generation = self._generation
        self._fire(generation)

    def _fire(self, generation: int) -> None:
        with self._lock:
            # a timer that lost the race with trigger() or cancel() is stale
            if generation != self._generation or self._handle is None:
                return
            self._handle = None
            value = self._latest
        self._callback(value)  # type: ignore[arg-type]


class InteractionController:
    """Owns the window state of one chart session and its scenario preview."""

    def __init__(
        self,
        total_length: int,
        base: BaseFinancials,
        *,
        scheduler: Scheduler,
        settings: Settings,
        on_window_change: Optional[WindowCallback] = None,
        on_projection: Optional[ProjectionCallback] = None,
        window: Optional[WindowState] = None,
    ) -> None:
        self._total_length = total_length
        self._base = base
        self._settings = settings
        self._window = window or WindowState()
        self._on_window_change = on_window_change
        self._on_projection = on_projection
        self._last_projection: Optional[ScenarioProjection] = None
        self._debouncer: Debouncer[ForecastScenario] = Debouncer(
            scheduler, settings.debounce_seconds, self._recompute
        )

    @property
    def window(self) -> WindowState:
        return self._window

    @property
    def total_length(self) -> int:
        return self._total_length

    @property
    def visible_range(self) -> VisibleRange:
        return windowing.compute_visible_range(
            self._total_length,
            self._window.zoom_level,
            self._window.pan_offset,
            min_visible=self._settings.min_visible_points,
        )

    @property
    def last_projection(self) -> Optional[ScenarioProjection]:
        return self._last_projection

    @property
    def projection_pending(self) -> bool:
        return self._debouncer.pending

    def set_series_length(self, total_length: int) -> None:
        self._total_length = total_length
        self._notify_window()

    def set_base(self, base: BaseFinancials) -> None:
        self._base = base

    # window transitions

    def zoom_in(self) -> WindowState:
        return self._apply(
            windowing.zoom_in(
                self._window,
                factor=self._settings.zoom_factor,
                max_zoom=self._settings.max_zoom,
            )
        )

    def zoom_out(self) -> WindowState:
        return self._apply(windowing.zoom_out(self._window, factor=self._settings.zoom_factor))

    def reset(self) -> WindowState:
        return self._apply(windowing.reset())

    def pan(self, direction: PanDirection) -> WindowState:
        return self._apply(
            windowing.pan(
                self._window,
                self._total_length,
                direction,
                min_visible=self._settings.min_visible_points,
                divisions=self._settings.pan_divisions,
            )
        )

    def handle_key(self, event: KeyEvent) -> bool:
        """Apply the binding for ``event.key``; returns whether it was handled."""

        if event.target_is_text_input:
            return False
        action = KEY_BINDINGS.get(event.key)
        if action is None:
            return False
        if action == "pan_back":
            self.pan("back")
        elif action == "pan_forward":
            self.pan("forward")
        else:
            getattr(self, action)()
        return True

    def _apply(self, state: WindowState) -> WindowState:
        if state != self._window:
            self._window = state
            self._notify_window()
        return self._window

    def _notify_window(self) -> None:
        if self._on_window_change is not None:
            self._on_window_change(self._window, self.visible_range)

    # scenario edits

    def edit_scenario(self, scenario: ForecastScenario) -> None:
        """Queue a projection for ``scenario`` behind the debounce window.

        Out-of-range scenarios raise ``InvalidScenario`` here rather than on the
        timer thread.
        """

        validate_scenario(scenario)
        self._debouncer.trigger(scenario)

    def flush(self) -> None:
        self._debouncer.flush()

    def cancel_pending(self) -> None:
        self._debouncer.cancel()

    def _recompute(self, scenario: ForecastScenario) -> None:
        projection = project(self._base, scenario)
        self._last_projection = projection
        logger.debug("Recomputed projection for scenario %s", scenario.id)
        if self._on_projection is not None:
            self._on_projection(scenario, projection)


def bind_controller(
    total_length: int,
    base: BaseFinancials,
    *,
    on_window_change: Optional[WindowCallback] = None,
    on_projection: Optional[ProjectionCallback] = None,
    scheduler: Optional[Scheduler] = None,
    settings: Optional[Settings] = None,
) -> InteractionController:
    """Create a controller wired to the given callbacks.

    Defaults to a real timer and the cached application settings.
    """

    return InteractionController(
        total_length,
        base,
        scheduler=scheduler or ThreadingScheduler(),
        settings=settings or get_settings(),
        on_window_change=on_window_change,
        on_projection=on_projection,
    )
