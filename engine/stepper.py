"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Stepper owns the replay index over ONE fixed step log and exposes the
play / pause / next / prev / speed API the UI drives.  It never touches the
log itself: every position change asks the snapshot function for a fresh
snapshot, so jumping anywhere is always safe.

The index runs from 0 to len(log) inclusive; len(log) is the completed
pseudo-step.

State machine:
    IDLE     →  load()              →  PAUSED
    PAUSED   →  play()              →  PLAYING
    PLAYING  →  pause()             →  PAUSED
    PLAYING  →  (index hits end)    →  FINISHED
    FINISHED →  play()              →  PLAYING (restarts from 0)
    any      →  reset()             →  IDLE

Timing:
  No timers or threads live here.  The caller invokes tick() from its own
  event loop; tick() advances at most one step per `speed` seconds.
"""

import logging
import time
from enum import Enum
from typing import Any, Callable, Optional

import config
from algorithms.step import StepLog

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# seconds per step
SPEED_PRESETS = config.SPEED_PRESETS


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state   : Current StepperState.
        log     : The StepLog being replayed (None while IDLE).
        index   : Replay position, 0..len(log).
        speed   : Seconds between auto-advance ticks.
        on_step : Optional callback fired on every position change with the
                  snapshot for the new index (or the bare index when no
                  snapshot function was given to load()).
    """

    def __init__(self, on_step: Optional[Callable[[Any], None]] = None):
        self.log:     Optional[StepLog] = None
        self.index:   int               = 0
        self.state:   StepperState      = StepperState.IDLE
        self.speed:   float             = SPEED_PRESETS[config.DEFAULT_SPEED]
        self.on_step: Optional[Callable[[Any], None]] = on_step

        self._snapshot_fn: Optional[Callable[[int], Any]] = None
        self._last_tick:   float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, log: StepLog, snapshot_fn: Optional[Callable[[int], Any]] = None) -> None:
        """Replace whatever was loaded; the index always restarts at 0."""
        self.log          = log
        self._snapshot_fn = snapshot_fn
        self.state        = StepperState.PAUSED
        logger.debug("Stepper loaded %d steps", len(log))
        self._goto(0)

    def reset(self) -> None:
        """Back to IDLE; caller must load() again."""
        self.log          = None
        self._snapshot_fn = None
        self.index        = 0
        self.state        = StepperState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one step.  Returns False if already at the completed index."""
        if self.log is None or self.index >= self.total_steps:
            if self.log is not None:
                self.state = StepperState.FINISHED
            return False
        self._goto(self.index + 1)
        return True

    def prev_step(self) -> bool:
        """Go back one step.  Returns False if already at 0."""
        if self.log is None or self.index <= 0:
            return False
        self._goto(self.index - 1)
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to `idx`, clamped into 0..len(log)."""
        if self.log is None:
            return False
        self._goto(min(max(idx, 0), self.total_steps))
        return True

    def rewind(self) -> None:
        self.goto_step(0)

    def jump_to_end(self) -> None:
        self.goto_step(self.total_steps)

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.log is None:
            return
        if self.index >= self.total_steps:
            self._goto(0)
        self.state      = StepperState.PLAYING
        self._last_tick = time.monotonic()

    def pause(self) -> None:
        if self.state == StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        If playing and at least `speed` seconds passed since the last
        advance, move forward one step.  Returns True if a step was taken.
        """
        if self.state != StepperState.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_tick < self.speed:
            return False
        self._last_tick = now
        return self.next_step()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        if preset not in SPEED_PRESETS:
            raise ValueError(f"Unknown speed preset: {preset}")
        self.speed = SPEED_PRESETS[preset]

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(config.MIN_PERIOD, float(seconds))

    def set_speed_slider(self, value: float, max_value: float) -> None:
        """Slider semantics: period in ms is `max_value - value` (right = faster)."""
        self.set_speed_value((max_value - value) / 1000.0)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def total_steps(self) -> int:
        return len(self.log) if self.log is not None else 0

    @property
    def current_step(self):
        """The Step at the index, or None at the completed index."""
        if self.log is not None and self.index < len(self.log):
            return self.log[self.index]
        return None

    def snapshot(self):
        if self._snapshot_fn is None:
            return None
        return self._snapshot_fn(self.index)

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _goto(self, idx: int) -> None:
        self.index = idx
        if idx >= self.total_steps:
            self.state = StepperState.FINISHED
        elif self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED
        self._notify()

    def _notify(self) -> None:
        if self.on_step is None:
            return
        self.on_step(self.snapshot() if self._snapshot_fn else self.index)
