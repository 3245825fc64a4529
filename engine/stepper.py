"""
stepper.py — History Navigation & Playback Engine
==================================================
The Stepper is the ONLY object the web layer talks to during a run.  It
owns the algorithm, a private copy of the graph and the Recorder, and
exposes first / prev / next / last / seek plus play / pause / tick.

State machine:
    IDLE     →  start()   →  PAUSED   (or FINISHED for a graph that is
                                        terminal right after initialize)
    PAUSED   →  play()    →  PLAYING
    PLAYING  →  pause()   →  PAUSED
    PLAYING  →  (newest record is terminal) → FINISHED
    any      →  reset()   →  PAUSED / FINISHED (history replaced)

Only next() at the newest record computes anything (one algorithm.step()
call); every other movement just reads the history.

Thread safety:
  Flask may serve requests for the same session concurrently, so every
  public method runs under one re-entrant lock.
"""

import logging
import threading
import time
from enum import Enum
from typing import Callable, Optional

from graph import Graph
from algorithms.contract import StepAlgorithm
from algorithms.step import StepRecord
from engine.recorder import Recorder, RunMetrics

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,
    "medium": 0.4,
    "fast":   0.15,
    "turbo":  0.05,
}


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        algorithm   : The StepAlgorithm being driven (None while IDLE).
        graph       : Private clone of the graph the run was started on.
        recorder    : History of StepRecords.
        current_idx : Index into the history that is currently displayed.
        state       : Current StepperState.
        speed       : Seconds between auto-advance ticks.
        on_step     : Optional callback(StepRecord) fired whenever the
                      displayed record changes.
    """

    def __init__(self, on_step: Optional[Callable[[StepRecord], None]] = None):
        self.algorithm:   Optional[StepAlgorithm] = None
        self.graph:       Optional[Graph]         = None
        self.recorder:    Recorder                = Recorder()
        self.current_idx: int                     = -1
        self.state:       StepperState            = StepperState.IDLE
        self.speed:       float                   = SPEED_PRESETS["medium"]
        self.on_step:     Optional[Callable[[StepRecord], None]] = on_step

        self._lock       = threading.RLock()
        self._last_tick: float = 0.0
        self._elapsed:   float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, algorithm: StepAlgorithm, graph: Graph) -> StepRecord:
        """Initialise `algorithm` on a copy of `graph` and record the initial state."""
        with self._lock:
            self.algorithm = algorithm
            self.graph     = graph.clone()
            logger.info(
                "Starting %s on %d node(s) / %d edge(s)",
                algorithm.key, self.graph.node_count(), self.graph.edge_count(),
            )
            return self._initialize()

    def reset(self) -> Optional[StepRecord]:
        """Re-initialise the same algorithm on the same graph; history restarts."""
        with self._lock:
            if self.algorithm is None:
                return None
            logger.debug("Resetting %s", self.algorithm.key)
            return self._initialize()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next(self) -> bool:
        """
        Move one record forward.  At the newest record this runs exactly
        one algorithm step and records it.  False when nothing is left.
        """
        with self._lock:
            if self.algorithm is None:
                return False
            if self.current_idx < len(self.recorder) - 1:
                self._goto(self.current_idx + 1)
                return True
            if self.algorithm.is_complete:
                self.state = StepperState.FINISHED
                return False

            started = time.perf_counter()
            self.algorithm.step()
            self._elapsed += time.perf_counter() - started
            self.recorder.record(self.algorithm)
            self._goto(len(self.recorder) - 1)
            return True

    def prev(self) -> bool:
        with self._lock:
            if self.current_idx <= 0:
                return False
            self._goto(self.current_idx - 1)
            return True

    def first(self) -> bool:
        return self.seek(0)

    def last(self) -> bool:
        """Jump to the newest recorded state (never computes new steps)."""
        with self._lock:
            return self.seek(len(self.recorder) - 1)

    def seek(self, index: int) -> bool:
        """Jump to an already recorded index.  Out of range → False, no move."""
        with self._lock:
            if not 0 <= index < len(self.recorder):
                return False
            self._goto(index)
            return True

    def run_to_completion(self, max_steps: int = 10_000) -> int:
        """Step until the algorithm is terminal or `max_steps` steps ran; returns steps run."""
        with self._lock:
            if self.algorithm is None:
                return 0
            self.last()
            taken = 0
            while taken < max_steps and self.next():
                taken += 1
            if not self.is_complete:
                logger.warning("%s stopped after %d steps without finishing", self.algorithm.key, taken)
            return taken

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        with self._lock:
            if not self.can_advance:
                return
            self.state      = StepperState.PLAYING
            self._last_tick = time.monotonic()

    def pause(self) -> None:
        with self._lock:
            if self.state == StepperState.PLAYING:
                self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        with self._lock:
            if self.state == StepperState.PLAYING:
                self.pause()
            else:
                self.play()

    # ------------------------------------------------------------------
    # Tick  (called by whatever drives autoplay)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        If playing and `speed` seconds have elapsed since the previous
        advance, move one record forward.  Returns True if it moved.
        """
        with self._lock:
            if self.state != StepperState.PLAYING:
                return False
            now = time.monotonic() if now is None else now
            if now - self._last_tick < self.speed:
                return False
            self._last_tick = now
            if not self.next():
                self.state = StepperState.FINISHED
                return False
            if not self.can_advance:
                self.state = StepperState.FINISHED
            return True

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current(self) -> Optional[StepRecord]:
        if 0 <= self.current_idx < len(self.recorder):
            return self.recorder[self.current_idx]
        return None

    @property
    def position(self) -> int:
        return self.current_idx

    @property
    def total(self) -> int:
        return len(self.recorder)

    @property
    def is_complete(self) -> bool:
        """True once the algorithm reached its terminal state."""
        return self.algorithm is not None and self.algorithm.is_complete

    @property
    def can_advance(self) -> bool:
        if self.algorithm is None:
            return False
        return self.current_idx < len(self.recorder) - 1 or not self.algorithm.is_complete

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    def metrics(self) -> RunMetrics:
        with self._lock:
            newest = self.recorder.last
            return RunMetrics(
                algo_key=self.algorithm.key if self.algorithm else "",
                algo_label=self.algorithm.label if self.algorithm else "",
                total_steps=max(len(self.recorder) - 1, 0),
                highlighted_nodes=len(newest.state.highlighted_nodes) if newest else 0,
                highlighted_edges=len(newest.state.highlighted_edges) if newest else 0,
                completed=self.is_complete,
                wall_time_ms=round(self._elapsed * 1000, 2),
            )

    def to_dict(self) -> dict:
        with self._lock:
            record = self.current
            return {
                "algo_key":    self.algorithm.key if self.algorithm else None,
                "position":    self.position,
                "total":       self.total,
                "state":       self.state.value,
                "complete":    self.is_complete,
                "can_advance": self.can_advance,
                "record":      record.to_dict() if record else None,
                "metrics":     self.metrics().to_dict(),
            }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _initialize(self) -> StepRecord:
        started = time.perf_counter()
        self.algorithm.initialize(self.graph)
        self._elapsed = time.perf_counter() - started
        self.recorder.clear()
        record = self.recorder.record(self.algorithm)
        self.state = StepperState.FINISHED if self.algorithm.is_complete else StepperState.PAUSED
        self._goto(0)
        return record

    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        if self.on_step is not None:
            self.on_step(self.recorder[idx])
