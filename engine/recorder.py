"""
recorder.py — Step History Recorder & Run Metrics
==================================================
Records one immutable StepRecord per algorithm state: the initial state
after initialize() and one more after every step().

Usage:
    rec = Recorder()
    algo.initialize(graph)
    rec.record(algo)                 # record 0: initial state
    while algo.step():
        rec.record(algo)
    rec.record(algo)                 # terminal state (step() returned False)
    rec.export()                     # JSON-ready list for save / replay

The recorder never keeps a reference to the algorithm's live state: it
stores Snapshots, so later steps cannot rewrite history.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

from algorithms.contract import Algorithm
from algorithms.step import StepRecord

INITIAL_DESCRIPTION = "Algorithm initialized."


# ---------------------------------------------------------------------------
# Metrics dataclass — what the analytics strip renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:          str   = ""
    algo_label:        str   = ""
    total_steps:       int   = 0        # records minus the initial one
    highlighted_nodes: int   = 0        # in the newest record
    highlighted_edges: int   = 0
    completed:         bool  = False
    wall_time_ms:      float = 0.0      # time spent inside initialize() / step()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """Append-only list of StepRecords."""

    def __init__(self):
        self._records: List[StepRecord] = []

    def record(self, algorithm: Algorithm) -> StepRecord:
        """Freeze the algorithm's current state and description as the next record."""
        info = algorithm.get_step_info()
        if not info.strip():
            info = INITIAL_DESCRIPTION if not self._records else f"Step {len(self._records)}."
        entry = StepRecord(state=algorithm.get_state().freeze(), description=info)
        self._records.append(entry)
        return entry

    def clear(self) -> None:
        self._records = []

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def records(self) -> Tuple[StepRecord, ...]:
        return tuple(self._records)

    @property
    def last(self) -> Optional[StepRecord]:
        return self._records[-1] if self._records else None

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> StepRecord:
        return self._records[index]

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> List[Dict[str, Any]]:
        return [
            {"index": i, **entry.to_dict()}
            for i, entry in enumerate(self._records)
        ]
