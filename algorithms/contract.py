"""
contract.py — The Algorithm Contract
=====================================
Every algorithm in the registry is a generator function:

    def bfs(graph: Graph, trace: StepTrace) -> Iterator[bool]:
        ...initialise trace.state...
        yield bool(queue)            # end of initialize()
        while queue:
            ...one atomic unit of work...
            yield bool(queue)        # end of one step()

Each `yield` hands back "do further steps remain?".  StepAlgorithm turns
such a generator into the uniform initialize / step / get_state /
get_step_info object the recorder and UI drive.

State machine:
    UNINITIALIZED  →  initialize()  →  RUNNING  (or straight to TERMINAL
                                                 for degenerate graphs)
    RUNNING        →  step() == False  →  TERMINAL
    any            →  initialize()  →  RUNNING   (reset)

Usage errors never raise: step() before initialize() or after TERMINAL
returns False and leaves the live state exactly as it was.
"""

from enum import Enum
from typing import Any, Callable, Dict, Iterator, Optional, Protocol

from graph import Graph
from algorithms.step import AlgorithmState, StepTrace


StepGenerator = Callable[..., Iterator[bool]]


class Algorithm(Protocol):
    """Structural type every stepping engine satisfies."""

    def initialize(self, graph: Graph) -> None: ...

    def step(self) -> bool: ...

    def get_state(self) -> AlgorithmState: ...

    def get_step_info(self) -> str: ...


class Phase(Enum):
    UNINITIALIZED = "uninitialized"
    RUNNING       = "running"
    TERMINAL      = "terminal"


class StepAlgorithm:
    """
    Attributes:
        key        : registry key of the wrapped algorithm.
        label      : human label.
        options    : keyword options forwarded to the generator (e.g. A* target).
        phase      : current Phase.
        step_count : number of step() calls that did work since initialize().
    """

    def __init__(self, key: str, label: str, fn: StepGenerator, **options: Any):
        self.key:        str               = key
        self.label:      str               = label
        self.options:    Dict[str, Any]    = options
        self.phase:      Phase             = Phase.UNINITIALIZED
        self.step_count: int               = 0
        self._fn:        StepGenerator     = fn
        self._trace:     StepTrace         = StepTrace()
        self._steps:     Optional[Iterator[bool]] = None

    # ------------------------------------------------------------------
    # Contract
    # ------------------------------------------------------------------
    def initialize(self, graph: Graph) -> None:
        """Reset everything from `graph`.  Safe to call again (reset)."""
        self._close()
        self._trace      = StepTrace()
        self.step_count  = 0
        self._steps      = self._fn(graph, self._trace, **self.options)
        self.phase       = Phase.RUNNING
        self._advance()

    def step(self) -> bool:
        if self.phase is not Phase.RUNNING:
            return False
        self._trace.begin_step()
        self.step_count += 1
        return self._advance()

    def get_state(self) -> AlgorithmState:
        return self._trace.state

    def get_step_info(self) -> str:
        return self._trace.description

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_initialized(self) -> bool:
        return self.phase is not Phase.UNINITIALIZED

    @property
    def is_complete(self) -> bool:
        return self.phase is Phase.TERMINAL

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _advance(self) -> bool:
        more = next(self._steps, False)
        if not more:
            self.phase = Phase.TERMINAL
            self._close()
        return bool(more)

    def _close(self) -> None:
        if self._steps is not None:
            self._steps.close()
            self._steps = None

    def __repr__(self) -> str:
        return f"StepAlgorithm({self.key}, phase={self.phase.value}, steps={self.step_count})"
