"""
workspace.py — Per-session editing workspace
=============================================
A Workspace is what one browser tab works on: the editable graph, the
weighted / directed toggles, the selected algorithm and the Stepper of
the current run.

Editing the graph always discards the run; an algorithm only ever sees
the graph it was started on (the Stepper keeps its own copy).
"""

import logging
import threading
import uuid
from collections import OrderedDict
from typing import Any, Dict, Optional

from graph import Graph
from algorithms import create_algorithm
from engine.stepper import SPEED_PRESETS, Stepper

logger = logging.getLogger(__name__)


class Workspace:
    """
    Attributes:
        token    : session token the workspace is stored under.
        graph    : the editable graph.
        weighted : False → algorithms run on an unweighted copy (every
                   weight effectively 1); the stored weights are kept.
        algo_key : algorithm selected for the next run.
        options  : options for the next run (A* target / seed).
        stepper  : Stepper of the current run, None when nothing runs.
    """

    def __init__(self, token: str, graph: Optional[Graph] = None, algo_key: str = "bfs",
                 speed: str = "medium"):
        self.token:    str               = token
        self.graph:    Graph             = graph if graph is not None else Graph.sample()
        self.weighted: bool              = True
        self.algo_key: str               = algo_key
        self.options:  Dict[str, Any]    = {}
        self.speed:    str               = speed if speed in SPEED_PRESETS else "medium"
        self.stepper:  Optional[Stepper] = None
        self.lock = threading.RLock()

    # ------------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------------
    def run(self, algo_key: Optional[str] = None, **options: Any) -> Stepper:
        """Create the algorithm, start a fresh Stepper on the current graph."""
        with self.lock:
            key = algo_key or self.algo_key
            algorithm = create_algorithm(key, **options)
            stepper = Stepper()
            stepper.set_speed(self.speed)
            stepper.start(algorithm, self.run_graph())
            self.algo_key, self.options, self.stepper = key, options, stepper
            return stepper

    def discard_run(self) -> None:
        with self.lock:
            if self.stepper is not None:
                logger.debug("Workspace %s: discarding %s run", self.token, self.stepper.algorithm.key)
            self.stepper = None

    def run_graph(self) -> Graph:
        """The graph as the algorithms see it."""
        return self.graph if self.weighted else self.graph.without_weights()

    # ------------------------------------------------------------------
    # Graph edits (each one invalidates the run)
    # ------------------------------------------------------------------
    def replace_graph(self, graph: Graph) -> None:
        with self.lock:
            self.graph = graph
            self.discard_run()

    def set_directed(self, directed: bool) -> None:
        with self.lock:
            self.graph = self.graph.clone(directed=directed)
            self.discard_run()

    def set_weighted(self, weighted: bool) -> None:
        with self.lock:
            self.weighted = weighted
            self.discard_run()

    def edited(self) -> None:
        """Call after mutating `graph` in place."""
        self.discard_run()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "graph":    self.graph.to_dict(),
            "weighted": self.weighted,
            "algo_key": self.algo_key,
            "speed":    self.speed,
            "run":      self.stepper.to_dict() if self.stepper else None,
        }


class WorkspaceStore:
    """In-memory workspaces keyed by session token, least recently used evicted first."""

    def __init__(self, default_algorithm: str = "bfs", default_speed: str = "medium",
                 max_workspaces: int = 500):
        if max_workspaces < 1:
            raise ValueError("max_workspaces must be at least 1.")
        self._items: "OrderedDict[str, Workspace]" = OrderedDict()
        self._lock = threading.Lock()
        self.default_algorithm = default_algorithm
        self.default_speed     = default_speed
        self.max_workspaces    = max_workspaces

    def create(self) -> Workspace:
        token = uuid.uuid4().hex
        ws = Workspace(token, algo_key=self.default_algorithm, speed=self.default_speed)
        with self._lock:
            self._items[token] = ws
            while len(self._items) > self.max_workspaces:
                evicted, _ = self._items.popitem(last=False)
                logger.info("Evicted workspace %s", evicted)
        logger.info("Created workspace %s", token)
        return ws

    def get(self, token: Optional[str]) -> Optional[Workspace]:
        if token is None:
            return None
        with self._lock:
            ws = self._items.get(token)
            if ws is not None:
                self._items.move_to_end(token)
            return ws

    def get_or_create(self, token: Optional[str]) -> Workspace:
        return self.get(token) or self.create()

    def drop(self, token: str) -> None:
        with self._lock:
            self._items.pop(token, None)

    def __len__(self) -> int:
        return len(self._items)
