"""
engine/
-------
History recording, navigation & per-session workspaces.

    from engine import Stepper, Recorder, Workspace
"""

from engine.recorder  import Recorder, RunMetrics
from engine.stepper   import Stepper, StepperState, SPEED_PRESETS
from engine.workspace import Workspace, WorkspaceStore

__all__ = [
    "Recorder",
    "RunMetrics",
    "SPEED_PRESETS",
    "Stepper",
    "StepperState",
    "Workspace",
    "WorkspaceStore",
]
