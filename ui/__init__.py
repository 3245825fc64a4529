"""
ui/
---
HTML fragments for the editor page: the SVG canvas and the control
panels (playback bar, algorithm picker, graph tools, step log,
run analytics).

    from ui import render_canvas, step_log
"""

from ui.canvas import render_canvas, CanvasConfig

from ui.controls import (
    playback_controls,
    algorithm_selector,
    graph_tools,
    step_log,
    highlight_line,
    analytics_panel,
)

__all__ = [
    "render_canvas",
    "CanvasConfig",
    "playback_controls",
    "algorithm_selector",
    "graph_tools",
    "step_log",
    "highlight_line",
    "analytics_panel",
]
