"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls   – first/prev/play/next/last/reset + speed
  • algorithm_selector  – algorithms grouped by family, A* target picker
  • graph_tools         – sample / random / empty graph, directed &
                          weighted toggles, JSON import / export
  • step_log            – every recorded step, node ids colored by role
  • analytics_panel     – step count, highlight counts, wall time

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine); the page template
    in main.py stitches them together.
"""

import re
from html import escape
from typing import List, Optional, Sequence

from algorithms import FAMILIES, AlgoInfo
from algorithms.step import StepRecord
from engine import RunMetrics, SPEED_PRESETS

CURRENT_NODE_COLOR     = "#2e7d32"
HIGHLIGHTED_NODE_COLOR = "#c62828"

FAMILY_LABELS = {
    "traversal": "Traversal & shortest path",
    "mst":       "Minimum spanning tree",
    "geometry":  "Geometric search",
}


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    is_playing: bool = False,
    position: int = 0,
    total: int = 0,
    speed: str = "medium",
    is_complete: bool = False,
    can_advance: bool = False,
) -> str:
    play_icon  = "⏸" if is_playing else "▶"
    play_label = "Pause" if is_playing else "Play"
    nxt = "" if can_advance else "disabled"

    speed_options = "".join(
        f'<option value="{name}" {"selected" if name == speed else ""}>{name.capitalize()}</option>'
        for name in SPEED_PRESETS
    )

    return f"""
    <div class="panel playback-controls">
      <h3>Playback</h3>
      <div class="button-row">
        <button id="btn-first" title="First step">⏮</button>
        <button id="btn-prev" title="Previous step" {'disabled' if position <= 0 else ''}>◀</button>
        <button id="btn-play" title="{play_label}" {nxt}>{play_icon}</button>
        <button id="btn-next" title="Next step" {nxt}>▶</button>
        <button id="btn-last" title="Last recorded step">⏭</button>
        <button id="btn-reset" title="Restart the run">↺</button>
      </div>
      <div class="step-info">
        Step <span id="current-step">{position}</span> / <span id="total-steps">{max(total - 1, 0)}</span>
        {' <span class="finished-badge">COMPLETE</span>' if is_complete else ''}
      </div>
      <div class="speed-control">
        <label>Speed:</label>
        <select id="speed-selector">{speed_options}</select>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(
    algorithms: List[AlgoInfo],
    selected_key: str = "bfs",
    node_ids: Sequence[str] = (),
    target: Optional[str] = None,
) -> str:
    groups = []
    for family in FAMILIES:
        members = [a for a in algorithms if a.family == family]
        if not members:
            continue
        options = "".join(
            f'<option value="{a.key}" {"selected" if a.key == selected_key else ""}>'
            f'{escape(a.label)} — {a.complexity_time}</option>'
            for a in members
        )
        groups.append(f'<optgroup label="{FAMILY_LABELS.get(family, family)}">{options}</optgroup>')

    target_options = ['<option value="">Random</option>'] + [
        f'<option value="{escape(nid, quote=True)}" {"selected" if nid == target else ""}>{escape(nid)}</option>'
        for nid in node_ids
    ]

    return f"""
    <div class="panel algorithm-selector">
      <h3>Algorithm</h3>
      <select id="algo-selector">{''.join(groups)}</select>
      <label class="astar-only">Target:
        <select id="target-selector">{''.join(target_options)}</select>
      </label>
      <button id="btn-run" class="btn-primary">▶ Run Algorithm</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Graph Tools
# ---------------------------------------------------------------------------
def graph_tools(directed: bool = False, weighted: bool = True) -> str:
    return f"""
    <div class="panel graph-tools">
      <h3>Graph</h3>
      <div class="button-row">
        <button id="btn-sample" class="btn-secondary">Sample graph</button>
        <button id="btn-new" class="btn-secondary">Empty graph</button>
      </div>
      <label><input type="checkbox" id="toggle-directed" {'checked' if directed else ''}> Directed</label>
      <label><input type="checkbox" id="toggle-weighted" {'checked' if weighted else ''}> Weighted</label>

      <h4>Random</h4>
      <label>Nodes: <input type="number" id="rand-nodes" value="8" min="1" max="40"></label>
      <label>Edge prob: <input type="number" id="rand-prob" value="0.3" min="0" max="1" step="0.05"></label>
      <label>Seed: <input type="number" id="rand-seed" placeholder="random"></label>
      <button id="btn-generate" class="btn-secondary">Generate</button>

      <h4>Import / Export</h4>
      <textarea id="graph-json" rows="6" placeholder='{{"nodes": [...], "edges": [...]}}'></textarea>
      <div class="button-row">
        <button id="btn-import" class="btn-secondary">Import JSON</button>
        <button id="btn-export" class="btn-secondary">Export JSON</button>
      </div>
      <p class="hint">Click the canvas to add a node, drag to move, shift-click two nodes to connect them.</p>
    </div>
    """


# ---------------------------------------------------------------------------
# Step Log
# ---------------------------------------------------------------------------
def highlight_line(line: str, current: Sequence[str], highlighted: Sequence[str]) -> str:
    """Escape `line` and wrap every whole-word node id in a colored span."""
    colors = {nid: CURRENT_NODE_COLOR for nid in current}
    for nid in highlighted:
        colors.setdefault(nid, HIGHLIGHTED_NODE_COLOR)
    if not line or not colors:
        return escape(line)

    # longest first so "N10" wins over "N1"
    alternatives = "|".join(re.escape(n) for n in sorted(colors, key=len, reverse=True))
    pattern = re.compile(rf"\b(?:{alternatives})\b")

    out, last = [], 0
    for match in pattern.finditer(line):
        out.append(escape(line[last:match.start()]))
        out.append(
            f'<span class="node-ref" style="color: {colors[match.group()]}; font-weight: 600">'
            f'{escape(match.group())}</span>'
        )
        last = match.end()
    out.append(escape(line[last:]))
    return "".join(out)


def step_log(records: Sequence[StepRecord], position: int = -1) -> str:
    if not records:
        return """
        <div class="panel step-log">
          <h3>Steps</h3>
          <p class="placeholder">Run an algorithm to see its steps.</p>
        </div>
        """

    items = []
    for index, record in enumerate(records):
        state = record.state
        lines = "".join(
            f'<div class="log-line">{highlight_line(line, state.current_nodes, state.highlighted_nodes)}</div>'
            for line in record.lines
        )
        active = "active" if index == position else ""
        items.append(
            f'<li class="log-entry {active}" data-index="{index}">'
            f'<span class="log-index">{index}</span>{lines}</li>'
        )

    return f"""
    <div class="panel step-log">
      <h3>Steps</h3>
      <ol class="log-list">{''.join(items)}</ol>
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics or not metrics.algo_key:
        return """
        <div class="panel analytics-panel">
          <h3>Analytics</h3>
          <p class="placeholder">Run an algorithm to see metrics.</p>
        </div>
        """

    status = "Complete" if metrics.completed else "Running"
    return f"""
    <div class="panel analytics-panel">
      <h3>Analytics — {escape(metrics.algo_label)}</h3>
      <table>
        <tr><td>Steps recorded:</td><td><strong>{metrics.total_steps}</strong></td></tr>
        <tr><td>Highlighted nodes:</td><td><strong>{metrics.highlighted_nodes}</strong></td></tr>
        <tr><td>Highlighted edges:</td><td><strong>{metrics.highlighted_edges}</strong></td></tr>
        <tr><td>Wall time:</td><td><strong>{metrics.wall_time_ms:.2f} ms</strong></td></tr>
        <tr><td>Status:</td><td><strong>{status}</strong></td></tr>
      </table>
    </div>
    """
