"""
canvas.py — SVG Graph Renderer
================================
Pure rendering function: Graph + Snapshot → SVG string.

The renderer consumes:
  • graph      – the Graph object (node positions, edges)
  • snapshot   – the frozen state of the displayed step (may be None)
  • config     – visual config (canvas size, colors, fonts, …)

Coloring precedence, highest first: selected (editor) → current step
focus → highlighted → default.  node_values are drawn as a small badge
above each node.
"""

import math
from html import escape
from typing import Dict, Optional

from graph import Edge, Graph, Node
from algorithms.step import Snapshot


# ---------------------------------------------------------------------------
# Visual Config — color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 900
    height: int = 700
    bg:     str = "#fafafa"

    node_colors: Dict[str, str] = {
        "default":     "steelblue",
        "highlighted": "#ffcc80",
        "current":     "#66bb6a",
        "selected":    "#ff9800",
    }

    edge_colors: Dict[str, str] = {
        "default":     "#999999",
        "highlighted": "#f44336",
        "current":     "#43a047",
        "selected":    "#ff9800",
    }

    # node
    node_radius:        int = 20
    node_stroke:        str = "#ffffff"
    node_stroke_width:  int = 2
    node_label_color:   str = "#ffffff"
    node_label_size:    int = 13
    value_color:        str = "#1f2933"
    value_size:         int = 12

    # edge
    edge_width:         int = 2
    edge_width_current: int = 3
    edge_arrow_size:    int = 10
    edge_weight_color:  str = "#52606d"
    edge_weight_size:   int = 12
    edge_weight_bg:     str = "#ffffff"


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_canvas(
    graph: Graph,
    snapshot: Optional[Snapshot] = None,
    config: CanvasConfig = CONFIG,
    show_weights: bool = True,
    selected: Optional[str] = None,
) -> str:
    """
    Returns an SVG string.

    Args:
        graph        : The graph to render.
        snapshot     : State of the displayed step (None → plain graph).
        config       : Visual config.
        show_weights : Draw weight labels (off in unweighted mode).
        selected     : Id of the node or edge selected in the editor.
    """
    snap = snapshot or Snapshot()

    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" class="graph-canvas">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    # -- edges (draw first so nodes sit on top) --
    for edge in graph.edge_list():
        svg_parts.append(_render_edge(edge, graph.directed, snap, config, show_weights, selected))

    # -- nodes --
    for node in graph.node_list():
        svg_parts.append(_render_node(node, snap, config, selected))

    svg_parts.append("</svg>")
    return "\n".join(p for p in svg_parts if p)


# ---------------------------------------------------------------------------
# Node Rendering
# ---------------------------------------------------------------------------
def _render_node(node: Node, snap: Snapshot, config: CanvasConfig, selected: Optional[str]) -> str:
    if node.id == selected:
        fill = config.node_colors["selected"]
    elif node.id in snap.current_nodes:
        fill = config.node_colors["current"]
    elif node.id in snap.highlighted_nodes:
        fill = config.node_colors["highlighted"]
    else:
        fill = config.node_colors["default"]

    cx, cy = node.x, node.y
    r = config.node_radius
    nid = escape(node.id, quote=True)

    parts = [
        f'<g class="node" data-id="{nid}">',
        f'  <circle cx="{cx}" cy="{cy}" r="{r}" '
        f'fill="{fill}" stroke="{config.node_stroke}" stroke-width="{config.node_stroke_width}"/>',
        f'  <text x="{cx}" y="{cy + 5}" text-anchor="middle" '
        f'font-size="{config.node_label_size}" font-family="sans-serif" '
        f'fill="{config.node_label_color}" pointer-events="none">{escape(node.display_label)}</text>',
    ]
    if node.id in snap.node_values:
        parts.append(
            f'  <text x="{cx}" y="{cy - r - 6}" text-anchor="middle" class="node-value" '
            f'font-size="{config.value_size}" font-family="monospace" '
            f'fill="{config.value_color}">{_format_value(snap.node_values[node.id])}</text>'
        )
    parts.append('</g>')
    return "\n".join(parts)


def _format_value(value: float) -> str:
    if isinstance(value, float) and not value.is_integer():
        return f"{value:.2f}"
    return str(int(value))


# ---------------------------------------------------------------------------
# Edge Rendering
# ---------------------------------------------------------------------------
def _render_edge(
    edge: Edge,
    directed: bool,
    snap: Snapshot,
    config: CanvasConfig,
    show_weights: bool,
    selected: Optional[str],
) -> str:
    src, tgt = edge.source, edge.target

    stroke_width = config.edge_width
    if edge.id == selected:
        stroke = config.edge_colors["selected"]
    elif edge.id in snap.current_edges:
        stroke = config.edge_colors["current"]
        stroke_width = config.edge_width_current
    elif edge.id in snap.highlighted_edges:
        stroke = config.edge_colors["highlighted"]
    else:
        stroke = config.edge_colors["default"]

    dx, dy = tgt.x - src.x, tgt.y - src.y
    dist = math.hypot(dx, dy)
    if dist < 0.001:
        return ""  # coincident endpoints

    # shorten by node_radius on both ends so the line stops at the circles
    ux, uy = dx / dist, dy / dist
    r = config.node_radius
    x1, y1 = src.x + ux * r, src.y + uy * r
    x2, y2 = tgt.x - ux * r, tgt.y - uy * r

    parts = [
        f'<g class="edge" data-id="{escape(edge.id, quote=True)}">',
        f'  <line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" '
        f'stroke="{stroke}" stroke-width="{stroke_width}"/>',
    ]

    if directed:
        parts.append(_render_arrow(x2, y2, ux, uy, stroke, config))

    if show_weights and edge.weight:
        # label sits beside the midpoint, offset perpendicular to the edge
        mx = (src.x + tgt.x) / 2 - uy * 12
        my = (src.y + tgt.y) / 2 + ux * 12
        parts.append(
            f'  <circle cx="{mx}" cy="{my}" r="11" fill="{config.edge_weight_bg}" opacity="0.9"/>'
        )
        parts.append(
            f'  <text x="{mx}" y="{my + 4}" text-anchor="middle" '
            f'font-size="{config.edge_weight_size}" font-family="sans-serif" '
            f'fill="{config.edge_weight_color}">{_format_value(edge.weight)}</text>'
        )

    parts.append('</g>')
    return "\n".join(parts)


def _render_arrow(x: float, y: float, ux: float, uy: float, color: str, config: CanvasConfig) -> str:
    """Draw an arrowhead at (x, y) pointing in direction (ux, uy)."""
    size = config.edge_arrow_size
    px, py = -uy, ux
    p1_x = x - ux * size + px * (size * 0.5)
    p1_y = y - uy * size + py * (size * 0.5)
    p2_x = x - ux * size - px * (size * 0.5)
    p2_y = y - uy * size - py * (size * 0.5)
    return f'  <polygon points="{x},{y} {p1_x},{p1_y} {p2_x},{p2_y}" fill="{color}"/>'
