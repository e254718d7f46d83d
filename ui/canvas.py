"""
canvas.py — SVG Renderer
========================
Pure rendering functions: Snapshot → SVG string.

    render_array_svg(ArraySnapshot)   → bar chart, one bar per element
    render_graph_svg(GraphSnapshot)   → nodes on their layout positions,
                                        edges with arrows / weight labels
    render_snapshot(snapshot)         → whichever of the two fits

Design decisions:
  - NO mutation.  A snapshot is frozen; rendering reads it and returns
    a string, so any thread may render any published snapshot.
  - State-based colouring is a priority lookup: the first flag that is
    set picks the fill (sorted wins over swapped wins over compared).
  - Unreached distances are drawn as ∞.
"""

import math
from html import escape
from typing import Dict, Optional, Union

from model import ArraySnapshot, Bar, EdgeView, GraphSnapshot, NodeView


# ---------------------------------------------------------------------------
# Visual Config — palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 800
    height: int = 600
    bg:     str = "#0d1117"

    # bar colors (flag → fill)
    bar_colors: Dict[str, str] = {
        "default":  "#3b82f6",   # blue
        "compared": "#06b6d4",   # cyan
        "swapped":  "#ec4899",   # pink
        "sorted":   "#10b981",   # emerald green
    }
    bar_gap:          int = 2
    bar_label_color:  str = "#e6edf3"
    bar_label_size:   int = 10
    bar_label_limit:  int = 40   # more bars than this → no value labels

    # node colors (flag → fill)
    node_colors: Dict[str, str] = {
        "default":  "#1c2128",   # dark grey
        "in_queue": "#f59e0b",   # amber
        "visited":  "#10b981",   # emerald green
        "current":  "#06b6d4",   # bright teal
    }
    node_radius:        int = 22
    node_stroke:        str = "#30363d"
    node_stroke_width:  int = 2
    node_label_color:   str = "#e6edf3"
    node_label_size:    int = 13
    distance_color:     str = "#f59e0b"
    distance_size:      int = 11

    # edge
    edge_color:         str = "#484f58"
    edge_highlight:     str = "#ec4899"
    edge_width:         int = 2
    edge_width_active:  int = 4
    edge_arrow_size:    int = 10
    edge_weight_color:  str = "#7d8590"
    edge_weight_size:   int = 12
    edge_weight_bg:     str = "#161b22"

    font: str = "'DM Sans', sans-serif"


CONFIG = CanvasConfig()

Snapshot = Union[ArraySnapshot, GraphSnapshot]


def render_snapshot(snapshot: Optional[Snapshot], config: CanvasConfig = CONFIG) -> str:
    if isinstance(snapshot, ArraySnapshot):
        return render_array_svg(snapshot, config)
    if isinstance(snapshot, GraphSnapshot):
        return render_graph_svg(snapshot, config)
    return _svg_open(config) + "\n</svg>"


def _svg_open(config: CanvasConfig) -> str:
    return (
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">'
    )


# ---------------------------------------------------------------------------
# Array (bar chart)
# ---------------------------------------------------------------------------
def render_array_svg(snapshot: ArraySnapshot, config: CanvasConfig = CONFIG) -> str:
    parts = [_svg_open(config)]
    n = len(snapshot.bars)
    if n:
        top = max(bar.value for bar in snapshot.bars) or 1
        slot = config.width / n
        width = max(slot - config.bar_gap, 1)
        usable = config.height - 20
        labels = n <= config.bar_label_limit
        for i, bar in enumerate(snapshot.bars):
            parts.append(_render_bar(i, bar, slot, width, usable, top, labels, config))
    parts.append("</svg>")
    return "\n".join(parts)


def _bar_fill(bar: Bar, config: CanvasConfig) -> str:
    for flag in ("sorted", "swapped", "compared"):
        if getattr(bar, flag):
            return config.bar_colors[flag]
    return config.bar_colors["default"]


def _render_bar(
    index: int,
    bar: Bar,
    slot: float,
    width: float,
    usable: float,
    top: float,
    labels: bool,
    config: CanvasConfig,
) -> str:
    h = max(bar.value / top * usable, 1)
    x = index * slot + config.bar_gap / 2
    y = config.height - h
    parts = [
        f'<g class="bar" data-index="{index}">',
        f'  <rect x="{x:.1f}" y="{y:.1f}" width="{width:.1f}" height="{h:.1f}" '
        f'fill="{_bar_fill(bar, config)}" rx="2"/>',
    ]
    if labels:
        parts.append(
            f'  <text x="{x + width / 2:.1f}" y="{y - 4:.1f}" text-anchor="middle" '
            f'font-size="{config.bar_label_size}" font-family="{config.font}" '
            f'fill="{config.bar_label_color}">{bar.value}</text>'
        )
    parts.append("</g>")
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------
def render_graph_svg(snapshot: GraphSnapshot, config: CanvasConfig = CONFIG) -> str:
    positions = {n.id: (n.x, n.y) for n in snapshot.nodes}
    parts = [_svg_open(config)]

    # edges first so nodes sit on top
    for edge in snapshot.edges:
        parts.append(_render_edge(edge, positions, snapshot.weighted, config))
    for node in snapshot.nodes:
        parts.append(_render_node(node, config))

    parts.append("</svg>")
    return "\n".join(parts)


def _node_fill(node: NodeView, config: CanvasConfig) -> str:
    for flag in ("current", "visited", "in_queue"):
        if getattr(node, flag):
            return config.node_colors[flag]
    return config.node_colors["default"]


def _render_node(node: NodeView, config: CanvasConfig) -> str:
    cx, cy, r = node.x, node.y, config.node_radius
    label = escape(node.id)
    parts = [f'<g class="node" data-id="{label}">']

    if node.current:
        parts.append(
            f'  <circle cx="{cx:.1f}" cy="{cy:.1f}" r="{r + 8}" fill="none" '
            f'stroke="{config.node_colors["current"]}" stroke-width="2" opacity="0.3"/>'
        )
    parts.append(
        f'  <circle cx="{cx:.1f}" cy="{cy:.1f}" r="{r}" fill="{_node_fill(node, config)}" '
        f'stroke="{config.node_stroke}" stroke-width="{config.node_stroke_width}"/>'
    )
    parts.append(
        f'  <text x="{cx:.1f}" y="{cy + 5:.1f}" text-anchor="middle" '
        f'font-size="{config.node_label_size}" font-family="{config.font}" '
        f'fill="{config.node_label_color}" font-weight="600">{label}</text>'
    )
    if node.distance is not None:
        dist = "∞" if math.isinf(node.distance) else node.distance
        parts.append(
            f'  <text x="{cx:.1f}" y="{cy - r - 6:.1f}" text-anchor="middle" '
            f'font-size="{config.distance_size}" font-family="{config.font}" '
            f'fill="{config.distance_color}">{dist}</text>'
        )
    parts.append("</g>")
    return "\n".join(parts)


def _render_edge(edge: EdgeView, positions: Dict, weighted: bool, config: CanvasConfig) -> str:
    if edge.source not in positions or edge.target not in positions:
        return ""
    x1, y1 = positions[edge.source]
    x2, y2 = positions[edge.target]

    dx, dy = x2 - x1, y2 - y1
    dist = math.hypot(dx, dy)
    if dist < 0.001:
        return ""  # self-loop / overlapping nodes

    # shorten the line by node_radius on both ends
    ux, uy = dx / dist, dy / dist
    r = config.node_radius
    ax, ay = x1 + ux * r, y1 + uy * r
    bx, by = x2 - ux * r, y2 - uy * r

    stroke = config.edge_highlight if edge.highlighted else config.edge_color
    width = config.edge_width_active if edge.highlighted else config.edge_width

    parts = [f'<g class="edge" data-source="{escape(edge.source)}" data-target="{escape(edge.target)}">']
    parts.append(
        f'  <line x1="{ax:.1f}" y1="{ay:.1f}" x2="{bx:.1f}" y2="{by:.1f}" '
        f'stroke="{stroke}" stroke-width="{width}"/>'
    )
    if edge.directed:
        parts.append(_render_arrow(bx, by, ux, uy, stroke, config))

    if weighted:
        # label at the midpoint, nudged off the line
        mx, my = (x1 + x2) / 2 - uy * 12, (y1 + y2) / 2 + ux * 12
        parts.append(
            f'  <circle cx="{mx:.1f}" cy="{my:.1f}" r="11" fill="{config.edge_weight_bg}" opacity="0.9"/>'
        )
        parts.append(
            f'  <text x="{mx:.1f}" y="{my + 4:.1f}" text-anchor="middle" '
            f'font-size="{config.edge_weight_size}" font-family="{config.font}" '
            f'fill="{config.edge_weight_color}" font-weight="600">{edge.weight}</text>'
        )
    parts.append("</g>")
    return "\n".join(parts)


def _render_arrow(x: float, y: float, ux: float, uy: float, color: str, config: CanvasConfig) -> str:
    """Arrowhead with its tip at (x, y), pointing along (ux, uy)."""
    size = config.edge_arrow_size
    px, py = -uy * size * 0.5, ux * size * 0.5
    bx, by = x - ux * size, y - uy * size
    return (
        f'  <polygon points="{x:.1f},{y:.1f} {bx + px:.1f},{by + py:.1f} '
        f'{bx - px:.1f},{by - py:.1f}" fill="{color}"/>'
    )
