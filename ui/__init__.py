"""
ui/
---
Presentation layer.

    from ui import render_snapshot
    from ui import speed_control, algorithm_selector, …
"""

from ui.canvas import CanvasConfig, render_array_svg, render_graph_svg, render_snapshot

from ui.controls import (
    speed_control,
    algorithm_selector,
    array_input,
    graph_input,
    start_node_picker,
    metrics_panel,
    explanation_panel,
)

__all__ = [
    "CanvasConfig",
    "render_array_svg",
    "render_graph_svg",
    "render_snapshot",
    "speed_control",
    "algorithm_selector",
    "array_input",
    "graph_input",
    "start_node_picker",
    "metrics_panel",
    "explanation_panel",
]
