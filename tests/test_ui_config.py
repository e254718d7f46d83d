import pytest

from config import Config
from engine.recorder import RunMetrics
from model import ArrayModel, Graph
from ui import (
    CanvasConfig,
    metrics_panel,
    render_array_svg,
    render_graph_svg,
    render_snapshot,
    speed_control,
)


# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------
def test_array_svg_has_one_bar_per_element():
    model = ArrayModel([30, 60, 90])
    model[2].sorted = True
    model[0].swapped = True
    svg = render_array_svg(model.snapshot())

    assert svg.count('class="bar"') == 3
    assert CanvasConfig.bar_colors["sorted"] in svg
    assert CanvasConfig.bar_colors["swapped"] in svg
    assert svg.startswith("<svg") and svg.endswith("</svg>")


def test_sorted_colour_wins_over_compared():
    model = ArrayModel([30])
    model[0].sorted = True
    model[0].compared = True
    svg = render_array_svg(model.snapshot())
    assert CanvasConfig.bar_colors["compared"] not in svg


def test_graph_svg_draws_arrows_and_weights():
    g = Graph.from_adjacency_list("A: B(5)\nB: C(2)", directed=True, weighted=True)
    svg = render_graph_svg(g.snapshot())
    assert svg.count('class="node"') == 3
    assert svg.count("<polygon") == 2
    assert ">5</text>" in svg and ">2</text>" in svg


def test_undirected_unweighted_graph_has_no_arrows_or_labels():
    g = Graph.from_adjacency_list("A: B\nB: C")
    svg = render_graph_svg(g.snapshot())
    assert "<polygon" not in svg
    assert 'r="11"' not in svg


def test_unreached_distance_drawn_as_infinity():
    g = Graph.from_adjacency_list("A: B", directed=True, weighted=True)
    g.set_distances({"A": 0})
    svg = render_graph_svg(g.snapshot())
    assert "∞" in svg


def test_highlighted_edge_colour():
    g = Graph.from_adjacency_list("A: B")
    g.highlight("A", "B")
    assert CanvasConfig.edge_highlight in render_graph_svg(g.snapshot())


def test_render_snapshot_without_model():
    assert render_snapshot(None).startswith("<svg")


def test_metrics_panel():
    assert "Run an algorithm" in metrics_panel(None)
    html = metrics_panel(RunMetrics(
        algo_key="bfs", algo_label="Breadth-First Search", kind="graph",
        outcome="negative_cycle", traversal_order=["A", "B"], negative_cycle=True,
    ))
    assert "A → B" in html
    assert "negative cycle" in html


def test_stop_button_only_enabled_while_running():
    assert '<button id="btn-stop" class="btn-secondary" disabled>' in speed_control(is_running=False)
    running = speed_control(is_running=True)
    assert '<button id="btn-stop" class="btn-secondary" >' in running
    assert '<button id="btn-start" class="btn-primary" disabled>' in running


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------
def test_config_defaults():
    cfg = Config()
    assert cfg.delay_scale == 1.0
    assert cfg.default_speed == 5
    assert (cfg.min_array_size, cfg.max_array_size) == (5, 100)
    assert (cfg.min_nodes, cfg.max_nodes) == (3, 12)


def test_config_from_env():
    cfg = Config.from_env({
        "STEPVIZ_DELAY_SCALE": "0.25",
        "STEPVIZ_MAX_NODES": "20",
        "STEPVIZ_KEEP_SNAPSHOTS": "yes",
        "STEPVIZ_LOG_LEVEL": "debug",
        "UNRELATED": "1",
    })
    assert cfg.delay_scale == 0.25
    assert cfg.max_nodes == 20
    assert cfg.keep_snapshots is True
    assert cfg.log_level == "debug"
    assert cfg.default_speed == 5


def test_config_from_env_rejects_garbage():
    with pytest.raises(ValueError):
        Config.from_env({"STEPVIZ_PORT": "eighty"})
