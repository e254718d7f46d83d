import math
import random

import pytest

from algorithms.bfs import bfs
from engine.token import CancellationToken
from errors import InputFormatError
from model import ArrayModel, Graph, GraphFormatError
from model.element import MAX_VALUE, MIN_VALUE


# ---------------------------------------------------------------------------
# Adjacency list
# ---------------------------------------------------------------------------
def test_adjacency_list_adds_listed_neighbours_as_nodes():
    g = Graph.from_adjacency_list("A: B, C\nB: D", directed=True)
    assert g.node_ids() == ["A", "B", "C", "D"]
    assert g.neighbours("A") == [("B", 1), ("C", 1)]
    assert g.neighbours("D") == []


def test_blank_lines_are_skipped():
    g = Graph.from_adjacency_list("\nA: B\n\n   \nB: C\n")
    assert g.node_count() == 3


def test_unweighted_input_ignores_weights():
    g = Graph.from_adjacency_list("A: B(7), C(-2)")
    assert g.neighbours("A") == [("B", 1), ("C", 1)]
    assert not g.has_negative_edges()


def test_weighted_input_reads_weights():
    g = Graph.from_adjacency_list("A: B(7), C(-2.5)\nB: C", directed=True, weighted=True)
    assert g.neighbours("A") == [("B", 7), ("C", -2.5)]
    # a bare neighbour in weighted mode gets weight 1
    assert g.neighbours("B") == [("C", 1)]
    assert g.has_negative_edges()


def test_undirected_input_is_symmetrised():
    g = Graph.from_adjacency_list("A: B(3)\nC: A(2)", weighted=True)
    assert dict(g.neighbours("B")) == {"A": 3}
    assert dict(g.neighbours("A")) == {"B": 3, "C": 2}
    assert g.edge_count() == 2


def test_undirected_conflicting_weights_rejected():
    with pytest.raises(GraphFormatError):
        Graph.from_adjacency_list("A: B(2)\nB: A(3)", weighted=True)


def test_directed_reverse_edges_may_differ():
    g = Graph.from_adjacency_list("A: B(2)\nB: A(3)", directed=True, weighted=True)
    assert g.adjacency == {"A": {"B": 2}, "B": {"A": 3}}
    assert g.edge_count() == 2


@pytest.mark.parametrize("text, line", [
    ("A B C", 1),
    ("A: B\nB: C: D", 2),
    ("A: B\n: C", 2),
    ("A: B(x)", 1),
    ("A: B(3", 1),
    ("A: B C", 1),
])
def test_malformed_lines_report_line_number(text, line):
    with pytest.raises(GraphFormatError) as exc:
        Graph.from_adjacency_list(text, weighted=True)
    assert exc.value.line == line
    assert str(exc.value).startswith(f"line {line}:")


def test_empty_text_rejected():
    with pytest.raises(GraphFormatError):
        Graph.from_adjacency_list("  \n ")


def test_format_error_is_input_error():
    with pytest.raises(InputFormatError):
        Graph.from_adjacency_list("nonsense")
    with pytest.raises(ValueError):
        Graph.from_adjacency_list("nonsense")


# ---------------------------------------------------------------------------
# Adjacency matrix
# ---------------------------------------------------------------------------
def test_adjacency_matrix():
    g = Graph.from_adjacency_matrix("A, B, C\n0, 4, 0\n4, 0, 8\n0, 8, 0", weighted=True)
    assert g.node_ids() == ["A", "B", "C"]
    assert dict(g.neighbours("B")) == {"A": 4, "C": 8}
    assert g.edge_count() == 2


def test_adjacency_matrix_whitespace_separated():
    g = Graph.from_adjacency_matrix("X Y\n0 1\n0 0", directed=True)
    assert g.neighbours("X") == [("Y", 1)]
    assert g.neighbours("Y") == []


@pytest.mark.parametrize("text", [
    "",
    "A, B\n0, 1",
    "A, B\n0, 1, 0\n1, 0",
    "A, B\n0, x\n1, 0",
    "A, A\n0, 1\n1, 0",
])
def test_bad_matrix_rejected(text):
    with pytest.raises(GraphFormatError):
        Graph.from_adjacency_matrix(text)


# ---------------------------------------------------------------------------
# Random graphs
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("directed", [False, True])
def test_random_graph_is_connected(directed):
    for seed in range(10):
        g = Graph.generate_random(8, directed=directed, seed=seed)
        assert g.node_ids() == list("ABCDEFGH")
        for _ in bfs(g, "A", CancellationToken()):
            pass
        assert sorted(g.traversal_order) == list("ABCDEFGH")


def test_random_graph_weights_in_range():
    g = Graph.generate_random(10, weighted=True, seed=3)
    weights = [w for nbrs in g.adjacency.values() for w in nbrs.values()]
    assert weights and all(1 <= w <= 10 for w in weights)


def test_random_graph_seed_is_reproducible():
    a = Graph.generate_random(7, weighted=True, seed=11)
    b = Graph.generate_random(7, weighted=True, seed=11)
    assert a.adjacency == b.adjacency


def test_layout_places_nodes_apart():
    g = Graph.generate_random(5, seed=1)
    positions = {(round(n.x), round(n.y)) for n in g.nodes.values()}
    assert len(positions) == 5


# ---------------------------------------------------------------------------
# Traversal state
# ---------------------------------------------------------------------------
def test_reset_algo_state_keeps_structure():
    g = Graph.from_adjacency_list("A: B\nB: C")
    g.record_visit("A")
    g.set_current("A")
    g.mark_visited(["A"])
    g.highlight("A", "B")
    g.negative_cycle = True

    g.reset_algo_state()
    snap = g.snapshot()
    assert snap.traversal_order == ()
    assert not any(n.visited or n.current or n.in_queue for n in snap.nodes)
    assert not any(e.highlighted for e in snap.edges)
    assert not snap.negative_cycle
    assert g.edge_count() == 2


def test_highlight_respects_direction():
    g = Graph.from_adjacency_list("A: B\nB: A", directed=True)
    g.highlight("B", "A")
    assert [(e.source, e.target) for e in g.edges if e.highlighted] == [("B", "A")]


def test_snapshot_is_frozen_copy():
    g = Graph.from_adjacency_list("A: B")
    snap = g.snapshot()
    g.set_current("A")
    assert not snap.node("A").current
    assert g.snapshot().node("A").current


def test_snapshot_distances_are_read_only():
    g = Graph.from_adjacency_list("A: B", directed=True, weighted=True)
    g.set_distances({"A": 0})
    snap = g.snapshot()
    with pytest.raises(TypeError):
        snap.distances["A"] = 5
    g.set_distances({"A": 0, "B": 1})
    assert dict(snap.distances) == {"A": 0, "B": math.inf}


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------
def test_array_from_text():
    model = ArrayModel.from_text(" 42, 17 ,250")
    assert model.values() == [42, 17, 250]


@pytest.mark.parametrize("text", ["", "12, abc", "5, 20", "20, 301", "1.5, 20", "20,,30"])
def test_array_from_text_rejects(text):
    with pytest.raises(InputFormatError):
        ArrayModel.from_text(text)


def test_random_array_in_range():
    model = ArrayModel.random(100, random.Random(5))
    assert len(model) == 100
    assert all(MIN_VALUE <= v < MAX_VALUE for v in model.values())


def test_array_snapshot_is_frozen_copy():
    model = ArrayModel([30, 20])
    snap = model.snapshot(step_number=4, explanation="x", run_id=9)
    model.swap(0, 1)
    model[0].sorted = True
    assert snap.values == (30, 20)
    assert not snap.bars[1].sorted
    assert snap.to_dict()["run_id"] == 9
