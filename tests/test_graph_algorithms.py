import math

import pytest

from algorithms import Outcome
from algorithms.bellman_ford import bellman_ford
from algorithms.bfs import bfs
from algorithms.dfs import dfs
from algorithms.dijkstra import dijkstra
from engine.token import CancellationToken
from model import Graph

SAMPLE = """
A: B, C
B: A, D, E
C: A, F
D: B
E: B, F
F: C, E
"""


def drain(gen):
    """Exhaust a step generator, returning (steps, return value)."""
    steps = []
    while True:
        try:
            steps.append(next(gen))
        except StopIteration as stop:
            return steps, stop.value


@pytest.fixture
def sample() -> Graph:
    return Graph.from_adjacency_list(SAMPLE)


@pytest.fixture
def ring() -> Graph:
    return Graph.from_mapping(
        {"A": {"B": 1, "C": 1}, "B": {"C": 1}, "C": {"D": 1}, "D": {"A": 1}},
        directed=True, weighted=True,
    )


def test_bfs_visits_in_layer_order(sample):
    drain(bfs(sample, "A", CancellationToken()))
    assert sample.traversal_order == ["A", "B", "C", "D", "E", "F"]


def test_bfs_never_enqueues_twice(sample):
    gen = bfs(sample, "A", CancellationToken())
    enqueued = [s.explanation.split("'")[1] for s in gen if s.explanation.startswith("Enqueue")]
    assert sorted(enqueued) == ["B", "C", "D", "E", "F"]


def test_dfs_goes_deep_first(sample):
    drain(dfs(sample, "A", CancellationToken()))
    assert sample.traversal_order == ["A", "B", "D", "E", "F", "C"]


def test_traversal_only_reaches_component():
    g = Graph.from_adjacency_list("A: B\nB: A\nC: D\nD: C")
    drain(bfs(g, "A", CancellationToken()))
    assert g.traversal_order == ["A", "B"]
    g.reset_algo_state()
    drain(dfs(g, "C", CancellationToken()))
    assert g.traversal_order == ["C", "D"]


def test_directed_bfs_follows_arrows():
    g = Graph.from_adjacency_list("A: B\nB: C\nC:\nD: A", directed=True)
    drain(bfs(g, "A", CancellationToken()))
    assert g.traversal_order == ["A", "B", "C"]


def test_dijkstra_shortest_distances(ring):
    _, outcome = drain(dijkstra(ring, "A", CancellationToken()))
    assert outcome is None
    snap = ring.snapshot()
    assert snap.distances == {"A": 0, "B": 1, "C": 1, "D": 2}
    assert ring.traversal_order[0] == "A"


def test_dijkstra_tie_goes_to_first_node(ring):
    drain(dijkstra(ring, "A", CancellationToken()))
    # B and C are both at distance 1; B comes first in node order
    assert ring.traversal_order == ["A", "B", "C", "D"]


def test_dijkstra_leaves_unreachable_at_infinity():
    g = Graph.from_adjacency_list("A: B(2)\nB:\nC: A(1)", directed=True, weighted=True)
    drain(dijkstra(g, "A", CancellationToken()))
    assert g.nodes["B"].distance == 2
    assert math.isinf(g.nodes["C"].distance)
    assert g.snapshot().to_dict()["distances"]["C"] is None
    assert g.traversal_order == ["A", "B"]


def test_bellman_ford_detects_negative_cycle():
    g = Graph.from_adjacency_list("A: B(1)\nB: C(-3)\nC: A(1)", directed=True, weighted=True)
    _, outcome = drain(bellman_ford(g, "A", CancellationToken()))
    assert outcome is Outcome.NEGATIVE_CYCLE
    assert g.negative_cycle
    assert g.snapshot().negative_cycle


def test_bellman_ford_handles_negative_edge():
    g = Graph.from_adjacency_list("A: B(4), C(2)\nB:\nC: B(-3)", directed=True, weighted=True)
    _, outcome = drain(bellman_ford(g, "A", CancellationToken()))
    assert outcome is Outcome.COMPLETED
    assert not g.negative_cycle
    assert g.snapshot().distances == {"A": 0, "B": -1, "C": 2}


def test_bellman_ford_records_each_node_once(ring):
    drain(bellman_ford(ring, "A", CancellationToken()))
    assert ring.traversal_order == ["A", "B", "C", "D"]
    assert ring.snapshot().distances == {"A": 0, "B": 1, "C": 1, "D": 2}


def test_bellman_ford_stops_after_a_quiet_round():
    g = Graph.from_adjacency_list("A: B(1)\nB: C(1)\nC: D(1)", directed=True, weighted=True)
    steps, outcome = drain(bellman_ford(g, "A", CancellationToken()))
    rounds = {s.explanation.split(":")[0] for s in steps if s.explanation.startswith("Round")}
    assert outcome is Outcome.COMPLETED
    assert rounds == {"Round 1", "Round 2"}
    assert g.snapshot().distances == {"A": 0, "B": 1, "C": 2, "D": 3}


@pytest.mark.parametrize("fn", [bfs, dfs, dijkstra, bellman_ford])
def test_cancel_stops_graph_run(sample, fn):
    token = CancellationToken()
    gen = fn(sample, "A", token)
    next(gen)
    next(gen)
    token.cancel()
    steps, _ = drain(gen)
    assert len(steps) <= 2
    assert len(sample.traversal_order) < 6


@pytest.mark.parametrize("fn", [bfs, dfs, dijkstra, bellman_ford])
def test_rerun_is_deterministic(sample, fn):
    first, _ = drain(fn(sample, "A", CancellationToken()))
    order = list(sample.traversal_order)
    sample.reset_algo_state()
    second, _ = drain(fn(sample, "A", CancellationToken()))
    assert sample.traversal_order == order
    assert [s.explanation for s in first] == [s.explanation for s in second]
