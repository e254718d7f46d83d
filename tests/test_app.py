import pytest

from config import Config
from main import create_app

SAMPLE = "A: B, C\nB: A, D, E\nC: A, F\nD: B\nE: B, F\nF: C, E"


@pytest.fixture
def app():
    app = create_app(Config(delay_scale=0, log_level="WARNING"))
    yield app
    app.extensions["controller"].stop()


@pytest.fixture
def client(app):
    return app.test_client()


def wait_idle(app):
    assert app.extensions["controller"].wait(5)


def test_index_renders(client):
    res = client.get("/")
    assert res.status_code == 200
    assert b"<svg" in res.data
    assert b"algo-selector" in res.data


def test_algorithms_listed(client):
    keys = [a["key"] for a in client.get("/api/algorithms").get_json()["algorithms"]]
    assert keys == ["bubble", "selection", "insertion", "merge", "quick",
                    "bfs", "dfs", "dijkstra", "bellman-ford"]


def test_custom_array_and_sort(app, client):
    res = client.post("/api/array/custom", json={"text": "50, 20, 30"})
    assert res.status_code == 200
    assert [b["value"] for b in res.get_json()["snapshot"]["bars"]] == [50, 20, 30]

    res = client.post("/api/run", json={"algo": "insertion", "speed": 10})
    assert res.status_code == 200
    assert res.get_json()["started"] == "insertion"
    wait_idle(app)

    state = client.get("/api/state").get_json()
    assert state["running"] is False
    assert state["outcome"] == "completed"
    assert [b["value"] for b in state["snapshot"]["bars"]] == [20, 30, 50]


def test_bad_custom_array_keeps_model(client):
    client.post("/api/array/custom", json={"text": "50, 20, 30"})
    res = client.post("/api/array/custom", json={"text": "50, banana"})
    assert res.status_code == 400
    assert "error" in res.get_json()

    bars = client.get("/api/state").get_json()["snapshot"]["bars"]
    assert [b["value"] for b in bars] == [50, 20, 30]


def test_generate_array(client):
    res = client.post("/api/array/generate", json={"size": 12, "seed": 3})
    assert len(res.get_json()["snapshot"]["bars"]) == 12
    assert client.post("/api/array/generate", json={"size": 2}).status_code == 400
    assert client.post("/api/array/generate", json={"size": "lots"}).status_code == 400


def test_import_graph_and_bfs(app, client):
    res = client.post("/api/graph/import", json={"text": SAMPLE, "format": "adj-list"})
    assert res.status_code == 200
    assert res.get_json()["node_ids"] == ["A", "B", "C", "D", "E", "F"]

    assert client.post("/api/run", json={"algo": "bfs", "start_node": "A"}).status_code == 200
    wait_idle(app)
    state = client.get("/api/state").get_json()
    assert state["traversal_order"] == ["A", "B", "C", "D", "E", "F"]
    assert "<circle" in state["svg"]


def test_import_matrix(client):
    res = client.post("/api/graph/import", json={
        "text": "A B\n0 3\n3 0", "format": "adj-matrix", "weighted": True,
    })
    edges = res.get_json()["snapshot"]["edges"]
    assert [(e["source"], e["target"], e["weight"]) for e in edges] == [("A", "B", 3)]


def test_bad_import_keeps_graph(client):
    client.post("/api/graph/import", json={"text": SAMPLE})
    res = client.post("/api/graph/import", json={"text": "A: B\nB C"})
    assert res.status_code == 400
    assert "line 2" in res.get_json()["error"]
    assert client.get("/api/state").get_json()["node_ids"] == ["A", "B", "C", "D", "E", "F"]

    res = client.post("/api/graph/import", json={"text": SAMPLE, "format": "yaml"})
    assert res.status_code == 400


def test_run_preconditions_are_400(client):
    client.post("/api/graph/import", json={"text": "A: B(-1)", "directed": True, "weighted": True})
    assert client.post("/api/run", json={"algo": "bfs"}).status_code == 400
    assert client.post("/api/run", json={"algo": "dijkstra", "start_node": "A"}).status_code == 400
    assert client.post("/api/run", json={"algo": "bubble"}).status_code == 400
    assert client.post("/api/run", json={"algo": "nope"}).status_code == 400


def test_generate_graph(client):
    res = client.post("/api/graph/generate", json={"nodes": 7, "directed": True, "seed": 2})
    state = res.get_json()
    assert state["directed"] is True
    assert len(state["node_ids"]) == 7
    assert client.post("/api/graph/generate", json={"nodes": 40}).status_code == 400


def test_second_run_conflicts_and_stop():
    app = create_app(Config(delay_scale=1.0, log_level="WARNING"))
    client = app.test_client()
    client.post("/api/array/custom", json={"text": "90, 80, 70, 60, 50"})

    assert client.post("/api/run", json={"algo": "bubble", "speed": 1}).status_code == 200
    assert client.post("/api/run", json={"algo": "bubble", "speed": 1}).status_code == 409
    assert client.post("/api/array/custom", json={"text": "10, 20"}).status_code == 409

    state = client.post("/api/stop").get_json()
    assert state["running"] is False
    assert state["outcome"] == "cancelled"
    assert state["snapshot"]["run_id"] == 0
