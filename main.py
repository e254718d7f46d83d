"""
main.py — Step Visualizer Flask App
===================================
The web server that powers the visualizer.

Routes:
  GET  /                       – main UI
  GET  /api/algorithms         – registry metadata
  POST /api/array/generate     – random array of a given size
  POST /api/array/custom       – array from comma-separated text
  POST /api/graph/generate     – random connected graph
  POST /api/graph/import       – graph from adjacency list / matrix text
  POST /api/run                – start a run (returns immediately)
  POST /api/stop               – stop the current run
  GET  /api/state              – latest snapshot + SVG (for polling)

State management:
  One RunController per app, stored in `app.extensions["controller"]`.
  The page only remembers its last choices (algorithm, start node,
  speed) in the Flask session; the model and the run live in the
  controller.

Errors:
  InputFormatError / PreconditionError → 400, RunActiveError → 409,
  always as {"error": message}.
"""

import logging
from typing import Any, Dict, Optional

from flask import Flask, current_app, jsonify, render_template_string, request, session

from algorithms import get_algorithm, list_algorithms
from config import Config
from engine import RunController
from errors import InputFormatError, PreconditionError, RunActiveError
from model import ArrayModel, Graph
from ui import (
    render_snapshot,
    speed_control,
    algorithm_selector,
    array_input,
    graph_input,
    start_node_picker,
    metrics_panel,
    explanation_panel,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def create_app(config: Optional[Config] = None) -> Flask:
    config = config or Config.from_env()
    _configure_logging(config)

    app = Flask(__name__)
    app.secret_key = config.secret_key
    app.config["STEPVIZ"] = config

    controller = RunController(config)
    controller.generate_array(min(30, config.max_array_size))
    app.extensions["controller"] = controller

    _register_errors(app)
    _register_routes(app)
    return app


def _configure_logging(config: Config) -> None:
    logging.basicConfig(level=config.log_level.upper(), format=LOG_FORMAT)


def _controller() -> RunController:
    return current_app.extensions["controller"]


# ---------------------------------------------------------------------------
# Request Helpers
# ---------------------------------------------------------------------------
def _payload() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _int_field(data: Dict[str, Any], name: str, default: Optional[int] = None) -> Optional[int]:
    value = data.get(name, default)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise PreconditionError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise PreconditionError(f"{name} must be an integer, got {value!r}") from None


def _state_payload(ctl: RunController) -> Dict[str, Any]:
    snap = ctl.store.latest
    model = ctl.store.model
    state = {
        "kind":            ctl.store.kind,
        "running":         ctl.is_running,
        "snapshot":        snap.to_dict() if snap else None,
        "svg":             render_snapshot(snap),
        "traversal_order": ctl.traversal_order,
        "outcome":         ctl.last_outcome.value if ctl.last_outcome and not ctl.is_running else None,
        "metrics":         metrics_panel(ctl.last_metrics) if not ctl.is_running else None,
    }
    if isinstance(model, Graph):
        state["node_ids"] = model.node_ids()
        state["directed"] = model.directed
    return state


# ---------------------------------------------------------------------------
# Error Mapping
# ---------------------------------------------------------------------------
def _register_errors(app: Flask) -> None:

    @app.errorhandler(InputFormatError)
    @app.errorhandler(PreconditionError)
    def bad_request(err):
        logger.info("rejected request: %s", err)
        return jsonify({"error": str(err)}), 400

    @app.errorhandler(RunActiveError)
    def conflict(err):
        return jsonify({"error": str(err)}), 409


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
def _register_routes(app: Flask) -> None:

    @app.route("/")
    def index():
        ctl = _controller()
        config = ctl.config
        algo_key = session.get("algo", "bubble")
        start = session.get("start_node")
        node_ids = ctl.store.model.node_ids() if isinstance(ctl.store.model, Graph) else []
        snap = ctl.store.latest

        return render_template_string(
            INDEX_TEMPLATE,
            svg=render_snapshot(snap),
            controls=speed_control(session.get("speed", config.default_speed), ctl.is_running),
            algo_selector=algorithm_selector(list_algorithms(), algo_key),
            array_panel=array_input(config.min_array_size, config.max_array_size),
            graph_panel=graph_input(config.min_nodes, config.max_nodes),
            picker=start_node_picker(node_ids, start),
            metrics=metrics_panel(ctl.last_metrics),
            explanation=explanation_panel(snap.explanation if snap else ""),
        )

    @app.route("/api/algorithms")
    def api_algorithms():
        return jsonify({"algorithms": [a.to_dict() for a in list_algorithms()]})

    # ---------- Arrays ----------
    @app.route("/api/array/generate", methods=["POST"])
    def api_array_generate():
        data = _payload()
        ctl = _controller()
        ctl.generate_array(_int_field(data, "size", 30), seed=_int_field(data, "seed"))
        return jsonify(_state_payload(ctl))

    @app.route("/api/array/custom", methods=["POST"])
    def api_array_custom():
        ctl = _controller()
        model = ArrayModel.from_text(str(_payload().get("text", "")))
        ctl.load_array(model)
        return jsonify(_state_payload(ctl))

    # ---------- Graphs ----------
    @app.route("/api/graph/generate", methods=["POST"])
    def api_graph_generate():
        data = _payload()
        ctl = _controller()
        ctl.generate_graph(
            _int_field(data, "nodes", 6),
            directed=bool(data.get("directed", False)),
            weighted=bool(data.get("weighted", False)),
            seed=_int_field(data, "seed"),
        )
        return jsonify(_state_payload(ctl))

    @app.route("/api/graph/import", methods=["POST"])
    def api_graph_import():
        data = _payload()
        ctl = _controller()
        text = str(data.get("text", ""))
        fmt = data.get("format", "adj-list")
        directed = bool(data.get("directed", False))
        weighted = bool(data.get("weighted", False))

        if fmt == "adj-list":
            graph = Graph.from_adjacency_list(text, directed=directed, weighted=weighted)
        elif fmt == "adj-matrix":
            graph = Graph.from_adjacency_matrix(text, directed=directed, weighted=weighted)
        else:
            raise InputFormatError(f"unknown import format {fmt!r}")

        ctl.load_graph(graph)
        session.pop("start_node", None)
        return jsonify(_state_payload(ctl))

    # ---------- Run ----------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        data = _payload()
        ctl = _controller()
        algo_key = str(data.get("algo", session.get("algo", "")))
        speed = _int_field(data, "speed", ctl.config.default_speed)
        start_node = data.get("start_node") or None
        directed = data.get("directed")

        ctl.start(algo_key, speed=speed, start_node=start_node, directed=directed)
        session.update(algo=algo_key, speed=speed, start_node=start_node)

        info = get_algorithm(algo_key)
        return jsonify({"started": info.key, "label": info.label, **_state_payload(ctl)})

    @app.route("/api/stop", methods=["POST"])
    def api_stop():
        ctl = _controller()
        ctl.stop()
        return jsonify(_state_payload(ctl))

    @app.route("/api/state")
    def api_state():
        return jsonify(_state_payload(_controller()))


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Step Visualizer</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-emerald: #10b981;
    }

    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 340px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 24px 16px;
    }

    #main { flex: 1; display: flex; flex-direction: column; }

    #canvas-container {
      flex: 1;
      display: flex;
      align-items: center;
      justify-content: center;
      border-bottom: 1px solid var(--border);
    }
    #canvas-svg svg { max-width: 100%; max-height: 100%; }

    #bottom-panel { padding: 20px; background: var(--bg-dark); min-height: 120px; }
    .explanation-text { color: var(--text-secondary); line-height: 1.8; font-size: 14px; }
    #traversal { font-family: monospace; color: var(--accent-cyan); margin-top: 8px; }
    #error { color: #f43f5e; margin-top: 8px; }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 18px;
      margin-bottom: 16px;
    }
    .panel h3 {
      font-size: 13px;
      margin-bottom: 14px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
    }
    .button-row { display: flex; gap: 8px; margin-top: 8px; }

    button {
      background: var(--accent-cyan);
      color: #fff;
      border: none;
      padding: 10px 16px;
      border-radius: 8px;
      cursor: pointer;
      font-size: 13px;
      font-weight: 600;
      margin-top: 6px;
    }
    button:disabled { opacity: 0.4; cursor: default; }
    .btn-primary { background: var(--accent-emerald); }
    .btn-secondary { background: #1c2128; border: 1px solid var(--border); }

    select, input[type="number"], input[type="text"], input[type="range"], textarea {
      width: 100%;
      padding: 8px 10px;
      margin: 6px 0;
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 8px;
      color: var(--text-primary);
      font-size: 13px;
    }
    textarea { font-family: monospace; resize: vertical; }
    label { display: block; margin: 8px 0 4px; font-size: 12px; color: var(--text-secondary); }

    table { width: 100%; font-size: 13px; }
    table td:last-child { text-align: right; color: var(--accent-cyan); }
    .placeholder { color: var(--text-secondary); font-size: 13px; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="algo">{{ algo_selector|safe }}</div>
    <div id="controls">{{ controls|safe }}</div>
    <div id="picker">{{ picker|safe }}</div>
    <div id="array-panel">{{ array_panel|safe }}</div>
    <div id="graph-panel">{{ graph_panel|safe }}</div>
    <div id="metrics">{{ metrics|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
    </div>
    <div id="bottom-panel">
      <div id="explanation">{{ explanation|safe }}</div>
      <div id="traversal"></div>
      <div id="error"></div>
    </div>
  </div>

  <script>
    let polling = null;

    async function call(method, url, data) {
      const opts = {method: method, headers: {'Content-Type': 'application/json'}};
      if (data !== undefined) opts.body = JSON.stringify(data);
      const res = await fetch(url, opts);
      const body = await res.json();
      document.getElementById('error').textContent = body.error || '';
      return body;
    }

    function show(state) {
      if (!state || state.error) return;
      document.getElementById('canvas-svg').innerHTML = state.svg;
      const snap = state.snapshot;
      document.getElementById('explanation').textContent = snap ? snap.explanation : '';
      document.getElementById('traversal').textContent =
        state.traversal_order.length ? 'Traversal: ' + state.traversal_order.join(' → ') : '';
      if (state.node_ids) {
        const picker = document.getElementById('start-node');
        const chosen = picker.value;
        picker.innerHTML = '<option value="">-- Start node --</option>' +
          state.node_ids.map(id => '<option value="' + id + '">' + id + '</option>').join('');
        if (state.node_ids.includes(chosen)) picker.value = chosen;
      }
      if (state.metrics) document.getElementById('metrics').innerHTML = state.metrics;
      document.getElementById('btn-start').disabled = state.running;
      document.getElementById('btn-stop').disabled = !state.running;
      if (!state.running && polling) { clearInterval(polling); polling = null; }
    }

    function poll() {
      if (polling) return;
      polling = setInterval(async () => show(await call('GET', '/api/state')), 80);
    }

    document.getElementById('speed').addEventListener('input', (e) => {
      document.getElementById('speed-val').textContent = e.target.value;
    });

    document.getElementById('btn-start').addEventListener('click', async () => {
      const state = await call('POST', '/api/run', {
        algo: document.getElementById('algo-selector').value,
        speed: +document.getElementById('speed').value,
        start_node: document.getElementById('start-node').value,
      });
      show(state);
      if (state.running) poll();
    });

    document.getElementById('btn-stop').addEventListener('click', async () => {
      show(await call('POST', '/api/stop', {}));
    });

    document.getElementById('btn-gen-array').addEventListener('click', async () => {
      show(await call('POST', '/api/array/generate', {size: +document.getElementById('array-size').value}));
    });

    document.getElementById('btn-custom-array').addEventListener('click', async () => {
      show(await call('POST', '/api/array/custom', {text: document.getElementById('array-custom').value}));
    });

    document.getElementById('btn-gen-graph').addEventListener('click', async () => {
      show(await call('POST', '/api/graph/generate', {
        nodes: +document.getElementById('graph-nodes').value,
        directed: document.getElementById('graph-directed').checked,
        weighted: document.getElementById('graph-weighted').checked,
      }));
    });

    document.getElementById('btn-import').addEventListener('click', async () => {
      show(await call('POST', '/api/graph/import', {
        text: document.getElementById('import-text').value,
        format: document.getElementById('import-format').value,
        directed: document.getElementById('graph-directed').checked,
        weighted: document.getElementById('graph-weighted').checked,
      }));
    });
  </script>
</body>
</html>
"""


app = create_app()


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    cfg = app.config["STEPVIZ"]
    logger.info("Step Visualizer listening on http://%s:%d", cfg.host, cfg.port)
    app.run(host=cfg.host, port=cfg.port, debug=False, threaded=True)
