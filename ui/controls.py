"""
controls.py — UI Control Panels
===============================
Every sidebar panel is a pure function that takes state and returns HTML.

Panels:
  • speed_control        – 1..10 slider + Start / Stop
  • algorithm_selector   – sorting and graph algorithms, grouped
  • array_input          – random size / custom comma-separated values
  • graph_input          – random graph / adjacency-list & matrix import
  • start_node_picker    – dropdown of the loaded graph's nodes
  • metrics_panel        – result card of the last run
  • explanation_panel    – "what just happened"

The main app stitches them together; the page script talks to the
JSON API and re-renders the canvas from /api/state.
"""

from html import escape
from typing import List, Optional

from algorithms import ARRAY, GRAPH, AlgoInfo
from engine import MAX_SPEED, MIN_SPEED, RunMetrics


# ---------------------------------------------------------------------------
# Speed & Run Controls
# ---------------------------------------------------------------------------
def speed_control(speed: int = 5, is_running: bool = False) -> str:
    disabled = "disabled" if is_running else ""
    idle     = "" if is_running else "disabled"
    return f"""
    <div class="panel speed-control">
      <h3>⏯ Run</h3>
      <label>Speed:
        <input type="range" id="speed" min="{MIN_SPEED}" max="{MAX_SPEED}" step="1" value="{speed}">
        <span id="speed-val">{speed}</span>
      </label>
      <div class="button-row">
        <button id="btn-start" class="btn-primary" {disabled}>▶ Start</button>
        <button id="btn-stop" class="btn-secondary" {idle}>■ Stop</button>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(algorithms: List[AlgoInfo], selected_key: str = "bubble") -> str:
    groups = []
    for kind, title in ((ARRAY, "Sorting"), (GRAPH, "Graph")):
        options = [
            f'<option value="{a.key}" data-kind="{a.kind}" {"selected" if a.key == selected_key else ""}>'
            f'{escape(a.label)} — {a.complexity_time}</option>'
            for a in algorithms if a.kind == kind
        ]
        if options:
            groups.append(f'<optgroup label="{title}">{"".join(options)}</optgroup>')

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-selector">
        {''.join(groups)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Input Panels
# ---------------------------------------------------------------------------
def array_input(min_size: int = 5, max_size: int = 100, size: int = 30) -> str:
    return f"""
    <div class="panel array-input">
      <h3>📊 Array</h3>
      <label>Size: <input type="number" id="array-size" value="{size}" min="{min_size}" max="{max_size}"></label>
      <button id="btn-gen-array" class="btn-secondary">Generate Random</button>
      <input type="text" id="array-custom" placeholder="42, 17, 250, 99">
      <button id="btn-custom-array" class="btn-secondary">Use Custom Values</button>
    </div>
    """


def graph_input(min_nodes: int = 3, max_nodes: int = 12, nodes: int = 6) -> str:
    return f"""
    <div class="panel graph-input">
      <h3>🌐 Graph</h3>
      <label><input type="checkbox" id="graph-directed"> Directed</label>
      <label><input type="checkbox" id="graph-weighted"> Weighted</label>
      <label>Nodes: <input type="number" id="graph-nodes" value="{nodes}" min="{min_nodes}" max="{max_nodes}"></label>
      <button id="btn-gen-graph" class="btn-secondary">Generate Random</button>

      <label>Import Format:</label>
      <select id="import-format">
        <option value="adj-list">Adjacency List</option>
        <option value="adj-matrix">Adjacency Matrix</option>
      </select>
      <textarea id="import-text" rows="6" placeholder="A: B(3), C(5)
B: D(2)
C: D(1)"></textarea>
      <button id="btn-import" class="btn-secondary">Import Graph</button>
    </div>
    """


def start_node_picker(node_ids: List[str], start: Optional[str] = None) -> str:
    options = ['<option value="">-- Start node --</option>']
    for nid in node_ids:
        sel = "selected" if nid == start else ""
        options.append(f'<option value="{escape(nid)}" {sel}>{escape(nid)}</option>')

    return f"""
    <div class="panel start-node-picker">
      <h3>🎯 Start Node</h3>
      <select id="start-node">
        {''.join(options)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Metrics Panel
# ---------------------------------------------------------------------------
def metrics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel metrics-panel">
          <h3>📈 Result</h3>
          <p class="placeholder">Run an algorithm to see its result.</p>
        </div>
        """

    rows = [
        ("Outcome", metrics.outcome.replace("_", " ")),
        ("Steps", metrics.total_steps),
        ("Wall Time", f"{metrics.wall_time_ms:.0f} ms"),
    ]
    if metrics.kind == GRAPH:
        rows.append(("Traversal", " → ".join(metrics.traversal_order) or "—"))
        if metrics.distances:
            rows.append(("Distances", ", ".join(
                f"{nid}: {'∞' if d is None else d}" for nid, d in metrics.distances.items()
            )))
    if metrics.negative_cycle:
        rows.append(("Warning", "⚠️ Negative cycle detected"))

    body = "".join(
        f"<tr><td>{label}:</td><td><strong>{escape(str(value))}</strong></td></tr>" for label, value in rows
    )
    return f"""
    <div class="panel metrics-panel">
      <h3>📈 Result — {escape(metrics.algo_label)}</h3>
      <table>{body}</table>
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel
# ---------------------------------------------------------------------------
def explanation_panel(explanation: str = "") -> str:
    if not explanation:
        return """<div class="explanation-text">▶ Load an array or a graph, pick an algorithm and press <strong>Start</strong>.</div>"""
    return f"""<div class="explanation-text">{escape(explanation)}</div>"""
