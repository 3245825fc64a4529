"""
main.py — Graph Algorithm Visualizer Flask App
================================================
The web server that powers the visualizer.

Routes:
  GET    /                          – main UI
  GET    /api/graph                 – current graph (+ rendered canvas)
  PUT    /api/graph                 – import a serialised graph
  POST   /api/graph/sample          – load the six-node demo graph
  POST   /api/graph/generate        – seeded random graph
  POST   /api/graph/new             – empty graph
  POST   /api/graph/directed        – toggle directedness
  POST   /api/graph/weighted        – toggle weighted mode
  POST   /api/graph/nodes           – add node
  PATCH  /api/graph/nodes/<id>      – move / relabel node
  DELETE /api/graph/nodes/<id>      – delete node (and its edges)
  POST   /api/graph/edges           – add edge
  PATCH  /api/graph/edges/<id>      – reconnect / reweight edge
  DELETE /api/graph/edges/<id>      – delete edge
  GET    /api/algorithms            – registry cards
  POST   /api/run                   – initialise an algorithm run
  POST   /api/step/<action>         – next / prev / first / last / end / reset
  POST   /api/step/goto             – jump to a recorded step
  POST   /api/step/play             – toggle autoplay
  POST   /api/step/tick             – autoplay heartbeat
  POST   /api/speed                 – set autoplay speed preset
  GET    /api/state                 – everything the page renders
  GET    /api/history               – recorded steps as JSON

State management:
  The Flask session only carries a workspace token.  Graph, run and
  history live in an in-memory WorkspaceStore, one Workspace per token.
  Any graph edit discards the current run.
"""

import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify, render_template_string, request, session

import config
from graph import Graph, GraphError
from algorithms import list_algorithms
from engine import SPEED_PRESETS, Workspace, WorkspaceStore
from ui import (
    render_canvas,
    playback_controls,
    algorithm_selector,
    graph_tools,
    step_log,
    analytics_panel,
)

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = config.SECRET_KEY

store = WorkspaceStore(
    default_algorithm=config.DEFAULT_ALGORITHM,
    default_speed=config.DEFAULT_SPEED,
    max_workspaces=config.MAX_WORKSPACES,
)


# ---------------------------------------------------------------------------
# Session / request helpers
# ---------------------------------------------------------------------------
def get_workspace() -> Workspace:
    """Workspace of the calling browser session, created on first use."""
    ws = store.get_or_create(session.get("workspace"))
    session["workspace"] = ws.token
    return ws


def body() -> Dict[str, Any]:
    return request.get_json(silent=True) or {}


def number(data: Dict[str, Any], key: str, default: Any = None, cast=float) -> Any:
    value = data.get(key, default)
    if value is None or value == "":
        return default
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"'{key}' must be a number.")
    if cast is int:
        if not parsed.is_integer():
            raise ValueError(f"'{key}' must be a whole number.")
        return int(value) if isinstance(value, int) else int(parsed)
    return cast(parsed)


def text(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string.")
    return value


def error(message: str, status: int = 400):
    logger.warning("%s %s -> %d: %s", request.method, request.path, status, message)
    return jsonify({"error": message}), status


@app.errorhandler(GraphError)
@app.errorhandler(ValueError)
def handle_bad_request(exc):
    return error(str(exc), 400)


# ---------------------------------------------------------------------------
# Response assembly
# ---------------------------------------------------------------------------
def render_state(ws: Workspace, selected: Optional[str] = None) -> Dict[str, Any]:
    stepper = ws.stepper
    record  = stepper.current if stepper else None
    shown   = stepper.graph if stepper else ws.graph

    return {
        "graph":     ws.graph.to_dict(),
        "directed":  ws.graph.directed,
        "weighted":  ws.weighted,
        "algo_key":  ws.algo_key,
        "speed":     ws.speed,
        "run":       stepper.to_dict() if stepper else None,
        "svg":       render_canvas(shown, record.state if record else None,
                                   show_weights=ws.weighted, selected=selected),
        "playback":  playback_controls(
            is_playing=stepper.is_playing if stepper else False,
            position=stepper.position if stepper else 0,
            total=stepper.total if stepper else 0,
            speed=ws.speed,
            is_complete=stepper.is_complete if stepper else False,
            can_advance=stepper.can_advance if stepper else False,
        ),
        "step_log":  step_log(stepper.recorder.records if stepper else (),
                              stepper.position if stepper else -1),
        "analytics": analytics_panel(stepper.metrics() if stepper else None),
    }


def respond(ws: Workspace, **extra: Any):
    return jsonify({**render_state(ws, request.args.get("selected")), **extra})


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    ws = get_workspace()
    state = render_state(ws)
    return render_template_string(
        INDEX_TEMPLATE,
        svg=state["svg"],
        playback=state["playback"],
        step_log=state["step_log"],
        analytics=state["analytics"],
        algo_selector=algorithm_selector(list_algorithms(), ws.algo_key,
                                         ws.graph.node_ids(), ws.options.get("target")),
        graph_tools=graph_tools(directed=ws.graph.directed, weighted=ws.weighted),
        width=config.CANVAS_WIDTH,
        height=config.CANVAS_HEIGHT,
    )


# ---------------------------------------------------------------------------
# API: Whole-graph operations
# ---------------------------------------------------------------------------
@app.route("/api/graph", methods=["GET"])
def api_graph_get():
    return respond(get_workspace())


@app.route("/api/graph", methods=["PUT"])
def api_graph_import():
    data = body()
    ws = get_workspace()
    ws.replace_graph(Graph.from_dict(data.get("graph", data)))
    logger.info("Workspace %s imported %r", ws.token, ws.graph)
    return respond(ws)


@app.route("/api/graph/sample", methods=["POST"])
def api_graph_sample():
    ws = get_workspace()
    ws.replace_graph(Graph.sample())
    return respond(ws)


@app.route("/api/graph/generate", methods=["POST"])
def api_graph_generate():
    data = body()
    ws = get_workspace()
    nodes = number(data, "nodes", 8, int)
    prob  = number(data, "prob", 0.3)
    if not 0 <= nodes <= 200:
        raise ValueError("'nodes' must be between 0 and 200.")
    if not 0.0 <= prob <= 1.0:
        raise ValueError("'prob' must be between 0 and 1.")

    ws.replace_graph(Graph.generate_random(
        num_nodes=nodes,
        edge_probability=prob,
        directed=bool(data.get("directed", ws.graph.directed)),
        weighted=bool(data.get("weighted", True)),
        seed=number(data, "seed", None, int),
        canvas_w=config.CANVAS_WIDTH,
        canvas_h=config.CANVAS_HEIGHT,
    ))
    return respond(ws)


@app.route("/api/graph/new", methods=["POST"])
def api_graph_new():
    data = body()
    ws = get_workspace()
    ws.replace_graph(Graph(directed=bool(data.get("directed", ws.graph.directed))))
    return respond(ws)


@app.route("/api/graph/directed", methods=["POST"])
def api_graph_directed():
    ws = get_workspace()
    ws.set_directed(bool(body().get("directed", not ws.graph.directed)))
    return respond(ws)


@app.route("/api/graph/weighted", methods=["POST"])
def api_graph_weighted():
    ws = get_workspace()
    ws.set_weighted(bool(body().get("weighted", not ws.weighted)))
    return respond(ws)


# ---------------------------------------------------------------------------
# API: Node / edge editing
# ---------------------------------------------------------------------------
@app.route("/api/graph/nodes", methods=["POST"])
def api_node_add():
    data = body()
    ws = get_workspace()
    with ws.lock:
        node = ws.graph.create_node(
            number(data, "x", 0.0), number(data, "y", 0.0),
            label=text(data, "label"),
            node_id=data.get("id") or None,
        )
        ws.edited()
    return respond(ws, node=node.to_dict())


@app.route("/api/graph/nodes/<node_id>", methods=["PATCH", "DELETE"])
def api_node_edit(node_id: str):
    ws = get_workspace()
    with ws.lock:
        node = ws.graph.get_node(node_id)
        if node is None:
            return error(f"Unknown node '{node_id}'.", 404)
        if request.method == "DELETE":
            ws.graph.remove_node(node_id)
        else:
            data  = body()
            label = text(data, "label")
            x, y  = number(data, "x", node.x), number(data, "y", node.y)
            if "x" in data or "y" in data:
                ws.graph.move_node(node_id, x, y)
            if "label" in data:
                ws.graph.relabel_node(node_id, label)
        ws.edited()
    return respond(ws)


@app.route("/api/graph/edges", methods=["POST"])
def api_edge_add():
    data = body()
    ws = get_workspace()
    if not data.get("source") or not data.get("target"):
        raise ValueError("'source' and 'target' are required.")
    with ws.lock:
        edge = ws.graph.create_edge(
            str(data["source"]), str(data["target"]),
            weight=number(data, "weight", None),
            edge_id=data.get("id") or None,
        )
        ws.edited()
    return respond(ws, edge=edge.to_dict())


@app.route("/api/graph/edges/<edge_id>", methods=["PATCH", "DELETE"])
def api_edge_edit(edge_id: str):
    ws = get_workspace()
    with ws.lock:
        if ws.graph.get_edge(edge_id) is None:
            return error(f"Unknown edge '{edge_id}'.", 404)
        if request.method == "DELETE":
            ws.graph.remove_edge(edge_id)
        else:
            data = body()
            ws.graph.update_edge(
                edge_id,
                source_id=data.get("source") or None,
                target_id=data.get("target") or None,
                weight=number(data, "weight", None),
                clear_weight="weight" in data and data["weight"] in (None, ""),
            )
        ws.edited()
    return respond(ws)


# ---------------------------------------------------------------------------
# API: Algorithms & runs
# ---------------------------------------------------------------------------
@app.route("/api/algorithms", methods=["GET"])
def api_algorithms():
    return jsonify([info.to_dict() for info in list_algorithms()])


@app.route("/api/run", methods=["POST"])
def api_run():
    data = body()
    ws = get_workspace()
    ws.run(
        data.get("algo_key") or ws.algo_key,
        target=data.get("target") or None,
        seed=number(data, "seed", None, int),
    )
    return respond(ws)


def _stepper(ws: Workspace):
    if ws.stepper is None:
        raise ValueError("No algorithm is running. Start one with /api/run.")
    return ws.stepper


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    ws = get_workspace()
    stepper = _stepper(ws)
    index = number(body(), "index", None, int)
    if index is None:
        raise ValueError("'index' is required.")
    if not stepper.seek(index):
        return error(f"Step {index} has not been recorded (0..{stepper.total - 1}).", 404)
    return respond(ws)


@app.route("/api/step/play", methods=["POST"])
def api_step_play():
    ws = get_workspace()
    _stepper(ws).toggle_play()
    return respond(ws)


@app.route("/api/step/tick", methods=["POST"])
def api_step_tick():
    ws = get_workspace()
    moved = _stepper(ws).tick()
    return respond(ws, moved=moved)


@app.route("/api/step/<action>", methods=["POST"])
def api_step(action: str):
    ws = get_workspace()
    stepper = _stepper(ws)
    if action == "next":
        moved = stepper.next()
    elif action == "prev":
        moved = stepper.prev()
    elif action == "first":
        moved = stepper.first()
    elif action == "last":
        moved = stepper.last()
    elif action == "end":
        moved = stepper.run_to_completion(config.MAX_AUTO_STEPS) > 0 or stepper.last()
    elif action == "reset":
        moved = stepper.reset() is not None
    else:
        return error(f"Unknown step action '{action}'.", 404)
    return respond(ws, moved=moved)


@app.route("/api/speed", methods=["POST"])
def api_speed():
    ws = get_workspace()
    preset = body().get("speed", "medium")
    if preset not in SPEED_PRESETS:
        raise ValueError(f"Unknown speed '{preset}'.")
    ws.speed = preset
    if ws.stepper is not None:
        ws.stepper.set_speed(preset)
    return respond(ws)


@app.route("/api/state", methods=["GET"])
def api_state():
    return respond(get_workspace())


@app.route("/api/history", methods=["GET"])
def api_history():
    ws = get_workspace()
    return jsonify(_stepper(ws).recorder.export())


# ---------------------------------------------------------------------------
# Page template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Graph Algorithm Visualizer</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
      font-family: -apple-system, BlinkMacSystemFont, sans-serif;
      background: #f0f2f5; color: #1f2933;
      display: flex; height: 100vh; overflow: hidden;
    }
    #sidebar {
      width: 320px; background: #ffffff; border-right: 1px solid #d3d8de;
      overflow-y: auto; padding: 16px;
    }
    #main { flex: 1; display: flex; overflow: hidden; }
    #canvas-container { flex: 1; display: flex; align-items: center; justify-content: center; }
    #canvas-svg svg { max-width: 100%; max-height: 100vh; cursor: crosshair; }
    #log-container { width: 360px; overflow-y: auto; border-left: 1px solid #d3d8de; background: #ffffff; padding: 16px; }
    .panel { margin-bottom: 18px; }
    .panel h3 { font-size: 14px; margin-bottom: 8px; text-transform: uppercase; color: #52606d; }
    .panel h4 { font-size: 12px; margin: 10px 0 4px; color: #52606d; }
    .panel label { display: block; font-size: 13px; margin: 4px 0; }
    .button-row { display: flex; gap: 6px; margin: 6px 0; }
    button { padding: 6px 10px; border: 1px solid #c4cbd6; background: #f5f7fa; border-radius: 4px; cursor: pointer; }
    button:disabled { opacity: 0.4; cursor: default; }
    .btn-primary { background: #1976d2; color: #ffffff; border-color: #1976d2; margin-top: 6px; }
    select, input, textarea { width: 100%; padding: 4px; border: 1px solid #c4cbd6; border-radius: 4px; }
    input[type=checkbox] { width: auto; }
    .finished-badge { color: #2e7d32; font-weight: 700; margin-left: 6px; }
    .log-list { list-style: none; }
    .log-entry { border: 1px solid #d3d8de; border-radius: 4px; padding: 6px 8px; margin-bottom: 6px; cursor: pointer; font-size: 13px; }
    .log-entry.active { background: #eaf1ff; border-color: #1976d2; }
    .log-index { float: right; color: #52606d; font-size: 11px; }
    .placeholder, .hint { font-size: 12px; color: #52606d; font-style: italic; }
    #error { color: #c62828; font-size: 13px; min-height: 18px; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="error"></div>
    <div id="algo-panel">{{ algo_selector|safe }}</div>
    <div id="playback">{{ playback|safe }}</div>
    <div id="graph-tools">{{ graph_tools|safe }}</div>
    <div id="analytics">{{ analytics|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
    </div>
    <div id="log-container">
      <div id="step-log">{{ step_log|safe }}</div>
    </div>
  </div>

  <script>
    const WIDTH = {{ width }}, HEIGHT = {{ height }};
    let selected = null, playTimer = null, speedMs = 400;
    const SPEEDS = {slow: 1000, medium: 400, fast: 150, turbo: 50};

    async function call(method, url, data) {
      const q = selected ? ('?selected=' + encodeURIComponent(selected)) : '';
      const res = await fetch(url + q, {
        method: method,
        headers: {'Content-Type': 'application/json'},
        body: data === undefined ? undefined : JSON.stringify(data),
      });
      const payload = await res.json();
      document.getElementById('error').textContent = payload.error || '';
      if (!payload.error) render(payload);
      return payload;
    }
    const post = (url, data) => call('POST', url, data || {});

    function render(s) {
      if (s.svg) document.getElementById('canvas-svg').innerHTML = s.svg;
      if (s.playback) document.getElementById('playback').innerHTML = s.playback;
      if (s.step_log) document.getElementById('step-log').innerHTML = s.step_log;
      if (s.analytics) document.getElementById('analytics').innerHTML = s.analytics;
      if (s.speed) speedMs = SPEEDS[s.speed] || 400;
      const active = document.querySelector('.log-entry.active');
      if (active) active.scrollIntoView({block: 'nearest'});
      const playing = s.run && s.run.state === 'playing';
      if (playing && !playTimer) playTimer = setInterval(() => post('/api/step/tick'), speedMs);
      if (!playing && playTimer) { clearInterval(playTimer); playTimer = null; }
    }

    // Playback (buttons are re-rendered, so delegate)
    document.addEventListener('click', (e) => {
      const id = e.target.id;
      const actions = {'btn-first': 'first', 'btn-prev': 'prev', 'btn-next': 'next',
                       'btn-last': 'end', 'btn-reset': 'reset'};
      if (actions[id]) post('/api/step/' + actions[id]);
      if (id === 'btn-play') post('/api/step/play');
      const entry = e.target.closest('.log-entry');
      if (entry) post('/api/step/goto', {index: +entry.dataset.index});
    });
    document.addEventListener('change', (e) => {
      if (e.target.id === 'speed-selector') post('/api/speed', {speed: e.target.value});
    });

    // Algorithm
    document.getElementById('btn-run').addEventListener('click', () => post('/api/run', {
      algo_key: document.getElementById('algo-selector').value,
      target: document.getElementById('target-selector').value || null,
    }));

    // Graph tools
    document.getElementById('btn-sample').addEventListener('click', () => post('/api/graph/sample'));
    document.getElementById('btn-new').addEventListener('click', () => post('/api/graph/new'));
    document.getElementById('btn-generate').addEventListener('click', () => post('/api/graph/generate', {
      nodes: +document.getElementById('rand-nodes').value,
      prob: +document.getElementById('rand-prob').value,
      seed: document.getElementById('rand-seed').value || null,
      directed: document.getElementById('toggle-directed').checked,
      weighted: document.getElementById('toggle-weighted').checked,
    }));
    document.getElementById('toggle-directed').addEventListener('change', (e) =>
      post('/api/graph/directed', {directed: e.target.checked}));
    document.getElementById('toggle-weighted').addEventListener('change', (e) =>
      post('/api/graph/weighted', {weighted: e.target.checked}));
    document.getElementById('btn-import').addEventListener('click', () => {
      try { call('PUT', '/api/graph', JSON.parse(document.getElementById('graph-json').value)); }
      catch (err) { document.getElementById('error').textContent = 'Invalid JSON: ' + err.message; }
    });
    document.getElementById('btn-export').addEventListener('click', async () => {
      const s = await call('GET', '/api/graph');
      document.getElementById('graph-json').value = JSON.stringify(s.graph, null, 2);
    });

    // Canvas editing: click empty space → node, click node → select,
    // shift-click a second node → edge, drag → move, Delete → remove.
    let drag = null;
    function svgPoint(e) {
      const svg = document.querySelector('#canvas-svg svg');
      const r = svg.getBoundingClientRect();
      return {x: Math.round((e.clientX - r.left) * WIDTH / r.width),
              y: Math.round((e.clientY - r.top) * HEIGHT / r.height)};
    }
    const canvas = document.getElementById('canvas-svg');
    canvas.addEventListener('pointerdown', (e) => {
      const node = e.target.closest('.node');
      if (node) drag = {id: node.dataset.id, start: svgPoint(e), moved: false};
    });
    canvas.addEventListener('pointermove', (e) => {
      if (!drag) return;
      const p = svgPoint(e);
      if (Math.abs(p.x - drag.start.x) + Math.abs(p.y - drag.start.y) > 4) drag.moved = true;
    });
    canvas.addEventListener('pointerup', async (e) => {
      const p = svgPoint(e);
      const node = e.target.closest('.node');
      const edge = e.target.closest('.edge');
      if (drag && drag.moved) {
        await call('PATCH', '/api/graph/nodes/' + encodeURIComponent(drag.id), p);
      } else if (node) {
        const id = node.dataset.id;
        if (e.shiftKey && selected && selected !== id) {
          const w = prompt('Edge weight (empty for none)', '1');
          const src = selected; selected = null;
          await post('/api/graph/edges', {source: src, target: id, weight: w || null});
        } else {
          selected = id;
          await call('GET', '/api/state');
        }
      } else if (edge) {
        selected = edge.dataset.id;
        await call('GET', '/api/state');
      } else {
        selected = null;
        await post('/api/graph/nodes', p);
      }
      drag = null;
    });
    document.addEventListener('keydown', async (e) => {
      if (e.key !== 'Delete' || !selected || e.target.tagName === 'TEXTAREA' || e.target.tagName === 'INPUT') return;
      const s = await call('GET', '/api/graph');
      const kind = s.graph.nodes.some(n => n.id === selected) ? 'nodes' : 'edges';
      const id = selected; selected = null;
      await call('DELETE', '/api/graph/' + kind + '/' + encodeURIComponent(id));
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    logger.info("Graph Algorithm Visualizer on http://%s:%d", config.HOST, config.PORT)
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)
