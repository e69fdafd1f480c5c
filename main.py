"""
main.py — Algorithm Replay Visualizer Flask App
================================================
JSON API over the step-log / replay core.

Routes:
  GET  /                       – landing page listing the algorithms
  GET  /api/algorithms         – every registered algorithm
  GET  /api/algorithms/<key>   – one algorithm card + its pseudocode
  POST /api/array/random       – random input array
  POST /api/array/parse        – parse the "custom array" text box
  POST /api/graph/generate     – generate a new traversal graph
  POST /api/run                – start a run (index resets to 0)
  POST /api/step/next          – advance one step
  POST /api/step/prev          – go back one step
  POST /api/step/goto          – jump to step N (clamped)
  POST /api/step/rewind        – jump to step 0
  POST /api/step/end           – jump to the completed state
  POST /api/step/play          – toggle play/pause
  GET  /api/state              – snapshot at the current index
  POST /api/config/speed       – playback speed (preset, seconds or slider)
  GET  /api/export             – full run dump + performance summary
  POST /api/compare            – run two variants on one input and compare

State management:
  The session holds only the run RECIPE (algorithm key, input, params,
  seed), the replay index, the playback flags and the current graph.
  Every request regenerates the log from the recipe; generation is
  deterministic, so the same recipe always yields the same log.
"""

import logging

from flask import Flask, jsonify, render_template_string, request, session

import config
from algorithms import get_pseudocode, list_algorithms, pseudocode_line, require_algorithm
from algorithms.inputs import generate_random_array, parse_custom_array
from engine import Recorder, Stepper, compare
from graph import Graph

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config.from_object(config.Config)

logging.basicConfig(
    level=app.config["LOG_LEVEL"],
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------
@app.errorhandler(ValueError)
def handle_value_error(exc: ValueError):
    logger.warning("Rejected %s %s: %s", request.method, request.path, exc)
    return jsonify({"error": str(exc)}), 400


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_graph() -> Graph:
    """Deserialise graph from session, or create the default one."""
    if "graph" not in session:
        session["graph"] = Graph.generate(config.DEFAULT_GRAPH_TYPE).to_dict()
    return Graph.from_dict(session["graph"])


def save_graph(graph: Graph) -> None:
    session["graph"] = graph.to_dict()


def get_state() -> dict:
    return {
        "run":        session.get("run"),
        "index":      session.get("index", 0),
        "is_playing": session.get("is_playing", False),
        "speed":      session.get("speed", config.SPEED_PRESETS[config.DEFAULT_SPEED]),
    }


def set_state(**kwargs) -> None:
    for k, v in kwargs.items():
        session[k] = v


def body() -> dict:
    return request.get_json(silent=True) or {}


def run_recipe(recipe: dict) -> Recorder:
    """Regenerate a run from its recipe."""
    key = recipe["algo_key"]
    data = get_graph() if key == "graph_traversal" else recipe["input"]
    rec = Recorder()
    rec.start(key, data, **recipe["params"])
    return rec


def load_stepper(rec: Recorder) -> Stepper:
    """Stepper over `rec`, positioned at the session's index."""
    state = get_state()
    stepper = Stepper()
    stepper.load(rec.log, rec.snapshot)
    stepper.goto_step(state["index"])
    stepper.set_speed_value(state["speed"])
    return stepper


def current_run():
    recipe = session.get("run")
    if recipe is None:
        raise ValueError("Start a run first.")
    rec = run_recipe(recipe)
    return rec, load_stepper(rec)


def state_payload(rec: Recorder, stepper: Stepper) -> dict:
    snap = stepper.snapshot()
    step = stepper.current_step
    key = rec.metrics.algo_key
    method = rec.params.get("method")
    return {
        "algo_key":    key,
        "index":       stepper.index,
        "total_steps": stepper.total_steps,
        "completed":   snap.completed,
        "is_playing":  session.get("is_playing", False),
        "speed":       stepper.speed,
        "step":        step.to_list() if step else None,
        "line":        snap.line,
        "line_text":   pseudocode_line(key, snap.line, method),
        "explanation": snap.explanation,
        "snapshot":    snap.to_dict(),
    }


def move(action) -> dict:
    """Apply `action(stepper)`, persist the new index, return the state payload."""
    rec, stepper = current_run()
    action(stepper)
    set_state(index=stepper.index)
    if stepper.is_finished:
        set_state(is_playing=False)
    return state_payload(rec, stepper)


# ---------------------------------------------------------------------------
# Input validation (the core assumes everything reaching it passed here)
# ---------------------------------------------------------------------------
def validate_array(values, algo_key: str) -> list:
    if isinstance(values, str):
        values = parse_custom_array(values)
    if not isinstance(values, list) or not values:
        raise ValueError("Array must be a non-empty list of numbers.")
    for v in values:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError(f"Not a number: {v!r}")
        if not config.MIN_VALUE <= v <= config.MAX_VALUE:
            raise ValueError(f"Values must lie between {config.MIN_VALUE} and {config.MAX_VALUE}.")
    limit = config.MAX_BLOCK_ARRAY_SIZE if algo_key == "selection_sort" else config.MAX_TREE_ARRAY_SIZE
    if len(values) > limit:
        raise ValueError(f"At most {limit} values for this algorithm.")
    return values


def validate_fibonacci(n) -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        raise ValueError("n must be an integer.")
    if not config.MIN_FIBONACCI <= n <= config.MAX_FIBONACCI:
        raise ValueError(f"n must lie between {config.MIN_FIBONACCI} and {config.MAX_FIBONACCI}.")
    return n


def build_recipe(data: dict) -> dict:
    key = data.get("algo_key", "selection_sort")
    info = require_algorithm(key)
    params = {}

    if info.family == "sorting":
        default_size = config.DEFAULT_BLOCK_ARRAY_SIZE if key == "selection_sort" else config.DEFAULT_ARRAY_SIZE
        values = data.get("array")
        if values is None:
            values = generate_random_array(default_size, data.get("seed"))
        recipe_input = validate_array(values, key)
        if key == "quick_sort":
            strategy = data.get("pivot_strategy", config.DEFAULT_PIVOT_STRATEGY)
            if strategy not in config.PIVOT_STRATEGIES:
                raise ValueError(f"Unknown pivot strategy: {strategy}")
            params["pivot_strategy"] = strategy
            if data.get("seed") is not None:
                params["seed"] = int(data["seed"])
    elif info.family == "recursion":
        recipe_input = validate_fibonacci(data.get("n", config.DEFAULT_FIBONACCI))
    else:
        graph = get_graph()
        start = data.get("start_node", config.DEFAULT_START_NODE)
        if not graph.has_node(start):
            raise ValueError(f"Unknown start node: {start}")
        method = data.get("method", "dfs")
        get_pseudocode(key, method)     # validates the method
        recipe_input = None
        params.update(start_node=start, method=method)

    return {"algo_key": key, "input": recipe_input, "params": params}


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    return render_template_string(INDEX_TEMPLATE, algorithms=list_algorithms())


# ---------------------------------------------------------------------------
# API: Algorithms
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    return jsonify([a.to_dict() for a in list_algorithms()])


@app.route("/api/algorithms/<key>")
def api_algorithm(key):
    info = require_algorithm(key)
    card = info.to_dict()
    card["pseudocode"] = get_pseudocode(key, request.args.get("method"))
    return jsonify(card)


# ---------------------------------------------------------------------------
# API: Inputs
# ---------------------------------------------------------------------------
@app.route("/api/array/random", methods=["POST"])
def api_array_random():
    data = body()
    size = data.get("size", config.DEFAULT_ARRAY_SIZE)
    if isinstance(size, bool) or not isinstance(size, int):
        raise ValueError("size must be an integer.")
    if not config.MIN_ARRAY_SIZE <= size <= config.MAX_BLOCK_ARRAY_SIZE:
        raise ValueError(
            f"size must lie between {config.MIN_ARRAY_SIZE} and {config.MAX_BLOCK_ARRAY_SIZE}."
        )
    return jsonify({"array": generate_random_array(size, data.get("seed"))})


@app.route("/api/array/parse", methods=["POST"])
def api_array_parse():
    return jsonify({"array": parse_custom_array(body().get("text", ""))})


@app.route("/api/graph/generate", methods=["POST"])
def api_graph_generate():
    data = body()
    graph = Graph.generate(data.get("type", config.DEFAULT_GRAPH_TYPE), seed=data.get("seed"))
    save_graph(graph)
    # a new graph invalidates a traversal run on the old one
    if (session.get("run") or {}).get("algo_key") == "graph_traversal":
        set_state(run=None, index=0, is_playing=False)
    logger.info("Generated %s graph with %d nodes", data.get("type", config.DEFAULT_GRAPH_TYPE), graph.node_count())
    return jsonify(graph.to_dict())


# ---------------------------------------------------------------------------
# API: Run
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    recipe = build_recipe(body())
    rec = run_recipe(recipe)
    # keep the seed the recorder settled on, so later requests replay the same log
    recipe["params"] = dict(rec.params)
    set_state(run=recipe, index=0, is_playing=False)

    stepper = load_stepper(rec)
    payload = state_payload(rec, stepper)
    payload["structure"] = rec.structure.to_dict() if rec.structure is not None else None
    payload["metrics"]   = rec.export()["metrics"]
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    return jsonify(move(lambda s: s.next_step()))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    return jsonify(move(lambda s: s.prev_step()))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    idx = body().get("index", 0)
    if isinstance(idx, bool) or not isinstance(idx, int):
        raise ValueError("index must be an integer.")
    return jsonify(move(lambda s: s.goto_step(idx)))


@app.route("/api/step/rewind", methods=["POST"])
def api_step_rewind():
    return jsonify(move(lambda s: s.rewind()))


@app.route("/api/step/end", methods=["POST"])
def api_step_end():
    return jsonify(move(lambda s: s.jump_to_end()))


@app.route("/api/step/play", methods=["POST"])
def api_step_play():
    rec, stepper = current_run()
    if session.get("is_playing"):
        stepper.pause()
    else:
        stepper.play()
    set_state(index=stepper.index, is_playing=stepper.is_playing)
    return jsonify(state_payload(rec, stepper))


@app.route("/api/state")
def api_state():
    rec, stepper = current_run()
    return jsonify(state_payload(rec, stepper))


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    data = body()
    stepper = Stepper()
    if "preset" in data:
        stepper.set_speed(data["preset"])
    elif "slider" in data:
        stepper.set_speed_slider(float(data["slider"]), float(data.get("max", 1000)))
    elif "seconds" in data:
        stepper.set_speed_value(float(data["seconds"]))
    else:
        raise ValueError("Give one of 'preset', 'slider' or 'seconds'.")
    set_state(speed=stepper.speed)
    return jsonify({"speed": stepper.speed})


# ---------------------------------------------------------------------------
# API: Export & Compare
# ---------------------------------------------------------------------------
@app.route("/api/export")
def api_export():
    rec, _ = current_run()
    dump = rec.export()
    dump["summary"] = rec.summary_text()
    return jsonify(dump)


@app.route("/api/compare", methods=["POST"])
def api_compare():
    """
    Body: {"left": {...run params...}, "right": {...}, "array"?: [...], "n"?: int}
    Shared inputs at the top level apply to both sides; the current run's
    input is used when none is given, and otherwise sorting sides share one
    random array (seeded by an optional top-level "seed").
    """
    data = body()
    shared = {k: data[k] for k in ("array", "n") if k in data}
    current = session.get("run")
    if not shared and current is not None and current["input"] is not None:
        shared["n" if current["algo_key"] == "fibonacci" else "array"] = current["input"]

    sides = []
    for side in ("left", "right"):
        side_data = dict(data.get(side) or {})
        side_data.setdefault("algo_key", current["algo_key"] if current else "quick_sort")
        sides.append(side_data)

    # both sides must sort the same values, so draw one array for them
    if "array" not in shared and any(
        require_algorithm(s["algo_key"]).family == "sorting" and "array" not in s for s in sides
    ):
        shared["array"] = generate_random_array(config.DEFAULT_ARRAY_SIZE, data.get("seed"))

    recorders = []
    for side_data in sides:
        for k, v in shared.items():
            side_data.setdefault(k, v)
        recorders.append(run_recipe(build_recipe(side_data)))

    result = compare(*recorders)
    return jsonify(result.to_dict())


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Algorithm Replay Visualizer</title>
  <style>
    body { font-family: -apple-system, BlinkMacSystemFont, sans-serif; background: #010409; color: #e6edf3; margin: 32px; }
    .card { background: #161b22; border: 1px solid #30363d; border-radius: 8px; padding: 16px; margin-bottom: 12px; }
    .tag { font-size: 12px; color: #0ea5e9; margin-right: 6px; }
    code { color: #7d8590; }
  </style>
</head>
<body>
  <h1>Algorithm Replay Visualizer</h1>
  {% for algo in algorithms %}
  <div class="card">
    <h2>{{ algo.label }} <code>{{ algo.key }}</code></h2>
    <p>{{ algo.description }}</p>
    <p>Worst case: {{ algo.complexity_worst[0] }} time, {{ algo.complexity_worst[1] }} space</p>
    {% for tag in algo.tags %}<span class="tag">#{{ tag }}</span>{% endfor %}
  </div>
  {% endfor %}
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logger.info("Starting Algorithm Replay Visualizer on http://localhost:5000")
    app.run(debug=True, host="0.0.0.0", port=5000)
