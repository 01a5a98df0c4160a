"""
main.py — Pathfinding Visualizer Flask App
===========================================
The web server that powers the visualizer.

Routes:
  GET  /                          – main UI
  POST /api/tick                  – pump the scheduler, return render events
  POST /api/pointer/<down|move|up> – mouse input in SVG pixel coordinates
  POST /api/command               – fire a command slot event (start, pause, …)
  POST /api/config/finder         – pick the algorithm and its options
  POST /api/config/speed          – playback rate (preset name or ops/second)
  GET  /api/export                – operation log + statistics of the last run

State management:
  One Controller per process, built by create_app() and kept in
  app.extensions["pathvis"].  Nothing runs in the background: the page
  polls /api/tick and each poll pumps the scheduler once, so grid building
  and playback advance between requests.  Run the development server with
  threaded=False so only one request touches the controller at a time.
"""

from flask import Blueprint, Flask, current_app, jsonify, render_template_string, request
import logging
import sys
import os

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from controller import Controller, Event
from engine import Scheduler
from finders import list_finders
from grid import CoordinateMapper
from settings import DEFAULTS, Settings
from ui import (
    GridView,
    render_grid,
    command_buttons,
    finder_selector,
    speed_selector,
    stats_panel,
)

logger = logging.getLogger(__name__)

bp = Blueprint("pathvis", __name__)

# events the browser may fire directly; the rest are internal
COMMAND_EVENTS = {
    Event.START, Event.RESTART, Event.PAUSE, Event.RESUME,
    Event.CANCEL, Event.CLEAR, Event.RESET,
}

FINDER_OPTIONS = ("allow_diagonal", "dont_cross_corners", "heuristic", "weight")


# ---------------------------------------------------------------------------
# App Factory
# ---------------------------------------------------------------------------
def create_app(settings: Settings = None, scheduler: Scheduler = None) -> Flask:
    """
    Build the app and its single Controller.  Pass `scheduler` to drive
    time yourself (tests use a Scheduler on a ManualClock).
    """
    app = Flask(__name__)
    app.config.from_mapping(DEFAULTS)
    if settings is None:
        # PATHVIS_CELL_SIZE=20, PATHVIS_GRID_SIZE="[40, 24]", …
        app.config.from_prefixed_env("PATHVIS")
        settings = Settings.from_mapping(app.config)
    else:
        app.config.update({key.upper(): value for key, value in settings.to_dict().items()})

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    scheduler  = scheduler or Scheduler()
    view       = GridView(scheduler, CoordinateMapper(settings.cell_size))
    controller = Controller(settings, view, scheduler)
    controller.initialize()

    app.extensions["pathvis"] = controller
    app.register_blueprint(bp)
    logger.info("visualizer ready: %dx%d grid, finder=%s", *settings.grid_size, settings.finder)
    return app


def get_controller() -> Controller:
    return current_app.extensions["pathvis"]


def get_payload() -> dict:
    return request.get_json(silent=True) or {}


def respond(controller: Controller, **extra):
    """Snapshot + render events queued since the last response."""
    events = controller.view.drain_events()
    body = controller.snapshot()
    body["events"] = events
    if any(ev["type"] in ("stats", "progress") for ev in events):
        body["stats_html"] = stats_panel(controller.view.statistics, controller.view.progress)
    body.update(extra)
    return jsonify(body)


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@bp.route("/")
def index():
    controller = get_controller()
    view = controller.view

    html = render_template_string(INDEX_TEMPLATE,
        svg=render_grid(view),
        commands=command_buttons(controller.snapshot()["commands"]),
        finder=finder_selector(list_finders(), controller.finder_key, controller.finder_options),
        speed=speed_selector(controller.playback.operations_per_second),
        stats=stats_panel(view.statistics, view.progress),
        cols=view.num_cols,
        cell_size=view.cell_size,
    )
    return html


# ---------------------------------------------------------------------------
# API: Tick
# ---------------------------------------------------------------------------
@bp.route("/api/tick", methods=["POST"])
def api_tick():
    controller = get_controller()
    fired = controller.scheduler.run_pending()
    return respond(controller, fired=fired)


# ---------------------------------------------------------------------------
# API: Pointer Input
# ---------------------------------------------------------------------------
@bp.route("/api/pointer/<action>", methods=["POST"])
def api_pointer(action):
    controller = get_controller()
    if action not in ("down", "move", "up"):
        return jsonify({"error": f"Unknown pointer action: {action}"}), 400

    data = get_payload()
    if action == "up":
        controller.pointer_up()
        return respond(controller)

    try:
        x = float(data["x"])
        y = float(data["y"])
    except (KeyError, TypeError, ValueError):
        return jsonify({"error": "Pointer events need numeric x and y"}), 400

    if action == "down":
        controller.pointer_down(x, y)
    else:
        controller.pointer_move(x, y)
    return respond(controller)


# ---------------------------------------------------------------------------
# API: Commands
# ---------------------------------------------------------------------------
@bp.route("/api/command", methods=["POST"])
def api_command():
    controller = get_controller()
    name = get_payload().get("event", "")
    try:
        event = Event(name)
    except ValueError:
        return jsonify({"error": f"Unknown event: {name}"}), 400
    if event not in COMMAND_EVENTS:
        return jsonify({"error": f"Event cannot be fired directly: {name}"}), 400

    accepted = controller.fire(event)
    return respond(controller, accepted=accepted)


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@bp.route("/api/config/finder", methods=["POST"])
def api_config_finder():
    controller = get_controller()
    data = get_payload()
    key = data.get("finder", controller.finder_key)

    options = {name: data[name] for name in FINDER_OPTIONS if name in data}
    try:
        if "weight" in options:
            options["weight"] = float(options["weight"])
        for flag in ("allow_diagonal", "dont_cross_corners"):
            if flag in options and not isinstance(options[flag], bool):
                raise TypeError(f"{flag} must be true or false")
        controller.select_finder(key, **options)
    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400

    finder_html = finder_selector(list_finders(), controller.finder_key, controller.finder_options)
    return respond(controller, finder_html=finder_html)


@bp.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    controller = get_controller()
    speed = get_payload().get("speed", "fast")
    try:
        if not isinstance(speed, str):
            speed = float(speed)
        controller.set_speed(speed)
    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400
    return respond(controller)


# ---------------------------------------------------------------------------
# API: Export
# ---------------------------------------------------------------------------
@bp.route("/api/export", methods=["GET"])
def api_export():
    controller = get_controller()
    export = controller.recorder.export()
    export["finder"]  = controller.finder_key
    export["options"] = controller.finder_options
    return jsonify(export)


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Pathfinding Visualizer</title>
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
      --accent-teal: #06b6d4;
    }

    body {
      font-family: -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 320px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 24px 16px;
    }

    #canvas-container {
      flex: 1;
      overflow: auto;
      background: #ffffff;
      user-select: none;
    }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 18px;
      margin-bottom: 16px;
    }

    .panel h3 {
      font-size: 13px;
      font-weight: 700;
      margin-bottom: 14px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
    }

    .button-row { display: flex; flex-direction: column; gap: 8px; }

    button {
      background: linear-gradient(135deg, var(--accent-cyan), var(--accent-teal));
      color: #fff;
      border: none;
      padding: 10px 16px;
      border-radius: 8px;
      cursor: pointer;
      font-size: 13px;
      font-weight: 600;
    }

    button:disabled { opacity: 0.35; cursor: default; }

    select, input[type="number"] {
      width: 100%;
      padding: 8px 10px;
      margin: 6px 0;
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 8px;
      color: var(--text-primary);
    }

    label {
      display: block;
      margin: 10px 0 4px;
      font-size: 12px;
      color: var(--text-secondary);
    }

    table { width: 100%; font-size: 13px; }
    table td:last-child { text-align: right; color: var(--accent-cyan); }

    .hint, .placeholder { font-size: 12px; color: var(--text-secondary); margin-top: 6px; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="commands">{{ commands|safe }}</div>
    <div id="finder-panel">{{ finder|safe }}</div>
    <div id="speed-panel">{{ speed|safe }}</div>
    <div id="stats">{{ stats|safe }}</div>
  </div>

  <div id="canvas-container">{{ svg|safe }}</div>

  <script>
    const SVG_NS = 'http://www.w3.org/2000/svg';
    let pressed = false;
    let size = 0;
    let cols = 0;

    // one request at a time, in order
    let queue = Promise.resolve();
    function send(url, data) {
      queue = queue.then(async () => {
        const res = await fetch(url, {
          method: 'POST',
          headers: {'Content-Type': 'application/json'},
          body: JSON.stringify(data || {}),
        });
        const body = await res.json();
        if (res.ok) handle(body);
        return body;
      });
      return queue;
    }

    function handle(data) {
      (data.events || []).forEach(applyEvent);
      if (data.commands) renderCommands(data.commands);
      if (data.stats_html) document.getElementById('stats').innerHTML = data.stats_html;
      if (data.finder_html) document.getElementById('finder-panel').innerHTML = data.finder_html;
    }

    function applyEvent(ev) {
      const svg = document.getElementById('grid-svg');
      switch (ev.type) {
        case 'init':
          size = ev.cell_size;
          cols = ev.cols;
          svg.setAttribute('width', ev.cols * size);
          svg.setAttribute('height', ev.rows * size);
          svg.setAttribute('viewBox', '0 0 ' + ev.cols * size + ' ' + ev.rows * size);
          break;
        case 'row': {
          if (document.getElementById('c-0-' + ev.y)) break;
          const group = document.getElementById('cells');
          for (let x = 0; x < cols; x++) {
            const rect = document.createElementNS(SVG_NS, 'rect');
            rect.setAttribute('id', 'c-' + x + '-' + ev.y);
            rect.setAttribute('class', 'cell normal');
            rect.setAttribute('x', x * size);
            rect.setAttribute('y', ev.y * size);
            rect.setAttribute('width', size);
            rect.setAttribute('height', size);
            group.appendChild(rect);
          }
          break;
        }
        case 'cell': {
          const rect = document.getElementById('c-' + ev.x + '-' + ev.y);
          if (rect) rect.setAttribute('class', 'cell ' + ev.state);
          break;
        }
        case 'marker': {
          const marker = document.getElementById('marker-' + ev.which);
          marker.setAttribute('x', ev.x);
          marker.setAttribute('y', ev.y);
          marker.removeAttribute('visibility');
          break;
        }
        case 'path':
          document.getElementById('path').setAttribute('d', ev.d);
          break;
      }
    }

    function renderCommands(slots) {
      const row = document.getElementById('command-row');
      row.innerHTML = '';
      slots.forEach((slot, i) => {
        const btn = document.createElement('button');
        btn.id = 'btn-slot-' + i;
        btn.className = 'btn-command';
        btn.dataset.event = slot.event;
        btn.disabled = !slot.enabled;
        btn.textContent = slot.label;
        row.appendChild(btn);
      });
    }

    // Poll loop
    async function poll() {
      try { await send('/api/tick'); } catch (err) { console.error(err); }
      setTimeout(poll, 50);
    }

    // Command buttons
    document.addEventListener('click', (e) => {
      if (e.target.classList.contains('btn-command') && !e.target.disabled) {
        send('/api/command', {event: e.target.dataset.event});
      }
    });

    // Pointer input
    function position(e) {
      const box = document.getElementById('grid-svg').getBoundingClientRect();
      return {x: e.clientX - box.left, y: e.clientY - box.top};
    }
    const container = document.getElementById('canvas-container');
    container.addEventListener('mousedown', (e) => {
      pressed = true;
      send('/api/pointer/down', position(e));
    });
    container.addEventListener('mousemove', (e) => {
      if (pressed) send('/api/pointer/move', position(e));
    });
    document.addEventListener('mouseup', () => {
      if (!pressed) return;
      pressed = false;
      send('/api/pointer/up');
    });

    // Finder & speed
    function finderConfig() {
      const weight = document.getElementById('weight-input');
      const heuristic = document.getElementById('heuristic-selector');
      const config = {
        finder: document.getElementById('finder-selector').value,
        allow_diagonal: document.getElementById('allow-diagonal').checked,
        dont_cross_corners: document.getElementById('dont-cross-corners').checked,
      };
      if (heuristic) config.heuristic = heuristic.value;
      if (weight) config.weight = +weight.value;
      return config;
    }
    document.addEventListener('change', (e) => {
      if (e.target.closest('#finder-panel')) send('/api/config/finder', finderConfig());
      if (e.target.id === 'speed-selector') send('/api/config/speed', {speed: e.target.value});
    });

    size = {{ cell_size }};
    cols = {{ cols }};
    poll();
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app = create_app()
    print("=" * 60)
    print("  Pathfinding Visualizer")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000")
    print("=" * 60)
    app.run(debug=True, host="0.0.0.0", port=5000, threaded=False, use_reloader=False)
