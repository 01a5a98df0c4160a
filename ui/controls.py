"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • command_buttons    – the three contextual search/clear buttons
  • finder_selector    – algorithm dropdown + heuristic, diagonal options
  • speed_selector     – playback rate presets
  • stats_panel        – last search's statistics / build progress

Design:
  - All panels are stateless render functions.
  - State is passed in as arguments.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together; the page script re-renders the
    command buttons from the JSON slots on every poll.
"""

from html import escape
from typing import Any, Dict, List, Mapping, Optional

from engine import SPEED_PRESETS, SearchStatistics
from finders import HEURISTICS, FinderInfo


# ---------------------------------------------------------------------------
# Command Buttons
# ---------------------------------------------------------------------------
def command_buttons(slots: List[Dict[str, Any]]) -> str:
    """`slots` is controller.commands.command_slots(machine)."""
    buttons = []
    for i, slot in enumerate(slots):
        disabled = '' if slot["enabled"] else 'disabled'
        buttons.append(
            f'<button id="btn-slot-{i}" class="btn-command" '
            f'data-event="{slot["event"]}" {disabled}>{escape(slot["label"])}</button>'
        )

    return f"""
    <div class="panel command-buttons">
      <h3>Search</h3>
      <div class="button-row" id="command-row">
        {''.join(buttons)}
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Finder Selector
# ---------------------------------------------------------------------------
def finder_selector(
    finders: List[FinderInfo],
    selected_key: str = "astar",
    options: Optional[Mapping[str, Any]] = None,
) -> str:
    options = options or {}
    selected = next((f for f in finders if f.key == selected_key), None)

    finder_options = []
    for info in finders:
        sel = 'selected' if info.key == selected_key else ''
        finder_options.append(f'<option value="{info.key}" {sel}>{escape(info.label)}</option>')

    heuristic_block = ""
    if selected is not None and selected.has_heuristic:
        current = options.get("heuristic", "manhattan")
        h_options = []
        for name in HEURISTICS:
            sel = 'selected' if name == current else ''
            h_options.append(f'<option value="{name}" {sel}>{name.capitalize()}</option>')
        heuristic_block = f"""
        <label>Heuristic:
          <select id="heuristic-selector">
            {''.join(h_options)}
          </select>
        </label>
        """

    weight_block = ""
    if selected is not None and selected.has_weight:
        weight_block = f"""
        <label>Weight:
          <input type="number" id="weight-input" min="1" step="1" value="{options.get('weight', 1)}">
        </label>
        """

    diagonal = 'checked' if options.get("allow_diagonal") else ''
    corners  = 'checked' if options.get("dont_cross_corners") else ''
    # the inputs stay in the page so the script can always read them
    movement = '' if selected is None or selected.has_movement else 'disabled'
    description = escape(selected.description) if selected else ""

    return f"""
    <div class="panel finder-selector">
      <h3>Finder</h3>
      <select id="finder-selector">
        {''.join(finder_options)}
      </select>
      <p class="hint">{description}</p>
      {heuristic_block}
      {weight_block}
      <label><input type="checkbox" id="allow-diagonal" {diagonal} {movement}> Allow Diagonal</label>
      <label><input type="checkbox" id="dont-cross-corners" {corners} {movement}> Don't Cross Corners</label>
    </div>
    """


# ---------------------------------------------------------------------------
# Speed Selector
# ---------------------------------------------------------------------------
def speed_selector(operations_per_second: float = SPEED_PRESETS["fast"]) -> str:
    options = []
    for name, rate in SPEED_PRESETS.items():
        sel = 'selected' if rate == operations_per_second else ''
        options.append(f'<option value="{name}" {sel}>{name.capitalize()} ({rate} ops/s)</option>')

    return f"""
    <div class="panel speed-selector">
      <h3>Playback Speed</h3>
      <select id="speed-selector">
        {''.join(options)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Statistics Panel
# ---------------------------------------------------------------------------
def stats_panel(statistics: Optional[SearchStatistics] = None, progress: float = 1.0) -> str:
    if progress < 1.0:
        return f"""
        <div class="panel stats-panel">
          <h3>Statistics</h3>
          <p class="placeholder">Generating grid… {round(progress * 100)}%</p>
        </div>
        """

    if not statistics:
        return """
        <div class="panel stats-panel">
          <h3>Statistics</h3>
          <p class="placeholder">Draw some walls and start a search.</p>
        </div>
        """

    path_status = "Found" if statistics.path_found else "Not Found"

    return f"""
    <div class="panel stats-panel">
      <h3>Statistics — {escape(statistics.finder)}</h3>
      <table>
        <tr><td>Path:</td><td><strong>{path_status}</strong></td></tr>
        <tr><td>Length:</td><td><strong>{statistics.path_length:g}</strong></td></tr>
        <tr><td>Time:</td><td><strong>{statistics.elapsed_time_ms:.2f} ms</strong></td></tr>
        <tr><td>Operations:</td><td><strong>{statistics.operation_count}</strong></td></tr>
      </table>
    </div>
    """
