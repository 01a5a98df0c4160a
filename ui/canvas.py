"""
canvas.py — SVG Grid Renderer
==============================
Pure rendering functions: GridView state → SVG string.

The page is rendered once in full; afterwards the browser patches it with
the view's render events (cell state changes, marker moves, path), so the
ids and classes written here are the contract the page script relies on:

  • cell rects   id="c-{x}-{y}"   class="cell {state}"
  • markers      id="marker-start", id="marker-end"
  • path         id="path"        d = build_svg_path(...)

Design decisions:
  - NO mutation.  Every function takes what it needs and returns a string.
  - Cell colouring is a CSS class lookup; the palette lives in CanvasConfig
    and is emitted once as a <style> block.
"""

from typing import Dict, Sequence, Tuple

from grid import CoordinateMapper


# ---------------------------------------------------------------------------
# Visual Config: color palette
# ---------------------------------------------------------------------------
class CanvasConfig:
    # cell state → fill
    cell_colors: Dict[str, str] = {
        "normal":  "#ffffff",
        "blocked": "#808080",
        "opened":  "#98fb98",
        "closed":  "#afeeee",
    }
    start_color:    str   = "#00dd00"
    end_color:      str   = "#ee4400"
    stroke:         str   = "#000000"
    stroke_opacity: float = 0.2
    path_color:     str   = "yellow"
    path_width:     int   = 3


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Path
# ---------------------------------------------------------------------------
def build_svg_path(path: Sequence[Tuple[int, int]], cell_size: int) -> str:
    """'M cx cy L cx cy …' through the centre of every waypoint's cell."""
    if not path:
        return ""
    mapper = CoordinateMapper(cell_size)
    parts = []
    for i, (x, y) in enumerate(path):
        cmd = "M" if i == 0 else "L"
        cx, cy = mapper.cell_center(x, y)
        parts.append(f"{cmd}{cx:g} {cy:g}")
    return "".join(parts)


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_grid(view, config: CanvasConfig = CONFIG) -> str:
    """
    Returns an SVG string of everything the view currently shows: the rows
    built so far, both markers (once placed) and the path (if any).
    """
    size   = view.cell_size
    width  = view.num_cols * size
    height = view.num_rows * size

    parts = [
        f'<svg id="grid-svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" xmlns="http://www.w3.org/2000/svg">',
        _render_style(config),
        '<g id="cells">',
    ]

    for y, row in enumerate(view.cells):
        for x, state in enumerate(row):
            parts.append(
                f'<rect id="c-{x}-{y}" class="cell {state}" x="{x * size}" y="{y * size}" '
                f'width="{size}" height="{size}"/>'
            )
    parts.append('</g>')

    parts.append(_render_marker("start", view.start, size))
    parts.append(_render_marker("end", view.end, size))

    parts.append(
        f'<path id="path" d="{build_svg_path(view.path, size)}" fill="none" '
        f'stroke="{config.path_color}" stroke-width="{config.path_width}"/>'
    )
    parts.append("</svg>")
    return "\n".join(parts)


def _render_style(config: CanvasConfig) -> str:
    rules = [
        f".cell {{ stroke: {config.stroke}; stroke-opacity: {config.stroke_opacity}; }}",
    ]
    for state, color in config.cell_colors.items():
        rules.append(f".cell.{state} {{ fill: {color}; }}")
    rules.append(f"#marker-start {{ fill: {config.start_color}; }}")
    rules.append(f"#marker-end {{ fill: {config.end_color}; }}")
    rules.append(f".marker {{ stroke: {config.stroke}; stroke-opacity: {config.stroke_opacity}; pointer-events: none; }}")
    return "<style>\n" + "\n".join(rules) + "\n</style>"


def _render_marker(which: str, pos, size: int) -> str:
    # hidden until the controller places it
    if pos is None:
        return (
            f'<rect id="marker-{which}" class="marker" x="0" y="0" '
            f'width="{size}" height="{size}" visibility="hidden"/>'
        )
    x, y = pos
    return (
        f'<rect id="marker-{which}" class="marker" x="{x * size}" y="{y * size}" '
        f'width="{size}" height="{size}"/>'
    )
