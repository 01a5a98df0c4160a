"""
ui/
---
Presentation layer.

    from ui import GridView, render_grid
    from ui import command_buttons, finder_selector, …
"""

from ui.canvas import render_grid, build_svg_path, CanvasConfig
from ui.view   import GridView

from ui.controls import (
    command_buttons,
    finder_selector,
    speed_selector,
    stats_panel,
)

__all__ = [
    "GridView",
    "render_grid",
    "build_svg_path",
    "CanvasConfig",
    "command_buttons",
    "finder_selector",
    "speed_selector",
    "stats_panel",
]
