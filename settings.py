"""
settings.py — Runtime Configuration
====================================
Defaults live here; `main.create_app()` loads them into `app.config`,
lets `PATHVIS_*` environment variables override them
(e.g. `PATHVIS_CELL_SIZE=20`, `PATHVIS_GRID_SIZE=[40, 24]`), and builds
the Settings the controller is constructed with.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Tuple


DEFAULTS: Dict[str, Any] = {
    "GRID_SIZE":             (64, 36),   # columns, rows
    "CELL_SIZE":             30,         # pixels per cell edge
    "OPERATIONS_PER_SECOND": 300,
    "FINDER":                "astar",
    "LOG_LEVEL":             "INFO",
}


@dataclass(frozen=True)
class Settings:
    grid_size:             Tuple[int, int] = DEFAULTS["GRID_SIZE"]
    cell_size:             int             = DEFAULTS["CELL_SIZE"]
    operations_per_second: float           = DEFAULTS["OPERATIONS_PER_SECOND"]
    finder:                str             = DEFAULTS["FINDER"]
    log_level:             str             = DEFAULTS["LOG_LEVEL"]

    def __post_init__(self):
        cols, rows = self.grid_size
        if cols <= 0 or rows <= 0:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if self.operations_per_second <= 0:
            raise ValueError("operations_per_second must be positive")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "Settings":
        """Build from an upper-case mapping such as Flask's app.config."""
        cols, rows = config.get("GRID_SIZE", DEFAULTS["GRID_SIZE"])
        return cls(
            grid_size=(int(cols), int(rows)),
            cell_size=int(config.get("CELL_SIZE", DEFAULTS["CELL_SIZE"])),
            operations_per_second=float(config.get("OPERATIONS_PER_SECOND", DEFAULTS["OPERATIONS_PER_SECOND"])),
            finder=str(config.get("FINDER", DEFAULTS["FINDER"])),
            log_level=str(config.get("LOG_LEVEL", DEFAULTS["LOG_LEVEL"])).upper(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
