"""
Settings management for lanegraph
"""

import copy
import json
from pathlib import Path
from typing import Any


class Settings:
    """Manages graph rendering settings"""

    DEFAULT_SETTINGS = {
        "graph": {
            "column_width": 20,
            "row_height": 24,
            "dot_radius": 5,
            "line_width": 2.5,
            "background_color": "#1e1e1e",  # Used for the outline stroke under each strand
        },
        "cache": {
            "dir": "",  # Empty means ~/.cache/lanegraph
        },
        "history": {
            "max_commits": 2000,  # 0 for no limit
        },
    }

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize settings"""
        if config_path is None:
            config_path = Path.home() / ".config" / "lanegraph" / "settings.json"

        self.config_path = config_path
        self.settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.load()

    def load(self) -> None:
        """Load settings from file"""
        if self.config_path.exists():
            with open(self.config_path) as f:
                loaded = json.load(f)
                # Merge with defaults to handle new settings
                self._merge_settings(self.settings, loaded)

    def save(self) -> None:
        """Save settings to file"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            json.dump(self.settings, f, indent=2)

    def _merge_settings(self, base: dict[str, Any], updates: dict[str, Any]) -> None:
        """Recursively merge settings dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                base_dict: dict[str, Any] = base[key]
                value_dict: dict[str, Any] = value
                self._merge_settings(base_dict, value_dict)
            else:
                base[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get a setting by dot-separated path (e.g., 'graph.row_height')"""
        parts = path.split(".")
        value: Any = self.settings

        for part in parts:
            if isinstance(value, dict):
                value_dict: dict[str, Any] = value
                if part in value_dict:
                    value = value_dict[part]
                else:
                    return default
            else:
                return default

        return value

    def set(self, path: str, value: Any) -> None:
        """Set a setting by dot-separated path"""
        parts = path.split(".")
        target: Any = self.settings

        for part in parts[:-1]:
            if part not in target:
                target[part] = {}
            target = target[part]

        target[parts[-1]] = value

    def get_column_width(self) -> int:
        width = int(self.get("graph.column_width", 20))
        return max(4, width)

    def get_row_height(self) -> int:
        """Get the tile height in pixels.

        Should match the line height of whatever displays the tiles, otherwise
        strands in neighbouring rows will not join up.
        """
        height = int(self.get("graph.row_height", 24))
        return max(8, height)

    def get_dot_radius(self) -> float:
        radius = float(self.get("graph.dot_radius", 5))
        return max(1.0, radius)

    def get_line_width(self) -> float:
        width = float(self.get("graph.line_width", 2.5))
        return max(0.5, width)

    def get_background_color(self) -> str:
        return str(self.get("graph.background_color", "#1e1e1e"))

    def get_cache_dir(self) -> Path:
        """Get the directory tiles are stored under"""
        configured = str(self.get("cache.dir", ""))
        if configured:
            return Path(configured).expanduser()
        return Path.home() / ".cache" / "lanegraph"

    def get_max_commits(self) -> int | None:
        """Get the history window size, or None for the whole history"""
        limit = int(self.get("history.max_commits", 2000))
        return limit if limit > 0 else None
