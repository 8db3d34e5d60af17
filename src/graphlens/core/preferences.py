"""
Persisted viewer preferences.

The theme is the only thing graphlens remembers between runs. It lives in
the ``viewer`` section of the workspace config file, next to any other
settings a user wrote there by hand, which are preserved on save.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..config import CONFIG_PATH
from ..graph.styles import Theme

logger = logging.getLogger(__name__)


class PreferenceStore:
    """
    Reads and writes the persisted theme.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or CONFIG_PATH

    def _read(self) -> Dict[str, Any]:
        if not self.config_path.exists():
            return {}
        try:
            with open(self.config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Ignoring unreadable config {self.config_path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get_theme(self) -> Theme:
        """The stored theme, or dark when none (or an unknown one) is stored."""
        viewer = self._read().get("viewer")
        if not isinstance(viewer, dict):
            viewer = {}
        try:
            return Theme(viewer.get("theme", Theme.DARK))
        except ValueError:
            logger.warning(f"Unknown theme {viewer.get('theme')!r} in {self.config_path}")
            return Theme.DARK

    def set_theme(self, theme: Theme) -> Theme:
        theme = Theme(theme)
        data = self._read()
        viewer = data.get("viewer")
        if not isinstance(viewer, dict):
            viewer = {}
        viewer["theme"] = theme.value
        data["viewer"] = viewer

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            yaml.dump(data, f, sort_keys=False, default_flow_style=False)

        logger.debug(f"Saved theme {theme.value} to {self.config_path}")
        return theme

    def toggle_theme(self) -> Theme:
        """Flip between dark and light and persist the result."""
        current = self.get_theme()
        return self.set_theme(Theme.LIGHT if current == Theme.DARK else Theme.DARK)
