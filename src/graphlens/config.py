"""
Global Configuration and Defaults.

Module-level defaults for the viewer plus the optional per-workspace
``.graphlens/config.yaml`` that overrides them.
"""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .graph.styles import Theme

logger = logging.getLogger(__name__)

# --- Output document ---
# Fixed resource name of the serialized output document
GRAPH_RESOURCE = "graph.json"

# Page written next to GRAPH_RESOURCE
PAGE_RESOURCE = "index.html"

# --- Filtering ---
# Quiescence window for search input
SEARCH_DEBOUNCE_SECONDS = 0.3

# --- Output ---
DEFAULT_OUTPUT_DIR = Path(".graphlens/site")

CONFIG_PATH = Path(".graphlens/config.yaml")


class ViewerConfig(BaseModel):
    """Settings read from the ``viewer`` section of the config file."""
    model_config = ConfigDict(extra="ignore")

    theme: Theme = Theme.DARK
    debounce_seconds: float = Field(default=SEARCH_DEBOUNCE_SECONDS, ge=0)
    output_dir: Path = DEFAULT_OUTPUT_DIR
    open_browser: bool = True


def load_config(config_path: Optional[Path] = None) -> ViewerConfig:
    """
    Load viewer settings.

    A missing file yields the defaults.

    Raises:
        ValueError: If the file exists but cannot be read or validated.
    """
    path = config_path or CONFIG_PATH
    if not path.exists():
        logger.debug(f"No config at {path}, using defaults")
        return ViewerConfig()

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ValueError(f"Could not read config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config {path} must be a mapping")

    try:
        return ViewerConfig.model_validate(data.get("viewer") or {})
    except ValidationError as e:
        raise ValueError(f"Invalid viewer config in {path}: {e}") from e
