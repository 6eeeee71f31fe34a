"""
Global Configuration and Layout Defaults.

This module centralizes the tuning knobs of the layout engine. The values
mirror the prototype diagram so that a freshly loaded graph looks the same
out of the box, and can be overridden per project via .depmesh/config.yaml.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ValidationError

from .core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# --- Simulation Temperature ---
ALPHA_START = 1.0
ALPHA_MIN = 0.001
# Decays from 1.0 to ALPHA_MIN in roughly 300 ticks
ALPHA_DECAY = 1 - ALPHA_MIN ** (1 / 300)
# Fraction of velocity removed every tick
VELOCITY_DECAY = 0.4
# Target temperature while a node is being dragged
DRAG_ALPHA_TARGET = 0.3

# --- Forces ---
LINK_DISTANCE = 100.0
CHARGE_STRENGTH = -300.0
CHARGE_THETA = 0.9
CHARGE_DISTANCE_MIN = 1.0
COLLIDE_RADIUS = 30.0

# --- Layered Layout ---
COLUMN_WIDTH = 250.0
LAYERED_X_STRENGTH = 1.0
LAYERED_Y_STRENGTH = 0.05
LAYERED_LINK_STRENGTH = 0.05

# --- Viewport ---
MIN_SCALE = 0.1
MAX_SCALE = 4.0
ZOOM_STEP = 1.2
DEFAULT_WIDTH = 1200
DEFAULT_HEIGHT = 800

# --- Interaction & Rendering ---
CLICK_DISTANCE = 3.0
DIM_OPACITY = 0.1
LABEL_MAX_CHARS = 20

CONFIG_PATH = Path(".depmesh/config.yaml")

# Template written by `depmesh init`
DEFAULT_CONFIG: Dict[str, Any] = {
    "version": "1.0",
    "physics": {
        "link_distance": LINK_DISTANCE,
        "charge_strength": CHARGE_STRENGTH,
        "collide_radius": COLLIDE_RADIUS,
        "column_width": COLUMN_WIDTH,
        "velocity_decay": VELOCITY_DECAY,
    },
    "viewport": {
        "min_scale": MIN_SCALE,
        "max_scale": MAX_SCALE,
        "width": DEFAULT_WIDTH,
        "height": DEFAULT_HEIGHT,
    },
    "render": {
        "label_max_chars": LABEL_MAX_CHARS,
        "dim_opacity": DIM_OPACITY,
    },
}


class PhysicsConfig(BaseModel):
    """Force and temperature parameters shared by both layout modes."""
    alpha_min: float = ALPHA_MIN
    alpha_decay: float = ALPHA_DECAY
    velocity_decay: float = VELOCITY_DECAY
    drag_alpha_target: float = DRAG_ALPHA_TARGET
    link_distance: float = LINK_DISTANCE
    charge_strength: float = CHARGE_STRENGTH
    charge_theta: float = CHARGE_THETA
    charge_distance_min: float = CHARGE_DISTANCE_MIN
    collide_radius: float = COLLIDE_RADIUS
    column_width: float = COLUMN_WIDTH
    layered_x_strength: float = LAYERED_X_STRENGTH
    layered_y_strength: float = LAYERED_Y_STRENGTH
    layered_link_strength: float = LAYERED_LINK_STRENGTH


class ViewportConfig(BaseModel):
    min_scale: float = MIN_SCALE
    max_scale: float = MAX_SCALE
    zoom_step: float = ZOOM_STEP
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT


class RenderConfig(BaseModel):
    dim_opacity: float = DIM_OPACITY
    label_max_chars: int = LABEL_MAX_CHARS
    click_distance: float = CLICK_DISTANCE


class EngineConfig(BaseModel):
    """Complete engine configuration, as stored in config.yaml."""
    physics: PhysicsConfig = PhysicsConfig()
    viewport: ViewportConfig = ViewportConfig()
    render: RenderConfig = RenderConfig()


def load_config(path: Optional[Path] = None) -> EngineConfig:
    """
    Load engine configuration from a YAML file.

    A missing file yields the defaults. Unknown top-level keys (such as
    "version") are ignored.

    Raises:
        ConfigError: If the file is not valid YAML or has invalid values.
    """
    config_path = path or CONFIG_PATH
    if not config_path.exists():
        logger.debug(f"No config at {config_path}, using defaults")
        return EngineConfig()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {config_path}")

    try:
        return EngineConfig.model_validate(
            {k: v for k, v in data.items() if k in EngineConfig.model_fields}
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid config values in {config_path}: {e}") from e
