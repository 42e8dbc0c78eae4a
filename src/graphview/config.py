"""Render configuration.

Every knob has a default matching the stock look, so an empty config file
(`{}`) is valid. Unknown keys are rejected to catch typos.
"""

import json
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from graphview.errors import ConfigError
from graphview.kernel.colors import DEFAULT_COLOR, DEFAULT_PALETTE
from graphview.kernel.render_plan import ViewStyle


class RenderConfig(BaseModel):
    """Palette, styling, layout and timing for a render session."""
    palette: Tuple[str, ...] = DEFAULT_PALETTE
    default_color: str = DEFAULT_COLOR
    debounce_seconds: float = Field(0.15, ge=0)
    style: ViewStyle = Field(default_factory=ViewStyle)

    node_shape: str = "dot"
    node_size: int = 18
    node_border_width: int = 2
    stabilization: bool = True
    improved_layout: bool = True
    hover: bool = True
    background: str = "#fff"

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("palette")
    @classmethod
    def validate_palette(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        if not v:
            raise ValueError("palette must contain at least one color")
        return v

    def vis_options(self) -> Dict[str, Any]:
        """vis-network options: force-directed layout, directed arrows, hover."""
        style = self.style
        return {
            "nodes": {
                "shape": self.node_shape,
                "size": self.node_size,
                "borderWidth": self.node_border_width,
                "font": {
                    "face": style.font_face,
                    "size": style.node_font_size,
                    "color": style.node_font_color,
                },
            },
            "edges": {
                "arrows": "to",
                "font": {"face": style.font_face, "size": style.edge_font_size},
            },
            "physics": {"stabilization": self.stabilization},
            "layout": {"improvedLayout": self.improved_layout},
            "interaction": {"hover": self.hover},
        }


def load_config(path: Union[str, Path]) -> RenderConfig:
    """Load a RenderConfig from a JSON file.

    Raises:
        ConfigError: If the file is missing, not JSON, or fails validation.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file is not valid JSON: {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a JSON object: {path}")
    try:
        return RenderConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e
