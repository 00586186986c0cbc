"""
Configuration management for SigilForge.

Loads YAML configuration with sensible defaults for all pipeline stages.
"""

import os
from dataclasses import asdict, dataclass, field, fields

import yaml


@dataclass
class CanvasConfig:
    """Figure size and layout selection."""
    size: float = 200.0
    points_per_ring: int = 5
    layout_mode: str = None  # None picks the recommended layout
    force_all_layouts: bool = False


@dataclass
class IntersectionConfig:
    """Configuration for crossing detection, consolidation and line breaks."""
    param_min: float = 0.08
    param_max: float = 0.92
    parallel_epsilon: float = 0.001
    arc_steps: int = 24
    arc_crossing_angle: float = 50.0  # degrees
    default_crossing_angle: float = 45.0  # degrees
    consolidate_radius: float = 12.0
    circle_angle_threshold: float = 45.0  # degrees
    break_gap: float = 14.0
    min_piece_length: float = 3.0


@dataclass
class HeatConfig:
    """Configuration for the crowding grid."""
    grid_size: int = 6
    cell_threshold: int = 2
    zone_threshold: int = 2


@dataclass
class DecorationConfig:
    """Configuration for vertex dots, arc dots and the terminal bar."""
    acute_min_angle: float = 30.0
    acute_max_angle: float = 150.0
    acute_keep_threshold: float = 0.5
    acute_seed_stride: int = 17
    arc_dot_jitter: float = 0.15
    arc_dot_min_spacing: float = 8.0
    bar_min_length: int = 3
    bar_max_length: int = 20
    bar_preferred_min: int = 6
    bar_preferred_max: int = 10
    bar_default_length: float = 8.0
    bar_proximity: float = 4.0
    bar_margin: float = 2.0


@dataclass
class RenderConfig:
    """Configuration for SVG rendering."""
    stroke_color: str = "#3f3f46"
    background: str = "#fafaf9"
    guide_color: str = "#e4e4e7"
    heat_color: str = "red"
    stroke_width: float = 2.0
    show_guides: bool = True
    show_heatmap: bool = False


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class DebugConfig:
    """Configuration for debug artifact generation."""
    enabled: bool = False


@dataclass
class PipelineConfig:
    """Complete pipeline configuration."""
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    intersections: IntersectionConfig = field(default_factory=IntersectionConfig)
    heat: HeatConfig = field(default_factory=HeatConfig)
    decorations: DecorationConfig = field(default_factory=DecorationConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)


SECTIONS = [f.name for f in fields(PipelineConfig)]

MIN_POINTS_PER_RING = 3
MAX_POINTS_PER_RING = 12


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values.
    """
    config = PipelineConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    validate_config(config)
    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass. Unknown keys are ignored."""
    for section in SECTIONS:
        values = yaml_data.get(section)
        if not isinstance(values, dict):
            continue
        target = getattr(config, section)
        for key, value in values.items():
            if hasattr(target, key):
                setattr(target, key, value)

    return config


def validate_config(config):
    """
    Check the values a caller can get wrong.

    Raises ValueError on an unusable canvas, ring size or layout mode.
    """
    from sigilforge.models import LayoutMode

    canvas = config.canvas
    if canvas.size <= 0:
        raise ValueError(f"Canvas size must be positive, got {canvas.size}")
    if not MIN_POINTS_PER_RING <= canvas.points_per_ring <= MAX_POINTS_PER_RING:
        raise ValueError(
            f"points_per_ring must be between {MIN_POINTS_PER_RING} and "
            f"{MAX_POINTS_PER_RING}, got {canvas.points_per_ring}"
        )
    if canvas.layout_mode is not None:
        valid = [m.value for m in LayoutMode]
        if getattr(canvas.layout_mode, "value", canvas.layout_mode) not in valid:
            raise ValueError(f"Unknown layout mode {canvas.layout_mode!r}, expected one of {valid}")
    if config.heat.grid_size < 1:
        raise ValueError(f"Heat grid size must be at least 1, got {config.heat.grid_size}")

    return config


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    yaml_data = asdict(PipelineConfig())

    # Runtime-only settings stay out of the reference file
    yaml_data["tracing"].pop("file_path", None)
    yaml_data["tracing"].pop("json_output", None)

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
