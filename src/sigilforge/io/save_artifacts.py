"""
Artifact saving utilities for SigilForge.

Handles writing scene JSON, SVG documents and per-layout debug dumps.
"""

import json
import os

from sigilforge.tracer import get_tracer


def ensure_dir(path):
    """Create directory if it does not exist."""
    if path:
        os.makedirs(path, exist_ok=True)


def get_debug_dir(out_dir, layout_name, stage_name):
    """
    Get the debug directory path for a stage of one layout.

    Creates the directory if it does not exist.
    """
    debug_dir = os.path.join(out_dir, "debug", layout_name, stage_name)
    ensure_dir(debug_dir)
    return debug_dir


def save_json(data, path, indent=2):
    """
    Save a dictionary or Pydantic model to JSON.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    # Handle Pydantic models
    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, default=str)

    tracer.event(f"Saved JSON: {path}")


def save_svg(svg_content, path):
    """
    Save an svgwrite Drawing (or raw markup) to file.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    if hasattr(svg_content, "tostring"):
        content = svg_content.tostring()
    else:
        content = str(svg_content)

    with open(path, "w", encoding="utf-8") as f:
        f.write(content)

    tracer.event(f"Saved SVG: {path}")


class DebugArtifactWriter:
    """
    Helper class to manage debug artifact writing for a single layout.

    Stage dumps land under <out_dir>/debug/<layout_name>/<stage>/.
    """

    def __init__(self, out_dir, layout_name, enabled=True):
        self.out_dir = out_dir
        self.layout_name = layout_name
        self.enabled = enabled

    def get_stage_dir(self, stage_name):
        """Get the debug directory for a stage."""
        return get_debug_dir(self.out_dir, self.layout_name, stage_name)

    def save_json(self, data, stage_name, filename):
        """Save a JSON artifact."""
        if not self.enabled:
            return
        path = os.path.join(self.get_stage_dir(stage_name), filename)
        save_json(data, path)
