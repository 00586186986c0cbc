"""
Main pipeline orchestrator for SigilForge.

Turns a phrase into sigil files: letter extraction, layout selection,
validation, SVG export and the scene graph.
"""

import os

from sigilforge.config import load_config, validate_config
from sigilforge.export.svg_package import generate_svg_package
from sigilforge.io.load_phrase import extract_letters, validate_phrase_input
from sigilforge.io.save_artifacts import DebugArtifactWriter, ensure_dir, save_json
from sigilforge.layout.selector import select_layout
from sigilforge.models import LayoutMode, Scene, generate_phrase_id
from sigilforge.tracer import get_tracer, trace
from sigilforge.validate.report import generate_report
from sigilforge.validate.rules import run_validation


def choose_layout(result, layout_mode=None):
    """
    Pick the layout to publish.

    An explicitly configured mode wins; otherwise the recommended one.
    """
    if layout_mode is None:
        return result.recommended
    mode = LayoutMode(layout_mode)
    if mode not in result.layouts:
        raise ValueError(f"Layout {mode.value} was not computed")
    return mode


@trace(label="run_pipeline")
def run_pipeline(text, out_dir, config=None, config_path=None, debug=False):
    """
    Run the full pipeline for one phrase.

    Args:
        text: input phrase
        out_dir: output directory
        config: PipelineConfig object (optional)
        config_path: path to YAML config file (optional)
        debug: enable debug artifact generation

    Returns:
        Scene with the selection, chosen layout and validation report
    """
    tracer = get_tracer()

    # Load configuration
    if config is None:
        config = load_config(config_path)
    validate_config(config)

    config.debug.enabled = debug

    # Validate input
    errors = validate_phrase_input(text)
    if errors:
        for error in errors:
            tracer.event(error, level="ERROR")
        raise ValueError(f"Input validation failed: {errors}")

    ensure_dir(out_dir)

    canvas = config.canvas

    with tracer.span("letters", module="pipeline"):
        letter_set = extract_letters(text)

    # A requested alternative layout has to be built even when standard is not crowded
    force_all = canvas.force_all_layouts or (
        canvas.layout_mode is not None and LayoutMode(canvas.layout_mode) != LayoutMode.STANDARD
    )

    with tracer.span("select_layout", module="pipeline"):
        result = select_layout(
            letter_set,
            canvas.size,
            canvas.points_per_ring,
            force_all=force_all,
            config=config,
            debug_root=out_dir if config.debug.enabled else None,
        )
        chosen = choose_layout(result, canvas.layout_mode)

    scene = Scene(
        phrase_id=generate_phrase_id(text),
        text=text,
        letter_set=letter_set,
        chosen=chosen,
        selection=result,
    )

    with tracer.span("validate_export", module="pipeline"):
        scene.validation = run_validation(result, letter_set, config)

        generate_svg_package(result, chosen, out_dir, config)

        debug_writer = DebugArtifactWriter(
            out_dir, "global", enabled=True,
        ) if config.debug.enabled else None

        generate_report(scene.validation, out_dir, debug_writer)

    # Save scene graph
    scene_path = os.path.join(out_dir, "scene.json")
    save_json(scene, scene_path)

    tracer.event(
        f"Pipeline complete: {len(letter_set)} letters, {len(result.layouts)} layouts, "
        f"chosen {chosen.value}"
    )

    return scene
