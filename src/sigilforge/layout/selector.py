"""
Layout selection for SigilForge.

The standard layout is always built first. Only when its crossings crowd
together (or all layouts are requested) are the other layouts built and
scored, and the least crowded one recommended.
"""

from sigilforge.analysis.heatmap import analyze_heatmap
from sigilforge.config import PipelineConfig
from sigilforge.io.save_artifacts import DebugArtifactWriter
from sigilforge.models import LayoutMode, SelectionResult
from sigilforge.sigil import generate_sigil
from sigilforge.tracer import get_tracer, trace


def _debug_writer(debug_root, mode):
    if not debug_root:
        return None
    return DebugArtifactWriter(debug_root, mode.value, enabled=True)


def _build(letter_set, size, points_per_ring, mode, config, debug_root):
    """Sigil and heat analysis of one layout mode."""
    tracer = get_tracer()
    writer = _debug_writer(debug_root, mode)

    with tracer.span(f"layout_{mode.value}", module="selector"):
        sigil = generate_sigil(letter_set, size, points_per_ring, mode, config, writer)
        heat = analyze_heatmap(sigil.raw_intersections, size, config)

    if writer:
        writer.save_json(heat, "stage5", "heat.json")

    return sigil, heat


def recommend(scores):
    """
    Mode with the lowest score.

    Ties go to the mode declared first in LayoutMode.
    """
    best = None
    for mode in LayoutMode:
        if mode not in scores:
            continue
        if best is None or scores[mode] < scores[best]:
            best = mode
    return best


@trace(label="select_layout")
def select_layout(letter_set, size, points_per_ring, force_all=False, config=None, debug_root=None):
    """
    Build the standard layout and, when needed, the alternatives.

    Args:
        letter_set: LetterSet to draw
        size: canvas edge length
        points_per_ring: ring capacity
        force_all: build every layout even when standard is not crowded
        config: PipelineConfig (defaults used when None)
        debug_root: output directory for per-layout debug dumps (optional)

    Returns:
        SelectionResult. scores is None when only the standard layout was built.
    """
    tracer = get_tracer()

    if config is None:
        config = PipelineConfig()

    standard, standard_heat = _build(
        letter_set, size, points_per_ring, LayoutMode.STANDARD, config, debug_root,
    )

    if not standard_heat.is_hot and not force_all:
        tracer.event(f"Standard layout not crowded (score={standard_heat.global_score})")
        return SelectionResult(
            layouts={LayoutMode.STANDARD: standard},
            heat=standard_heat,
            heat_by_layout={LayoutMode.STANDARD: standard_heat},
            scores=None,
            is_hot=False,
            recommended=LayoutMode.STANDARD,
        )

    layouts = {LayoutMode.STANDARD: standard}
    heats = {LayoutMode.STANDARD: standard_heat}
    for mode in LayoutMode:
        if mode == LayoutMode.STANDARD:
            continue
        layouts[mode], heats[mode] = _build(
            letter_set, size, points_per_ring, mode, config, debug_root,
        )

    scores = {mode: heat.global_score for mode, heat in heats.items()}
    recommended = recommend(scores)

    tracer.event(
        "Layout scores: " + ", ".join(f"{m.value}={s}" for m, s in scores.items()),
        recommended=recommended.value,
    )

    return SelectionResult(
        layouts=layouts,
        heat=standard_heat,
        heat_by_layout=heats,
        scores=scores,
        is_hot=standard_heat.is_hot,
        recommended=recommended,
    )
