"""
Single-layout sigil assembly for SigilForge.

Runs layout, path, intersection and decoration stages for one layout mode
and freezes the result into a Sigil.
"""

from sigilforge.config import PipelineConfig
from sigilforge.decorations.arc_dots import place_arc_dots
from sigilforge.decorations.terminus import build_markers
from sigilforge.decorations.vertices import find_acute_vertices
from sigilforge.layout.generators import empty_layout, generate_layout
from sigilforge.models import LayoutMode, Sigil, generate_sigil_id
from sigilforge.strokes.drawables import build_drawables
from sigilforge.strokes.intersections import consolidate_intersections, find_intersections
from sigilforge.strokes.path_builder import build_path, order_by_value
from sigilforge.tracer import get_tracer, trace


def empty_sigil(letter_set, size, points_per_ring, mode):
    """Sigil with no strokes or markers, for letter sets too small to draw."""
    mode = LayoutMode(mode)
    return Sigil(
        sigil_id=generate_sigil_id(letter_set.letters, size, points_per_ring, mode),
        mode=mode,
        size=size,
        points_per_ring=points_per_ring,
        layout=empty_layout(size, mode),
    )


@trace(label="generate_sigil")
def generate_sigil(letter_set, size, points_per_ring, mode=LayoutMode.STANDARD, config=None, debug_writer=None):
    """
    Generate the sigil for one layout mode.

    Args:
        letter_set: LetterSet to draw
        size: canvas edge length
        points_per_ring: ring capacity for ring-based layouts
        mode: LayoutMode
        config: PipelineConfig (defaults used when None)
        debug_writer: optional DebugArtifactWriter for stage dumps

    Returns:
        Sigil. Letter sets with fewer than two letters give an empty Sigil.
    """
    tracer = get_tracer()

    if config is None:
        config = PipelineConfig()
    mode = LayoutMode(mode)

    if len(letter_set) < 2:
        tracer.event(f"Only {len(letter_set)} letters, returning empty sigil", mode=mode.value)
        return empty_sigil(letter_set, size, points_per_ring, mode)

    # Stage 1: point placement
    layout = generate_layout(letter_set, size, points_per_ring, mode)
    if debug_writer:
        debug_writer.save_json(layout, "stage1", "layout.json")

    # Stage 2: stroke path
    ordered = order_by_value(layout.points)
    segments = build_path(layout.points)

    # Stage 3: crossings and line breaks
    raw = find_intersections(segments, config)
    consolidated = consolidate_intersections(raw, config)
    drawables = build_drawables(segments, consolidated, config)
    if debug_writer:
        debug_writer.save_json(
            {
                "raw": [r.model_dump(mode="json") for r in raw],
                "consolidated": [c.model_dump(mode="json") for c in consolidated],
            },
            "stage3",
            "intersections.json",
        )

    # Stage 4: decorations
    acute = find_acute_vertices(ordered, letter_set.letters, config)
    dots = place_arc_dots(segments, config)
    markers = build_markers(ordered, segments, config)
    if debug_writer:
        debug_writer.save_json(
            {
                "acute_vertices": [a.model_dump(mode="json") for a in acute],
                "arc_dots": [d.model_dump(mode="json") for d in dots],
                "markers": [m.model_dump(mode="json") for m in markers],
            },
            "stage4",
            "decorations.json",
        )

    sigil = Sigil(
        sigil_id=generate_sigil_id(letter_set.letters, size, points_per_ring, mode),
        mode=mode,
        size=size,
        points_per_ring=points_per_ring,
        layout=layout,
        segments=tuple(segments),
        drawables=tuple(drawables),
        raw_intersections=tuple(raw),
        intersections=tuple(consolidated),
        markers=tuple(markers),
        acute_vertices=tuple(acute),
        arc_dots=tuple(dots),
    )

    tracer.event(
        f"Sigil {sigil.sigil_id}: {len(segments)} segments, "
        f"{len(raw)} crossings, {len(sigil.circle_joints)} circle joints"
    )

    return sigil
