"""
Acute-vertex dots for SigilForge.

Marks stroke vertices where the path doubles back sharply or runs almost
straight through, then keeps a seeded half of them so the figure is not
covered in dots.
"""

from sigilforge.decorations.seeded import seeded_random
from sigilforge.models import AcuteVertex
from sigilforge.strokes.geometry import vertex_angle
from sigilforge.tracer import get_tracer, trace


def letter_seed(letters):
    """Seed derived from a letter set: the sum of its character codes."""
    return sum(ord(ch) for ch in letters)


def acute_candidates(sorted_points, config):
    """Interior vertices whose angle falls below the minimum or above the maximum."""
    dc = config.decorations
    candidates = []
    for i in range(1, len(sorted_points) - 1):
        prev, curr, nxt = sorted_points[i - 1], sorted_points[i], sorted_points[i + 1]
        angle = vertex_angle(prev, curr, nxt)
        if angle < dc.acute_min_angle or angle > dc.acute_max_angle:
            candidates.append(AcuteVertex(x=curr.x, y=curr.y, angle=angle, index=i))
    return candidates


@trace(label="find_acute_vertices")
def find_acute_vertices(sorted_points, letters, config):
    """
    Pick the acute vertices that get a dot.

    sorted_points must be in stroke (numeric-code) order. Candidate k is
    kept when seeded_random(seed + k * stride) exceeds the keep threshold.
    """
    tracer = get_tracer()
    dc = config.decorations

    candidates = acute_candidates(sorted_points, config)
    seed = letter_seed(letters)
    kept = [
        vertex for k, vertex in enumerate(candidates)
        if seeded_random(seed + k * dc.acute_seed_stride) > dc.acute_keep_threshold
    ]

    tracer.event(f"Acute vertices: {len(candidates)} candidates, {len(kept)} kept")

    return kept
