"""
Arc dots for SigilForge.

Long arcs get up to three small dots spread along them, jittered by a
seed derived from the arc's endpoints.
"""

import math

from sigilforge.decorations.seeded import seeded_random
from sigilforge.models import ArcSegment, DecorationDot
from sigilforge.strokes.geometry import arc_length, arc_point
from sigilforge.tracer import get_tracer, trace


MAX_DOTS_PER_ARC = 3


def dot_count(length, radius):
    """Number of dots for an arc, judged against its full circumference."""
    circumference = 2 * math.pi * radius
    if length >= circumference / 2:
        count = 3
    elif length >= circumference / 3:
        count = 2
    elif length >= circumference / 4:
        count = 1
    else:
        count = 0
    return min(count, MAX_DOTS_PER_ARC)


def arc_seed(segment):
    return segment.start.number * 100 + segment.end.number + segment.index * 7


def dots_for_arc(segment, config):
    """Dots for a single arc segment, dropping any too close to an earlier one."""
    dc = config.decorations
    length = arc_length(segment.start, segment.end, segment.center_x, segment.center_y, segment.radius)
    count = dot_count(length, segment.radius)
    seed = arc_seed(segment)

    dots = []
    for d in range(count):
        base_t = (d + 0.5) / count
        jitter = (seeded_random(seed + d * 73) - 0.5) * dc.arc_dot_jitter
        t = max(0.1, min(0.9, base_t + jitter))
        x, y = arc_point(segment.start, segment.end, segment.center_x, segment.center_y, segment.radius, t)

        if any(math.hypot(dot.x - x, dot.y - y) < dc.arc_dot_min_spacing for dot in dots):
            continue
        dots.append(DecorationDot(x=x, y=y, segment_index=segment.index))

    return dots


@trace(label="place_arc_dots")
def place_arc_dots(segments, config):
    """
    Place decoration dots on every arc segment of the stroke.

    Returns list of DecorationDot in stroke order.
    """
    tracer = get_tracer()

    dots = []
    for segment in segments:
        if isinstance(segment, ArcSegment):
            dots.extend(dots_for_arc(segment, config))

    tracer.event(f"Placed {len(dots)} arc dots")

    return dots
