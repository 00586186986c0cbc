"""
Drawable primitives for SigilForge.

Converts stroke segments into line/arc drawing commands. Crossings that
are not drawn as circle joints become line breaks: a gap is cut into one
of the two crossing strokes so the other appears to pass over it.
"""

import math

from sigilforge.models import ArcPrimitive, ArcSegment, LinePrimitive, LineSegment
from sigilforge.strokes.geometry import arc_sweep
from sigilforge.tracer import get_tracer, trace


def breaks_for_segment(segment_index, intersections):
    """
    Line-break intersections that cut the given segment.

    The position of an intersection in the consolidated list decides which
    of its segments receives the gap: even positions cut the first listed
    segment, odd positions the second.
    """
    mine = []
    for position, inter in enumerate(intersections):
        if inter.use_circle or segment_index not in inter.segment_indices:
            continue
        is_first = inter.segment_indices[0] == segment_index
        if is_first == (position % 2 == 0):
            mine.append(inter)
    return mine


def _cut_line(segment, breaks, gap, min_piece):
    """Split a line at each break, leaving a gap centred on the crossing."""
    x1, y1 = segment.start.x, segment.start.y
    x2, y2 = segment.end.x, segment.end.y
    length = math.hypot(x2 - x1, y2 - y1)
    if length == 0:
        return []

    if not breaks:
        return [LinePrimitive(x1=x1, y1=y1, x2=x2, y2=y2, segment_index=segment.index)]

    ux, uy = (x2 - x1) / length, (y2 - y1) / length
    half = gap / 2
    ordered = sorted(breaks, key=lambda b: math.hypot(b.x - x1, b.y - y1))

    pieces = []
    cur_x, cur_y = x1, y1
    for brk in ordered:
        gap_x, gap_y = brk.x - ux * half, brk.y - uy * half
        if math.hypot(gap_x - cur_x, gap_y - cur_y) > min_piece:
            pieces.append(LinePrimitive(x1=cur_x, y1=cur_y, x2=gap_x, y2=gap_y, segment_index=segment.index))
        cur_x, cur_y = brk.x + ux * half, brk.y + uy * half

    if math.hypot(x2 - cur_x, y2 - cur_y) > min_piece:
        pieces.append(LinePrimitive(x1=cur_x, y1=cur_y, x2=x2, y2=y2, segment_index=segment.index))

    return pieces


def _arc_primitive(segment):
    _, sweep = arc_sweep(segment.start, segment.end, segment.center_x, segment.center_y)
    return ArcPrimitive(
        x1=segment.start.x,
        y1=segment.start.y,
        x2=segment.end.x,
        y2=segment.end.y,
        radius=segment.radius,
        sweep=1 if sweep > 0 else 0,
        segment_index=segment.index,
    )


@trace(label="build_drawables")
def build_drawables(segments, intersections, config):
    """
    Build drawing commands for the stroke.

    Arcs are drawn whole; a break assigned to an arc is not drawn.
    Returns list of LinePrimitive/ArcPrimitive in stroke order.
    """
    tracer = get_tracer()
    ic = config.intersections

    drawables = []
    gaps = 0
    for segment in segments:
        if isinstance(segment, LineSegment):
            breaks = breaks_for_segment(segment.index, intersections)
            gaps += len(breaks)
            drawables.extend(_cut_line(segment, breaks, ic.break_gap, ic.min_piece_length))
        elif isinstance(segment, ArcSegment):
            drawables.append(_arc_primitive(segment))
        else:
            raise TypeError(f"Unsupported segment type: {type(segment).__name__}")

    tracer.event(f"Built {len(drawables)} drawables with {gaps} line breaks")

    return drawables
