"""
Stroke path construction for SigilForge.

Visits the placed points in numeric-code order and joins each consecutive
pair with a straight line, or with an arc when the two points are
neighbours on the same ring.
"""

from sigilforge.models import ArcSegment, LineSegment
from sigilforge.tracer import get_tracer, trace


def order_by_value(points):
    """Points sorted by numeric code: the order the stroke visits them."""
    return sorted(points, key=lambda p: p.number)


def is_adjacent_on_ring(p1, p2):
    """
    Check whether two points are angular neighbours on the same ring.

    Points on different rings or different circles of a multi-circle layout
    are never adjacent. Position wrap-around (last to first) counts.
    """
    if p1.ring_index != p2.ring_index or p1.group != p2.group:
        return False
    diff = abs(p1.position_in_ring - p2.position_in_ring)
    return diff == 1 or diff == p1.ring_total - 1


@trace(label="build_path")
def build_path(points):
    """
    Build the stroke as a list of Line/Arc segments.

    Returns exactly len(points) - 1 segments, indexed in stroke order.
    """
    tracer = get_tracer()

    ordered = order_by_value(points)
    segments = []

    for i, (start, end) in enumerate(zip(ordered, ordered[1:])):
        if is_adjacent_on_ring(start, end):
            segments.append(ArcSegment(
                index=i,
                start=start,
                end=end,
                center_x=start.circle_cx,
                center_y=start.circle_cy,
                radius=start.radius,
            ))
        else:
            segments.append(LineSegment(index=i, start=start, end=end))

    arcs = sum(1 for s in segments if s.kind == "arc")
    tracer.event(f"Built path: {len(segments)} segments, {arcs} arcs")

    return segments
