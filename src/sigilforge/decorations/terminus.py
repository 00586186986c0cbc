"""
Bar terminus placement for SigilForge.

The last point of the stroke gets a short bar perpendicular to the
incoming direction. Its half-length is searched so the bar stays clear of
the rest of the figure.
"""

import math

from shapely.geometry import LineString
from shapely.geometry import Point as ShapelyPoint

from sigilforge.models import ArcSegment, EndMarker, LineSegment, StartMarker
from sigilforge.strokes.geometry import line_arc_intersection, line_line_intersection
from sigilforge.tracer import get_tracer, trace


def _segment_geometry(segment):
    start = (segment.start.x, segment.start.y)
    end = (segment.end.x, segment.end.y)
    if start == end:
        return ShapelyPoint(start)
    return LineString([start, end])


def bar_clearance(end_point, perp_angle, bar_length, segments, config, skip_index):
    """
    Distance from the bar to the nearest part of the figure.

    Counts bar crossings (measured from the end point) and bar tips that
    come within the proximity threshold of a line. Returns math.inf when
    nothing is near.
    """
    ic = config.intersections
    proximity = config.decorations.bar_proximity

    ex, ey = end_point.x, end_point.y
    dx = math.cos(perp_angle) * bar_length
    dy = math.sin(perp_angle) * bar_length
    tip1 = (ex + dx, ey + dy)
    tip2 = (ex - dx, ey - dy)

    nearest = math.inf
    for segment in segments:
        if segment.index == skip_index:
            continue

        if isinstance(segment, LineSegment):
            hit = line_line_intersection(
                tip1, tip2, segment.start, segment.end,
                ic.param_min, ic.param_max, ic.parallel_epsilon,
            )
            if hit:
                nearest = min(nearest, math.hypot(hit[0] - ex, hit[1] - ey))

            geom = _segment_geometry(segment)
            for tip in (tip1, tip2):
                d = ShapelyPoint(tip).distance(geom)
                if d < proximity:
                    nearest = min(nearest, d)

        elif isinstance(segment, ArcSegment):
            hit = line_arc_intersection(
                tip1, tip2, segment.start, segment.end,
                segment.center_x, segment.center_y, segment.radius,
                steps=ic.arc_steps,
                param_min=ic.param_min,
                param_max=ic.param_max,
                epsilon=ic.parallel_epsilon,
            )
            if hit:
                nearest = min(nearest, math.hypot(hit[0] - ex, hit[1] - ey))

    return nearest


def choose_bar_length(end_point, perp_angle, segments, config, skip_index):
    """
    Search bar half-lengths from the configured minimum to maximum.

    A length is acceptable when its clearance exceeds length + margin. The
    first acceptable length in the preferred range wins; otherwise the
    acceptable length with the largest clearance; otherwise the default.
    """
    dc = config.decorations
    best_length = dc.bar_default_length
    best_clearance = 0.0

    for length in range(dc.bar_min_length, dc.bar_max_length + 1):
        clearance = bar_clearance(end_point, perp_angle, length, segments, config, skip_index)
        if clearance <= length + dc.bar_margin:
            continue
        if dc.bar_preferred_min <= length <= dc.bar_preferred_max:
            return float(length)
        if clearance > best_clearance:
            best_length = float(length)
            best_clearance = clearance

    return best_length


@trace(label="find_bar_terminus")
def find_bar_terminus(sorted_points, segments, config):
    """
    Build the end marker for the last point of the stroke.

    sorted_points must be in stroke order and hold at least two points.
    The final segment itself is excluded from the clearance search.
    """
    tracer = get_tracer()

    last = sorted_points[-1]
    second_last = sorted_points[-2]
    incoming = math.atan2(last.y - second_last.y, last.x - second_last.x)
    perp = incoming + math.pi / 2
    skip_index = segments[-1].index if segments else None

    bar_length = choose_bar_length(last, perp, segments, config, skip_index)

    tracer.event(f"Bar terminus at {last.letter!r}: half-length {bar_length:g}")

    return EndMarker(
        x=last.x,
        y=last.y,
        letter=last.letter,
        incoming_angle=incoming,
        bar_length=bar_length,
    )


def build_markers(sorted_points, segments, config):
    """Start dot on the first point, bar terminus on the last."""
    first = sorted_points[0]
    start = StartMarker(x=first.x, y=first.y, letter=first.letter)
    return [start, find_bar_terminus(sorted_points, segments, config)]
