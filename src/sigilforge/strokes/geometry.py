"""
Numeric geometry primitives shared by the stroke and decoration stages.

Functions take plain (x, y) tuples or anything with .x/.y attributes and
never raise on degenerate input: near-parallel lines report no hit and
zero-length vectors fall back to fixed angles.
"""

import math


def xy(p):
    """Coordinates of a Point model or an (x, y) pair."""
    if hasattr(p, "x"):
        return p.x, p.y
    return p[0], p[1]


def line_line_intersection(p1, p2, p3, p4, param_min=0.08, param_max=0.92, epsilon=0.001):
    """
    Intersection of segment p1-p2 with segment p3-p4.

    Both segment parameters must lie strictly inside (param_min, param_max),
    which rules out crossings at shared endpoints. Returns (x, y, t) with t
    the parameter along p1-p2, or None.
    """
    x1, y1 = xy(p1)
    x2, y2 = xy(p2)
    x3, y3 = xy(p3)
    x4, y4 = xy(p4)

    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if abs(denom) < epsilon:
        return None

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denom

    if param_min < t < param_max and param_min < u < param_max:
        return x1 + t * (x2 - x1), y1 + t * (y2 - y1), t
    return None


def crossing_angle(a_from, a_to, b_from, b_to, default=45.0):
    """
    Angle between two segment directions in degrees.

    0 means parallel, 90 perpendicular; direction does not matter.
    """
    ax0, ay0 = xy(a_from)
    ax1, ay1 = xy(a_to)
    bx0, by0 = xy(b_from)
    bx1, by1 = xy(b_to)
    d1x, d1y = ax1 - ax0, ay1 - ay0
    d2x, d2y = bx1 - bx0, by1 - by0

    len1 = math.hypot(d1x, d1y)
    len2 = math.hypot(d2x, d2y)
    if len1 == 0 or len2 == 0:
        return default

    dot = abs((d1x / len1) * (d2x / len2) + (d1y / len1) * (d2y / len2))
    return math.degrees(math.acos(min(1.0, dot)))


def vertex_angle(prev, curr, nxt):
    """
    Interior angle at curr in degrees: 0 is a hairpin, 180 a straight line.
    """
    px, py = xy(prev)
    cx, cy = xy(curr)
    nx, ny = xy(nxt)
    v1x, v1y = px - cx, py - cy
    v2x, v2y = nx - cx, ny - cy

    len1 = math.hypot(v1x, v1y)
    len2 = math.hypot(v2x, v2y)
    if len1 == 0 or len2 == 0:
        return 180.0

    dot = (v1x / len1) * (v2x / len2) + (v1y / len1) * (v2y / len2)
    return math.degrees(math.acos(max(-1.0, min(1.0, dot))))


def arc_sweep(start, end, cx, cy):
    """
    Start angle and signed sweep of the shorter arc from start to end.

    Returns (start_angle, sweep) in radians with sweep in [-pi, pi].
    """
    sx, sy = xy(start)
    ex, ey = xy(end)
    angle1 = math.atan2(sy - cy, sx - cx)
    angle2 = math.atan2(ey - cy, ex - cx)

    diff = angle2 - angle1
    while diff > math.pi:
        diff -= 2 * math.pi
    while diff < -math.pi:
        diff += 2 * math.pi
    return angle1, diff


def arc_point(start, end, cx, cy, radius, t):
    """Point at fraction t along the shorter arc from start to end."""
    angle1, sweep = arc_sweep(start, end, cx, cy)
    angle = angle1 + sweep * t
    return cx + math.cos(angle) * radius, cy + math.sin(angle) * radius


def arc_length(start, end, cx, cy, radius):
    """Length of the shorter arc between two points on a circle."""
    _, sweep = arc_sweep(start, end, cx, cy)
    return abs(sweep) * radius


def arc_chords(start, end, cx, cy, radius, steps):
    """Split the shorter arc into `steps` straight chords."""
    angle1, sweep = arc_sweep(start, end, cx, cy)
    chords = []
    for i in range(steps):
        a1 = angle1 + sweep * (i / steps)
        a2 = angle1 + sweep * ((i + 1) / steps)
        chords.append((
            (cx + math.cos(a1) * radius, cy + math.sin(a1) * radius),
            (cx + math.cos(a2) * radius, cy + math.sin(a2) * radius),
        ))
    return chords


def line_arc_intersection(line_from, line_to, arc_from, arc_to, cx, cy, radius,
                          steps=24, param_min=0.08, param_max=0.92, epsilon=0.001):
    """
    Approximate crossing of a line with the shorter arc between two points.

    The arc is replaced by `steps` chords; the first chord hit wins.
    Returns (x, y) or None.
    """
    for c1, c2 in arc_chords(arc_from, arc_to, cx, cy, radius, steps):
        hit = line_line_intersection(line_from, line_to, c1, c2, param_min, param_max, epsilon)
        if hit:
            return hit[0], hit[1]
    return None
