"""
Layout generation for SigilForge.

Places one point per letter on concentric rings or on a pair of circles.
Every generator places exactly len(letter_set) points; the ring/circle
groups it produces always add up to that count.
"""

import math

from sigilforge.models import GuideCircle, GuideLine, Layout, LayoutMode, Point, PointGroup
from sigilforge.tracer import get_tracer, trace


OUTER_RADIUS_RATIO = 0.42
CANVAS_MARGIN_RATIO = 0.05
VENN_OFFSET_RATIO = 0.4
SATELLITE_GAP_RATIO = 0.03
SATELLITE_RADIUS_RATIO = 0.5

# Integer fractions keep the splits exact (0.7 * 10 is not exactly 7.0)
EXTRA_RINGS_NUM, EXTRA_RINGS_DEN = 6, 10
SATELLITE_MAIN_NUM, SATELLITE_MAIN_DEN = 7, 10


def _ceil_div(a, b):
    return -(-a // b)


def _ring_angle(position, total):
    """Angle of a slot on a ring, starting at the top and running clockwise on screen."""
    return (position / total) * math.pi * 2 - math.pi / 2


def _place(letter_set, i, *, ring_index, position, total, radius, cx, cy, group, index=None):
    angle = _ring_angle(position, total)
    return Point(
        letter=letter_set.letters[i],
        number=letter_set.numbers[i],
        index=i if index is None else index,
        ring_index=ring_index,
        position_in_ring=position,
        ring_total=total,
        radius=radius,
        x=cx + math.cos(angle) * radius,
        y=cy + math.sin(angle) * radius,
        angle=angle,
        group=group,
        circle_cx=cx,
        circle_cy=cy,
    )


def standard_layout(letter_set, size, points_per_ring, mode=LayoutMode.STANDARD):
    """
    Concentric rings filled in input order, outermost first.

    The final ring may be partially filled; its points spread over the
    actual number they hold.
    """
    n = len(letter_set)
    cx = cy = size / 2
    num_rings = _ceil_div(n, points_per_ring)
    max_radius = size * OUTER_RADIUS_RATIO
    min_radius = max_radius / (1 + (num_rings - 1) / 2)
    ring_gap = min_radius / 2

    rings = [max_radius - i * ring_gap for i in range(num_rings)]

    points = []
    for i in range(n):
        ring_index = i // points_per_ring
        start_of_ring = ring_index * points_per_ring
        ring_total = min(start_of_ring + points_per_ring, n) - start_of_ring
        points.append(_place(
            letter_set, i,
            ring_index=ring_index,
            position=i % points_per_ring,
            total=ring_total,
            radius=rings[ring_index],
            cx=cx, cy=cy,
            group=PointGroup.MAIN,
        ))

    return Layout(
        mode=mode,
        size=size,
        cx=cx,
        cy=cy,
        points=tuple(points),
        ring_radii=tuple(rings),
        max_radius=max_radius,
        guides=tuple(GuideCircle(cx=cx, cy=cy, r=r) for r in rings),
    )


def venn_layout(letter_set, size, points_per_ring):
    """
    Two equal circles overlapping by about 60%.

    The first half of the letters (rounded up) goes on the left circle,
    the rest on the right, each in input order.
    """
    n = len(letter_set)
    cx = cy = size / 2
    margin = size * CANVAS_MARGIN_RATIO
    available_width = size - 2 * margin
    # Total width is 2r + 0.4r
    radius = available_width / (2 + VENN_OFFSET_RATIO)
    offset = radius * VENN_OFFSET_RATIO

    left_count = _ceil_div(n, 2)
    right_count = n - left_count
    left_cx = cx - offset / 2
    right_cx = cx + offset / 2

    points = []
    for i in range(left_count):
        points.append(_place(
            letter_set, i,
            ring_index=0, position=i, total=left_count, radius=radius,
            cx=left_cx, cy=cy, group=PointGroup.LEFT,
        ))
    for i in range(right_count):
        points.append(_place(
            letter_set, left_count + i,
            ring_index=0, position=i, total=right_count, radius=radius,
            cx=right_cx, cy=cy, group=PointGroup.RIGHT,
        ))

    return Layout(
        mode=LayoutMode.VENN,
        size=size,
        cx=cx,
        cy=cy,
        points=tuple(points),
        ring_radii=(radius,),
        max_radius=radius,
        guides=(
            GuideCircle(cx=left_cx, cy=cy, r=radius),
            GuideCircle(cx=right_cx, cy=cy, r=radius),
        ),
    )


def extra_rings_layout(letter_set, size, points_per_ring):
    """Standard rings holding 60% as many points each (at least 3)."""
    reduced = max(3, points_per_ring * EXTRA_RINGS_NUM // EXTRA_RINGS_DEN)
    return standard_layout(letter_set, size, reduced, mode=LayoutMode.EXTRA_RINGS)


def satellite_layout(letter_set, size, points_per_ring):
    """
    A main ring with 70% of the letters and a half-size satellite ring.

    The satellite takes the letters with the highest numeric codes. Both
    rings place their members in original input order. The main ring is
    shifted left so the pair stays centred on the canvas.
    """
    n = len(letter_set)
    cx = cy = size / 2
    main_count = _ceil_div(n * SATELLITE_MAIN_NUM, SATELLITE_MAIN_DEN)
    sat_count = n - main_count

    margin = size * CANVAS_MARGIN_RATIO
    gap = size * SATELLITE_GAP_RATIO
    # Width is 2*main + gap + 2*sat with sat = main/2
    main_radius = (size - 2 * margin - gap) / 3
    sat_radius = main_radius * SATELLITE_RADIUS_RATIO
    main_cx = cx - (gap / 2 + sat_radius)
    sat_cx = main_cx + main_radius + gap + sat_radius

    by_value = sorted(range(n), key=lambda i: letter_set.numbers[i])
    main_members = sorted(by_value[:main_count])
    sat_members = sorted(by_value[main_count:])

    points = []
    for position, i in enumerate(main_members):
        points.append(_place(
            letter_set, i,
            ring_index=0, position=position, total=main_count, radius=main_radius,
            cx=main_cx, cy=cy, group=PointGroup.MAIN,
        ))
    for position, i in enumerate(sat_members):
        points.append(_place(
            letter_set, i,
            ring_index=1, position=position, total=sat_count, radius=sat_radius,
            cx=sat_cx, cy=cy, group=PointGroup.SATELLITE,
        ))

    guides = [GuideCircle(cx=main_cx, cy=cy, r=main_radius)]
    connector = None
    if sat_count > 0:
        guides.append(GuideCircle(cx=sat_cx, cy=cy, r=sat_radius))
        connector = GuideLine(
            x1=main_cx + main_radius, y1=cy,
            x2=sat_cx - sat_radius, y2=cy,
        )

    return Layout(
        mode=LayoutMode.SATELLITE,
        size=size,
        cx=cx,
        cy=cy,
        points=tuple(points),
        ring_radii=(main_radius, sat_radius),
        max_radius=main_radius,
        guides=tuple(guides),
        connector=connector,
    )


LAYOUT_GENERATORS = {
    LayoutMode.STANDARD: standard_layout,
    LayoutMode.VENN: venn_layout,
    LayoutMode.EXTRA_RINGS: extra_rings_layout,
    LayoutMode.SATELLITE: satellite_layout,
}


def empty_layout(size, mode):
    """Layout with no points, used for letter sets too small to draw."""
    return Layout(mode=LayoutMode(mode), size=size, cx=size / 2, cy=size / 2)


@trace(label="generate_layout")
def generate_layout(letter_set, size, points_per_ring, mode=LayoutMode.STANDARD):
    """
    Place the letters of a LetterSet using the given layout mode.

    Returns a Layout. Letter sets with fewer than two letters get an empty
    layout.
    """
    tracer = get_tracer()

    mode = LayoutMode(mode)
    if len(letter_set) < 2:
        return empty_layout(size, mode)

    layout = LAYOUT_GENERATORS[mode](letter_set, size, points_per_ring)

    tracer.event(
        f"Placed {len(layout.points)} points on {len(layout.ring_radii)} rings",
        mode=mode.value,
    )

    return layout
