"""
Crossing detection and consolidation for SigilForge.

Every unordered pair of stroke segments is tested. Line/line crossings are
solved exactly; line/arc crossings use a chord approximation of the arc;
arc/arc pairs are not tested. Nearby crossings are then merged so that a
dense junction gets one marker instead of several overlapping ones.
"""

import math
from dataclasses import dataclass, field

from sigilforge.models import (
    ArcSegment, ConsolidatedIntersection, LineSegment, RawIntersection,
)
from sigilforge.strokes.geometry import crossing_angle, line_arc_intersection, line_line_intersection
from sigilforge.tracer import get_tracer, trace


def _line_line(a, b, config):
    ic = config.intersections
    hit = line_line_intersection(
        a.start, a.end, b.start, b.end,
        ic.param_min, ic.param_max, ic.parallel_epsilon,
    )
    if not hit:
        return None
    angle = crossing_angle(a.start, a.end, b.start, b.end, default=ic.default_crossing_angle)
    return hit[0], hit[1], angle


def _line_arc(line, arc, config):
    ic = config.intersections
    hit = line_arc_intersection(
        line.start, line.end, arc.start, arc.end,
        arc.center_x, arc.center_y, arc.radius,
        steps=ic.arc_steps,
        param_min=ic.param_min,
        param_max=ic.param_max,
        epsilon=ic.parallel_epsilon,
    )
    if not hit:
        return None
    # Exact tangent angle is not computed
    return hit[0], hit[1], ic.arc_crossing_angle


def intersect_segments(a, b, config):
    """
    Test two segments for a crossing.

    Returns (x, y, crossing_angle) or None. The result does not depend on
    argument order.
    """
    if isinstance(a, LineSegment) and isinstance(b, LineSegment):
        return _line_line(a, b, config)
    if isinstance(a, LineSegment) and isinstance(b, ArcSegment):
        return _line_arc(a, b, config)
    if isinstance(a, ArcSegment) and isinstance(b, LineSegment):
        return _line_arc(b, a, config)
    if isinstance(a, ArcSegment) and isinstance(b, ArcSegment):
        return None
    raise TypeError(f"Unsupported segment types: {type(a).__name__}, {type(b).__name__}")


@trace(label="find_intersections")
def find_intersections(segments, config):
    """
    Find all crossings between pairs of segments.

    Returns list of RawIntersection in (i, j) pair order.
    """
    tracer = get_tracer()

    raw = []
    for i in range(len(segments)):
        for j in range(i + 1, len(segments)):
            hit = intersect_segments(segments[i], segments[j], config)
            if hit:
                x, y, angle = hit
                raw.append(RawIntersection(
                    x=x, y=y,
                    segment_indices=(segments[i].index, segments[j].index),
                    crossing_angle=angle,
                ))

    tracer.event(f"Found {len(raw)} raw intersections among {len(segments)} segments")

    return raw


@dataclass
class _Atom:
    """One input item: a raw crossing or an already consolidated one."""
    x: float
    y: float
    count: int
    angle: float
    indices: tuple


@dataclass
class _Cluster:
    atoms: list = field(default_factory=list)

    @property
    def count(self):
        return sum(a.count for a in self.atoms)

    def centroid(self):
        if len(self.atoms) == 1:
            return self.atoms[0].x, self.atoms[0].y
        total = self.count
        return (
            sum(a.x * a.count for a in self.atoms) / total,
            sum(a.y * a.count for a in self.atoms) / total,
        )

    def angle(self):
        if len(self.atoms) == 1:
            return self.atoms[0].angle
        return sum(a.angle * a.count for a in self.atoms) / self.count

    def indices(self):
        ordered = []
        for atom in self.atoms:
            for idx in atom.indices:
                if idx not in ordered:
                    ordered.append(idx)
        return tuple(ordered)


def _to_atom(item):
    if isinstance(item, ConsolidatedIntersection):
        return _Atom(item.x, item.y, item.consolidated, item.crossing_angle, tuple(item.segment_indices))
    return _Atom(item.x, item.y, 1, item.crossing_angle, tuple(item.segment_indices))


def _merge_pass(clusters, radius):
    """
    One greedy pass: each unvisited cluster absorbs every later unvisited
    cluster whose centroid lies within radius of its own.
    """
    merged = []
    visited = set()

    for i, seed in enumerate(clusters):
        if i in visited:
            continue
        visited.add(i)
        sx, sy = seed.centroid()
        group = _Cluster(atoms=list(seed.atoms))

        for j in range(i + 1, len(clusters)):
            if j in visited:
                continue
            ox, oy = clusters[j].centroid()
            if math.hypot(sx - ox, sy - oy) < radius:
                group.atoms.extend(clusters[j].atoms)
                visited.add(j)

        merged.append(group)

    return merged


@trace(label="consolidate_intersections")
def consolidate_intersections(items, config):
    """
    Merge crossings that lie within the consolidation radius of each other.

    Accepts RawIntersection or ConsolidatedIntersection items. Merging
    repeats until a pass changes nothing, so feeding the output back in
    returns it unchanged.

    A merged group of two or more crossings is always drawn as a circle
    joint; a lone crossing is a circle joint only when its angle is
    shallow, otherwise it becomes a line break.
    """
    tracer = get_tracer()
    ic = config.intersections

    clusters = [_Cluster(atoms=[_to_atom(item)]) for item in items]
    passes = 0
    while True:
        passes += 1
        merged = _merge_pass(clusters, ic.consolidate_radius)
        done = len(merged) == len(clusters)
        clusters = merged
        if done:
            break

    consolidated = []
    for cluster in clusters:
        x, y = cluster.centroid()
        count = cluster.count
        angle = cluster.angle()
        consolidated.append(ConsolidatedIntersection(
            x=x,
            y=y,
            segment_indices=cluster.indices(),
            crossing_angle=angle,
            consolidated=count,
            use_circle=count >= 2 or angle < ic.circle_angle_threshold,
        ))

    circles = sum(1 for c in consolidated if c.use_circle)
    tracer.event(
        f"Consolidated {len(items)} -> {len(consolidated)} intersections "
        f"({circles} circle joints, {passes} passes)"
    )

    return consolidated
