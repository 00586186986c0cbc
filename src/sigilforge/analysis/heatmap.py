"""
Crowding analysis for SigilForge.

Bins crossings onto a coarse grid over the canvas. Cells holding several
crossings are "warm"; 8-connected warm cells form heat zones, and the
summed zone severity scores how crowded a layout looks.
"""

import math

import networkx as nx
import numpy as np

from sigilforge.models import HeatAnalysis, HeatCell, HeatZone
from sigilforge.tracer import get_tracer, trace


# 8-connectivity neighborhood offsets
NEIGHBORS_8 = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
]


def cell_index(value, cell_size, grid_size):
    """Grid index of a coordinate, clamped into [0, grid_size - 1]."""
    return min(grid_size - 1, max(0, int(math.floor(value / cell_size))))


def bin_intersections(intersections, size, grid_size):
    """
    Count crossings per grid cell.

    Returns (counts, members): a (grid_size, grid_size) int array indexed
    [grid_y, grid_x] and a dict from (grid_x, grid_y) to member crossings.
    """
    cell_size = size / grid_size
    counts = np.zeros((grid_size, grid_size), dtype=int)
    members = {}

    for inter in intersections:
        gx = cell_index(inter.x, cell_size, grid_size)
        gy = cell_index(inter.y, cell_size, grid_size)
        counts[gy, gx] += 1
        members.setdefault((gx, gy), []).append(inter)

    return counts, members


def build_warm_graph(counts, cell_threshold):
    """
    Graph of warm cells with edges between 8-connected neighbours.

    Nodes are (grid_x, grid_y) added in row-major order.
    """
    grid_size = counts.shape[0]
    graph = nx.Graph()

    for gy, gx in np.argwhere(counts >= cell_threshold):
        graph.add_node((int(gx), int(gy)))

    for gx, gy in list(graph.nodes()):
        for dy, dx in NEIGHBORS_8:
            nx_coord, ny = gx + dx, gy + dy
            if 0 <= nx_coord < grid_size and 0 <= ny < grid_size and (nx_coord, ny) in graph:
                graph.add_edge((gx, gy), (nx_coord, ny))

    return graph


def _zone_from_cells(cells, counts, cell_size):
    """Severity, count-weighted centre and containing radius of a zone."""
    total = int(sum(counts[gy, gx] for gx, gy in cells))
    centers = [((gx + 0.5) * cell_size, (gy + 0.5) * cell_size, counts[gy, gx]) for gx, gy in cells]
    center_x = sum(x * c for x, _, c in centers) / total
    center_y = sum(y * c for _, y, c in centers) / total
    radius = max(math.hypot(x - center_x, y - center_y) for x, y, _ in centers) + cell_size

    return HeatZone(
        center_x=float(center_x),
        center_y=float(center_y),
        radius=float(radius),
        severity=total,
        cells=tuple(cells),
    )


@trace(label="analyze_heatmap")
def analyze_heatmap(intersections, size, config):
    """
    Score how crowded a set of crossings is.

    intersections should be the raw, pre-consolidation crossings.
    Returns a HeatAnalysis; the layout is hot when the global score
    reaches the configured zone threshold.
    """
    tracer = get_tracer()
    hc = config.heat
    grid_size = hc.grid_size
    cell_size = size / grid_size

    counts, members = bin_intersections(intersections, size, grid_size)

    cells = []
    for gy in range(grid_size):
        for gx in range(grid_size):
            cells.append(HeatCell(
                grid_x=gx,
                grid_y=gy,
                x=gx * cell_size,
                y=gy * cell_size,
                count=int(counts[gy, gx]),
                members=tuple(members.get((gx, gy), ())),
            ))

    graph = build_warm_graph(counts, hc.cell_threshold)

    # connected_components walks nodes in insertion (row-major) order
    zones = []
    for component in nx.connected_components(graph):
        zone_cells = sorted(component, key=lambda c: (c[1], c[0]))
        zones.append(_zone_from_cells(zone_cells, counts, cell_size))

    global_score = sum(z.severity for z in zones)
    is_hot = global_score >= hc.zone_threshold

    tracer.event(
        f"Heat map: {graph.number_of_nodes()} warm cells, {len(zones)} zones, "
        f"score={global_score}, hot={is_hot}"
    )

    return HeatAnalysis(
        grid_size=grid_size,
        cell_size=cell_size,
        cells=tuple(cells),
        zones=tuple(zones),
        global_score=global_score,
        is_hot=is_hot,
    )
