"""
SVG package generation for SigilForge.

Renders sigils with their guides, stroke pieces, joints and decorations,
plus a side-by-side comparison of every computed layout.
"""

import os

import svgwrite

from sigilforge.io.save_artifacts import ensure_dir, save_svg
from sigilforge.models import LayoutMode
from sigilforge.tracer import get_tracer, trace


LAYOUT_NAMES = {
    LayoutMode.STANDARD: "Standard",
    LayoutMode.VENN: "Venn",
    LayoutMode.EXTRA_RINGS: "Extra Rings",
    LayoutMode.SATELLITE: "Satellite",
}

COMPARISON_COLUMNS = 2
COMPARISON_LABEL_HEIGHT = 24
COMPARISON_SPACING = 16

JOINT_RADIUS = 4
ACUTE_DOT_RADIUS = 3
ARC_DOT_RADIUS = 2
START_RING_RADIUS = 6
START_DOT_RADIUS = 2
END_BAR_WIDTH = 3


def _add_heat(dwg, parent, heat, config):
    """Heat overlay: shaded warm cells and dashed zone outlines."""
    heat_group = dwg.g(id="heat")
    color = config.render.heat_color

    for cell in heat.cells:
        if cell.count > 0:
            heat_group.add(dwg.rect(
                insert=(cell.x, cell.y),
                size=(heat.cell_size, heat.cell_size),
                fill=color,
                opacity=min(0.4, cell.count * 0.15),
            ))

    for zone in heat.zones:
        heat_group.add(dwg.circle(
            center=(zone.center_x, zone.center_y),
            r=zone.radius,
            fill="none",
            stroke=color,
            stroke_width=1,
            stroke_dasharray="4,4",
            opacity=0.7,
        ))

    parent.add(heat_group)


def _add_guides(dwg, parent, layout, config):
    guide_group = dwg.g(
        id="guides",
        fill="none",
        stroke=config.render.guide_color,
        stroke_width=1,
        stroke_dasharray="2,4",
    )
    for guide in layout.guides:
        guide_group.add(dwg.circle(center=(guide.cx, guide.cy), r=guide.r))
    parent.add(guide_group)


def _add_strokes(dwg, parent, sigil, config):
    stroke_group = dwg.g(
        id="strokes",
        fill="none",
        stroke=config.render.stroke_color,
        stroke_width=config.render.stroke_width,
        stroke_linecap="round",
        stroke_linejoin="round",
    )
    for drawable in sigil.drawables:
        stroke_group.add(dwg.path(d=drawable.d))

    connector = sigil.layout.connector
    if connector is not None:
        stroke_group.add(dwg.line(
            start=(connector.x1, connector.y1),
            end=(connector.x2, connector.y2),
        ))

    parent.add(stroke_group)


def _add_joints(dwg, parent, sigil, config):
    render = config.render
    joint_group = dwg.g(
        id="joints",
        fill=render.background,
        stroke=render.stroke_color,
        stroke_width=1.5,
    )
    for joint in sigil.circle_joints:
        joint_group.add(dwg.circle(center=(joint.x, joint.y), r=JOINT_RADIUS))
    parent.add(joint_group)


def _add_decorations(dwg, parent, sigil, config):
    color = config.render.stroke_color
    deco_group = dwg.g(id="decorations", fill=color)

    for vertex in sigil.acute_vertices:
        deco_group.add(dwg.circle(center=(vertex.x, vertex.y), r=ACUTE_DOT_RADIUS))
    for dot in sigil.arc_dots:
        deco_group.add(dwg.circle(center=(dot.x, dot.y), r=ARC_DOT_RADIUS))

    parent.add(deco_group)


def _add_markers(dwg, parent, sigil, config):
    color = config.render.stroke_color
    marker_group = dwg.g(id="markers")

    start = sigil.start_marker
    if start is not None:
        marker_group.add(dwg.circle(
            center=(start.x, start.y),
            r=START_RING_RADIUS,
            fill="none",
            stroke=color,
            stroke_width=config.render.stroke_width,
        ))
        marker_group.add(dwg.circle(center=(start.x, start.y), r=START_DOT_RADIUS, fill=color))

    end = sigil.end_marker
    if end is not None:
        tip1, tip2 = end.bar_tips
        marker_group.add(dwg.line(
            start=tip1,
            end=tip2,
            stroke=color,
            stroke_width=END_BAR_WIDTH,
            stroke_linecap="round",
        ))

    parent.add(marker_group)


def draw_sigil(dwg, parent, sigil, config, heat=None):
    """
    Draw one sigil into an svgwrite container.

    Layer order is background, heat overlay, guides, centre dot, strokes,
    joints, decorations, then start and end markers.
    """
    render = config.render
    size = sigil.size

    parent.add(dwg.rect(insert=(0, 0), size=(size, size), fill=render.background))

    if heat is not None:
        _add_heat(dwg, parent, heat, config)

    if render.show_guides:
        _add_guides(dwg, parent, sigil.layout, config)

    parent.add(dwg.circle(
        center=(sigil.layout.cx, sigil.layout.cy),
        r=2,
        fill=render.stroke_color,
        opacity=0.15,
    ))

    if sigil.is_empty:
        return parent

    _add_strokes(dwg, parent, sigil, config)
    _add_joints(dwg, parent, sigil, config)
    _add_decorations(dwg, parent, sigil, config)
    _add_markers(dwg, parent, sigil, config)

    return parent


def create_sigil_svg(sigil, config, heat=None):
    """Create a standalone SVG document for a single sigil."""
    size = sigil.size
    dwg = svgwrite.Drawing(size=(f"{size}px", f"{size}px"))
    dwg.viewbox(0, 0, size, size)

    group = dwg.g(id=f"sigil_{sigil.mode.value}")
    draw_sigil(dwg, group, sigil, config, heat)
    dwg.add(group)

    return dwg


def layout_label(mode, result):
    """Caption for a layout in the comparison grid: name, score, '*' if recommended."""
    label = LAYOUT_NAMES[mode]
    if result.scores is not None and mode in result.scores:
        label += f" ({result.scores[mode]})"
    if mode == result.recommended:
        label += " *"
    return label


def create_comparison_svg(result, config):
    """
    Create a grid of every computed layout, two per row.

    Each cell is captioned with the layout name and heat score; the
    recommended layout is marked with '*'.
    """
    modes = [m for m in LayoutMode if m in result.layouts]
    if not modes:
        return svgwrite.Drawing(size=("100px", "100px"))

    size = result.layouts[modes[0]].size
    cols = min(COMPARISON_COLUMNS, len(modes))
    rows = -(-len(modes) // COMPARISON_COLUMNS)
    cell_w = size + COMPARISON_SPACING
    cell_h = size + COMPARISON_LABEL_HEIGHT + COMPARISON_SPACING
    width = cols * cell_w - COMPARISON_SPACING
    height = rows * cell_h - COMPARISON_SPACING

    dwg = svgwrite.Drawing(size=(f"{width}px", f"{height}px"))
    dwg.viewbox(0, 0, width, height)
    dwg.defs.add(dwg.style("""
        .layout-title { font-family: Arial, sans-serif; }
        .recommended { font-weight: bold; }
    """))

    for i, mode in enumerate(modes):
        col, row = i % COMPARISON_COLUMNS, i // COMPARISON_COLUMNS
        cell = dwg.g(
            id=f"layout_{mode.value}",
            transform=f"translate({col * cell_w}, {row * cell_h})",
        )

        css = "layout-title recommended" if mode == result.recommended else "layout-title"
        cell.add(dwg.text(
            layout_label(mode, result),
            insert=(size / 2, COMPARISON_LABEL_HEIGHT - 8),
            font_size="14px",
            text_anchor="middle",
            fill=config.render.stroke_color,
            class_=css,
        ))

        body = dwg.g(transform=f"translate(0, {COMPARISON_LABEL_HEIGHT})")
        heat = result.heat_by_layout.get(mode) if config.render.show_heatmap else None
        draw_sigil(dwg, body, result.layouts[mode], config, heat)
        cell.add(body)

        dwg.add(cell)

    return dwg


@trace(label="generate_svg_package")
def generate_svg_package(result, chosen, out_dir, config):
    """
    Generate final SVG files.

    Creates:
    - One SVG per computed layout: svg/{mode}.svg
    - sigil.svg in output root for the chosen layout
    - comparison.svg when alternatives were computed
    """
    tracer = get_tracer()

    chosen = LayoutMode(chosen)
    svg_dir = os.path.join(out_dir, "svg")
    ensure_dir(svg_dir)

    paths = []
    for mode, sigil in result.layouts.items():
        heat = result.heat_by_layout.get(mode) if config.render.show_heatmap else None
        svg_path = os.path.join(svg_dir, f"{mode.value}.svg")
        save_svg(create_sigil_svg(sigil, config, heat), svg_path)
        paths.append(svg_path)

    final_path = os.path.join(out_dir, "sigil.svg")
    chosen_heat = result.heat_by_layout.get(chosen) if config.render.show_heatmap else None
    save_svg(create_sigil_svg(result.layouts[chosen], config, chosen_heat), final_path)
    paths.append(final_path)

    if result.has_alternatives:
        comparison_path = os.path.join(out_dir, "comparison.svg")
        save_svg(create_comparison_svg(result, config), comparison_path)
        paths.append(comparison_path)

    tracer.event(f"Created {len(paths)} SVG files, chosen layout {chosen.value}")

    return paths
