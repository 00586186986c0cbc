"""
Validation rules for SigilForge.

Checks the structural guarantees of every computed layout and reports how
crowded the recommended one still is.
"""

from collections import Counter

from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import box

from sigilforge.models import CheckResult, Severity, ValidationReport
from sigilforge.tracer import get_tracer, trace


@trace(label="run_validation")
def run_validation(result, letter_set, config):
    """
    Run all validation checks on a layout selection.

    Returns ValidationReport with all check results.
    """
    tracer = get_tracer()

    checks = []

    checks.append(check_point_count(result, letter_set))
    checks.append(check_ring_partition(result))
    checks.append(check_segment_count(result, letter_set))
    checks.append(check_canvas_bounds(result))
    checks.append(check_markers(result, letter_set))
    checks.append(check_crowding(result))

    report = ValidationReport(checks=checks)

    tracer.event(f"Validation complete: {report.error_count} errors, {report.warning_count} warnings")

    return report


def _drawable_count(letter_set):
    n = len(letter_set)
    return n if n >= 2 else 0


def check_point_count(result, letter_set):
    """
    Check that every layout places one point per letter.
    """
    expected = _drawable_count(letter_set)
    wrong = {
        mode.value: len(sigil.layout.points)
        for mode, sigil in result.layouts.items()
        if len(sigil.layout.points) != expected
    }

    if wrong:
        return CheckResult(
            rule_id="point_count",
            severity=Severity.ERROR,
            passed=False,
            message=f"{len(wrong)} layouts do not place {expected} points",
            evidence={"expected": expected, "actual": wrong},
        )

    return CheckResult(
        rule_id="point_count",
        severity=Severity.ERROR,
        passed=True,
        message=f"All {len(result.layouts)} layouts place {expected} points",
        evidence={"expected": expected},
    )


def check_ring_partition(result):
    """
    Check that each ring holds exactly as many points as its ring_total says.
    """
    bad = {}

    for mode, sigil in result.layouts.items():
        sizes = Counter((p.group, p.ring_index) for p in sigil.layout.points)
        for p in sigil.layout.points:
            actual = sizes[(p.group, p.ring_index)]
            if p.ring_total != actual:
                bad.setdefault(mode.value, []).append(
                    {"letter": p.letter, "ring_total": p.ring_total, "actual": actual}
                )
        if sum(sizes.values()) != len(sigil.layout.points):
            bad.setdefault(mode.value, []).append({"groups": len(sizes)})

    if bad:
        return CheckResult(
            rule_id="ring_partition",
            severity=Severity.ERROR,
            passed=False,
            message=f"Ring sizes inconsistent in {len(bad)} layouts",
            evidence={"layouts": bad},
        )

    return CheckResult(
        rule_id="ring_partition",
        severity=Severity.ERROR,
        passed=True,
        message="Ring and circle groups partition the points",
        evidence={},
    )


def check_segment_count(result, letter_set):
    """
    Check that the stroke has one segment fewer than it has points.
    """
    expected = max(0, _drawable_count(letter_set) - 1)
    wrong = {
        mode.value: len(sigil.segments)
        for mode, sigil in result.layouts.items()
        if len(sigil.segments) != expected
    }

    if wrong:
        return CheckResult(
            rule_id="segment_count",
            severity=Severity.ERROR,
            passed=False,
            message=f"{len(wrong)} layouts do not have {expected} segments",
            evidence={"expected": expected, "actual": wrong},
        )

    return CheckResult(
        rule_id="segment_count",
        severity=Severity.ERROR,
        passed=True,
        message=f"Every stroke has {expected} segments",
        evidence={"expected": expected},
    )


def check_canvas_bounds(result):
    """
    Check that all points lie on the canvas.
    """
    outside = {}

    for mode, sigil in result.layouts.items():
        canvas = box(0, 0, sigil.size, sigil.size)
        letters = [
            p.letter for p in sigil.layout.points
            if not canvas.covers(ShapelyPoint(p.x, p.y))
        ]
        if letters:
            outside[mode.value] = letters

    if outside:
        return CheckResult(
            rule_id="canvas_bounds",
            severity=Severity.WARN,
            passed=False,
            message=f"Points outside the canvas in {len(outside)} layouts",
            evidence={"outside": outside},
        )

    return CheckResult(
        rule_id="canvas_bounds",
        severity=Severity.WARN,
        passed=True,
        message="All points lie on the canvas",
        evidence={},
    )


def check_markers(result, letter_set):
    """
    Check start and end markers: both present on a drawn sigil, none on an empty one.
    """
    drawn = _drawable_count(letter_set) > 0
    bad = []

    for mode, sigil in result.layouts.items():
        has_start = sigil.start_marker is not None
        has_end = sigil.end_marker is not None
        if drawn and not (has_start and has_end):
            bad.append(mode.value)
        elif not drawn and (has_start or has_end):
            bad.append(mode.value)

    if bad:
        return CheckResult(
            rule_id="markers",
            severity=Severity.ERROR,
            passed=False,
            message=f"Start/end markers wrong in {len(bad)} layouts",
            evidence={"layouts": bad},
        )

    return CheckResult(
        rule_id="markers",
        severity=Severity.ERROR,
        passed=True,
        message="Start and end markers present" if drawn else "Empty sigil has no markers",
        evidence={},
    )


def check_crowding(result):
    """
    Report whether the recommended layout is still crowded.

    Crowding is a warning, not an error: no layout is guaranteed to be
    free of clustered crossings.
    """
    mode = result.recommended
    heat = result.heat_by_layout.get(mode, result.heat)
    evidence = {
        "layout": mode.value,
        "score": heat.global_score,
        "zones": len(heat.zones),
    }

    if heat.is_hot:
        return CheckResult(
            rule_id="crowding",
            severity=Severity.WARN,
            passed=False,
            message=f"Recommended layout {mode.value} still has {len(heat.zones)} crowded zones",
            evidence=evidence,
        )

    return CheckResult(
        rule_id="crowding",
        severity=Severity.INFO,
        passed=True,
        message=f"Recommended layout {mode.value} is not crowded",
        evidence=evidence,
    )
