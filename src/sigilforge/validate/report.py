"""
Validation report generation for SigilForge.

Writes the check results as JSON plus a plain-text summary.
"""

import os

from sigilforge.io.save_artifacts import ensure_dir, save_json
from sigilforge.tracer import get_tracer, trace


SEVERITY_MARKS = {"error": "[ERROR]", "warn": "[WARN]", "info": "[INFO]"}


@trace(label="generate_report")
def generate_report(report, out_dir, debug_writer=None):
    """
    Generate validation report files.

    Creates:
    - validation_report.json: Full check results
    - validation_summary.txt: Human-readable summary
    """
    tracer = get_tracer()

    report_path = os.path.join(out_dir, "validation_report.json")
    save_json(report, report_path)

    summary_text = format_summary(report)

    summary_path = os.path.join(out_dir, "validation_summary.txt")
    ensure_dir(os.path.dirname(summary_path))
    with open(summary_path, "w", encoding="utf-8") as f:
        f.write(summary_text)

    tracer.event(f"Report saved: {len(report.checks)} checks, {report.error_count} errors")

    if debug_writer:
        metrics = {
            "total_checks": len(report.checks),
            "passed": sum(1 for c in report.checks if c.passed),
            "failed": sum(1 for c in report.checks if not c.passed),
            "errors": report.error_count,
            "warnings": report.warning_count,
        }
        debug_writer.save_json(metrics, "validation", "validation_metrics.json")

    return report_path, summary_path


def format_summary(report):
    """Human-readable summary: failed checks first, then every check."""
    lines = ["SigilForge Validation Report", "=" * 40, ""]

    passed = [c for c in report.checks if c.passed]
    failed = [c for c in report.checks if not c.passed]

    lines.append(f"Total checks: {len(report.checks)}")
    lines.append(f"Passed: {len(passed)}")
    lines.append(f"Failed: {len(failed)}")
    lines.append("")

    if failed:
        lines.append("ISSUES:")
        lines.append("-" * 40)
        for check in failed:
            lines.append(f"{SEVERITY_MARKS[check.severity.value]} {check.rule_id}: {check.message}")
        lines.append("")

    lines.append("ALL CHECKS:")
    lines.append("-" * 40)
    for check in report.checks:
        lines.append(format_check_result(check))

    return "\n".join(lines)


def format_check_result(check):
    """Format a single check result for display."""
    status = "PASS" if check.passed else "FAIL"
    severity = check.severity.value.upper()
    return f"[{status}][{severity}] {check.rule_id}: {check.message}"
