"""
Command-line interface for SigilForge.

Provides commands for generating sigils and writing a default config.
"""

import argparse
import sys

from sigilforge.config import MAX_POINTS_PER_RING, MIN_POINTS_PER_RING, load_config, save_default_config
from sigilforge.models import LayoutMode
from sigilforge.tracer import configure_tracer, get_tracer


def build_parser():
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="sigilforge",
        description="SigilForge: Turn a phrase into a deterministic line-figure sigil",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run command
    run_parser = subparsers.add_parser("run", help="Generate a sigil for a phrase")
    run_parser.add_argument(
        "--text", "-t",
        required=True,
        help="Phrase to turn into a sigil",
    )
    run_parser.add_argument(
        "--out", "-o",
        required=True,
        help="Output directory",
    )
    run_parser.add_argument(
        "--size",
        type=float,
        default=None,
        help="Canvas size (overrides config)",
    )
    run_parser.add_argument(
        "--points-per-ring",
        type=int,
        default=None,
        help=f"Points per ring, {MIN_POINTS_PER_RING}-{MAX_POINTS_PER_RING} (overrides config)",
    )
    run_parser.add_argument(
        "--layout",
        default=None,
        choices=[m.value for m in LayoutMode],
        help="Publish this layout instead of the recommended one",
    )
    run_parser.add_argument(
        "--all-layouts",
        action="store_true",
        help="Compute and compare every layout even when standard is not crowded",
    )
    run_parser.add_argument(
        "--heatmap",
        action="store_true",
        help="Draw the crowding overlay in the SVG output",
    )
    run_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    run_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug artifact generation",
    )
    run_parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    run_parser.add_argument(
        "--trace-level",
        default="INFO",
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    run_parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    run_parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )

    # Init config command
    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="sigilforge_config.yaml",
        help="Output path for config file",
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    # Handle commands
    if args.command == "run":
        return handle_run(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def apply_overrides(config, args):
    """Copy command-line overrides onto a loaded config."""
    if args.size is not None:
        config.canvas.size = args.size
    if args.points_per_ring is not None:
        config.canvas.points_per_ring = args.points_per_ring
    if args.layout is not None:
        config.canvas.layout_mode = args.layout
    if args.all_layouts:
        config.canvas.force_all_layouts = True
    if args.heatmap:
        config.render.show_heatmap = True
    return config


def handle_run(args):
    """Handle the run command."""
    # Configure tracing
    configure_tracer(
        enabled=args.trace,
        level=args.trace_level,
        file_path=args.trace_file,
        json_output=args.trace_json,
    )

    tracer = get_tracer()

    try:
        from sigilforge.pipeline import run_pipeline

        config = apply_overrides(load_config(args.config), args)

        with tracer.span("cli_run", module="cli"):
            scene = run_pipeline(
                text=args.text,
                out_dir=args.out,
                config=config,
                debug=args.debug,
            )

        result = scene.selection
        validation = scene.validation

        # Print summary
        print("\nSigil generated successfully.")
        print(f"  Letters: {''.join(scene.letter_set.letters) or '(none)'}")
        print(f"  Layouts computed: {', '.join(m.value for m in result.layouts)}")
        if result.scores is not None:
            print(f"  Scores: {', '.join(f'{m.value}={s}' for m, s in result.scores.items())}")
        print(f"  Recommended layout: {result.recommended.value}")
        print(f"  Chosen layout: {scene.chosen.value}")
        print(f"  Validation errors: {validation.error_count}")
        print(f"  Validation warnings: {validation.warning_count}")
        print(f"\nOutputs saved to: {args.out}/")
        print("  - sigil.svg")
        if result.has_alternatives:
            print("  - comparison.svg")
        print("  - scene.json")
        print("  - validation_report.json")

        if validation.has_errors:
            print("\n[!] Validation errors detected. Review validation_report.json")
            return 1

        return 0

    except Exception as e:
        tracer.event(f"Pipeline failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1

    finally:
        get_tracer().config.close()


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
