"""
Command-line interface for running calculator scenarios.

Usage:
    python -m server_opportunity_model configs/default.json
    python -m server_opportunity_model configs/*.json --output-dir results/
    python -m server_opportunity_model configs/default.json --stdout
    python -m server_opportunity_model configs/default.json --phone-time 20 --plot
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import load_config, validate_config
from .formatter import (
    badge, colorize, format_currency, format_hours, format_payback, format_pct,
    heading, kv_block, note_block, supports_color, table, title,
)
from .runner import Runner, RunResult, save_result, generate_output_filename

# Optional plotting support
try:
    from .plot import plot_result
    HAS_PLOT = True
except ImportError:
    HAS_PLOT = False
    plot_result = None


logger = logging.getLogger(__name__)


def format_result_summary(result: RunResult) -> str:
    """Format a human-readable summary of a run."""
    r = result.results
    s = r.summary
    lines = [title(result.meta['scenario_name']), ""]

    lines.append(heading("Current Operating Point"))
    lines.append(kv_block([
        ("Average phone time", format_pct(s.phone_time_pct)),
        ("Weighted estimate", format_pct(r.estimated_phone_time_pct)),
        ("Monthly cost without", format_currency(s.current_without)),
        ("Monthly cost with", format_currency(s.current_with)),
        ("Hours reclaimed / month", format_hours(s.hours_reclaimed)),
    ]))
    lines.append("")
    lines.append(badge("Monthly savings", format_currency(s.current_savings, signed=True)))
    lines.append(badge("Annual savings", format_currency(s.annual_savings, signed=True)))
    lines.append(badge("ROI", format_pct(s.roi_pct)))
    lines.append(badge("Payback", format_payback(s.payback_months)))
    lines.append("")

    lines.append(heading("Per Server (monthly)"))
    lines.append(table(
        ["Server", "Hours/wk", "Without", "With", "Savings"],
        [
            [si.name, f"{si.weekly_hours:g}", format_currency(si.cost_without_automation),
             format_currency(si.cost_with_automation),
             format_currency(si.savings, signed=True)]
            for si in r.server_impacts
        ],
        aligns=['l', 'r', 'r', 'r', 'r'],
    ))
    lines.append("")

    lines.append(heading("Per Day (monthly)"))
    lines.append(table(
        ["Day", "Labor", "Upsell", "Tips", "Total"],
        [
            [d.name, format_currency(d.labor_cost), format_currency(d.lost_upsell_profit),
             format_currency(d.lost_tips), format_currency(d.value)]
            for d in r.day_impacts
        ],
        aligns=['l', 'r', 'r', 'r', 'r'],
    ))
    lines.append("")

    lines.append(heading("Impact Breakdown"))
    lines.append(kv_block([
        (f"{item.name} ({item.kind})", format_currency(item.value))
        for item in r.impact_breakdown
    ]))
    lines.append("")
    lines.append(note_block([
        "Costs are monthly and assume 4.3 weeks per month",
        "Savings = cost without automation - cost with automation",
    ]))

    return "\n".join(lines)


def run_single_config(
    config_path: Path,
    output_path: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    stdout: bool = False,
    quiet: bool = False,
    phone_time: Optional[float] = None,
    plot: bool = False,
    plot_save_path: Optional[Path] = None,
) -> bool:
    """
    Run a single config file.

    Returns True on success, False on failure.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)
        return False
    except ValueError as e:
        print(f"Error: Invalid config {config_path}: {e}", file=sys.stderr)
        return False

    errors = validate_config(config)
    if errors:
        print(f"Error: Invalid config {config_path}:", file=sys.stderr)
        for err in errors:
            print(f"  - {err}", file=sys.stderr)
        return False

    runner = Runner(config, config_path=str(config_path), phone_time_pct=phone_time)
    result = runner.run()

    if stdout:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        if output_path is None:
            if output_dir is None:
                output_dir = Path("results")
            filename = generate_output_filename(config, result.meta["timestamp"])
            output_path = output_dir / filename

        save_result(result, output_path)
        logger.debug("Saved %s", output_path)

        if not quiet:
            summary = format_result_summary(result)
            print(f"Results saved to: {output_path}")
            print()
            print(colorize(summary) if supports_color() else summary)

    if plot:
        if not HAS_PLOT:
            print("Warning: --plot requires matplotlib. Install with: pip install -e '.[plot]'",
                  file=sys.stderr)
        else:
            if plot_save_path is None and output_path is not None:
                plot_save_path = output_path.with_suffix('.png')

            plot_result(result, save_path=plot_save_path, show=(plot_save_path is None))

            if plot_save_path and not quiet:
                print(f"Plot saved to: {plot_save_path}")

    return True


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Estimate the monthly cost of server phone time, with and without "
                    "automated call answering",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s configs/default.json
  %(prog)s configs/*.json --output-dir results/
  %(prog)s configs/default.json --stdout
  %(prog)s configs/default.json --phone-time 20
  %(prog)s configs/default.json --plot --plot-save dashboard.png
        """,
    )

    parser.add_argument(
        "configs",
        nargs="+",
        type=Path,
        help="Config file(s) to run",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output file path (only valid with single config)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Output directory (default: results/)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print JSON result to stdout instead of saving",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress summary output (only save/print JSON)",
    )
    parser.add_argument(
        "--phone-time",
        type=float,
        default=None,
        help="Average phone time %% to evaluate at (overrides the weighted estimate)",
    )
    parser.add_argument(
        "--plot",
        action="store_true",
        help="Generate dashboard plot (requires matplotlib)",
    )
    parser.add_argument(
        "--plot-save",
        type=Path,
        default=None,
        help="Save plot to file (defaults to output path with .png extension)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    if args.output and len(args.configs) > 1:
        parser.error("--output can only be used with a single config file")

    if args.stdout and args.output:
        parser.error("Cannot use --stdout with --output")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    success_count = 0
    fail_count = 0

    for config_path in args.configs:
        success = run_single_config(
            config_path,
            output_path=args.output,
            output_dir=args.output_dir,
            stdout=args.stdout,
            quiet=args.quiet,
            phone_time=args.phone_time,
            plot=args.plot,
            plot_save_path=args.plot_save,
        )
        if success:
            success_count += 1
        else:
            fail_count += 1

        if len(args.configs) > 1 and not args.stdout and not args.quiet:
            print("\n" + "=" * 60 + "\n")

    if len(args.configs) > 1 and not args.quiet:
        print(f"Completed: {success_count} succeeded, {fail_count} failed")

    return 0 if fail_count == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
