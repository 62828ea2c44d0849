import argparse
import sys

from stargaze import __version__
from stargaze.config import TELESCOPE_LEVELS

from .commands import run_doctor, run_plan


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Path to config.toml")
    parser.add_argument("--json", action="store_true", help="Output result as JSON")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warn", "error"],
        help="Enable logging at this level",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stargaze")
    parser.add_argument("--version", action="store_true", help="Show version and exit")

    subparsers = parser.add_subparsers(dest="command")

    plan_parser = subparsers.add_parser("plan", help="Rank tonight's telescope targets")
    _add_common_args(plan_parser)
    plan_parser.add_argument("--date", help="Observation date (YYYY-MM-DD, default today UTC)")
    plan_parser.add_argument("--level", choices=TELESCOPE_LEVELS, help="Telescope level")
    plan_parser.add_argument("--start-hour", type=int, help="Evening start hour (0-23)")
    plan_parser.add_argument("--end-hour", type=int, help="Evening end hour (0-23)")
    plan_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Also list challenging and not-visible bodies",
    )

    doctor_parser = subparsers.add_parser("doctor", help="Check configuration")
    _add_common_args(doctor_parser)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"Stargaze {__version__}")
        return 0

    try:
        if args.command == "plan":
            return run_plan(args)
        if args.command == "doctor":
            return run_doctor(args)
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
