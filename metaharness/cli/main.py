"""
Meta-Harness CLI: exercises the contradiction detector against fixtures.

Commands:
    metaharness run:  Run every scheduled test case and report a verdict
    metaharness plan: Show fixtures and modes without running anything

The process exit code of `run` is the single authoritative signal:
0 only if every scheduled case passed, 1 otherwise.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from ..config import (
    BUILD_HINT,
    CREDENTIAL_ENV_VAR,
    EXECUTABLE_ENV_VAR,
    MODE_ENV_VAR,
    HarnessConfig,
    default_executable,
)
from ..domain import FixtureError, MissingExecutableError
from ..fixtures import default_fixture_root
from .harness import prepare, run_harness


# =============================================================================
# HELPERS
# =============================================================================

def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def config_from_args(args: argparse.Namespace) -> HarnessConfig:
    executable = args.executable or default_executable()
    return HarnessConfig(
        executable=Path(executable),
        fixture_root=Path(args.fixtures) if args.fixtures else None,
        timeout=args.timeout,
        mode_variable=args.mode_variable,
        credential_variable=args.credential_variable,
    )


# =============================================================================
# CLI COMMANDS
# =============================================================================

def cmd_run(args: argparse.Namespace) -> int:
    """Run the meta-test."""
    config = config_from_args(args)

    try:
        result = run_harness(config)
    except MissingExecutableError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        print(BUILD_HINT, file=sys.stderr)
        return 1
    except FixtureError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return result.exit_code


def cmd_plan(args: argparse.Namespace) -> int:
    """Show what a run would do."""
    config = config_from_args(args)

    try:
        pairs, plan = prepare(config)
    except FixtureError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"Detector: {config.executable}")
    print(f"Fixtures: {config.fixture_root or default_fixture_root()}")
    print()
    print("FIXTURES:")
    for pair in pairs:
        expectation = "contradiction" if pair.expected_contradiction else "no contradiction"
        print(f"  • {pair.label}: {expectation}")
        for path in pair.argv_paths:
            print(f"      {path}")
    print()
    print("MODES:")
    for mode in plan.modes:
        print(f"  • {mode.label} ({config.mode_variable}={mode.value})")
    for notice in plan.skip_notices():
        print(f"  - {notice}")
    print()
    print(f"Scheduled test cases: {len(pairs) * len(plan.modes)}")
    return 0


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--executable",
        help=f"Detector executable (default: ${EXECUTABLE_ENV_VAR} or ./check_differences)",
    )
    parser.add_argument(
        "--fixtures",
        help="Fixture root holding correct/ and incorrect/ (default: bundled samples)",
    )
    parser.add_argument(
        "--mode-variable",
        default=MODE_ENV_VAR,
        help=f"Environment variable the detector reads its mode from (default: {MODE_ENV_VAR})",
    )
    parser.add_argument(
        "--credential-variable",
        default=CREDENTIAL_ENV_VAR,
        help=f"Variable whose presence enables live mode (default: {CREDENTIAL_ENV_VAR})",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log diagnostic detail to stderr",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="metaharness",
        description="Meta-test harness for the contradiction detector",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    # Run command
    run_parser = subparsers.add_parser(
        "run",
        help="Run the detector against every fixture and mode",
    )
    add_common_arguments(run_parser)
    run_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-invocation deadline in seconds (default: none)",
    )
    run_parser.set_defaults(func=cmd_run)

    # Plan command
    plan_parser = subparsers.add_parser(
        "plan",
        help="Show fixtures and modes without running the detector",
    )
    add_common_arguments(plan_parser)
    plan_parser.set_defaults(func=cmd_plan, timeout=None)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be positive")

    configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
