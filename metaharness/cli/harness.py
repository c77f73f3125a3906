"""
Harness Orchestrator.

Ties the components together into a single sequential run:

    1. Preflight the detector executable (fatal if missing)
    2. Discover and validate fixtures (fatal if unusable)
    3. Select execution modes once
    4. Run every scheduled (fixture, mode) case, one process at a time
    5. Summarize and derive the exit code
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, TextIO

from ..config import HarnessConfig
from ..domain import FixturePair
from ..fixtures import discover_fixtures, validate_fixtures
from ..invoker import DetectorInvoker, resolve_executable
from ..modes import ModePlan, schedule, select_modes
from ..report import RunContext, format_summary
from ..runner import TestCaseRunner

logger = logging.getLogger(__name__)


@dataclass
class HarnessResult:
    """Everything a caller needs after a run."""
    context: RunContext
    plan: ModePlan
    fixtures: tuple[FixturePair, ...]

    @property
    def exit_code(self) -> int:
        return self.context.exit_code


def prepare(
    config: HarnessConfig,
    environ: Optional[Mapping[str, str]] = None,
) -> tuple[tuple[FixturePair, ...], ModePlan]:
    """
    Fixture discovery and mode selection, without touching the detector.

    Raises:
        FixtureError: If the fixture set is unusable
    """
    pairs = discover_fixtures(config.fixture_root)
    validate_fixtures(pairs)
    plan = select_modes(environ, config.credential_variable)
    return pairs, plan


def run_harness(
    config: HarnessConfig,
    out: Optional[TextIO] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> HarnessResult:
    """
    Execute a full meta-test run.

    Raises:
        MissingExecutableError: Before any case runs, if the detector is absent
        FixtureError: Before any case runs, if the fixture set is unusable
    """
    out = out or sys.stdout

    executable = resolve_executable(config.executable)
    logger.info("Detector under test: %s", executable)

    pairs, plan = prepare(config, environ)

    invoker = DetectorInvoker(
        executable,
        mode_variable=config.mode_variable,
        timeout=config.timeout,
        base_environment=environ,
    )
    runner = TestCaseRunner(invoker, out=out)
    context = RunContext()

    print("=== Contradiction detector meta-test ===", file=out)
    for notice in plan.skip_notices():
        print(notice, file=out)

    current_mode = None
    for pair, mode in schedule(pairs, plan):
        if mode is not current_mode:
            print(f"=== {mode.label} mode ({config.mode_variable}={mode.value}) ===", file=out)
            current_mode = mode
        context.record(runner.run(pair, mode))

    context.close()

    print(format_summary(context, plan.skipped), file=out)
    logger.info("Run finished: %d case(s), verdict %s", len(context.results), context.verdict)

    return HarnessResult(context=context, plan=plan, fixtures=pairs)
