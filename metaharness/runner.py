"""
Test Case Runner.

Drives one detector invocation and judges it against the fixture's label.

Pass rule:
    expected exit code = 1 if a contradiction is expected, else 0
    passed = detector started AND exit code == expected exit code

Any other status (2 for a detector-internal error, a signal, a timeout) is a
failed case. It is never read as "no contradiction".
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from .domain import (
    ExecutionMode,
    FailureKind,
    FixturePair,
    InvocationResult,
    TestCaseResult,
    expected_exit_code,
)
from .invoker import DetectorInvoker

SEPARATOR = "-" * 40

# Exit statuses with a defined meaning in the detector contract
CONTRACT_EXIT_CODES = frozenset({0, 1})


def describe_expectation(expected_contradiction: bool) -> str:
    return "contradiction" if expected_contradiction else "no contradiction"


def evaluate(
    pair: FixturePair,
    mode: ExecutionMode,
    invocation: InvocationResult,
) -> TestCaseResult:
    """
    Judge an invocation. Pure: no I/O, same inputs give the same result.
    """
    expected = expected_exit_code(pair.expected_contradiction)
    actual = invocation.exit_code
    failure: Optional[FailureKind] = None

    if invocation.timed_out:
        failure = FailureKind.TIMEOUT
        detail = f"detector timed out after {invocation.duration_seconds:.1f}s"
    elif not invocation.spawned:
        failure = FailureKind.SPAWN_FAILURE
        detail = f"detector could not be started: {invocation.spawn_error}"
    elif actual not in CONTRACT_EXIT_CODES:
        failure = FailureKind.UNEXPECTED_EXIT_CODE
        detail = f"expected exit code {expected}, got {actual} (outside the 0/1 contract)"
    elif actual != expected:
        failure = FailureKind.EXIT_CODE_MISMATCH
        detail = f"expected exit code {expected}, got {actual}"
    else:
        detail = f"exit code {actual} as expected"

    return TestCaseResult(
        description=pair.description,
        mode=mode,
        expected_contradiction=pair.expected_contradiction,
        actual_exit_code=actual,
        passed=failure is None,
        stdout=invocation.stdout,
        stderr=invocation.stderr,
        failure=failure,
        detail=detail,
        label=pair.label,
    )


class TestCaseRunner:
    """
    Runs one (fixture, mode) case and prints a progress block for it.

    Printing is presentation only; the returned result comes from
    `evaluate()` alone.
    """
    __test__ = False  # not a pytest class

    def __init__(self, invoker: DetectorInvoker, out: Optional[TextIO] = None):
        self.invoker = invoker
        self.out = out

    def _print(self, text: str = "") -> None:
        print(text, file=self.out or sys.stdout)

    def run(self, pair: FixturePair, mode: ExecutionMode) -> TestCaseResult:
        self._print(f"Testing: {pair.description} (mode: {mode.label})")
        self._print(f"Expected: {describe_expectation(pair.expected_contradiction)}")

        invocation = self.invoker.invoke(pair, mode)
        result = evaluate(pair, mode, invocation)

        if result.passed:
            self._print("PASS")
        else:
            self._print(f"FAIL [{result.failure.value}]" if result.failure else "FAIL")
            self._print(f"  {result.detail}")

        stdout = result.stdout.strip()
        stderr = result.stderr.strip()
        if stdout:
            self._print("Output:")
            self._print(stdout)
        if stderr:
            self._print("Errors:")
            self._print(stderr)

        self._print(SEPARATOR)
        return result
