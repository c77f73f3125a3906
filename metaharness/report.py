"""
Result Aggregator / Reporter.

RunContext is the only state that crosses test cases. It is append-only,
written from the single control thread, and passed explicitly through the
run so it can be exercised without spawning anything.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from .domain import ExecutionMode, TestCaseResult


@dataclass
class RunContext:
    """
    Results in the order the cases ran, plus the derived verdict.

    An empty run is treated as a misconfiguration: its verdict is False.
    """
    results: list[TestCaseResult] = field(default_factory=list)
    closed: bool = False

    def record(self, result: TestCaseResult) -> None:
        if self.closed:
            raise RuntimeError("Cannot record results after the run is closed")
        self.results.append(result)

    def close(self) -> None:
        self.closed = True

    @property
    def is_empty(self) -> bool:
        return not self.results

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> list[TestCaseResult]:
        return [r for r in self.results if not r.passed]

    @property
    def verdict(self) -> bool:
        """True iff at least one case ran and every case passed."""
        return not self.is_empty and all(r.passed for r in self.results)

    @property
    def exit_code(self) -> int:
        return 0 if self.verdict else 1


def format_result_line(index: int, result: TestCaseResult) -> str:
    name = result.label or result.description
    if result.passed:
        return f"{index}. {name} [{result.mode.label}]: PASS"
    if result.failure is None:
        return f"{index}. {name} [{result.mode.label}]: FAIL"
    return f"{index}. {name} [{result.mode.label}]: FAIL ({result.failure.value})"


def format_summary(
    context: RunContext,
    skipped: Optional[Mapping[ExecutionMode, str]] = None,
) -> str:
    """Itemized summary in execution order, followed by the overall verdict."""
    lines = []
    lines.append("=== Test Summary ===")

    for index, result in enumerate(context.results, start=1):
        lines.append(format_result_line(index, result))
        if not result.passed and result.detail:
            lines.append(f"   {result.detail}")

    for mode, reason in (skipped or {}).items():
        lines.append(f"-  {mode.label} mode skipped: {reason}")

    lines.append("")
    if context.is_empty:
        lines.append("No test cases ran. Check the fixture set and mode selection.")
    else:
        total = len(context.results)
        lines.append(
            f"Total: {total}  Passed: {context.passed_count}  Failed: {total - context.passed_count}"
        )

    lines.append(f"Overall result: {'PASS' if context.verdict else 'FAIL'}")
    return "\n".join(lines)
