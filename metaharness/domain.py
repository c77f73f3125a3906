"""
Core Domain Objects for the Contradiction Detector Meta-Harness.

The harness never looks inside the detector. Everything it knows is
carried by these objects, all of which are immutable once created.

Domain Objects:
    ExecutionMode:    How the detector is asked to run (offline / live)
    FixturePair:      Implementation + documentation with a known verdict
    InvocationResult: Raw outcome of one detector process
    TestCaseResult:   Judged outcome of one (fixture, mode) combination
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


# =============================================================================
# ERRORS
# =============================================================================

class MissingExecutableError(Exception):
    """
    Raised when the detector under test cannot be found or is not runnable.

    This is the only condition fatal to a whole run: without the subject
    under test there is nothing to assert against.
    """

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{reason}: {self.path}")


class FixtureError(Exception):
    """Raised when a fixture file or classification directory is unusable."""

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{reason}: {self.path}")


# =============================================================================
# EXECUTION MODE
# =============================================================================

class ExecutionMode(Enum):
    """
    Detector execution modes.

    Values are the identifiers written to the detector's mode-selection
    variable:
    OFFLINE: deterministic mock backend, no network
    LIVE:    real inference backend, requires a credential
    """
    OFFLINE = "mock"
    LIVE = "openai"

    @property
    def label(self) -> str:
        return self.name.lower()


# =============================================================================
# FAILURE TAXONOMY
# =============================================================================

class FailureKind(Enum):
    """
    Why a single test case failed.

    None of these abort the run; they are recorded and the next case runs.
    """
    SPAWN_FAILURE = "spawn_failure"                # Detector could not be started
    UNEXPECTED_EXIT_CODE = "unexpected_exit_code"  # Status outside {0, 1}
    EXIT_CODE_MISMATCH = "exit_code_mismatch"      # Wrong classification
    TIMEOUT = "timeout"                            # Deadline exceeded, process killed


# =============================================================================
# FIXTURE PAIR
# =============================================================================

DOCUMENTATION_SUFFIXES = frozenset({".md", ".rst", ".txt"})


@dataclass(frozen=True)
class FixturePair:
    """
    An implementation artifact and its documentation, pre-labelled.

    `expected_contradiction` is the ground truth the harness asserts.
    `companion_paths` holds any extra files grouped with the pair; they are
    passed to the detector after the two canonical paths.
    """
    implementation_path: Path
    documentation_path: Path
    expected_contradiction: bool
    label: str = ""
    companion_paths: tuple[Path, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "implementation_path", Path(self.implementation_path))
        object.__setattr__(self, "documentation_path", Path(self.documentation_path))
        object.__setattr__(
            self, "companion_paths", tuple(Path(p) for p in self.companion_paths)
        )
        if not self.label:
            object.__setattr__(self, "label", self.implementation_path.parent.name)

    @property
    def argv_paths(self) -> tuple[Path, ...]:
        """Positional arguments for the detector, in order."""
        return (self.implementation_path, self.documentation_path) + self.companion_paths

    @property
    def description(self) -> str:
        return " and ".join(str(p) for p in self.argv_paths)

    def validate(self) -> None:
        """
        Check every path references an existing, readable regular file.

        Raises:
            FixtureError: On the first path that fails
        """
        for path in self.argv_paths:
            if not path.exists():
                raise FixtureError(path, "Fixture file does not exist")
            if not path.is_file():
                raise FixtureError(path, "Fixture path is not a regular file")
            if not os.access(path, os.R_OK):
                raise FixtureError(path, "Fixture file is not readable")


# =============================================================================
# INVOCATION RESULT
# =============================================================================

@dataclass(frozen=True)
class InvocationResult:
    """
    Raw outcome of a single detector process.

    `exit_code` is None when the process never reported a status, either
    because it could not be started (`spawn_error`) or because it was killed
    after exceeding its deadline (`timed_out`).
    """
    command: tuple[str, ...]
    exit_code: Optional[int]
    stdout: str = ""
    stderr: str = ""
    spawn_error: Optional[OSError] = None
    timed_out: bool = False
    duration_seconds: float = 0.0

    @property
    def spawned(self) -> bool:
        return self.spawn_error is None


# =============================================================================
# TEST CASE RESULT
# =============================================================================

def expected_exit_code(expected_contradiction: bool) -> int:
    return 1 if expected_contradiction else 0


@dataclass(frozen=True)
class TestCaseResult:
    """
    Judged outcome of one (fixture pair, mode) combination.

    Created by the runner, appended once to the run context, never mutated.
    """
    __test__ = False  # not a pytest class

    description: str
    mode: ExecutionMode
    expected_contradiction: bool
    actual_exit_code: Optional[int]
    passed: bool
    stdout: str = ""
    stderr: str = ""
    failure: Optional[FailureKind] = None
    detail: str = ""
    label: str = ""

    @property
    def expected_exit_code(self) -> int:
        return expected_exit_code(self.expected_contradiction)
