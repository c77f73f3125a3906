"""
Detector Invoker.

Runs the external detector once per call:

    <executable> <implementation> <documentation> [<companion>...]

with the mode-selection variable set on an otherwise inherited environment.
Calls block until the process exits and both streams are drained. Spawn
failures and deadline overruns come back as data on the InvocationResult;
they are never raised.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from pathlib import Path
from typing import Mapping, Optional

from .config import MODE_ENV_VAR
from .domain import ExecutionMode, FixturePair, InvocationResult, MissingExecutableError

logger = logging.getLogger(__name__)


# =============================================================================
# PREFLIGHT
# =============================================================================

def resolve_executable(path: str | Path) -> Path:
    """
    Locate the detector and confirm it can be executed.

    A bare name that does not exist relative to the working directory is
    looked up on PATH.

    Raises:
        MissingExecutableError: If nothing runnable is found
    """
    candidate = Path(path)

    if not candidate.exists() and candidate.name == str(path):
        found = shutil.which(str(path))
        if found:
            candidate = Path(found)

    if not candidate.exists():
        raise MissingExecutableError(candidate, "Detector executable not found")
    if not candidate.is_file():
        raise MissingExecutableError(candidate, "Detector path is not a file")
    if not os.access(candidate, os.X_OK):
        raise MissingExecutableError(candidate, "Detector is not executable")

    return candidate.resolve()


def build_environment(
    mode: ExecutionMode,
    base: Optional[Mapping[str, str]] = None,
    mode_variable: str = MODE_ENV_VAR,
) -> dict[str, str]:
    """Copy of the ambient environment with only the mode variable set."""
    env = dict(os.environ if base is None else base)
    env[mode_variable] = mode.value
    return env


# =============================================================================
# INVOCATION
# =============================================================================

def _as_text(data: Optional[str | bytes]) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


class DetectorInvoker:
    """
    Blocking wrapper around one detector executable.

    `timeout` is an optional per-invocation deadline in seconds. When it
    expires the process is killed and reaped, and the result is marked
    `timed_out`.
    """

    def __init__(
        self,
        executable: Path,
        mode_variable: str = MODE_ENV_VAR,
        timeout: Optional[float] = None,
        base_environment: Optional[Mapping[str, str]] = None,
    ):
        self.executable = Path(executable)
        self.mode_variable = mode_variable
        self.timeout = timeout
        self.base_environment = base_environment

    def command_for(self, pair: FixturePair) -> tuple[str, ...]:
        return (str(self.executable),) + tuple(str(p) for p in pair.argv_paths)

    def invoke(self, pair: FixturePair, mode: ExecutionMode) -> InvocationResult:
        command = self.command_for(pair)
        env = build_environment(mode, self.base_environment, self.mode_variable)

        logger.debug("Spawning %s with %s=%s", " ".join(command), self.mode_variable, mode.value)
        started = time.monotonic()

        try:
            completed = subprocess.run(
                command,
                env=env,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            elapsed = time.monotonic() - started
            logger.warning("Detector exceeded %.1fs deadline: %s", self.timeout, command[0])
            return InvocationResult(
                command=command,
                exit_code=None,
                stdout=_as_text(e.stdout),
                stderr=_as_text(e.stderr),
                timed_out=True,
                duration_seconds=elapsed,
            )
        except OSError as e:
            elapsed = time.monotonic() - started
            logger.warning("Detector could not be started: %s", e)
            return InvocationResult(
                command=command,
                exit_code=None,
                spawn_error=e,
                duration_seconds=elapsed,
            )

        elapsed = time.monotonic() - started
        logger.debug("Detector exited %d after %.3fs", completed.returncode, elapsed)

        return InvocationResult(
            command=command,
            exit_code=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
            duration_seconds=elapsed,
        )
