"""
Harness configuration.

There is deliberately little to configure: where the detector lives, where
the fixtures live, and which environment variables carry the mode and the
live-mode credential.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================

# Variable the detector reads to choose its backend
MODE_ENV_VAR = "LLM_MODE"

# Presence of this variable schedules live-mode test cases
CREDENTIAL_ENV_VAR = "OPENAI_API_KEY"

# Detector location
DEFAULT_EXECUTABLE = "check_differences"
EXECUTABLE_ENV_VAR = "METAHARNESS_EXECUTABLE"

# Per-invocation deadline in seconds (None blocks until the detector exits)
DEFAULT_TIMEOUT: Optional[float] = None

# Shown when the detector is missing
BUILD_HINT = "Build the detector first, e.g. 'go build -o check_differences'"


@dataclass(frozen=True)
class HarnessConfig:
    """Resolved settings for one harness run."""
    executable: Path
    fixture_root: Optional[Path] = None
    timeout: Optional[float] = DEFAULT_TIMEOUT
    mode_variable: str = MODE_ENV_VAR
    credential_variable: str = CREDENTIAL_ENV_VAR

    def __post_init__(self):
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")


def default_executable(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Executable path from the environment override, else the default name."""
    if environ is None:
        environ = os.environ
    return Path(environ.get(EXECUTABLE_ENV_VAR) or DEFAULT_EXECUTABLE)
