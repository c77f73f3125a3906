"""
Mode Selector.

Offline mode runs for every fixture, always. Live mode runs for every
fixture only when the credential variable is non-empty at startup. The
decision is made once, before any detector runs, and a skipped mode is
always reported with its reason.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from .config import CREDENTIAL_ENV_VAR
from .domain import ExecutionMode, FixturePair

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModePlan:
    """Modes that will run, and the reason for each one that will not."""
    modes: tuple[ExecutionMode, ...]
    skipped: dict[ExecutionMode, str] = field(default_factory=dict)

    def skip_notices(self) -> list[str]:
        return [
            f"Skipping {mode.label} mode tests: {reason}"
            for mode, reason in self.skipped.items()
        ]


def credential_present(environ: Mapping[str, str], variable: str = CREDENTIAL_ENV_VAR) -> bool:
    """True if the variable is set and non-empty."""
    return bool(environ.get(variable))


def select_modes(
    environ: Optional[Mapping[str, str]] = None,
    credential_variable: str = CREDENTIAL_ENV_VAR,
) -> ModePlan:
    """
    Decide which modes to exercise.

    Only the presence of the credential is inspected; its value is never
    stored or logged.
    """
    if environ is None:
        environ = os.environ

    if credential_present(environ, credential_variable):
        logger.info("%s is set; live mode enabled", credential_variable)
        return ModePlan(modes=(ExecutionMode.OFFLINE, ExecutionMode.LIVE))

    logger.info("%s is not set; live mode skipped", credential_variable)
    return ModePlan(
        modes=(ExecutionMode.OFFLINE,),
        skipped={ExecutionMode.LIVE: f"{credential_variable} is not set"},
    )


def schedule(
    pairs: Iterable[FixturePair],
    plan: ModePlan,
) -> list[tuple[FixturePair, ExecutionMode]]:
    """All cases for the first mode, then all cases for the next."""
    pairs = tuple(pairs)
    return [(pair, mode) for mode in plan.modes for pair in pairs]
