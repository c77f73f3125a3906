"""
Shared fixtures: fake detectors written as POSIX shell scripts.

Each fake appends "<mode> <args>" to a log file so tests can see exactly
which invocations happened, then decides its verdict from the name of the
directory holding its first argument.
"""

import os
from pathlib import Path

import pytest

from metaharness.domain import FixturePair


# Exits 1 for fixtures under incorrect/, 0 otherwise
HONEST_BODY = """\
d=${1%/*}; d=${d##*/}
echo "checking $1 against $2"
case "$d" in
  incorrect) echo "contradiction: add() does not convert its arguments"; exit 1 ;;
esac
exit 0
"""

# Always reports a contradiction
ALWAYS_CONTRADICTS_BODY = """\
echo "contradiction everywhere"
exit 1
"""

# Detector-internal error
CRASHING_BODY = """\
echo "internal error: backend unavailable" >&2
exit 2
"""


@pytest.fixture
def invocation_log(tmp_path: Path) -> Path:
    return tmp_path / "invocations.log"


@pytest.fixture
def make_detector(tmp_path: Path, invocation_log: Path):
    """Factory writing an executable fake detector into tmp_path."""
    def _make(body: str = HONEST_BODY, name: str = "check_differences") -> Path:
        path = tmp_path / name
        path.write_text(
            "#!/bin/sh\n"
            f'echo "${{LLM_MODE}} $*" >> "{invocation_log}"\n'
            + body
        )
        path.chmod(0o755)
        return path
    return _make


@pytest.fixture
def fixture_root(tmp_path: Path) -> Path:
    """A minimal fixture tree with one consistent and one contradictory pair."""
    root = tmp_path / "fixtures"
    for name in ("correct", "incorrect"):
        directory = root / name
        directory.mkdir(parents=True)
        (directory / "calculator.js").write_text("function add(a, b) { return a + b; }\n")
        (directory / "calculator.md").write_text("# add(a, b)\nReturns the sum.\n")
    return root


@pytest.fixture
def consistent_pair(fixture_root: Path) -> FixturePair:
    return FixturePair(
        implementation_path=fixture_root / "correct" / "calculator.js",
        documentation_path=fixture_root / "correct" / "calculator.md",
        expected_contradiction=False,
    )


@pytest.fixture
def contradictory_pair(fixture_root: Path) -> FixturePair:
    return FixturePair(
        implementation_path=fixture_root / "incorrect" / "calculator.js",
        documentation_path=fixture_root / "incorrect" / "calculator.md",
        expected_contradiction=True,
    )


@pytest.fixture
def offline_environ() -> dict:
    """Ambient environment with the live-mode credential removed."""
    return {k: v for k, v in os.environ.items() if k != "OPENAI_API_KEY"}


@pytest.fixture
def live_environ(offline_environ: dict) -> dict:
    return {**offline_environ, "OPENAI_API_KEY": "sk-test-secret"}


@pytest.fixture
def honest_detector(make_detector) -> Path:
    return make_detector(HONEST_BODY)


@pytest.fixture
def always_contradicts_detector(make_detector) -> Path:
    return make_detector(ALWAYS_CONTRADICTS_BODY)


@pytest.fixture
def crashing_detector(make_detector) -> Path:
    return make_detector(CRASHING_BODY)


@pytest.fixture
def logged_invocations(invocation_log: Path):
    """Callable returning the log lines written so far."""
    def _read() -> list[str]:
        if not invocation_log.exists():
            return []
        return invocation_log.read_text().splitlines()
    return _read
