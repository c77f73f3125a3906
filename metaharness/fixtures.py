"""
Fixture Set wiring.

Fixtures live in classification directories under a single root:

    <root>/correct/     implementation + docs that agree   (detector exits 0)
    <root>/incorrect/   implementation + docs that disagree (detector exits 1)

Each directory becomes one FixturePair. The implementation artifact is the
first non-documentation file, the documentation artifact the first file with
a documentation suffix; anything else rides along as a companion path.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from .domain import DOCUMENTATION_SUFFIXES, FixtureError, FixturePair

logger = logging.getLogger(__name__)


# Classification directory name -> expected contradiction
CLASSIFICATIONS: tuple[tuple[str, bool], ...] = (
    ("correct", False),
    ("incorrect", True),
)


def default_fixture_root() -> Path:
    """The sample fixtures shipped with the package."""
    return Path(__file__).resolve().parent / "samples"


def _visible_files(directory: Path) -> list[Path]:
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise FixtureError(directory, f"Cannot list fixture directory ({e.strerror})") from e
    return sorted(
        p for p in entries
        if p.is_file() and not p.name.startswith(".")
    )


def load_classification_dir(directory: Path, expected_contradiction: bool) -> FixturePair:
    """
    Build a FixturePair from one classification directory.

    Raises:
        FixtureError: If the directory lacks an implementation or a
            documentation artifact
    """
    files = _visible_files(directory)
    docs = [p for p in files if p.suffix.lower() in DOCUMENTATION_SUFFIXES]
    impls = [p for p in files if p.suffix.lower() not in DOCUMENTATION_SUFFIXES]

    if not impls:
        raise FixtureError(directory, "No implementation artifact in fixture directory")
    if not docs:
        raise FixtureError(directory, "No documentation artifact in fixture directory")

    implementation, documentation = impls[0], docs[0]
    companions = tuple(p for p in files if p not in (implementation, documentation))

    return FixturePair(
        implementation_path=implementation,
        documentation_path=documentation,
        expected_contradiction=expected_contradiction,
        label=directory.name,
        companion_paths=companions,
    )


def discover_fixtures(root: Optional[Path] = None) -> tuple[FixturePair, ...]:
    """
    Discover every classification directory under `root`.

    Directories are visited in classification order (consistent first),
    which is also the order test cases run in within a mode.

    Raises:
        FixtureError: If the root is missing or holds no classification
            directories
    """
    if root is None:
        root = default_fixture_root()
    root = Path(root)

    if not root.is_dir():
        raise FixtureError(root, "Fixture root is not a directory")

    pairs = []
    for name, expected in CLASSIFICATIONS:
        directory = root / name
        if not directory.is_dir():
            logger.debug("No %s/ directory under %s", name, root)
            continue
        pairs.append(load_classification_dir(directory, expected))

    if not pairs:
        names = ", ".join(f"{name}/" for name, _ in CLASSIFICATIONS)
        raise FixtureError(root, f"No classification directories ({names}) found")

    logger.info("Discovered %d fixture pair(s) under %s", len(pairs), root)
    return tuple(pairs)


def validate_fixtures(pairs: Iterable[FixturePair]) -> None:
    """Validate every pair before any detector runs."""
    for pair in pairs:
        pair.validate()
