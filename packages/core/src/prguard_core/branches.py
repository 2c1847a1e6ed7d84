"""Branch-name parsing and classification.

Branch names follow ``<prefix>[-<version>[-<suffix>]]`` where version is either a
``YY.MM`` release number or ``unstable``:

    master                -> prefix "master"
    release-25.05         -> prefix "release", version "25.05"
    staging-next-25.05    -> prefix "staging-next", version "25.05"
    nixos-unstable-small  -> prefix "nixos", version "unstable", suffix "small"

Anything that does not carry a version parses with the whole name as its prefix.
Classification is a lookup on the prefix; unknown prefixes classify as UNKNOWN so
classify() never raises.
"""

from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass

_BRANCH_RE = re.compile(r"(?P<prefix>.+?)(?:-(?P<version>\d{2}\.\d{2}|unstable)(?:-(?P<suffix>.*))?)?")


class BranchType(enum.Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    DEVELOPMENT = "development"
    CHANNEL = "channel"
    UNKNOWN = "unknown"


_TYPES: dict[str, frozenset[BranchType]] = {
    "master": frozenset({BranchType.DEVELOPMENT, BranchType.PRIMARY}),
    "release": frozenset({BranchType.DEVELOPMENT, BranchType.PRIMARY}),
    "staging": frozenset({BranchType.DEVELOPMENT, BranchType.SECONDARY}),
    "staging-next": frozenset({BranchType.DEVELOPMENT, BranchType.SECONDARY}),
    "staging-nixos": frozenset({BranchType.DEVELOPMENT, BranchType.SECONDARY}),
    "haskell-updates": frozenset({BranchType.DEVELOPMENT, BranchType.SECONDARY}),
    "python-updates": frozenset({BranchType.DEVELOPMENT, BranchType.SECONDARY}),
    "nixos": frozenset({BranchType.CHANNEL}),
    "nixpkgs": frozenset({BranchType.CHANNEL}),
}

# Lower sorts first when several base branches are candidates for the same change.
_ORDER: dict[str, float] = {
    "master": 0,
    "release": 1,
    "staging": -1,
    "staging-next": -2,
    "staging-nixos": -2,
    "haskell-updates": -3,
    "python-updates": -3,
    "nixos": 0,
    "nixpkgs": 0,
}


@dataclass(frozen=True)
class BranchParts:
    prefix: str
    version: str | None = None
    suffix: str | None = None


@dataclass(frozen=True)
class BranchClassification:
    branch: str
    prefix: str
    types: frozenset[BranchType]
    order: float
    version: str | None = None
    suffix: str | None = None

    @property
    def stable(self) -> bool:
        return self.version is not None

    @property
    def display_version(self) -> str:
        return self.version or "dev"

    @property
    def is_primary(self) -> bool:
        return BranchType.PRIMARY in self.types

    @property
    def is_development(self) -> bool:
        return BranchType.DEVELOPMENT in self.types

    @property
    def is_unknown(self) -> bool:
        return BranchType.UNKNOWN in self.types


def split(branch: str) -> BranchParts:
    """Split a branch name into prefix, version and suffix.

    Returns ``version=None`` when the name has no ``-YY.MM`` or ``-unstable`` part.
    """
    match = _BRANCH_RE.fullmatch(branch)
    if match is None:
        # Only the empty string fails to match: the prefix needs at least one character.
        return BranchParts(prefix=branch)
    return BranchParts(**match.groupdict())


def classify(branch: str) -> BranchClassification:
    parts = split(branch)
    return BranchClassification(
        branch=branch,
        prefix=parts.prefix,
        types=_TYPES.get(parts.prefix, frozenset({BranchType.UNKNOWN})),
        order=_ORDER.get(parts.prefix, math.inf),
        version=parts.version,
        suffix=parts.suffix,
    )
