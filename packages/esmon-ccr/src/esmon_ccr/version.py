"""
Elasticsearch version parsing and comparison.

Versions compare as ordered tuples (major, minor, patch, release rank,
qualifier). A pre-release ("7.0.0-beta1", "6.5.0-SNAPSHOT") sorts before
the release with the same numbers, so "10.0.0" > "9.0.0" and
"7.0.0-rc1" < "7.0.0". Build metadata after "+" is ignored, so
"6.5.0+build1" equals "6.5.0".
"""

import re
from dataclasses import dataclass

_VERSION_RE = re.compile(
    r"^\s*v?(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:-([0-9A-Za-z.-]+))?(?:\+\S+)?\s*$"
)


@dataclass(frozen=True, order=True)
class Version:
    """
    A parsed major.minor.patch version with an optional qualifier.

    Field order drives comparison; do not reorder.

    Attributes:
        major, minor, patch: Numeric components.
        release_rank: 1 for releases, 0 for pre-releases.
        qualifier: Pre-release qualifier (e.g., "beta1", "SNAPSHOT"), or "".
    """

    major: int
    minor: int = 0
    patch: int = 0
    release_rank: int = 1
    qualifier: str = ""

    @classmethod
    def parse(cls, value: str) -> "Version":
        """
        Parse a version string.

        Missing minor/patch components default to 0.

        Raises:
            ValueError: If the string is not a version.
        """
        match = _VERSION_RE.match(value)
        if match is None:
            raise ValueError(f"invalid version: {value!r}")

        major, minor, patch, qualifier = match.groups()
        return cls(
            major=int(major),
            minor=int(minor or 0),
            patch=int(patch or 0),
            release_rank=0 if qualifier else 1,
            qualifier=qualifier or "",
        )

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        return f"{base}-{self.qualifier}" if self.qualifier else base


# First release that ships the /_ccr/stats API
CCR_STATS_API_AVAILABLE_VERSION = Version(6, 5, 0)


def is_feature_available(current: Version, required: Version) -> bool:
    """Return True if current is at or above the version a feature needs."""
    return current >= required
