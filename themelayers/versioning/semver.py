"""Semantic version parsing and ordering for theme versions.

Versions are compared numerically (``1.9.0 < 1.10.0``). A pre-release sorts
before its release (``1.0.0-rc.1 < 1.0.0``) and build metadata is ignored for
precedence, following semver 2.0.0.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


@dataclass(frozen=True, slots=True)
class Version:
    """A parsed semantic version."""

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: str = ""

    @property
    def precedence(self) -> tuple:
        # A release ranks above any of its pre-releases.
        release_rank = 0 if self.prerelease else 1
        return (
            self.major,
            self.minor,
            self.patch,
            release_rank,
            tuple(_identifier_key(part) for part in self.prerelease),
        )


def _identifier_key(identifier: str) -> tuple[int, int, str]:
    if identifier.isdigit():
        return (0, int(identifier), "")
    return (1, 0, identifier)


def parse_version(version: object) -> Version | None:
    """Parse a version string, returning None when it is not valid semver."""
    if not isinstance(version, str):
        return None
    match = _SEMVER_RE.match(version)
    if match is None:
        return None
    major, minor, patch, prerelease, build = match.groups()
    return Version(
        major=int(major),
        minor=int(minor),
        patch=int(patch),
        prerelease=tuple(prerelease.split(".")) if prerelease else (),
        build=build or "",
    )


def is_valid_version(version: object) -> bool:
    return parse_version(version) is not None


def compare_versions(a: str, b: str) -> int:
    """Return a negative number if a < b, positive if a > b, 0 if equal.

    Invalid versions sort after every valid one.
    """
    parsed_a = parse_version(a)
    parsed_b = parse_version(b)
    if parsed_a is None and parsed_b is None:
        return 0
    if parsed_a is None:
        return 1
    if parsed_b is None:
        return -1
    if parsed_a.precedence < parsed_b.precedence:
        return -1
    if parsed_a.precedence > parsed_b.precedence:
        return 1
    return 0


def version_sort_key(version: str) -> tuple:
    """Total ordering key: precedence first, raw string as tie-break."""
    parsed = parse_version(version)
    if parsed is None:
        return (1, (), version)
    return (0, parsed.precedence, version)


def sort_versions(versions: Iterable[str]) -> list[str]:
    """Return versions sorted ascending."""
    return sorted(versions, key=version_sort_key)


def get_latest_version(versions: Iterable[str]) -> str | None:
    ordered = sort_versions(versions)
    if not ordered:
        return None
    return ordered[-1]


def is_newer_version(current: str, available: str) -> bool:
    """True when ``available`` is strictly newer than ``current``."""
    return compare_versions(available, current) > 0
