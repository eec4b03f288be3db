"""Version token parsing, release matching and LTS classification."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import InvalidVersionError
from .types import ReleaseDescriptor

_COMPONENT_RE = re.compile(r"[0-9]+")
_MAX_COMPONENTS = 3
_KNOWN_LTS = frozenset({8, 11, 17, 21})
_LTS_CADENCE_BASE = 21
_LTS_CADENCE = 3


@dataclass(frozen=True)
class VersionSpec:
    """A requested JDK version at major, major.minor or major.minor.security precision."""

    major: int
    minor: int | None = None
    security: int | None = None
    raw: str = ""

    @property
    def precision(self) -> int:
        if self.security is not None:
            return 3
        if self.minor is not None:
            return 2
        return 1

    @property
    def components(self) -> tuple[int, ...]:
        values = (self.major, self.minor, self.security)
        return tuple(value for value in values[: self.precision] if value is not None)

    def matches(self, release: ReleaseDescriptor) -> bool:
        if release.major != self.major:
            return False
        if self.minor is not None and release.minor != self.minor:
            return False
        if self.security is not None and release.security != self.security:
            return False
        return True

    def __str__(self) -> str:
        return ".".join(str(value) for value in self.components)


def parse_version(raw: str) -> VersionSpec:
    parts = (raw or "").split(".")
    if not raw or len(parts) > _MAX_COMPONENTS:
        raise InvalidVersionError(
            f"invalid version format: {raw!r} (expected major[.minor[.security]])"
        )
    values: list[int] = []
    for part in parts:
        if not _COMPONENT_RE.fullmatch(part):
            raise InvalidVersionError(
                f"invalid version format: {raw!r} (component {part!r} is not a number)"
            )
        values.append(int(part))
    minor = values[1] if len(values) > 1 else None
    security = values[2] if len(values) > 2 else None
    return VersionSpec(major=values[0], minor=minor, security=security, raw=raw)


def is_valid_version(raw: str) -> bool:
    try:
        parse_version(raw)
    except InvalidVersionError:
        return False
    return True


def is_lts(major: int) -> bool:
    if major in _KNOWN_LTS:
        return True
    # every third feature release after 21
    return major > _LTS_CADENCE_BASE and (major - _LTS_CADENCE_BASE) % _LTS_CADENCE == 0


def spec_for_release(release: ReleaseDescriptor) -> VersionSpec:
    return VersionSpec(
        major=release.major,
        minor=release.minor,
        security=release.security,
        raw=f"{release.major}.{release.minor}.{release.security}",
    )


def format_release_version(release: ReleaseDescriptor) -> str:
    components = [release.major, release.minor, release.security]
    while len(components) > 1 and components[-1] == 0:
        components.pop()
    return ".".join(str(value) for value in components)
