"""Catalog and installation datatypes."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


DEFAULT_API_BASE = "https://api.adoptium.net/v3"


@dataclass(frozen=True)
class CatalogClientConfig:
    api_base: str = DEFAULT_API_BASE
    timeout_seconds: float = 30.0
    download_timeout_seconds: float = 300.0
    page_size: int = 20
    verify_checksum: bool = True


@dataclass(frozen=True)
class Artifact:
    os: str
    architecture: str
    image_type: str
    url: str
    file_name: str
    size: int = 0
    checksum: str | None = None


@dataclass(frozen=True)
class ReleaseDescriptor:
    major: int
    minor: int = 0
    security: int = 0
    prerelease: bool = False
    release_name: str | None = None
    artifacts: tuple[Artifact, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Platform:
    os: str
    arch: str


@dataclass(frozen=True)
class InstalledVersion:
    version_id: str
    path: Path
    valid: bool = True


@dataclass(frozen=True)
class InstallResult:
    version: InstalledVersion
    skipped: bool = False
    replaced: bool = False
