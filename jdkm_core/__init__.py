"""Core library for the jdkm JDK version manager."""

from .activation import ActivationPlanner, PlanStep, StepKind, render, render_posix, render_powershell
from .archive import extract_archive
from .config import JdkmConfig, load_config
from .errors import (
    ArchiveError,
    CatalogError,
    EmptyArchiveError,
    InstallError,
    InvalidVersionError,
    JdkmError,
    NotInstalledError,
    PathTraversalError,
    ReleaseNotFoundError,
    UnsupportedArchiveError,
    VerificationError,
)
from .store import InstallationStore
from .types import (
    Artifact,
    CatalogClientConfig,
    InstalledVersion,
    InstallResult,
    Platform,
    ReleaseDescriptor,
)
from .versions import VersionSpec, is_lts, parse_version

__all__ = [
    "ActivationPlanner",
    "PlanStep",
    "StepKind",
    "render",
    "render_posix",
    "render_powershell",
    "extract_archive",
    "JdkmConfig",
    "load_config",
    "JdkmError",
    "InvalidVersionError",
    "ReleaseNotFoundError",
    "NotInstalledError",
    "ArchiveError",
    "UnsupportedArchiveError",
    "EmptyArchiveError",
    "PathTraversalError",
    "VerificationError",
    "CatalogError",
    "InstallError",
    "InstallationStore",
    "Artifact",
    "CatalogClientConfig",
    "InstalledVersion",
    "InstallResult",
    "Platform",
    "ReleaseDescriptor",
    "VersionSpec",
    "is_lts",
    "parse_version",
]
