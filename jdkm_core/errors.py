"""Exception hierarchy for jdkm."""

from __future__ import annotations


class JdkmError(RuntimeError):
    """Base error for every failure surfaced by jdkm."""


class InvalidVersionError(JdkmError, ValueError):
    """Raised when a version token is not major[.minor[.security]]."""


class ReleaseNotFoundError(JdkmError):
    """Raised when no remote release or artifact matches a request."""


class NotInstalledError(JdkmError):
    """Raised when an operation needs a local version that is absent."""


class ArchiveError(JdkmError):
    """Raised when an archive cannot be extracted."""


class UnsupportedArchiveError(ArchiveError):
    pass


class EmptyArchiveError(ArchiveError):
    pass


class PathTraversalError(ArchiveError):
    pass


class VerificationError(JdkmError):
    """Raised when downloaded or extracted content does not look right."""


class CatalogError(JdkmError):
    """Raised when the release catalog cannot be reached or parsed."""


class InstallError(JdkmError):
    """Raised for filesystem failures inside the installation root."""
