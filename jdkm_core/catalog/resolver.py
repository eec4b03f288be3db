from __future__ import annotations

import logging
from typing import Iterable, Protocol

from jdkm_core.errors import ReleaseNotFoundError
from jdkm_core.types import Artifact, Platform, ReleaseDescriptor
from jdkm_core.versions import VersionSpec

logger = logging.getLogger(__name__)

JDK_IMAGE = "jdk"


class ReleaseCatalog(Protocol):
    def list_releases(self) -> list[ReleaseDescriptor]: ...

    def feature_releases(self, major: int, *, os_name: str, arch: str) -> Iterable[ReleaseDescriptor]: ...


def select_artifact(release: ReleaseDescriptor, platform: Platform) -> Artifact | None:
    for artifact in release.artifacts:
        if (
            artifact.os == platform.os
            and artifact.architecture == platform.arch
            and artifact.image_type == JDK_IMAGE
        ):
            return artifact
    return None


def find_artifact(
    catalog: ReleaseCatalog,
    spec: VersionSpec,
    platform: Platform,
) -> tuple[ReleaseDescriptor, Artifact]:
    for release in catalog.feature_releases(spec.major, os_name=platform.os, arch=platform.arch):
        if not spec.matches(release):
            continue
        artifact = select_artifact(release, platform)
        if artifact is not None:
            logger.debug("selected %s for %s on %s/%s", artifact.file_name, spec, platform.os, platform.arch)
            return release, artifact
        logger.debug("release %s has no jdk artifact for %s/%s", release.release_name, platform.os, platform.arch)
    raise ReleaseNotFoundError(f"no suitable JDK found for version {spec} on {platform.os}/{platform.arch}")
