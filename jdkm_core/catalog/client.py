"""Eclipse Adoptium release catalog client built on requests."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Any, Iterator

import requests

from jdkm_core.errors import CatalogError, VerificationError
from jdkm_core.types import Artifact, CatalogClientConfig, ReleaseDescriptor

log = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


class AdoptiumClient:
    """Read-only client for the Adoptium v3 API plus artifact download."""

    def __init__(
        self,
        config: CatalogClientConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or CatalogClientConfig()
        self.base_url = self.config.api_base.rstrip("/")
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _get_json(self, path: str, params: dict[str, Any] | None = None, *, allow_missing: bool = False) -> Any:
        url = self._url(path)
        log.debug("GET %s params=%s", url, params)
        try:
            r = self.session.get(url, params=params, timeout=self.config.timeout_seconds)
        except requests.RequestException as exc:
            raise CatalogError(f"failed to fetch {url}: {exc}") from exc
        if allow_missing and r.status_code == 404:
            return None
        if r.status_code >= 400:
            raise CatalogError(f"catalog request failed: {r.status_code} {url}")
        try:
            return r.json()
        except ValueError as exc:
            raise CatalogError(f"failed to decode catalog response from {url}") from exc

    def list_releases(self) -> list[ReleaseDescriptor]:
        payload = self._get_json("/info/available_releases")
        if not isinstance(payload, dict):
            raise CatalogError("unexpected available_releases payload")
        majors = payload.get("available_releases") or []
        releases = [ReleaseDescriptor(major=int(major)) for major in majors]

        # tip_version is the early-access line when it runs ahead of the newest GA feature release
        tip = payload.get("tip_version")
        newest = payload.get("most_recent_feature_release")
        known = {release.major for release in releases}
        if isinstance(tip, int) and isinstance(newest, int) and tip > newest and tip not in known:
            releases.append(ReleaseDescriptor(major=tip, prerelease=True))
        return releases

    def feature_releases(self, major: int, *, os_name: str, arch: str) -> Iterator[ReleaseDescriptor]:
        page = 0
        while True:
            payload = self._get_json(
                f"/assets/feature_releases/{int(major)}/ga",
                params={
                    "os": os_name,
                    "architecture": arch,
                    "image_type": "jdk",
                    "page": page,
                    "page_size": self.config.page_size,
                },
                allow_missing=True,
            )
            if not payload:
                return
            if not isinstance(payload, list):
                raise CatalogError(f"unexpected feature_releases payload for {major}")
            for item in payload:
                if isinstance(item, dict):
                    yield parse_release(item)
            if len(payload) < self.config.page_size:
                return
            page += 1

    def download(self, artifact: Artifact, dest_dir: Path) -> Path:
        dest_dir.mkdir(parents=True, exist_ok=True)
        out_path = dest_dir / (Path(artifact.file_name).name or "jdk-archive")
        log.info("downloading %s", artifact.url)
        digest = hashlib.sha256()
        written = 0
        try:
            with self.session.get(artifact.url, stream=True, timeout=self.config.download_timeout_seconds) as r:
                if r.status_code >= 400:
                    raise CatalogError(f"download failed: {r.status_code} {artifact.url}")
                with open(out_path, "wb") as f:
                    for chunk in r.iter_content(chunk_size=_CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
                            digest.update(chunk)
                            written += len(chunk)
        except requests.RequestException as exc:
            raise CatalogError(f"failed to download {artifact.url}: {exc}") from exc

        if artifact.size and written != artifact.size:
            raise VerificationError(
                f"downloaded size {written} does not match expected {artifact.size} bytes for {artifact.file_name}"
            )
        if self.config.verify_checksum and artifact.checksum:
            actual = digest.hexdigest()
            if actual.lower() != artifact.checksum.lower():
                raise VerificationError(f"checksum mismatch for {artifact.file_name}: {actual}")
        log.debug("downloaded %s bytes to %s", written, out_path)
        return out_path


def parse_release(payload: dict[str, Any]) -> ReleaseDescriptor:
    version = payload.get("version_data")
    if not isinstance(version, dict) or version.get("major") is None:
        raise CatalogError("release entry is missing version_data.major")
    release_type = str(payload.get("release_type") or "ga").lower()
    artifacts: list[Artifact] = []
    for binary in payload.get("binaries") or []:
        artifact = _parse_binary(binary)
        if artifact is not None:
            artifacts.append(artifact)
    return ReleaseDescriptor(
        major=int(version["major"]),
        minor=int(version.get("minor") or 0),
        security=int(version.get("security") or 0),
        prerelease=bool(payload.get("prerelease")) or release_type != "ga",
        release_name=str(payload.get("release_name") or "").strip() or None,
        artifacts=tuple(artifacts),
    )


def _parse_binary(binary: Any) -> Artifact | None:
    if not isinstance(binary, dict):
        return None
    package = binary.get("package")
    if not isinstance(package, dict):
        return None
    link = str(package.get("link") or "").strip()
    name = str(package.get("name") or "").strip()
    if not link or not name:
        return None
    return Artifact(
        os=str(binary.get("os") or ""),
        architecture=str(binary.get("architecture") or ""),
        image_type=str(binary.get("image_type") or ""),
        url=link,
        file_name=name,
        size=int(package.get("size") or 0),
        checksum=str(package.get("checksum") or "").strip() or None,
    )
