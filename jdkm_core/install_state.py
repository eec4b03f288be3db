"""Install records kept next to installed JDKs."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .types import Artifact, ReleaseDescriptor

logger = logging.getLogger(__name__)

STATE_DIR_NAME = "state"


def install_record_path(root: Path, version_id: str) -> Path:
    return root / STATE_DIR_NAME / "install" / f"{version_id}.lock.json"


def build_install_record(
    version_id: str,
    artifact: Artifact,
    release: ReleaseDescriptor | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "version": version_id,
        "url": artifact.url,
        "file_name": artifact.file_name,
        "size": artifact.size,
        "checksum": artifact.checksum,
        "os": artifact.os,
        "architecture": artifact.architecture,
        "image_type": artifact.image_type,
        "installed_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
    }
    if release is not None:
        payload["release_name"] = release.release_name
        payload["release"] = f"{release.major}.{release.minor}.{release.security}"
    return payload


def read_install_record(root: Path, version_id: str) -> dict[str, Any] | None:
    """Return the record for ``version_id``, or ``None`` when it is missing or unusable.

    A record never decides whether a version is installed, so damaged files are
    reported and skipped rather than raised.
    """
    path = install_record_path(root, version_id)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as exc:
        logger.warning("cannot read install record %s: %s", path, exc)
        return None
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        logger.warning("ignoring malformed install record %s: %s", path, exc)
        return None
    if not isinstance(payload, dict) or payload.get("version") != version_id:
        logger.warning("ignoring install record %s: not a record for JDK %s", path, version_id)
        return None
    return payload


def write_install_record(root: Path, version_id: str, payload: dict[str, Any]) -> Path:
    path = install_record_path(root, version_id)
    path.parent.mkdir(parents=True, exist_ok=True)
    # readers see either the previous record or the complete new one
    partial = path.with_name(f".{path.name}.partial")
    partial.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    os.replace(partial, path)
    return path


def remove_install_record(root: Path, version_id: str) -> None:
    install_record_path(root, version_id).unlink(missing_ok=True)
