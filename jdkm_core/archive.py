"""Streaming archive extraction with path containment checks."""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tarfile
import zipfile
from pathlib import Path
from typing import IO

from .errors import (
    ArchiveError,
    EmptyArchiveError,
    PathTraversalError,
    UnsupportedArchiveError,
)

logger = logging.getLogger(__name__)

TAR_SUFFIXES = (".tar.gz", ".tgz")
ZIP_SUFFIXES = (".zip",)
_COPY_CHUNK = 1024 * 1024
_OWNER_RWX = stat.S_IRWXU


def archive_kind(archive_path: Path | str) -> str:
    name = Path(archive_path).name.lower()
    if name.endswith(TAR_SUFFIXES):
        return "tar"
    if name.endswith(ZIP_SUFFIXES):
        return "zip"
    raise UnsupportedArchiveError(f"unsupported archive format: {archive_path}")


def extract_archive(archive_path: Path | str, destination: Path | str) -> Path:
    """Extract ``archive_path`` under ``destination`` and return the archive's root directory.

    Every entry is checked against ``destination`` before it is written; an entry
    that would land outside aborts the whole extraction with :class:`PathTraversalError`.
    Entries already written for earlier, safe members are left in place.
    """
    archive_path = Path(archive_path)
    destination = Path(destination)
    kind = archive_kind(archive_path)
    destination.mkdir(parents=True, exist_ok=True)

    logger.debug("extracting %s archive %s into %s", kind, archive_path, destination)
    try:
        if kind == "tar":
            root_name = _extract_tar(archive_path, destination)
        else:
            root_name = _extract_zip(archive_path, destination)
    except (tarfile.TarError, zipfile.BadZipFile, EOFError) as exc:
        raise ArchiveError(f"failed to read archive {archive_path}: {exc}") from exc
    except OSError as exc:
        raise ArchiveError(f"failed to extract {archive_path}: {exc}") from exc

    if root_name is None:
        raise EmptyArchiveError(f"could not determine root directory of {archive_path}: archive has no named entries")
    return destination / root_name


def safe_member_path(destination: Path, member_name: str) -> Path:
    root = os.path.normpath(str(destination))
    target = os.path.normpath(os.path.join(root, member_name))
    if target == root:
        return Path(target)
    if not target.startswith(root.rstrip(os.sep) + os.sep):
        raise PathTraversalError(f"path traversal blocked for archive entry: {member_name}")
    return Path(target)


def _root_segment(member_name: str) -> str | None:
    for segment in member_name.replace("\\", "/").split("/"):
        if segment and segment != ".":
            return segment
    return None


def _extract_tar(archive_path: Path, destination: Path) -> str | None:
    root_name: str | None = None
    # "r|gz" reads members strictly in order without seeking
    with tarfile.open(archive_path, mode="r|gz") as tf:
        for member in tf:
            if root_name is None:
                root_name = _root_segment(member.name)
            target = safe_member_path(destination, member.name)
            if member.isdir():
                _make_dir(target, member.mode)
            elif member.isfile():
                source = tf.extractfile(member)
                if source is None:
                    continue
                with source:
                    _write_file(target, source, member.mode)
            else:
                logger.debug("skipping tar entry %s (type=%r)", member.name, member.type)
    return root_name


def _extract_zip(archive_path: Path, destination: Path) -> str | None:
    root_name: str | None = None
    with zipfile.ZipFile(archive_path) as zf:
        for info in zf.infolist():
            if root_name is None:
                root_name = _root_segment(info.filename)
            target = safe_member_path(destination, info.filename)
            mode = _zip_mode(info)
            if info.is_dir():
                _make_dir(target, mode)
            elif mode is not None and stat.S_ISLNK(info.external_attr >> 16):
                logger.debug("skipping zip symlink entry %s", info.filename)
            else:
                with zf.open(info) as source:
                    _write_file(target, source, mode)
    return root_name


def _zip_mode(info: zipfile.ZipInfo) -> int | None:
    mode = info.external_attr >> 16
    if info.create_system != 3 or mode == 0:
        return None
    return mode


def _make_dir(target: Path, mode: int | None) -> None:
    target.mkdir(parents=True, exist_ok=True)
    if mode is not None:
        os.chmod(target, (stat.S_IMODE(mode) | _OWNER_RWX))


def _write_file(target: Path, source: IO[bytes], mode: int | None) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    if target.exists() or target.is_symlink():
        target.unlink()
    with open(target, "wb") as out:
        shutil.copyfileobj(source, out, _COPY_CHUNK)
    if mode is not None:
        os.chmod(target, stat.S_IMODE(mode))
