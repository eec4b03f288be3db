"""On-disk layout of installed JDKs and the active pointer."""

from __future__ import annotations

import errno
import logging
import os
import shutil
import tempfile
import uuid
from pathlib import Path
from typing import Any, Callable

from .archive import extract_archive
from .errors import InstallError, InvalidVersionError, NotInstalledError, VerificationError
from .install_state import (
    STATE_DIR_NAME,
    build_install_record,
    read_install_record,
    remove_install_record,
    write_install_record,
)
from .platforms import current_platform, executable_name, is_mac, is_windows
from .types import Artifact, InstalledVersion, InstallResult, ReleaseDescriptor

logger = logging.getLogger(__name__)

POINTER_NAME = "current"
_ROOT_MODE = 0o700
_WINDOWS_EXTENDED_PREFIX = "\\\\?\\"

Downloader = Callable[[Artifact, Path], Path]


class InstallationStore:
    """Owns ``root``: one directory per installed version plus the ``current`` link.

    Version ids are the exact strings used at install time; ``"21"`` and
    ``"21.0"`` are different installations.
    """

    def __init__(
        self,
        root: Path | str,
        *,
        os_name: str | None = None,
        pointer_name: str = POINTER_NAME,
        temp_dir: Path | None = None,
    ) -> None:
        self.root = Path(root).expanduser().absolute()
        self.os_name = os_name or current_platform().os
        self.pointer_name = pointer_name
        self.temp_dir = temp_dir

    @property
    def pointer_path(self) -> Path:
        return self.root / self.pointer_name

    def ensure_root(self) -> Path:
        try:
            self.root.mkdir(mode=_ROOT_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise InstallError(f"failed to create JDKs directory {self.root}: {exc}") from exc
        return self.root

    def version_path(self, version_id: str) -> Path:
        name = (version_id or "").strip()
        if (
            not name
            or name != version_id
            or name in (os.curdir, os.pardir, self.pointer_name, STATE_DIR_NAME)
            or name.startswith(".")
            or "/" in name
            or "\\" in name
        ):
            raise InvalidVersionError(f"invalid version id: {version_id!r}")
        return self.root / name

    def java_home(self, version_dir: Path) -> Path:
        bundle_home = version_dir / "Contents" / "Home"
        if is_mac(self.os_name) and (bundle_home / "bin").is_dir():
            return bundle_home
        return version_dir

    def is_valid_jdk(self, version_dir: Path) -> bool:
        bin_dir = self.java_home(version_dir) / "bin"
        return all(
            self._is_executable(bin_dir / executable_name(tool, self.os_name))
            for tool in ("java", "javac")
        )

    def list_installed(self, *, include_invalid: bool = False) -> list[InstalledVersion]:
        """Version directories under the root; incomplete ones only with ``include_invalid``."""
        if not self.root.is_dir():
            return []
        out: list[InstalledVersion] = []
        for entry in self.root.iterdir():
            if entry.name in (self.pointer_name, STATE_DIR_NAME) or entry.name.startswith("."):
                continue
            if not entry.is_dir():
                continue
            valid = self.is_valid_jdk(entry)
            if valid or include_invalid:
                out.append(InstalledVersion(version_id=entry.name, path=entry, valid=valid))
        return out

    def is_installed(self, version_id: str) -> bool:
        path = self.version_path(version_id)
        return path.is_dir() and self.is_valid_jdk(path)

    def resolve_path(self, version_id: str) -> Path:
        path = self.version_path(version_id)
        if not (path.is_dir() and self.is_valid_jdk(path)):
            raise NotInstalledError(f"JDK {version_id} is not properly installed")
        return self.java_home(path)

    def read_record(self, version_id: str) -> dict[str, Any] | None:
        return read_install_record(self.root, version_id)

    def install(
        self,
        version_id: str,
        artifact: Artifact,
        *,
        downloader: Downloader,
        force: bool = False,
        release: ReleaseDescriptor | None = None,
    ) -> InstallResult:
        target = self.version_path(version_id)
        self.ensure_root()

        if not force and self.is_installed(version_id):
            logger.info("JDK %s already installed at %s", version_id, target)
            return InstallResult(version=InstalledVersion(version_id=version_id, path=target), skipped=True)

        replaced = target.exists() or target.is_symlink()
        if replaced:
            logger.info("removing existing installation %s", target)
            self._remove(target)

        with tempfile.TemporaryDirectory(prefix="jdkm-install-", dir=self.temp_dir) as tmpd:
            tmp = Path(tmpd)
            archive_path = downloader(artifact, tmp / "download")
            logger.info("extracting %s", archive_path.name)
            extracted = extract_archive(archive_path, tmp / "extract")
            if not extracted.is_dir():
                raise VerificationError(f"archive root {extracted.name!r} is not a directory")
            self._commit(extracted, target)

        if not self.is_valid_jdk(target):
            self._remove(target)
            raise VerificationError(f"JDK installation verification failed for {version_id}: missing bin/java or bin/javac")

        write_install_record(self.root, version_id, build_install_record(version_id, artifact, release))
        logger.info("installed JDK %s at %s", version_id, target)
        return InstallResult(
            version=InstalledVersion(version_id=version_id, path=target),
            replaced=replaced,
        )

    def uninstall(self, version_id: str) -> Path:
        target = self.version_path(version_id)
        if not (target.exists() or target.is_symlink()):
            raise NotInstalledError(f"JDK {version_id} is not installed at {target}")
        logger.info("uninstalling JDK %s from %s", version_id, target)
        self._remove(target)
        remove_install_record(self.root, version_id)
        return target

    def current_active(self) -> str:
        link = self.pointer_path
        if not _is_link(link):
            return ""
        try:
            raw = os.readlink(link)
        except OSError:
            return ""
        if raw.startswith(_WINDOWS_EXTENDED_PREFIX):
            raw = raw[len(_WINDOWS_EXTENDED_PREFIX):]
        target = Path(os.path.normpath(os.path.join(self.root, raw)))
        for base in self._root_variants():
            try:
                rel = target.relative_to(base)
            except ValueError:
                continue
            if not rel.parts or rel.parts[0] in (self.pointer_name, STATE_DIR_NAME):
                return ""
            return rel.parts[0]
        return ""

    def _root_variants(self) -> list[Path]:
        variants = [self.root]
        try:
            resolved = self.root.resolve()
        except OSError:
            return variants
        if resolved != self.root:
            variants.append(resolved)
        return variants

    def _commit(self, extracted: Path, target: Path) -> None:
        try:
            os.rename(extracted, target)
            return
        except OSError as exc:
            if exc.errno != errno.EXDEV:
                raise InstallError(f"failed to move JDK to installation directory {target}: {exc}") from exc

        # temp dir on another filesystem: copy next to the target, then rename
        staging = self.root / f".{target.name}.partial-{uuid.uuid4().hex[:8]}"
        logger.debug("cross-device move, staging %s via %s", target.name, staging)
        try:
            shutil.copytree(extracted, staging, symlinks=True)
            os.rename(staging, target)
        except OSError as exc:
            raise InstallError(f"failed to move JDK to installation directory {target}: {exc}") from exc
        finally:
            if staging.exists():
                shutil.rmtree(staging, ignore_errors=True)

    def _remove(self, path: Path) -> None:
        try:
            if path.is_symlink() or path.is_file():
                path.unlink()
            else:
                shutil.rmtree(path)
        except OSError as exc:
            raise InstallError(f"failed to remove {path}: {exc}") from exc

    def _is_executable(self, path: Path) -> bool:
        if not path.is_file():
            return False
        return is_windows(self.os_name) or os.access(path, os.X_OK)


def _is_link(path: Path) -> bool:
    if path.is_symlink():
        return True
    isjunction = getattr(os.path, "isjunction", None)
    return bool(isjunction and isjunction(path))
