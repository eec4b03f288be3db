from __future__ import annotations

import errno
import json
import os
from pathlib import Path

import pytest

from conftest import build_jdk_tree, copying_downloader, make_artifact
from jdkm_core.errors import (
    CatalogError,
    InvalidVersionError,
    NotInstalledError,
    VerificationError,
)
from jdkm_core.install_state import install_record_path
from jdkm_core.store import InstallationStore
from jdkm_core.types import Artifact, ReleaseDescriptor


def _store(tmp_path: Path, os_name: str = "linux") -> InstallationStore:
    store = InstallationStore(tmp_path / ".jdks", os_name=os_name, temp_dir=_temp_parent(tmp_path))
    store.ensure_root()
    return store


def _temp_parent(tmp_path: Path) -> Path:
    parent = tmp_path / "tmp"
    parent.mkdir(exist_ok=True)
    return parent


def _make_bin(version_dir: Path, *tools: str, mode: int = 0o755) -> None:
    bin_dir = version_dir / "bin"
    bin_dir.mkdir(parents=True, exist_ok=True)
    for tool in tools:
        path = bin_dir / tool
        path.write_text("#!/bin/sh\n", encoding="utf-8")
        path.chmod(mode)


def test_root_is_created_owner_only(tmp_path: Path) -> None:
    store = InstallationStore(tmp_path / "nested" / ".jdks", os_name="linux")
    store.ensure_root()
    store.ensure_root()
    assert store.root.is_dir()
    if os.name == "posix":
        assert (store.root.stat().st_mode & 0o077) == 0


def test_is_installed_requires_java_and_javac(tmp_path: Path) -> None:
    store = _store(tmp_path)
    version_dir = store.root / "21"
    version_dir.mkdir()
    assert not store.is_installed("21")

    _make_bin(version_dir, "java")
    assert not store.is_installed("21")

    _make_bin(version_dir, "javac")
    assert store.is_installed("21")


def test_non_executable_tools_do_not_count(tmp_path: Path) -> None:
    store = _store(tmp_path)
    _make_bin(store.root / "17", "java", "javac", mode=0o644)
    if os.name == "posix":
        assert not store.is_installed("17")


def test_windows_layout_uses_exe_suffix(tmp_path: Path) -> None:
    store = _store(tmp_path, os_name="windows")
    _make_bin(store.root / "17", "java", "javac")
    assert not store.is_installed("17")
    _make_bin(store.root / "17", "java.exe", "javac.exe")
    assert store.is_installed("17")


def test_mac_bundle_layout_resolves_contents_home(tmp_path: Path) -> None:
    store = _store(tmp_path, os_name="mac")
    home = store.root / "21" / "Contents" / "Home"
    _make_bin(home, "java", "javac")
    assert store.is_installed("21")
    assert store.resolve_path("21") == home


def test_list_installed_skips_pointer_state_and_incomplete_dirs(tmp_path: Path) -> None:
    store = _store(tmp_path)
    _make_bin(store.root / "17", "java", "javac")
    _make_bin(store.root / "21.0", "java", "javac")
    _make_bin(store.root / "11", "java")
    (store.root / "empty").mkdir()
    (store.root / "state" / "install").mkdir(parents=True)
    (store.root / "notes.txt").write_text("x", encoding="utf-8")
    os.symlink(store.root / "17", store.pointer_path)

    names = sorted(item.version_id for item in store.list_installed())
    assert names == ["17", "21.0"]


def test_version_ids_are_not_normalised(tmp_path: Path) -> None:
    store = _store(tmp_path)
    _make_bin(store.root / "21", "java", "javac")
    assert store.is_installed("21")
    assert not store.is_installed("21.0")


@pytest.mark.parametrize("version_id", ["", "..", "../17", "a/b", "current", "state", ".hidden"])
def test_version_ids_cannot_escape_root(tmp_path: Path, version_id: str) -> None:
    store = _store(tmp_path)
    with pytest.raises(InvalidVersionError):
        store.version_path(version_id)


def test_resolve_path_requires_valid_jdk(tmp_path: Path) -> None:
    store = _store(tmp_path)
    (store.root / "17").mkdir()
    with pytest.raises(NotInstalledError):
        store.resolve_path("17")
    _make_bin(store.root / "17", "java", "javac")
    assert store.resolve_path("17") == store.root / "17"


def test_current_active_without_pointer(tmp_path: Path) -> None:
    assert _store(tmp_path).current_active() == ""


def test_current_active_ignores_regular_file(tmp_path: Path) -> None:
    store = _store(tmp_path)
    store.pointer_path.write_text(str(store.root / "17"), encoding="utf-8")
    assert store.current_active() == ""


def test_current_active_ignores_real_directory(tmp_path: Path) -> None:
    store = _store(tmp_path)
    _make_bin(store.pointer_path, "java", "javac")
    assert store.current_active() == ""


def test_current_active_ignores_target_outside_root(tmp_path: Path) -> None:
    store = _store(tmp_path)
    foreign = tmp_path / "elsewhere" / "17"
    _make_bin(foreign, "java", "javac")
    os.symlink(foreign, store.pointer_path)
    assert store.current_active() == ""


def test_current_active_rejects_dotdot_escape(tmp_path: Path) -> None:
    store = _store(tmp_path)
    os.symlink(os.path.join(str(store.root), "..", "elsewhere"), store.pointer_path)
    assert store.current_active() == ""


def test_current_active_returns_first_segment(tmp_path: Path) -> None:
    store = _store(tmp_path)
    _make_bin(store.root / "17", "java", "javac")
    os.symlink(store.root / "17", store.pointer_path)
    assert store.current_active() == "17"


def test_current_active_handles_relative_link(tmp_path: Path) -> None:
    store = _store(tmp_path)
    _make_bin(store.root / "21" / "Contents" / "Home", "java", "javac")
    os.symlink(os.path.join("21", "Contents", "Home"), store.pointer_path)
    assert store.current_active() == "21"


def test_install_then_noop_then_force(tmp_path: Path, jdk_archive) -> None:
    store = _store(tmp_path)
    archive = jdk_archive()
    calls: list[Artifact] = []
    downloader = copying_downloader(archive, calls)
    artifact = make_artifact(archive.name)
    release = ReleaseDescriptor(major=17, minor=0, security=8, release_name="jdk-17.0.8+7", artifacts=(artifact,))

    first = store.install("17", artifact, downloader=downloader, release=release)
    assert not first.skipped
    assert not first.replaced
    assert store.is_installed("17")
    assert [item.version_id for item in store.list_installed()] == ["17"]
    assert (store.root / "17" / "release").exists()

    second = store.install("17", artifact, downloader=downloader)
    assert second.skipped
    assert len(calls) == 1

    (store.root / "17" / "marker").write_text("old", encoding="utf-8")
    third = store.install("17", artifact, downloader=downloader, force=True)
    assert third.replaced
    assert len(calls) == 2
    assert not (store.root / "17" / "marker").exists()
    assert store.is_installed("17")
    assert list((tmp_path / "tmp").iterdir()) == []


def test_install_writes_record(tmp_path: Path, jdk_archive) -> None:
    store = _store(tmp_path)
    archive = jdk_archive()
    artifact = make_artifact(archive.name, size=archive.stat().st_size)
    release = ReleaseDescriptor(major=17, minor=0, security=8, release_name="jdk-17.0.8+7")

    store.install("17.0.8", artifact, downloader=copying_downloader(archive), release=release)

    record = json.loads(install_record_path(store.root, "17.0.8").read_text(encoding="utf-8"))
    assert record["version"] == "17.0.8"
    assert record["file_name"] == archive.name
    assert record["release_name"] == "jdk-17.0.8+7"
    assert store.read_record("17.0.8")["url"] == artifact.url


def test_install_from_zip(tmp_path: Path, jdk_archive) -> None:
    store = _store(tmp_path)
    archive = jdk_archive(fmt="zip")
    store.install("21", make_artifact(archive.name), downloader=copying_downloader(archive))
    assert store.is_installed("21")


def test_install_rejects_jre_only_archive(tmp_path: Path, jdk_archive) -> None:
    store = _store(tmp_path)
    archive = jdk_archive(with_javac=False)

    with pytest.raises(VerificationError):
        store.install("17", make_artifact(archive.name), downloader=copying_downloader(archive))

    assert not (store.root / "17").exists()
    assert not install_record_path(store.root, "17").exists()
    assert list((tmp_path / "tmp").iterdir()) == []


def test_failed_download_leaves_no_trace(tmp_path: Path) -> None:
    store = _store(tmp_path)

    def _failing(artifact: Artifact, dest_dir: Path) -> Path:
        dest_dir.mkdir(parents=True, exist_ok=True)
        (dest_dir / "partial.tar.gz").write_bytes(b"\x1f\x8b")
        raise CatalogError("connection reset")

    with pytest.raises(CatalogError):
        store.install("17", make_artifact(), downloader=_failing)

    assert sorted(p.name for p in store.root.iterdir()) == []
    assert list((tmp_path / "tmp").iterdir()) == []


def test_force_install_replaces_incomplete_directory(tmp_path: Path, jdk_archive) -> None:
    store = _store(tmp_path)
    (store.root / "17").mkdir()
    (store.root / "17" / "junk").write_text("x", encoding="utf-8")
    archive = jdk_archive()

    result = store.install("17", make_artifact(archive.name), downloader=copying_downloader(archive))

    assert result.replaced
    assert not (store.root / "17" / "junk").exists()
    assert store.is_installed("17")


def test_uninstall_missing_version_fails(tmp_path: Path) -> None:
    store = _store(tmp_path)
    with pytest.raises(NotInstalledError):
        store.uninstall("17")


def test_uninstall_leaves_pointer_dangling(tmp_path: Path, jdk_archive) -> None:
    store = _store(tmp_path)
    archive = jdk_archive()
    store.install("17", make_artifact(archive.name), downloader=copying_downloader(archive))
    os.symlink(store.root / "17", store.pointer_path)

    store.uninstall("17")

    assert not (store.root / "17").exists()
    assert not install_record_path(store.root, "17").exists()
    assert store.pointer_path.is_symlink()
    assert store.current_active() == "17"
    assert store.list_installed() == []


def test_cross_device_install_stages_inside_root(
    tmp_path: Path, jdk_archive, monkeypatch: pytest.MonkeyPatch
) -> None:
    store = _store(tmp_path)
    archive = jdk_archive()
    real_rename = os.rename
    moves: list[tuple[Path, Path]] = []

    def _rename(src, dst):
        moves.append((Path(src), Path(dst)))
        if "extract" in Path(src).parts:
            raise OSError(errno.EXDEV, "Invalid cross-device link")
        return real_rename(src, dst)

    monkeypatch.setattr(os, "rename", _rename)
    store.install("17", make_artifact(archive.name), downloader=copying_downloader(archive))

    assert store.is_installed("17")
    assert moves[-1][0].name.startswith(".17.partial-")
    assert moves[-1][1] == store.root / "17"
    assert sorted(p.name for p in store.root.iterdir()) == ["17", "state"]


def test_prebuilt_tree_is_valid_jdk(tmp_path: Path) -> None:
    store = _store(tmp_path)
    tree = build_jdk_tree(store.root, "11")
    assert store.is_valid_jdk(tree)
    assert store.is_installed("11")


def test_list_installed_can_include_incomplete_dirs(tmp_path: Path) -> None:
    store = _store(tmp_path)
    _make_bin(store.root / "17", "java", "javac")
    _make_bin(store.root / "11", "java")

    assert [item.version_id for item in store.list_installed()] == ["17"]
    listed = {item.version_id: item.valid for item in store.list_installed(include_invalid=True)}
    assert listed == {"17": True, "11": False}
