from __future__ import annotations

import os
import tarfile
import zipfile
from pathlib import Path
from typing import Callable

import pytest

from jdkm_core.types import Artifact


def build_jdk_tree(base: Path, name: str = "jdk-17.0.8+7", *, with_javac: bool = True) -> Path:
    root = base / name
    bin_dir = root / "bin"
    bin_dir.mkdir(parents=True, exist_ok=True)
    tools = ["java", "javac"] if with_javac else ["java"]
    for tool in tools:
        exe = bin_dir / tool
        exe.write_text("#!/bin/sh\necho fake\n", encoding="utf-8")
        exe.chmod(0o755)
    (root / "release").write_text('JAVA_VERSION="17.0.8"\n', encoding="utf-8")
    return root


def pack_tar_gz(src_root: Path, out_path: Path) -> Path:
    with tarfile.open(out_path, "w:gz") as tf:
        tf.add(src_root, arcname=src_root.name)
    return out_path


def pack_zip(src_root: Path, out_path: Path) -> Path:
    with zipfile.ZipFile(out_path, "w") as zf:
        zf.write(src_root, arcname=src_root.name)
        for dirpath, dirnames, filenames in os.walk(src_root):
            for name in sorted(dirnames + filenames):
                path = Path(dirpath) / name
                zf.write(path, arcname=path.relative_to(src_root.parent).as_posix())
    return out_path


@pytest.fixture()
def jdk_archive(tmp_path: Path) -> Callable[..., Path]:
    def _make(name: str = "jdk-17.0.8+7", *, with_javac: bool = True, fmt: str = "tar.gz") -> Path:
        staging = tmp_path / "staging" / fmt
        src = build_jdk_tree(staging, name, with_javac=with_javac)
        out_dir = tmp_path / "archives"
        out_dir.mkdir(parents=True, exist_ok=True)
        suffix = "_javac" if with_javac else "_jre"
        if fmt == "zip":
            return pack_zip(src, out_dir / f"{name}{suffix}.zip")
        return pack_tar_gz(src, out_dir / f"{name}{suffix}.tar.gz")

    return _make


def make_artifact(file_name: str = "OpenJDK17U-jdk_x64_linux_hotspot_17.0.8_7.tar.gz", **overrides) -> Artifact:
    values = {
        "os": "linux",
        "architecture": "x64",
        "image_type": "jdk",
        "url": f"https://example.invalid/{file_name}",
        "file_name": file_name,
        "size": 0,
        "checksum": None,
    }
    values.update(overrides)
    return Artifact(**values)


def copying_downloader(archive: Path, calls: list[Artifact] | None = None):
    def _download(artifact: Artifact, dest_dir: Path) -> Path:
        if calls is not None:
            calls.append(artifact)
        dest_dir.mkdir(parents=True, exist_ok=True)
        target = dest_dir / archive.name
        target.write_bytes(archive.read_bytes())
        return target

    return _download
