# jdkm_cli/commands/install.py
from __future__ import annotations

from argparse import ArgumentParser
from typing import Any

from jdkm_core.catalog import AdoptiumClient, find_artifact
from jdkm_core.platforms import current_platform
from jdkm_core.versions import parse_version

from .base import JdkmCommand


def _human_size(size: int) -> str:
    if size <= 0:
        return "unknown size"
    return f"{size / (1024 * 1024):.1f} MB"


class InstallCommand(JdkmCommand):
    """Download a JDK from Eclipse Adoptium and install it under the JDKs root."""

    name = "install"
    help = "Install a JDK version (e.g. 21, 17.0.8)"

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        parser.add_argument("version", help="major[.minor[.security]]")
        parser.add_argument("-f", "--force", action="store_true", help="Force reinstall even if version exists")

    def run(self, argv: Any) -> int:
        version = argv.version
        spec = parse_version(version)
        store = self.store()

        if not argv.force and store.is_installed(version):
            self.info(f"JDK {version} is already installed.")
            self.info(f"use --force to reinstall or 'jdkm use {version}' to switch to it.")
            return 0

        self.info(f"installing JDK {version}...")
        client = AdoptiumClient(self.config.catalog)
        platform = current_platform()
        release, artifact = find_artifact(client, spec, platform)
        self.info(f"downloading {artifact.file_name} ({_human_size(artifact.size)})")

        result = store.install(
            version,
            artifact,
            downloader=client.download,
            force=bool(argv.force),
            release=release,
        )
        if result.skipped:
            self.info(f"JDK {version} is already installed.")
            return 0

        label = release.release_name or version
        verb = "reinstalled" if result.replaced else "installed"
        self.info(f"{verb} JDK {version} ({label})")
        self.info(f"dir={result.version.path}")
        self.info(f"use 'jdkm use {version}' to switch to this version.")
        return 0
