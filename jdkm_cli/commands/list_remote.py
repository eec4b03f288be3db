# jdkm_cli/commands/list_remote.py
from __future__ import annotations

import json
from argparse import ArgumentParser
from typing import Any

from jdkm_core.catalog import AdoptiumClient
from jdkm_core.types import ReleaseDescriptor
from jdkm_core.versions import format_release_version, is_lts

from .base import JdkmCommand, add_format_argument


def filter_releases(
    releases: list[ReleaseDescriptor],
    *,
    show_all: bool = False,
    lts_only: bool = False,
) -> list[ReleaseDescriptor]:
    out = [
        release
        for release in releases
        if (show_all or not release.prerelease) and (not lts_only or is_lts(release.major))
    ]
    return sorted(out, key=lambda release: (release.major, release.minor, release.security), reverse=True)


class ListRemoteCommand(JdkmCommand):
    """List JDK versions available from Eclipse Adoptium."""

    name = "list-remote"
    help = "List available JDK versions from Adoptium"

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        parser.add_argument("--all", dest="show_all", action="store_true", help="Include pre-release versions")
        parser.add_argument("--lts", dest="lts_only", action="store_true", help="Show only LTS versions")
        add_format_argument(parser)

    def run(self, argv: Any) -> int:
        client = AdoptiumClient(self.config.catalog)
        releases = filter_releases(
            client.list_releases(),
            show_all=bool(getattr(argv, "show_all", False)),
            lts_only=bool(getattr(argv, "lts_only", False)),
        )

        if getattr(argv, "format", "text") == "json":
            data = [
                {
                    "version": format_release_version(release),
                    "major": release.major,
                    "lts": is_lts(release.major),
                    "prerelease": release.prerelease,
                }
                for release in releases
            ]
            print(json.dumps({"ok": True, "releases": data}, indent=2))
            return 0

        if not releases:
            print("No JDK versions available.")
            return 0

        print("Available JDK versions:")
        for release in releases:
            markers = []
            if is_lts(release.major):
                markers.append("LTS")
            if release.prerelease:
                markers.append("pre-release")
            suffix = f" ({', '.join(markers)})" if markers else ""
            print(f"  {format_release_version(release)}{suffix}")

        print("\nUse 'jdkm install <version>' to install a specific version.")
        if not argv.show_all:
            print("Use 'jdkm list-remote --all' to see all versions including pre-releases.")
        if not argv.lts_only:
            print("Use 'jdkm list-remote --lts' to see only LTS versions.")
        return 0
