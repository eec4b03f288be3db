# jdkm_cli/commands/list_installed.py
from __future__ import annotations

import json
import os
from argparse import ArgumentParser
from typing import Any

from .base import JdkmCommand, add_format_argument


class ListCommand(JdkmCommand):
    """List JDKs installed under the JDKs root, marking the active one."""

    name = "list"
    help = "List installed JDK versions"

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        parser.add_argument(
            "--all",
            dest="include_invalid",
            action="store_true",
            help="Also show incomplete version directories (missing java or javac)",
        )
        add_format_argument(parser)

    def run(self, argv: Any) -> int:
        store = self.store()
        include_invalid = bool(getattr(argv, "include_invalid", False))
        installed = sorted(store.list_installed(include_invalid=include_invalid), key=lambda item: item.version_id)
        current = store.current_active()
        java_home = self.config.java_home

        if getattr(argv, "format", "text") == "json":
            payload = {
                "ok": True,
                "root": str(store.root),
                "current": current or None,
                "java_home": java_home or None,
                "versions": [
                    {
                        "version": item.version_id,
                        "path": str(item.path),
                        "active": item.version_id == current,
                        "valid": item.valid,
                        "record": store.read_record(item.version_id),
                    }
                    for item in installed
                ],
            }
            print(json.dumps(payload, indent=2))
            return 0

        if not installed:
            print("No JDK versions installed.")
            print("Install a JDK version with: jdkm install <version>")
            return 0

        print("Installed JDK versions:")
        for item in installed:
            marker = "* " if item.version_id == current else "  "
            suffix = "" if item.valid else " (incomplete)"
            print(f"{marker}{item.version_id}{suffix}")

        if current:
            print(f"\nCurrent: {current}")
        if java_home and not _is_within(java_home, str(store.root)):
            print(f"JAVA_HOME={java_home} (not managed by jdkm)")
        return 0


def _is_within(path: str, root: str) -> bool:
    path = os.path.normpath(path)
    root = os.path.normpath(root)
    return path == root or path.startswith(root.rstrip(os.sep) + os.sep)
