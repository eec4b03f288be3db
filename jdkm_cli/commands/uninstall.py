# jdkm_cli/commands/uninstall.py
from __future__ import annotations

from argparse import ArgumentParser
from typing import Any

from .base import JdkmCommand


class UninstallCommand(JdkmCommand):
    """Remove an installed JDK directory."""

    name = "uninstall"
    help = "Uninstall a JDK version"

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        parser.add_argument("version", help="Installed version id, exactly as used with install")

    def run(self, argv: Any) -> int:
        version = argv.version
        store = self.store()
        was_active = store.current_active() == version

        removed = store.uninstall(version)
        self.info(f"removed JDK {version} from {removed}")
        if was_active:
            # uninstall never touches the pointer
            self.note(f"'{store.pointer_name}' still points at JDK {version}; run 'jdkm deactivate' or 'jdkm use <version>'.")
        return 0
