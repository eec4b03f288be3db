# jdkm_cli/commands/use.py
from __future__ import annotations

from argparse import ArgumentParser
from typing import Any

from jdkm_core.activation import ActivationPlanner, render
from jdkm_core.errors import NotInstalledError

from .base import JdkmCommand, add_shell_argument


class UseCommand(JdkmCommand):
    """Print the shell commands that make an installed JDK the active one.

    Intended for ``eval "$(jdkm use 21)"`` or ``jdkm use 21 --shell powershell | Invoke-Expression``.
    """

    name = "use"
    help = "Switch to an installed JDK version"

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        parser.add_argument("version", help="Installed version id")
        add_shell_argument(parser)

    def run(self, argv: Any) -> int:
        version = argv.version
        store = self.store()
        if not store.is_installed(version):
            raise NotInstalledError(f"JDK {version} is not installed. Install it with: jdkm install {version}")

        target = store.resolve_path(version)
        planner = ActivationPlanner(store.pointer_path, store.os_name)
        if store.current_active() == version:
            self.note(f"JDK {version} is already active; re-applying environment.")

        steps = planner.plan_activation(target, label=version)
        for line in render(steps, argv.shell or planner.shell):
            print(line)
        return 0
