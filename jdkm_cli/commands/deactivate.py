# jdkm_cli/commands/deactivate.py
from __future__ import annotations

from argparse import ArgumentParser
from typing import Any

from jdkm_core.activation import ActivationPlanner, render

from .base import JdkmCommand, add_shell_argument


class DeactivateCommand(JdkmCommand):
    """Print the shell commands that clear JAVA_HOME and drop the active pointer."""

    name = "deactivate"
    help = "Clear the active JDK from the environment"

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        add_shell_argument(parser)

    def run(self, argv: Any) -> int:
        store = self.store()
        planner = ActivationPlanner(store.pointer_path, store.os_name)
        for line in render(planner.plan_deactivation(), argv.shell or planner.shell):
            print(line)
        return 0


class CurrentCommand(JdkmCommand):
    """Print the active version id, or nothing when no JDK is active."""

    name = "current"
    help = "Show the active JDK version"

    def run(self, argv: Any) -> int:
        current = self.store().current_active()
        if current:
            print(current)
        return 0
