from __future__ import annotations

import sys
from argparse import ArgumentParser
from typing import Any

from jdkm_core.activation import SHELLS
from jdkm_core.config import JdkmConfig
from jdkm_core.store import InstallationStore


class JdkmCommand:
    """Base class for CLI commands: ``configure`` adds arguments, ``run`` returns an exit code."""

    name: str = ""
    help: str = ""

    def __init__(self, config: JdkmConfig) -> None:
        self.config = config

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        return None

    def run(self, argv: Any) -> int:
        raise NotImplementedError

    def store(self) -> InstallationStore:
        return InstallationStore(self.config.root)

    def info(self, message: str) -> None:
        print(f"[jdkm:{self.name}] {message}")

    def note(self, message: str) -> None:
        print(f"[jdkm:{self.name}] {message}", file=sys.stderr)


def add_format_argument(parser: ArgumentParser) -> None:
    parser.add_argument("--format", choices=["text", "json"], default="text")


def add_shell_argument(parser: ArgumentParser) -> None:
    parser.add_argument(
        "--shell",
        choices=list(SHELLS),
        default=None,
        help="Shell dialect to emit (default: powershell on Windows, posix elsewhere)",
    )
