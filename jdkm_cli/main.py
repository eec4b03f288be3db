"""Argument parsing and dispatch for the jdkm CLI."""

from __future__ import annotations

import logging
import sys
from argparse import ArgumentParser
from typing import Mapping, Sequence

from jdkm_core.config import load_config
from jdkm_core.errors import JdkmError

from . import __version__
from .commands import (
    CurrentCommand,
    DeactivateCommand,
    InstallCommand,
    JdkmCommand,
    ListCommand,
    ListRemoteCommand,
    UninstallCommand,
    UseCommand,
)

logger = logging.getLogger(__name__)

COMMANDS: tuple[type[JdkmCommand], ...] = (
    InstallCommand,
    UninstallCommand,
    ListCommand,
    ListRemoteCommand,
    UseCommand,
    DeactivateCommand,
    CurrentCommand,
)

_DESCRIPTION = """\
A cross-platform JDK version manager.

Installs JDKs from Eclipse Adoptium into ~/.jdks (or $JDKM_HOME) and switches
between them. 'use' and 'deactivate' print shell commands; evaluate them in
your shell, e.g. eval "$(jdkm use 21)".
"""


def build_parser(commands: Sequence[type[JdkmCommand]] = COMMANDS) -> ArgumentParser:
    parser = ArgumentParser(prog="jdkm", description=_DESCRIPTION)
    parser.add_argument("--version", action="version", version=f"jdkm {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging on stderr")
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.required = True
    for command_cls in commands:
        sub = subparsers.add_parser(command_cls.name, help=command_cls.help, description=command_cls.__doc__)
        command_cls.configure(sub)
        sub.set_defaults(command_cls=command_cls)
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(
    argv: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    commands: Sequence[type[JdkmCommand]] = COMMANDS,
) -> int:
    parser = build_parser(commands)
    args = parser.parse_args(argv)
    _configure_logging(bool(args.verbose))

    command_cls: type[JdkmCommand] = args.command_cls
    try:
        command = command_cls(load_config(environ))
        return command.run(args)
    except JdkmError as exc:
        logger.debug("command %s failed", command_cls.name, exc_info=True)
        print(f"[jdkm:{command_cls.name}] error: {exc}", file=sys.stderr)
        return 1
