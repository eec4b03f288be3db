"""Activation plans and their shell renderings.

A child process cannot change its parent shell's environment, so activating a JDK
is expressed as a list of :class:`PlanStep` values that the CLI renders as shell
text for the calling shell to ``eval`` (POSIX) or dot-source (PowerShell).
Nothing in this module touches the filesystem.
"""

from __future__ import annotations

import ntpath
import posixpath
import shlex
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .platforms import is_windows

JAVA_HOME = "JAVA_HOME"
SHELL_POSIX = "posix"
SHELL_POWERSHELL = "powershell"
SHELLS = (SHELL_POSIX, SHELL_POWERSHELL)


class StepKind(str, Enum):
    COMMENT = "comment"
    REMOVE_PATH = "remove-path"
    CREATE_LINK = "create-link"
    SET_ENV = "set-env"
    UNSET_ENV = "unset-env"
    PREPEND_PATH = "prepend-path"
    STRIP_PATH = "strip-path"


@dataclass(frozen=True)
class PlanStep:
    kind: StepKind
    operands: tuple[str, ...] = ()


class ActivationPlanner:
    def __init__(self, pointer_path: Path | str, os_name: str) -> None:
        self.pointer_path = str(pointer_path)
        self.os_name = os_name

    @property
    def shell(self) -> str:
        return SHELL_POWERSHELL if is_windows(self.os_name) else SHELL_POSIX

    @property
    def bin_path(self) -> str:
        joiner = ntpath.join if is_windows(self.os_name) else posixpath.join
        return joiner(self.pointer_path, "bin")

    def plan_activation(self, target: Path | str, *, label: str | None = None) -> list[PlanStep]:
        target = str(target)
        name = label or Path(target).name
        return [
            PlanStep(StepKind.COMMENT, (f"Commands to activate JDK {name}:",)),
            PlanStep(StepKind.REMOVE_PATH, (self.pointer_path,)),
            PlanStep(StepKind.CREATE_LINK, (self.pointer_path, target)),
            PlanStep(StepKind.SET_ENV, (JAVA_HOME, self.pointer_path)),
            PlanStep(StepKind.PREPEND_PATH, (self.bin_path,)),
        ]

    def plan_deactivation(self) -> list[PlanStep]:
        return [
            PlanStep(StepKind.COMMENT, ("Commands to clear active JDK environment:",)),
            PlanStep(StepKind.UNSET_ENV, (JAVA_HOME,)),
            PlanStep(StepKind.STRIP_PATH, (self.bin_path,)),
            PlanStep(StepKind.REMOVE_PATH, (self.pointer_path,)),
        ]

    def activation_commands(self, target: Path | str, *, label: str | None = None) -> list[str]:
        return render(self.plan_activation(target, label=label), self.shell)

    def deactivation_commands(self) -> list[str]:
        return render(self.plan_deactivation(), self.shell)


def render(steps: list[PlanStep], shell: str) -> list[str]:
    if shell == SHELL_POSIX:
        return render_posix(steps)
    if shell == SHELL_POWERSHELL:
        return render_powershell(steps)
    raise ValueError(f"unknown shell dialect: {shell!r}")


def render_posix(steps: list[PlanStep]) -> list[str]:
    lines: list[str] = []
    for step in steps:
        ops = step.operands
        if step.kind is StepKind.COMMENT:
            lines.append(f"# {ops[0]}")
        elif step.kind is StepKind.REMOVE_PATH:
            lines.append(f"rm -f {shlex.quote(ops[0])}")
        elif step.kind is StepKind.CREATE_LINK:
            lines.append(f"ln -s {shlex.quote(ops[1])} {shlex.quote(ops[0])}")
        elif step.kind is StepKind.SET_ENV:
            lines.append(f"export {ops[0]}={shlex.quote(ops[1])}")
        elif step.kind is StepKind.UNSET_ENV:
            lines.append(f"unset {ops[0]}")
        elif step.kind is StepKind.PREPEND_PATH:
            lines.append(f'export PATH={shlex.quote(ops[0])}:"$PATH"')
        elif step.kind is StepKind.STRIP_PATH:
            entry = _sed_escape(ops[0])
            script = shlex.quote(f"s|^{entry}:||;s|:{entry}:|:|g;s|:{entry}$||;s|^{entry}$||")
            lines.append(f"export PATH=\"$(printf '%s' \"$PATH\" | sed -e {script})\"")
        else:
            raise ValueError(f"unsupported plan step: {step.kind}")
    return lines


def render_powershell(steps: list[PlanStep]) -> list[str]:
    lines: list[str] = []
    for step in steps:
        ops = step.operands
        if step.kind is StepKind.COMMENT:
            lines.append(f"# {ops[0]}")
        elif step.kind is StepKind.REMOVE_PATH:
            lines.append(f"cmd /C rmdir {_ps_quote(ops[0])} 2>$null")
        elif step.kind is StepKind.CREATE_LINK:
            lines.append(f"New-Item -ItemType Junction -Path {_ps_quote(ops[0])} -Target {_ps_quote(ops[1])} | Out-Null")
        elif step.kind is StepKind.SET_ENV:
            lines.append(f"$env:{ops[0]} = {_ps_quote(ops[1])}")
        elif step.kind is StepKind.UNSET_ENV:
            lines.append(f"Remove-Item Env:{ops[0]} -ErrorAction SilentlyContinue")
        elif step.kind is StepKind.PREPEND_PATH:
            lines.append(f'$env:PATH = {_ps_quote(ops[0] + ";")} + $env:PATH')
        elif step.kind is StepKind.STRIP_PATH:
            lines.append(
                f"$env:PATH = (($env:PATH -split ';') | Where-Object {{ $_ -ne {_ps_quote(ops[0])} }}) -join ';'"
            )
        else:
            raise ValueError(f"unsupported plan step: {step.kind}")
    return lines


def _sed_escape(value: str) -> str:
    out = []
    for ch in value:
        if ch in "\\|&.*[]^$":
            out.append("\\" + ch)
        else:
            out.append(ch)
    return "".join(out)


def _ps_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"
