"""OS/architecture naming shared by catalog lookup, the store and activation."""

from __future__ import annotations

import platform

from .types import Platform

WINDOWS = "windows"
MAC = "mac"
LINUX = "linux"

_OS_NAMES = {
    "linux": LINUX,
    "windows": WINDOWS,
    "darwin": MAC,
}

_ARCH_NAMES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
}


def catalog_os(native: str) -> str:
    """Map a native OS identifier to catalog vocabulary, passing unknown names through."""
    return _OS_NAMES.get(native.strip().lower(), native)


def catalog_arch(native: str) -> str:
    """Map a native CPU identifier to catalog vocabulary, passing unknown names through."""
    return _ARCH_NAMES.get(native.strip().lower(), native)


def current_platform() -> Platform:
    return Platform(os=catalog_os(platform.system()), arch=catalog_arch(platform.machine()))


def is_windows(os_name: str) -> bool:
    return catalog_os(os_name) == WINDOWS


def is_mac(os_name: str) -> bool:
    return catalog_os(os_name) == MAC


def executable_name(name: str, os_name: str) -> str:
    return f"{name}.exe" if is_windows(os_name) else name
