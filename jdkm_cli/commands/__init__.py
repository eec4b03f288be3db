"""Built-in jdkm commands."""

from .base import JdkmCommand
from .deactivate import CurrentCommand, DeactivateCommand
from .install import InstallCommand
from .list_installed import ListCommand
from .list_remote import ListRemoteCommand
from .uninstall import UninstallCommand
from .use import UseCommand

__all__ = [
    "JdkmCommand",
    "CurrentCommand",
    "DeactivateCommand",
    "InstallCommand",
    "ListCommand",
    "ListRemoteCommand",
    "UninstallCommand",
    "UseCommand",
]
