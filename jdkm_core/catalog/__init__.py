"""Release catalog access for jdkm."""

from .client import AdoptiumClient, parse_release
from .resolver import JDK_IMAGE, ReleaseCatalog, find_artifact, select_artifact

__all__ = [
    "AdoptiumClient",
    "JDK_IMAGE",
    "ReleaseCatalog",
    "find_artifact",
    "parse_release",
    "select_artifact",
]
