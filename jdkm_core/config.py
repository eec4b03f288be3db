"""Configuration: environment variables plus an optional ``config.toml`` in the JDKs root."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping

from .types import CatalogClientConfig

logger = logging.getLogger(__name__)

HOME_ENV = "JDKM_HOME"
API_BASE_ENV = "JDKM_API_BASE"
JAVA_HOME_ENV = "JAVA_HOME"
CONFIG_FILENAME = "config.toml"
DEFAULT_ROOT_NAME = ".jdks"


@dataclass(frozen=True)
class JdkmConfig:
    root: Path
    catalog: CatalogClientConfig = field(default_factory=CatalogClientConfig)
    java_home: str = ""


def default_root(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    raw = str(env.get(HOME_ENV) or "").strip()
    if raw:
        return Path(raw).expanduser().absolute()
    return Path.home() / DEFAULT_ROOT_NAME


def _load_toml(root: Path) -> dict[str, Any]:
    config_path = root / CONFIG_FILENAME
    if not config_path.exists():
        return {}
    try:
        return tomllib.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("ignoring unreadable config %s: %s", config_path, exc)
        return {}


def _section(payload: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = payload.get(name)
    return section if isinstance(section, Mapping) else {}


def _coerce(section: Mapping[str, Any], key: str, convert: Callable[[Any], Any], default: Any, where: str) -> Any:
    if key not in section:
        return default
    value = section[key]
    try:
        return convert(value)
    except (TypeError, ValueError) as exc:
        logger.warning("ignoring invalid %s.%s=%r in %s: %s", where, key, value, CONFIG_FILENAME, exc)
        return default


def load_config(environ: Mapping[str, str] | None = None) -> JdkmConfig:
    env = os.environ if environ is None else environ
    root = default_root(env)
    payload = _load_toml(root)
    catalog = _section(payload, "catalog")
    download = _section(payload, "download")

    defaults = CatalogClientConfig()
    api_base = str(env.get(API_BASE_ENV) or "").strip()
    if not api_base:
        api_base = _coerce(catalog, "api_base", _text, defaults.api_base, "catalog") or defaults.api_base
    page_size = _coerce(catalog, "page_size", int, defaults.page_size, "catalog")
    return JdkmConfig(
        root=root,
        catalog=CatalogClientConfig(
            api_base=api_base.rstrip("/"),
            timeout_seconds=_coerce(catalog, "timeout_seconds", float, defaults.timeout_seconds, "catalog"),
            download_timeout_seconds=_coerce(
                download, "timeout_seconds", float, defaults.download_timeout_seconds, "download"
            ),
            page_size=max(page_size, 1),
            verify_checksum=_coerce(download, "verify_checksum", _flag, defaults.verify_checksum, "download"),
        ),
        java_home=str(env.get(JAVA_HOME_ENV) or "").strip(),
    )


def _text(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value.strip()


def _flag(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean, got {type(value).__name__}")
    return value
