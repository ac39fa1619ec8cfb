"""Logging configuration for lmmvol.

The package itself never installs handlers. Applications call
:func:`init_environment` once to route the ``lmmvol`` loggers (parameter
updates, ignored updates on non-calibrateable models) to the root handler.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ml_collections import ConfigDict

__all__ = ["ConfigDict", "get_config", "get_default_config", "init_environment"]

PACKAGE_LOGGER = "lmmvol"


def get_default_config() -> ConfigDict:
    """Default logging setup: INFO on the root, package records at the same level."""
    cfg = ConfigDict()

    cfg.logging = ConfigDict()
    cfg.logging.level = "INFO"
    cfg.logging.format = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    cfg.logging.datefmt = "%Y-%m-%d %H:%M:%S"
    cfg.logging.force = True
    # Level of the ``lmmvol`` logger; DEBUG shows every parameter update.
    cfg.logging.package_level = "INFO"

    return cfg


def get_config(overrides: Mapping[str, Any] | None = None) -> ConfigDict:
    """Default configuration with ``overrides`` merged in section by section."""
    cfg = get_default_config()
    for section, values in (overrides or {}).items():
        if isinstance(values, Mapping) and section in cfg:
            cfg[section].update(values)
        else:
            cfg[section] = values
    return cfg


def init_environment(config: ConfigDict | Mapping[str, Any] | None = None) -> ConfigDict:
    """Configure logging for applications using lmmvol and return the resolved config."""
    if isinstance(config, ConfigDict):
        cfg = get_config(config.to_dict())
    else:
        cfg = get_config(config)

    logging_cfg = cfg.logging
    logging.basicConfig(
        level=_resolve_level(logging_cfg.level),
        format=logging_cfg.format,
        datefmt=logging_cfg.datefmt,
        force=logging_cfg.force,
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(_resolve_level(logging_cfg.package_level))
    return cfg


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level {level!r}")
    return resolved
