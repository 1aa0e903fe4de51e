"""
Configuration Loader (``cost_config.loader``).

Responsibility
--------------
Builds a ``CostTrackerConfig`` from three layers, later layers winning:

1. dataclass defaults,
2. a YAML file (``MEGACOST_CONFIG`` or an explicit path),
3. ``MEGACOST_<FIELD>`` environment variables.

Failure modes
-------------
Every failure surfaces as ``ConfigurationError``: an unreadable or
missing file, malformed YAML, a top-level document that is not a mapping,
unknown keys, and values of the wrong type or outside their allowed set.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from cost_config.schema import CostTrackerConfig
from cost_kernel.exceptions import ConfigurationError
from cost_kernel.logging_config import get_logger

logger = get_logger("config.loader")

ENV_PREFIX = "MEGACOST_"
CONFIG_PATH_ENV = "MEGACOST_CONFIG"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML file and return its contents as a dict.

    Raises:
        ConfigurationError: if the file cannot be read, is not valid YAML,
            or does not hold a mapping.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigurationError(str(path), f"cannot read file: {exc.strerror or exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(str(path), f"invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(str(path), "top-level YAML must be a mapping")
    return data


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(name, f"expected a boolean, got '{raw}'")


def env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``MEGACOST_<FIELD>`` overrides for known config fields."""
    overrides: dict[str, Any] = {}
    for name in CostTrackerConfig.field_names():
        raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is None:
            continue
        if name == "seed_demo_data":
            overrides[name] = _parse_bool(name, raw)
        else:
            overrides[name] = raw
    return overrides


def load_config(
    path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> CostTrackerConfig:
    """
    Resolve the active configuration.

    Args:
        path: YAML file to read.  Defaults to ``$MEGACOST_CONFIG`` when set;
            with neither, only defaults and environment apply.
        environ: Environment mapping (defaults to ``os.environ``).
    """
    env = os.environ if environ is None else environ
    data: dict[str, Any] = {}

    source = path or env.get(CONFIG_PATH_ENV)
    if source:
        data.update(load_yaml_file(Path(source)))

    overrides = env_overrides(env)
    data.update(overrides)

    config = CostTrackerConfig.from_dict(data)
    logger.info(
        "config_loaded",
        extra={
            "config_path": str(source) if source else None,
            "env_overrides": sorted(overrides),
            "namespace": config.namespace,
            "insight_model": config.insight_model,
        },
    )
    return config
