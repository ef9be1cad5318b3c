"""Runtime configuration for ctxfix - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from ctxfix.utils.logging import logger

CONFIG_FILE = ".ctxfix.json"

SHADOWING_MODES = ("ignore", "respect")

DEFAULTS = {
    "imports": {
        "deprecated": "golang.org/x/net/context",
        "standard": "context",
    },
    "signatures": {
        "context": ["context.Context"],
        "request": ["*http.Request"],
    },
    "target": {
        "package": "main",
    },
    "rewrite": {
        "shadowing": "ignore",
        "gofmt": False,
    },
    "timeouts": {
        "gofmt": 30,
    },
}


def _coerce_env(env_var: str, raw: str, default_value: Any) -> Any:
    """Convert an environment string to the type of the default it overrides."""
    if isinstance(default_value, bool):
        lowered = raw.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off", ""):
            return False
        raise ValueError(f"expected a boolean, got {raw!r}")
    if isinstance(default_value, int):
        return int(raw)
    if isinstance(default_value, list):
        return [v.strip() for v in raw.split(",") if v.strip()]
    return raw


def load_runtime_config(root: str | Path = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .ctxfix.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (CTXFIX_<SECTION>_<KEY>)
    2. <root>/.ctxfix.json
    3. Built-in defaults

    Args:
        root: Directory holding the optional config file

    Returns:
        Configuration dictionary with merged values

    Raises:
        ValueError: If rewrite.shadowing ends up outside SHADOWING_MODES
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / CONFIG_FILE
    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section, values in user.items():
                    if section not in cfg or not isinstance(values, dict):
                        logger.warning("Ignoring unknown config section {!r} in {}", section, path)
                        continue
                    for key, value in values.items():
                        if key not in cfg[section]:
                            logger.warning("Ignoring unknown config key {}.{}", section, key)
                        elif isinstance(value, type(cfg[section][key])):
                            cfg[section][key] = value
                        else:
                            logger.warning(
                                "Ignoring {}.{}: expected {}, got {}",
                                section,
                                key,
                                type(cfg[section][key]).__name__,
                                type(value).__name__,
                            )
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Could not load config file from {}: {}", path, e)
        logger.info("Continuing with default configuration")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"CTXFIX_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                value = os.environ[env_var]
                try:
                    cfg[section][key] = _coerce_env(env_var, value, cfg[section][key])
                except ValueError as e:
                    logger.warning(
                        "Invalid value for environment variable {}: '{}' - {}", env_var, value, e
                    )
                    logger.info("Using default value: {}", cfg[section][key])

    if cfg["rewrite"]["shadowing"] not in SHADOWING_MODES:
        raise ValueError(
            f"rewrite.shadowing must be one of {', '.join(SHADOWING_MODES)}, "
            f"got {cfg['rewrite']['shadowing']!r}"
        )

    return cfg


def apply_cli_overrides(
    cfg: dict[str, Any],
    package: str | None = None,
    shadowing: str | None = None,
    gofmt: bool | None = None,
) -> dict[str, Any]:
    """Apply command-line options on top of a loaded config (None means unset)."""
    if package is not None:
        cfg["target"]["package"] = package
    if shadowing is not None:
        if shadowing not in SHADOWING_MODES:
            raise ValueError(f"unknown shadowing mode {shadowing!r}")
        cfg["rewrite"]["shadowing"] = shadowing
    if gofmt is not None:
        cfg["rewrite"]["gofmt"] = gofmt
    return cfg
