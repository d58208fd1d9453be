"""Logging setup for hosts that embed the registry adapter.

Only the ``eureka_bridge`` logger tree and the ``urllib3`` connection-pool
logger are touched; the host's root logger configuration is left alone.

Environment overrides:
  - EUREKA_BRIDGE_LOG_LEVEL: explicit level (name or number) for ``eureka_bridge``
  - EUREKA_BRIDGE_DEBUG: truthy -> DEBUG for ``eureka_bridge`` *and* ``urllib3``
"""
from __future__ import annotations

import logging
import os
from typing import Optional

PACKAGE_LOGGER = "eureka_bridge"
TRANSPORT_LOGGER = "urllib3"
LEVEL_ENV_VAR = "EUREKA_BRIDGE_LOG_LEVEL"
DEBUG_ENV_VAR = "EUREKA_BRIDGE_DEBUG"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_level(value: int | str | None, fallback: int = logging.INFO) -> int:
    if value is None:
        return fallback
    if isinstance(value, int):
        return value
    text = value.strip()
    if text.isdigit():
        return int(text)
    candidate = logging.getLevelName(text.upper())
    # getLevelName maps unknown names to "Level X" strings
    return candidate if isinstance(candidate, int) else fallback


def debug_forced() -> bool:
    value = os.getenv(DEBUG_ENV_VAR)
    return value is not None and value.strip().lower() in {"1", "true", "yes", "on"}


def configure_logging(
    level: int | str | None = None,
    *,
    transport_level: int = logging.WARNING,
) -> int:
    """Set levels for the adapter loggers and quiet per-request pool chatter.

    Args:
        level: Level for ``eureka_bridge.*``; the environment wins over it.
        transport_level: Level for ``urllib3`` (connection reuse/retry lines).

    Returns:
        Effective level applied to the ``eureka_bridge`` logger.

    Side Effects:
        Adds a stream handler to ``eureka_bridge`` when neither it nor the
        root logger has one, so adapter warnings are not lost.
    """
    effective = parse_level(level)
    env_level = os.getenv(LEVEL_ENV_VAR)
    if env_level:
        effective = parse_level(env_level, effective)
    elif debug_forced():
        effective = logging.DEBUG

    package_log = logging.getLogger(PACKAGE_LOGGER)
    package_log.setLevel(effective)
    if not package_log.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        package_log.addHandler(handler)

    logging.getLogger(TRANSPORT_LOGGER).setLevel(
        logging.DEBUG if debug_forced() else transport_level
    )
    return effective
