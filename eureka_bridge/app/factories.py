"""Scheme-to-factory registry for registry adapters.

Nothing is registered on import. The host process builds an
``AdapterRegistry`` and calls ``register_eureka_factories`` (and the
equivalents of any other backends) explicitly while it initializes.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional
from urllib.parse import urlsplit

from eureka_bridge.adapters.eureka_adapter import (
    EUREKA_SCHEME,
    EUREKA_TLS_SCHEME,
    EurekaAdapterFactory,
)
from eureka_bridge.adapters.http_client import HttpConfig
from eureka_bridge.domain.ports import AdapterFactory, RegistryAdapter
from eureka_bridge.utils.logging import configure_logging

log = logging.getLogger(__name__)


class UnknownSchemeError(KeyError):
    """No factory is registered for the requested URI scheme."""


class AdapterRegistry:
    """Maps URI schemes to the factories that understand them."""

    def __init__(self) -> None:
        self._factories: Dict[str, AdapterFactory] = {}

    def register(self, factory: AdapterFactory, scheme: str) -> None:
        key = scheme.strip().lower()
        if not key:
            raise ValueError("Scheme must be a non-empty string.")
        if key in self._factories:
            log.warning("Replacing adapter factory for scheme '%s'", key)
        self._factories[key] = factory

    def factory_for(self, scheme: str) -> AdapterFactory:
        try:
            return self._factories[scheme.lower()]
        except KeyError as exc:
            raise UnknownSchemeError(scheme) from exc

    def schemes(self) -> List[str]:
        return sorted(self._factories)

    def new_adapter(self, uri: str) -> RegistryAdapter:
        """Build an adapter for ``uri`` using the factory for its scheme.

        Raises:
            UnknownSchemeError: If the scheme has no registered factory.
        """
        scheme = urlsplit(uri).scheme
        return self.factory_for(scheme).new(uri)


def register_eureka_factories(
    registry: AdapterRegistry, config: Optional[HttpConfig] = None
) -> EurekaAdapterFactory:
    """Register one shared Eureka factory under ``eureka`` and ``eureka-tls``."""
    factory = EurekaAdapterFactory(config)
    registry.register(factory, EUREKA_SCHEME)
    registry.register(factory, EUREKA_TLS_SCHEME)
    return factory


def bootstrap(
    config: Optional[HttpConfig] = None,
    *,
    log_level: int | str | None = None,
) -> AdapterRegistry:
    """One-call host initialization: logging plus a registry with Eureka wired in.

    Args:
        config: Transport settings shared by every Eureka adapter.
        log_level: Level for ``eureka_bridge`` loggers; environment overrides
            from ``eureka_bridge.utils.logging`` take precedence.

    Returns:
        Populated ``AdapterRegistry``.
    """
    level = configure_logging(log_level)
    registry = AdapterRegistry()
    register_eureka_factories(registry, config)
    log.debug(
        "Adapter registry ready for %s (log level %s)",
        registry.schemes(),
        logging.getLevelName(level),
    )
    return registry
