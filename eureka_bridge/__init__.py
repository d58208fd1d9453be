"""Eureka registry adapter for container service-discovery bridges.

Purpose:
    Register, deregister and heartbeat discovered services against a
    Eureka-compatible registry over HTTP/JSON.

Call context:
    The host bridge populates an ``AdapterRegistry`` through
    ``register_eureka_factories`` (or calls ``bootstrap``, which also sets up
    logging) during startup and then drives the returned
    ``RegistryAdapter`` through its lifecycle calls.
"""

from eureka_bridge.adapters.api_errors import (
    RegistryClientError,
    RegistryError,
    RegistryServerError,
    RegistryTransportError,
)
from eureka_bridge.adapters.eureka_adapter import EurekaAdapter, EurekaAdapterFactory
from eureka_bridge.adapters.http_client import HttpConfig
from eureka_bridge.app.factories import AdapterRegistry, bootstrap, register_eureka_factories
from eureka_bridge.domain.instance import Instance, Port, instance_from_service
from eureka_bridge.domain.service import ServiceRecord

__version__ = "0.1.0"
__all__ = [
    "AdapterRegistry",
    "EurekaAdapter",
    "EurekaAdapterFactory",
    "HttpConfig",
    "Instance",
    "Port",
    "RegistryClientError",
    "RegistryError",
    "RegistryServerError",
    "RegistryTransportError",
    "ServiceRecord",
    "bootstrap",
    "instance_from_service",
    "register_eureka_factories",
]
