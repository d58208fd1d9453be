"""``RegistryAdapter`` implementation backed by a Eureka registry.

Dependencies:
    - ``EurekaClient`` for the wire calls.
    - ``instance_from_service`` to derive ``(app, id)`` and the payload.

Call context:
    - Built by ``EurekaAdapterFactory.new`` from a ``eureka://`` or
      ``eureka-tls://`` URI, usually through ``AdapterRegistry.new_adapter``.
    - Driven by the host bridge: register on start, refresh on its own timer,
      deregister on stop.
"""

from __future__ import annotations

import logging
from typing import List, Optional
from urllib.parse import urlsplit, urlunsplit

from eureka_bridge.adapters.eureka_rest import EurekaClient
from eureka_bridge.adapters.http_client import HttpConfig, HttpSession
from eureka_bridge.domain.instance import instance_from_service
from eureka_bridge.domain.ports import AdapterFactory, RegistryAdapter
from eureka_bridge.domain.service import ServiceRecord

log = logging.getLogger(__name__)

EUREKA_SCHEME = "eureka"
EUREKA_TLS_SCHEME = "eureka-tls"

TRANSPORT_SCHEMES = {
    EUREKA_SCHEME: "http",
    EUREKA_TLS_SCHEME: "https",
}


class EurekaAdapter(RegistryAdapter):
    """Stateless facade; every call maps the record and issues one request."""

    def __init__(self, client: EurekaClient) -> None:
        self.client = client

    def ping(self) -> None:
        # TODO: probe GET {base}/eureka/v2/apps once a health contract is agreed.
        return None

    def register(self, service: ServiceRecord) -> None:
        self.client.register(instance_from_service(service))

    def deregister(self, service: ServiceRecord) -> None:
        inst = instance_from_service(service)
        self.client.deregister(inst.app, inst.id)

    def refresh(self, service: ServiceRecord) -> None:
        inst = instance_from_service(service)
        self.client.heartbeat(inst.app, inst.id)

    def services(self) -> List[ServiceRecord]:
        # Lookup is not supported; the bridge only pushes state.
        return []


def resolve_base_url(uri: str) -> str:
    """Rewrite ``eureka``/``eureka-tls`` to ``http``/``https``.

    Host, port, path and query are preserved.

    Raises:
        ValueError: For any other scheme.
    """
    parts = urlsplit(uri)
    transport = TRANSPORT_SCHEMES.get(parts.scheme)
    if transport is None:
        raise ValueError(
            f"Unsupported registry scheme '{parts.scheme}' in {uri!r}; "
            f"expected one of {sorted(TRANSPORT_SCHEMES)}"
        )
    return urlunsplit(parts._replace(scheme=transport))


class EurekaAdapterFactory(AdapterFactory):
    """Creates ``EurekaAdapter`` instances for both Eureka URI schemes."""

    def __init__(self, config: Optional[HttpConfig] = None) -> None:
        self.config = config or HttpConfig()

    def new(self, uri: str) -> EurekaAdapter:
        base_url = resolve_base_url(uri)
        client = EurekaClient(base_url, HttpSession(self.config))
        log.info("Eureka adapter targeting %s", client.base_url)
        return EurekaAdapter(client)


__all__ = [
    "EUREKA_SCHEME",
    "EUREKA_TLS_SCHEME",
    "EurekaAdapter",
    "EurekaAdapterFactory",
    "resolve_base_url",
]
