from __future__ import annotations

from typing import List, Protocol

from eureka_bridge.domain.service import ServiceRecord


# ---- Ports (Hexagonal boundaries) ----
class RegistryAdapter(Protocol):
    """Capability set a registry backend offers to the host bridge.

    Every method raises on failure and returns normally on success.
    """

    def ping(self) -> None: ...
    def register(self, service: ServiceRecord) -> None: ...
    def deregister(self, service: ServiceRecord) -> None: ...
    def refresh(self, service: ServiceRecord) -> None: ...  # lease renewal
    def services(self) -> List[ServiceRecord]: ...


class AdapterFactory(Protocol):
    """Builds a ``RegistryAdapter`` from a connection URI such as
    ``eureka://registry.local:8761``."""

    def new(self, uri: str) -> RegistryAdapter: ...
