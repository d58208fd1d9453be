"""Mapping from bridge service records to Eureka instance records.

The registry addresses an instance by ``(app, id)``. Both values end up in
URL paths verbatim, so the id is made URL-safe here.

Wire quirk: Eureka expects ``port`` and ``securePort`` as objects whose
``$`` and ``@enabled`` values are JSON *strings*, not numbers/booleans.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from eureka_bridge.domain.service import ServiceRecord

PROTOCOL_METADATA_KEY = "istio.protocol"
DEFAULT_PROTOCOL = "http"
TAG_SEPARATOR = "|"


@dataclass(frozen=True)
class Port:
    port: int = 0
    enabled: bool = False

    def to_wire(self) -> Dict[str, str]:
        return {"$": str(self.port), "@enabled": "true" if self.enabled else "false"}


@dataclass(frozen=True)
class Instance:
    """Registry-side view of one running service endpoint."""
    id: str
    hostname: str
    app: str
    ip_address: str
    port: Port = field(default_factory=Port)
    secure_port: Port = field(default_factory=Port)
    metadata: Dict[str, str] = field(default_factory=dict)

    def to_wire(self) -> Dict[str, Any]:
        """Return the JSON-ready ``instance`` object understood by Eureka.

        ``instanceId`` and ``metadata`` are left out when empty; the port
        objects are always present.
        """
        data: Dict[str, Any] = {}
        if self.id:
            data["instanceId"] = self.id
        data["hostName"] = self.hostname
        data["app"] = self.app
        data["ipAddr"] = self.ip_address
        data["port"] = self.port.to_wire()
        data["securePort"] = self.secure_port.to_wire()
        if self.metadata:
            data["metadata"] = dict(self.metadata)
        return data


def url_safe_id(service_id: str) -> str:
    return service_id.replace(":", "-")


def parse_tag(tag: str) -> tuple[str, str]:
    """Split ``key|value`` on the first separator; bare keys get ``""``."""
    key, _, value = tag.partition(TAG_SEPARATOR)
    return key, value


def build_metadata(tags) -> Dict[str, str]:
    # Seed first so that an explicit tag wins over the default protocol hint.
    metadata = {PROTOCOL_METADATA_KEY: DEFAULT_PROTOCOL}
    for tag in tags:
        key, value = parse_tag(tag)
        metadata[key] = value
    return metadata


def instance_from_service(service: ServiceRecord) -> Instance:
    """Convert a bridge ``ServiceRecord`` into a registry ``Instance``.

    Args:
        service: Record describing the running service.

    Returns:
        Fresh ``Instance``; ``hostname`` and ``app`` both carry the service
        name, the secure port stays disabled.
    """
    return Instance(
        id=url_safe_id(service.id),
        hostname=service.name,
        app=service.name,
        ip_address=service.ip,
        port=Port(port=service.port, enabled=True),
        metadata=build_metadata(service.tags),
    )
