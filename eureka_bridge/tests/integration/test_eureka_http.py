"""Integration tests for the Eureka adapter against a local HTTP server.

These run the whole path (URI -> factory -> adapter -> requests) against
pytest-httpserver, so request lines, headers and bodies are the real ones.
"""

from __future__ import annotations

import socket
from typing import TYPE_CHECKING

import pytest

from eureka_bridge.adapters.api_errors import (
    RegistryClientError,
    RegistryServerError,
    RegistryTransportError,
)
from eureka_bridge.adapters.http_client import HttpConfig
from eureka_bridge.app.factories import AdapterRegistry, register_eureka_factories
from eureka_bridge.domain.service import ServiceRecord

if TYPE_CHECKING:
    from pytest_httpserver import HTTPServer

RECORD = ServiceRecord(name="web", id="web:1", ip="10.0.0.5", port=8080, tags=("version|1.2",))


@pytest.fixture
def registry() -> AdapterRegistry:
    adapters = AdapterRegistry()
    register_eureka_factories(adapters, HttpConfig(request_timeout_s=5))
    return adapters


def _uri(httpserver: "HTTPServer") -> str:
    return f"eureka://{httpserver.host}:{httpserver.port}"


def test_register_posts_expected_instance(httpserver: "HTTPServer", registry) -> None:
    httpserver.expect_oneshot_request("/eureka/v2/apps/web", method="POST").respond_with_data(
        "", status=204
    )
    adapter = registry.new_adapter(_uri(httpserver))

    adapter.register(RECORD)

    httpserver.check_assertions()
    request, _ = httpserver.log[0]
    assert request.headers["Content-Type"] == "application/json"
    assert request.get_json() == {
        "instance": {
            "instanceId": "web-1",
            "hostName": "web",
            "app": "web",
            "ipAddr": "10.0.0.5",
            "port": {"$": "8080", "@enabled": "true"},
            "securePort": {"$": "0", "@enabled": "false"},
            "metadata": {"istio.protocol": "http", "version": "1.2"},
        }
    }


def test_register_server_error(httpserver: "HTTPServer", registry) -> None:
    httpserver.expect_request("/eureka/v2/apps/web", method="POST").respond_with_data(
        "registry down", status=500
    )
    adapter = registry.new_adapter(_uri(httpserver))

    with pytest.raises(RegistryServerError) as excinfo:
        adapter.register(RECORD)

    assert "500 INTERNAL SERVER ERROR" in str(excinfo.value).upper()
    assert excinfo.value.payload == "registry down"


def test_refresh_and_deregister_round_trip(httpserver: "HTTPServer", registry) -> None:
    httpserver.expect_ordered_request("/eureka/v2/apps/web/web-1", method="PUT").respond_with_data(
        "", status=200
    )
    httpserver.expect_ordered_request(
        "/eureka/v2/apps/web/web-1", method="DELETE"
    ).respond_with_data("", status=200)
    adapter = registry.new_adapter(_uri(httpserver))

    adapter.refresh(RECORD)
    adapter.deregister(RECORD)

    httpserver.check_assertions()
    assert [req.method for req, _ in httpserver.log] == ["PUT", "DELETE"]
    assert all(not req.get_data() for req, _ in httpserver.log)


def test_heartbeat_for_unknown_instance_is_an_error(httpserver: "HTTPServer", registry) -> None:
    httpserver.expect_request("/eureka/v2/apps/web/web-1", method="PUT").respond_with_data(
        "", status=404
    )
    adapter = registry.new_adapter(_uri(httpserver))

    with pytest.raises(RegistryClientError) as excinfo:
        adapter.refresh(RECORD)

    assert excinfo.value.status == 404


def test_connection_refused_is_transport_error(registry) -> None:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    adapter = registry.new_adapter(f"eureka://127.0.0.1:{port}")

    with pytest.raises(RegistryTransportError) as excinfo:
        adapter.register(RECORD)

    assert excinfo.value.status is None


def test_services_ignores_registry_state(httpserver: "HTTPServer", registry) -> None:
    adapter = registry.new_adapter(_uri(httpserver))

    assert adapter.services() == []
    assert httpserver.log == []
