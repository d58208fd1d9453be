"""Eureka adapter over ``eureka-tls://`` against a local HTTPS server.

The server presents a throwaway self-signed certificate generated with
``cryptography``; the adapter is configured with ``verify_tls=False``.
"""

from __future__ import annotations

import datetime
import ipaddress
import ssl
from pathlib import Path
from typing import Iterator

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID
from pytest_httpserver import HTTPServer

from eureka_bridge.adapters.api_errors import RegistryTransportError
from eureka_bridge.adapters.http_client import HttpConfig
from eureka_bridge.app.factories import AdapterRegistry, register_eureka_factories
from eureka_bridge.domain.service import ServiceRecord

RECORD = ServiceRecord(name="web", id="web:1", ip="10.0.0.5", port=8080)

pytestmark = pytest.mark.filterwarnings("ignore:Unverified HTTPS request")


def _write_self_signed(directory: Path) -> tuple[Path, Path]:
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "localhost")])
    now = datetime.datetime.now(datetime.timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(minutes=5))
        .not_valid_after(now + datetime.timedelta(days=1))
        .add_extension(
            x509.SubjectAlternativeName(
                [x509.DNSName("localhost"), x509.IPAddress(ipaddress.ip_address("127.0.0.1"))]
            ),
            critical=False,
        )
        .sign(key, hashes.SHA256())
    )
    cert_path = directory / "registry.crt"
    key_path = directory / "registry.key"
    cert_path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    key_path.write_bytes(
        key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    )
    return cert_path, key_path


@pytest.fixture(scope="module")
def tls_server(tmp_path_factory) -> Iterator[HTTPServer]:
    cert_path, key_path = _write_self_signed(tmp_path_factory.mktemp("tls"))
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.load_cert_chain(str(cert_path), str(key_path))
    server = HTTPServer(host="localhost", port=0, ssl_context=context)
    server.start()
    yield server
    server.clear()
    if server.is_running():
        server.stop()


@pytest.fixture
def tls_uri(tls_server: HTTPServer) -> Iterator[str]:
    yield f"eureka-tls://{tls_server.host}:{tls_server.port}"
    tls_server.clear()


def _registry(verify_tls: bool) -> AdapterRegistry:
    adapters = AdapterRegistry()
    register_eureka_factories(adapters, HttpConfig(request_timeout_s=5, verify_tls=verify_tls))
    return adapters


def test_register_and_heartbeat_over_tls(tls_server: HTTPServer, tls_uri: str) -> None:
    tls_server.expect_ordered_request("/eureka/v2/apps/web", method="POST").respond_with_data(
        "", status=204
    )
    tls_server.expect_ordered_request(
        "/eureka/v2/apps/web/web-1", method="PUT"
    ).respond_with_data("", status=200)
    adapter = _registry(verify_tls=False).new_adapter(tls_uri)

    adapter.register(RECORD)
    adapter.refresh(RECORD)

    tls_server.check_assertions()
    assert adapter.client.base_url.startswith("https://")
    request, _ = tls_server.log[0]
    assert request.scheme == "https"
    assert request.get_json()["instance"]["instanceId"] == "web-1"


def test_untrusted_certificate_is_transport_error(tls_uri: str) -> None:
    adapter = _registry(verify_tls=True).new_adapter(tls_uri)

    with pytest.raises(RegistryTransportError):
        adapter.register(RECORD)
