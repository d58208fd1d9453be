"""Shared HTTP transport for the registry wire client.

This module provides a thin wrapper around ``requests.Session`` so the wire
client gets one timeout policy, one header set and one place where transport
exceptions become typed adapter errors.

Dependencies:
    - ``requests`` for network I/O and connection pooling.
    - ``eureka_bridge.adapters.api_errors`` for typed transport failures.

Call context:
    - Constructed by ``EurekaAdapterFactory`` and handed to ``EurekaClient``.
    - Safe to share between threads calling different adapter methods; the
      wrapper keeps no per-request state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import requests
from requests import exceptions as req_exc

from eureka_bridge.adapters.api_errors import RegistryError, RegistryTransportError

DEFAULT_TIMEOUT_S = 30.0


@dataclass
class HttpConfig:
    """Transport configuration for registry HTTP calls.

    Attributes:
        request_timeout_s: Per-request timeout in seconds.
        verify_tls: Passed to ``requests`` as ``verify`` for ``https`` targets.
        user_agent: ``User-Agent`` header sent with every request.
    """
    request_timeout_s: float = DEFAULT_TIMEOUT_S
    verify_tls: bool = True
    user_agent: str = "eureka-bridge"


class HttpSession:
    """Shared requests wrapper with fixed headers and a single attempt per call.

    This class is intentionally transport-only. Callers provide endpoint URLs,
    own the returned response (and must close it), and decide how to map
    status codes into adapter errors.
    """

    def __init__(self, cfg: Optional[HttpConfig] = None) -> None:
        """Create a pooled session.

        Args:
            cfg: Timeout and TLS settings; defaults to ``HttpConfig()``.

        Side Effects:
            Creates a persistent ``requests.Session`` object.
        """
        self.cfg = cfg or HttpConfig()
        self.session = requests.Session()

    def _headers(self, json_body: bool = False) -> Dict[str, str]:
        headers = {"Accept": "application/json", "User-Agent": self.cfg.user_agent}
        if json_body:
            headers["Content-type"] = "application/json"
        return headers

    def request(
        self,
        method: str,
        url: str,
        *,
        data: Optional[bytes] = None,
    ) -> requests.Response:
        """Send one request and return the raw response.

        Args:
            method: HTTP verb.
            url: Absolute endpoint URL.
            data: Already-encoded JSON body, or ``None`` for no body.

        Returns:
            ``requests.Response``; the caller is responsible for closing it.

        Raises:
            RegistryTransportError: On timeouts and connection failures.
            RegistryError: When ``requests`` rejects the request itself
                (malformed URL and similar).
        """
        context = f"{method} {url}"
        try:
            return self.session.request(
                method,
                url,
                data=data,
                headers=self._headers(json_body=data is not None),
                timeout=self.cfg.request_timeout_s,
                verify=self.cfg.verify_tls,
            )
        except (req_exc.Timeout, req_exc.ConnectionError) as exc:
            raise RegistryTransportError(
                f"{context} failed: {exc}", context=context
            ) from exc
        except req_exc.RequestException as exc:
            raise RegistryError(f"{context} could not be sent: {exc}", context=context) from exc

    def post(self, url: str, *, data: Optional[bytes] = None) -> requests.Response:
        return self.request("POST", url, data=data)

    def put(self, url: str) -> requests.Response:
        return self.request("PUT", url)

    def delete(self, url: str) -> requests.Response:
        return self.request("DELETE", url)


__all__ = ["DEFAULT_TIMEOUT_S", "HttpConfig", "HttpSession"]
