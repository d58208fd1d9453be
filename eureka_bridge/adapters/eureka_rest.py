"""REST client for the Eureka v2 instance endpoints.

Each operation is exactly one HTTP request whose status is mapped to success
or a typed ``RegistryError``. Nothing is retried and no local state is kept.

Dependencies:
    - ``HttpSession`` for the pooled transport and timeout policy.
    - ``api_errors`` helpers for status-to-error conversion.

Call context:
    - Invoked by ``EurekaAdapter`` in ``eureka_bridge/adapters/eureka_adapter.py``.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

import requests

from eureka_bridge.adapters.api_errors import (
    RegistryError,
    error_for_status,
    status_text,
)
from eureka_bridge.adapters.http_client import HttpSession
from eureka_bridge.domain.instance import Instance

log = logging.getLogger(__name__)

APP_PATH = "{base}/eureka/v2/apps/{app}"
INSTANCE_PATH = "{base}/eureka/v2/apps/{app}/{id}"


class EurekaClient:
    """Wire client bound to a single registry base URL."""

    def __init__(self, base_url: str, session: Optional[HttpSession] = None) -> None:
        """Create a client for ``base_url``.

        Args:
            base_url: ``http(s)://host:port[/prefix]`` of the registry; used
                verbatim as the prefix of every endpoint URL.
            session: Shared transport; a default ``HttpSession`` is created
                when omitted.

        Raises:
            ValueError: If ``base_url`` is empty.
        """
        if not base_url:
            raise ValueError("EurekaClient requires a base URL")
        self.base_url = base_url
        self.session = session or HttpSession()

    def app_url(self, app: str) -> str:
        return APP_PATH.format(base=self.base_url, app=app)

    def instance_url(self, app: str, instance_id: str) -> str:
        return INSTANCE_PATH.format(base=self.base_url, app=app, id=instance_id)

    def register(self, instance: Instance) -> None:
        """Create ``instance`` under its app; the registry answers 204.

        Raises:
            RegistryError: If the payload cannot be encoded or the status is
                anything other than 204.
            RegistryTransportError: On timeouts and connection failures.
        """
        url = self.app_url(instance.app)
        ctx = f"register[{instance.app}/{instance.id}]"
        try:
            data = json.dumps({"instance": instance.to_wire()}).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise RegistryError(f"{ctx}: cannot encode instance: {exc}", context=ctx) from exc

        log.debug("POST %s (%d bytes)", url, len(data))
        with self.session.post(url, data=data) as resp:
            if resp.status_code != requests.codes.no_content:
                raise self._unexpected(resp, f"unexpected status code {status_text(resp)}", ctx)

    def heartbeat(self, app: str, instance_id: str) -> None:
        """Renew the lease of ``app/instance_id``; only 200 counts as success."""
        url = self.instance_url(app, instance_id)
        ctx = f"heartbeat[{app}/{instance_id}]"
        log.debug("PUT %s", url)
        with self.session.put(url) as resp:
            if resp.status_code != requests.codes.ok:
                raise self._unexpected(resp, f"unexpected status code {status_text(resp)}", ctx)

    def deregister(self, app: str, instance_id: str) -> None:
        """Remove ``app/instance_id``; a 404 is reported, not ignored."""
        url = self.instance_url(app, instance_id)
        ctx = f"deregister[{app}/{instance_id}]"
        log.debug("DELETE %s", url)
        with self.session.delete(url) as resp:
            if resp.status_code != requests.codes.ok:
                raise self._unexpected(
                    resp, f"failed to unregister {instance_id}, got {status_text(resp)}", ctx
                )

    @staticmethod
    def _unexpected(resp: requests.Response, message: str, ctx: str) -> RegistryError:
        log.warning("%s: %s", ctx, message)
        return error_for_status(resp, message, context=ctx)
