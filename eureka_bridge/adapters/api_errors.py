from __future__ import annotations

from typing import Any, Optional


class RegistryError(RuntimeError):
    """Base class for registry adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        reason: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.reason = reason
        self.payload = payload
        self.context = context


class RegistryClientError(RegistryError):
    """HTTP 4xx from the registry (e.g. unknown instance on heartbeat)."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        reason: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            status=status,
            reason=reason,
            payload=payload,
            context=context,
        )


class RegistryServerError(RegistryError):
    """HTTP 5xx from the registry."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        reason: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            status=status,
            reason=reason,
            payload=payload,
            context=context,
        )


class RegistryTransportError(RegistryError):
    """Transport level timeout or connectivity failure."""

    def __init__(
        self,
        message: str,
        *,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, context=context)


def status_text(resp: Any) -> str:
    """Render ``"<code> <reason>"``, e.g. ``"404 Not Found"``."""
    status = resp.status_code
    reason = (getattr(resp, "reason", None) or "").strip()
    return f"{status} {reason}" if reason else str(status)


def parse_error_payload(resp: Any) -> Any:
    """Best-effort extraction of error payload without raising."""
    try:
        return resp.json()
    except Exception:
        snippet = getattr(resp, "text", "")
        if not snippet:
            return None
        return snippet[:400]


def error_for_status(resp: Any, message: str, *, context: str) -> RegistryError:
    """Pick the error class matching the response status family."""
    status = resp.status_code
    reason = getattr(resp, "reason", None)
    payload = parse_error_payload(resp)
    if 400 <= status < 500:
        return RegistryClientError(
            message, status=status, reason=reason, payload=payload, context=context
        )
    if 500 <= status < 600:
        return RegistryServerError(
            message, status=status, reason=reason, payload=payload, context=context
        )
    return RegistryError(
        message, status=status, reason=reason, payload=payload, context=context
    )
