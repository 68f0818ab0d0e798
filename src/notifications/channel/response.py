"""Normalized provider response shared by every channel adapter."""

from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class ProviderResponse:
    """Outcome of a single delivery attempt.

    ``status_code`` is 0 when no HTTP response was received (network error).
    """

    ok: bool
    status_code: int = 0
    message_id: str | None = None
    error: str | None = None


def network_error_code(exc: Exception) -> str:
    """Label a transport failure with the conventional socket error code."""
    if isinstance(exc, httpx.TimeoutException):
        return "ETIMEDOUT"
    if isinstance(exc, httpx.ConnectError):
        message = str(exc).lower()
        if "name or service not known" in message or "nodename" in message or "getaddrinfo" in message:
            return "ENOTFOUND"
        return "ECONNREFUSED"
    if isinstance(exc, (httpx.ReadError, httpx.WriteError, httpx.RemoteProtocolError)):
        return "ECONNRESET"
    return type(exc).__name__


def transport_failure(exc: Exception) -> ProviderResponse:
    return ProviderResponse(ok=False, status_code=0, error=f"{network_error_code(exc)}: {exc}")
