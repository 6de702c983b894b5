"""HTTP transport capability.

The client only needs ``send(url, body, headers) -> HttpReply``.  The
default implementation wraps a pooled ``httpx.AsyncClient``; timeouts and
connection limits are configured here, not on the client.
"""

from __future__ import annotations

import logging
import ssl
from dataclasses import dataclass
from typing import Mapping, Protocol, runtime_checkable

import httpx

from nearclient.errors import TransportError, TransportKind

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True, slots=True)
class HttpReply:
    status: int
    body: bytes


@runtime_checkable
class Transport(Protocol):
    """Sends one request body and returns the raw reply.

    Raises ``TransportError`` when no reply could be obtained.
    """

    async def send(self, url: str, body: bytes, headers: Mapping[str, str]) -> HttpReply:
        ...

    async def aclose(self) -> None:
        ...


def _kind_of(exc: httpx.RequestError) -> TransportKind:
    if isinstance(exc, httpx.TimeoutException):
        return TransportKind.TIMEOUT
    cause = exc.__cause__ or exc.__context__
    if isinstance(cause, ssl.SSLError):
        return TransportKind.TLS
    if isinstance(exc, httpx.ConnectError):
        return TransportKind.CONNECT
    return TransportKind.NETWORK


class HttpxTransport:
    """``Transport`` backed by ``httpx.AsyncClient``.

    Parameters
    ----------
    timeout : float
        Request timeout in seconds.
    client : httpx.AsyncClient | None
        Use an existing client (e.g. one mounted on ``httpx.ASGITransport``
        or ``httpx.MockTransport``) instead of creating one.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def send(self, url: str, body: bytes, headers: Mapping[str, str]) -> HttpReply:
        try:
            resp = await self._client.post(url, content=body, headers=dict(headers))
        except httpx.RequestError as exc:
            # covers body decoding and redirect failures as well as I/O errors
            kind = _kind_of(exc)
            log.debug("transport failure (%s) for %s: %s", kind.value, url, exc)
            raise TransportError(kind, str(exc) or type(exc).__name__) from exc
        return HttpReply(status=resp.status_code, body=resp.content)

    async def aclose(self) -> None:
        await self._client.aclose()
