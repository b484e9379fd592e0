"""Transport adapter -- one HTTP exchange, no interpretation.

:class:`HttpxTransport` is the default adapter, backed by
:class:`httpx.Client`. It performs exactly one attempt per call; any
failure to build or send the request is fatal and surfaces as
:class:`~stance_vault.exceptions.TransportError`. HTTP error statuses are
*not* failures at this layer -- they are returned like any other response
and classified by the pipeline.

Any object with a matching :meth:`Transport.send` can be substituted.
"""

from __future__ import annotations

import threading
from typing import Optional, Protocol

import httpx

from stance_vault.exceptions import TransportError
from stance_vault.models import ClientConfig


class TransportResponse:
    """Raw result of one HTTP exchange.

    Args:
        status_code: HTTP status code.
        headers: Response headers.
        body: Undecoded response body.
        reason: Reason phrase, if the server sent one.
    """

    def __init__(
        self,
        status_code: int,
        headers: Optional[dict[str, str]] = None,
        body: bytes = b"",
        reason: str = "",
    ):
        self.status_code = status_code
        self.headers = headers or {}
        self.body = body
        self.reason = reason

    @property
    def is_success(self) -> bool:
        """True for any 2xx status."""
        return 200 <= self.status_code < 300


class Transport(Protocol):
    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse: ...

    def close(self) -> None: ...


class HttpxTransport:
    """Send requests through a lazily created :class:`httpx.Client`.

    Args:
        config: Supplies the timeout and TLS verification settings.
        transport: Optional :class:`httpx.BaseTransport` (for example an
            :class:`httpx.MockTransport` in tests).
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: Optional[httpx.Client] = None
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        """Send one request and return the raw response.

        Raises:
            TransportError: If the request cannot be built or sent, or the
                transport has been closed.
        """
        client = self._get_client(method, url)
        try:
            response = client.request(method, url, headers=headers, content=body)
        except httpx.HTTPError as exc:
            raise TransportError(f"unable to send {method} {url} request: {exc}") from exc
        except (httpx.InvalidURL, ValueError) as exc:
            # malformed URLs and header values are rejected before sending
            raise TransportError(f"unable to create {method} {url} request: {exc}") from exc

        return TransportResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
            reason=response.reason_phrase or "",
        )

    def close(self) -> None:
        """Close the connection pool. Later :meth:`send` calls raise."""
        with self._lock:
            self._closed = True
            client, self._client = self._client, None
        if client is not None:
            client.close()

    def _get_client(self, method: str, url: str) -> httpx.Client:
        with self._lock:
            if self._closed:
                raise TransportError(
                    f"unable to send {method} {url} request: transport is closed"
                )
            if self._client is None:
                self._client = httpx.Client(
                    timeout=self._config.timeout,
                    verify=self._config.verify_ssl,
                    transport=self._transport,
                )
            return self._client
