"""Request pipeline -- every call to Vault goes through here.

For each call :meth:`RequestPipeline.execute`:

1. Normalises the relative path and joins it onto the Vault address.
2. Builds headers: ``Accept`` always; ``Content-Type`` and an encoded body
   when there is a payload; ``X-Vault-Token`` when a token is held.
3. When debugging, traces the request with the token masked, sends the
   real request, then traces the raw response.
4. Decodes the body and tags the result. A non-2xx status stores the
   decoded body as :attr:`RequestPipeline.last_error`.

There is no retry: the transport is invoked exactly once per call.
Transport and decode failures propagate as fatal exceptions.
"""

from __future__ import annotations

from typing import Any, Optional

from stance_vault.auth.credential_store import CredentialStore
from stance_vault.client.codec import JsonCodec
from stance_vault.client.response import Outcome
from stance_vault.client.transport import Transport
from stance_vault.models import REDACTED, TOKEN_HEADER, ClientConfig
from stance_vault.output import get_output


def normalize_path(path: Optional[str]) -> str:
    """Strip exactly one leading slash; ``"/a/b"`` and ``"a/b"`` both give ``"a/b"``."""
    path = path or "/"
    if path.startswith("/"):
        return path[1:]
    return path


def join_url(base: str, path: Optional[str]) -> str:
    """Join *path* onto *base* with exactly one slash between them."""
    if base.endswith("/"):
        base = base[:-1]
    return f"{base}/{normalize_path(path)}"


class RequestPipeline:
    """Build, trace, send and classify requests to Vault.

    Args:
        config: Client configuration (address, debug flag, user agent).
        transport: Adapter that performs the HTTP exchange.
        store: Source of the token injected into each request.
        codec: JSON codec; defaults to :class:`JsonCodec`.

    Attributes:
        debug: Trace requests and responses to stderr. Mutable at runtime.
        last_error: Decoded body of the most recent failed call. Never
            cleared by a later success.
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Transport,
        store: CredentialStore,
        codec: Optional[JsonCodec] = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._store = store
        self._codec = codec or JsonCodec()
        self.debug = config.debug
        self.last_error: Any = None

    def url(self, path: Optional[str]) -> str:
        return join_url(self._config.vault_addr, path)

    def execute(
        self,
        method: str,
        path: str,
        payload: Any = None,
        record_error: bool = True,
    ) -> Outcome:
        """Perform one call against Vault.

        Args:
            method: HTTP verb (``GET``, ``POST``, ...).
            path: Path relative to the Vault address, with or without a
                leading slash.
            payload: JSON-serialisable request body, or ``None``.
            record_error: Store a failed body as :attr:`last_error`. The
                background renewer passes ``False`` so its failures stay
                out of the foreground's view.

        Returns:
            An :class:`Outcome` carrying the decoded body.

        Raises:
            TransportError: If the request cannot be built or sent.
            EncodeError: If the payload cannot be encoded as JSON.
            DecodeError: If the response body is not JSON.
        """
        method = method.upper()
        url = self.url(path)

        headers: dict[str, str] = {
            "Accept": "application/json",
            "User-Agent": self._config.user_agent,
        }
        body: Optional[bytes] = None
        if payload is not None:
            headers["Content-Type"] = "application/json"
            body = self._codec.encode(payload)

        token = self._store.token
        if token:
            headers[TOKEN_HEADER] = token

        if self.debug:
            traced = dict(headers)
            if token:
                traced[TOKEN_HEADER] = REDACTED
            get_output().trace_request(method, path, url, traced, body)

        response = self._transport.send(method, url, headers, body)

        if self.debug:
            get_output().trace_response(
                response.status_code, response.reason, response.headers, response.body
            )

        data = self._codec.decode(response.body)
        if not response.is_success:
            if record_error:
                self.last_error = data
            return Outcome.failure(data, response.status_code)
        return Outcome.success(data, response.status_code)

    def get(self, path: str) -> Outcome:
        """Send a GET request. See :meth:`execute`."""
        return self.execute("GET", path)

    def post(self, path: str, payload: Any = None, **kwargs: Any) -> Outcome:
        """Send a POST request. See :meth:`execute`."""
        return self.execute("POST", path, payload, **kwargs)

    def close(self) -> None:
        self._transport.close()
