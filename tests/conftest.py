"""Shared test fixtures for stance_vault.

Provides a scripted in-process Vault (:class:`FakeVault`) served through
:class:`httpx.MockTransport`, a client wired to it, and automatic reset of
the global output manager between tests.
"""

from __future__ import annotations

import json
from typing import Any, Iterator

import httpx
import pytest

from stance_vault import VaultClient
from stance_vault.output import OutputManager, reset_output, set_output

VAULT_ADDR = "http://vault.test:8200"


class FakeVault:
    """Scripted Vault server.

    Responses are queued per ``(method, path)``; the last queued response
    for a route is repeated once the others are used up. Unrouted requests
    get a 404 with an empty ``errors`` list, as Vault does.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[tuple[int, Any]]] = {}

    def route(self, method: str, path: str, *responses: tuple[int, Any]) -> None:
        self._routes.setdefault((method, path), []).extend(responses)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"errors": []})
        status, body = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(body, (bytes, str)):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def body(self, index: int) -> Any:
        """Decoded JSON body of the *index*-th recorded request."""
        return json.loads(self.requests[index].content)


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> Iterator[None]:
    """Install a plain, colourless output manager for every test."""
    set_output(OutputManager(no_color=True))
    yield
    reset_output()


@pytest.fixture
def fake_vault() -> FakeVault:
    return FakeVault()


@pytest.fixture
def client(fake_vault: FakeVault) -> Iterator[VaultClient]:
    """A client pointed at :class:`FakeVault`, closed after the test."""
    vault = VaultClient(VAULT_ADDR, http_transport=fake_vault.transport)
    yield vault
    vault.close()
