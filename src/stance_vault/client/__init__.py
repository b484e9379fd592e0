"""HTTP request pipeline for stance_vault.

Layers, leaf first:

:class:`HttpxTransport` -- sends one request through :class:`httpx.Client`
    and returns the raw status, headers and body.
:class:`JsonCodec` -- encodes payloads and decodes response bodies.
:class:`RequestPipeline` -- joins paths onto the Vault address, injects the
    current token, traces the exchange when debugging, and classifies the
    result as an :class:`Outcome`.

Example::

    from stance_vault.client import HttpxTransport, RequestPipeline

    pipeline = RequestPipeline(config, HttpxTransport(config), store)
    outcome = pipeline.execute("GET", "/v1/sys/health")
"""

from stance_vault.client.codec import JsonCodec
from stance_vault.client.pipeline import RequestPipeline, join_url, normalize_path
from stance_vault.client.response import Outcome
from stance_vault.client.transport import HttpxTransport, Transport, TransportResponse

__all__ = [
    "HttpxTransport",
    "JsonCodec",
    "Outcome",
    "RequestPipeline",
    "Transport",
    "TransportResponse",
    "join_url",
    "normalize_path",
]
