"""JSON codec for request payloads and response bodies."""

from __future__ import annotations

import json
from typing import Any

from stance_vault.exceptions import DecodeError, EncodeError


class JsonCodec:
    """UTF-8 JSON encoding and decoding with fatal error mapping.

    An empty body decodes to ``None`` so that bodiless replies such as
    ``204 No Content`` are not mistaken for garbage.
    """

    def encode(self, value: Any) -> bytes:
        """Serialise *value* to UTF-8 JSON bytes.

        Raises:
            EncodeError: If *value* is not JSON-serialisable.
        """
        try:
            return json.dumps(value, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise EncodeError(f"unable to encode payload as JSON: {exc}") from exc

    def decode(self, raw: bytes) -> Any:
        """Parse UTF-8 JSON bytes.

        Raises:
            DecodeError: If *raw* is not valid UTF-8 JSON.
        """
        if not raw or not raw.strip():
            return None
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            preview = raw[:200].decode("utf-8", errors="replace")
            raise DecodeError(f"response body is not valid JSON: {exc}: {preview!r}") from exc
