"""Tagged per-call result returned by the request pipeline."""

from __future__ import annotations

from typing import Any, Optional


class Outcome:
    """Decoded response body tagged as success or failure.

    The tag comes from the HTTP status class; the body is always decoded.
    An ``Outcome`` is truthy exactly when the call succeeded, so callers
    can write::

        secret = vault.kv_get("app/db")
        if not secret:
            handle(secret.data)   # the decoded error body

    Args:
        ok: Whether Vault reported success.
        data: The decoded JSON body (``None`` for an empty body).
        status_code: HTTP status code, when the outcome came from the wire.
    """

    __slots__ = ("ok", "data", "status_code")

    def __init__(self, ok: bool, data: Any = None, status_code: Optional[int] = None):
        self.ok = ok
        self.data = data
        self.status_code = status_code

    @classmethod
    def success(cls, data: Any, status_code: Optional[int] = None) -> Outcome:
        return cls(True, data, status_code)

    @classmethod
    def failure(cls, data: Any, status_code: Optional[int] = None) -> Outcome:
        return cls(False, data, status_code)

    @property
    def errors(self) -> list[str]:
        """Vault's ``errors`` list from a failed body, or an empty list."""
        if self.ok or not isinstance(self.data, dict):
            return []
        return [str(e) for e in self.data.get("errors") or []]

    def __bool__(self) -> bool:
        return self.ok

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Outcome):
            return NotImplemented
        return (self.ok, self.data, self.status_code) == (
            other.ok,
            other.data,
            other.status_code,
        )

    def __repr__(self) -> str:
        tag = "success" if self.ok else "failure"
        return f"Outcome.{tag}({self.data!r}, status_code={self.status_code!r})"
