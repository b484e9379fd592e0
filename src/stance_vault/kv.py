"""Key-value secret accessor (KV version 2 engine).

Thin path-formatting helpers over the request pipeline. Both return the
full Vault envelope; the secret's own fields live under
``outcome.data["data"]["data"]``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from stance_vault.client.pipeline import RequestPipeline
    from stance_vault.client.response import Outcome

DEFAULT_MOUNT = "secret"


class SecretAccessor:
    """Read and create secrets under a KV v2 mount.

    Args:
        pipeline: Pipeline that performs the calls.
        mount: Mount point of the KV v2 engine.
    """

    def __init__(self, pipeline: RequestPipeline, mount: str = DEFAULT_MOUNT) -> None:
        self._pipeline = pipeline
        self._mount = mount.strip("/")

    def data_path(self, path: str) -> str:
        """Return the data endpoint for *path*, stripping one leading slash."""
        if path.startswith("/"):
            path = path[1:]
        return f"/v1/{self._mount}/data/{path}"

    def kv_set(self, path: str, data: dict[str, Any]) -> Outcome:
        """Create the secret at *path*.

        The write is sent with ``cas: 0``, so Vault only accepts it if no
        version of the secret exists yet. Writing to an existing path
        returns a failed outcome rather than overwriting.
        """
        return self._pipeline.post(
            self.data_path(path),
            {"options": {"cas": 0}, "data": data},
        )

    def kv_get(self, path: str) -> Outcome:
        """Read the latest version of the secret at *path*."""
        return self._pipeline.get(self.data_path(path))
