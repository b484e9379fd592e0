"""The :class:`VaultClient` facade.

Wires together the pieces of stance_vault for one Vault server::

    VaultClient
    +-- RequestPipeline  (HttpxTransport, JsonCodec)
    +-- CredentialManager (token / app_role, LeaseRenewer)
    +-- SecretAccessor   (kv_get / kv_set)

All three share one :class:`~stance_vault.auth.credential_store.CredentialStore`,
so a token renewed in the background is used by the very next foreground
call.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import httpx
from pydantic import ValidationError

from stance_vault.auth.credential_store import CredentialStore
from stance_vault.auth.manager import AuthState, CredentialManager, create_default_manager
from stance_vault.auth.renewal import LeaseRenewer
from stance_vault.client.pipeline import RequestPipeline
from stance_vault.client.response import Outcome
from stance_vault.client.transport import HttpxTransport, Transport
from stance_vault.config import load_config
from stance_vault.exceptions import ConfigError
from stance_vault.kv import DEFAULT_MOUNT, SecretAccessor
from stance_vault.models import DEFAULT_VAULT_ADDR, ClientConfig


class VaultClient:
    """Client for one Vault server.

    Logical failures (Vault answered with an error) come back as a falsy
    :class:`~stance_vault.client.response.Outcome` and are also kept in
    :attr:`last_error`, which later successes do not clear. Transport and
    decoding failures raise.

    Args:
        vault_addr: Full http(s) URL of the server. Defaults to
            ``http://127.0.0.1:8200``. Ignored when *config* is given.
        debug: Trace every request and response to stderr, with the token
            masked. Ignored when *config* is given.
        config: A complete :class:`~stance_vault.models.ClientConfig`.
        transport: Custom transport adapter. Defaults to
            :class:`~stance_vault.client.transport.HttpxTransport`.
        http_transport: :class:`httpx.BaseTransport` for the default
            adapter, e.g. :class:`httpx.MockTransport`.
        kv_mount: Mount point of the KV v2 engine.
        sleep: Wait function used by the background renewer.

    Example::

        with VaultClient("https://vault.example.com:8200") as vault:
            if not vault.authenticate("app_role", {"role_id": r, "secret_id": s}):
                raise RuntimeError(vault.last_error)
            vault.kv_set("app/db", {"password": "hunter2"})
    """

    def __init__(
        self,
        vault_addr: Optional[str] = None,
        debug: bool = False,
        *,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
        http_transport: Optional[httpx.BaseTransport] = None,
        kv_mount: str = DEFAULT_MOUNT,
        sleep: Optional[Callable[[float], object]] = None,
    ) -> None:
        if config is None:
            try:
                config = ClientConfig(vault_addr=vault_addr or DEFAULT_VAULT_ADDR, debug=debug)
            except ValidationError as exc:
                raise ConfigError(f"Invalid Vault client configuration: {exc}") from exc
        self._config = config
        self._store = CredentialStore()
        self._pipeline = RequestPipeline(
            config,
            transport or HttpxTransport(config, transport=http_transport),
            self._store,
        )
        self._credentials: CredentialManager = create_default_manager(
            self._pipeline, self._store, sleep=sleep
        )
        self._kv = SecretAccessor(self._pipeline, mount=kv_mount)
        self._sleep = sleep

    @classmethod
    def from_env(
        cls,
        vault_addr: Optional[str] = None,
        debug: Optional[bool] = None,
        **kwargs: Any,
    ) -> VaultClient:
        """Build a client from ``$VAULT_ADDR`` and ``$STANCE_VAULT_DEBUG``.

        Explicit arguments take precedence over the environment.
        """
        return cls(config=load_config(vault_addr=vault_addr, debug=debug), **kwargs)

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> VaultClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Stop background renewal and release the HTTP connection pool."""
        self._credentials.stop_renewal()
        self._pipeline.close()

    # ------------------------------------------------------------------ #
    # State
    # ------------------------------------------------------------------ #

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def vault_addr(self) -> str:
        return self._config.vault_addr

    @property
    def debug_enabled(self) -> bool:
        return self._pipeline.debug

    def debug(self, on: bool) -> None:
        """Turn request/response tracing to stderr on or off."""
        self._pipeline.debug = bool(on)

    @property
    def last_error(self) -> Any:
        """Decoded body of the most recent failed call.

        Only meaningful right after a call signalled failure.
        """
        return self._pipeline.last_error

    @property
    def token(self) -> Optional[str]:
        return self._store.token

    @property
    def lease_duration(self) -> Optional[float]:
        return self._store.lease_duration

    @property
    def state(self) -> AuthState:
        return self._credentials.state

    @property
    def credentials(self) -> CredentialManager:
        return self._credentials

    @property
    def renewer(self) -> Optional[LeaseRenewer]:
        """The running background renewer, if any."""
        return self._credentials.renewer

    # ------------------------------------------------------------------ #
    # Requests
    # ------------------------------------------------------------------ #

    def url(self, path: Optional[str] = None) -> str:
        """Return the absolute URL for *path* (``/`` when empty)."""
        return self._pipeline.url(path)

    def get(self, path: str) -> Outcome:
        return self._pipeline.get(path)

    def post(self, path: str, payload: Any = None) -> Outcome:
        return self._pipeline.post(path, payload)

    # ------------------------------------------------------------------ #
    # Authentication
    # ------------------------------------------------------------------ #

    def authenticate(self, method: str, credentials: Any) -> Optional[VaultClient]:
        """Authenticate for subsequent requests.

        ``token`` takes the token string and makes no network call.
        ``app_role`` takes ``{"role_id": ..., "secret_id": ...}``, logs in,
        and starts renewing the issued token in a background thread.

        Returns:
            The client itself on success, so the call can be chained off
            the constructor; ``None`` if Vault rejected the login (see
            :attr:`last_error`).

        Raises:
            AuthMethodError: For any other method name or bad credentials.
        """
        result = self._credentials.authenticate(method, credentials)
        if not result:
            return None
        return self

    def renew(self) -> None:
        """Run the renewal loop in the calling thread until the lease decays.

        Background renewal after ``app_role`` login already does this; call
        it directly only to keep a token alive from a thread you manage.
        """
        LeaseRenewer(self._pipeline, self._store, sleep=self._sleep).run()

    def stop_renewal(self) -> None:
        self._credentials.stop_renewal()

    # ------------------------------------------------------------------ #
    # Key-value secrets
    # ------------------------------------------------------------------ #

    def kv_set(self, path: str, data: dict[str, Any]) -> Outcome:
        """Create a secret at *path* (create-only, ``cas: 0``)."""
        return self._kv.kv_set(path, data)

    def kv_get(self, path: str) -> Outcome:
        """Read the secret at *path*, returning Vault's full envelope."""
        return self._kv.kv_get(path)
