"""Credential manager -- authentication dispatch and token lifecycle.

:class:`CredentialManager` maps method names (``"token"``, ``"app_role"``)
to :class:`~stance_vault.auth.base.AuthMethod` instances, runs the selected
login flow, stores the issued credential in the shared
:class:`~stance_vault.auth.credential_store.CredentialStore`, and owns the
background :class:`~stance_vault.auth.renewal.LeaseRenewer`.

State machine::

    UNAUTHENTICATED --token----> AUTHENTICATED (static, never renewed)
    UNAUTHENTICATED --app_role--> RENEWING (lease kept alive in background)
    RENEWING --lease decays to 0 / stop()--> AUTHENTICATED

For most use cases, call :func:`create_default_manager` to get a manager
with both built-in methods registered.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any, Callable, Optional

from stance_vault.auth.base import AuthMethod, LoginResult
from stance_vault.auth.credential_store import CredentialStore
from stance_vault.auth.renewal import LeaseRenewer
from stance_vault.exceptions import AuthMethodError
from stance_vault.output import get_output

if TYPE_CHECKING:
    from stance_vault.client.pipeline import RequestPipeline


class AuthState(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    RENEWING = "renewing"


class CredentialManager:
    """Registry of auth methods plus the current credential's lifecycle.

    Args:
        pipeline: Pipeline used by login and renewal calls.
        store: Shared store the pipeline reads the token from.
        sleep: Optional wait function handed to each renewer (tests).
    """

    def __init__(
        self,
        pipeline: RequestPipeline,
        store: CredentialStore,
        sleep: Optional[Callable[[float], object]] = None,
    ) -> None:
        self._pipeline = pipeline
        self._store = store
        self._sleep = sleep
        self._methods: dict[str, AuthMethod] = {}
        self.renewer: Optional[LeaseRenewer] = None

    # ------------------------------------------------------------------ #
    # Registry
    # ------------------------------------------------------------------ #

    def register(self, method: AuthMethod) -> None:
        """Register an auth method, replacing any with the same name."""
        self._methods[method.method] = method

    def get_method(self, name: str) -> AuthMethod:
        """Retrieve a registered method by name.

        Raises:
            AuthMethodError: If no method is registered under *name*.
        """
        method = self._methods.get(name)
        if method is None:
            available = ", ".join(sorted(self._methods)) or "(none)"
            raise AuthMethodError(
                f"unrecognized authentication method '{name}'! "
                f"Available methods: {available}"
            )
        return method

    def list_methods(self) -> list[str]:
        return sorted(self._methods)

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> AuthState:
        if self._store.credential is None:
            return AuthState.UNAUTHENTICATED
        if self.renewer is not None and self.renewer.is_alive():
            return AuthState.RENEWING
        return AuthState.AUTHENTICATED

    def authenticate(self, name: str, credentials: Any) -> LoginResult:
        """Log in with method *name* and, for leased tokens, start renewal.

        On failure the stored credential is left untouched and the falsy
        result carries the login call's outcome.

        Raises:
            AuthMethodError: For an unknown method or unusable credentials.
        """
        method = self.get_method(name)
        result = method.login(self._pipeline, credentials)
        if not result:
            get_output().debug(f"Vault {name} login failed")
            return result

        self.stop_renewal()
        self._store.set(result.credential)
        if method.renews:
            self.start_renewal()
        return result

    def start_renewal(self) -> LeaseRenewer:
        """Start a background renewer for the stored credential."""
        self.stop_renewal()
        self.renewer = LeaseRenewer(self._pipeline, self._store, sleep=self._sleep)
        self.renewer.start()
        return self.renewer

    def stop_renewal(self, timeout: Optional[float] = 5.0) -> None:
        """Stop the background renewer, if one is running."""
        if self.renewer is not None:
            self.renewer.stop(timeout)
            self.renewer = None


def create_default_manager(
    pipeline: RequestPipeline,
    store: CredentialStore,
    sleep: Optional[Callable[[float], object]] = None,
) -> CredentialManager:
    """Create a :class:`CredentialManager` with the built-in methods.

    - ``token`` -- a statically supplied token, never renewed.
    - ``app_role`` -- AppRole login with background lease renewal.
    """
    from stance_vault.plugins.app_role import AppRoleAuthMethod
    from stance_vault.plugins.token import TokenAuthMethod

    manager = CredentialManager(pipeline, store, sleep=sleep)
    manager.register(TokenAuthMethod())
    manager.register(AppRoleAuthMethod())
    return manager
