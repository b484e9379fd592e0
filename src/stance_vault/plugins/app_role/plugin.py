"""AppRole authentication method.

:class:`AppRoleAuthMethod` posts ``{role_id, secret_id}`` to
``/v1/auth/approle/login`` and reads the issued token and lease from the
``auth`` block of the reply::

    {"auth": {"client_token": "hvs.XXXX", "lease_duration": 2764800, ...}}

A rejected login is a logical failure: the pipeline records Vault's error
body and the returned :class:`~stance_vault.auth.base.LoginResult` is
falsy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from pydantic import ValidationError

from stance_vault.auth.base import AuthMethod, LoginResult
from stance_vault.exceptions import AuthMethodError, DecodeError
from stance_vault.models import AppRoleCredentials, Credential

if TYPE_CHECKING:
    from stance_vault.client.pipeline import RequestPipeline

LOGIN_PATH = "/v1/auth/approle/login"


class AppRoleAuthMethod(AuthMethod):
    """Log in with an AppRole role ID and secret ID."""

    renews = True

    @property
    def method(self) -> str:
        return "app_role"

    def login(self, pipeline: RequestPipeline, credentials: Any) -> LoginResult:
        """Exchange AppRole credentials for a leased token.

        Args:
            pipeline: Pipeline for the login call (sent without a token if
                none is held).
            credentials: :class:`~stance_vault.models.AppRoleCredentials`
                or a mapping with ``role_id`` and ``secret_id``.

        Raises:
            AuthMethodError: If *credentials* lack ``role_id``/``secret_id``.
            DecodeError: If a successful reply has no ``auth.client_token``.
        """
        creds = self._coerce(credentials)
        outcome = pipeline.post(
            LOGIN_PATH,
            {"role_id": creds.role_id, "secret_id": creds.secret_id},
        )
        if not outcome:
            return LoginResult(outcome=outcome)

        auth = (outcome.data or {}).get("auth") or {}
        token = auth.get("client_token")
        if not token:
            raise DecodeError("AppRole login response is missing auth.client_token")

        credential = Credential(token=token, lease_duration=auth.get("lease_duration"))
        return LoginResult(credential=credential, outcome=outcome)

    @staticmethod
    def _coerce(credentials: Any) -> AppRoleCredentials:
        if isinstance(credentials, AppRoleCredentials):
            return credentials
        if not isinstance(credentials, Mapping):
            raise AuthMethodError(
                "app_role authentication requires a mapping with role_id and secret_id"
            )
        try:
            return AppRoleCredentials.model_validate(dict(credentials))
        except ValidationError as exc:
            raise AuthMethodError(f"invalid app_role credentials: {exc}") from exc
