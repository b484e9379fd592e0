"""Static token authentication method.

:class:`TokenAuthMethod` implements the ``token`` method. The token is
taken verbatim from the caller and carries no lease, so it is never
renewed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from stance_vault.auth.base import AuthMethod, LoginResult
from stance_vault.exceptions import AuthMethodError
from stance_vault.models import Credential

if TYPE_CHECKING:
    from stance_vault.client.pipeline import RequestPipeline


class TokenAuthMethod(AuthMethod):
    """Use a pre-issued Vault token."""

    @property
    def method(self) -> str:
        return "token"

    def login(self, pipeline: RequestPipeline, credentials: Any) -> LoginResult:
        """Wrap *credentials* (the token string) in a lease-less credential.

        Raises:
            AuthMethodError: If *credentials* is not a non-empty string.
        """
        if not isinstance(credentials, str) or not credentials:
            raise AuthMethodError("token authentication requires a non-empty token string")
        return LoginResult(credential=Credential(token=credentials))
