"""Authentication and token lifecycle for stance_vault.

- :class:`AuthMethod` -- abstract base class for login flows.
- :class:`CredentialManager` -- dispatches ``authenticate`` to a method and
  owns the background :class:`LeaseRenewer`.
- :func:`create_default_manager` -- manager with ``token`` and ``app_role``.
- :class:`CredentialStore` -- lock-guarded token/lease shared with the
  request pipeline.
"""

from stance_vault.auth.base import AuthMethod, LoginResult
from stance_vault.auth.credential_store import CredentialStore
from stance_vault.auth.manager import AuthState, CredentialManager, create_default_manager
from stance_vault.auth.renewal import LeaseRenewer

__all__ = [
    "AuthMethod",
    "AuthState",
    "CredentialManager",
    "CredentialStore",
    "LeaseRenewer",
    "LoginResult",
    "create_default_manager",
]
