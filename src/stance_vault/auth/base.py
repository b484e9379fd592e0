"""Abstract base class for authentication methods.

- :class:`LoginResult` -- what a login flow produced: the issued
  :class:`~stance_vault.models.Credential` on success, and the pipeline
  :class:`~stance_vault.client.response.Outcome` when a call was made.
- :class:`AuthMethod` -- the interface every login flow implements.

To add a method, subclass :class:`AuthMethod`, set :attr:`~AuthMethod.method`
and implement :meth:`~AuthMethod.login`. Set :attr:`~AuthMethod.renews` to
``True`` when the issued token should be kept alive in the background.

See Also:
    :mod:`stance_vault.auth.manager` for registration and dispatch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

from stance_vault.models import Credential

if TYPE_CHECKING:
    from stance_vault.client.pipeline import RequestPipeline
    from stance_vault.client.response import Outcome


class LoginResult:
    """Result of one login attempt. Truthy when a credential was issued.

    Args:
        credential: The issued credential, or ``None`` on failure.
        outcome: The login call's outcome; ``None`` for methods that make
            no network call.
    """

    def __init__(
        self,
        credential: Optional[Credential] = None,
        outcome: Optional[Outcome] = None,
    ):
        self.credential = credential
        self.outcome = outcome

    @property
    def ok(self) -> bool:
        return self.credential is not None

    def __bool__(self) -> bool:
        return self.ok


class AuthMethod(ABC):
    """Abstract base class for Vault authentication methods.

    Concrete methods are registered with
    :class:`~stance_vault.auth.manager.CredentialManager` and looked up by
    their :attr:`method` name.
    """

    renews: bool = False
    """Whether a successful login starts the background lease renewer."""

    @property
    @abstractmethod
    def method(self) -> str:
        """Return the method name callers pass to ``authenticate``, e.g. ``"token"``."""
        ...

    @abstractmethod
    def login(self, pipeline: RequestPipeline, credentials: Any) -> LoginResult:
        """Exchange *credentials* for a Vault token.

        Args:
            pipeline: Pipeline to use for any network call.
            credentials: Method-specific input.

        Returns:
            A :class:`LoginResult`; falsy if Vault rejected the login.

        Raises:
            AuthMethodError: If *credentials* are unusable for this method.
        """
        ...
