"""Shared, lock-guarded holder for the current Vault token and lease.

The foreground request pipeline and the background
:class:`~stance_vault.auth.renewal.LeaseRenewer` both read and write the
same :class:`CredentialStore`, so a lease refreshed in the background is
immediately visible to the next foreground call. Every read and write
happens under one :class:`threading.Lock`; :class:`Credential` values are
immutable and replaced wholesale.
"""

from __future__ import annotations

import threading
from typing import Optional

from stance_vault.models import Credential


class CredentialStore:
    """Thread-safe in-memory storage for one :class:`Credential`.

    Example::

        store = CredentialStore()
        store.set(Credential(token="s.abc", lease_duration=10))
        store.halve_lease()        # -> 5.0
        store.token                # -> "s.abc"
    """

    def __init__(self, credential: Optional[Credential] = None) -> None:
        self._lock = threading.Lock()
        self._credential = credential

    @property
    def credential(self) -> Optional[Credential]:
        with self._lock:
            return self._credential

    @property
    def token(self) -> Optional[str]:
        with self._lock:
            return self._credential.token if self._credential else None

    @property
    def lease_duration(self) -> Optional[float]:
        with self._lock:
            return self._credential.lease_duration if self._credential else None

    def set(self, credential: Credential) -> None:
        with self._lock:
            self._credential = credential

    def halve_lease(self, token: Optional[str] = None) -> Optional[float]:
        """Halve the stored lease in place and return the new value.

        Returns ``None`` (and changes nothing) when no positive lease is
        held, or when *token* is given and is no longer the stored token.
        """
        with self._lock:
            if self._credential is None or not self._credential.renewable:
                return None
            if token is not None and self._credential.token != token:
                return None
            halved = self._credential.lease_duration / 2
            self._credential = self._credential.model_copy(
                update={"lease_duration": halved}
            )
            return halved

    def update_lease(self, token: str, lease_duration: Optional[float]) -> bool:
        """Replace the lease of *token*, keeping the token.

        Nothing changes if *token* is no longer the stored token, so a late
        renewal of a replaced session cannot touch its successor.

        Returns:
            ``True`` if the lease was updated.
        """
        with self._lock:
            if self._credential is None or self._credential.token != token:
                return False
            self._credential = self._credential.model_copy(
                update={"lease_duration": lease_duration}
            )
            return True
