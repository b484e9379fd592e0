"""Background lease renewal.

:class:`LeaseRenewer` keeps a leased token alive. While the stored lease is
truthy it repeats:

1. Halve the stored lease.
2. Wait that many seconds.
3. Call ``auth/token/renew-self``. On success the lease Vault returns
   replaces the stored one; on failure the halved lease stays, so the next
   wait is shorter still.

The first renewal therefore happens at roughly half the original lease, and
repeated failures retry on a geometrically shrinking interval. The loop ends
when the lease becomes falsy or :meth:`LeaseRenewer.stop` is called.
The renewer is bound to the token stored when it was created: once that token
is replaced it neither halves nor updates the new credential's lease.
Failures never propagate out of the thread.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Callable, Optional

from stance_vault.auth.credential_store import CredentialStore
from stance_vault.exceptions import StanceVaultError
from stance_vault.output import get_output

if TYPE_CHECKING:
    from stance_vault.client.pipeline import RequestPipeline

RENEW_SELF_PATH = "/v1/auth/token/renew-self"


class LeaseRenewer(threading.Thread):
    """Daemon thread running the halve-wait-renew loop against a shared store.

    Args:
        pipeline: Pipeline used for the renew-self call. It reads the token
            from the same *store*.
        store: Shared credential store holding the lease to decay.
        sleep: Wait function taking seconds. Defaults to an interruptible
            wait that returns early when :meth:`stop` is called.
    """

    def __init__(
        self,
        pipeline: RequestPipeline,
        store: CredentialStore,
        sleep: Optional[Callable[[float], object]] = None,
    ) -> None:
        super().__init__(name="stance-vault-renewer", daemon=True)
        self._pipeline = pipeline
        self._store = store
        self._token = store.token
        self._stop_event = threading.Event()
        self._sleep = sleep or self._stop_event.wait
        self.renewals = 0
        self.failures = 0

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def stop(self, timeout: Optional[float] = None) -> None:
        """Ask the loop to end and wait up to *timeout* seconds for it."""
        self._stop_event.set()
        if self.is_alive() and threading.current_thread() is not self:
            self.join(timeout)

    def run(self) -> None:
        output = get_output()
        while self._store.lease_duration and not self.stopped:
            interval = self._store.halve_lease(self._token)
            if not interval:
                break
            output.debug(f"renewing Vault token in {interval:g}s")
            self._sleep(interval)
            if self.stopped:
                break
            self.renew_once()
        output.debug("Vault token renewal loop finished")

    def renew_once(self) -> bool:
        """Attempt one renew-self call and update the stored lease.

        Returns:
            ``True`` if Vault renewed the token.
        """
        output = get_output()
        try:
            outcome = self._pipeline.post(RENEW_SELF_PATH, {}, record_error=False)
        except StanceVaultError as exc:
            self.failures += 1
            output.warning(f"Vault token renewal failed: {exc}")
            return False

        if not outcome:
            self.failures += 1
            detail = "; ".join(outcome.errors) or f"HTTP {outcome.status_code}"
            output.debug(f"Vault token renewal rejected: {detail}")
            return False

        if self.stopped:
            output.debug("Vault token renewed after stop, lease left unchanged")
            return False

        auth = (outcome.data or {}).get("auth") or {}
        if not self._store.update_lease(self._token, auth.get("lease_duration")):
            output.debug("Vault token replaced during renewal, lease left unchanged")
            return False
        self.renewals += 1
        output.debug(f"Vault token renewed, lease {auth.get('lease_duration')}s")
        return True
