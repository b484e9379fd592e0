"""Tests for the shared credential store."""

from __future__ import annotations

import threading

from stance_vault.auth.credential_store import CredentialStore
from stance_vault.models import Credential


class TestCredentialStore:
    def test_empty_store(self) -> None:
        store = CredentialStore()
        assert store.credential is None
        assert store.token is None
        assert store.lease_duration is None

    def test_set_replaces_credential(self) -> None:
        store = CredentialStore()
        store.set(Credential(token="s.abc", lease_duration=60))
        assert store.token == "s.abc"
        assert store.lease_duration == 60
        store.set(Credential(token="s.def"))
        assert store.credential == Credential(token="s.def")

    def test_halve_lease(self) -> None:
        store = CredentialStore(Credential(token="s.abc", lease_duration=10))
        assert store.halve_lease() == 5
        assert store.halve_lease() == 2.5
        assert store.lease_duration == 2.5
        assert store.token == "s.abc"

    def test_halve_without_lease_is_noop(self) -> None:
        store = CredentialStore(Credential(token="s.static"))
        assert store.halve_lease() is None
        assert store.lease_duration is None
        assert CredentialStore().halve_lease() is None

    def test_update_lease_keeps_token(self) -> None:
        store = CredentialStore(Credential(token="s.abc", lease_duration=2.5))
        assert store.update_lease("s.abc", 3600)
        assert store.credential == Credential(token="s.abc", lease_duration=3600)

    def test_update_lease_without_credential_is_noop(self) -> None:
        store = CredentialStore()
        assert not store.update_lease("s.abc", 10)
        assert store.credential is None

    def test_update_lease_for_replaced_token_is_noop(self) -> None:
        store = CredentialStore(Credential(token="s.static"))
        assert not store.update_lease("s.old", 3600)
        assert store.credential == Credential(token="s.static")

    def test_halve_lease_for_replaced_token_is_noop(self) -> None:
        store = CredentialStore(Credential(token="s.new", lease_duration=100))
        assert store.halve_lease("s.old") is None
        assert store.halve_lease("s.new") == 50

    def test_concurrent_halving_is_serialised(self) -> None:
        store = CredentialStore(Credential(token="s.abc", lease_duration=2.0**20))

        def worker() -> None:
            for _ in range(5):
                store.halve_lease()

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert store.lease_duration == 1.0


class TestCredential:
    def test_leased_token_is_renewable(self) -> None:
        assert Credential(token="t", lease_duration=10).renewable

    def test_static_token_is_not(self) -> None:
        assert not Credential(token="t").renewable
        assert not Credential(token="t", lease_duration=0).renewable
