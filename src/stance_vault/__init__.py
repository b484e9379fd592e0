"""stance_vault -- a small client for the HashiCorp Vault HTTP API.

The client authenticates against Vault, reads and writes secrets in the
versioned key-value engine, and keeps an issued token alive for the life of
the process.

Typical usage::

    from stance_vault import VaultClient

    vault = VaultClient.from_env().authenticate("token", token)
    secret = vault.kv_get("app/db")
    if not secret:
        raise SystemExit(vault.last_error)
    print(secret.data["data"]["data"]["password"])

Modules:
    vault: The :class:`VaultClient` facade.
    models: Pydantic models for configuration and credentials.
    config: Environment lookup for client configuration.
    exceptions: Fatal exception hierarchy.
    output: Trace and diagnostic stream on stderr.
    kv: Key-value secret accessor.
"""

__version__ = "1.0.0"

from stance_vault.vault import VaultClient  # noqa: E402

__all__ = ["VaultClient", "__version__"]
