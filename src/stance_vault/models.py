"""Pydantic models shared across stance_vault.

**Configuration** -- :class:`ClientConfig` holds everything a
:class:`~stance_vault.vault.VaultClient` needs to reach Vault.

**Credentials** -- :class:`Credential` is the token currently in use plus
its remaining lease; :class:`AppRoleCredentials` is the input to the
``app_role`` login flow.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stance_vault import __version__

DEFAULT_VAULT_ADDR = "http://127.0.0.1:8200"
REDACTED = "[REDACTED]"
TOKEN_HEADER = "X-Vault-Token"


class ClientConfig(BaseModel):
    """Connection settings for a :class:`~stance_vault.vault.VaultClient`.

    The address is normalised on validation: surrounding whitespace and a
    trailing slash are removed so that joining a relative path always
    produces exactly one ``/`` between the two.

    Example::

        ClientConfig(vault_addr="https://vault.example.com:8200/", debug=True)
    """

    vault_addr: str = Field(
        default=DEFAULT_VAULT_ADDR, description="Base URL of the Vault server"
    )
    debug: bool = Field(
        default=False, description="Trace every request/response to stderr"
    )
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")
    user_agent: str = Field(default=f"stance-vault/{__version__}")

    @field_validator("vault_addr")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError(
                f"Vault address must be a full http(s) URL, got {value!r}"
            )
        if value.endswith("/"):
            value = value[:-1]
        return value


class Credential(BaseModel):
    """A Vault token and the lease (in seconds) it was issued with.

    A token with a positive lease is renewable; a statically supplied token
    has no lease and is never renewed.
    """

    model_config = ConfigDict(frozen=True)

    token: str
    lease_duration: Optional[float] = None

    @property
    def renewable(self) -> bool:
        return bool(self.lease_duration) and self.lease_duration > 0


class AppRoleCredentials(BaseModel):
    """Role and secret identifiers for the ``app_role`` login flow."""

    role_id: str
    secret_id: str
