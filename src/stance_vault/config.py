"""Environment lookup for client configuration.

The core :class:`~stance_vault.vault.VaultClient` never reads the process
environment itself; callers that want the conventional variables use
:func:`load_config` (or :meth:`VaultClient.from_env`), which reads them
exactly once.

Precedence for each setting, highest first:

1. Explicit keyword argument.
2. Environment variable (``VAULT_ADDR``, ``STANCE_VAULT_DEBUG``).
3. Built-in default (``http://127.0.0.1:8200``, debug off).
"""

from __future__ import annotations

import os
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from stance_vault.exceptions import ConfigError
from stance_vault.models import ClientConfig

ENV_VAULT_ADDR = "VAULT_ADDR"
ENV_DEBUG = "STANCE_VAULT_DEBUG"


def debug_from_env(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Return ``True`` only when ``STANCE_VAULT_DEBUG`` is exactly ``on``."""
    env = os.environ if environ is None else environ
    return env.get(ENV_DEBUG) == "on"


def load_config(
    vault_addr: Optional[str] = None,
    debug: Optional[bool] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> ClientConfig:
    """Build a :class:`ClientConfig` from arguments and the environment.

    Args:
        vault_addr: Explicit Vault address. Falls back to ``$VAULT_ADDR``,
            then to the loopback default. An empty string counts as unset.
        debug: Explicit debug flag. Falls back to ``$STANCE_VAULT_DEBUG``.
        environ: Mapping to read instead of :data:`os.environ`.
        **overrides: Any other :class:`ClientConfig` field (``timeout``,
            ``verify_ssl``, ``user_agent``).

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the resulting values fail validation.
    """
    env = os.environ if environ is None else environ

    values: dict[str, Any] = dict(overrides)
    addr = vault_addr or env.get(ENV_VAULT_ADDR)
    if addr:
        values["vault_addr"] = addr
    values["debug"] = debug if debug is not None else debug_from_env(env)

    try:
        return ClientConfig(**values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid Vault client configuration: {exc}") from exc
