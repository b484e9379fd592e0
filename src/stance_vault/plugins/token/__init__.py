"""Static token authentication method.

Implements the ``token`` method: the supplied token is used as-is, with no
network call and no renewal.

See Also:
    :class:`~stance_vault.plugins.token.plugin.TokenAuthMethod`
"""

from stance_vault.plugins.token.plugin import TokenAuthMethod

__all__ = ["TokenAuthMethod"]
