"""AppRole authentication method.

Implements the ``app_role`` method: a role ID and secret ID are exchanged
for a leased token at ``auth/approle/login``, which is then kept alive by
the background renewer.

See Also:
    :class:`~stance_vault.plugins.app_role.plugin.AppRoleAuthMethod`
"""

from stance_vault.plugins.app_role.plugin import AppRoleAuthMethod

__all__ = ["AppRoleAuthMethod"]
