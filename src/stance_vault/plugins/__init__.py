"""Built-in authentication methods.

Each method lives in its own subpackage with a ``plugin.py`` holding the
:class:`~stance_vault.auth.base.AuthMethod` subclass:

- :mod:`stance_vault.plugins.token` -- ``token``
- :mod:`stance_vault.plugins.app_role` -- ``app_role``
"""
