"""Exception hierarchy for stance_vault.

Only *fatal* conditions are raised as exceptions. Logical failures reported
by Vault (bad credentials, CAS conflicts, missing secrets) are returned as a
failed :class:`~stance_vault.client.response.Outcome` and recorded as the
client's last error instead.

Subclass hierarchy::

    StanceVaultError
    +-- TransportError   (request could not be built or sent)
    +-- CodecError
    |   +-- EncodeError  (payload is not JSON-serialisable)
    |   +-- DecodeError  (body is not valid JSON)
    +-- AuthMethodError  (unknown auth method or malformed credentials)
    +-- ConfigError      (invalid client configuration)
"""


class StanceVaultError(Exception):
    """Base exception for all stance_vault errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(StanceVaultError):
    """Raised when a request cannot be constructed or sent (DNS, refused connection, timeout)."""


class CodecError(StanceVaultError):
    """Base class for JSON encoding and decoding failures."""


class EncodeError(CodecError):
    """Raised when a request payload cannot be serialised as JSON."""


class DecodeError(CodecError):
    """Raised when a response body cannot be decoded as JSON, or lacks a required field."""


class AuthMethodError(StanceVaultError):
    """Raised for an unrecognised authentication method or unusable credentials."""


class ConfigError(StanceVaultError):
    """Raised for configuration problems (malformed Vault address, bad types)."""
