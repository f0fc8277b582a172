"""Password Generator.

Password generation plus a master-password protected credential vault.
"""
from .version import __version__
from .exceptions import (
    VaultError,
    VaultIOError,
    CryptoError,
    AuthenticationError,
    MalformedRecordError,
    InvalidEntryError,
)
from .generator import generate_password
from .vault import CredentialRecord, PasswordVault, VaultConfig

__all__ = [
    "__version__",
    "VaultError",
    "VaultIOError",
    "CryptoError",
    "AuthenticationError",
    "MalformedRecordError",
    "InvalidEntryError",
    "generate_password",
    "CredentialRecord",
    "PasswordVault",
    "VaultConfig",
]
