"""Vault error taxonomy.

Every failure raised by the vault derives from :class:`VaultError`, so
callers can reject an operation with a single ``except`` clause.
"""


class VaultError(Exception):
    """Base class for vault errors."""


class VaultIOError(VaultError, OSError):
    """Vault or master record file could not be read or written."""


class CryptoError(VaultError):
    """Key derivation or cipher primitive failed."""


class AuthenticationError(CryptoError):
    """Vault blob did not authenticate.

    Raised for a wrong master password, a corrupted file and a tampered
    file alike. The message is always the same.
    """

    def __init__(self, message: str = "decryption failed"):
        super().__init__(message)


class MalformedRecordError(VaultError, ValueError):
    """Stored data does not have the expected shape."""


class InvalidEntryError(VaultError, ValueError):
    """Credential entry or entry index rejected."""
