"""Password Vault — Local credential storage behind a master password.

Security Note (Threat Model):
    Decrypted entries and, while a session is remembered, the master
    password live in process memory. A memory dump of the running
    process could expose them. This is an accepted limitation: the vault
    protects data at rest, not a compromised host.
"""

from .codec import CredentialRecord
from .config import VaultConfig
from .master import MasterGate, MasterCredentialRecord
from .store import VaultStore
from .session_cache import SessionKeyCache
from .manager import PasswordVault

__all__ = [
    "CredentialRecord",
    "VaultConfig",
    "MasterGate",
    "MasterCredentialRecord",
    "VaultStore",
    "SessionKeyCache",
    "PasswordVault",
]
