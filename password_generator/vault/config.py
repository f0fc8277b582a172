"""
Vault Configuration — File locations and validated settings.

Reads overrides from environment variables (see ``password_generator.conf``):
    PASSWORD_GENERATOR_HOME = <directory for master.config / passwords.enc>
    VAULT_SESSION_TTL = <integer seconds>

Security Note:
    Never log key material. Only log paths and setting names.
"""
import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .. import conf
from .crypto import KDF_ITERATIONS

logger = logging.getLogger("password_generator.vault")


class VaultConfig(BaseModel):
    """Validated vault configuration."""

    base_dir: Path
    master_filename: str = Field(default=conf.MASTER_FILENAME)
    vault_filename: str = Field(default=conf.VAULT_FILENAME)
    session_ttl: int = Field(default=conf.DEFAULT_SESSION_TTL, ge=1)
    kdf_iterations: int = Field(default=KDF_ITERATIONS)

    @field_validator("master_filename", "vault_filename")
    @classmethod
    def validate_filename(cls, v: str) -> str:
        """Filenames are plain names inside ``base_dir``."""
        if not v or v in (".", "..") or "/" in v or "\\" in v:
            raise ValueError(f"Invalid vault filename: {v!r}")
        return v

    @field_validator("kdf_iterations")
    @classmethod
    def validate_iterations(cls, v: int) -> int:
        """The iteration count is not stored per record, so it cannot change."""
        if v != KDF_ITERATIONS:
            raise ValueError(
                f"kdf_iterations is fixed at {KDF_ITERATIONS}; "
                f"enrolled records cannot be verified with {v}"
            )
        return v

    @property
    def master_path(self) -> Path:
        return self.base_dir / self.master_filename

    @property
    def vault_path(self) -> Path:
        return self.base_dir / self.vault_filename

    @classmethod
    def from_env(cls) -> "VaultConfig":
        """Create VaultConfig from the environment-driven settings.

        Returns:
            Populated VaultConfig instance.
        """
        base_dir = conf.get_base_dir()
        logger.debug("Vault directory resolved to %s", base_dir)
        return cls(base_dir=base_dir, session_ttl=conf.get_session_ttl())
