"""
VaultStore — Encrypted persistence of the full credential list.

- ``save(records, password)`` — serialize, encrypt, replace the vault file
- ``load(password)`` — read, decrypt, deserialize

Every write replaces the whole file; there is no incremental format.
Decrypted records are not retained between calls.

Security Note:
    Never log plaintext or ciphertext values. Only log paths and counts.
"""
import logging
from pathlib import Path
from collections.abc import Iterable

from ..exceptions import AuthenticationError, MalformedRecordError
from . import codec, crypto
from .codec import CredentialRecord
from .files import read_text, write_text_atomic

logger = logging.getLogger("password_generator.vault")


class VaultStore:
    """Reads and writes the vault container at a fixed path."""

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def save(self, records: Iterable[CredentialRecord], password: str) -> None:
        """Encrypt and persist ``records``, replacing previous content.

        Does nothing when ``password`` is empty. Encryption completes before
        the file is touched, so a failure leaves the old vault in place.

        Raises:
            VaultIOError: If the vault file cannot be written.
            CryptoError: If key derivation fails.
        """
        if not password:
            logger.debug("Vault save skipped: no master password")
            return
        records = list(records)
        blob = crypto.encrypt(codec.serialize(records), password)
        write_text_atomic(self._path, blob)
        logger.info("Vault saved to %s: %d record(s)", self._path, len(records))

    def load(self, password: str) -> list[CredentialRecord]:
        """Decrypt and return the stored records.

        Returns an empty list when ``password`` is empty or the vault file
        is missing or empty.

        Raises:
            AuthenticationError: Wrong password, corruption or tampering.
            VaultIOError: If the vault file cannot be read.
        """
        if not password:
            return []
        try:
            blob = read_text(self._path)
        except MalformedRecordError as err:
            raise AuthenticationError() from err
        if not blob:
            logger.debug("Vault load: no vault at %s", self._path)
            return []
        records = codec.deserialize(crypto.decrypt(blob, password))
        logger.info("Vault loaded from %s: %d record(s)", self._path, len(records))
        return records
