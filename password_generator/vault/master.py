"""
Master Credential Gate — Enrollment and verification of the master password.

The master record file holds ``base64(salt) ":" base64(hash)`` where
``hash = PBKDF2(master password, salt)``. The password itself is never
written anywhere.

Security Note:
    Never log the candidate password, the salt or the hash.
"""
import base64
import binascii
import hmac
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from ..exceptions import MalformedRecordError
from .crypto import KEY_BITS, SALT_SIZE, derive_key, generate_salt
from .files import read_text, write_text_atomic

logger = logging.getLogger("password_generator.vault")

HASH_SIZE = KEY_BITS // 8


class MasterCredentialRecord(BaseModel):
    """Salt and verification hash of the enrolled master password."""

    model_config = ConfigDict(frozen=True)

    salt: bytes
    verification_hash: bytes

    def __repr__(self) -> str:
        return "MasterCredentialRecord(<redacted>)"

    def to_text(self) -> str:
        return "{}:{}".format(
            base64.b64encode(self.salt).decode("ascii"),
            base64.b64encode(self.verification_hash).decode("ascii"),
        )

    @classmethod
    def from_text(cls, content: str) -> "MasterCredentialRecord":
        """Parse the single-line file content.

        Raises:
            MalformedRecordError: If there is not exactly one ``:``, a field
                is not valid base64, or a field has the wrong length.
        """
        content = content.strip()
        if content.count(":") != 1:
            raise MalformedRecordError("master record must have exactly one ':'")
        salt_b64, hash_b64 = content.split(":")
        try:
            salt = base64.b64decode(salt_b64, validate=True)
            verification_hash = base64.b64decode(hash_b64, validate=True)
        except (binascii.Error, ValueError) as err:
            raise MalformedRecordError("master record is not valid base64") from err
        if len(salt) != SALT_SIZE or len(verification_hash) != HASH_SIZE:
            raise MalformedRecordError("master record fields have the wrong length")
        return cls(salt=salt, verification_hash=verification_hash)


class MasterGate:
    """Owns the master record at a fixed path.

    Two states: unenrolled (file absent or empty) and enrolled. Enrolling
    again replaces the record, which is how the master password changes.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def is_enrolled(self) -> bool:
        """True iff the record file exists and is non-empty."""
        try:
            return self._path.is_file() and self._path.stat().st_size > 0
        except OSError:
            return False

    def enroll(self, password: str) -> None:
        """Store a fresh salt and verification hash for ``password``.

        Raises:
            VaultIOError: If the record cannot be written.
            CryptoError: If key derivation fails.
        """
        salt = generate_salt()
        record = MasterCredentialRecord(
            salt=salt,
            verification_hash=derive_key(password, salt, KEY_BITS),
        )
        write_text_atomic(self._path, record.to_text())
        logger.info("Master password enrolled at %s", self._path)

    def restore(self, record: MasterCredentialRecord) -> None:
        """Write back a previously read record.

        Raises:
            VaultIOError: If the record cannot be written.
        """
        write_text_atomic(self._path, record.to_text())
        logger.info("Master record restored at %s", self._path)

    def read_record(self) -> MasterCredentialRecord:
        """Load and parse the stored record.

        Raises:
            MalformedRecordError: If the file is missing, empty or malformed.
            VaultIOError: If the file cannot be read.
        """
        content = read_text(self._path)
        if not content:
            raise MalformedRecordError("master password is not enrolled")
        return MasterCredentialRecord.from_text(content)

    def verify(self, candidate: str) -> bool:
        """Check ``candidate`` against the enrolled record.

        Returns False, without raising, when unenrolled or when the record
        is malformed.

        Raises:
            VaultIOError: If the record exists but cannot be read.
        """
        if not self.is_enrolled():
            logger.debug("Verification requested while unenrolled")
            return False
        try:
            record = self.read_record()
        except MalformedRecordError as err:
            logger.warning("Master record at %s is unusable: %s", self._path, err)
            return False
        computed = derive_key(candidate, record.salt, KEY_BITS)
        matched = hmac.compare_digest(computed, record.verification_hash)
        if not matched:
            logger.info("Master password verification failed")
        return matched
