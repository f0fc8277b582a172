"""
Vault Crypto Core — Key derivation and authenticated encryption.

- Key derivation: PBKDF2-HMAC-SHA256(password, salt, 65536 iterations)
- Vault blob: PBKDF2(master password, salt) → AES-256-GCM → base64([nonce|salt|payload+tag])

Security Note:
    Never log passwords, keys, plaintext or ciphertext values.
    Salt and nonce are drawn fresh from os.urandom on every encryption;
    nothing is persisted to avoid reuse.
"""
import os
import base64
import binascii
import logging

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..exceptions import AuthenticationError, CryptoError

logger = logging.getLogger("password_generator.vault")

NONCE_SIZE = 12  # 96-bit GCM nonce
SALT_SIZE = 16  # 128-bit salt
TAG_SIZE = 16  # 128-bit GCM tag
KEY_BITS = 256  # AES-256 / verification hash length
# Not stored alongside salt or hash: changing it orphans every enrolled record.
KDF_ITERATIONS = 65536


# ---------------------------------------------------------------------------
# Key derivation
# ---------------------------------------------------------------------------

def derive_key(password: str, salt: bytes, key_bits: int = KEY_BITS) -> bytes:
    """Derive a key from a password using PBKDF2-HMAC-SHA256.

    Args:
        password: Password text, encoded as UTF-8.
        salt: Random salt (16 bytes for every caller in this package).
        key_bits: Output length in bits, multiple of 8.

    Returns:
        ``key_bits // 8`` derived bytes.

    Raises:
        CryptoError: If the output length is invalid.
    """
    if key_bits <= 0 or key_bits % 8:
        raise CryptoError(f"Key length must be a positive multiple of 8, got {key_bits}")
    try:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=key_bits // 8,
            salt=salt,
            iterations=KDF_ITERATIONS,
        )
        return kdf.derive(password.encode("utf-8"))
    except (TypeError, ValueError) as err:
        raise CryptoError(f"Key derivation failed: {err}") from err


def generate_salt() -> bytes:
    """Return a fresh random salt."""
    return os.urandom(SALT_SIZE)


# ---------------------------------------------------------------------------
# Vault blob encryption
# ---------------------------------------------------------------------------

def encrypt(plaintext: str, password: str) -> str:
    """Encrypt text under a key derived from ``password``.

    Format: base64([nonce 12B][salt 16B][encrypted_payload + GCM_tag 16B])

    Args:
        plaintext: Text to encrypt.
        password: Master password used for key derivation.

    Returns:
        Base64 text of the container.

    Raises:
        CryptoError: If the text or password cannot be encoded as UTF-8.
    """
    try:
        data = plaintext.encode("utf-8")
    except UnicodeEncodeError as err:
        raise CryptoError(f"Plaintext is not encodable as UTF-8: {err.reason}") from err
    salt = generate_salt()
    nonce = os.urandom(NONCE_SIZE)
    key = derive_key(password, salt)
    ct = AESGCM(key).encrypt(nonce, data, None)
    return base64.b64encode(nonce + salt + ct).decode("ascii")


def split_container(blob: bytes) -> tuple[bytes, bytes, bytes]:
    """Split a decoded container into ``(nonce, salt, ciphertext)``.

    Raises:
        AuthenticationError: If the blob cannot hold nonce, salt and tag.
    """
    if len(blob) < NONCE_SIZE + SALT_SIZE + TAG_SIZE:
        raise AuthenticationError()
    nonce = blob[:NONCE_SIZE]
    salt = blob[NONCE_SIZE:NONCE_SIZE + SALT_SIZE]
    ct = blob[NONCE_SIZE + SALT_SIZE:]
    return nonce, salt, ct


def decrypt(blob: str, password: str) -> str:
    """Decrypt a container produced by :func:`encrypt`.

    Args:
        blob: Base64 text of ``[nonce|salt|payload+tag]``.
        password: Master password used for key derivation.

    Returns:
        Decrypted text.

    Raises:
        AuthenticationError: For a wrong password, a truncated blob or
            any tampering. The cases are not told apart.
    """
    try:
        raw = base64.b64decode(blob.strip(), validate=True)
    except (binascii.Error, ValueError) as err:
        raise AuthenticationError() from err
    nonce, salt, ct = split_container(raw)
    key = derive_key(password, salt)
    try:
        plaintext = AESGCM(key).decrypt(nonce, ct, None)
        return plaintext.decode("utf-8")
    except (InvalidTag, UnicodeDecodeError) as err:
        logger.warning("Vault blob failed authentication")
        raise AuthenticationError() from err
