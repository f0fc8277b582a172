"""
PasswordVault — Public API used by the presentation layer.

Provides:
- ``is_enrolled()`` / ``setup(password)`` / ``unlock(password, remember)``
- ``load(password)`` / ``save(records, password)``
- ``add_entry()`` / ``edit_entry()`` / ``delete_entry()`` — load, mutate, save
- ``change_master_password(old, new)`` — re-enroll and re-encrypt
- ``try_reuse_session()`` / ``remember_session()`` / ``lock()``
- ``from_config()`` — factory wiring gate, store and cache from VaultConfig

Security Note:
    Never log passwords or entry contents. Only log operations, indexes
    and counts.
"""
import logging
from typing import Callable, Optional
from collections.abc import Iterable

from ..exceptions import InvalidEntryError
from .codec import CredentialRecord
from .config import VaultConfig
from .master import MasterGate
from .session_cache import SessionKeyCache
from .store import VaultStore

logger = logging.getLogger("password_generator.vault")


class PasswordVault:
    """Master password gate, encrypted store and session cache together.

    The caller owns the in-memory list between calls; every mutation
    re-reads the vault, applies one change and writes the whole list back.
    """

    def __init__(
        self,
        gate: MasterGate,
        store: VaultStore,
        session: Optional[SessionKeyCache] = None,
    ):
        self._gate = gate
        self._store = store
        self._session = session or SessionKeyCache()

    @property
    def gate(self) -> MasterGate:
        return self._gate

    @property
    def store(self) -> VaultStore:
        return self._store

    @property
    def session(self) -> SessionKeyCache:
        return self._session

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def _make_entry(service: str, username: str, password: str) -> CredentialRecord:
        """Build a record, rejecting empty fields.

        Raises:
            InvalidEntryError: If any field is empty.
        """
        if not service or not username or not password:
            raise InvalidEntryError("Service, username and password are required")
        return CredentialRecord(service=service, username=username, password=password)

    @staticmethod
    def _check_index(records: list[CredentialRecord], index: int) -> None:
        if not 0 <= index < len(records):
            raise InvalidEntryError(
                f"No entry at index {index} (vault holds {len(records)})"
            )

    # ------------------------------------------------------------------
    # Master password
    # ------------------------------------------------------------------

    def is_enrolled(self) -> bool:
        return self._gate.is_enrolled()

    def enroll(self, password: str) -> None:
        self._gate.enroll(password)

    def verify(self, password: str) -> bool:
        return self._gate.verify(password)

    def setup(self, password: str) -> None:
        """Enroll the first (or a replacement) master password and remember it.

        Raises:
            InvalidEntryError: If ``password`` is empty.
            VaultIOError: If the master record cannot be written.
        """
        if not password:
            raise InvalidEntryError("Master password cannot be empty")
        self._gate.enroll(password)
        self._session.remember(password)

    def unlock(self, password: str, remember: bool = False) -> bool:
        """Verify ``password``; cache it when ``remember`` is set.

        Returns:
            True if the password matches the enrolled record.
        """
        if not self._gate.verify(password):
            return False
        if remember:
            self._session.remember(password)
        return True

    def change_master_password(self, old_password: str, new_password: str) -> bool:
        """Replace the master password and re-encrypt the vault under it.

        The vault is decrypted with the old password before anything is
        written. If re-saving under the new password fails, the previous
        master record is put back so the old password still unlocks the
        untouched vault.

        Returns:
            False if ``old_password`` does not verify, True otherwise.

        Raises:
            InvalidEntryError: If ``new_password`` is empty.
            AuthenticationError: If the vault does not decrypt with the old password.
            VaultIOError: If a file cannot be written.
        """
        if not new_password:
            raise InvalidEntryError("Master password cannot be empty")
        if not self._gate.verify(old_password):
            return False
        records = self._store.load(old_password)
        previous = self._gate.read_record()
        self._gate.enroll(new_password)
        try:
            self._store.save(records, new_password)
        except Exception:
            self._gate.restore(previous)
            logger.error("Master password change failed; previous record restored")
            raise
        if self._session.is_active():
            self._session.remember(new_password)
        logger.info("Master password changed; %d record(s) re-encrypted", len(records))
        return True

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def try_reuse_session(self, now: Optional[int] = None) -> Optional[str]:
        """Return the remembered master password, if enrolled and not expired."""
        if not self._gate.is_enrolled():
            return None
        return self._session.try_reuse(now)

    def remember_session(self, password: str, now: Optional[int] = None) -> None:
        self._session.remember(password, now)

    def lock(self) -> None:
        """Forget the remembered master password."""
        self._session.forget()

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def load(self, password: str) -> list[CredentialRecord]:
        return self._store.load(password)

    def save(self, records: Iterable[CredentialRecord], password: str) -> None:
        self._store.save(records, password)

    def add_entry(
        self, master_password: str, service: str, username: str, password: str,
    ) -> list[CredentialRecord]:
        """Append an entry and persist the full list.

        Returns:
            The list as written.
        """
        entry = self._make_entry(service, username, password)
        records = self._store.load(master_password)
        records.append(entry)
        self._store.save(records, master_password)
        logger.debug("Vault add: index=%d", len(records) - 1)
        return records

    def edit_entry(
        self,
        master_password: str,
        index: int,
        service: str,
        username: str,
        password: str,
    ) -> list[CredentialRecord]:
        """Replace the entry at ``index`` and persist the full list.

        Raises:
            InvalidEntryError: If a field is empty or ``index`` is out of range.
        """
        entry = self._make_entry(service, username, password)
        records = self._store.load(master_password)
        self._check_index(records, index)
        records[index] = entry
        self._store.save(records, master_password)
        logger.debug("Vault edit: index=%d", index)
        return records

    def delete_entry(self, master_password: str, index: int) -> list[CredentialRecord]:
        """Remove the entry at ``index`` and persist the full list.

        Raises:
            InvalidEntryError: If ``index`` is out of range.
        """
        records = self._store.load(master_password)
        self._check_index(records, index)
        del records[index]
        self._store.save(records, master_password)
        logger.debug("Vault delete: index=%d", index)
        return records

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def from_config(
        cls,
        config: Optional[VaultConfig] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> "PasswordVault":
        """Wire a vault from configuration.

        Args:
            config: Validated settings; read from the environment if omitted.
            clock: Epoch-millisecond clock for the session cache.

        Returns:
            Ready PasswordVault instance.
        """
        config = config or VaultConfig.from_env()
        vault = cls(
            gate=MasterGate(config.master_path),
            store=VaultStore(config.vault_path),
            session=SessionKeyCache(ttl=config.session_ttl, clock=clock),
        )
        logger.debug("Vault wired at %s", config.base_dir)
        return vault
