import copy
import json
import logging
import os
import platform
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from errors import StorageError
from settings import TOKEN_FILE, TOKEN_RECORD_KEY

logger = logging.getLogger(__name__)


class CredentialStore(ABC):
    """Single-record store for the pending authorization and the token pair

    The record is a flat map. ``merge`` overwrites only the keys it is
    given, so writing the token pair keeps a pending ``code_verifier``/
    ``state`` around and vice versa.

    Merges are serialized within one process only. Two processes merging
    into the same backing record race, and the last whole-record write wins.
    """

    def __init__(self):
        self._lock = threading.Lock()

    @abstractmethod
    def _load(self) -> Dict[str, Any]:
        """Return the stored record, or an empty dict"""

    @abstractmethod
    def _save(self, record: Dict[str, Any]) -> None:
        """Replace the stored record as a whole"""

    @property
    @abstractmethod
    def location(self) -> str:
        """Human readable description of the backing medium"""

    def read(self) -> Dict[str, Any]:
        """Return a copy of the stored record (empty dict when nothing is stored)"""
        return copy.deepcopy(self._load())

    def merge(self, partial: Dict[str, Any]) -> None:
        """Overwrite the keys present in ``partial``, keep everything else"""
        with self._lock:
            record = self._load()
            record.update(partial)
            self._save(record)
        logger.debug(f"Merged fields {sorted(partial)} into credential record")

    def get(self, key: str) -> Optional[Any]:
        return self.read().get(key)

    def status(self) -> Dict[str, Any]:
        """Get store status without exposing secrets"""
        record = self.read()
        return {
            "has_pending_authorization": bool(record.get("code_verifier") and record.get("state")),
            "is_authorized": bool(record.get("refresh_token")),
            "has_access_token": bool(record.get("access_token")),
            "location": self.location,
        }


class FileCredentialStore(CredentialStore):
    """JSON file store with owner-only permissions

    The file holds an object keyed by record key so a future multi-identity
    setup can add records side by side. Writes go through a temporary file
    and an atomic rename.
    """

    def __init__(self, token_file: Optional[str] = None, record_key: Optional[str] = None):
        super().__init__()
        self.token_path = Path(token_file if token_file else TOKEN_FILE).expanduser()
        self.record_key = record_key or TOKEN_RECORD_KEY

    def _ensure_secure_directory(self):
        """Create parent directory with secure permissions"""
        parent_dir = self.token_path.parent
        if not parent_dir.exists():
            parent_dir.mkdir(parents=True, exist_ok=True)
            # Set directory permissions to 700 on Unix-like systems
            if platform.system() != "Windows":
                os.chmod(parent_dir, 0o700)

    def _read_file(self) -> Dict[str, Any]:
        if not self.token_path.exists():
            return {}

        try:
            data = json.loads(self.token_path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            raise StorageError(f"Failed to read credential store {self.token_path}: {e}", cause=e) from e

        if not isinstance(data, dict):
            raise StorageError(f"Credential store {self.token_path} does not contain a JSON object")
        return data

    def _load(self) -> Dict[str, Any]:
        record = self._read_file().get(self.record_key, {})
        if not isinstance(record, dict):
            raise StorageError(f"Credential record '{self.record_key}' in {self.token_path} is not an object")
        return record

    def _save(self, record: Dict[str, Any]) -> None:
        try:
            self._ensure_secure_directory()
            data = self._read_file()
            data[self.record_key] = record

            fd, tmp_name = tempfile.mkstemp(dir=self.token_path.parent, prefix=".tokens-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w") as f:
                    json.dump(data, f, indent=2)
                    f.flush()
                    os.fsync(f.fileno())
                # Set file permissions to 600 on Unix-like systems
                if platform.system() != "Windows":
                    os.chmod(tmp_name, 0o600)
                os.replace(tmp_name, self.token_path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write credential store {self.token_path}: {e}", cause=e) from e

    @property
    def location(self) -> str:
        return f"{self.token_path}#{self.record_key}"

    @property
    def token_file(self) -> Path:
        """Get the token file path"""
        return self.token_path


class MemoryCredentialStore(CredentialStore):
    """In-process store, used by the scheduled form and in tests

    Nothing survives the process, so a rotated refresh token has to be
    reported back to whoever provisioned the original one.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        super().__init__()
        self._record: Dict[str, Any] = dict(initial or {})

    def _load(self) -> Dict[str, Any]:
        return dict(self._record)

    def _save(self, record: Dict[str, Any]) -> None:
        self._record = dict(record)

    @property
    def location(self) -> str:
        return "memory"
