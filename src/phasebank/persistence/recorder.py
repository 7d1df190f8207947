from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple

from ..content import type_key
from ..errors import RecordingFailed

logger = logging.getLogger(__name__)

Entry = Tuple[str, Any]


class BankRecorder(ABC):
    """Abstract interface for reading and writing bank data."""

    @abstractmethod
    def read_bank(self, bank_name: str, content_type: Hashable) -> List[Entry]:
        """Read a bank's stored (name, value) pairs.

        Returns an empty list when nothing has been stored for the bank yet.
        Raises RecordingFailed if the storage is unreadable or corrupt.
        """

    @abstractmethod
    def write_bank(self, bank_name: str, content_type: Hashable, contents: Iterable[Entry]) -> None:
        """Persist a bank's (name, value) pairs, replacing what was stored."""

    @abstractmethod
    def read_bank_names(self, content_type: Hashable) -> List[str]:
        """List the names of the banks stored for a content type."""


class InMemoryBankRecorder(BankRecorder):
    """Test/deterministic recorder that holds bank data in memory only.

    Counts reads and writes so callers can check that no redundant I/O
    happens. Setting ``fail_reads``/``fail_writes`` makes the matching
    operations raise RecordingFailed.
    """

    def __init__(self) -> None:
        self._data: Dict[Tuple[str, str], List[Entry]] = {}
        self.reads: List[Tuple[str, str]] = []
        self.writes: List[Tuple[str, str]] = []
        self.fail_reads = False
        self.fail_writes = False

    @staticmethod
    def _key(bank_name: str, content_type: Hashable) -> Tuple[str, str]:
        return type_key(content_type).lower(), bank_name.lower()

    def read_bank(self, bank_name: str, content_type: Hashable) -> List[Entry]:
        key = self._key(bank_name, content_type)
        if self.fail_reads:
            raise RecordingFailed(f"Failed to read bank {key[1]!r} ({key[0]})")
        self.reads.append(key)
        return list(self._data.get(key, []))

    def write_bank(self, bank_name: str, content_type: Hashable, contents: Iterable[Entry]) -> None:
        key = self._key(bank_name, content_type)
        if self.fail_writes:
            raise RecordingFailed(f"Failed to write bank {key[1]!r} ({key[0]})")
        self.writes.append(key)
        self._data[key] = list(contents)

    def read_bank_names(self, content_type: Hashable) -> List[str]:
        prefix = type_key(content_type).lower()
        return sorted(name for type_, name in self._data if type_ == prefix)

    def stored(self, bank_name: str, content_type: Hashable) -> Optional[List[Entry]]:
        """Return the raw stored pairs for a bank, or None if never written."""
        data = self._data.get(self._key(bank_name, content_type))
        return None if data is None else list(data)

    def reset_counters(self) -> None:
        self.reads.clear()
        self.writes.clear()
