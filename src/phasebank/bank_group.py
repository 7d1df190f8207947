from __future__ import annotations

import logging
from typing import Dict, Generic, Hashable, Iterable, List, Optional, TypeVar

from .bank import Bank
from .content import type_key
from .errors import NotFound
from .persistence.recorder import BankRecorder

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BankGroup(Generic[T]):
    """All banks of a single content type, keyed by case-insensitive name."""

    def __init__(self, content_type: Hashable, recorder: BankRecorder) -> None:
        self._content_type = content_type
        self._recorder = recorder
        self._banks: Dict[str, Bank[T]] = {}

    @classmethod
    def from_recorder(cls, content_type: Hashable, recorder: BankRecorder, generate: bool = True) -> "BankGroup[T]":
        """Create a group, optionally registering every bank the recorder knows of.

        Raises RecordingFailed if the bank names can't be read.
        """
        group: BankGroup[T] = cls(content_type, recorder)
        if generate:
            names = recorder.read_bank_names(content_type)
            group.ensure_all(names)
            logger.info("Generated %d %s banks from storage", len(names), type_key(content_type))
        return group

    @property
    def content_type(self) -> Hashable:
        return self._content_type

    def contains(self, bank_name: str) -> bool:
        return bank_name.lower() in self._banks

    __contains__ = contains

    def get_or_none(self, bank_name: str) -> Optional[Bank[T]]:
        return self._banks.get(bank_name.lower())

    def add_bank(self, bank: Bank[T]) -> None:
        if bank.content_type != self._content_type:
            raise ValueError(
                f"Bank {bank.name!r} holds {type_key(bank.content_type)}, not {type_key(self._content_type)}"
            )
        self._banks[bank.key] = bank

    def ensure(self, bank_name: str) -> Bank[T]:
        bank = self.get_or_none(bank_name)
        if bank is None:
            bank = Bank(bank_name, self._content_type, self._recorder)
            self._banks[bank.key] = bank
            logger.debug("Created bank %s/%s", type_key(self._content_type), bank_name)
        return bank

    def ensure_all(self, bank_names: Iterable[str]) -> None:
        for bank_name in bank_names:
            if not self.contains(bank_name):
                self.ensure(bank_name)

    def put(self, bank_name: str, resource_name: str, resource: T) -> None:
        self.ensure(bank_name).put(resource_name, resource)

    def get_resource(self, bank_name: str, resource_name: str) -> T:
        bank = self.get_or_none(bank_name)
        if bank is None:
            raise NotFound(f"No {type_key(self._content_type)} bank named {bank_name!r}")
        return bank.get(resource_name)

    def list_banks(self) -> List[Bank[T]]:
        """Return the banks in this group. The list is a copy."""
        return list(self._banks.values())

    def save(self) -> None:
        for bank in self._banks.values():
            bank.save()

    def __len__(self) -> int:
        return len(self._banks)

    def __repr__(self) -> str:
        return f"BankGroup({type_key(self._content_type)}, {len(self._banks)} banks)"
