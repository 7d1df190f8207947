"""Persistence adapters for banks and phase definitions.

- BankRecorder: the interface banks use to read and write their data
- InMemoryBankRecorder: dict-backed recorder for tests and tools
- JsonFileBankRecorder: one JSON file per bank with atomic writes and backups
- read_phases / write_phases: YAML phase definition files
"""

from .recorder import BankRecorder, InMemoryBankRecorder
from .files import JsonFileBankRecorder, SCHEMA_VERSION
from .phases import read_phases, write_phases, phases_from_dict, phases_to_dict
from .paths import BANK_ROOT_ENV, default_bank_root

__all__ = [
    "BankRecorder",
    "InMemoryBankRecorder",
    "JsonFileBankRecorder",
    "SCHEMA_VERSION",
    "read_phases",
    "write_phases",
    "phases_from_dict",
    "phases_to_dict",
    "default_bank_root",
    "BANK_ROOT_ENV",
]
