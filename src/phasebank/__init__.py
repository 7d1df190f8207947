"""phasebank: phase-driven loading and unloading of resource banks.

Banks hold named resources of one content type and are loaded lazily.
Phases declare which banks they need; the ResourceManager keeps exactly the
banks required by the active phases initialized.
"""

from .bank import Bank
from .bank_group import BankGroup
from .bootstrap import build_manager
from .content import ContentType, type_key
from .errors import ConfigError, NotFound, PhaseNotIntroduced, RecordingFailed, ResourceError
from .manager import ResourceManager
from .phase import Phase
from .persistence import BankRecorder, InMemoryBankRecorder, JsonFileBankRecorder, read_phases, write_phases
from .settings import Settings

__all__ = [
    "Bank",
    "BankGroup",
    "BankRecorder",
    "ConfigError",
    "ContentType",
    "InMemoryBankRecorder",
    "JsonFileBankRecorder",
    "NotFound",
    "Phase",
    "PhaseNotIntroduced",
    "RecordingFailed",
    "ResourceError",
    "ResourceManager",
    "Settings",
    "build_manager",
    "read_phases",
    "type_key",
    "write_phases",
]

__version__ = "0.1.0"
