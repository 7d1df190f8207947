from __future__ import annotations


class ResourceError(Exception):
    """Base error for phasebank exceptions."""


class NotFound(ResourceError):
    """Raised when a requested resource (or bank) does not exist."""


class RecordingFailed(ResourceError):
    """Raised when reading or writing bank data through a recorder fails."""


class PhaseNotIntroduced(ResourceError):
    """Raised when a phase is used before it was introduced to the manager."""

    def __init__(self, phase_name: str) -> None:
        super().__init__(f"Phase '{phase_name}' hasn't been introduced yet")
        self.phase_name = phase_name


class ConfigError(ResourceError):
    """Raised when a settings file or phase definition document is invalid."""
