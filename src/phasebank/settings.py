from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import yaml

from .errors import ConfigError
from .persistence.paths import BANK_ROOT_ENV, default_bank_root

logger = logging.getLogger(__name__)

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


def _as_bool(value: Any) -> bool:
    """Interpret common truthy/falsey values ("1", "yes", "off", ...) as a bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in {"1", "true", "yes", "y", "on"}:
            return True
        if v in {"0", "false", "no", "n", "off", ""}:
            return False
    raise ValueError(f"Not a boolean: {value!r}")


ENV_OVERRIDES: Dict[str, Tuple[str, Callable[[str], Any]]] = {
    BANK_ROOT_ENV: ("bank_root", str),
    "PHASEBANK_PHASES_FILE": ("phases_file", str),
    "PHASEBANK_GENERATE_BANKS": ("generate_banks", _as_bool),
    "PHASEBANK_LOG_LEVEL": ("log_level", str),
}


@dataclass
class Settings:
    bank_root: Path = field(default_factory=default_bank_root)
    phases_file: Optional[Path] = Path("phases.yaml")
    generate_banks: bool = True
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.bank_root = Path(self.bank_root).expanduser()
        if self.phases_file is not None:
            self.phases_file = Path(self.phases_file).expanduser()
        self.generate_banks = _as_bool(self.generate_banks)
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {self.log_level}")

    @property
    def resolved_phases_file(self) -> Optional[Path]:
        """The phases file, relative paths taken from bank_root."""
        if self.phases_file is None:
            return None
        if self.phases_file.is_absolute():
            return self.phases_file
        return self.bank_root / self.phases_file

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in settings file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Settings file {path} must contain a mapping")
        return data

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        allowed = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - allowed
        if unknown:
            logger.warning("Ignoring unknown settings: %s", sorted(unknown))
        filtered = {k: v for k, v in data.items() if k in allowed}
        if filtered.get("bank_root") is None:
            filtered.pop("bank_root", None)
        try:
            return cls(**filtered)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid settings: {exc}") from exc

    @staticmethod
    def env_overrides(env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        env = os.environ if env is None else env
        out: Dict[str, Any] = {}
        for env_key, (field_name, caster) in ENV_OVERRIDES.items():
            if env.get(env_key):
                try:
                    out[field_name] = caster(env[env_key])
                except ValueError as exc:
                    raise ConfigError(f"Invalid value for {env_key}={env[env_key]!r}") from exc
        return out

    @classmethod
    def load(cls, user_path: Optional[Path] = None, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Load settings from built-in defaults, an optional user file and the environment.

        Later sources override earlier ones.
        """
        try:
            with resources.files("phasebank.config").joinpath("default_settings.yaml").open("r", encoding="utf-8") as f:
                default_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to dataclass defaults.")
            default_data = {}

        user_data = {}
        if user_path is not None:
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        merged = cls._deep_merge(default_data, user_data)
        merged = cls._deep_merge(merged, cls.env_overrides(env))
        settings = cls._from_dict(merged)
        logger.debug("Settings merged: %s", settings)
        return settings

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bank_root": str(self.bank_root),
            "phases_file": None if self.phases_file is None else str(self.phases_file),
            "generate_banks": self.generate_banks,
            "log_level": self.log_level,
        }

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)
        logger.info("Saved settings to %s", path)
