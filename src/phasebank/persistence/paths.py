from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping, Optional

BANK_ROOT_ENV = "PHASEBANK_BANK_ROOT"


def _data_home(env: Mapping[str, str]) -> Path:
    if sys.platform.startswith("win"):
        appdata = env.get("APPDATA")
        return Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    xdg = env.get("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


def default_bank_root(env: Optional[Mapping[str, str]] = None) -> Path:
    """Where bank data lives when no root is configured.

    PHASEBANK_BANK_ROOT wins when set; otherwise a ``phasebank/banks``
    directory under the platform's per-user data directory (XDG_DATA_HOME
    on Linux, Application Support on macOS, APPDATA on Windows).
    """
    env = os.environ if env is None else env
    override = env.get(BANK_ROOT_ENV)
    if override:
        return Path(override).expanduser()
    return _data_home(env) / "phasebank" / "banks"
