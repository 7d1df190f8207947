from __future__ import annotations

import json
import logging
import os
import shutil
import threading
from pathlib import Path
from typing import Any, Dict, Hashable, Iterable, List, Optional

from jsonschema import Draft7Validator

from ..content import coerce_value, type_key
from ..errors import RecordingFailed
from .paths import default_bank_root
from .recorder import BankRecorder, Entry

logger = logging.getLogger(__name__)

# Increment when making breaking changes to the bank file layout
SCHEMA_VERSION = 1

BANK_FILE_SUFFIX = ".json"

BANK_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["schema_version", "resources"],
    "properties": {
        "schema_version": {"type": "integer", "minimum": 1},
        "bank": {"type": "string"},
        "content_type": {"type": "string"},
        "resources": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name"],
                "properties": {"name": {"type": "string", "minLength": 1}},
            },
        },
    },
}


class JsonFileBankRecorder(BankRecorder):
    """Stores each bank as a JSON file under ``<root>/<type key>/<bank>.json``.

    File names use the lower-cased bank name, so "Menu" and "menu" share
    one file just as they share one bank in a BankGroup.

    Writes go through a temporary file and replace the target atomically. The
    previous file is kept as ``.bak`` and used when the primary file turns out
    to be unreadable.
    """

    def __init__(self, root: Optional[Path] = None) -> None:
        self.root = Path(root) if root is not None else default_bank_root()
        self.lock = threading.RLock()
        self._validator = Draft7Validator(BANK_SCHEMA)

    def bank_path(self, bank_name: str, content_type: Hashable) -> Path:
        return self.root / type_key(content_type) / f"{bank_name.lower()}{BANK_FILE_SUFFIX}"

    # Public API

    def read_bank(self, bank_name: str, content_type: Hashable) -> List[Entry]:
        path = self.bank_path(bank_name, content_type)
        with self.lock:
            if not path.exists():
                logger.debug("No stored data for bank %s at %s", bank_name, path)
                return []
            data = self._load_with_fallback(path)
        entries = []
        for record in data["resources"]:
            try:
                value = coerce_value(content_type, record.get("value"))
            except (TypeError, ValueError, ArithmeticError) as exc:
                raise RecordingFailed(
                    f"Resource {record['name']!r} in {path} is not a valid {type_key(content_type)}"
                ) from exc
            entries.append((record["name"], value))
        logger.debug("Read %d resources for bank %s from %s", len(entries), bank_name, path)
        return entries

    def write_bank(self, bank_name: str, content_type: Hashable, contents: Iterable[Entry]) -> None:
        path = self.bank_path(bank_name, content_type)
        payload = {
            "schema_version": SCHEMA_VERSION,
            "bank": bank_name,
            "content_type": type_key(content_type),
            "resources": [{"name": name, "value": value} for name, value in contents],
        }
        try:
            text = json.dumps(payload, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as exc:
            raise RecordingFailed(f"Bank {bank_name!r} contains values that can't be stored as JSON") from exc
        with self.lock:
            try:
                self._atomic_write(path, text)
            except OSError as exc:
                logger.exception("Failed to write bank %s to %s", bank_name, path)
                raise RecordingFailed(f"Failed to save the bank data to {path}") from exc
        logger.debug("Wrote %d resources for bank %s to %s", len(payload["resources"]), bank_name, path)

    def read_bank_names(self, content_type: Hashable) -> List[str]:
        directory = self.root / type_key(content_type)
        if not directory.exists():
            return []
        if not directory.is_dir():
            raise RecordingFailed(f"Bank directory {directory} is not a directory")
        try:
            return sorted(p.stem for p in directory.iterdir() if p.is_file() and p.suffix == BANK_FILE_SUFFIX)
        except OSError as exc:
            raise RecordingFailed(f"Couldn't read file names under {directory}") from exc

    # Internal utilities

    def _load_with_fallback(self, path: Path) -> Dict[str, Any]:
        try:
            return self._read_document(path)
        except RecordingFailed as primary_exc:
            bak = path.with_suffix(path.suffix + ".bak")
            if not bak.exists():
                raise
            logger.warning("Bank file %s is unreadable (%s); trying backup %s", path, primary_exc, bak)
            try:
                return self._read_document(bak)
            except RecordingFailed:
                raise RecordingFailed(f"Unable to read bank data from {path} or its backup") from primary_exc

    def _read_document(self, path: Path) -> Dict[str, Any]:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as exc:
            raise RecordingFailed(f"Failed to read bank data from {path}") from exc
        except json.JSONDecodeError as exc:
            raise RecordingFailed(f"Invalid JSON in {path}: {exc}") from exc

        errors = sorted(self._validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
        if errors:
            for err in errors:
                logger.error("Bank file %s invalid at %s: %s", path, list(err.path), err.message)
            raise RecordingFailed(f"Bank file {path} does not match the bank schema: {errors[0].message}")

        version = data["schema_version"]
        if version > SCHEMA_VERSION:
            raise RecordingFailed(f"Bank file {path} has schema version {version}, newer than supported {SCHEMA_VERSION}")
        return data

    def _atomic_write(self, path: Path, text: str) -> None:
        """Write text to path atomically, keeping the previous file as .bak."""
        tmp = path.with_suffix(path.suffix + ".tmp")
        bak = path.with_suffix(path.suffix + ".bak")
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with tmp.open("w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
        if path.exists():
            shutil.copy2(str(path), str(bak))
        os.replace(tmp, path)
