"""Reading and writing phase definitions as YAML.

Document layout::

    phases:
      - name: phase1
        banks:
          string: [stringForAll, stringFor1Only]
          integer: [sharedInteger12]
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Hashable, Iterable, List, Optional

import yaml
from jsonschema import Draft7Validator

from ..content import ContentType, types_by_key
from ..errors import ConfigError
from ..phase import Phase

logger = logging.getLogger(__name__)

PHASES_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["phases"],
    "properties": {
        "phases": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name"],
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "banks": {
                        "type": ["object", "null"],
                        "additionalProperties": {
                            "type": ["array", "null"],
                            "items": {"type": "string", "minLength": 1},
                        },
                    },
                },
            },
        }
    },
}


def phases_to_dict(phases: Iterable[Phase]) -> Dict[str, Any]:
    return {"phases": [phase.to_dict() for phase in phases]}


def phases_from_dict(data: Any, content_types: Optional[Iterable[Hashable]] = None) -> List[Phase]:
    """Validate a phase document and build the phases it describes.

    Raises ConfigError if the document is invalid or names an unknown
    content type.
    """
    validator = Draft7Validator(PHASES_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errors:
        for err in errors:
            path = "/".join(str(p) for p in err.path) or "<root>"
            logger.error("Phase document invalid at %s: %s", path, err.message)
        raise ConfigError(f"Invalid phase document: {errors[0].message}")

    known = types_by_key(content_types if content_types is not None else ContentType)
    phases = []
    for entry in data["phases"]:
        try:
            phases.append(Phase.from_dict(entry, known))
        except KeyError as exc:
            raise ConfigError(f"Phase {entry['name']!r} uses unknown content type {exc.args[0]!r}") from exc
    return phases


def read_phases(path: Path, content_types: Optional[Iterable[Hashable]] = None) -> List[Phase]:
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {"phases": []}
    except OSError as exc:
        raise ConfigError(f"Couldn't read phases from {path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    phases = phases_from_dict(data, content_types)
    logger.info("Read %d phases from %s", len(phases), path)
    return phases


def write_phases(phases: Iterable[Phase], path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(phases_to_dict(phases), f, sort_keys=False)
    logger.info("Wrote phases to %s", path)
