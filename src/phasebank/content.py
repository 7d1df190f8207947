from __future__ import annotations

from enum import Enum
from typing import Any, Hashable, Iterable, Mapping


class ContentType(str, Enum):
    """Stock content types.

    Any hashable tag can act as a content type; this enum covers the common
    cases and knows how to normalize values read back from storage.
    """

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    MODEL = "model"
    LIST = "list"
    SPRITE = "sprite"
    SOUND = "sound"

    def coerce(self, value: Any) -> Any:
        if value is None:
            return None
        if self is ContentType.INTEGER:
            return int(value)
        if self is ContentType.FLOAT:
            return float(value)
        if self is ContentType.BOOLEAN:
            if isinstance(value, str):
                return value.strip().lower() in {"1", "true", "yes", "on"}
            return bool(value)
        if self is ContentType.STRING:
            return str(value)
        if self is ContentType.MODEL:
            return dict(value)
        if self is ContentType.LIST:
            return list(value)
        # Sprites and sounds are stored as references (paths, ids); keep as-is
        return value

    def __str__(self) -> str:
        return self.value


def type_key(content_type: Hashable) -> str:
    """Return the string used for a content type in files and directories."""
    if isinstance(content_type, Enum) and isinstance(content_type.value, str):
        return content_type.value
    return str(content_type)


def coerce_value(content_type: Hashable, value: Any) -> Any:
    coerce = getattr(content_type, "coerce", None)
    if callable(coerce):
        return coerce(value)
    return value


def types_by_key(content_types: Iterable[Hashable]) -> Mapping[str, Hashable]:
    return {type_key(ct).lower(): ct for ct in content_types}
