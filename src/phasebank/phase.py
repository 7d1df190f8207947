from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Hashable, Iterable, List, Mapping, Set

from .content import type_key

if TYPE_CHECKING:
    from .bank import Bank


class Phase:
    """A named program state and the banks it needs kept available.

    Bank names are stored lower-cased, so membership checks are
    case-insensitive just like bank lookups in a BankGroup.
    """

    def __init__(self, name: str, banks: Mapping[Hashable, Iterable[str]] | None = None) -> None:
        if not name:
            raise ValueError("Phase name must be a non-empty string")
        self._name = name
        self._active_bank_names: Dict[Hashable, Set[str]] = {}
        for content_type, names in (banks or {}).items():
            self.set_active_bank_names(content_type, names)

    @property
    def name(self) -> str:
        return self._name

    def content_types(self) -> List[Hashable]:
        return list(self._active_bank_names)

    def active_bank_names(self, content_type: Hashable) -> Set[str]:
        """Return the bank names of a type used during this phase (a copy)."""
        return set(self._active_bank_names.get(content_type, ()))

    def add_active_bank(self, content_type: Hashable, bank_name: str) -> None:
        self._active_bank_names.setdefault(content_type, set()).add(bank_name.lower())

    def set_active_bank_names(self, content_type: Hashable, bank_names: Iterable[str]) -> None:
        self._active_bank_names[content_type] = {name.lower() for name in bank_names}

    def bank_is_active(self, content_type: Hashable, bank_name: str) -> bool:
        return bank_name.lower() in self._active_bank_names.get(content_type, ())

    def is_bank_active(self, bank: Bank[Any]) -> bool:
        return self.bank_is_active(bank.content_type, bank.name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self._name,
            "banks": {
                type_key(ct): sorted(names)
                for ct, names in self._active_bank_names.items()
            },
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any], content_types: Mapping[str, Hashable]) -> "Phase":
        """Build a phase from ``to_dict`` output.

        ``content_types`` maps lower-cased type keys to content types; an
        unknown key raises KeyError.
        """
        phase = Phase(data["name"])
        for key, names in (data.get("banks") or {}).items():
            phase.set_active_bank_names(content_types[key.lower()], names or [])
        return phase

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        declared = ", ".join(f"{type_key(ct)}={sorted(names)}" for ct, names in self._active_bank_names.items())
        return f"Phase({self._name!r}{', ' if declared else ''}{declared})"
