from __future__ import annotations

import logging
from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple, Union

from .bank import Bank
from .bank_group import BankGroup
from .content import type_key
from .errors import PhaseNotIntroduced
from .phase import Phase

logger = logging.getLogger(__name__)

PhaseRef = Union[Phase, str]


class ResourceManager:
    """Activates and deactivates banks as phases start and end.

    The manager is not used for reading resources; callers keep references to
    the bank groups for that. Phase transitions must be driven from a single
    owner, the manager does no locking of its own.

    - start_phase(phase, end_others): add a phase (optionally ending all others)
    - switch_phase(old, new): replace one phase with another in a single pass
    - end_phase(phase): remove a phase
    - reconcile(): bring bank state in line with the active phases
    """

    def __init__(
        self,
        bank_groups: Optional[Iterable[BankGroup[Any]]] = None,
        phases: Optional[Iterable[Phase]] = None,
    ) -> None:
        self._bank_groups: Dict[Hashable, BankGroup[Any]] = {}
        self._known_phases: Dict[str, Phase] = {}
        self._active_phases: List[Phase] = []
        self.introduce_bank_groups(bank_groups or [])
        self.introduce_phases(phases or [])

    # Registration

    def introduce_bank_group(self, group: BankGroup[Any]) -> None:
        """Manage a bank group, replacing any previous group of the same type."""
        previous = self._bank_groups.get(group.content_type)
        if previous is not None and previous is not group:
            logger.debug("Replacing %s bank group", type_key(group.content_type))
        self._bank_groups[group.content_type] = group

    def introduce_bank_groups(self, groups: Iterable[BankGroup[Any]]) -> None:
        for group in groups:
            self.introduce_bank_group(group)

    def introduce_phase(self, phase: Phase) -> None:
        """Register a phase. A phase with an already known name is ignored."""
        key = phase.name.lower()
        if key in self._known_phases:
            logger.debug("Phase %s already introduced; ignoring", phase.name)
            return
        self._known_phases[key] = phase

    def introduce_phases(self, phases: Iterable[Phase]) -> None:
        for phase in phases:
            self.introduce_phase(phase)

    def generate_banks_based_on_phases(self) -> None:
        """Create every bank named by a known phase in the matching group.

        Run once after all groups and phases are introduced so reconciling
        never has to create banks.
        """
        for group in self._bank_groups.values():
            for phase in self._known_phases.values():
                group.ensure_all(phase.active_bank_names(group.content_type))

    # Accessors

    def get_phase(self, phase_name: str) -> Phase:
        try:
            return self._known_phases[phase_name.lower()]
        except KeyError:
            raise PhaseNotIntroduced(phase_name) from None

    def get_bank_group(self, content_type: Hashable) -> Optional[BankGroup[Any]]:
        return self._bank_groups.get(content_type)

    @property
    def phases(self) -> List[Phase]:
        return list(self._known_phases.values())

    @property
    def bank_groups(self) -> List[BankGroup[Any]]:
        return list(self._bank_groups.values())

    @property
    def active_phases(self) -> Tuple[Phase, ...]:
        return tuple(self._active_phases)

    def is_phase_active(self, phase: PhaseRef) -> bool:
        return self._resolve(phase) in self._active_phases

    # Phase transitions

    def start_phase(self, phase: PhaseRef, end_others: bool = False) -> None:
        new_phase = self._resolve(phase)
        if end_others:
            self._active_phases.clear()
        if new_phase not in self._active_phases:
            self._active_phases.append(new_phase)
        logger.debug("Started phase %s (active: %s)", new_phase, self._active_names())
        self.reconcile()

    def switch_phase(self, old: PhaseRef, new: PhaseRef) -> None:
        old_phase = self._resolve(old)
        new_phase = self._resolve(new)
        if old_phase in self._active_phases:
            self._active_phases.remove(old_phase)
        if new_phase not in self._active_phases:
            self._active_phases.append(new_phase)
        logger.debug("Switched phase %s -> %s (active: %s)", old_phase, new_phase, self._active_names())
        self.reconcile()

    def end_phase(self, phase: PhaseRef) -> None:
        old_phase = self._resolve(phase)
        if old_phase not in self._active_phases:
            return
        self._active_phases.remove(old_phase)
        logger.debug("Ended phase %s (active: %s)", old_phase, self._active_names())
        self.reconcile()

    def reconcile(self) -> None:
        """Initialize banks required by an active phase and clear all others.

        Banks already in the right state are not touched. If a bank fails,
        RecordingFailed propagates and banks handled before it keep their new
        state; calling reconcile() again retries the rest.
        """
        for group in self._bank_groups.values():
            for bank in group.list_banks():
                required = self._is_required(bank)
                if required and not bank.initialized:
                    bank.initialize()
                elif not required and bank.initialized:
                    bank.uninitialize()

    # Persistence

    def save_banks(self) -> None:
        """Save every bank of every group, whether or not it is initialized."""
        for group in self._bank_groups.values():
            group.save()

    # Internal utilities

    def _resolve(self, phase: PhaseRef) -> Phase:
        name = phase.name if isinstance(phase, Phase) else phase
        return self.get_phase(name)

    def _is_required(self, bank: Bank[Any]) -> bool:
        return any(phase.is_bank_active(bank) for phase in self._active_phases)

    def _active_names(self) -> List[str]:
        return [phase.name for phase in self._active_phases]
