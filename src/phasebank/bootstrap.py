from __future__ import annotations

import logging
from typing import Hashable, Iterable, Optional

from .bank_group import BankGroup
from .content import ContentType
from .manager import ResourceManager
from .persistence.files import JsonFileBankRecorder
from .persistence.phases import read_phases
from .persistence.recorder import BankRecorder
from .settings import Settings

logger = logging.getLogger(__name__)


def build_manager(
    settings: Settings,
    content_types: Optional[Iterable[Hashable]] = None,
    recorder: Optional[BankRecorder] = None,
) -> ResourceManager:
    """Wire up a ResourceManager from settings.

    One bank group per content type is created (read from storage when
    ``settings.generate_banks`` is set), phases are read from the phases file
    if it exists, and the banks the phases name are generated. No phase is
    started.
    """
    types = list(content_types) if content_types is not None else list(ContentType)
    recorder = recorder or JsonFileBankRecorder(settings.bank_root)

    manager = ResourceManager()
    for content_type in types:
        manager.introduce_bank_group(BankGroup.from_recorder(content_type, recorder, generate=settings.generate_banks))

    phases_path = settings.resolved_phases_file
    if phases_path is not None and phases_path.exists():
        manager.introduce_phases(read_phases(phases_path, types))
    elif phases_path is not None:
        logger.info("No phases file at %s; starting without phases", phases_path)

    manager.generate_banks_based_on_phases()
    logger.info(
        "Resource manager ready: %d bank groups, %d phases",
        len(manager.bank_groups),
        len(manager.phases),
    )
    return manager
