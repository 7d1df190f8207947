import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from phasebank import BankGroup, ContentType, InMemoryBankRecorder, Phase, ResourceManager  # noqa: E402


@pytest.fixture
def recorder() -> InMemoryBankRecorder:
    return InMemoryBankRecorder()


def make_phases():
    phase1 = Phase("phase1")
    phase1.add_active_bank(ContentType.STRING, "stringForAll")
    phase1.add_active_bank(ContentType.STRING, "stringFor1Only")
    phase1.add_active_bank(ContentType.INTEGER, "sharedInteger12")

    phase2 = Phase("phase2")
    phase2.add_active_bank(ContentType.STRING, "stringForAll")
    phase2.add_active_bank(ContentType.INTEGER, "integerFor2Only")
    phase2.add_active_bank(ContentType.INTEGER, "sharedInteger12")

    phase3 = Phase("phase3")
    phase3.add_active_bank(ContentType.STRING, "stringForAll")
    return [phase1, phase2, phase3]


@pytest.fixture
def game(recorder: InMemoryBankRecorder):
    """Manager with string and integer groups, three phases and seeded banks."""
    strings = BankGroup(ContentType.STRING, recorder)
    ints = BankGroup(ContentType.INTEGER, recorder)
    manager = ResourceManager([strings, ints], make_phases())
    manager.generate_banks_based_on_phases()

    strings.put("stringForAll", "string1", "Tämä on string1")
    strings.put("stringForAll", "xml", "<root><asd/></root>")
    strings.put("stringFor1Only", "secret", "Secret string for phase 1 only")
    ints.put("sharedInteger12", "width", 1920)
    ints.put("sharedInteger12", "height", 1080)
    ints.put("integerFor2Only", "secret", 70 * 7)
    manager.save_banks()
    # Drop the seeded in-memory contents so state comes from the recorder only
    for group in manager.bank_groups:
        for bank in group.list_banks():
            bank.initialize()
            bank.uninitialize()
    recorder.reset_counters()
    return manager, strings, ints
