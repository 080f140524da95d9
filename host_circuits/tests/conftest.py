"""Pytest configuration for host_circuits tests."""

import sys
from dataclasses import replace
from pathlib import Path

import pytest

# Add the project root to the path so absolute imports work without installing
root_dir = Path(__file__).parent.parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

from host_circuits.adaptors.base import HostOpSelector, assign_unmerged  # noqa: E402
from host_circuits.protocol.host_call import ForeignInst, LogEntry  # noqa: E402

NEW = ForeignInst.Keccak256New
PUSH = ForeignInst.Keccak256Push
FINALIZE = ForeignInst.Keccak256Finalize
HASH_OPCODES = (NEW, PUSH, FINALIZE)


def hash_record(new=1, push=5, finalize=0):
    """NEW, PUSH x 8, FINALIZE x 4."""
    return ([LogEntry(NEW, new)] + [LogEntry(PUSH, push)] * 8 + [LogEntry(FINALIZE, finalize)] * 4)


class PairedPushSelector(HostOpSelector):
    """13-call hash records: new on its own, pushes folded in pairs, four digest words.

    Row layout of the first record (row 0 is the anchor):
        1 new | 2..9 pushes, groups (2,3) (4,5) (6,7) (8,9) | 10..13 digest
    """

    name = "keccak256"
    limbs_per_record = 1 + 4 + 4

    def __init__(self, reference_max: int = 2):
        super().__init__()
        self.config = replace(self.config, record_size=13, reference_max=reference_max)

    def default_table(self):
        return hash_record(new=1, push=0, finalize=0)

    def assign_record(self, region, cursor, group, enable):
        limb, _ = assign_unmerged(region, cursor, group[0], enable)
        r = [limb]
        for start in range(1, 9, 2):
            limb, _ = region.assign_merged_operands(cursor, group[start:start + 2], 1 << 64, enable)
            r.append(limb)
        for entry in group[9:]:
            limb, _ = assign_unmerged(region, cursor, entry, enable)
            r.append(limb)
        return r


@pytest.fixture
def hash_record_log():
    """One hash record and nothing else."""
    return hash_record()


@pytest.fixture
def noisy_log():
    """One hash record interleaved with calls of other families."""
    record = hash_record(new=1, push=7, finalize=9)
    log = [LogEntry(ForeignInst.Log, 0), LogEntry(ForeignInst.JubjubSumNew, 1)]
    for i, entry in enumerate(record):
        log.append(entry)
        if i % 4 == 0:
            log.append(LogEntry(ForeignInst.KVPairGet, 100 + i))
    log.append(LogEntry(ForeignInst.Log, 3))
    return log


@pytest.fixture
def paired_push_selector():
    return PairedPushSelector()


@pytest.fixture
def small_budget():
    """Shrink a real adaptor's padding budget to keep traces short."""
    def shrink(selector: HostOpSelector, reference_max: int = 1) -> HostOpSelector:
        selector.config = replace(selector.config, reference_max=reference_max)
        return selector
    return shrink
