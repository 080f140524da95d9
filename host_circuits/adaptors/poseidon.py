"""Poseidon hash selection.

Record layout (37 host calls, 10 limbs):
    [0]       new (1 starts a fresh sponge)
    [1..32]   8 inputs, 4 x u64 each
    [33..36]  result, 4 x u64
"""

from typing import List, Optional, Sequence

from host_circuits.protocol.host_call import ForeignInst, LogEntry
from host_circuits.protocol.region import Cursor, Entry, HostOpRegion, Limb
from .base import HostOpSelector, assign_unmerged, field_to_args

RATE = 8

# One absorbed block of the default record
DEFAULT_INPUTS = [1] + [0] * (RATE - 1)


def poseidon_new(restart: bool) -> List[LogEntry]:
    return [LogEntry(op=ForeignInst.PoseidonNew, value=1 if restart else 0)]


class PoseidonSelector(HostOpSelector):
    """Selection for Poseidon over BN254 with rate 8.

    Args:
        default_digest: Squeezed output of a fresh sponge after absorbing
            DEFAULT_INPUTS. It comes from the hasher, which owns the
            permutation, and is required as soon as padding records are built.
    """

    name = "poseidon"
    limbs_per_record = 1 + RATE + 1

    def __init__(self, default_digest: Optional[int] = None):
        super().__init__()
        self.default_digest = default_digest

    def to_host_call_table(self, inputs: Sequence[int], result: int) -> List[LogEntry]:
        assert len(inputs) == RATE
        n, bits = self.config.merge_size, self.config.limb_bits
        r = poseidon_new(True)
        for f in inputs:
            r.extend(field_to_args(f, n, bits, ForeignInst.PoseidonPush))
        r.extend(field_to_args(result, n, bits, ForeignInst.PoseidonFinalize))
        return r

    def default_table(self) -> List[LogEntry]:
        """Raises ValueError if no default_digest was given."""
        if self.default_digest is None:
            raise ValueError(f"{self.name}: padding needs the digest of {DEFAULT_INPUTS}")
        return self.to_host_call_table(DEFAULT_INPUTS, self.default_digest)

    def assign_record(self, region: HostOpRegion, cursor: Cursor,
                      group: Sequence[Entry], enable: bool) -> List[Limb]:
        assert group[0][1] == ForeignInst.PoseidonNew
        limb, _ = assign_unmerged(region, cursor, group[0], enable)
        r = [limb]
        n = self.config.merge_size
        for start in range(1, len(group), n):
            limb, _ = region.assign_merged_operands(cursor, group[start:start + n],
                                                    self.config.radix, enable)
            r.append(limb)
        return r
