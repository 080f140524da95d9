"""BLS12-381 G1 scalar sum selection.

Record layout (40 host calls, 22 limbs):
    [0]       new
    [1..5]    scalar, 5 x u54: (1,2) and (3,4) merged, 5 on its own
    [6..22]   G1 input: 8 merged pairs of u54 (x then y), identity flag
    [23..39]  result, same shape as the input

Merged pairs are 108-bit values; a coordinate spans four of them.
"""

from typing import List, Sequence

from host_circuits.protocol.host_call import ForeignInst, LogEntry
from host_circuits.protocol.region import Cursor, Entry, HostOpRegion, Limb
from .base import HostOpSelector, assign_unmerged, field_to_args

FR_SIZE = 5
FQ_SIZE = 8
G1_SIZE = 2 * FQ_SIZE + 1
G1_OFFSETS = (1 + FR_SIZE, 1 + FR_SIZE + G1_SIZE)


def bls381_fr_default(op: int) -> List[LogEntry]:
    return [LogEntry(op=int(op), value=0) for _ in range(FR_SIZE)]


def bls381_g1_to_args(x: int, y: int, is_identity: bool, op: int, limb_bits: int) -> List[LogEntry]:
    r = field_to_args(x, FQ_SIZE, limb_bits, op)
    r.extend(field_to_args(y, FQ_SIZE, limb_bits, op))
    r.append(LogEntry(op=int(op), value=int(is_identity)))
    return r


class Bls381SumSelector(HostOpSelector):
    name = "bls381_sum"
    limbs_per_record = 1 + 3 + 2 * (FQ_SIZE + 1)

    def bls381_g1_default(self, op: int) -> List[LogEntry]:
        # The identity is stored with x = 0; y is written as x again
        return bls381_g1_to_args(0, 0, True, op, self.config.limb_bits)

    def default_table(self) -> List[LogEntry]:
        r = [LogEntry(op=ForeignInst.BlsSumNew, value=1)]
        r.extend(bls381_fr_default(ForeignInst.BlsSumScalar))
        r.extend(self.bls381_g1_default(ForeignInst.BlsSumG1))
        r.extend(self.bls381_g1_default(ForeignInst.BlsSumResult))
        return r

    def _merge_pair(self, region: HostOpRegion, cursor: Cursor,
                    group: Sequence[Entry], start: int, enable: bool) -> Limb:
        limb, _ = region.assign_merged_operands(cursor, group[start:start + 2],
                                                self.config.radix, enable)
        return limb

    def assign_record(self, region: HostOpRegion, cursor: Cursor,
                      group: Sequence[Entry], enable: bool) -> List[Limb]:
        # whether new is zero or not
        limb, _ = assign_unmerged(region, cursor, group[0], enable)
        r = [limb]

        # Fr (5 * u54, 3 limbs)
        for i in range(2):
            r.append(self._merge_pair(region, cursor, group, 1 + 2 * i, enable))
        limb, _ = assign_unmerged(region, cursor, group[FR_SIZE], enable)
        r.append(limb)

        # G1 and sum
        for offset in G1_OFFSETS:
            for i in range(FQ_SIZE):
                r.append(self._merge_pair(region, cursor, group, offset + 2 * i, enable))
            limb, _ = assign_unmerged(region, cursor, group[offset + 2 * FQ_SIZE], enable)
            r.append(limb)
        return r
