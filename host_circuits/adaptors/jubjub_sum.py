"""Jubjub multi-scalar sum selection.

Record layout (21 host calls, 6 limbs):
    [0]      new (1 restarts the accumulator, 0 continues)
    [1..4]   point.x     4 x u64
    [5..8]   point.y     4 x u64
    [9..12]  scalar      4 x u64
    [13..16] result.x    4 x u64
    [17..20] result.y    4 x u64
"""

from typing import List, Sequence, Tuple

from host_circuits.protocol.host_call import ForeignInst, LogEntry
from host_circuits.protocol.region import Cursor, Entry, HostOpRegion, Limb
from .base import HostOpSelector, assign_unmerged, field_to_args

# Twisted Edwards identity (x, y)
IDENTITY = (0, 1)


def jubjub_sum_new(restart: bool) -> List[LogEntry]:
    return [LogEntry(op=ForeignInst.JubjubSumNew, value=1 if restart else 0)]


class JubjubSumSelector(HostOpSelector):
    name = "jubjub_sum"
    limbs_per_record = 6

    def to_host_call_table(self, inputs: Sequence[Tuple[Tuple[int, int], int, Tuple[int, int]]]) -> List[LogEntry]:
        """Encode (point, scalar, running result) triples, restarting on the first."""
        n, bits = self.config.merge_size, self.config.limb_bits
        r = []
        for i, ((px, py), scalar, (rx, ry)) in enumerate(inputs):
            r.extend(jubjub_sum_new(i == 0))
            for v in (px, py, scalar):
                r.extend(field_to_args(v, n, bits, ForeignInst.JubjubSumPush))
            for v in (rx, ry):
                r.extend(field_to_args(v, n, bits, ForeignInst.JubjubSumResult))
        return r

    def default_table(self) -> List[LogEntry]:
        # identity * 1 == identity
        return self.to_host_call_table([(IDENTITY, 1, IDENTITY)])

    def assign_record(self, region: HostOpRegion, cursor: Cursor,
                      group: Sequence[Entry], enable: bool) -> List[Limb]:
        assert group[0][1] == ForeignInst.JubjubSumNew
        limb, _ = assign_unmerged(region, cursor, group[0], enable)
        r = [limb]
        n = self.config.merge_size
        for start in range(1, len(group), n):
            limb, _ = region.assign_merged_operands(cursor, group[start:start + n],
                                                    self.config.radix, enable)
            r.append(limb)
        return r
