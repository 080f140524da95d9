"""Merkle key-value pair selection.

Record layout (9 host calls, 5 limbs):
    [0]      address
    [1..4]   root, 4 x u64
    [5..8]   value, two halves of 2 x u64
The fifth limb is the opcode cell of the value rows, which tells a set
from a get.
"""

from typing import List, Optional, Sequence

from host_circuits.protocol.host_call import ForeignInst, LogEntry
from host_circuits.protocol.region import Cursor, Entry, HostOpRegion, Limb
from .base import HostOpSelector, assign_unmerged, field_to_args

MERGE_DATA_SIZE = 2
DEFAULT_DEPTH = 32


class MerkleSelector(HostOpSelector):
    """Selection for a Merkle tree of the given depth.

    Args:
        depth: Tree depth; the default record reads leaf 1 << depth
        default_root: Root of the empty tree of that depth, as an integer.
            It comes from the Merkle store, which owns the hash function,
            and is required as soon as padding records are built.
    """

    name = "merkle"
    limbs_per_record = 5

    def __init__(self, depth: int = DEFAULT_DEPTH, default_root: Optional[int] = None):
        super().__init__()
        self.depth = depth
        self.default_root = default_root

    def to_host_call_table(self, inputs) -> List[LogEntry]:
        """Encode (address, root, (value_lo, value_hi), op) accesses."""
        bits = self.config.limb_bits
        r = []
        for address, root, value, op in inputs:
            r.append(LogEntry(op=ForeignInst.KVPairAddress, value=address))
            r.extend(field_to_args(root, self.config.merge_size, bits, ForeignInst.KVPairSetRoot))
            for v in value:
                r.extend(field_to_args(v, MERGE_DATA_SIZE, bits, op))
        return r

    def default_table(self) -> List[LogEntry]:
        """Read of leaf 1 << depth under the empty-tree root.

        Raises:
            ValueError: If no default_root was given
        """
        if self.default_root is None:
            raise ValueError(f"{self.name}: padding needs the empty-tree root of depth {self.depth}")
        return self.to_host_call_table([(1 << self.depth, self.default_root, (0, 0), ForeignInst.KVPairGet)])

    def assign_record(self, region: HostOpRegion, cursor: Cursor,
                      group: Sequence[Entry], enable: bool) -> List[Limb]:
        assert group[0][1] == ForeignInst.KVPairAddress
        limb, setget = assign_unmerged(region, cursor, group[0], enable)
        r = [limb]

        n = self.config.merge_size
        limb, _ = region.assign_merged_operands(cursor, group[1:1 + n], self.config.radix, enable)
        r.append(limb)

        for start in range(1 + n, len(group), MERGE_DATA_SIZE):
            limb, setget = region.assign_merged_operands(cursor, group[start:start + MERGE_DATA_SIZE],
                                                         self.config.radix, enable)
            r.append(limb)
        r.append(setget)
        return r
