"""Keccak-256 selection.

Record layout (22 host calls, 22 limbs, no folding):
    [0]       new (1 starts a fresh sponge)
    [1..17]   one rate block, 17 x u64 lanes
    [18..21]  digest, 4 x u64 lanes

Lanes are little-endian 64-bit words of the byte stream.
"""

from typing import List, Sequence

from host_circuits.protocol.host_call import ForeignInst, LogEntry
from host_circuits.protocol.region import Cursor, Entry, HostOpRegion, Limb
from .base import HostOpSelector, assign_unmerged

RATE_LANES = 17
DIGEST_LANES = 4

EMPTY_KECCAK256_DIGEST = bytes.fromhex(
    "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470")
"""Keccak-256 of the empty message."""

# Empty message after pad10*1: first byte 0x01, last rate byte 0x80
EMPTY_BLOCK_LANES = [1] + [0] * (RATE_LANES - 2) + [1 << 63]


def bytes_to_lanes(data: bytes) -> List[int]:
    assert len(data) % 8 == 0
    return [int.from_bytes(data[i:i + 8], "little") for i in range(0, len(data), 8)]


def hash_to_host_call_table(block: Sequence[int], digest: Sequence[int]) -> List[LogEntry]:
    assert len(block) == RATE_LANES and len(digest) == DIGEST_LANES
    r = [LogEntry(op=ForeignInst.Keccak256New, value=1)]
    r.extend(LogEntry(op=ForeignInst.Keccak256Push, value=lane) for lane in block)
    r.extend(LogEntry(op=ForeignInst.Keccak256Finalize, value=lane) for lane in digest)
    return r


class Keccak256Selector(HostOpSelector):
    name = "keccak256"
    limbs_per_record = 1 + RATE_LANES + DIGEST_LANES

    def default_table(self) -> List[LogEntry]:
        return hash_to_host_call_table(EMPTY_BLOCK_LANES, bytes_to_lanes(EMPTY_KECCAK256_DIGEST))

    def assign_record(self, region: HostOpRegion, cursor: Cursor,
                      group: Sequence[Entry], enable: bool) -> List[Limb]:
        assert group[0][1] == ForeignInst.Keccak256New
        r = []
        for entry in group:
            limb, _ = assign_unmerged(region, cursor, entry, enable)
            r.append(limb)
        return r
