"""Host-call log entries and the opcode registry.

The guest runtime records every foreign call as an entry
{op, value, is_ret}. A whole trace is serialized as a JSON array of such
entries (the "host call table").

Opcode 0 (Log) never belongs to an accelerated family; the selection gate
reserves it for the anchor row.
"""

import json
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List

MAX_HOST_VALUE = (1 << 64) - 1


class ForeignInst(IntEnum):
    """Host function opcodes, numbered as in the guest's host-call table."""
    Log = 0
    BlsPairG1 = 1
    BlsPairG2 = 2
    BlsPairG3 = 3
    BlsSumNew = 4
    BlsSumScalar = 5
    BlsSumG1 = 6
    BlsSumResult = 7
    Bn254PairG1 = 8
    Bn254PairG2 = 9
    Bn254PairG3 = 10
    Bn254SumNew = 11
    Bn254SumScalar = 12
    Bn254SumG1 = 13
    Bn254SumResult = 14
    KVPairSetRoot = 15
    KVPairGetRoot = 16
    KVPairAddress = 17
    KVPairSet = 18
    KVPairGet = 19
    JubjubSumNew = 20
    JubjubSumPush = 21
    JubjubSumResult = 22
    PoseidonNew = 23
    PoseidonPush = 24
    PoseidonFinalize = 25
    Keccak256New = 26
    Keccak256Push = 27
    Keccak256Finalize = 28


@dataclass(frozen=True)
class LogEntry:
    """One recorded host call.

    Attributes:
        op: Opcode (a ForeignInst value)
        value: Unsigned 64-bit operand
        is_ret: True when the value was returned by the host
    """
    op: int
    value: int
    is_ret: bool = False

    def __post_init__(self):
        if not 0 <= self.value <= MAX_HOST_VALUE:
            raise ValueError(f"Host call value {self.value} does not fit in 64 bits")
        if not 0 <= self.op <= MAX_HOST_VALUE:
            raise ValueError(f"Invalid opcode {self.op}")


@dataclass
class HostCallTable:
    """Ordered host-call log of one guest execution."""
    entries: List[LogEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    @classmethod
    def from_list(cls, data: list) -> 'HostCallTable':
        """Build from decoded JSON.

        Example JSON structure:
        [
          {"op": 20, "value": 1, "is_ret": false},
          {"op": 21, "value": 0, "is_ret": false}
        ]
        """
        if not isinstance(data, list):
            raise ValueError("Host call table must be a JSON array")
        entries = []
        for i, item in enumerate(data):
            try:
                entries.append(LogEntry(
                    op=int(item['op']),
                    value=int(item['value']),
                    is_ret=bool(item.get('is_ret', False)),
                ))
            except (KeyError, TypeError) as e:
                raise ValueError(f"Malformed host call entry {i}: {item!r}") from e
        return cls(entries=entries)

    @classmethod
    def from_json(cls, path: str) -> 'HostCallTable':
        """Load a host call table written by the host-call tracer."""
        with open(path, 'r') as f:
            data = json.load(f)
        return cls.from_list(data)

    def to_list(self) -> list:
        return [{'op': int(e.op), 'value': e.value, 'is_ret': e.is_ret} for e in self.entries]

    def to_json(self, path: str) -> None:
        with open(path, 'w') as f:
            json.dump(self.to_list(), f, indent=2)
