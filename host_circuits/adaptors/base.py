"""Operation-family adaptor interface.

An adaptor owns one family's slice of the host-call log. It declares the
family's opcodes, cuts the selected entries into fixed-size records, and
feeds each record through the region's one-line and merge primitives. The
Limbs it returns are what the family's own arithmetic circuit consumes.

Records are assigned back to back from the cursor, genuine records first,
then max_rounds(k) - used padding records built from default_table().
"""

from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

from host_circuits.constraints.host_op import HostOpConstraints
from host_circuits.primitives.field import int_to_limbs
from host_circuits.protocol.family_config import FamilyConfig, get_family_config
from host_circuits.protocol.host_call import LogEntry
from host_circuits.protocol.region import Cursor, Entry, HostOpRegion, Limb

DEFAULT_INDEX = 0
"""Index carried by every padding row; padding never reaches the lookup."""


def field_to_args(value: int, n_limbs: int, limb_bits: int, op: int) -> List[LogEntry]:
    """Encode a wide value as n_limbs host calls of limb_bits each (low limb first)."""
    return [LogEntry(op=int(op), value=limb) for limb in int_to_limbs(value, n_limbs, limb_bits)]


def assign_unmerged(region: HostOpRegion, cursor: Cursor, entry: Entry, enable: bool) -> Tuple[Limb, Limb]:
    """Assign one entry as its own group: merged_op = operand, indicator = 0."""
    operand, opcode, index = entry
    return region.assign_one_line(cursor, operand, opcode, index, operand, 0, enable)


class HostOpSelector(ABC):
    """Selection side of one operation family.

    Subclasses set `name` (a FAMILY_CONFIGS key) and `limbs_per_record`, and
    implement default_table() and assign_record().
    """

    name: str
    limbs_per_record: int

    def __init__(self):
        self.config: FamilyConfig = get_family_config(self.name)

    def opcodes(self) -> Tuple[int, ...]:
        return self.config.opcodes

    def configure(self) -> HostOpConstraints:
        """Build the family's constraint module; rejects invalid opcode sets."""
        return HostOpConstraints(self.opcodes())

    def max_rounds(self, k: int) -> int:
        return self.config.max_rounds(k)

    @abstractmethod
    def default_table(self) -> List[LogEntry]:
        """One no-op record of the family, as host calls."""
        pass

    def default_entries(self) -> List[Entry]:
        """default_table() as (operand, opcode, index) tuples, index fixed to 0."""
        return [(e.value, e.op, DEFAULT_INDEX) for e in self.default_table()]

    @abstractmethod
    def assign_record(self, region: HostOpRegion, cursor: Cursor,
                      group: Sequence[Entry], enable: bool) -> List[Limb]:
        """Assign one record of record_size entries and return its limbs."""
        pass

    def assign(self, region: HostOpRegion, k: int, cursor: Cursor) -> List[Limb]:
        """Assign every genuine record of the log, then the padding records.

        Raises:
            ValueError: If the family's log slice is not a whole number of
                records, or holds more records than max_rounds(k)
        """
        selected = region.selected_entries()
        record_size = self.config.record_size
        if len(selected) % record_size != 0:
            raise ValueError(f"{self.name}: {len(selected)} host calls is not a multiple "
                             f"of the record size {record_size}")
        used = len(selected) // record_size
        available = self.max_rounds(k)
        if used > available:
            raise ValueError(f"{self.name}: {used} records exceed the {available} "
                             f"available at k={k}")

        limbs = []
        for start in range(0, len(selected), record_size):
            limbs.extend(self.assign_record(region, cursor, selected[start:start + record_size], True))

        if available == used:
            return limbs
        default = self.default_entries()
        assert len(default) == record_size
        for _ in range(available - used):
            limbs.extend(self.assign_record(region, cursor, default, False))
        return limbs
