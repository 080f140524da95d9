"""Host-op region: shared log loader, selection rows and limb merging.

A region holds the cells of one synthesis pass for one operation family:

    | shared_operand | shared_opcode | shared_index | shared_hit | shared_hit_inv | shared_sel |
    | filtered_operand | filtered_opcode | filtered_index | enable | merged_op |
    | indicator | merge_cont | sel |

Row 0 is the anchor row of both tables. The shared table holds the full
host-call log from row 1 on; the filtered table holds the family's own
entries (and its padding records) from row 1 on, written through a Cursor.

Shared index countdown:
    shared_index[0] = total (number of log entries in the family set)
    shared_index[i] = number of family entries strictly after log row i

so the family's entries carry total-1, total-2, ..., 0 in log order.

sel, indicator and merge_cont are fixed columns. A family always assigns
the same number of records with the same layout, genuine or padding, so
the merge layout does not depend on the log.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from host_circuits.constraints.host_op import opcode_gate_value, validate_opcodes
from host_circuits.primitives.field import BN254_SCALAR_PRIME, ff_array
from host_circuits.protocol.data import TraceData
from host_circuits.protocol.host_call import LogEntry

SHARED_COLUMNS = ('shared_operand', 'shared_opcode', 'shared_index', 'shared_hit', 'shared_hit_inv')
FILTERED_COLUMNS = ('filtered_operand', 'filtered_opcode', 'filtered_index', 'enable', 'merged_op')
FIXED_COLUMNS = ('shared_sel', 'sel', 'indicator', 'merge_cont')

ANCHOR_ROW = 0
FIRST_FILTERED_ROW = 1

# (operand, opcode, index) as read from the shared table
Entry = Tuple[int, int, int]


@dataclass
class Cursor:
    """Next free filtered row. Owned by a single synthesis pass."""
    offset: int = FIRST_FILTERED_ROW

    def advance(self) -> int:
        row = self.offset
        self.offset += 1
        return row


@dataclass(frozen=True)
class Limb:
    """A committed cell handed to a family circuit.

    Attributes:
        value: Cell value (reduced mod r)
        row: Row of the cell in the region
        column: Column holding the cell
    """
    value: int
    row: int
    column: str


def get_selected_entries(entries: Sequence[Entry], opcodes: Sequence[int]) -> List[Entry]:
    """Keep the entries whose opcode is in opcodes, in log order."""
    wanted = set(int(op) for op in opcodes)
    return [e for e in entries if e[1] in wanted]


class HostOpRegion:
    """Cells of the shared and filtered tables for one operation family."""

    def __init__(self, opcodes: Sequence[int]):
        self.opcodes = validate_opcodes(opcodes)
        self._cells: Dict[str, Dict[int, int]] = {
            name: {} for name in SHARED_COLUMNS + FILTERED_COLUMNS + FIXED_COLUMNS
        }
        self.total_count: Optional[int] = None
        self.n_log_rows = 0

    # --- Cell access ---

    def assign_cell(self, column: str, row: int, value: int) -> Limb:
        if column not in self._cells:
            raise KeyError(f"Unknown column '{column}'")
        value %= BN254_SCALAR_PRIME
        self._cells[column][row] = value
        return Limb(value=value, row=row, column=column)

    def cell(self, column: str, row: int) -> int:
        return self._cells[column].get(row, 0)

    @property
    def n_filtered_rows(self) -> int:
        """Rows used by the filtered table, anchor included."""
        used = [max(cells) + 1 for name, cells in self._cells.items()
                if name in FILTERED_COLUMNS and cells]
        return max(used, default=0)

    @property
    def n_rows(self) -> int:
        return max(self.n_filtered_rows, self.n_log_rows + 1)

    # --- Shared log loader ---

    def load_shared(self, log: Sequence[LogEntry]) -> int:
        """Lay the host-call log into the shared columns.

        Writes the anchor rows of both tables and returns the number of log
        entries belonging to this family.
        """
        total = sum(1 for e in log if e.op in self.opcodes)

        self.assign_cell('shared_operand', ANCHOR_ROW, 0)
        self.assign_cell('shared_opcode', ANCHOR_ROW, 0)
        shared_anchor = self.assign_cell('shared_index', ANCHOR_ROW, total)
        self.assign_cell('shared_hit', ANCHOR_ROW, 0)
        self.assign_cell('shared_hit_inv', ANCHOR_ROW, 0)
        self.assign_cell('shared_sel', ANCHOR_ROW, 0)

        self.assign_cell('filtered_operand', ANCHOR_ROW, 0)
        self.assign_cell('filtered_opcode', ANCHOR_ROW, 0)
        filtered_anchor = self.assign_cell('filtered_index', ANCHOR_ROW, total)
        self.assign_cell('enable', ANCHOR_ROW, 1)
        self.assign_cell('merged_op', ANCHOR_ROW, 0)
        self.assign_cell('indicator', ANCHOR_ROW, 0)
        self.assign_cell('merge_cont', ANCHOR_ROW, 0)
        self.assign_cell('sel', ANCHOR_ROW, 1)
        assert shared_anchor.value == filtered_anchor.value

        remaining = total
        for row, entry in enumerate(log, start=ANCHOR_ROW + 1):
            hit = entry.op in self.opcodes
            if hit:
                remaining -= 1
                inv = 0
            else:
                inv = pow(opcode_gate_value(entry.op, self.opcodes), -1, BN254_SCALAR_PRIME)
            self.assign_cell('shared_operand', row, entry.value)
            self.assign_cell('shared_opcode', row, entry.op)
            self.assign_cell('shared_index', row, remaining)
            self.assign_cell('shared_hit', row, int(hit))
            self.assign_cell('shared_hit_inv', row, inv)
            self.assign_cell('shared_sel', row, 1)
        assert remaining == 0

        self.total_count = total
        self.n_log_rows = len(log)
        return total

    def shared_entries(self) -> List[Entry]:
        """(operand, opcode, index) of every log row, anchor excluded."""
        return [
            (self.cell('shared_operand', row),
             self.cell('shared_opcode', row),
             self.cell('shared_index', row))
            for row in range(ANCHOR_ROW + 1, self.n_log_rows + 1)
        ]

    def selected_entries(self) -> List[Entry]:
        """Log entries of this family, in log order."""
        return get_selected_entries(self.shared_entries(), self.opcodes)

    # --- Filtered rows ---

    def _assign_filtered_row(self, row: int, operand: int, opcode: int, index: int,
                             merged: int, indicator: int, enable: bool) -> Tuple[Limb, Limb, Limb]:
        operand_cell = self.assign_cell('filtered_operand', row, operand)
        opcode_cell = self.assign_cell('filtered_opcode', row, opcode)
        self.assign_cell('filtered_index', row, index)
        self.assign_cell('enable', row, int(enable))
        self.assign_cell('sel', row, 1)
        merged_cell = self.assign_cell('merged_op', row, merged)
        self.assign_cell('indicator', row, indicator)
        self.assign_cell('merge_cont', row, int(indicator != 0))
        return operand_cell, opcode_cell, merged_cell

    def assign_one_line(self, cursor: Cursor, operand: int, opcode: int, index: int,
                        merge: int, indicator: int, enable: bool) -> Tuple[Limb, Limb]:
        """Assign a single filtered row (a group of one limb).

        Returns:
            (operand cell, opcode cell)
        """
        operand_cell, opcode_cell, _ = self._assign_filtered_row(
            cursor.advance(), operand, opcode, index, merge, indicator, enable)
        return operand_cell, opcode_cell

    def assign_merged_operands(self, cursor: Cursor, values: Sequence[Entry],
                               radix: int, enable: bool) -> Tuple[Limb, Limb]:
        """Assign a run of limbs and fold them into one merged operand.

        merged_op[i] = operand[i] + merged_op[i+1] * radix, seeded by the
        last limb, so the first limb is the least significant one. The
        indicator column holds the radix and merge_cont holds 1 on every row
        but the last.

        Returns:
            (merged_op cell of the first row, opcode cell of the first row)
        """
        assert len(values) > 0, "cannot merge an empty run of limbs"
        merged_ops = []
        acc = 0
        for operand, _, _ in reversed(values):
            acc = (operand + acc * radix) % BN254_SCALAR_PRIME
            merged_ops.append(acc)
        merged_ops.reverse()

        last = len(values) - 1
        ret = None
        for i, ((operand, opcode, index), merged) in enumerate(zip(values, merged_ops)):
            indicator = 0 if i == last else radix
            _, opcode_cell, merged_cell = self._assign_filtered_row(
                cursor.advance(), operand, opcode, index, merged, indicator, enable)
            if i == 0:
                ret = (merged_cell, opcode_cell)
        return ret

    # --- Trace ---

    def column_values(self, column: str, n: int) -> List[int]:
        cells = self._cells[column]
        return [cells.get(row, 0) for row in range(n)]

    def to_trace_data(self, n_bits: Optional[int] = None) -> TraceData:
        """Freeze the region into full-length FF columns.

        The trace keeps at least one unassigned row at the end so that row
        rotations wrapping to row 0 only ever see inert cells.
        """
        min_bits = max(2, self.n_rows.bit_length())
        if n_bits is None:
            n_bits = min_bits
        elif n_bits < min_bits:
            raise ValueError(f"Region needs {self.n_rows} rows plus one inert row; "
                             f"2^{n_bits} is too small")
        n = 1 << n_bits

        columns = {
            (name, 0): ff_array(self.column_values(name, n))
            for name in SHARED_COLUMNS + FILTERED_COLUMNS
        }
        constants = {name: ff_array(self.column_values(name, n)) for name in FIXED_COLUMNS}
        constants['__L1__'] = ff_array([1] + [0] * (n - 1))
        return TraceData(columns=columns, constants=constants, n_bits=n_bits)
