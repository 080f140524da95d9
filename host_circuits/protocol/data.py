"""Data structures for constraint and witness module evaluation.

Architecture Overview:
    Synthesis uses a two-layer data model:

    1. HostOpRegion (protocol/region.py)
       - Sparse cell storage addressed by (column, row)
       - Used by: the loader, the merge engine and the family adaptors
       - Cells are plain integers while the region is being filled

    2. TraceData (this module)
       - Dict-based storage with named, full-length FF columns
       - Used by: constraint modules, witness modules
       - Readable for the gate definitions

    HostOpRegion.to_trace_data() converts the first into the second once all
    rows of a synthesis pass are assigned.

Usage:
    trace = region.to_trace_data()
    ctx = TraceConstraintContext(trace)
    failing = constraint_module.constraints(ctx)
"""

from dataclasses import dataclass, field

from host_circuits.primitives.field import FF, FFPoly


@dataclass
class TraceData:
    """Column data for constraint/witness module evaluation.

    Columns are keyed by (name, index) tuples, matching the multi-column
    addressing used by the constraint context.

    Attributes:
        columns: Witness columns keyed by (name, index)
        constants: Fixed columns keyed by name (e.g. '__L1__', 'sel')
        challenges: Fiat-Shamir challenges keyed by name (e.g. 'std_alpha')
        n_bits: log2 of the number of rows
    """
    columns: dict[tuple[str, int], FFPoly] = field(default_factory=dict)
    constants: dict[str, FFPoly] = field(default_factory=dict)
    challenges: dict[str, FF] = field(default_factory=dict)
    n_bits: int = 0

    @property
    def n_rows(self) -> int:
        return 1 << self.n_bits

    def update_columns(self, new_columns: dict[tuple[str, int], FFPoly]) -> None:
        """Add new columns (e.g., intermediates from witness generation)."""
        self.columns.update(new_columns)
