"""Synthesis driver: from a host-call log to a checked host-op trace.

One synthesis pass for one operation family:
1. Load the whole log into the shared columns (anchor row included)
2. Let the family adaptor assign its genuine and padding records
3. Freeze the region into a trace and count lookup multiplicities
4. Derive std_alpha and std_gamma from the committed columns
5. Compute the lookup intermediates and gsum, then std_vc

The cursor and region live only for the duration of the pass.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from host_circuits.adaptors.base import HostOpSelector
from host_circuits.constraints.base import ConstraintModule, TraceConstraintContext
from host_circuits.primitives.field import nonzero_rows
from host_circuits.primitives.transcript import Transcript
from host_circuits.protocol.data import TraceData
from host_circuits.protocol.host_call import LogEntry
from host_circuits.protocol.region import (
    FILTERED_COLUMNS,
    SHARED_COLUMNS,
    Cursor,
    HostOpRegion,
    Limb,
)
from host_circuits.witness import get_witness_module
from host_circuits.witness.base import WitnessModule

# Columns absorbed before the lookup challenges are drawn
COMMITTED_COLUMNS = SHARED_COLUMNS + FILTERED_COLUMNS + ('mul',)

# Rows listed per failing constraint in diagnostics
MAX_REPORTED_ROWS = 8


@dataclass
class HostOpAssignment:
    """Result of one synthesis pass.

    Attributes:
        limbs: Reconstructed operands, genuine records first, then padding
        trace: Full trace with witness columns and challenges
        constraints: Constraint module of the family
        total_count: Number of log entries owned by the family
    """
    limbs: List[Limb]
    trace: TraceData
    constraints: ConstraintModule
    total_count: int


def synthesize(selector: HostOpSelector, log: Sequence[LogEntry], k: int,
               n_bits: Optional[int] = None) -> HostOpAssignment:
    """Run one synthesis pass of a family over a host-call log.

    Args:
        selector: Family adaptor
        log: Ordered host-call log
        k: Circuit size parameter, sets the padding budget
        n_bits: Trace size override (log2 rows); smallest fitting size if None

    Raises:
        ValueError: On configuration errors (see HostOpSelector.assign)
    """
    constraints = selector.configure()
    region = HostOpRegion(selector.opcodes())
    total = region.load_shared(log)
    cursor = Cursor()
    limbs = selector.assign(region, k, cursor)

    trace = build_trace(region, get_witness_module(selector.name), n_bits)
    return HostOpAssignment(limbs=limbs, trace=trace, constraints=constraints, total_count=total)


def build_trace(region: HostOpRegion, witness: WitnessModule,
                n_bits: Optional[int] = None) -> TraceData:
    """Freeze an assigned region and complete it with the lookup witness."""
    trace = region.to_trace_data(n_bits)
    ctx = TraceConstraintContext(trace)
    trace.update_columns({('mul', 0): witness.compute_multiplicities(ctx)})

    transcript = Transcript()
    for name in COMMITTED_COLUMNS:
        transcript.put(trace.columns[(name, 0)].tolist())
    trace.challenges['std_alpha'] = transcript.get_field()
    trace.challenges['std_gamma'] = transcript.get_field()

    complete_witness(trace, witness)
    transcript.put(trace.columns[('gsum', 0)].tolist())
    trace.challenges['std_vc'] = transcript.get_field()
    return trace


def complete_witness(trace: TraceData, witness: WitnessModule) -> None:
    """(Re)compute the challenge-dependent columns of a trace in place."""
    ctx = TraceConstraintContext(trace)
    for name, polys in witness.compute_intermediates(ctx).items():
        trace.update_columns({(name, idx): poly for idx, poly in polys.items()})
    for name, poly in witness.compute_grand_sums(ctx).items():
        trace.update_columns({(name, 0): poly})


def failing_rows(module: ConstraintModule, trace: TraceData) -> Dict[str, List[int]]:
    """Rows at which each constraint evaluates to non-zero; satisfied ones omitted."""
    ctx = TraceConstraintContext(trace)
    failures = {}
    for name, poly in module.constraints(ctx).items():
        rows = nonzero_rows(poly)
        if rows:
            failures[name] = rows
    return failures


def verify_constraints(module: ConstraintModule, trace: TraceData) -> bool:
    """Check that every constraint vanishes on every row of the trace.

    Failing constraints are reported by name with their first rows.
    """
    print("Verifying host op constraints")
    failures = failing_rows(module, trace)
    for name, rows in failures.items():
        shown = ", ".join(str(r) for r in rows[:MAX_REPORTED_ROWS])
        more = f" (+{len(rows) - MAX_REPORTED_ROWS} more)" if len(rows) > MAX_REPORTED_ROWS else ""
        print(f"ERROR: Constraint {name} failed at rows {shown}{more}")
    return not failures
