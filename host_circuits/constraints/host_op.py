"""Host-op selection and merge constraint evaluation.

Columns (see protocol/region.py for the layout):
- shared_operand, shared_opcode, shared_index: the host-call log, anchor at row 0
- shared_hit, shared_hit_inv: is-zero witness of the opcode gate on log rows
- filtered_operand, filtered_opcode, filtered_index: the family's selected rows
- enable: 1 on genuine rows, 0 on padding
- merged_op: limb folding accumulator
- mul: lookup multiplicity of each shared row
- im_filtered, im_shared, gsum: log-derivative lookup intermediates

Fixed columns: __L1__ (first row), shared_sel (log rows), sel (filtered rows),
indicator (merge radix), merge_cont (1 on every limb row but a group's last).

With P(x) = prod_k (x - opcode_k) over the family's opcodes:

Shared countdown
    C0: shared_hit * (1 - shared_hit)
    C1: (1 - shared_sel) * shared_hit
    C2: shared_hit * P(shared_opcode)
    C3: shared_sel * (1 - shared_hit - P(shared_opcode) * shared_hit_inv)
    C4: shared_sel * (prev_shared_index - shared_index - shared_hit)
    C5: (shared_sel + L1) * (1 - next_shared_sel) * shared_index
Anchor
    C6: L1 * (filtered_index - shared_index)
    C7: L1 * shared_opcode
    C8: L1 * (1 - enable)
Selection
    C9:  enable * (1 - enable)
    C10: (1 - sel) * enable
    C11: sel * (enable - 1) * next_enable
    C12: (1 - L1) * enable * P(filtered_opcode)
    C13: enable * next_enable * (filtered_index - next_filtered_index - 1)
    C14: enable * filtered_index * (1 - next_enable)
Merge
    C15: indicator * (merged_op - (next_merged_op * indicator + filtered_operand))
    C16: sel * (1 - merge_cont) * (merged_op - filtered_operand)
Membership (log-derivative lookup, t = index + alpha*opcode + alpha^2*operand)
    C17: im_filtered * (gamma + t_filtered) - enable
    C18: im_shared * (gamma + t_shared) - mul
    C19: gsum - prev_gsum * (1 - L1) - (im_filtered - im_shared)
    C20: next_L1 * gsum
"""

from typing import Dict, Sequence, Tuple, Union

from host_circuits.primitives.field import BN254_SCALAR_PRIME, FF, FFPoly, ONE, ff
from .base import ConstraintContext, ConstraintModule

MAX_OPCODES = 5
"""Largest opcode set per family; bounds the degree of the opcode gate."""

ANCHOR_OPCODE = 0


def validate_opcodes(opcodes: Sequence[int]) -> Tuple[int, ...]:
    """Check a family's opcode set and return it as a tuple of distinct ints.

    Raises:
        ValueError: If the set is empty, too large, or contains the anchor opcode
    """
    distinct = []
    for op in opcodes:
        if int(op) not in distinct:
            distinct.append(int(op))
    if not distinct:
        raise ValueError("An operation family needs at least one opcode")
    if len(distinct) > MAX_OPCODES:
        raise ValueError(f"{len(distinct)} opcodes declared, at most {MAX_OPCODES} are supported")
    if ANCHOR_OPCODE in distinct:
        raise ValueError(f"Opcode {ANCHOR_OPCODE} is reserved for the anchor row")
    return tuple(distinct)


def opcode_gate_value(opcode: int, opcodes: Sequence[int]) -> int:
    """P(opcode) over the integers mod r; zero iff opcode is in the set."""
    acc = 1
    for op in opcodes:
        acc = acc * (opcode - op) % BN254_SCALAR_PRIME
    return acc


def _opcode_gate(x: Union[FFPoly, FF], opcodes: Sequence[int]) -> Union[FFPoly, FF]:
    acc = x - ff(opcodes[0])
    for op in opcodes[1:]:
        acc = acc * (x - ff(op))
    return acc


def compress_tuple(index, opcode, operand, alpha, gamma):
    """Compute lookup denominator: gamma + index + opcode*alpha + operand*alpha^2."""
    return gamma + index + (opcode + operand * alpha) * alpha


class HostOpConstraints(ConstraintModule):
    """Constraint evaluation for one family's host-op region.

    The opcode set is fixed when the module is built; an invalid set is
    rejected here, before any row is assigned.
    """

    def __init__(self, opcodes: Sequence[int]):
        self.opcodes = validate_opcodes(opcodes)

    def constraints(self, ctx: ConstraintContext) -> Dict[str, Union[FFPoly, FF]]:
        c = {}
        c.update(self.shared_constraints(ctx))
        c.update(self.anchor_constraints(ctx))
        c.update(self.selection_constraints(ctx))
        c.update(self.merge_constraints(ctx))
        c.update(self.lookup_constraints(ctx))
        return c

    def shared_constraints(self, ctx: ConstraintContext) -> Dict[str, Union[FFPoly, FF]]:
        """Shared index countdown over the log rows (C0-C5)."""
        L1 = ctx.const('__L1__')
        shared_sel = ctx.const('shared_sel')
        next_shared_sel = ctx.next_const('shared_sel')
        hit = ctx.col('shared_hit')
        hit_inv = ctx.col('shared_hit_inv')
        index = ctx.col('shared_index')
        prev_index = ctx.prev_col('shared_index')
        gate = _opcode_gate(ctx.col('shared_opcode'), self.opcodes)

        return {
            'shared_hit_boolean': hit * (ONE - hit),
            'shared_hit_outside_log': (ONE - shared_sel) * hit,
            'shared_hit_in_set': hit * gate,
            'shared_hit_is_zero': shared_sel * (ONE - hit - gate * hit_inv),
            'shared_countdown': shared_sel * (prev_index - index - hit),
            'shared_countdown_end': (shared_sel + L1) * (ONE - next_shared_sel) * index,
        }

    def anchor_constraints(self, ctx: ConstraintContext) -> Dict[str, Union[FFPoly, FF]]:
        """Binding of the two tables at offset 0 (C6-C8)."""
        L1 = ctx.const('__L1__')
        return {
            'anchor_binding': L1 * (ctx.col('filtered_index') - ctx.col('shared_index')),
            'anchor_opcode': L1 * ctx.col('shared_opcode'),
            'anchor_enable': L1 * (ONE - ctx.col('enable')),
        }

    def selection_constraints(self, ctx: ConstraintContext) -> Dict[str, Union[FFPoly, FF]]:
        """Enable flag, opcode gating and index monotonicity (C9-C14)."""
        L1 = ctx.const('__L1__')
        sel = ctx.const('sel')
        enable = ctx.col('enable')
        next_enable = ctx.next_col('enable')
        index = ctx.col('filtered_index')
        next_index = ctx.next_col('filtered_index')
        gate = _opcode_gate(ctx.col('filtered_opcode'), self.opcodes)

        return {
            'enable_boolean': enable * (ONE - enable),
            'enable_outside_region': (ONE - sel) * enable,
            'enable_continuity': sel * (enable - ONE) * next_enable,
            'opcode_gating': (ONE - L1) * enable * gate,
            'index_decrease': enable * next_enable * (index - next_index - ONE),
            'index_chain_live': enable * index * (ONE - next_enable),
        }

    def merge_constraints(self, ctx: ConstraintContext) -> Dict[str, Union[FFPoly, FF]]:
        """Limb folding gate and group terminal row (C15-C16)."""
        merged_op = ctx.col('merged_op')
        next_merged_op = ctx.next_col('merged_op')
        operand = ctx.col('filtered_operand')
        indicator = ctx.const('indicator')
        merge_cont = ctx.const('merge_cont')
        sel = ctx.const('sel')
        return {
            'merge': indicator * (merged_op - (next_merged_op * indicator + operand)),
            'merge_terminal': sel * (ONE - merge_cont) * (merged_op - operand),
        }

    def lookup_constraints(self, ctx: ConstraintContext) -> Dict[str, Union[FFPoly, FF]]:
        """Membership of filtered rows in the shared table (C17-C20)."""
        alpha = ctx.challenge('std_alpha')
        gamma = ctx.challenge('std_gamma')
        L1 = ctx.const('__L1__')
        next_L1 = ctx.next_const('__L1__')

        denom_filtered = compress_tuple(ctx.col('filtered_index'), ctx.col('filtered_opcode'),
                                        ctx.col('filtered_operand'), alpha, gamma)
        denom_shared = compress_tuple(ctx.col('shared_index'), ctx.col('shared_opcode'),
                                      ctx.col('shared_operand'), alpha, gamma)
        im_filtered = ctx.col('im_filtered')
        im_shared = ctx.col('im_shared')
        gsum = ctx.col('gsum')
        prev_gsum = ctx.prev_col('gsum')

        return {
            'lookup_filtered': im_filtered * denom_filtered - ctx.col('enable'),
            'lookup_shared': im_shared * denom_shared - ctx.col('mul'),
            'gsum_recurrence': gsum - prev_gsum * (ONE - L1) - (im_filtered - im_shared),
            'gsum_boundary': next_L1 * gsum,
        }
