"""Host-op witness generation.

Log-derivative lookup of the filtered table into the shared table:
1. Filtered side, sel=enable, cols=[filtered_index, filtered_opcode, filtered_operand]
2. Shared side, mul=mul, cols=[shared_index, shared_opcode, shared_operand]

Each side gets its own intermediate column (im_filtered, im_shared) and
gsum accumulates their difference. Padding rows have enable = 0 and never
reach the lookup.
"""

from collections import Counter
from typing import Dict, List, Tuple

from host_circuits.constraints.base import ConstraintContext
from host_circuits.constraints.host_op import compress_tuple
from host_circuits.primitives.field import FFPoly, batch_inverse, ff_array
from .base import WitnessModule

FILTERED_TUPLE = ('filtered_index', 'filtered_opcode', 'filtered_operand')
SHARED_TUPLE = ('shared_index', 'shared_opcode', 'shared_operand')


def _row_tuples(ctx: ConstraintContext, names: Tuple[str, str, str]) -> List[Tuple[int, int, int]]:
    cols = [ctx.col(name).tolist() for name in names]
    return list(zip(*cols))


class HostOpWitness(WitnessModule):
    """Witness generation for a host-op region.

    Computes the mul column, im_filtered, im_shared and gsum.
    """

    def compute_multiplicities(self, ctx: ConstraintContext) -> FFPoly:
        """Count the genuine filtered rows that read each shared row.

        Identical shared tuples share one counter; the whole count goes to
        the first of them.
        """
        enable = ctx.col('enable').tolist()
        wanted = Counter(t for t, e in zip(_row_tuples(ctx, FILTERED_TUPLE), enable) if e == 1)

        shared_rows = [
            i for i, (s, l1) in enumerate(zip(ctx.const('shared_sel').tolist(),
                                                ctx.const('__L1__').tolist()))
            if s == 1 or l1 == 1
        ]
        shared = _row_tuples(ctx, SHARED_TUPLE)
        mul = [0] * len(shared)
        for row in shared_rows:
            t = shared[row]
            if wanted[t] > 0:
                mul[row] = wanted.pop(t)
        return ff_array(mul)

    def compute_intermediates(self, ctx: ConstraintContext) -> Dict[str, Dict[int, FFPoly]]:
        """Compute one logup term per side.

        Returns:
            {
                'im_filtered': {0: enable / (gamma + t_filtered)},
                'im_shared': {0: mul / (gamma + t_shared)}
            }
        """
        alpha = ctx.challenge('std_alpha')
        gamma = ctx.challenge('std_gamma')

        denom_filtered = compress_tuple(*(ctx.col(name) for name in FILTERED_TUPLE), alpha, gamma)
        denom_shared = compress_tuple(*(ctx.col(name) for name in SHARED_TUPLE), alpha, gamma)

        return {
            'im_filtered': {0: ctx.col('enable') * batch_inverse(denom_filtered)},
            'im_shared': {0: ctx.col('mul') * batch_inverse(denom_shared)},
        }

    def compute_grand_sums(self, ctx: ConstraintContext) -> Dict[str, FFPoly]:
        """Compute gsum running sum polynomial.

        gsum[i] = gsum[i-1] + im_filtered[i] - im_shared[i]

        Returns:
            {'gsum': gsum_polynomial}
        """
        intermediates = self.compute_intermediates(ctx)
        row_sum = intermediates['im_filtered'][0] - intermediates['im_shared'][0]
        return {'gsum': self._compute_cumulative_sum(row_sum)}
