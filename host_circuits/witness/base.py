"""Base class for witness generation."""

from abc import ABC, abstractmethod
from typing import Dict

from host_circuits.primitives.field import FFPoly
from host_circuits.constraints.base import ConstraintContext


class WitnessModule(ABC):
    """Per-family witness generation. Used by the synthesis driver only.

    A witness module computes the columns that depend on Fiat-Shamir
    challenges (lookup intermediates and running sums) once the region's
    cells are frozen into a trace. Unlike ConstraintModule, this is only
    used when building a trace - checking a trace never recomputes them.
    """

    @abstractmethod
    def compute_intermediates(self, ctx: ConstraintContext) -> Dict[str, Dict[int, FFPoly]]:
        """Compute intermediate polynomials.

        Args:
            ctx: ConstraintContext providing access to columns, constants, challenges

        Returns:
            Dictionary mapping column names to their indexed polynomials.
            Example: {'im_filtered': {0: poly}}
        """
        pass

    @abstractmethod
    def compute_grand_sums(self, ctx: ConstraintContext) -> Dict[str, FFPoly]:
        """Compute gsum running sum polynomials.

        Args:
            ctx: ConstraintContext providing access to columns, constants, challenges

        Returns:
            Dictionary mapping polynomial names to their values.
            Example: {'gsum': gsum_poly}
        """
        pass

    def _compute_cumulative_sum(self, row_values: FFPoly) -> FFPoly:
        """Compute cumulative sum: result[i] = sum(row_values[0:i+1])."""
        result = row_values.copy()
        for i in range(1, len(row_values)):
            result[i] = result[i - 1] + row_values[i]
        return result
