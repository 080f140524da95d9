"""Base classes for constraint evaluation.

ConstraintContext provides a uniform interface for constraint evaluation that works
for a whole trace (returns columns) and for a single row (returns scalars). The
same constraint code can be used in both contexts thanks to galois broadcasting.

Example:
    def eval_constraint(ctx: ConstraintContext):
        a = ctx.col('a')
        b = ctx.next_col('b')
        return a * b - ctx.challenge('std_alpha')

    # Whole trace (arrays, one entry per row)
    per_row = eval_constraint(TraceConstraintContext(trace))

    # One row (scalars), for diagnostics
    at_row = eval_constraint(RowConstraintContext(trace, 17))
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Union

import numpy as np

from host_circuits.primitives.field import FF, FFPoly
from host_circuits.protocol.data import TraceData


class ConstraintContext(ABC):
    """Uniform interface for constraint evaluation - works for columns and rows."""

    @abstractmethod
    def col(self, name: str, index: int = 0) -> Union[FFPoly, FF]:
        """Get column at current row.

        Args:
            name: Column name
            index: Column index for multi-column polynomials (default 0)

        Returns:
            Trace: array of values at all rows
            Row: value at the selected row
        """
        pass

    @abstractmethod
    def next_col(self, name: str, index: int = 0) -> Union[FFPoly, FF]:
        """Get column at next row (offset +1, wrapping to row 0)."""
        pass

    @abstractmethod
    def prev_col(self, name: str, index: int = 0) -> Union[FFPoly, FF]:
        """Get column at previous row (offset -1, wrapping to the last row)."""
        pass

    @abstractmethod
    def const(self, name: str) -> Union[FFPoly, FF]:
        """Get fixed column at current row (e.g. '__L1__' for the first-row selector)."""
        pass

    @abstractmethod
    def next_const(self, name: str) -> Union[FFPoly, FF]:
        """Get fixed column at next row (offset +1)."""
        pass

    @abstractmethod
    def challenge(self, name: str) -> FF:
        """Get Fiat-Shamir challenge (always scalar)."""
        pass


class TraceConstraintContext(ConstraintContext):
    """Whole-trace implementation - returns full columns.

    Constraints are evaluated at every row simultaneously, producing one
    evaluation per row. A satisfied constraint is zero everywhere.
    """

    def __init__(self, data: TraceData):
        self._data = data

    def col(self, name: str, index: int = 0) -> FFPoly:
        return self._data.columns[(name, index)]

    def next_col(self, name: str, index: int = 0) -> FFPoly:
        return np.roll(self.col(name, index), -1)

    def prev_col(self, name: str, index: int = 0) -> FFPoly:
        return np.roll(self.col(name, index), 1)

    def const(self, name: str) -> FFPoly:
        return self._data.constants[name]

    def next_const(self, name: str) -> FFPoly:
        return np.roll(self.const(name), -1)

    def challenge(self, name: str) -> FF:
        return self._data.challenges[name]


class RowConstraintContext(ConstraintContext):
    """Single-row implementation - returns scalars at one row."""

    def __init__(self, data: TraceData, row: int):
        self._data = data
        self._n = data.n_rows
        self._row = row % self._n

    def _at(self, poly: FFPoly, offset: int) -> FF:
        return poly[(self._row + offset) % self._n]

    def col(self, name: str, index: int = 0) -> FF:
        return self._at(self._data.columns[(name, index)], 0)

    def next_col(self, name: str, index: int = 0) -> FF:
        return self._at(self._data.columns[(name, index)], 1)

    def prev_col(self, name: str, index: int = 0) -> FF:
        return self._at(self._data.columns[(name, index)], -1)

    def const(self, name: str) -> FF:
        return self._at(self._data.constants[name], 0)

    def next_const(self, name: str) -> FF:
        return self._at(self._data.constants[name], 1)

    def challenge(self, name: str) -> FF:
        return self._data.challenges[name]


class ConstraintModule(ABC):
    """Constraint evaluation for one table layout.

    Each module names its constraints so that an unsatisfied one can be
    reported by name and row.
    """

    @abstractmethod
    def constraints(self, ctx: ConstraintContext) -> Dict[str, Union[FFPoly, FF]]:
        """Evaluate every constraint.

        Args:
            ctx: ConstraintContext providing access to columns, constants, challenges

        Returns:
            Mapping from constraint name to its evaluation (zero when satisfied)
        """
        pass

    def constraint_polynomial(self, ctx: ConstraintContext) -> Union[FFPoly, FF]:
        """Evaluate all constraints combined into single polynomial with std_vc."""
        vc = ctx.challenge('std_vc')
        return self._combine_constraints(list(self.constraints(ctx).values()), vc)

    def _combine_constraints(self, constraints: List, vc):
        """Combine constraint list using standard accumulation pattern.

        Computes: ((constraints[0] * vc + constraints[1]) * vc + ...) + constraints[-1]
        """
        if len(constraints) == 1:
            return constraints[0]
        acc = constraints[0] * vc
        for i in range(1, len(constraints) - 1):
            acc = (acc + constraints[i]) * vc
        acc = acc + constraints[-1]
        return acc
