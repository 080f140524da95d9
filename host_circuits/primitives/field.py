"""BN254 scalar field GF(r).

Uses galois library for all field arithmetic. FF is the field type; every
committed cell of a host-op trace is an FF element.

The multiplicative generator is passed explicitly so that galois does not
factor r - 1 when the field class is built.
"""

import galois
from typing import List, Sequence

# --- Field Construction ---

BN254_SCALAR_PRIME = 0x30644E72E131A029B85045B68181585D2833E84879B9709143E1F593F0000001

FF = galois.GF(BN254_SCALAR_PRIME, primitive_element=5, verify=False)
"""Scalar field of BN254, the field of the host-op circuits."""

# Type alias for columns
FFPoly = FF  # Array of field elements (one entry per row)

ONE = FF(1)
ZERO = FF(0)


def ff(value: int) -> FF:
    """Construct a field element from any Python integer (reduced mod r)."""
    return FF(value % BN254_SCALAR_PRIME)


def ff_array(values: Sequence[int]) -> FF:
    """Construct a column from Python integers (reduced mod r)."""
    return FF([v % BN254_SCALAR_PRIME for v in values])


def nonzero_rows(poly: FFPoly) -> List[int]:
    """Return the row indices where a column is not zero."""
    return [i for i, v in enumerate(poly.tolist()) if v != 0]


# --- Limb Decomposition ---
# Host calls carry 64-bit words; wider values travel as little-endian limbs.


def int_to_limbs(value: int, n_limbs: int, limb_bits: int) -> List[int]:
    """Split value into n_limbs little-endian limbs of limb_bits each.

    Bits above n_limbs * limb_bits are dropped, as the host-call encoder does.
    """
    mask = (1 << limb_bits) - 1
    limbs = []
    for _ in range(n_limbs):
        limbs.append(value & mask)
        value >>= limb_bits
    return limbs


def limbs_to_int(limbs: Sequence[int], radix: int) -> int:
    """Positional value of little-endian limbs: sum(limbs[i] * radix^i)."""
    acc = 0
    for limb in reversed(limbs):
        acc = acc * radix + limb
    return acc


# --- Montgomery Batch Inversion ---

def batch_inverse(values):
    """Montgomery batch inversion for any galois array.

    Converts N field inversions into 3N-3 multiplications + 1 inversion.

    Algorithm:
    1. Forward pass: Compute prefix products cumprods[i] = a[0] * a[1] * ... * a[i]
    2. Single inversion: inv_total = cumprods[N-1]^(-1)
    3. Backward pass: Extract individual inverses using cumprods

    Args:
        values: Galois FieldArray to invert (must all be non-zero)

    Returns:
        Galois FieldArray where result[i] = values[i]^(-1)

    Raises:
        ZeroDivisionError: If any element is zero
    """
    n = len(values)
    if n == 0:
        return values
    if n == 1:
        return values ** -1

    field_type = type(values)

    cumprods = field_type.Zeros(n)
    cumprods[0] = values[0]
    for i in range(1, n):
        cumprods[i] = cumprods[i - 1] * values[i]

    inv_total = cumprods[n - 1] ** -1

    results = field_type.Zeros(n)
    z = inv_total
    for i in range(n - 1, 0, -1):
        results[i] = z * cumprods[i - 1]
        z = z * values[i]
    results[0] = z

    return results
