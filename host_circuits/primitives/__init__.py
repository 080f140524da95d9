"""Primitives - Low-level field and hashing building blocks."""

from host_circuits.primitives.field import (
    BN254_SCALAR_PRIME,
    FF,
    FFPoly,
    ONE,
    ZERO,
    batch_inverse,
    ff,
    ff_array,
    int_to_limbs,
    limbs_to_int,
    nonzero_rows,
)
from host_circuits.primitives.transcript import Transcript

__all__ = [
    # Field
    "FF",
    "FFPoly",
    "BN254_SCALAR_PRIME",
    "ONE",
    "ZERO",
    "ff",
    "ff_array",
    "nonzero_rows",
    "batch_inverse",
    # Limbs
    "int_to_limbs",
    "limbs_to_int",
    # Transcript
    "Transcript",
]
