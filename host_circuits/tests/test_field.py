"""Tests for the BN254 scalar field helpers."""

import numpy as np
import pytest

from host_circuits.primitives.field import (
    BN254_SCALAR_PRIME,
    FF,
    ONE,
    ZERO,
    batch_inverse,
    ff,
    ff_array,
    int_to_limbs,
    limbs_to_int,
    nonzero_rows,
)


def test_field_order() -> None:
    assert FF.order == BN254_SCALAR_PRIME


def test_ff_reduces_negative_values() -> None:
    assert ff(-1) == FF(BN254_SCALAR_PRIME - 1)
    assert ff(-1) + ONE == ZERO


def test_ff_array_reduces_large_values() -> None:
    col = ff_array([BN254_SCALAR_PRIME + 3, 5, (1 << 64) - 1])
    assert col.tolist() == [3, 5, (1 << 64) - 1]


def test_nonzero_rows() -> None:
    assert nonzero_rows(ff_array([0, 1, 0, 0, 7])) == [1, 4]
    assert nonzero_rows(ff_array([0, 0, 0, 0])) == []


class TestLimbs:
    """Little-endian limb decomposition."""

    def test_low_limb_first(self) -> None:
        assert int_to_limbs(0x0201, 2, 8) == [0x01, 0x02]

    def test_high_bits_are_dropped(self) -> None:
        assert int_to_limbs((1 << 130) + 5, 2, 64) == [5, 0]

    def test_limbs_to_int_inverts_split(self) -> None:
        value = 0x1234_5678_9ABC_DEF0_0FED_CBA9_8765_4321
        assert limbs_to_int(int_to_limbs(value, 4, 54), 1 << 54) == value

    def test_limbs_to_int_positional(self) -> None:
        # 1 + 2*R + 3*R^2
        assert limbs_to_int([1, 2, 3], 10) == 321


class TestBatchInverse:
    """Montgomery batch inversion over FF."""

    def test_empty(self) -> None:
        assert len(batch_inverse(FF.Zeros(0))) == 0

    def test_single_element(self) -> None:
        val = FF([12345])
        assert batch_inverse(val)[0] * val[0] == ONE

    def test_many_elements(self) -> None:
        vals = ff_array(list(range(1, 33)) + [BN254_SCALAR_PRIME - 2])
        inv = batch_inverse(vals)
        assert np.array_equal(vals * inv, FF.Ones(len(vals)))

    def test_zero_raises(self) -> None:
        with pytest.raises(ZeroDivisionError):
            batch_inverse(ff_array([1, 0, 3]))
