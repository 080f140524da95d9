"""Tests for host-op witness generation."""

import pytest

from host_circuits.constraints.base import TraceConstraintContext
from host_circuits.primitives.field import ZERO
from host_circuits.protocol.synthesis import synthesize
from host_circuits.witness import get_witness_module
from host_circuits.witness.base import WitnessModule
from host_circuits.witness.host_op import HostOpWitness


def test_witness_module_is_abstract() -> None:
    with pytest.raises(TypeError):
        WitnessModule()


def test_witness_module_subclass_must_implement_methods() -> None:
    class IncompleteWitness(WitnessModule):
        pass

    with pytest.raises(TypeError):
        IncompleteWitness()


def test_registry() -> None:
    assert isinstance(get_witness_module('merkle'), HostOpWitness)
    with pytest.raises(KeyError):
        get_witness_module('bn254_pair')


@pytest.fixture
def trace(paired_push_selector, noisy_log):
    return synthesize(paired_push_selector, noisy_log, k=22).trace


def test_multiplicities_count_genuine_rows(trace) -> None:
    mul = trace.columns[('mul', 0)].tolist()
    enable = trace.columns[('enable', 0)].tolist()
    assert sum(mul) == sum(enable) == 14
    assert mul[0] == 1


def test_multiplicities_skip_foreign_rows(trace) -> None:
    mul = trace.columns[('mul', 0)].tolist()
    hit = trace.columns[('shared_hit', 0)].tolist()
    # Row 1 is a Log call with the anchor's tuple; the anchor row takes the count
    assert [r for r, m in enumerate(mul) if m] == [0] + [r for r, h in enumerate(hit) if h]


def test_padding_rows_stay_out_of_lookup(trace) -> None:
    im_filtered = trace.columns[('im_filtered', 0)]
    assert all(im_filtered[r] == ZERO for r in range(14, trace.n_rows))
    assert all(im_filtered[r] != ZERO for r in range(14))


def test_gsum_closes(trace) -> None:
    gsum = trace.columns[('gsum', 0)]
    assert gsum[trace.n_rows - 1] == ZERO


def test_grand_sum_matches_intermediates(trace) -> None:
    witness = HostOpWitness()
    ctx = TraceConstraintContext(trace)
    im = witness.compute_intermediates(ctx)
    gsum = witness.compute_grand_sums(ctx)['gsum']
    row_sum = im['im_filtered'][0] - im['im_shared'][0]
    assert gsum[0] == row_sum[0]
    for i in range(1, trace.n_rows):
        assert gsum[i] == gsum[i - 1] + row_sum[i]
