"""Tests for the operation-family adaptors and their default records."""

import pytest

from host_circuits.adaptors import SELECTOR_REGISTRY, get_selector
from host_circuits.adaptors.base import field_to_args
from host_circuits.adaptors.bls381_sum import Bls381SumSelector
from host_circuits.adaptors.jubjub_sum import IDENTITY, JubjubSumSelector
from host_circuits.adaptors.keccak256 import (
    EMPTY_BLOCK_LANES,
    EMPTY_KECCAK256_DIGEST,
    Keccak256Selector,
    bytes_to_lanes,
)
from host_circuits.adaptors.merkle import MerkleSelector
from host_circuits.adaptors.poseidon import DEFAULT_INPUTS, PoseidonSelector
from host_circuits.constraints.host_op import HostOpConstraints
from host_circuits.primitives.field import BN254_SCALAR_PRIME
from host_circuits.protocol.family_config import MIN_K
from host_circuits.protocol.host_call import ForeignInst, LogEntry
from host_circuits.protocol.region import Cursor, HostOpRegion

MERKLE_ROOT = (1 << 200) + 0xABCDEF
POSEIDON_DIGEST = (1 << 250) + 0x1234_5678_9ABC_DEF0


def selectors():
    return [
        JubjubSumSelector(),
        Bls381SumSelector(),
        Keccak256Selector(),
        MerkleSelector(depth=20, default_root=MERKLE_ROOT),
        PoseidonSelector(default_digest=POSEIDON_DIGEST),
    ]


def default_limbs(selector):
    """Limbs of one padding record assigned into a fresh region."""
    region = HostOpRegion(selector.opcodes())
    region.load_shared([])
    return [limb.value for limb in selector.assign_record(region, Cursor(), selector.default_entries(), False)]


def test_field_to_args() -> None:
    entries = field_to_args(0x0102_0000_0000_0000_0003, 2, 64, ForeignInst.JubjubSumPush)
    assert entries == [LogEntry(ForeignInst.JubjubSumPush, 3), LogEntry(ForeignInst.JubjubSumPush, 0x0102)]


def test_registry() -> None:
    assert set(SELECTOR_REGISTRY) == {'jubjub_sum', 'bls381_sum', 'keccak256', 'merkle', 'poseidon'}
    assert isinstance(get_selector('jubjub_sum'), JubjubSumSelector)
    assert get_selector('merkle', depth=4).depth == 4
    with pytest.raises(KeyError):
        get_selector('bn254_pair')


@pytest.mark.parametrize("selector", selectors(), ids=lambda s: s.name)
class TestDefaultRecords:

    def test_default_table_is_one_record(self, selector) -> None:
        table = selector.default_table()
        assert len(table) == selector.config.record_size
        assert all(e.op in selector.opcodes() for e in table)

    def test_default_entries_use_index_zero(self, selector) -> None:
        assert {index for _, _, index in selector.default_entries()} == {0}

    def test_limbs_per_record(self, selector) -> None:
        assert len(default_limbs(selector)) == selector.limbs_per_record

    def test_padding_rows_are_disabled(self, selector) -> None:
        region = HostOpRegion(selector.opcodes())
        region.load_shared([])
        cursor = Cursor()
        selector.assign_record(region, cursor, selector.default_entries(), False)
        assert cursor.offset == 1 + selector.config.record_size
        assert all(region.cell('enable', r) == 0 for r in range(1, cursor.offset))

    def test_configure(self, selector) -> None:
        module = selector.configure()
        assert isinstance(module, HostOpConstraints)
        assert module.opcodes == selector.opcodes()


class TestIdentityDefaults:
    """Default records reconstruct to the canonical no-op values."""

    def test_jubjub_identity(self) -> None:
        new, px, py, scalar, rx, ry = default_limbs(JubjubSumSelector())
        assert new == 1
        assert (px, py) == IDENTITY
        assert scalar == 1
        # identity * 1 is the identity
        assert (rx, ry) == IDENTITY

    def test_bls381_identity(self) -> None:
        limbs = default_limbs(Bls381SumSelector())
        g1 = [0] * 8 + [1]
        assert limbs == [1, 0, 0, 0] + g1 + g1

    def test_keccak_empty_message(self) -> None:
        limbs = default_limbs(Keccak256Selector())
        assert limbs[0] == 1
        assert limbs[1:18] == EMPTY_BLOCK_LANES
        digest = b"".join(lane.to_bytes(8, "little") for lane in limbs[18:])
        assert digest == EMPTY_KECCAK256_DIGEST
        assert digest.hex() == "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"

    def test_keccak_empty_block_padding(self) -> None:
        block = b"".join(lane.to_bytes(8, "little") for lane in EMPTY_BLOCK_LANES)
        assert len(block) == 136
        assert block[0] == 0x01 and block[-1] == 0x80
        assert bytes_to_lanes(block) == EMPTY_BLOCK_LANES

    def test_merkle_default_access(self) -> None:
        address, root, value_lo, value_hi, setget = default_limbs(MerkleSelector(depth=20, default_root=MERKLE_ROOT))
        assert address == 1 << 20
        assert root == MERKLE_ROOT % BN254_SCALAR_PRIME
        assert (value_lo, value_hi) == (0, 0)
        assert setget == ForeignInst.KVPairGet

    def test_merkle_needs_default_root(self) -> None:
        with pytest.raises(ValueError, match="empty-tree root"):
            MerkleSelector().default_table()
        with pytest.raises(ValueError):
            get_selector('merkle', depth=4).default_entries()

    def test_poseidon_default_hash(self) -> None:
        limbs = default_limbs(PoseidonSelector(default_digest=POSEIDON_DIGEST))
        assert limbs[0] == 1
        assert limbs[1:9] == DEFAULT_INPUTS
        assert limbs[9] == POSEIDON_DIGEST

    def test_poseidon_needs_default_digest(self) -> None:
        with pytest.raises(ValueError, match="digest"):
            PoseidonSelector().default_table()


class TestRecordLayouts:

    def test_jubjub_record(self) -> None:
        selector = JubjubSumSelector()
        point, scalar, result = (5, 7), 3, (11, (1 << 200) + 13)
        log = selector.to_host_call_table([(point, scalar, result)])
        region = HostOpRegion(selector.opcodes())
        region.load_shared(log)
        limbs = selector.assign_record(region, Cursor(), region.selected_entries(), True)
        assert [limb.value for limb in limbs] == [1, 5, 7, 3, 11, (1 << 200) + 13]

    def test_jubjub_restart_flag(self) -> None:
        log = JubjubSumSelector().to_host_call_table([((0, 1), 1, (0, 1))] * 2)
        assert [e.value for e in log if e.op == ForeignInst.JubjubSumNew] == [1, 0]

    def test_bls381_scalar_limbs(self) -> None:
        selector = Bls381SumSelector()
        scalar = (1 << 250) + 12345
        table = selector.default_table()
        table[1:6] = field_to_args(scalar, 5, 54, ForeignInst.BlsSumScalar)
        region = HostOpRegion(selector.opcodes())
        region.load_shared(table)
        limbs = [l.value for l in selector.assign_record(region, Cursor(), region.selected_entries(), True)]
        r = 1 << 108
        assert limbs[1] + limbs[2] * r + limbs[3] * r * r == scalar

    def test_merkle_set_discriminant(self) -> None:
        selector = MerkleSelector(depth=20, default_root=MERKLE_ROOT)
        log = selector.to_host_call_table([(7, MERKLE_ROOT, (1, 2), ForeignInst.KVPairSet)])
        region = HostOpRegion(selector.opcodes())
        region.load_shared(log)
        limbs = selector.assign_record(region, Cursor(), region.selected_entries(), True)
        assert [l.value for l in limbs] == [7, MERKLE_ROOT % BN254_SCALAR_PRIME, 1, 2, ForeignInst.KVPairSet]
        assert limbs[-1].column == 'filtered_opcode'

    def test_poseidon_record(self) -> None:
        selector = PoseidonSelector()
        inputs = [(1 << 253) + i for i in range(8)]
        result = (1 << 200) + 99
        log = selector.to_host_call_table(inputs, result)
        assert len(log) == selector.config.record_size
        region = HostOpRegion(selector.opcodes())
        region.load_shared(log)
        limbs = selector.assign_record(region, Cursor(), region.selected_entries(), True)
        assert [l.value for l in limbs] == [1] + inputs + [result]
        # new on its own, then nine 4-row groups
        assert [l.row for l in limbs] == [1] + list(range(2, 38, 4))
        assert [region.cell('merge_cont', r) for r in range(2, 6)] == [1, 1, 1, 0]


class TestAssignErrors:

    def test_partial_record_rejected(self) -> None:
        selector = Keccak256Selector()
        region = HostOpRegion(selector.opcodes())
        region.load_shared(selector.default_table()[:-1])
        with pytest.raises(ValueError, match="multiple"):
            selector.assign(region, MIN_K, Cursor())

    def test_below_acceleration_floor(self) -> None:
        selector = Keccak256Selector()
        region = HostOpRegion(selector.opcodes())
        region.load_shared(selector.default_table())
        with pytest.raises(ValueError, match="exceed"):
            selector.assign(region, MIN_K - 1, Cursor())

    def test_budget_exceeded(self, small_budget) -> None:
        selector = small_budget(Keccak256Selector(), 2)
        region = HostOpRegion(selector.opcodes())
        region.load_shared(selector.default_table() * 3)
        with pytest.raises(ValueError, match="exceed"):
            selector.assign(region, MIN_K, Cursor())

    def test_empty_log_below_floor_assigns_nothing(self) -> None:
        selector = Keccak256Selector()
        region = HostOpRegion(selector.opcodes())
        region.load_shared([])
        assert selector.assign(region, MIN_K - 1, Cursor()) == []
