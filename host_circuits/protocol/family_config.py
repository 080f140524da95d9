"""Per-family sizing and merge configuration.

Every accelerated operation family packs wide values into 64-bit host calls
and folds them back with a fixed radix. The radix, the record shape and the
padding budget of each family live in FAMILY_CONFIGS so that they are
declared once instead of at each assignment site.

Padding budget:
    Circuits are built for 2^k rows. Below MIN_K host acceleration is
    disabled; from MIN_K on, the number of records a family can hold doubles
    with each increment of k, starting from the family's reference_max.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from host_circuits.protocol.host_call import ForeignInst

MIN_K = 22
"""Smallest circuit size parameter with host acceleration enabled."""


def get_max_round(k: int, reference_max: int) -> int:
    """Number of records available at circuit size k."""
    if k < MIN_K:
        return 0
    return reference_max << (k - MIN_K)


@dataclass(frozen=True)
class FamilyConfig:
    """Static configuration of one operation family.

    Attributes:
        name: Family name used by the registries
        opcodes: Host-call opcodes owned by the family
        limb_bits: Width of one host-call value when it carries a limb
        merge_size: Number of host-call values folded into one wide operand
        record_size: Host-call entries making up one operation
        reference_max: Records available at k == MIN_K
    """
    name: str
    opcodes: Tuple[int, ...]
    limb_bits: int
    merge_size: int
    record_size: int
    reference_max: int

    @property
    def radix(self) -> int:
        """Positional weight used when merging limbs."""
        return 1 << self.limb_bits

    def max_rounds(self, k: int) -> int:
        return get_max_round(k, self.reference_max)


FAMILY_CONFIGS: Dict[str, FamilyConfig] = {
    # new + (point.x, point.y, scalar, result.x, result.y) as 4 x u64 each
    "jubjub_sum": FamilyConfig(
        "jubjub_sum",
        opcodes=(ForeignInst.JubjubSumNew, ForeignInst.JubjubSumPush, ForeignInst.JubjubSumResult),
        limb_bits=64, merge_size=4, record_size=1 + 5 * 4, reference_max=600),
    # new + Fr scalar (5 x u54) + G1 and result (8 x u54 per coordinate pair + flag)
    "bls381_sum": FamilyConfig(
        "bls381_sum",
        opcodes=(ForeignInst.BlsSumNew, ForeignInst.BlsSumScalar,
                 ForeignInst.BlsSumG1, ForeignInst.BlsSumResult),
        limb_bits=54, merge_size=2, record_size=1 + 5 + 2 * 17, reference_max=16),
    # new + 17 rate lanes + 4 digest lanes, one lane per host call
    "keccak256": FamilyConfig(
        "keccak256",
        opcodes=(ForeignInst.Keccak256New, ForeignInst.Keccak256Push, ForeignInst.Keccak256Finalize),
        limb_bits=64, merge_size=1, record_size=1 + 17 + 4, reference_max=50),
    # new + 8 inputs and the result, one field element as 4 x u64 each
    "poseidon": FamilyConfig(
        "poseidon",
        opcodes=(ForeignInst.PoseidonNew, ForeignInst.PoseidonPush, ForeignInst.PoseidonFinalize),
        limb_bits=64, merge_size=4, record_size=1 + 8 * 4 + 4, reference_max=512),
    # address + root (4 x u64) + value (2 x 2 x u64)
    "merkle": FamilyConfig(
        "merkle",
        opcodes=(ForeignInst.KVPairSetRoot, ForeignInst.KVPairAddress,
                 ForeignInst.KVPairSet, ForeignInst.KVPairGet),
        limb_bits=64, merge_size=4, record_size=1 + 4 + 2 * 2, reference_max=128),
}


def get_family_config(name: str) -> FamilyConfig:
    if name not in FAMILY_CONFIGS:
        raise KeyError(f"No configuration for family '{name}'. "
                       f"Available: {list(FAMILY_CONFIGS.keys())}")
    return FAMILY_CONFIGS[name]
