"""Operation-family adaptors.

Each adaptor implements the selection side of one family: its opcodes, its
record layout over the merge primitives and its default (padding) record.
"""

from .base import HostOpSelector, assign_unmerged, field_to_args
from .bls381_sum import Bls381SumSelector
from .jubjub_sum import JubjubSumSelector
from .keccak256 import Keccak256Selector
from .merkle import MerkleSelector
from .poseidon import PoseidonSelector

# Registry mapping family names to adaptor classes
SELECTOR_REGISTRY: dict[str, type[HostOpSelector]] = {
    "jubjub_sum": JubjubSumSelector,
    "bls381_sum": Bls381SumSelector,
    "keccak256": Keccak256Selector,
    "merkle": MerkleSelector,
    "poseidon": PoseidonSelector,
}


def get_selector(family_name: str, **kwargs) -> HostOpSelector:
    """Get adaptor instance for an operation family.

    Args:
        family_name: Name of the family (e.g., 'jubjub_sum')
        **kwargs: Family parameters (e.g., depth and default_root for 'merkle')

    Raises:
        KeyError: If no adaptor is registered for the family
    """
    if family_name not in SELECTOR_REGISTRY:
        raise KeyError(f"No adaptor for family '{family_name}'. "
                       f"Available: {list(SELECTOR_REGISTRY.keys())}")
    return SELECTOR_REGISTRY[family_name](**kwargs)


__all__ = [
    'HostOpSelector',
    'assign_unmerged',
    'field_to_args',
    'JubjubSumSelector',
    'Bls381SumSelector',
    'Keccak256Selector',
    'MerkleSelector',
    'PoseidonSelector',
    'SELECTOR_REGISTRY',
    'get_selector',
]
