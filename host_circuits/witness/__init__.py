"""Witness generation modules.

Every operation family shares the same selection layout, so all of them use
HostOpWitness; the registry keeps the per-family lookup that the synthesis
driver goes through.
"""

from host_circuits.protocol.family_config import FAMILY_CONFIGS

from .base import WitnessModule
from .host_op import HostOpWitness

# Registry mapping family names to witness module classes
WITNESS_REGISTRY: dict[str, type[WitnessModule]] = {
    name: HostOpWitness for name in FAMILY_CONFIGS
}


def get_witness_module(family_name: str) -> WitnessModule:
    """Get witness module instance for an operation family.

    Raises:
        KeyError: If no witness module is registered for the family
    """
    if family_name in WITNESS_REGISTRY:
        return WITNESS_REGISTRY[family_name]()
    raise KeyError(f"No witness module for family '{family_name}'. "
                   f"Available: {list(WITNESS_REGISTRY.keys())}")


__all__ = [
    'WitnessModule',
    'HostOpWitness',
    'WITNESS_REGISTRY',
    'get_witness_module',
]
