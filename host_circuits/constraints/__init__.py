"""Constraint evaluation modules.

Each operation family owns one HostOpConstraints instance, parameterized by
the family's opcode set. The registry builds it from FAMILY_CONFIGS so the
constraint side and the adaptor side always agree on the opcodes.
"""

from host_circuits.protocol.family_config import FAMILY_CONFIGS

from .base import (
    ConstraintContext,
    ConstraintModule,
    RowConstraintContext,
    TraceConstraintContext,
)
from .host_op import MAX_OPCODES, HostOpConstraints, opcode_gate_value, validate_opcodes

# Registry mapping family names to constraint module classes
CONSTRAINT_REGISTRY: dict[str, type[ConstraintModule]] = {
    name: HostOpConstraints for name in FAMILY_CONFIGS
}


def get_constraint_module(family_name: str) -> ConstraintModule:
    """Get constraint module instance for an operation family.

    Args:
        family_name: Name of the family (e.g., 'jubjub_sum', 'keccak256')

    Returns:
        ConstraintModule instance for the family's opcode set

    Raises:
        KeyError: If no constraint module is registered for the family
    """
    if family_name not in CONSTRAINT_REGISTRY:
        raise KeyError(f"No constraint module for family '{family_name}'. "
                       f"Available: {list(CONSTRAINT_REGISTRY.keys())}")
    return CONSTRAINT_REGISTRY[family_name](FAMILY_CONFIGS[family_name].opcodes)


__all__ = [
    'ConstraintContext',
    'ConstraintModule',
    'TraceConstraintContext',
    'RowConstraintContext',
    'HostOpConstraints',
    'MAX_OPCODES',
    'validate_opcodes',
    'opcode_gate_value',
    'CONSTRAINT_REGISTRY',
    'get_constraint_module',
]
