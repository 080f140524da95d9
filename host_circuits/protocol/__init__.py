"""Protocol - Host-call log, family configuration and region assignment."""

from host_circuits.protocol.host_call import ForeignInst, HostCallTable, LogEntry, MAX_HOST_VALUE
from host_circuits.protocol.family_config import (
    FAMILY_CONFIGS,
    MIN_K,
    FamilyConfig,
    get_family_config,
    get_max_round,
)
from host_circuits.protocol.data import TraceData
from host_circuits.protocol.region import Cursor, HostOpRegion, Limb, get_selected_entries

__all__ = [
    # Host calls
    "ForeignInst",
    "LogEntry",
    "HostCallTable",
    "MAX_HOST_VALUE",
    # Configuration
    "FamilyConfig",
    "FAMILY_CONFIGS",
    "MIN_K",
    "get_family_config",
    "get_max_round",
    # Region
    "TraceData",
    "Cursor",
    "Limb",
    "HostOpRegion",
    "get_selected_entries",
]
