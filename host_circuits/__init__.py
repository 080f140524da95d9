"""
Host-Call Circuits in Python

An executable Python model of the circuits that let a WASM guest
delegate expensive primitives (pairings, hashing, curve arithmetic, Merkle
proofs) to native host functions and still prove that the host performed
exactly the calls the guest made.

This package provides:
- BN254 scalar field arithmetic (via galois)
- The shared host-call log loader
- The selection gate (log-derivative lookup into the shared log)
- The limb merging engine
- Default-row padding for fixed-size circuits
- Selection adaptors for each accelerated operation family

Usage:
    from host_circuits.adaptors import get_selector
    from host_circuits.protocol.host_call import HostCallTable
    from host_circuits.protocol.synthesis import synthesize, verify_constraints

    table = HostCallTable.from_json("calls.json")
    assignment = synthesize(get_selector("jubjub_sum"), table.entries, k=22)
    assert verify_constraints(assignment.constraints, assignment.trace)
"""

__version__ = "0.1.0"
