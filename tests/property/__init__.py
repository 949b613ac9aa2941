# tests/property/__init__.py
"""Property-based tests for recordfsm.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of.

Test categories:
- contracts/: Merge policies, wire shapes and comparison invariants
"""
