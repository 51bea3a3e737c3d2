"""Core Layer — validation primitives, no IO, no logging, no global state.

Invariants:
    - No module in core/ imports from domain/, schemas/ or infrastructure/
    - All functions are pure and deterministic
    - Every value type is immutable after construction
"""
