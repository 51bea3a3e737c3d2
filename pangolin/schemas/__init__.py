"""Pydantic Schemas — inbound event records validated at the system boundary.

Invariants:
    - Schemas only check shape and types; business rules live in domain/
"""
