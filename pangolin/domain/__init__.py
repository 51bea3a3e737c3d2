"""Domain Layer — wallets, installments, transactions and commands built on the core.

Invariants:
    - Every validated construction returns Either[ValidationResult, T]
    - Missing structural arguments raise immediately; business rules never raise
"""
