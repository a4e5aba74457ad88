"""Library API package: book records and borrow transactions over REST.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
