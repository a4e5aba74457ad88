"""Services Layer: one service per resource, each bound to a request session.

Invariants:
    - Services raise LibraryError subclasses; they never build HTTP responses
"""
