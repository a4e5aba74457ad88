"""Pydantic Schemas: request validation and response serialization.

Invariants:
    - Schemas validate at system boundary (request bodies, path params)
    - Response schemas emit the public JSON field names (_id, createdAt, ...)
"""
