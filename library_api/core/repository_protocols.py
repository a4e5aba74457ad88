"""Boundary Protocols: structural contracts between core and shell.

Invariants:
    - Core never imports ORM models; it sees books through BookLike
    - Implementations are provided by the shell (models/, services/)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
"""

from typing import Protocol


class BookLike(Protocol):
    """The book state the lifecycle rules read and write."""
    copies: int
    available: bool
