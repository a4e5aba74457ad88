"""ORM Models: SQLAlchemy declarative models for books and borrow records.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from library_api.models.book import Book  # noqa: F401
from library_api.models.borrow import Borrow  # noqa: F401
