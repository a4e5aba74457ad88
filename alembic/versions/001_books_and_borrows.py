"""Books and borrows.

Revision ID: 001_books_and_borrows
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_books_and_borrows"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "books",
        sa.Column("id", sa.String(24), primary_key=True),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("author", sa.String(300), nullable=False),
        sa.Column("genre", sa.String(20), nullable=False),
        sa.Column("isbn", sa.String(32), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("copies", sa.Integer, nullable=False),
        sa.Column("available", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("copies >= 0", name="ck_books_copies_non_negative"),
    )
    op.create_index("ix_books_isbn", "books", ["isbn"], unique=True)
    op.create_index("ix_books_genre", "books", ["genre"])
    op.create_index("ix_books_created_at", "books", ["created_at"])

    op.create_table(
        "borrows",
        sa.Column("id", sa.String(24), primary_key=True),
        sa.Column("book_id", sa.String(24), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("quantity > 0", name="ck_borrows_quantity_positive"),
    )
    op.create_index("ix_borrows_book_id", "borrows", ["book_id"])


def downgrade() -> None:
    op.drop_index("ix_borrows_book_id", table_name="borrows")
    op.drop_table("borrows")
    op.drop_index("ix_books_created_at", table_name="books")
    op.drop_index("ix_books_genre", table_name="books")
    op.drop_index("ix_books_isbn", table_name="books")
    op.drop_table("books")
