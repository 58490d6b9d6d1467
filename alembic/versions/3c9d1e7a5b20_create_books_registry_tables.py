"""create_books_registry_tables

Revision ID: 3c9d1e7a5b20
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import mysql


# revision identifiers, used by Alembic.
revision: str = '3c9d1e7a5b20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _searchable_text():
    # Binary collation on MySQL keeps LIKE filters case-sensitive
    return sa.String(length=255).with_variant(
        mysql.VARCHAR(255, collation='utf8mb4_bin'), 'mysql', 'mariadb'
    )


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'publishers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False, comment='Publisher name'),
        sa.Column('is_deleted', sa.Boolean(), server_default='0', nullable=False, comment='Soft-delete flag'),
        *_timestamps(),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False, comment='Display name'),
        sa.Column('is_deleted', sa.Boolean(), server_default='0', nullable=False, comment='Soft-delete flag'),
        *_timestamps(),
    )

    op.create_table(
        'books',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', _searchable_text(), nullable=False, comment='Book title'),
        sa.Column('title_kana', _searchable_text(), nullable=False, comment='Phonetic reading of the title'),
        sa.Column('author', _searchable_text(), nullable=False, comment='Author name'),
        sa.Column('publisher_id', sa.Integer(), sa.ForeignKey('publishers.id'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('price', sa.Integer(), nullable=True, comment='Book price'),
        sa.Column('is_deleted', sa.Boolean(), server_default='0', nullable=False, comment='Soft-delete flag'),
        *_timestamps(),
    )
    op.create_index(op.f('ix_books_title'), 'books', ['title'], unique=False)
    op.create_index(op.f('ix_books_author'), 'books', ['author'], unique=False)
    op.create_index(op.f('ix_books_publisher_id'), 'books', ['publisher_id'], unique=False)
    op.create_index(op.f('ix_books_user_id'), 'books', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_books_user_id'), table_name='books')
    op.drop_index(op.f('ix_books_publisher_id'), table_name='books')
    op.drop_index(op.f('ix_books_author'), table_name='books')
    op.drop_index(op.f('ix_books_title'), table_name='books')
    op.drop_table('books')
    op.drop_table('users')
    op.drop_table('publishers')
