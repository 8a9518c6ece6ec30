"""Accounts and item visibility flags.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

Creates accounts (id, username, token, services, created_at) and
item_visibilities (account_id, path, visibility) with a unique
(account_id, path) constraint.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'accounts',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('username', sa.String(64), nullable=False),
        sa.Column('token', sa.String(128), nullable=False),
        sa.Column('services', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_accounts_token', 'accounts', ['token'], unique=True)

    op.create_table(
        'item_visibilities',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column(
            'account_id', sa.BigInteger(),
            sa.ForeignKey('accounts.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('path', sa.Text(), nullable=False),
        sa.Column('visibility', sa.String(10), nullable=False),
        sa.UniqueConstraint('account_id', 'path', name='uq_item_visibilities_path'),
    )
    op.create_index(
        'ix_item_visibilities_account_id', 'item_visibilities', ['account_id'],
    )


def downgrade() -> None:
    op.drop_index('ix_item_visibilities_account_id', table_name='item_visibilities')
    op.drop_table('item_visibilities')
    op.drop_index('ix_accounts_token', table_name='accounts')
    op.drop_table('accounts')
