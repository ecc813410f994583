"""create user, player and inventory_item tables

Revision ID: 4b7c9d2e1a10
Revises:
Create Date: 2026-10-19 00:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4b7c9d2e1a10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'user' not in existing_tables:
        op.create_table(
            'user',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('username', sa.String(length=64), nullable=False),
            sa.Column('password_hash', sa.String(length=256), nullable=False),
            sa.Column('is_operator', sa.Boolean(), nullable=False, server_default=sa.false()),
        )
        op.create_index('ix_user_username', 'user', ['username'], unique=True)

    if 'player' not in existing_tables:
        op.create_table(
            'player',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('name', sa.String(length=64), nullable=False),
        )
        op.create_index('ix_player_name', 'player', ['name'], unique=True)

    if 'inventory_item' not in existing_tables:
        op.create_table(
            'inventory_item',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('player_id', sa.Integer(), sa.ForeignKey('player.id'), nullable=False),
            sa.Column('item_id', sa.String(length=128), nullable=False),
            sa.Column('quantity', sa.Integer(), nullable=False, server_default='0'),
            sa.UniqueConstraint('player_id', 'item_id', name='uq_inventory_player_item'),
        )
        op.create_index('ix_inventory_item_player_id', 'inventory_item', ['player_id'])


def downgrade():
    op.drop_index('ix_inventory_item_player_id', table_name='inventory_item')
    op.drop_table('inventory_item')
    op.drop_index('ix_player_name', table_name='player')
    op.drop_table('player')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
