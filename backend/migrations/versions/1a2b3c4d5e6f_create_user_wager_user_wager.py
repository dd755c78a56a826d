"""create user, wager and user_wager tables

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1a2b3c4d5e6f'
down_revision = None
branch_labels = None
depends_on = None

BigId = sa.BigInteger().with_variant(sa.Integer(), 'sqlite')


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'user' not in existing_tables:
        op.create_table(
            'user',
            sa.Column('id', BigId, primary_key=True),
            sa.Column('external_id', sa.String(length=64), nullable=False),
            sa.Column('display_name', sa.String(length=128), nullable=False),
            sa.Column('balance', sa.BigInteger(), nullable=False, server_default='500'),
        )
        op.create_index('ix_user_external_id', 'user', ['external_id'], unique=True)

    if 'wager' not in existing_tables:
        op.create_table(
            'wager',
            sa.Column('id', BigId, primary_key=True),
            sa.Column('stake', sa.Integer(), nullable=False),
            sa.Column('closed', sa.Boolean(), nullable=False, server_default=sa.false()),
        )

    if 'user_wager' not in existing_tables:
        op.create_table(
            'user_wager',
            sa.Column('id', BigId, primary_key=True),
            sa.Column('wager_id', BigId, sa.ForeignKey('wager.id'), nullable=False),
            sa.Column('user_id', BigId, sa.ForeignKey('user.id'), nullable=False),
            sa.UniqueConstraint('wager_id', 'user_id', name='uq_user_wager_wager_user'),
        )
        op.create_index('ix_user_wager_wager_id', 'user_wager', ['wager_id'])


def downgrade():
    op.drop_index('ix_user_wager_wager_id', table_name='user_wager')
    op.drop_table('user_wager')
    op.drop_table('wager')
    op.drop_index('ix_user_external_id', table_name='user')
    op.drop_table('user')
