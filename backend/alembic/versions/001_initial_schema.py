"""Initial schema: users, launches, fee_collections

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-09-02

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


launch_status = sa.Enum('PENDING', 'DEPLOYING', 'DEPLOYED', 'FAILED', name='launchstatus')


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('external_id', sa.String(length=255), nullable=False),
        sa.Column('social_handle', sa.String(length=64), nullable=True),
        sa.Column('display_name', sa.Text(), nullable=True),
        sa.Column('avatar_url', sa.Text(), nullable=True),
        sa.Column('wallet_address', sa.String(length=42), nullable=True),
        sa.Column('created_at_utc', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_external_id', 'users', ['external_id'], unique=True)
    op.create_index('ix_users_social_handle', 'users', ['social_handle'], unique=True)

    op.create_table(
        'launches',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('launcher_user_id', sa.String(length=36), nullable=False),

        # Target profile snapshot
        sa.Column('target_handle', sa.String(length=64), nullable=False),
        sa.Column('target_display_name', sa.String(length=256), nullable=True),
        sa.Column('target_avatar_url', sa.Text(), nullable=True),

        # Token metadata
        sa.Column('token_name', sa.String(length=128), nullable=False),
        sa.Column('token_symbol', sa.String(length=16), nullable=False),
        sa.Column('token_image_url', sa.Text(), nullable=False),

        # Deployment results
        sa.Column('token_address', sa.String(length=42), nullable=True),
        sa.Column('deploy_tx_hash', sa.String(length=66), nullable=True),
        sa.Column('pool_id', sa.String(length=66), nullable=True),
        sa.Column('fee_router_address', sa.String(length=42), nullable=True),
        sa.Column('request_key', sa.String(length=32), nullable=False),
        sa.Column('status', launch_status, nullable=False),

        # Claim
        sa.Column('claimed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('claimed_by_user_id', sa.String(length=36), nullable=True),
        sa.Column('claimed_at_utc', sa.DateTime(timezone=True), nullable=True),
        sa.Column('claimer_wallet_address', sa.String(length=42), nullable=True),
        sa.Column('claim_tx_hash', sa.String(length=66), nullable=True),
        sa.Column('vault_claim_tx_hash', sa.String(length=66), nullable=True),

        sa.Column('created_at_utc', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['launcher_user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['claimed_by_user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('token_address'),
        sa.UniqueConstraint('request_key')
    )
    op.create_index('ix_launches_launcher_user_id', 'launches', ['launcher_user_id'])
    op.create_index('ix_launches_target_handle', 'launches', ['target_handle'])
    op.create_index('ix_launches_status', 'launches', ['status'])
    op.create_index('ix_launches_created_at_utc', 'launches', ['created_at_utc'])

    op.create_table(
        'fee_collections',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('launch_id', sa.String(length=36), nullable=False),
        sa.Column('token_address', sa.String(length=42), nullable=False),
        sa.Column('amount_wei', sa.String(length=78), nullable=False),
        sa.Column('asset_amount_wei', sa.String(length=78), nullable=True),
        sa.Column('tx_hash', sa.String(length=66), nullable=False),
        sa.Column('collected_at_utc', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['launch_id'], ['launches.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_fee_collections_launch_id', 'fee_collections', ['launch_id'])


def downgrade():
    op.drop_index('ix_fee_collections_launch_id', table_name='fee_collections')
    op.drop_table('fee_collections')
    op.drop_index('ix_launches_created_at_utc', table_name='launches')
    op.drop_index('ix_launches_status', table_name='launches')
    op.drop_index('ix_launches_target_handle', table_name='launches')
    op.drop_index('ix_launches_launcher_user_id', table_name='launches')
    op.drop_table('launches')
    launch_status.drop(op.get_bind(), checkfirst=True)
    op.drop_index('ix_users_social_handle', table_name='users')
    op.drop_index('ix_users_external_id', table_name='users')
    op.drop_table('users')
