"""Track fee router recipient sync and add audit_logs

Revision ID: 002_router_sync_and_audit
Revises: 001_initial_schema
Create Date: 2026-09-24

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '002_router_sync_and_audit'
down_revision = '001_initial_schema'
branch_labels = None
depends_on = None


def upgrade():
    op.add_column(
        'launches',
        sa.Column('router_recipient_synced', sa.Boolean(), nullable=False, server_default=sa.false())
    )

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('at_utc', sa.DateTime(timezone=True), nullable=False),
        sa.Column('action', sa.String(length=64), nullable=False),
        sa.Column('actor_user_id', sa.String(length=36), nullable=True),
        sa.Column('launch_id', sa.String(length=36), nullable=True),
        sa.Column('details', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['actor_user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['launch_id'], ['launches.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_audit_logs_action', 'audit_logs', ['action'])
    op.create_index('ix_audit_logs_launch_id', 'audit_logs', ['launch_id'])


def downgrade():
    op.drop_index('ix_audit_logs_launch_id', table_name='audit_logs')
    op.drop_index('ix_audit_logs_action', table_name='audit_logs')
    op.drop_table('audit_logs')
    op.drop_column('launches', 'router_recipient_synced')
