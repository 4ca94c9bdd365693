"""tasks and stored events

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '20261019_0001'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table('tasks',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(), nullable=False, server_default='todo', index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False)
    )
    op.create_table('stored_events',
        sa.Column('sequence', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('aggregate_id', sa.String(36), nullable=False),
        sa.Column('event_name', sa.String(255), nullable=False),
        sa.Column('payload', sa.JSON(), nullable=False),
        sa.Column('occurred_on', sa.DateTime(timezone=True), nullable=False),
        sa.Column('stored_on', sa.DateTime(timezone=True), nullable=False)
    )
    op.create_index('idx_aggregate_id', 'stored_events', ['aggregate_id'])
    op.create_index('idx_event_name', 'stored_events', ['event_name'])


def downgrade():
    op.drop_index('idx_event_name', table_name='stored_events')
    op.drop_index('idx_aggregate_id', table_name='stored_events')
    op.drop_table('stored_events')
    op.drop_table('tasks')
