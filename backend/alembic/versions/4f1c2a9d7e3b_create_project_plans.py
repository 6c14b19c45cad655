"""create project_plans

Revision ID: 4f1c2a9d7e3b
Revises:
Create Date: 2026-10-19 10:12:31.402117
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '4f1c2a9d7e3b'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('project_plans',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('project_name', sa.Text(), nullable=False),
        sa.Column('project_description', sa.Text(), nullable=False),
        sa.Column('plan_data', sa.JSON().with_variant(postgresql.JSONB(), 'postgresql'), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_project_plans_user_id', 'project_plans', ['user_id'])
    op.create_index('idx_project_plans_created_at', 'project_plans', ['created_at'])


def downgrade() -> None:
    op.drop_index('idx_project_plans_created_at', table_name='project_plans')
    op.drop_index('idx_project_plans_user_id', table_name='project_plans')
    op.drop_table('project_plans')
