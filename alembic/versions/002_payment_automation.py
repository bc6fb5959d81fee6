"""Add reminders table and GST/ABN flags on employees

Revision ID: 002_payment_automation
Revises: 001_initial_schema
Create Date: 2025-11-20

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '002_payment_automation'
down_revision: Union[str, None] = '001_initial_schema'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    cols = [c['name'] for c in inspector.get_columns('employees')]
    if 'gst_registered' not in cols:
        with op.batch_alter_table('employees') as batch_op:
            batch_op.add_column(sa.Column('gst_registered', sa.Boolean(), nullable=False, server_default=sa.false()))
            batch_op.add_column(sa.Column('abn_registered', sa.Boolean(), nullable=False, server_default=sa.false()))

    if 'reminders' in inspector.get_table_names():
        return

    op.create_table(
        'reminders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(), nullable=False, server_default='payment'),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('priority', sa.String(), nullable=False, server_default='medium'),
        sa.Column('status', sa.String(), nullable=False, server_default='pending'),
        sa.Column('related_id', sa.String(), nullable=False),
        sa.Column('employee_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_reminders_id'), 'reminders', ['id'], unique=False)
    op.create_index(op.f('ix_reminders_status'), 'reminders', ['status'], unique=False)
    op.create_index(op.f('ix_reminders_related_id'), 'reminders', ['related_id'], unique=True)
    op.create_index(op.f('ix_reminders_employee_id'), 'reminders', ['employee_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_reminders_employee_id'), table_name='reminders')
    op.drop_index(op.f('ix_reminders_related_id'), table_name='reminders')
    op.drop_index(op.f('ix_reminders_status'), table_name='reminders')
    op.drop_index(op.f('ix_reminders_id'), table_name='reminders')
    op.drop_table('reminders')
    with op.batch_alter_table('employees') as batch_op:
        batch_op.drop_column('abn_registered')
        batch_op.drop_column('gst_registered')
