"""Initial schema: employees, sites, locations, work records, payroll, invoices, tasks

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-10-01

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    # SQL-standard CURRENT_TIMESTAMP works on SQLite and Postgres
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade() -> None:
    # Skip if tables already exist (e.g. SQLite DB created by the app's create_all())
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if 'employees' in inspector.get_table_names():
        return

    op.create_table(
        'employees',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('emp_code', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('role', sa.String(), nullable=False, server_default='EMPLOYEE'),
        sa.Column('hourly_rate', sa.Numeric(10, 2), nullable=True),
        sa.Column('password_hash', sa.String(), nullable=True),
        sa.Column('join_date', sa.Date(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_employees_id'), 'employees', ['id'], unique=False)
    op.create_index(op.f('ix_employees_emp_code'), 'employees', ['emp_code'], unique=True)

    op.create_table(
        'sites',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('client_name', sa.String(), nullable=True),
        sa.Column('latitude', sa.Numeric(10, 8), nullable=True),
        sa.Column('longitude', sa.Numeric(11, 8), nullable=True),
        sa.Column('status', sa.String(), nullable=False, server_default='active'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_sites_id'), 'sites', ['id'], unique=False)
    op.create_index(op.f('ix_sites_name'), 'sites', ['name'], unique=False)

    op.create_table(
        'employee_locations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('employee_id', sa.Integer(), nullable=False),
        sa.Column('site_id', sa.Integer(), nullable=False),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('latitude', sa.Numeric(10, 8), nullable=True),
        sa.Column('longitude', sa.Numeric(11, 8), nullable=True),
        sa.Column('radius_meters', sa.Integer(), nullable=False, server_default='50'),
        sa.Column('allow_work_from_anywhere', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('status', sa.String(), nullable=False, server_default='pending'),
        sa.Column('approved_by', sa.Integer(), nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id'], ),
        sa.ForeignKeyConstraint(['site_id'], ['sites.id'], ),
        sa.ForeignKeyConstraint(['approved_by'], ['employees.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_employee_locations_id'), 'employee_locations', ['id'], unique=False)
    op.create_index(op.f('ix_employee_locations_employee_id'), 'employee_locations', ['employee_id'], unique=False)
    op.create_index(op.f('ix_employee_locations_site_id'), 'employee_locations', ['site_id'], unique=False)
    op.create_index(op.f('ix_employee_locations_status'), 'employee_locations', ['status'], unique=False)

    op.create_table(
        'work_records',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('employee_id', sa.Integer(), nullable=False),
        sa.Column('work_date', sa.Date(), nullable=False),
        sa.Column('clock_in_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('clock_out_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('hours_worked', sa.Numeric(6, 2), nullable=False, server_default='0'),
        sa.Column('is_leave', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('leave_type', sa.String(), nullable=True),
        sa.Column('site_id', sa.Integer(), nullable=True),
        sa.Column('location_id', sa.Integer(), nullable=True),
        sa.Column('clock_in_lat', sa.Numeric(10, 8), nullable=True),
        sa.Column('clock_in_lng', sa.Numeric(11, 8), nullable=True),
        sa.Column('clock_in_distance_m', sa.Numeric(12, 1), nullable=True),
        sa.Column('approval_status', sa.String(), nullable=False, server_default='pending'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id'], ),
        sa.ForeignKeyConstraint(['site_id'], ['sites.id'], ),
        sa.ForeignKeyConstraint(['location_id'], ['employee_locations.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('employee_id', 'work_date', name='uq_work_record_employee_date')
    )
    op.create_index(op.f('ix_work_records_id'), 'work_records', ['id'], unique=False)
    op.create_index(op.f('ix_work_records_employee_id'), 'work_records', ['employee_id'], unique=False)
    op.create_index(op.f('ix_work_records_work_date'), 'work_records', ['work_date'], unique=False)

    op.create_table(
        'payroll_records',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('employee_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('month', sa.String(), nullable=False),
        sa.Column('work_year', sa.Integer(), nullable=True),
        sa.Column('date', sa.String(), nullable=True),
        sa.Column('mode_of_cash_flow', sa.String(), nullable=False, server_default='outflow'),
        sa.Column('type_of_cash_flow', sa.String(), nullable=False, server_default='cleaner_payroll'),
        sa.Column('site_of_work', sa.String(), nullable=True),
        sa.Column('abn_registered', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('gst_registered', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('invoice_number', sa.String(), nullable=True),
        sa.Column('amount_excl_gst', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('gst_amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('currency', sa.String(), nullable=False, server_default='AUD'),
        sa.Column('payment_method', sa.String(), nullable=False, server_default='bank_transfer'),
        sa.Column('payment_date', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=False, server_default='pending'),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_payroll_records_id'), 'payroll_records', ['id'], unique=False)
    op.create_index(op.f('ix_payroll_records_employee_id'), 'payroll_records', ['employee_id'], unique=False)
    op.create_index(op.f('ix_payroll_records_name'), 'payroll_records', ['name'], unique=False)
    op.create_index(op.f('ix_payroll_records_status'), 'payroll_records', ['status'], unique=False)

    op.create_table(
        'invoices',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('invoice_number', sa.String(), nullable=False),
        sa.Column('client_name', sa.String(), nullable=False),
        sa.Column('site_id', sa.Integer(), nullable=True),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('gst', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('issue_date', sa.Date(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='pending'),
        sa.Column('payment_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['site_id'], ['sites.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_invoices_id'), 'invoices', ['id'], unique=False)
    op.create_index(op.f('ix_invoices_invoice_number'), 'invoices', ['invoice_number'], unique=True)
    op.create_index(op.f('ix_invoices_issue_date'), 'invoices', ['issue_date'], unique=False)

    op.create_table(
        'tasks',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(), nullable=False, server_default='new'),
        sa.Column('priority', sa.String(), nullable=False, server_default='medium'),
        sa.Column('assignee_id', sa.Integer(), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['assignee_id'], ['employees.id'], ),
        sa.ForeignKeyConstraint(['created_by'], ['employees.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_tasks_id'), 'tasks', ['id'], unique=False)
    op.create_index(op.f('ix_tasks_status'), 'tasks', ['status'], unique=False)
    op.create_index(op.f('ix_tasks_assignee_id'), 'tasks', ['assignee_id'], unique=False)

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('actor_id', sa.Integer(), nullable=False),
        sa.Column('action', sa.String(), nullable=False),
        sa.Column('entity_type', sa.String(), nullable=False),
        sa.Column('entity_id', sa.Integer(), nullable=True),
        sa.Column('meta_json', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['actor_id'], ['employees.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_audit_logs_id'), 'audit_logs', ['id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_audit_logs_id'), table_name='audit_logs')
    op.drop_table('audit_logs')
    op.drop_index(op.f('ix_tasks_assignee_id'), table_name='tasks')
    op.drop_index(op.f('ix_tasks_status'), table_name='tasks')
    op.drop_index(op.f('ix_tasks_id'), table_name='tasks')
    op.drop_table('tasks')
    op.drop_index(op.f('ix_invoices_issue_date'), table_name='invoices')
    op.drop_index(op.f('ix_invoices_invoice_number'), table_name='invoices')
    op.drop_index(op.f('ix_invoices_id'), table_name='invoices')
    op.drop_table('invoices')
    op.drop_index(op.f('ix_payroll_records_status'), table_name='payroll_records')
    op.drop_index(op.f('ix_payroll_records_name'), table_name='payroll_records')
    op.drop_index(op.f('ix_payroll_records_employee_id'), table_name='payroll_records')
    op.drop_index(op.f('ix_payroll_records_id'), table_name='payroll_records')
    op.drop_table('payroll_records')
    op.drop_index(op.f('ix_work_records_work_date'), table_name='work_records')
    op.drop_index(op.f('ix_work_records_employee_id'), table_name='work_records')
    op.drop_index(op.f('ix_work_records_id'), table_name='work_records')
    op.drop_table('work_records')
    op.drop_index(op.f('ix_employee_locations_status'), table_name='employee_locations')
    op.drop_index(op.f('ix_employee_locations_site_id'), table_name='employee_locations')
    op.drop_index(op.f('ix_employee_locations_employee_id'), table_name='employee_locations')
    op.drop_index(op.f('ix_employee_locations_id'), table_name='employee_locations')
    op.drop_table('employee_locations')
    op.drop_index(op.f('ix_sites_name'), table_name='sites')
    op.drop_index(op.f('ix_sites_id'), table_name='sites')
    op.drop_table('sites')
    op.drop_index(op.f('ix_employees_emp_code'), table_name='employees')
    op.drop_index(op.f('ix_employees_id'), table_name='employees')
    op.drop_table('employees')
