"""Initial attendance schema: employees, attendance records, schedules, audit logs

Revision ID: 001_attendance_schema
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_attendance_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    # CURRENT_TIMESTAMP works on both SQLite and Postgres
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade() -> None:
    existing = set(sa.inspect(op.get_bind()).get_table_names())

    if 'employees' not in existing:
        op.create_table(
            'employees',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('employee_code', sa.String(length=50), nullable=False),
            sa.Column('name', sa.String(length=200), nullable=False),
            sa.Column('username', sa.String(length=100), nullable=False),
            sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index(op.f('ix_employees_id'), 'employees', ['id'], unique=False)
        op.create_index(op.f('ix_employees_employee_code'), 'employees', ['employee_code'], unique=True)
        op.create_index(op.f('ix_employees_username'), 'employees', ['username'], unique=True)

    if 'attendance_records' not in existing:
        op.create_table(
            'attendance_records',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('employee_id', sa.Integer(), nullable=False),
            sa.Column('clock_in', sa.DateTime(), nullable=False),
            sa.Column('clock_out', sa.DateTime(), nullable=True),
            sa.Column('hours_worked', sa.Float(), nullable=True),
            sa.Column('net_hours_worked', sa.Float(), nullable=True),
            sa.Column('notes', sa.String(length=500), nullable=True),
            *_timestamps(),
            sa.ForeignKeyConstraint(['employee_id'], ['employees.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index(op.f('ix_attendance_records_id'), 'attendance_records', ['id'], unique=False)
        op.create_index(op.f('ix_attendance_records_employee_id'), 'attendance_records', ['employee_id'], unique=False)
        op.create_index(op.f('ix_attendance_records_clock_in'), 'attendance_records', ['clock_in'], unique=False)
        op.create_index(
            'ix_attendance_records_employee_clock_in',
            'attendance_records',
            ['employee_id', 'clock_in'],
            unique=False,
        )
        op.create_index(
            'uq_attendance_open_per_employee',
            'attendance_records',
            ['employee_id'],
            unique=True,
            sqlite_where=sa.text('clock_out IS NULL'),
            postgresql_where=sa.text('clock_out IS NULL'),
        )

    if 'employee_schedules' not in existing:
        op.create_table(
            'employee_schedules',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('employee_id', sa.Integer(), nullable=False),
            sa.Column('start_time', sa.String(length=5), nullable=False),
            sa.Column('end_time', sa.String(length=5), nullable=False),
            sa.Column('expected_hours', sa.Float(), nullable=False),
            *_timestamps(),
            sa.ForeignKeyConstraint(['employee_id'], ['employees.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index(op.f('ix_employee_schedules_id'), 'employee_schedules', ['id'], unique=False)
        op.create_index(op.f('ix_employee_schedules_employee_id'), 'employee_schedules', ['employee_id'], unique=True)

    if 'audit_logs' not in existing:
        op.create_table(
            'audit_logs',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('actor', sa.String(length=100), nullable=False),
            sa.Column('action', sa.String(), nullable=False),
            sa.Column('entity_type', sa.String(), nullable=False),
            sa.Column('entity_id', sa.Integer(), nullable=True),
            sa.Column('meta_json', sa.JSON(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index(op.f('ix_audit_logs_id'), 'audit_logs', ['id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_audit_logs_id'), table_name='audit_logs')
    op.drop_table('audit_logs')
    op.drop_index(op.f('ix_employee_schedules_employee_id'), table_name='employee_schedules')
    op.drop_index(op.f('ix_employee_schedules_id'), table_name='employee_schedules')
    op.drop_table('employee_schedules')
    op.drop_index('uq_attendance_open_per_employee', table_name='attendance_records')
    op.drop_index('ix_attendance_records_employee_clock_in', table_name='attendance_records')
    op.drop_index(op.f('ix_attendance_records_clock_in'), table_name='attendance_records')
    op.drop_index(op.f('ix_attendance_records_employee_id'), table_name='attendance_records')
    op.drop_index(op.f('ix_attendance_records_id'), table_name='attendance_records')
    op.drop_table('attendance_records')
    op.drop_index(op.f('ix_employees_username'), table_name='employees')
    op.drop_index(op.f('ix_employees_employee_code'), table_name='employees')
    op.drop_index(op.f('ix_employees_id'), table_name='employees')
    op.drop_table('employees')
