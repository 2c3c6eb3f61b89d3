"""initial schema

Revision ID: 3b8e1f0c2a71
Revises:
Create Date: 2026-10-18 10:12:44.318204
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = '3b8e1f0c2a71'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def _request_columns():
    return [
        sa.Column('employee_id', sa.String(length=36), nullable=False),
        sa.Column('employee_name', sa.String(length=255), nullable=False),
        sa.Column('department', sa.String(length=255), nullable=True),
        sa.Column('designation', sa.String(length=255), nullable=True),
        sa.Column('request_type', sa.String(length=20), nullable=False),
        sa.Column('project', sa.String(length=255), nullable=True),
        sa.Column('project_other', sa.String(length=255), nullable=True),
        sa.Column('purpose', sa.Text(), nullable=True),
        sa.Column('purpose_other', sa.String(length=255), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('location_other', sa.String(length=255), nullable=True),
        sa.Column('total_amount', sa.Numeric(14, 2), nullable=False),
        sa.Column('previous_outstanding_advance', sa.Numeric(14, 2), nullable=False),
        sa.Column('status', sa.String(length=30), nullable=False),
        sa.Column('phase', sa.Integer(), nullable=False),
        sa.Column('approver_id', sa.String(length=36), nullable=True),
        sa.Column('approver_comments', sa.Text(), nullable=True),
        sa.Column('checker_comments', sa.Text(), nullable=True),
        sa.Column('finance_comments', sa.Text(), nullable=True),
        sa.Column('travel_details_approved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('expenses_submitted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('project_id', sa.String(length=36), nullable=True),
        sa.Column('budget_deducted_amount', sa.Numeric(14, 2), nullable=True),
    ]


def _request_indexes(table: str):
    for column in ('id', 'employee_id', 'status', 'approver_id', 'project_id'):
        op.create_index(op.f(f'ix_{table}_{column}'), table, [column], unique=False)


def upgrade() -> None:
    op.create_table(
        'users',
        *_timestamps(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('department', sa.String(length=255), nullable=True),
        sa.Column('designation', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_role'), 'users', ['role'], unique=False)

    op.create_table(
        'travel_requests',
        *_timestamps(),
        *_request_columns(),
        sa.Column('travel_date_from', sa.Date(), nullable=True),
        sa.Column('travel_date_to', sa.Date(), nullable=True),
        sa.Column('transport_mode', sa.String(length=30), nullable=True),
        sa.Column('station_pick_drop', sa.String(length=255), nullable=True),
        sa.Column('local_conveyance', sa.String(length=255), nullable=True),
        sa.Column('ride_share_used', sa.Boolean(), nullable=True),
        sa.Column('own_vehicle_reimbursement', sa.Boolean(), nullable=True),
        sa.Column('emergency_reason', sa.String(length=255), nullable=True),
        sa.Column('emergency_reason_other', sa.String(length=255), nullable=True),
        sa.Column('emergency_justification', sa.Text(), nullable=True),
        sa.Column('emergency_amount', sa.Numeric(14, 2), nullable=True),
        sa.Column('estimated_amount', sa.Numeric(14, 2), nullable=True),
        sa.Column('advance_notes', sa.Text(), nullable=True),
        sa.Column('is_group_travel', sa.Boolean(), nullable=True),
        sa.Column('is_group_captain', sa.Boolean(), nullable=True),
        sa.Column('group_size', sa.Integer(), nullable=True),
        sa.Column('group_members', sa.Text(), nullable=True),
        sa.Column('group_description', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    _request_indexes('travel_requests')

    op.create_table(
        'valley_requests',
        *_timestamps(),
        *_request_columns(),
        sa.Column('expense_date', sa.Date(), nullable=True),
        sa.Column('travel_date_from', sa.Date(), nullable=True),
        sa.Column('travel_date_to', sa.Date(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('payment_method', sa.String(length=50), nullable=True),
        sa.Column('payment_method_other', sa.String(length=255), nullable=True),
        sa.Column('meeting_type', sa.String(length=50), nullable=True),
        sa.Column('meeting_type_other', sa.String(length=255), nullable=True),
        sa.Column('meeting_participants', sa.String(length=50), nullable=True),
        sa.Column('meeting_participants_other', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    _request_indexes('valley_requests')

    op.create_table(
        'expense_items',
        *_timestamps(),
        sa.Column('request_id', sa.String(length=36), nullable=False),
        sa.Column('request_kind', sa.String(length=10), nullable=False),
        sa.Column('category', sa.String(length=30), nullable=False),
        sa.Column('amount', sa.Numeric(14, 2), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_expense_items_id'), 'expense_items', ['id'], unique=False)
    op.create_index(op.f('ix_expense_items_request_id'), 'expense_items', ['request_id'], unique=False)

    op.create_table(
        'receipts',
        *_timestamps(),
        sa.Column('expense_item_id', sa.String(length=36), nullable=False),
        sa.Column('original_filename', sa.String(length=255), nullable=False),
        sa.Column('stored_filename', sa.String(length=255), nullable=False),
        sa.Column('file_type', sa.String(length=100), nullable=True),
        sa.Column('storage_path', sa.String(length=500), nullable=True),
        sa.Column('public_url', sa.String(length=500), nullable=True),
        sa.Column('upload_date', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['expense_item_id'], ['expense_items.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_receipts_id'), 'receipts', ['id'], unique=False)
    op.create_index(op.f('ix_receipts_expense_item_id'), 'receipts', ['expense_item_id'], unique=False)

    op.create_table(
        'projects',
        *_timestamps(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_projects_id'), 'projects', ['id'], unique=False)
    op.create_index(op.f('ix_projects_name'), 'projects', ['name'], unique=True)

    op.create_table(
        'budgets',
        *_timestamps(),
        sa.Column('project_id', sa.String(length=36), nullable=False),
        sa.Column('amount', sa.Numeric(14, 2), nullable=False),
        sa.Column('fiscal_year', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('project_id', 'fiscal_year', name='uq_budget_project_year'),
    )
    op.create_index(op.f('ix_budgets_id'), 'budgets', ['id'], unique=False)
    op.create_index(op.f('ix_budgets_project_id'), 'budgets', ['project_id'], unique=False)

    op.create_table(
        'notifications',
        *_timestamps(),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('request_id', sa.String(length=36), nullable=True),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('read', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_notifications_id'), 'notifications', ['id'], unique=False)
    op.create_index(op.f('ix_notifications_user_id'), 'notifications', ['user_id'], unique=False)
    op.create_index(op.f('ix_notifications_request_id'), 'notifications', ['request_id'], unique=False)


def downgrade() -> None:
    for table in (
        'notifications', 'budgets', 'projects', 'receipts',
        'expense_items', 'valley_requests', 'travel_requests', 'users',
    ):
        op.drop_table(table)
