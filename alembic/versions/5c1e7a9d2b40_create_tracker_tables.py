"""create_tracker_tables

Revision ID: 5c1e7a9d2b40
Revises: 
Create Date: 2026-10-19 10:12:41.508213

Creates the remote store tables: applications, notes, custom_fields,
user_preferences and chart_configs. Safe to run against a database where some
of them already exist.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '5c1e7a9d2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade() -> None:
    if not table_exists('applications'):
        op.create_table('applications',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
            sa.Column('data', sa.JSON(), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_applications_user_id'), 'applications', ['user_id'], unique=False)
        op.create_index(op.f('ix_applications_created_at'), 'applications', ['created_at'], unique=False)

    if not table_exists('notes'):
        op.create_table('notes',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('application_id', sa.String(), nullable=False),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('content', sa.Text(), nullable=False),
            sa.Column('position', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
            sa.ForeignKeyConstraint(['application_id'], ['applications.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_notes_user_id'), 'notes', ['user_id'], unique=False)
        op.create_index('idx_notes_application_position', 'notes', ['application_id', 'position'], unique=False)

    if not table_exists('custom_fields'):
        op.create_table('custom_fields',
            sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('field_id', sa.String(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('type', sa.String(), nullable=False),
            sa.Column('required', sa.Boolean(), nullable=False),
            sa.Column('order', sa.Integer(), nullable=False),
            sa.Column('show_in_table', sa.Boolean(), nullable=False),
            sa.Column('options', sa.JSON(), nullable=True),
            sa.Column('default_value', sa.JSON(), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_custom_fields_user_id'), 'custom_fields', ['user_id'], unique=False)
        op.create_index('idx_custom_fields_user_field', 'custom_fields', ['user_id', 'field_id'], unique=True)

    if not table_exists('user_preferences'):
        op.create_table('user_preferences',
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('theme', sa.String(), nullable=False),
            sa.Column('default_pagination', sa.Integer(), nullable=False),
            sa.PrimaryKeyConstraint('user_id')
        )

    if not table_exists('chart_configs'):
        op.create_table('chart_configs',
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('charts', sa.JSON(), nullable=False),
            sa.Column('overview_cards', sa.JSON(), nullable=False),
            sa.PrimaryKeyConstraint('user_id')
        )


def downgrade() -> None:
    op.drop_table('chart_configs')
    op.drop_table('user_preferences')
    op.drop_index('idx_custom_fields_user_field', table_name='custom_fields')
    op.drop_index(op.f('ix_custom_fields_user_id'), table_name='custom_fields')
    op.drop_table('custom_fields')
    op.drop_index('idx_notes_application_position', table_name='notes')
    op.drop_index(op.f('ix_notes_user_id'), table_name='notes')
    op.drop_table('notes')
    op.drop_index(op.f('ix_applications_created_at'), table_name='applications')
    op.drop_index(op.f('ix_applications_user_id'), table_name='applications')
    op.drop_table('applications')
