"""initial schema: users, settings, filters, tenders, entities, municipalities

Revision ID: 3f1c9a7e2d40
Revises:
Create Date: 2026-10-12 10:14:52.118304

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7e2d40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'user_settings',
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('favorites', sa.JSON(), nullable=True),
        sa.Column('followed_entities', sa.JSON(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('user_id')
    )

    op.create_table(
        'custom_filters',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('district', sa.String(length=100), nullable=True),
        sa.Column('municipalities', sa.JSON(), nullable=True),
        sa.Column('keywords', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_custom_filters_user_id'), 'custom_filters', ['user_id'], unique=False)

    op.create_table(
        'tenders',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('procedure_number', sa.String(length=100), nullable=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('entity', sa.String(length=500), nullable=True),
        sa.Column('tax_id', sa.String(length=20), nullable=True),
        sa.Column('publish_date', sa.DateTime(), nullable=True),
        sa.Column('proposal_deadline', sa.DateTime(), nullable=True),
        sa.Column('base_price', sa.Float(), nullable=True),
        sa.Column('execution_term', sa.Text(), nullable=True),
        sa.Column('urgent', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('district', sa.String(length=100), nullable=True),
        sa.Column('municipality', sa.String(length=100), nullable=True),
        sa.Column('single_factor_criterion', sa.Text(), nullable=True),
        sa.Column('multi_factor_criterion', sa.Text(), nullable=True),
        sa.Column('presentation_url', sa.String(length=1024), nullable=True),
        sa.Column('platform', sa.String(length=255), nullable=True),
        sa.Column('source_document_url', sa.String(length=1024), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_tenders_tax_id'), 'tenders', ['tax_id'], unique=False)
    op.create_index(op.f('ix_tenders_publish_date'), 'tenders', ['publish_date'], unique=False)
    op.create_index(op.f('ix_tenders_proposal_deadline'), 'tenders', ['proposal_deadline'], unique=False)

    op.create_table(
        'entities',
        sa.Column('tax_id', sa.String(length=20), nullable=False),
        sa.Column('name', sa.String(length=500), nullable=False),
        sa.PrimaryKeyConstraint('tax_id')
    )

    op.create_table(
        'municipalities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('district', sa.String(length=100), nullable=True),
        sa.Column('municipality', sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_municipalities_district'), 'municipalities', ['district'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_municipalities_district'), table_name='municipalities')
    op.drop_table('municipalities')
    op.drop_table('entities')
    op.drop_index(op.f('ix_tenders_proposal_deadline'), table_name='tenders')
    op.drop_index(op.f('ix_tenders_publish_date'), table_name='tenders')
    op.drop_index(op.f('ix_tenders_tax_id'), table_name='tenders')
    op.drop_table('tenders')
    op.drop_index(op.f('ix_custom_filters_user_id'), table_name='custom_filters')
    op.drop_table('custom_filters')
    op.drop_table('user_settings')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
