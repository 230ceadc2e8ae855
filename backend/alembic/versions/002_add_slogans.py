"""Add slogans table

Revision ID: 002_add_slogans
Revises: 001_initial_schema
Create Date: 2026-10-18 15:30:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '002_add_slogans'
down_revision = '001_initial_schema'
branch_labels = None
depends_on = None

def upgrade():
    op.create_table('slogans',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('brand_profile_id', sa.String(length=36), nullable=True),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('company_name', sa.String(), nullable=False),
        sa.Column('industry', sa.String(), nullable=False),
        sa.Column('brand_personality', sa.String(), nullable=False),
        sa.Column('tone', sa.String(), nullable=True),
        sa.Column('keywords', sa.JSON(), nullable=True),
        sa.Column('is_favorite', sa.Boolean(), nullable=False),
        sa.Column('favorited_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('ai_prompt', sa.Text(), nullable=True),
        sa.Column('generation_batch_id', sa.String(length=36), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.ForeignKeyConstraint(['brand_profile_id'], ['brand_profiles.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_slogans_user_id'), 'slogans', ['user_id'], unique=False)
    op.create_index(op.f('ix_slogans_generation_batch_id'), 'slogans', ['generation_batch_id'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_slogans_generation_batch_id'), table_name='slogans')
    op.drop_index(op.f('ix_slogans_user_id'), table_name='slogans')
    op.drop_table('slogans')
