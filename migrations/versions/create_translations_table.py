"""Create translations table

Revision ID: create_translations_table
Revises:
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'create_translations_table'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'translations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('translatable_type', sa.String(100), nullable=False),
        sa.Column('translatable_id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(100), nullable=False),
        sa.Column('locale', sa.String(20), nullable=False),
        sa.Column('value', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('translatable_type', 'translatable_id', 'key', 'locale',
                            name='unique_translation_key_locale')
    )

    # Owner lookups load all rows of one record
    op.create_index('ix_translations_owner', 'translations', ['translatable_type', 'translatable_id'])


def downgrade():
    op.drop_index('ix_translations_owner', table_name='translations')
    op.drop_table('translations')
