"""create_clinicmatch_tables

Revision ID: 4c1d7e9a2b60
Revises:
Create Date: 2026-10-12 09:14:32.518204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4c1d7e9a2b60'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profiles, swipes, matches and messages."""
    op.create_table('profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('role', sa.String(length=10), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('position', sa.String(length=100), nullable=True),
        sa.Column('required_position', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('preferred_area', sa.String(length=100), nullable=True),
        sa.Column('radius_km', sa.Integer(), nullable=True),
        sa.Column('experience_years', sa.Integer(), nullable=True),
        sa.Column('availability_days', postgresql.JSONB(), nullable=True),
        sa.Column('availability_hours', sa.String(length=100), nullable=True),
        sa.Column('availability_date', sa.Date(), nullable=True),
        sa.Column('salary_min', sa.Integer(), nullable=True),
        sa.Column('salary_max', sa.Integer(), nullable=True),
        sa.Column('job_type', sa.String(length=20), nullable=True),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("role IN ('clinic', 'worker')", name='ck_profiles_role'),
        sa.CheckConstraint(
            "job_type IN ('daily', 'temporary', 'permanent')", name='ck_profiles_job_type'
        ),
        sa.CheckConstraint(
            'salary_min IS NULL OR salary_max IS NULL OR salary_min <= salary_max',
            name='ck_profiles_salary_range',
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index('ix_profiles_role', 'profiles', ['role'], unique=False)

    # One live decision per ordered pair; re-swipes update in place
    op.create_table('swipes',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('from_profile_id', sa.UUID(), nullable=False),
        sa.Column('to_profile_id', sa.UUID(), nullable=False),
        sa.Column('type', sa.String(length=4), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("type IN ('LIKE', 'PASS')", name='ck_swipes_type'),
        sa.CheckConstraint('from_profile_id <> to_profile_id', name='ck_swipes_no_self'),
        sa.ForeignKeyConstraint(['from_profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['to_profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('from_profile_id', 'to_profile_id', name='uq_swipes_pair'),
    )
    op.create_index('ix_swipes_to_profile', 'swipes', ['to_profile_id'], unique=False)

    # Pair stored as (smaller, larger) so the unique constraint is order-free
    op.create_table('matches',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('profile_a_id', sa.UUID(), nullable=False),
        sa.Column('profile_b_id', sa.UUID(), nullable=False),
        sa.Column('is_closed', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('closed_by', sa.UUID(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('profile_a_id <> profile_b_id', name='ck_matches_distinct'),
        sa.ForeignKeyConstraint(['profile_a_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['profile_b_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['closed_by'], ['profiles.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('profile_a_id', 'profile_b_id', name='uq_matches_pair'),
    )
    op.create_index('ix_matches_profile_b', 'matches', ['profile_b_id'], unique=False)

    op.create_table('messages',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('match_id', sa.UUID(), nullable=False),
        sa.Column('sender_id', sa.UUID(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['match_id'], ['matches.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['sender_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_messages_match_created', 'messages', ['match_id', 'created_at'], unique=False
    )


def downgrade() -> None:
    """Drop all ClinicMatch tables."""
    op.drop_index('ix_messages_match_created', table_name='messages')
    op.drop_table('messages')
    op.drop_index('ix_matches_profile_b', table_name='matches')
    op.drop_table('matches')
    op.drop_index('ix_swipes_to_profile', table_name='swipes')
    op.drop_table('swipes')
    op.drop_index('ix_profiles_role', table_name='profiles')
    op.drop_table('profiles')
