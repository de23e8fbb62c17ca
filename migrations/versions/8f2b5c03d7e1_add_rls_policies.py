"""add_rls_policies

Revision ID: 8f2b5c03d7e1
Revises: 4c1d7e9a2b60
Create Date: 2026-10-12 11:40:07.204319

"""

from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8f2b5c03d7e1"
down_revision: str | Sequence[str] | None = "4c1d7e9a2b60"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

TABLES = ("profiles", "swipes", "matches", "messages")


def upgrade() -> None:
    """Read-only Row Level Security for direct Supabase client access.

    The API connects with a role that bypasses RLS and performs every write
    itself; these policies only cover the client's realtime subscriptions.
    """
    # Resolves the caller's profile without re-entering RLS on profiles
    op.execute("""
        CREATE OR REPLACE FUNCTION current_profile_id()
        RETURNS UUID
        LANGUAGE sql
        SECURITY DEFINER
        STABLE
        SET search_path = public
        AS $$
            SELECT id FROM profiles WHERE user_id = (SELECT auth.uid());
        $$;
    """)

    for table in TABLES:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")

    # Cards are visible to every signed-in user
    op.execute("""
        CREATE POLICY profiles_select ON profiles
            FOR SELECT USING ((SELECT auth.uid()) IS NOT NULL);
    """)
    # A swipe is private to the profile that made it
    op.execute("""
        CREATE POLICY swipes_select ON swipes
            FOR SELECT USING (from_profile_id = current_profile_id());
    """)
    op.execute("""
        CREATE POLICY matches_select ON matches
            FOR SELECT USING (
                current_profile_id() IN (profile_a_id, profile_b_id)
            );
    """)
    op.execute("""
        CREATE POLICY messages_select ON messages
            FOR SELECT USING (
                match_id IN (
                    SELECT id FROM matches
                    WHERE current_profile_id() IN (profile_a_id, profile_b_id)
                )
            );
    """)


def downgrade() -> None:
    """Remove RLS policies and the helper function."""
    for table in reversed(TABLES):
        op.execute(f"DROP POLICY IF EXISTS {table}_select ON {table};")
        op.execute(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY;")
    op.execute("DROP FUNCTION IF EXISTS current_profile_id();")
