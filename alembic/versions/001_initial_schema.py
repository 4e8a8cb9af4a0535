"""Initial schema: users, characters, tags, media, and gallery RLS policies.

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""

from alembic import op


# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None

GALLERY_TABLES = ("characters", "tags", "character_tags", "media")


def upgrade():
    # Create users table
    op.execute("""
        CREATE TABLE users (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            username TEXT UNIQUE NOT NULL,
            email TEXT UNIQUE,
            created_at TIMESTAMPTZ DEFAULT now()
        );
    """)

    # No RLS on users - read via system_conn during session verification

    # Create characters table (cover FK added once media exists)
    op.execute("""
        CREATE TABLE characters (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            name TEXT NOT NULL CHECK (char_length(name) BETWEEN 3 AND 18),
            description TEXT CHECK (description IS NULL OR char_length(description) BETWEEN 3 AND 140),
            author_id UUID REFERENCES users(id) ON DELETE SET NULL,
            cover_id UUID,
            created_at TIMESTAMPTZ DEFAULT now(),
            updated_at TIMESTAMPTZ DEFAULT now()
        );
    """)

    op.execute("""
        CREATE INDEX idx_characters_author ON characters(author_id);
    """)

    # Create media table. Likes are a set of user ids, popularity is derived.
    op.execute("""
        CREATE TABLE media (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            character_id UUID REFERENCES characters(id) ON DELETE CASCADE,
            file_name TEXT NOT NULL,
            file_extension TEXT NOT NULL,
            mimetype TEXT NOT NULL,
            like_ids UUID[] NOT NULL DEFAULT '{}',
            created_at TIMESTAMPTZ DEFAULT now()
        );
    """)

    op.execute("""
        CREATE INDEX idx_media_character ON media(character_id);
    """)

    op.execute("""
        ALTER TABLE characters
        ADD CONSTRAINT characters_cover_fk
        FOREIGN KEY (cover_id) REFERENCES media(id) ON DELETE SET NULL;
    """)

    # Create tags table
    op.execute("""
        CREATE TABLE tags (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            name TEXT UNIQUE NOT NULL,
            cover_id UUID REFERENCES media(id) ON DELETE SET NULL,
            created_at TIMESTAMPTZ DEFAULT now()
        );
    """)

    # Create character_tags join table
    op.execute("""
        CREATE TABLE character_tags (
            character_id UUID REFERENCES characters(id) ON DELETE CASCADE,
            tag_id UUID REFERENCES tags(id) ON DELETE CASCADE,
            PRIMARY KEY (character_id, tag_id)
        );
    """)

    op.execute("""
        CREATE INDEX idx_character_tags_tag ON character_tags(tag_id);
    """)

    # RLS: gallery rows are shared between users, but only sessions that
    # carry app.user_id (user_conn) may read or write them.
    for table in GALLERY_TABLES:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")
        op.execute(f"""
            CREATE POLICY {table}_authenticated
            ON {table}
            FOR ALL
            USING (NULLIF(current_setting('app.user_id', true), '') IS NOT NULL)
            WITH CHECK (NULLIF(current_setting('app.user_id', true), '') IS NOT NULL);
        """)


def downgrade():
    op.execute("DROP TABLE IF EXISTS character_tags CASCADE")
    op.execute("DROP TABLE IF EXISTS tags CASCADE")
    op.execute("ALTER TABLE IF EXISTS characters DROP CONSTRAINT IF EXISTS characters_cover_fk")
    op.execute("DROP TABLE IF EXISTS media CASCADE")
    op.execute("DROP TABLE IF EXISTS characters CASCADE")
    op.execute("DROP TABLE IF EXISTS users CASCADE")
