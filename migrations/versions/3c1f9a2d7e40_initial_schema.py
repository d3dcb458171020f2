"""initial_schema

Create the comment engine schema:
- Comments (adjacency parent pointer, denormalized counters, moderation status)
- Comment relations (closure table with materialized id paths)
- Comment likes (one row per user and comment)

Revision ID: 3c1f9a2d7e40
Revises:
Create Date: 2026-10-12 14:03:11.512904

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a2d7e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE comment_target_type AS ENUM ('post', 'article', 'thread');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE comment_body_kind AS ENUM ('text', 'image', 'video');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE comment_status AS ENUM ('pending', 'published', 'deleted', 'blocked');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    target_type = postgresql.ENUM(name="comment_target_type", create_type=False)
    body_kind = postgresql.ENUM(name="comment_body_kind", create_type=False)
    comment_status = postgresql.ENUM(name="comment_status", create_type=False)

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column("id", sa.BigInteger(), sa.Identity(always=True), nullable=False),
        sa.Column("target_id", sa.BigInteger(), nullable=False),
        sa.Column("target_type", target_type, nullable=False),
        sa.Column("author_id", sa.BigInteger(), nullable=False),
        sa.Column("parent_id", sa.BigInteger(), nullable=True),
        sa.Column("depth", sa.Integer(), server_default="0", nullable=False),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("body_kind", body_kind, server_default="text", nullable=False),
        sa.Column(
            "media_urls",
            postgresql.JSONB(),
            server_default=sa.text("'[]'::jsonb"),
            nullable=False,
        ),
        sa.Column("like_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column("reply_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column("hot_score", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "status", comment_status, server_default="published", nullable=False
        ),
        sa.Column("published_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("moderated_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column("deleted_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="RESTRICT"),
        sa.CheckConstraint("depth >= 0", name="depth_non_negative"),
        sa.CheckConstraint(
            "like_count >= 0 AND reply_count >= 0 AND hot_score >= 0",
            name="counters_non_negative",
        ),
    )
    op.create_index(
        "idx_comments_target_roots",
        "comments",
        ["target_type", "target_id", sa.text("created_at DESC"), sa.text("id DESC")],
        postgresql_where=sa.text("parent_id IS NULL"),
    )
    op.create_index(
        "idx_comments_target_hot",
        "comments",
        ["target_type", "target_id", sa.text("hot_score DESC"), sa.text("id DESC")],
        postgresql_where=sa.text("parent_id IS NULL"),
    )
    op.create_index("idx_comments_parent_id", "comments", ["parent_id", "id"])
    op.create_index("idx_comments_status", "comments", ["status"])
    op.create_index("idx_comments_author_id", "comments", ["author_id"])

    # ========================================================================
    # COMMENT_RELATIONS table (closure table)
    # ========================================================================
    op.create_table(
        "comment_relations",
        sa.Column("ancestor_id", sa.BigInteger(), nullable=False),
        sa.Column("descendant_id", sa.BigInteger(), nullable=False),
        sa.Column("depth", sa.Integer(), nullable=False),
        sa.Column("path", sa.String(), nullable=False),
        sa.ForeignKeyConstraint(["ancestor_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["descendant_id"], ["comments.id"], ondelete="CASCADE"
        ),
        sa.UniqueConstraint("ancestor_id", "descendant_id", name="uq_comment_relation"),
        sa.CheckConstraint("depth >= 0", name="relation_depth_non_negative"),
    )
    op.create_index(
        "idx_comment_relations_ancestor_depth",
        "comment_relations",
        ["ancestor_id", "depth"],
    )
    op.create_index(
        "idx_comment_relations_descendant", "comment_relations", ["descendant_id"]
    )

    # ========================================================================
    # COMMENT_LIKES table
    # ========================================================================
    op.create_table(
        "comment_likes",
        sa.Column("id", sa.BigInteger(), sa.Identity(always=True), nullable=False),
        sa.Column("comment_id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "comment_id", name="uq_comment_like"),
    )
    op.create_index("idx_comment_likes_comment_id", "comment_likes", ["comment_id"])

    # Trigger function to update updated_at timestamp
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
    """)

    op.execute("""
        CREATE TRIGGER update_comments_updated_at
        BEFORE UPDATE ON comments
        FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP TRIGGER IF EXISTS update_comments_updated_at ON comments")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    # Drop tables (in reverse order of dependencies)
    op.drop_table("comment_likes")
    op.drop_table("comment_relations")
    op.drop_table("comments")

    # Drop ENUM types
    op.execute("DROP TYPE IF EXISTS comment_status")
    op.execute("DROP TYPE IF EXISTS comment_body_kind")
    op.execute("DROP TYPE IF EXISTS comment_target_type")
