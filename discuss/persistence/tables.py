"""SQLAlchemy table definitions for the comment engine.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    ForeignKey,
    Identity,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

target_type_enum = postgresql.ENUM(
    "post", "article", "thread", name="comment_target_type", create_type=False
)
body_kind_enum = postgresql.ENUM(
    "text", "image", "video", name="comment_body_kind", create_type=False
)
comment_status_enum = postgresql.ENUM(
    "pending",
    "published",
    "deleted",
    "blocked",
    name="comment_status",
    create_type=False,
)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", BigInteger, Identity(always=True), primary_key=True),
    Column("target_id", BigInteger, nullable=False),
    Column("target_type", target_type_enum, nullable=False),
    Column("author_id", BigInteger, nullable=False),
    Column(
        "parent_id",
        BigInteger,
        ForeignKey("comments.id", ondelete="RESTRICT"),
        nullable=True,
    ),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column("body", Text, nullable=True),
    Column("body_kind", body_kind_enum, nullable=False, server_default="text"),
    Column("media_urls", JSONB, nullable=False, server_default="[]"),
    Column("like_count", Integer, nullable=False, server_default="0"),
    Column("reply_count", Integer, nullable=False, server_default="0"),
    Column("hot_score", Integer, nullable=False, server_default="0"),
    Column("status", comment_status_enum, nullable=False, server_default="published"),
    Column("published_at", TIMESTAMP(timezone=True), nullable=True),
    Column("moderated_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("depth >= 0", name="depth_non_negative"),
    CheckConstraint(
        "like_count >= 0 AND reply_count >= 0 AND hot_score >= 0",
        name="counters_non_negative",
    ),
)

# Thread pages: visible roots of a target, newest first
Index(
    "idx_comments_target_roots",
    comments_table.c.target_type,
    comments_table.c.target_id,
    comments_table.c.created_at.desc(),
    comments_table.c.id.desc(),
    postgresql_where=comments_table.c.parent_id.is_(None),
)
# Hot-ordered thread pages
Index(
    "idx_comments_target_hot",
    comments_table.c.target_type,
    comments_table.c.target_id,
    comments_table.c.hot_score.desc(),
    comments_table.c.id.desc(),
    postgresql_where=comments_table.c.parent_id.is_(None),
)
Index("idx_comments_parent_id", comments_table.c.parent_id, comments_table.c.id)
Index("idx_comments_status", comments_table.c.status)
Index("idx_comments_author_id", comments_table.c.author_id)

# ============================================================================
# COMMENT_RELATIONS TABLE (closure table)
# ============================================================================
comment_relations_table = Table(
    "comment_relations",
    metadata,
    Column(
        "ancestor_id",
        BigInteger,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "descendant_id",
        BigInteger,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("depth", Integer, nullable=False),
    Column("path", String, nullable=False),  # "1,4,9": ancestor ... descendant
    UniqueConstraint("ancestor_id", "descendant_id", name="uq_comment_relation"),
    CheckConstraint("depth >= 0", name="relation_depth_non_negative"),
)

Index(
    "idx_comment_relations_ancestor_depth",
    comment_relations_table.c.ancestor_id,
    comment_relations_table.c.depth,
)
Index(
    "idx_comment_relations_descendant",
    comment_relations_table.c.descendant_id,
)

# ============================================================================
# COMMENT_LIKES TABLE
# ============================================================================
comment_likes_table = Table(
    "comment_likes",
    metadata,
    Column("id", BigInteger, Identity(always=True), primary_key=True),
    Column(
        "comment_id",
        BigInteger,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", BigInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "comment_id", name="uq_comment_like"),
)

Index("idx_comment_likes_comment_id", comment_likes_table.c.comment_id)
