"""create_posts_answers_interactions

Revision ID: 4f1c2a9d7e31
Revises:
Create Date: 2025-09-12 10:45:03.214877

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "4f1c2a9d7e31"
down_revision = None
branch_labels = None
depends_on = None


def _toggle_procedure(name: str, interactions: str, target: str, counters: str, kind: str, opposite: str) -> str:
    """
    One stored interaction per (user, target):
    same kind again removes it, the opposite kind replaces it,
    otherwise it is inserted. Counters never drop below zero.
    """
    column = f"{kind}s"
    opposite_column = f"{opposite}s"
    return f"""
    CREATE OR REPLACE FUNCTION {name}({target} uuid, user_id uuid)
    RETURNS void
    LANGUAGE plpgsql
    AS $$
    DECLARE
        existing varchar(10);
    BEGIN
        SELECT i.interaction_type INTO existing
        FROM {interactions} i
        WHERE i.{target} = $1 AND i.user_id = $2
        FOR UPDATE;

        IF existing = '{kind}' THEN
            DELETE FROM {interactions} i WHERE i.{target} = $1 AND i.user_id = $2;
            UPDATE {counters} c SET {column} = GREATEST(c.{column} - 1, 0) WHERE c.id = $1;
        ELSIF existing = '{opposite}' THEN
            UPDATE {interactions} i SET interaction_type = '{kind}' WHERE i.{target} = $1 AND i.user_id = $2;
            UPDATE {counters} c
            SET {column} = c.{column} + 1,
                {opposite_column} = GREATEST(c.{opposite_column} - 1, 0)
            WHERE c.id = $1;
        ELSE
            INSERT INTO {interactions} (id, user_id, {target}, interaction_type, created_at)
            VALUES (gen_random_uuid(), $2, $1, '{kind}', now());
            UPDATE {counters} c SET {column} = c.{column} + 1 WHERE c.id = $1;
        END IF;
    END;
    $$;
    """


PROCEDURES = [
    ("increment_post_likes", "user_interactions", "post_id", "posts", "like", "dislike"),
    ("increment_post_dislikes", "user_interactions", "post_id", "posts", "dislike", "like"),
    ("increment_answer_likes", "answer_interactions", "answer_id", "answers", "like", "dislike"),
    ("increment_answer_dislikes", "answer_interactions", "answer_id", "answers", "dislike", "like"),
]


def _id_column() -> sa.Column:
    return sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()"))


def _created_at_column() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()"))


def upgrade() -> None:
    op.create_table(
        "posts",
        _id_column(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.String(length=1000), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("likes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("dislikes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("image_url", sa.String(), nullable=True),
        _created_at_column(),
    )
    op.create_index("ix_posts_user_id", "posts", ["user_id"])
    op.create_index("ix_posts_category", "posts", ["category"])
    op.create_index("ix_posts_created_at", "posts", ["created_at"])

    op.create_table(
        "answers",
        _id_column(),
        sa.Column("post_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("content", sa.String(length=1000), nullable=False),
        sa.Column("likes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("dislikes", sa.Integer(), nullable=False, server_default="0"),
        _created_at_column(),
    )
    op.create_index("ix_answers_post_id", "answers", ["post_id"])
    op.create_index("ix_answers_user_id", "answers", ["user_id"])

    op.create_table(
        "profiles",
        _id_column(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=True),
        sa.Column("avatar_url", sa.String(), nullable=True),
        _created_at_column(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
    )
    op.create_index("ix_profiles_user_id", "profiles", ["user_id"], unique=True)

    op.create_table(
        "user_interactions",
        _id_column(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("post_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("interaction_type", sa.String(length=10), nullable=False),
        _created_at_column(),
        sa.UniqueConstraint("user_id", "post_id", name="user_interactions_user_id_post_id_key"),
        sa.CheckConstraint("interaction_type IN ('like', 'dislike')", name="user_interactions_type_check"),
    )
    op.create_index("ix_user_interactions_user_id", "user_interactions", ["user_id"])
    op.create_index("ix_user_interactions_post_id", "user_interactions", ["post_id"])

    op.create_table(
        "answer_interactions",
        _id_column(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("answer_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("answers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("interaction_type", sa.String(length=10), nullable=False),
        _created_at_column(),
        sa.UniqueConstraint("user_id", "answer_id", name="answer_interactions_user_id_answer_id_key"),
        sa.CheckConstraint("interaction_type IN ('like', 'dislike')", name="answer_interactions_type_check"),
    )
    op.create_index("ix_answer_interactions_user_id", "answer_interactions", ["user_id"])
    op.create_index("ix_answer_interactions_answer_id", "answer_interactions", ["answer_id"])

    op.create_table(
        "reports",
        _id_column(),
        sa.Column("post_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("reporter_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        _created_at_column(),
    )
    op.create_index("ix_reports_post_id", "reports", ["post_id"])
    op.create_index("ix_reports_reporter_id", "reports", ["reporter_id"])

    for procedure in PROCEDURES:
        op.execute(_toggle_procedure(*procedure))


def downgrade() -> None:
    for name, *_ in PROCEDURES:
        op.execute(f"DROP FUNCTION IF EXISTS {name}(uuid, uuid)")

    op.drop_table("reports")
    op.drop_table("answer_interactions")
    op.drop_table("user_interactions")
    op.drop_table("profiles")
    op.drop_table("answers")
    op.drop_table("posts")
