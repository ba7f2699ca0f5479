"""chat history

Revision ID: 0002_chat_messages
Revises: 0001_initial
Create Date: 2024-02-01 00:00:00

"""
from alembic import op
import sqlalchemy as sa

revision = "0002_chat_messages"
down_revision = "0001_initial"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "chat_messages",
        sa.Column("id", sa.String(50), primary_key=True),
        sa.Column("owner_id", sa.String(100), nullable=False),
        sa.Column("session_id", sa.String(50), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(
        "ix_chat_messages_owner_session", "chat_messages", ["owner_id", "session_id", "created_at"]
    )


def downgrade() -> None:
    op.drop_index("ix_chat_messages_owner_session", table_name="chat_messages")
    op.drop_table("chat_messages")
