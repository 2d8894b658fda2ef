"""create users, authorities, email verifiers and items tables"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f9c1a7d2b10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create the account and inventory schema."""

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column(
            "status",
            sa.String(length=16),
            nullable=False,
            server_default=sa.text("'unverified'"),
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.CheckConstraint(
            "status IN ('unverified', 'verified')", name="ck_users_status"
        ),
    )

    op.create_table(
        "authorities",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("permission", sa.String(length=64), nullable=False),
        sa.UniqueConstraint("permission", name="uq_authorities_permission"),
    )

    op.create_table(
        "user_authorities",
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "authority_id",
            sa.Integer(),
            sa.ForeignKey("authorities.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "email_verifiers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("token", sa.String(length=512), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", name="uq_email_verifiers_user_id"),
        sa.UniqueConstraint("token", name="uq_email_verifiers_token"),
    )

    op.create_table(
        "items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("code", sa.String(length=64), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("code", name="uq_items_code"),
    )
    op.create_index("ix_items_name", "items", ["name"])


def downgrade() -> None:
    """Drop the account and inventory schema."""

    op.drop_index("ix_items_name", table_name="items")
    op.drop_table("items")
    op.drop_table("email_verifiers")
    op.drop_table("user_authorities")
    op.drop_table("authorities")
    op.drop_table("users")
