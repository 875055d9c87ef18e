"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

ACCOUNT_TYPES = ("CASH", "CARD", "FOREIGN_CURRENCY", "OTHER")
CURRENCIES = ("LOCAL", "FOREIGN")
MOVEMENT_TYPES = ("INCOME", "EXPENSE")


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column(
            "account_type",
            sa.Enum(*ACCOUNT_TYPES, name="account_type_enum", create_constraint=True),
            nullable=False,
        ),
        sa.Column(
            "currency",
            sa.Enum(*CURRENCIES, name="currency_enum", create_constraint=True),
            nullable=False,
        ),
        sa.Column("balance", sa.Numeric(19, 4), nullable=False),
        sa.Column("opening_balance", sa.Numeric(19, 4), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "categories",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "subcategories",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column(
            "category_id", sa.String(36),
            sa.ForeignKey("categories.id"), nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_subcategories_category_id", "subcategories", ["category_id"])
    op.create_table(
        "installment_plans",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("installment_amount", sa.Numeric(19, 4), nullable=False),
        sa.Column("number_of_installments", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(255), nullable=False),
        sa.Column(
            "account_id", sa.String(36),
            sa.ForeignKey("accounts.id"), nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_installment_plans_account_id", "installment_plans", ["account_id"])
    op.create_table(
        "movements",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "movement_type",
            sa.Enum(*MOVEMENT_TYPES, name="movement_type_enum", create_constraint=True),
            nullable=False,
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("amount", sa.Numeric(19, 4), nullable=False),
        sa.Column("description", sa.String(255), nullable=False),
        sa.Column(
            "account_id", sa.String(36),
            sa.ForeignKey("accounts.id"), nullable=False,
        ),
        sa.Column("subcategory_id", sa.String(36), nullable=True),
        sa.Column(
            "installment_plan_id", sa.String(36),
            sa.ForeignKey("installment_plans.id"), nullable=True,
        ),
        sa.Column("installment_number", sa.Integer(), nullable=True),
        sa.Column("related_transfer_id", sa.String(36), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    for column in ("date", "account_id", "subcategory_id",
                   "installment_plan_id", "related_transfer_id"):
        op.create_index(f"ix_movements_{column}", "movements", [column])


def downgrade() -> None:
    op.drop_table("movements")
    op.drop_table("installment_plans")
    op.drop_table("subcategories")
    op.drop_table("categories")
    op.drop_table("accounts")
