"""Initial schema: customer_forms.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "customer_forms",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("basic_information", sa.JSON, nullable=False),
        sa.Column("business_details", sa.JSON, nullable=False),
        sa.Column("services_needed", sa.JSON, nullable=False),
        sa.Column("client_screening", sa.JSON, nullable=False),
        sa.Column("additional_details", sa.JSON, nullable=False),
        sa.Column("is_eligible", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_customer_forms_status", "customer_forms", ["status"])
    op.create_index("ix_customer_forms_created_at", "customer_forms", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_customer_forms_created_at", table_name="customer_forms")
    op.drop_index("ix_customer_forms_status", table_name="customer_forms")
    op.drop_table("customer_forms")
