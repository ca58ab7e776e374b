"""Initial schema — blob metadata, batch headers, attestations, operators, operator stakes.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "blob_metadata",
        sa.Column("blob_key", sa.String(64), primary_key=True),
        sa.Column("blob_header", sa.JSON, nullable=False),
        sa.Column("blob_status", sa.String(32), nullable=False),
        sa.Column("requested_at", sa.BigInteger, nullable=False),
        sa.Column("blob_size", sa.BigInteger, nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "batch_headers",
        sa.Column("batch_header_hash", sa.String(64), primary_key=True),
        sa.Column("batch_root", sa.String(64), nullable=False),
        sa.Column("reference_block_number", sa.BigInteger, nullable=False),
    )

    op.create_table(
        "attestations",
        sa.Column(
            "batch_header_hash", sa.String(64),
            sa.ForeignKey("batch_headers.batch_header_hash", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("attested_at", sa.BigInteger, nullable=False),
        sa.Column("non_signer_pubkeys", sa.JSON, nullable=False),
        sa.Column("apk_g2", sa.String(256), nullable=False),
        sa.Column("quorum_apks", sa.JSON, nullable=False),
        sa.Column("sigma", sa.String(128), nullable=False),
        sa.Column("quorum_numbers", sa.JSON, nullable=False),
        sa.Column("quorum_results", sa.JSON, nullable=False),
    )

    op.create_table(
        "operators",
        sa.Column("operator_id", sa.String(64), primary_key=True),
        sa.Column("dispersal_socket", sa.String(255), nullable=False),
        sa.Column("retrieval_socket", sa.String(255), nullable=False),
        sa.Column("v2_dispersal_socket", sa.String(255), nullable=True),
        sa.Column("v2_retrieval_socket", sa.String(255), nullable=True),
        sa.Column("node_version", sa.String(64), nullable=True),
    )

    op.create_table(
        "operator_stakes",
        sa.Column(
            "operator_id", sa.String(64),
            sa.ForeignKey("operators.operator_id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("quorum_id", sa.Integer, primary_key=True),
        sa.Column("stake", sa.String(80), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("operator_stakes")
    op.drop_table("operators")
    op.drop_table("attestations")
    op.drop_table("batch_headers")
    op.drop_table("blob_metadata")
