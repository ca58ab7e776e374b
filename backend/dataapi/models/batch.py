"""Batch ORM — batch headers and the attestation signed over each of them.

Invariants:
    - AttestationRecord shares its primary key with the BatchHeaderRecord it signs
    - A header without an attestation row is not yet signed and is not served
"""

from sqlalchemy import JSON, BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dataapi.db.base import Base


class BatchHeaderRecord(Base):
    __tablename__ = "batch_headers"

    batch_header_hash: Mapped[str] = mapped_column(String(64), primary_key=True)
    batch_root: Mapped[str] = mapped_column(String(64), nullable=False)
    reference_block_number: Mapped[int] = mapped_column(BigInteger, nullable=False)

    attestation: Mapped["AttestationRecord | None"] = relationship(
        "AttestationRecord", back_populates="batch_header", uselist=False,
        cascade="all, delete-orphan", lazy="selectin",
    )


class AttestationRecord(Base):
    __tablename__ = "attestations"

    batch_header_hash: Mapped[str] = mapped_column(
        String(64), ForeignKey("batch_headers.batch_header_hash"), primary_key=True,
    )
    attested_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    non_signer_pubkeys: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    apk_g2: Mapped[str] = mapped_column(String(256), nullable=False)
    # quorum id (as str) → G1 point hex; JSON object keys are strings
    quorum_apks: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    sigma: Mapped[str] = mapped_column(String(128), nullable=False)
    quorum_numbers: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    quorum_results: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    batch_header: Mapped["BatchHeaderRecord"] = relationship(
        "BatchHeaderRecord", back_populates="attestation",
    )
