"""Blob Metadata ORM — one row per dispersed blob, keyed by blob key.

Invariants:
    - blob_status holds a BlobStatus value ("Queued" ... "Failed")
    - blob_header is the JSON form of schemas.blob.BlobHeader
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, BigInteger, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from dataapi.db.base import Base


class BlobMetadataRecord(Base):
    __tablename__ = "blob_metadata"

    blob_key: Mapped[str] = mapped_column(String(64), primary_key=True)
    blob_header: Mapped[dict] = mapped_column(JSON, nullable=False)
    blob_status: Mapped[str] = mapped_column(String(32), nullable=False)
    requested_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    blob_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
