"""Blob Schemas — blob header, store metadata record and the BlobResponse projection.

Invariants:
    - BlobResponse has no optional fields: a success body is always complete
    - status is the display string of a BlobStatus member
    - Byte fields (commitments, account id) are lowercase hex without 0x
"""

from pydantic import BaseModel, ConfigDict, Field

from dataapi.core.domain_types import BlobStatus


class BlobCommitments(BaseModel):
    """KZG commitments attached to a blob header."""
    model_config = ConfigDict(frozen=True)

    commitment: str
    length_commitment: str
    length_proof: str
    length: int = Field(ge=0)


class PaymentMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    account_id: str
    timestamp: int
    cumulative_payment: int = Field(ge=0)


class BlobHeader(BaseModel):
    """Header submitted with a blob; the blob key is derived from it."""
    model_config = ConfigDict(frozen=True)

    blob_version: int
    blob_commitments: BlobCommitments
    quorum_numbers: list[int]
    payment_metadata: PaymentMetadata


class BlobMetadata(BaseModel):
    """Store-owned metadata record, read-only at this layer."""
    model_config = ConfigDict(frozen=True)

    blob_header: BlobHeader
    blob_status: BlobStatus
    requested_at: int
    blob_size: int = Field(ge=0)


class BlobResponse(BaseModel):
    """GET /blob/blob/{blob_key} success body."""
    model_config = ConfigDict(frozen=True)

    blob_header: BlobHeader
    status: str
    dispersed_at: int
    blob_size_bytes: int

    @classmethod
    def from_metadata(cls, metadata: BlobMetadata) -> "BlobResponse":
        return cls(
            blob_header=metadata.blob_header,
            status=metadata.blob_status.value,
            dispersed_at=metadata.requested_at,
            blob_size_bytes=metadata.blob_size,
        )
