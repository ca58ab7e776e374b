"""Batch Schemas — batch header, attestation and the BatchResponse envelope.

Invariants:
    - SignedBatch requires both batch_header and attestation (never half-signed)
    - blob_verification_infos stays None until the store can supply it; routes
      serialize with exclude_none so the field is absent on the wire

Design Decisions:
    - Quorum-keyed maps use int keys; JSON renders them as strings
"""

from pydantic import BaseModel, ConfigDict


class BatchHeader(BaseModel):
    model_config = ConfigDict(frozen=True)

    batch_root: str
    reference_block_number: int


class Attestation(BaseModel):
    """Aggregated validator-set signature data over a batch header."""
    model_config = ConfigDict(frozen=True)

    attested_at: int
    non_signer_pubkeys: list[str] = []
    apk_g2: str
    quorum_apks: dict[int, str] = {}
    sigma: str
    quorum_numbers: list[int] = []
    quorum_results: dict[int, int] = {}


class SignedBatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    batch_header: BatchHeader
    attestation: Attestation


class BlobVerificationInfo(BaseModel):
    """Inclusion proof of one blob in a batch. Not yet served."""
    model_config = ConfigDict(frozen=True)

    blob_key: str
    blob_index: int
    inclusion_proof: str


class BatchResponse(BaseModel):
    """GET /batch/batch/{batch_header_hash} success body."""
    model_config = ConfigDict(frozen=True)

    batch_header_hash: str
    signed_batch: SignedBatch
    # None means "not populated yet", not "batch has no blobs"
    blob_verification_infos: list[BlobVerificationInfo] | None = None
