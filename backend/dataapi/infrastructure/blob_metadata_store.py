"""SQL Blob Metadata Store — blob and signed-batch lookups over the metadata tables.

Invariants:
    - Lookups are keyed by binary identifiers; rows are keyed by their lowercase hex
    - get_signed_batch returns only when both header and attestation rows exist
    - Missing rows raise MetadataNotFoundError; SQL failures raise MetadataStoreError

Design Decisions:
    - Records converted to frozen schema models before the session closes, so
      nothing lazy-loads after the request has moved on
"""

from sqlalchemy import select

from dataapi.core.domain_types import BatchHeaderHash, BlobKey, BlobStatus
from dataapi.core.errors import MetadataNotFoundError
from dataapi.infrastructure.database import DatabaseSessionManager
from dataapi.models.batch import AttestationRecord, BatchHeaderRecord
from dataapi.models.blob_metadata import BlobMetadataRecord
from dataapi.schemas.batch import Attestation, BatchHeader
from dataapi.schemas.blob import BlobHeader, BlobMetadata


class SQLBlobMetadataStore:
    """BlobMetadataStore backed by SQLAlchemy async sessions."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def get_blob_metadata(self, blob_key: BlobKey) -> BlobMetadata:
        key_hex = blob_key.hex()
        async with self._db.session() as session:
            record = await session.get(BlobMetadataRecord, key_hex)
            if record is None:
                raise MetadataNotFoundError(f"blob {key_hex} not found")
            return _to_blob_metadata(record)

    async def get_signed_batch(
        self, batch_header_hash: BatchHeaderHash,
    ) -> tuple[BatchHeader, Attestation]:
        hash_hex = batch_header_hash.hex()
        async with self._db.session() as session:
            result = await session.execute(
                select(BatchHeaderRecord, AttestationRecord)
                .join(
                    AttestationRecord,
                    AttestationRecord.batch_header_hash
                    == BatchHeaderRecord.batch_header_hash,
                )
                .where(BatchHeaderRecord.batch_header_hash == hash_hex),
            )
            row = result.one_or_none()
            if row is None:
                raise MetadataNotFoundError(f"signed batch {hash_hex} not found")
            header, attestation = row
            return _to_batch_header(header), _to_attestation(attestation)


def _to_blob_metadata(record: BlobMetadataRecord) -> BlobMetadata:
    return BlobMetadata(
        blob_header=BlobHeader.model_validate(record.blob_header),
        blob_status=BlobStatus(record.blob_status),
        requested_at=record.requested_at,
        blob_size=record.blob_size,
    )


def _to_batch_header(record: BatchHeaderRecord) -> BatchHeader:
    return BatchHeader(
        batch_root=record.batch_root,
        reference_block_number=record.reference_block_number,
    )


def _to_attestation(record: AttestationRecord) -> Attestation:
    return Attestation(
        attested_at=record.attested_at,
        non_signer_pubkeys=list(record.non_signer_pubkeys),
        apk_g2=record.apk_g2,
        quorum_apks={int(q): apk for q, apk in record.quorum_apks.items()},
        sigma=record.sigma,
        quorum_numbers=list(record.quorum_numbers),
        quorum_results={int(q): pct for q, pct in record.quorum_results.items()},
    )
