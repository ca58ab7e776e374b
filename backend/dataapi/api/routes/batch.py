"""Batch Routes — signed batch lookup by header hash, and the not-yet-built batch feed.

Invariants:
    - batch_header_hash is hex-decoded before the store is touched
    - batch_header_hash is echoed back as lowercase hex without 0x
    - blob_verification_infos is omitted from the body until populated
"""

from fastapi import APIRouter, Depends, Response

from dataapi.api.dependencies import get_app_settings, get_metadata_store, get_metrics
from dataapi.api.routes.handler_helpers import (
    instrument_request, raise_unimplemented, set_max_age,
    translate_collaborator_error,
)
from dataapi.config import Settings
from dataapi.core.domain_types import parse_batch_header_hash
from dataapi.core.ports import BlobMetadataStore, RequestMetrics
from dataapi.schemas.batch import BatchResponse, SignedBatch

router = APIRouter(prefix="/api/v2/batch", tags=["batch"])


@router.get("/batch/feed")
async def fetch_batch_feed(metrics: RequestMetrics = Depends(get_metrics)):
    raise_unimplemented(metrics, "FetchBatchFeedHandler", "FetchBatchFeed")


@router.get(
    "/batch/{batch_header_hash}",
    response_model=BatchResponse,
    response_model_exclude_none=True,
)
async def fetch_batch(
    batch_header_hash: str,
    response: Response,
    store: BlobMetadataStore = Depends(get_metadata_store),
    metrics: RequestMetrics = Depends(get_metrics),
    settings: Settings = Depends(get_app_settings),
):
    """Fetch a batch header and its attestation by hex batch header hash."""
    with instrument_request(metrics, "FetchBatch"):
        header_hash = parse_batch_header_hash(batch_header_hash)
        try:
            batch_header, attestation = await store.get_signed_batch(header_hash)
        except Exception as e:
            raise translate_collaborator_error(e, "failed to fetch signed batch")

    set_max_age(response, settings.max_feed_blob_age)
    # TODO: populate blob_verification_infos once the store indexes inclusion proofs
    return BatchResponse(
        batch_header_hash=header_hash.hex(),
        signed_batch=SignedBatch(
            batch_header=batch_header, attestation=attestation,
        ),
    )
