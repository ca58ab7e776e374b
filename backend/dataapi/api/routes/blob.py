"""Blob Routes — blob metadata lookup by key, and the not-yet-built blob feed.

Invariants:
    - blob_key is hex-decoded before the store is touched; bad hex → 400, zero store calls
    - Success carries Cache-Control max-age=max_feed_blob_age
    - The feed endpoint always fails with 500 "FetchBlobFeedHandler unimplemented"
"""

from fastapi import APIRouter, Depends, Response

from dataapi.api.dependencies import get_app_settings, get_metadata_store, get_metrics
from dataapi.api.routes.handler_helpers import (
    instrument_request, raise_unimplemented, set_max_age,
    translate_collaborator_error,
)
from dataapi.config import Settings
from dataapi.core.domain_types import parse_blob_key
from dataapi.core.ports import BlobMetadataStore, RequestMetrics
from dataapi.schemas.blob import BlobResponse

router = APIRouter(prefix="/api/v2/blob", tags=["blob"])


# Registered before /blob/{blob_key} so "feed" is not read as a key
@router.get("/blob/feed")
async def fetch_blob_feed(metrics: RequestMetrics = Depends(get_metrics)):
    raise_unimplemented(metrics, "FetchBlobFeedHandler", "FetchBlobFeed")


@router.get("/blob/{blob_key}", response_model=BlobResponse)
async def fetch_blob(
    blob_key: str,
    response: Response,
    store: BlobMetadataStore = Depends(get_metadata_store),
    metrics: RequestMetrics = Depends(get_metrics),
    settings: Settings = Depends(get_app_settings),
):
    """Fetch blob metadata by hex blob key."""
    with instrument_request(metrics, "FetchBlob"):
        key = parse_blob_key(blob_key)
        try:
            metadata = await store.get_blob_metadata(key)
        except Exception as e:
            raise translate_collaborator_error(e, "failed to fetch blob metadata")

    set_max_age(response, settings.max_feed_blob_age)
    return BlobResponse.from_metadata(metadata)
