"""Domain Types — identifiers and lifecycle states shared by the store and the routes.

Invariants:
    - BlobKey, BatchHeaderHash and OperatorId are exactly 32 bytes
    - Hex input may carry a 0x/0X prefix; hex output never does and is lowercase
    - BlobStatus values are the display strings returned on the wire

Design Decisions:
    - NewType over wrapper classes: identifiers are plain bytes at the store boundary
    - str Enum: BlobStatus serializes to JSON without custom encoders
"""

from enum import Enum
from typing import NewType

from dataapi.core.errors import InvalidArgumentError

IDENTIFIER_LENGTH = 32

BlobKey = NewType("BlobKey", bytes)
BatchHeaderHash = NewType("BatchHeaderHash", bytes)
OperatorId = NewType("OperatorId", bytes)


class BlobStatus(str, Enum):
    """Blob lifecycle states, in dispersal order."""
    QUEUED = "Queued"
    ENCODED = "Encoded"
    GATHERING_SIGNATURES = "Gathering Signatures"
    COMPLETE = "Complete"
    FAILED = "Failed"


def decode_identifier(value: str, param: str) -> bytes:
    """Decode a hex identifier into 32 bytes, or raise InvalidArgumentError."""
    hex_str = value
    if hex_str.startswith(("0x", "0X")):
        hex_str = hex_str[2:]
    try:
        data = bytes.fromhex(hex_str)
    except ValueError:
        raise InvalidArgumentError(f"invalid {param}: not a hex string", param)
    # bytes.fromhex skips whitespace between byte pairs
    if len(data) != IDENTIFIER_LENGTH or len(hex_str) != IDENTIFIER_LENGTH * 2:
        raise InvalidArgumentError(
            f"invalid {param}: expected {IDENTIFIER_LENGTH} bytes", param,
        )
    return data


def parse_blob_key(value: str) -> BlobKey:
    return BlobKey(decode_identifier(value, "blob key"))


def parse_batch_header_hash(value: str) -> BatchHeaderHash:
    return BatchHeaderHash(decode_identifier(value, "batch header hash"))


def parse_operator_id(value: str | None) -> OperatorId | None:
    """Empty or missing operator_id means "all operators"."""
    if not value:
        return None
    return OperatorId(decode_identifier(value, "operator id"))
