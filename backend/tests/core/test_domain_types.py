"""Domain Types — hex identifier parsing and blob lifecycle states.

Tests:
    - 32-byte hex decodes with or without 0x/0X prefix
    - Non-hex, odd length, wrong length and embedded whitespace are rejected
    - Empty operator_id means "all operators"
    - BlobStatus display strings
"""

import pytest

from dataapi.core.domain_types import (
    BlobStatus, decode_identifier, parse_batch_header_hash, parse_blob_key,
    parse_operator_id,
)
from dataapi.core.errors import InvalidArgumentError

KEY_HEX = "0123456789abcdef" * 4


@pytest.mark.parametrize("value", [KEY_HEX, f"0x{KEY_HEX}", f"0X{KEY_HEX.upper()}"])
def test_decode_identifier_accepts_prefixed_and_uppercase(value):
    assert decode_identifier(value, "blob key") == bytes.fromhex(KEY_HEX)


@pytest.mark.parametrize("value", [
    "",
    "g" * 64,
    KEY_HEX[:-1],
    KEY_HEX[:-2],
    KEY_HEX + "00",
    " ".join(KEY_HEX[i:i + 2] for i in range(0, 64, 2)),
])
def test_decode_identifier_rejects_malformed_input(value):
    with pytest.raises(InvalidArgumentError) as exc_info:
        decode_identifier(value, "blob key")
    assert exc_info.value.http_status == 400
    assert exc_info.value.param == "blob key"


def test_parsers_name_their_parameter():
    with pytest.raises(InvalidArgumentError, match="invalid blob key"):
        parse_blob_key("xyz")
    with pytest.raises(InvalidArgumentError, match="invalid batch header hash"):
        parse_batch_header_hash("xyz")
    with pytest.raises(InvalidArgumentError, match="invalid operator id"):
        parse_operator_id("xyz")


@pytest.mark.parametrize("value", [None, ""])
def test_missing_operator_id_means_all(value):
    assert parse_operator_id(value) is None


def test_blob_status_display_strings():
    assert [s.value for s in BlobStatus] == [
        "Queued", "Encoded", "Gathering Signatures", "Complete", "Failed",
    ]
