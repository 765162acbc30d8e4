"""Opaque pagination tokens for context listings.

A token is the URL-safe base64 encoding of DynamoDB's ``LastEvaluatedKey``.
Decoding checks that the key belongs to the requesting tenant's partition
so that a token can never move a query into another tenant's records.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from sites.infrastructure.key_scheme import PARTITION_KEY, SORT_KEY
from sites.ports.exceptions import InvalidPageTokenError


def encode_page_token(last_evaluated_key: dict[str, Any]) -> str:
    """Encode a LastEvaluatedKey as an opaque token."""
    raw = json.dumps(last_evaluated_key, sort_keys=True, separators=(",", ":"))
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


def decode_page_token(token: str, partition_key: str, prefix: str) -> dict[str, str]:
    """Decode a token into an ExclusiveStartKey for the given partition.

    Args:
        token: Token previously returned by ``encode_page_token``
        partition_key: Partition key of the requesting tenant
        prefix: Sort-key prefix of the listing

    Returns:
        ExclusiveStartKey dictionary

    Raises:
        InvalidPageTokenError: If the token is malformed or does not belong
            to this partition and prefix
    """
    try:
        decoded = json.loads(base64.urlsafe_b64decode(token.encode("ascii")))
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise InvalidPageTokenError("Malformed page token") from e

    if (
        not isinstance(decoded, dict)
        or set(decoded) != {PARTITION_KEY, SORT_KEY}
        or not all(isinstance(value, str) for value in decoded.values())
    ):
        raise InvalidPageTokenError("Malformed page token")

    if decoded[PARTITION_KEY] != partition_key or not decoded[SORT_KEY].startswith(
        prefix
    ):
        raise InvalidPageTokenError("Page token does not belong to this listing")

    return decoded
