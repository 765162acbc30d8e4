"""Single-table key scheme.

Every record lives in the partition ``TENANT#<tenantId>``. The sort key
encodes the entity type:

    CONFIG               tenant configuration record (exact match)
    CONTEXT#<entryId>    context entry (prefix match)

Entity types are told apart by exact match or ``startswith`` on these
markers, never by substring containment. The markers are checked at import
so that no marker can be mistaken for another.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from sites.domain.value_objects import KEY_DELIMITER, TenantId
from sites.ports.exceptions import InvalidKeySchemeError
from sites.ports.repositories import CONTEXT_PREFIX

PARTITION_KEY = "PK"
SORT_KEY = "SK"
TENANT_PARTITION_PREFIX = f"TENANT{KEY_DELIMITER}"
CONFIG_SORT_KEY = "CONFIG"


class RecordKind(StrEnum):
    """Entity types stored in the tenant partition."""

    CONFIG = "config"
    CONTEXT = "context"


# kind -> (marker, exact)
_SORT_KEY_MARKERS: dict[RecordKind, tuple[str, bool]] = {
    RecordKind.CONFIG: (CONFIG_SORT_KEY, True),
    RecordKind.CONTEXT: (CONTEXT_PREFIX, False),
}


def check_markers_disjoint(markers: Mapping[RecordKind, tuple[str, bool]]) -> None:
    """Verify that no sort-key marker can match another entity type's keys.

    Raises:
        InvalidKeySchemeError: If two markers overlap
    """
    items = list(markers.items())
    for index, (kind, (marker, exact)) in enumerate(items):
        for other_kind, (other_marker, other_exact) in items[index + 1 :]:
            if exact and other_exact:
                overlaps = marker == other_marker
            else:
                overlaps = marker.startswith(other_marker) or other_marker.startswith(
                    marker
                )
            if overlaps:
                raise InvalidKeySchemeError(
                    f"Sort-key markers for {kind} ({marker!r}) and "
                    f"{other_kind} ({other_marker!r}) overlap"
                )


check_markers_disjoint(_SORT_KEY_MARKERS)


def tenant_partition_key(tenant_id: TenantId) -> str:
    """Partition key shared by all of a tenant's records."""
    return f"{TENANT_PARTITION_PREFIX}{tenant_id.value}"


def context_sort_key(entry_id: str) -> str:
    """Sort key of a context entry.

    Raises:
        InvalidKeySchemeError: If the entry id is empty or contains the delimiter
    """
    if not entry_id or KEY_DELIMITER in entry_id:
        raise InvalidKeySchemeError(f"Invalid context entry id: {entry_id!r}")
    return f"{CONTEXT_PREFIX}{entry_id}"


def record_kind(sort_key: str) -> RecordKind | None:
    """Classify a sort key, or None if it matches no entity type."""
    for kind, (marker, exact) in _SORT_KEY_MARKERS.items():
        if exact and sort_key == marker:
            return kind
        if not exact and sort_key.startswith(marker) and len(sort_key) > len(marker):
            return kind
    return None


def entry_id_from_sort_key(sort_key: str) -> str:
    """Extract the entry id from a context sort key."""
    if record_kind(sort_key) is not RecordKind.CONTEXT:
        raise InvalidKeySchemeError(f"Not a context sort key: {sort_key!r}")
    return sort_key[len(CONTEXT_PREFIX) :]


def tenant_id_from_partition_key(partition_key: str) -> TenantId:
    """Extract the tenant id from a partition key."""
    if not partition_key.startswith(TENANT_PARTITION_PREFIX):
        raise InvalidKeySchemeError(f"Not a tenant partition key: {partition_key!r}")
    try:
        return TenantId.from_string(partition_key[len(TENANT_PARTITION_PREFIX) :])
    except ValueError as e:
        raise InvalidKeySchemeError(str(e)) from e


def validate_item_keys(
    item: Mapping[str, Any], tenant_id: TenantId, expected: RecordKind
) -> None:
    """Check that an item belongs to the tenant and is of the expected kind.

    Raises:
        InvalidKeySchemeError: If either key is missing or does not match
    """
    partition_key = item.get(PARTITION_KEY)
    sort_key = item.get(SORT_KEY)
    if partition_key != tenant_partition_key(tenant_id):
        raise InvalidKeySchemeError(
            f"Record partition key {partition_key!r} does not belong to tenant "
            f"{tenant_id.value!r}"
        )
    if not isinstance(sort_key, str) or record_kind(sort_key) is not expected:
        raise InvalidKeySchemeError(
            f"Record sort key {sort_key!r} is not a {expected} key"
        )
