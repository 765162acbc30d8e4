"""Unit tests for the single-table key scheme."""

import pytest

from sites.domain.value_objects import TenantId
from sites.infrastructure.key_scheme import (
    RecordKind,
    check_markers_disjoint,
    context_sort_key,
    entry_id_from_sort_key,
    record_kind,
    tenant_id_from_partition_key,
    tenant_partition_key,
    validate_item_keys,
)
from sites.ports.exceptions import InvalidKeySchemeError


class TestKeyConstruction:
    """Tests for building keys."""

    def test_partition_key(self):
        """Partition keys should be TENANT#<id>."""
        assert tenant_partition_key(TenantId(value="client-bob")) == "TENANT#client-bob"

    def test_context_sort_key(self):
        """Context sort keys should be CONTEXT#<id>."""
        assert context_sort_key("01J0") == "CONTEXT#01J0"

    @pytest.mark.parametrize("entry_id", ["", "a#b"])
    def test_context_sort_key_rejects_bad_ids(self, entry_id: str):
        """Empty ids and ids containing the delimiter should be rejected."""
        with pytest.raises(InvalidKeySchemeError):
            context_sort_key(entry_id)


class TestRecordKind:
    """Tests for classifying sort keys."""

    def test_config_is_exact_match(self):
        """Only the exact CONFIG key should be a config record."""
        assert record_kind("CONFIG") is RecordKind.CONFIG
        assert record_kind("CONFIGURATION") is None
        assert record_kind("XCONFIG") is None

    def test_context_is_prefix_match(self):
        """CONTEXT#<id> should be a context record."""
        assert record_kind("CONTEXT#01J0") is RecordKind.CONTEXT

    def test_bare_context_prefix_is_not_a_record(self):
        """The prefix alone names no entry."""
        assert record_kind("CONTEXT#") is None

    def test_containment_is_not_a_match(self):
        """A marker appearing mid-key should not classify the key."""
        assert record_kind("PAGE#CONTEXT#1") is None
        assert record_kind("CONTENT#1") is None

    def test_entry_id_from_sort_key(self):
        """The entry id should be the remainder after the prefix."""
        assert entry_id_from_sort_key("CONTEXT#01J0") == "01J0"

    def test_entry_id_from_non_context_key_fails(self):
        """Extracting an entry id from a config key should fail."""
        with pytest.raises(InvalidKeySchemeError):
            entry_id_from_sort_key("CONFIG")


class TestMarkersDisjoint:
    """Tests for the import-time marker check."""

    def test_overlapping_prefixes_are_rejected(self):
        """A prefix marker that prefixes another should be rejected."""
        with pytest.raises(InvalidKeySchemeError, match="overlap"):
            check_markers_disjoint(
                {
                    RecordKind.CONFIG: ("CONTEXT", False),
                    RecordKind.CONTEXT: ("CONTEXT#", False),
                }
            )

    def test_exact_marker_matching_prefix_is_rejected(self):
        """An exact key that a prefix marker would match should be rejected."""
        with pytest.raises(InvalidKeySchemeError):
            check_markers_disjoint(
                {
                    RecordKind.CONFIG: ("CONTEXT#CONFIG", True),
                    RecordKind.CONTEXT: ("CONTEXT#", False),
                }
            )

    def test_distinct_markers_pass(self):
        """The built-in markers should be accepted."""
        check_markers_disjoint(
            {
                RecordKind.CONFIG: ("CONFIG", True),
                RecordKind.CONTEXT: ("CONTEXT#", False),
            }
        )


class TestPartitionKeyParsing:
    """Tests for tenant_id_from_partition_key."""

    def test_round_trip(self):
        """Parsing a built partition key should return the tenant."""
        assert tenant_id_from_partition_key("TENANT#client-bob") == TenantId(
            value="client-bob"
        )

    @pytest.mark.parametrize("key", ["client-bob", "TENANT#", "TENANT#a#b"])
    def test_rejects_foreign_keys(self, key: str):
        """Keys that do not name exactly one tenant should be rejected."""
        with pytest.raises(InvalidKeySchemeError):
            tenant_id_from_partition_key(key)


class TestValidateItemKeys:
    """Tests for validate_item_keys."""

    def test_accepts_matching_item(self, tenant_id: TenantId):
        """An item in the tenant's partition with the right kind should pass."""
        validate_item_keys(
            {"PK": "TENANT#client-bob", "SK": "CONTEXT#1"},
            tenant_id,
            RecordKind.CONTEXT,
        )

    def test_rejects_other_tenant(self, tenant_id: TenantId):
        """An item from another partition should be rejected."""
        with pytest.raises(InvalidKeySchemeError, match="does not belong"):
            validate_item_keys(
                {"PK": "TENANT#client-alice", "SK": "CONTEXT#1"},
                tenant_id,
                RecordKind.CONTEXT,
            )

    def test_rejects_partition_prefix_match(self, tenant_id: TenantId):
        """A partition key that merely starts with the tenant's should be rejected."""
        with pytest.raises(InvalidKeySchemeError):
            validate_item_keys(
                {"PK": "TENANT#client-bobby", "SK": "CONTEXT#1"},
                tenant_id,
                RecordKind.CONTEXT,
            )

    def test_rejects_wrong_kind(self, tenant_id: TenantId):
        """A config item where a context item is expected should be rejected."""
        with pytest.raises(InvalidKeySchemeError):
            validate_item_keys(
                {"PK": "TENANT#client-bob", "SK": "CONFIG"},
                tenant_id,
                RecordKind.CONTEXT,
            )

    def test_rejects_missing_keys(self, tenant_id: TenantId):
        """Items without key attributes should be rejected."""
        with pytest.raises(InvalidKeySchemeError):
            validate_item_keys({}, tenant_id, RecordKind.CONFIG)
