"""DynamoDB implementation of ITenantRecordStore.

All tenant data lives in one table keyed by (PK, SK); see ``key_scheme``
for the layout. Reads never scan: point lookups use GetItem and listings
use a Query on the tenant's exact partition key.

Transient failures (throttling, timeouts, unreachable endpoint) are
translated to StoreUnavailableError so callers can tell them apart from
"not found". Any other ClientError propagates unchanged.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import (
    ClientError,
    ConnectionClosedError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)
from pydantic import ValidationError
from ulid import ULID

from sites.domain.value_objects import ContextEntry, ContextPage, TenantConfig, TenantId
from sites.infrastructure.attribute_values import (
    from_attribute_value,
    to_attribute_value,
)
from sites.infrastructure.key_scheme import (
    CONFIG_SORT_KEY,
    PARTITION_KEY,
    SORT_KEY,
    RecordKind,
    context_sort_key,
    entry_id_from_sort_key,
    record_kind,
    tenant_id_from_partition_key,
    tenant_partition_key,
    validate_item_keys,
)
from sites.infrastructure.observability import (
    DefaultTenantRecordStoreProbe,
    TenantRecordStoreProbe,
)
from sites.infrastructure.pagination import decode_page_token, encode_page_token
from sites.ports.exceptions import (
    InvalidKeySchemeError,
    MalformedTenantRecordError,
    StoreUnavailableError,
)
from sites.ports.repositories import (
    CONTEXT_PREFIX,
    RESERVED_ATTRIBUTES,
    ITenantRecordStore,
)

TRANSIENT_ERROR_CODES = frozenset(
    {
        "ProvisionedThroughputExceededException",
        "ThrottlingException",
        "RequestLimitExceeded",
        "InternalServerError",
        "ServiceUnavailable",
    }
)

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"

_TRANSIENT_EXCEPTIONS = (
    EndpointConnectionError,
    ConnectTimeoutError,
    ReadTimeoutError,
    ConnectionClosedError,
)


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()


class DynamoDBTenantRecordStore(ITenantRecordStore):
    """Tenant record store backed by a single DynamoDB table."""

    def __init__(
        self,
        table: Any,
        probe: TenantRecordStoreProbe | None = None,
        consistent_reads: bool = False,
        domain_index_name: str = "GSI_Domain",
        domain_attribute: str = "Domain",
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            table: boto3 DynamoDB Table resource
            probe: Optional domain probe for observability
            consistent_reads: Use strongly consistent point lookups
            domain_index_name: GSI mapping hostnames to config records
            domain_attribute: Partition key attribute of that GSI
            id_factory: Generator for new context entry ids (ULID by default)
        """
        self._table = table
        self._probe = probe or DefaultTenantRecordStoreProbe()
        self._consistent_reads = consistent_reads
        self._domain_index_name = domain_index_name
        self._domain_attribute = domain_attribute
        self._id_factory = id_factory or (lambda: str(ULID()))

    @contextmanager
    def _translate_errors(
        self, operation: str, tenant_id: TenantId | None = None
    ) -> Iterator[None]:
        """Map transient botocore failures to StoreUnavailableError."""
        tenant = tenant_id.value if tenant_id is not None else None
        try:
            yield
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code not in TRANSIENT_ERROR_CODES:
                raise
            self._probe.store_unavailable(operation, e, tenant_id=tenant)
            raise StoreUnavailableError(
                f"Tenant store unavailable during {operation}: {code}",
                operation=operation,
            ) from e
        except _TRANSIENT_EXCEPTIONS as e:
            self._probe.store_unavailable(operation, e, tenant_id=tenant)
            raise StoreUnavailableError(
                f"Tenant store unavailable during {operation}",
                operation=operation,
            ) from e

    # -- tenant config -----------------------------------------------------

    def get_tenant_config(self, tenant_id: TenantId) -> TenantConfig | None:
        """Read the CONFIG record of the tenant's partition.

        Args:
            tenant_id: The tenant to look up

        Returns:
            The TenantConfig, or None if the tenant has no record
        """
        key = {PARTITION_KEY: tenant_partition_key(tenant_id), SORT_KEY: CONFIG_SORT_KEY}
        with self._translate_errors("get_tenant_config", tenant_id):
            response = self._table.get_item(
                Key=key, ConsistentRead=self._consistent_reads
            )

        item = response.get("Item")
        if item is None:
            self._probe.tenant_config_not_found(tenant_id.value)
            return None

        validate_item_keys(item, tenant_id, RecordKind.CONFIG)
        config = self._config_from_item(item, tenant_id)
        self._probe.tenant_config_retrieved(tenant_id.value)
        return config

    def _config_from_item(self, item: dict[str, Any], tenant_id: TenantId) -> TenantConfig:
        attributes = {
            name: from_attribute_value(value)
            for name, value in item.items()
            if name not in RESERVED_ATTRIBUTES and name != self._domain_attribute
        }
        # The key is authoritative for ownership, not the stored attribute.
        attributes["tenantId"] = tenant_id.value
        if "domain" not in attributes and self._domain_attribute in item:
            attributes["domain"] = item[self._domain_attribute]
        try:
            return TenantConfig.model_validate(attributes)
        except ValidationError as e:
            raise MalformedTenantRecordError(
                f"Tenant {tenant_id.value!r} has a malformed config record"
            ) from e

    def put_tenant_config(self, config: TenantConfig) -> None:
        """Create or replace a tenant's configuration record.

        Only the administrative write path calls this: tenant records are
        provisioned by onboarding tooling, and no route of this service
        writes them.

        The domain is duplicated into the domain index attribute so that
        hostname lookups can find the record.

        Raises:
            InvalidKeySchemeError: If the config carries key attributes
        """
        tenant_id = TenantId.from_string(config.tenant_id)
        attributes = config.model_dump(by_alias=True, exclude_none=True)
        if RESERVED_ATTRIBUTES & attributes.keys():
            raise InvalidKeySchemeError("Tenant config must not set PK or SK")

        item = {
            **to_attribute_value(attributes),
            PARTITION_KEY: tenant_partition_key(tenant_id),
            SORT_KEY: CONFIG_SORT_KEY,
            self._domain_attribute: config.domain,
        }
        validate_item_keys(item, tenant_id, RecordKind.CONFIG)

        with self._translate_errors("put_tenant_config", tenant_id):
            self._table.put_item(Item=item)
        self._probe.tenant_config_saved(tenant_id.value)

    def find_tenant_id_by_domain(self, domain: str) -> TenantId | None:
        """Map a hostname to a tenant through the domain index.

        Only CONFIG records count; anything else projected into the index
        is ignored.
        """
        with self._translate_errors("find_tenant_id_by_domain"):
            response = self._table.query(
                IndexName=self._domain_index_name,
                KeyConditionExpression=Key(self._domain_attribute).eq(domain),
            )

        tenant_ids = [
            tenant_id_from_partition_key(item[PARTITION_KEY]).value
            for item in response.get("Items", [])
            if item.get(SORT_KEY) == CONFIG_SORT_KEY
        ]
        if not tenant_ids:
            self._probe.domain_not_found(domain)
            return None
        if len(tenant_ids) > 1:
            self._probe.duplicate_domain(domain, sorted(tenant_ids))
        return TenantId(value=tenant_ids[0])

    # -- context entries ---------------------------------------------------

    def list_context_entries(
        self,
        tenant_id: TenantId,
        prefix: str = CONTEXT_PREFIX,
        page_token: str | None = None,
        limit: int | None = None,
    ) -> ContextPage:
        """Query the tenant's partition for sort keys beginning with ``prefix``.

        Returned items are re-checked against the exact partition key and
        prefix before they are handed out.

        Raises:
            InvalidKeySchemeError: If the prefix is not a context prefix, or
                the store returns a record outside the requested range
            InvalidPageTokenError: If the page token is not this listing's
        """
        if not prefix.startswith(CONTEXT_PREFIX):
            raise InvalidKeySchemeError(
                f"Context listings must use a {CONTEXT_PREFIX!r} prefix, got {prefix!r}"
            )

        partition_key = tenant_partition_key(tenant_id)
        query: dict[str, Any] = {
            "KeyConditionExpression": Key(PARTITION_KEY).eq(partition_key)
            & Key(SORT_KEY).begins_with(prefix),
        }
        if limit is not None:
            query["Limit"] = limit
        if page_token:
            query["ExclusiveStartKey"] = decode_page_token(
                page_token, partition_key, prefix
            )

        with self._translate_errors("list_context_entries", tenant_id):
            response = self._table.query(**query)

        entries = []
        for item in response.get("Items", []):
            validate_item_keys(item, tenant_id, RecordKind.CONTEXT)
            if not item[SORT_KEY].startswith(prefix):
                raise InvalidKeySchemeError(
                    f"Record {item[SORT_KEY]!r} is outside prefix {prefix!r}"
                )
            entries.append(self._entry_from_item(item, tenant_id))

        last_key = response.get("LastEvaluatedKey")
        next_token = encode_page_token(last_key) if last_key else None

        self._probe.context_entries_listed(
            tenant_id.value, count=len(entries), has_more=next_token is not None
        )
        return ContextPage(items=entries, next_page_token=next_token)

    def get_context_entry(
        self, tenant_id: TenantId, entry_id: str
    ) -> ContextEntry | None:
        """Point lookup of one context entry, or None if absent."""
        key = {
            PARTITION_KEY: tenant_partition_key(tenant_id),
            SORT_KEY: context_sort_key(entry_id),
        }
        with self._translate_errors("get_context_entry", tenant_id):
            response = self._table.get_item(
                Key=key, ConsistentRead=self._consistent_reads
            )

        item = response.get("Item")
        if item is None:
            return None
        validate_item_keys(item, tenant_id, RecordKind.CONTEXT)
        return self._entry_from_item(item, tenant_id)

    def put_context_entry(
        self,
        tenant_id: TenantId,
        payload: dict[str, Any],
        entry_id: str | None = None,
    ) -> ContextEntry | None:
        """Create (no ``entry_id``) or replace a context entry.

        New entries get a generated id and ``createdAt``; every write
        stamps ``updatedAt``. Replacing is conditional on the item still
        existing, so an entry deleted concurrently is not recreated.

        Returns:
            The stored entry, or None if ``entry_id`` names no stored entry

        Raises:
            InvalidKeySchemeError: If the payload sets PK or SK
        """
        if RESERVED_ATTRIBUTES & payload.keys():
            raise InvalidKeySchemeError("Context payload must not set PK or SK")

        now = _utc_now()
        replacing = entry_id is not None
        if entry_id is None:
            entry_id = self._id_factory()
            payload = {**payload, "createdAt": payload.get("createdAt", now)}

        item = {
            **to_attribute_value(payload),
            "tenantId": tenant_id.value,
            "id": entry_id,
            "updatedAt": now,
            PARTITION_KEY: tenant_partition_key(tenant_id),
            SORT_KEY: context_sort_key(entry_id),
        }
        validate_item_keys(item, tenant_id, RecordKind.CONTEXT)

        request: dict[str, Any] = {"Item": item}
        if replacing:
            request["ConditionExpression"] = Attr(PARTITION_KEY).exists()

        try:
            with self._translate_errors("put_context_entry", tenant_id):
                self._table.put_item(**request)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") != CONDITIONAL_CHECK_FAILED:
                raise
            self._probe.context_entry_missing(tenant_id.value, entry_id)
            return None

        self._probe.context_entry_saved(tenant_id.value, entry_id)
        return self._entry_from_item(item, tenant_id)

    def delete_context_entry(self, tenant_id: TenantId, entry_id: str) -> bool:
        """Delete a context entry.

        Returns:
            True if deleted, False if it did not exist
        """
        key = {
            PARTITION_KEY: tenant_partition_key(tenant_id),
            SORT_KEY: context_sort_key(entry_id),
        }
        with self._translate_errors("delete_context_entry", tenant_id):
            response = self._table.delete_item(Key=key, ReturnValues="ALL_OLD")

        existed = "Attributes" in response
        self._probe.context_entry_deleted(tenant_id.value, entry_id, existed=existed)
        return existed

    @staticmethod
    def _entry_from_item(item: dict[str, Any], tenant_id: TenantId) -> ContextEntry:
        sort_key = item[SORT_KEY]
        if record_kind(sort_key) is not RecordKind.CONTEXT:
            raise InvalidKeySchemeError(f"Not a context record: {sort_key!r}")
        return ContextEntry(
            tenant_id=tenant_id.value,
            entry_id=entry_id_from_sort_key(sort_key),
            payload={
                name: from_attribute_value(value)
                for name, value in item.items()
                if name not in RESERVED_ATTRIBUTES
            },
        )
