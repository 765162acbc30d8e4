"""Value objects for the sites domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sites.domain.country_packs import (
    CountryPack,
    CountryPackAddress,
    CountryPackCurrency,
    CountryPackGdpr,
    CountryPackLegal,
)

KEY_DELIMITER = "#"


@dataclass(frozen=True)
class TenantId:
    """Identifier for a tenant site.

    Tenant ids are chosen by the onboarding flow (slugs such as
    ``client-bob``) and become partition key material, so they must not
    contain the key delimiter.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> TenantId:
        """Create TenantId from string value.

        Args:
            value: Raw tenant identifier

        Returns:
            TenantId instance

        Raises:
            ValueError: If value is empty, padded with whitespace, or
                contains the key delimiter
        """
        if not value or value.strip() != value:
            raise ValueError(f"Invalid TenantId: {value!r}")
        if KEY_DELIMITER in value:
            raise ValueError(
                f"Invalid TenantId: {value!r} must not contain '{KEY_DELIMITER}'"
            )
        return cls(value=value)


class TenantStatus(StrEnum):
    """Publish status of a tenant site.

    Only LIVE sites are publicly indexable. Stored records may carry
    statuses outside this enum; those are treated as non-public.
    """

    LIVE = "LIVE"
    DRAFT = "DRAFT"
    SUSPENDED = "SUSPENDED"
    OFF = "OFF"


class TenantConfig(BaseModel):
    """Tenant configuration record as stored by the administrative flows.

    Attributes not modelled here are kept in ``model_extra`` and passed
    through to the resolved configuration untouched.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    tenant_id: str = Field(..., alias="tenantId", min_length=1)
    domain: str = Field(..., min_length=1)
    status: str = Field(default=TenantStatus.DRAFT.value)
    name: str | None = None
    description: str | None = None
    theme: dict[str, Any] | None = None
    country_code: str | None = Field(default=None, alias="countryCode")

    @property
    def extra_attributes(self) -> dict[str, Any]:
        """Stored attributes with no dedicated field."""
        return dict(self.model_extra or {})


@dataclass(frozen=True)
class ContextEntry:
    """A tenant-scoped content record (e.g. a CMS block).

    The payload is the stored document minus its key attributes and is
    returned verbatim.
    """

    tenant_id: str
    entry_id: str
    payload: Mapping[str, Any]

    def as_document(self) -> dict[str, Any]:
        """Return the payload with the entry id under ``id``."""
        return {**self.payload, "id": self.entry_id}


@dataclass(frozen=True)
class ContextPage:
    """One page of context entries plus the token for the next page."""

    items: list[ContextEntry] = field(default_factory=list)
    next_page_token: str | None = None


@dataclass(frozen=True)
class SiteNotFound:
    """Resolution outcome for a tenant with no configuration record.

    Returned, never raised. Carries nothing beyond the requested id so that
    callers cannot leak details about why resolution failed. Hostname
    lookups that match no tenant carry no id.
    """

    tenant_id: str | None = None


@dataclass(frozen=True)
class ResolvedSiteConfig:
    """Request-scoped merge of a tenant record and its country pack.

    Built only through ``merge`` so that it is always fully populated.
    Mapping fields are wrapped read-only.
    """

    tenant_id: str
    domain: str
    status: str
    name: str
    description: str | None
    theme: Mapping[str, Any] | None
    country_code: str
    locale: str
    currency: CountryPackCurrency
    address: CountryPackAddress
    legal: CountryPackLegal
    gdpr: CountryPackGdpr
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.theme is not None:
            object.__setattr__(self, "theme", MappingProxyType(dict(self.theme)))
        object.__setattr__(
            self, "attributes", MappingProxyType(copy.deepcopy(dict(self.attributes)))
        )

    @property
    def is_public(self) -> bool:
        """Whether the site may be served to and indexed by the public."""
        return self.status == TenantStatus.LIVE

    @property
    def base_url(self) -> str:
        """Public URL of the live site."""
        return f"https://{self.domain}"

    @classmethod
    def merge(cls, tenant: TenantConfig, pack: CountryPack) -> ResolvedSiteConfig:
        """Merge a tenant record with its country pack.

        Tenant values win wherever both sides define the same name: the
        tenant's ``name`` replaces the country name, a stored ``locale``
        replaces the pack locale, and stored ``currency``/``address``/
        ``legal``/``gdpr`` mappings override the matching pack fields. Stored
        values of another shape are kept verbatim in ``attributes``.

        Args:
            tenant: The stored tenant configuration
            pack: Country pack selected for the tenant

        Returns:
            Fully populated ResolvedSiteConfig
        """
        extra = tenant.extra_attributes
        locale = extra.get("locale")
        if isinstance(locale, str) and locale:
            del extra["locale"]
        else:
            locale = pack.locale
        overrides = {
            key: extra.pop(key)
            for key in ("currency", "address", "legal", "gdpr")
            if isinstance(extra.get(key), Mapping)
        }

        return cls(
            tenant_id=tenant.tenant_id,
            domain=tenant.domain,
            status=tenant.status,
            name=tenant.name if tenant.name is not None else pack.name,
            description=tenant.description,
            theme=tenant.theme,
            country_code=pack.code,
            locale=locale,
            currency=pack.currency.overridden_by(overrides.get("currency")),
            address=pack.address.overridden_by(overrides.get("address")),
            legal=pack.legal.overridden_by(overrides.get("legal")),
            gdpr=pack.gdpr.overridden_by(overrides.get("gdpr")),
            attributes=extra,
        )
