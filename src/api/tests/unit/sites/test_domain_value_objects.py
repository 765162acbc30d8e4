"""Unit tests for sites domain value objects."""

import pytest
from pydantic import ValidationError

from sites.domain.country_packs import DE_PACK, RO_PACK
from sites.domain.value_objects import (
    ContextEntry,
    ResolvedSiteConfig,
    TenantConfig,
    TenantId,
    TenantStatus,
)


def _tenant(**overrides) -> TenantConfig:
    data = {
        "tenantId": "client-bob",
        "domain": "bob.example",
        "status": "LIVE",
        "name": "Bob's Bakery",
    }
    data.update(overrides)
    return TenantConfig.model_validate(data)


class TestTenantId:
    """Tests for TenantId validation."""

    def test_from_string_accepts_slug(self):
        """Slug-style ids should be accepted verbatim."""
        assert TenantId.from_string("client-bob").value == "client-bob"

    @pytest.mark.parametrize("value", ["", " client", "client ", "a#b", "TENANT#x"])
    def test_from_string_rejects_unusable_ids(self, value: str):
        """Empty, padded or delimiter-bearing ids should be rejected."""
        with pytest.raises(ValueError):
            TenantId.from_string(value)

    def test_str_returns_value(self):
        """str() should return the raw id."""
        assert str(TenantId(value="client-bob")) == "client-bob"


class TestTenantConfig:
    """Tests for TenantConfig parsing."""

    def test_camel_case_attributes_are_parsed(self):
        """Stored camelCase attribute names should populate fields."""
        tenant = _tenant(countryCode="DE")

        assert tenant.tenant_id == "client-bob"
        assert tenant.country_code == "DE"

    def test_missing_status_defaults_to_draft(self):
        """A record without a status should not be public."""
        tenant = TenantConfig.model_validate(
            {"tenantId": "client-bob", "domain": "bob.example"}
        )

        assert tenant.status == TenantStatus.DRAFT

    def test_domain_is_required(self):
        """A record without a domain should fail validation."""
        with pytest.raises(ValidationError):
            TenantConfig.model_validate({"tenantId": "client-bob"})

    def test_unknown_attributes_are_kept(self):
        """Attributes without a field should be passed through."""
        tenant = _tenant(phone="+40 700 000 000")

        assert tenant.extra_attributes == {"phone": "+40 700 000 000"}

    def test_is_frozen(self):
        """Parsed configs should be immutable."""
        tenant = _tenant()

        with pytest.raises(ValidationError):
            tenant.domain = "other.example"  # type: ignore[misc]


class TestResolvedSiteConfigMerge:
    """Tests for merging a tenant with its country pack."""

    def test_pack_fields_are_included(self):
        """Country pack sections should be carried into the result."""
        resolved = ResolvedSiteConfig.merge(_tenant(), DE_PACK)

        assert resolved.country_code == "DE"
        assert resolved.locale == "de-DE"
        assert resolved.currency == DE_PACK.currency
        assert resolved.gdpr == DE_PACK.gdpr

    def test_tenant_name_wins_over_country_name(self):
        """The tenant's name should replace the pack's country name."""
        resolved = ResolvedSiteConfig.merge(_tenant(), RO_PACK)

        assert resolved.name == "Bob's Bakery"

    def test_pack_name_used_when_tenant_has_none(self):
        """Without a tenant name the pack name should remain."""
        resolved = ResolvedSiteConfig.merge(_tenant(name=None), RO_PACK)

        assert resolved.name == "Romania"

    def test_tenant_locale_and_section_overrides_win(self):
        """Stored locale and section mappings should override the pack."""
        tenant = _tenant(
            locale="en-GB",
            currency={"symbol": "RON"},
            legal={"taxDisclosure": "Scutit de TVA."},
        )

        resolved = ResolvedSiteConfig.merge(tenant, RO_PACK)

        assert resolved.locale == "en-GB"
        assert resolved.currency.symbol == "RON"
        assert resolved.currency.code == "RON"
        assert resolved.legal.tax_disclosure == "Scutit de TVA."
        assert "locale" not in resolved.attributes
        assert "currency" not in resolved.attributes

    def test_non_mapping_sections_are_kept_in_attributes(self):
        """A stored section that is not a mapping should not be dropped."""
        resolved = ResolvedSiteConfig.merge(
            _tenant(currency="EUR", legal=["terms"], locale=""), RO_PACK
        )

        assert resolved.currency == RO_PACK.currency
        assert resolved.legal == RO_PACK.legal
        assert resolved.locale == RO_PACK.locale
        assert resolved.attributes == {
            "currency": "EUR",
            "legal": ["terms"],
            "locale": "",
        }

    def test_extra_attributes_are_passed_through(self):
        """Attributes without a dedicated field should land in attributes."""
        resolved = ResolvedSiteConfig.merge(_tenant(phone="+40"), RO_PACK)

        assert resolved.attributes == {"phone": "+40"}

    def test_is_public_only_when_live(self):
        """Only LIVE sites should be public."""
        for status in ("DRAFT", "SUSPENDED", "OFF", "ARCHIVED"):
            resolved = ResolvedSiteConfig.merge(_tenant(status=status), RO_PACK)
            assert resolved.is_public is False

        assert ResolvedSiteConfig.merge(_tenant(), RO_PACK).is_public is True

    def test_base_url_uses_https(self):
        """base_url should be the https origin of the domain."""
        resolved = ResolvedSiteConfig.merge(_tenant(), RO_PACK)

        assert resolved.base_url == "https://bob.example"

    def test_mappings_are_read_only(self):
        """Theme and attributes should not be mutable through the result."""
        resolved = ResolvedSiteConfig.merge(
            _tenant(theme={"primary": "#000"}, phone="+40"), RO_PACK
        )

        with pytest.raises(TypeError):
            resolved.theme["primary"] = "#fff"  # type: ignore[index]
        with pytest.raises(TypeError):
            resolved.attributes["phone"] = "x"  # type: ignore[index]

    def test_merge_is_deterministic(self):
        """Merging the same inputs twice should give equal results."""
        tenant = _tenant(theme={"primary": "#000"})

        assert ResolvedSiteConfig.merge(tenant, RO_PACK) == ResolvedSiteConfig.merge(
            tenant, RO_PACK
        )


class TestContextEntry:
    """Tests for ContextEntry."""

    def test_as_document_adds_id(self):
        """as_document should return the payload with the entry id."""
        entry = ContextEntry(
            tenant_id="client-bob", entry_id="01J0", payload={"title": "Hello"}
        )

        assert entry.as_document() == {"title": "Hello", "id": "01J0"}
