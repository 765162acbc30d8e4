"""Built-in country packs and the registry that serves them.

A country pack bundles the locale-specific rules a storefront needs:
currency formatting, address layout, legal labels, tax disclosure and
GDPR consent copy. Packs are defined in code; adding a country is a code
change, never a runtime operation.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields, replace
from enum import StrEnum
from typing import Any, Self

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


class _Overridable:
    """Lets stored tenant settings replace individual pack fields."""

    def overridden_by(self, values: Mapping[str, Any] | None) -> Self:
        """Return a copy with matching fields replaced.

        Keys may be snake_case or camelCase. Unknown keys and non-mapping
        inputs are ignored.
        """
        if not isinstance(values, Mapping) or not values:
            return self
        known = {f.name for f in fields(self)}  # type: ignore[arg-type]
        changes = {
            _snake_case(key): value
            for key, value in values.items()
            if _snake_case(key) in known and value is not None
        }
        if not changes:
            return self
        return replace(self, **changes)  # type: ignore[type-var]


class CurrencyPosition(StrEnum):
    """Where the currency symbol goes relative to the amount."""

    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class CountryPackCurrency(_Overridable):
    """Currency formatting rules."""

    code: str
    symbol: str
    position: CurrencyPosition
    decimals: int

    def format(self, amount: float) -> str:
        """Format an amount with the configured symbol placement."""
        number = f"{amount:,.{self.decimals}f}"
        if self.position == CurrencyPosition.BEFORE:
            return f"{self.symbol}{number}"
        return f"{number} {self.symbol}"


@dataclass(frozen=True)
class CountryPackRegion:
    """A first-level administrative region (county, state, Land)."""

    code: str
    name: str


@dataclass(frozen=True)
class CountryPackAddress(_Overridable):
    """Address form layout."""

    regions: tuple[CountryPackRegion, ...]
    region_label: str
    postal_code_label: str
    phone_prefix: str
    postal_code_format: str | None = None
    phone_format: str | None = None


@dataclass(frozen=True)
class CountryPackLegal(_Overridable):
    """Legal disclosure labels and tax wording."""

    terms_label: str
    privacy_label: str
    tax_disclosure: str
    consumer_protection_label: str | None = None
    dispute_resolution_label: str | None = None


@dataclass(frozen=True)
class CountryPackGdpr(_Overridable):
    """Cookie consent banner copy."""

    headline: str
    description: str
    accept_label: str
    reject_label: str


@dataclass(frozen=True)
class CountryPack:
    """Locale bundle for one country (ISO 3166-1 alpha-2 code)."""

    code: str
    name: str
    locale: str
    currency: CountryPackCurrency
    address: CountryPackAddress
    legal: CountryPackLegal
    gdpr: CountryPackGdpr


def _regions(pairs: Iterable[tuple[str, str]]) -> tuple[CountryPackRegion, ...]:
    return tuple(CountryPackRegion(code=code, name=name) for code, name in pairs)


RO_PACK = CountryPack(
    code="RO",
    name="Romania",
    locale="ro-RO",
    currency=CountryPackCurrency(
        code="RON", symbol="lei", position=CurrencyPosition.AFTER, decimals=2
    ),
    address=CountryPackAddress(
        regions=_regions(
            [
                ("AB", "Alba"),
                ("AR", "Arad"),
                ("AG", "Argeș"),
                ("BC", "Bacău"),
                ("BH", "Bihor"),
                ("BN", "Bistrița-Năsăud"),
                ("BT", "Botoșani"),
                ("BV", "Brașov"),
                ("BR", "Brăila"),
                ("B", "București"),
                ("BZ", "Buzău"),
                ("CS", "Caraș-Severin"),
                ("CL", "Călărași"),
                ("CJ", "Cluj"),
                ("CT", "Constanța"),
                ("CV", "Covasna"),
                ("DB", "Dâmbovița"),
                ("DJ", "Dolj"),
                ("GL", "Galați"),
                ("GR", "Giurgiu"),
                ("GJ", "Gorj"),
                ("HR", "Harghita"),
                ("HD", "Hunedoara"),
                ("IL", "Ialomița"),
                ("IS", "Iași"),
                ("IF", "Ilfov"),
                ("MM", "Maramureș"),
                ("MH", "Mehedinți"),
                ("MS", "Mureș"),
                ("NT", "Neamț"),
                ("OT", "Olt"),
                ("PH", "Prahova"),
                ("SM", "Satu Mare"),
                ("SJ", "Sălaj"),
                ("SB", "Sibiu"),
                ("SV", "Suceava"),
                ("TR", "Teleorman"),
                ("TM", "Timiș"),
                ("TL", "Tulcea"),
                ("VS", "Vaslui"),
                ("VL", "Vâlcea"),
                ("VN", "Vrancea"),
            ]
        ),
        region_label="Județ",
        postal_code_label="Cod poștal",
        postal_code_format=r"^\d{6}$",
        phone_prefix="+40",
        phone_format="07XX XXX XXX",
    ),
    legal=CountryPackLegal(
        terms_label="Termeni și condiții",
        privacy_label="Politica de confidențialitate",
        tax_disclosure="Prețurile includ TVA.",
        consumer_protection_label="ANPC",
        dispute_resolution_label="Soluționarea online a litigiilor",
    ),
    gdpr=CountryPackGdpr(
        headline="Folosim cookie-uri",
        description=(
            "Folosim cookie-uri pentru a îmbunătăți experiența pe site. "
            "Poți accepta sau refuza cookie-urile neesențiale."
        ),
        accept_label="Accept",
        reject_label="Refuz",
    ),
)

DE_PACK = CountryPack(
    code="DE",
    name="Germany",
    locale="de-DE",
    currency=CountryPackCurrency(
        code="EUR", symbol="€", position=CurrencyPosition.AFTER, decimals=2
    ),
    address=CountryPackAddress(
        regions=_regions(
            [
                ("BW", "Baden-Württemberg"),
                ("BY", "Bayern"),
                ("BE", "Berlin"),
                ("BB", "Brandenburg"),
                ("HB", "Bremen"),
                ("HH", "Hamburg"),
                ("HE", "Hessen"),
                ("MV", "Mecklenburg-Vorpommern"),
                ("NI", "Niedersachsen"),
                ("NW", "Nordrhein-Westfalen"),
                ("RP", "Rheinland-Pfalz"),
                ("SL", "Saarland"),
                ("SN", "Sachsen"),
                ("ST", "Sachsen-Anhalt"),
                ("SH", "Schleswig-Holstein"),
                ("TH", "Thüringen"),
            ]
        ),
        region_label="Bundesland",
        postal_code_label="Postleitzahl",
        postal_code_format=r"^\d{5}$",
        phone_prefix="+49",
    ),
    legal=CountryPackLegal(
        terms_label="AGB",
        privacy_label="Datenschutzerklärung",
        tax_disclosure="Alle Preise inkl. MwSt.",
        consumer_protection_label="Widerrufsbelehrung",
        dispute_resolution_label="Online-Streitbeilegung",
    ),
    gdpr=CountryPackGdpr(
        headline="Wir verwenden Cookies",
        description=(
            "Wir verwenden Cookies, um unsere Website zu verbessern. "
            "Sie können nicht notwendige Cookies ablehnen."
        ),
        accept_label="Akzeptieren",
        reject_label="Ablehnen",
    ),
)

US_PACK = CountryPack(
    code="US",
    name="United States",
    locale="en-US",
    currency=CountryPackCurrency(
        code="USD", symbol="$", position=CurrencyPosition.BEFORE, decimals=2
    ),
    address=CountryPackAddress(
        regions=_regions(
            [
                ("AL", "Alabama"), ("AK", "Alaska"), ("AZ", "Arizona"),
                ("AR", "Arkansas"), ("CA", "California"), ("CO", "Colorado"),
                ("CT", "Connecticut"), ("DE", "Delaware"),
                ("DC", "District of Columbia"), ("FL", "Florida"),
                ("GA", "Georgia"), ("HI", "Hawaii"), ("ID", "Idaho"),
                ("IL", "Illinois"), ("IN", "Indiana"), ("IA", "Iowa"),
                ("KS", "Kansas"), ("KY", "Kentucky"), ("LA", "Louisiana"),
                ("ME", "Maine"), ("MD", "Maryland"), ("MA", "Massachusetts"),
                ("MI", "Michigan"), ("MN", "Minnesota"), ("MS", "Mississippi"),
                ("MO", "Missouri"), ("MT", "Montana"), ("NE", "Nebraska"),
                ("NV", "Nevada"), ("NH", "New Hampshire"), ("NJ", "New Jersey"),
                ("NM", "New Mexico"), ("NY", "New York"),
                ("NC", "North Carolina"), ("ND", "North Dakota"), ("OH", "Ohio"),
                ("OK", "Oklahoma"), ("OR", "Oregon"), ("PA", "Pennsylvania"),
                ("RI", "Rhode Island"), ("SC", "South Carolina"),
                ("SD", "South Dakota"), ("TN", "Tennessee"), ("TX", "Texas"),
                ("UT", "Utah"), ("VT", "Vermont"), ("VA", "Virginia"),
                ("WA", "Washington"), ("WV", "West Virginia"),
                ("WI", "Wisconsin"), ("WY", "Wyoming"),
            ]
        ),
        region_label="State",
        postal_code_label="ZIP Code",
        postal_code_format=r"^\d{5}(-\d{4})?$",
        phone_prefix="+1",
        phone_format="(XXX) XXX-XXXX",
    ),
    legal=CountryPackLegal(
        terms_label="Terms of Service",
        privacy_label="Privacy Policy",
        tax_disclosure="Sales tax calculated at checkout.",
    ),
    gdpr=CountryPackGdpr(
        headline="We use cookies",
        description=(
            "We use cookies to improve your experience. "
            "You can decline non-essential cookies."
        ),
        accept_label="Accept",
        reject_label="Decline",
    ),
)

BUILT_IN_PACKS: tuple[CountryPack, ...] = (RO_PACK, DE_PACK, US_PACK)

# Fallback for missing or unknown country codes.
DEFAULT_COUNTRY_CODE = "RO"


class CountryPackRegistry:
    """Read-only lookup from country code to country pack.

    ``get_pack`` is total: unknown, empty or missing codes resolve to the
    default pack.
    """

    def __init__(
        self,
        packs: Iterable[CountryPack] = BUILT_IN_PACKS,
        default_code: str = DEFAULT_COUNTRY_CODE,
    ):
        """Initialize the registry.

        Args:
            packs: Packs to serve; codes must be unique
            default_code: Code of the pack returned for unmatched lookups

        Raises:
            ValueError: If two packs share a code or the default is not
                among the packs
        """
        by_code: dict[str, CountryPack] = {}
        for pack in packs:
            code = pack.code.upper()
            if code in by_code:
                raise ValueError(f"Duplicate country pack: {code}")
            by_code[code] = pack

        default = default_code.strip().upper()
        if default not in by_code:
            raise ValueError(f"Default country pack {default!r} is not registered")

        self._packs = by_code
        self._default_code = default

    @property
    def default_code(self) -> str:
        """Code of the fallback pack."""
        return self._default_code

    @property
    def default_pack(self) -> CountryPack:
        """The fallback pack."""
        return self._packs[self._default_code]

    def supported_codes(self) -> list[str]:
        """Codes with a dedicated pack, sorted."""
        return sorted(self._packs)

    def is_supported(self, code: str | None) -> bool:
        """Whether ``code`` (case-insensitive) has a dedicated pack."""
        return code is not None and code.strip().upper() in self._packs

    def get_pack(self, code: str | None) -> CountryPack:
        """Look up the pack for a country code.

        Args:
            code: Two-letter country code in any case, or None

        Returns:
            The matching pack, or the default pack when there is no match
        """
        if code is None:
            return self.default_pack
        return self._packs.get(code.strip().upper(), self.default_pack)
