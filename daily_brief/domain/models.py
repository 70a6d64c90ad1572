"""Record model for the marketing datasets loaded per run."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Mapping

from daily_brief.domain.periods import extract_date_part, filter_by_range


def parse_number(value: Any) -> float:
    """Parse a locale-tolerant number; anything unparseable becomes ``0.0``."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(",", ".", 1)
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def parse_bool(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    text = str(value).strip()
    return text.lower() == "true" or text == "1"


def _text(row: Mapping[str, Any], key: str) -> str:
    value = row.get(key)
    if value is None:
        return ""
    return str(value)


def _optional_text(row: Mapping[str, Any], key: str) -> str | None:
    value = row.get(key)
    if value is None or str(value) == "":
        return None
    return str(value)


@dataclass(frozen=True)
class Session:
    id: str
    user_pseudo_id: str
    timestamp_shifted: str
    client_id: str | None = None
    ga_session_id: str = ""
    device_category: str = ""
    device_mobile_brand_name: str | None = None
    device_mobile_model_name: str | None = None
    device_operating_system: str = ""
    device_operating_system_version: str | None = None
    geo_country: str = ""
    geo_region: str = ""
    geo_city: str = ""
    geo_sub_continent: str | None = None
    geo_metro: str | None = None

    @property
    def identity(self) -> str:
        """Join identity: the CRM client id when present, else the analytics pseudo id."""
        return self.client_id or self.user_pseudo_id

    @property
    def record_date(self) -> str:
        return extract_date_part(self.timestamp_shifted)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Session":
        return cls(
            id=_text(row, "id"),
            client_id=_optional_text(row, "Mcid"),
            user_pseudo_id=_text(row, "UserPseudoId"),
            ga_session_id=_text(row, "GaSessionId"),
            timestamp_shifted=_text(row, "DatetimeShifted"),
            device_category=_text(row, "DeviceCategory"),
            device_mobile_brand_name=_optional_text(row, "DeviceMobileBrandName"),
            device_mobile_model_name=_optional_text(row, "DeviceMobileModelName"),
            device_operating_system=_text(row, "DeviceOperatingSystem"),
            device_operating_system_version=_optional_text(row, "DeviceOperatingSystemVersion"),
            geo_country=_text(row, "GeoCountry"),
            geo_region=_text(row, "GeoRegion"),
            geo_city=_text(row, "GeoCity"),
            geo_sub_continent=_optional_text(row, "GeoSubContinent"),
            geo_metro=_optional_text(row, "GeoMetro"),
        )


@dataclass(frozen=True)
class Lead:
    id: str
    client_id: str
    created_at_shifted: str
    source_atom_id: str = ""
    google_client_id: str = ""
    is_first_contact_attribution: bool = False

    @property
    def record_date(self) -> str:
        return extract_date_part(self.created_at_shifted)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Lead":
        return cls(
            id=_text(row, "id"),
            source_atom_id=_text(row, "atomid"),
            client_id=_text(row, "McId"),
            created_at_shifted=_text(row, "DatetimeCreatedShifted"),
            google_client_id=_text(row, "GoogleClientId"),
            is_first_contact_attribution=parse_bool(row.get("ch_isFirst4ContactAttribution")),
        )


@dataclass(frozen=True)
class Contact:
    id: str
    client_id: str
    created_at_shifted: str
    source_atom_id: str = ""
    google_client_id: str = ""
    entity_created_with: str = ""
    is_first_contact_attribution: bool = False
    is_first_contact: bool = False

    @property
    def record_date(self) -> str:
        return extract_date_part(self.created_at_shifted)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Contact":
        return cls(
            id=_text(row, "id"),
            source_atom_id=_text(row, "atomid"),
            client_id=_text(row, "McId"),
            created_at_shifted=_text(row, "DatetimeCreatedShifted"),
            google_client_id=_text(row, "GoogleClientId"),
            entity_created_with=_text(row, "EntityCreatedWith"),
            is_first_contact_attribution=parse_bool(row.get("ch_isFirst4ContactAttribution")),
            is_first_contact=parse_bool(row.get("ch_isFirst")),
        )


@dataclass(frozen=True)
class Contact2Lead:
    lead_id: str
    contact_id: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Contact2Lead":
        return cls(lead_id=_text(row, "leadId"), contact_id=_text(row, "contactId"))


@dataclass(frozen=True)
class Transaction:
    id: str
    client_id: str
    payment_timestamp_shifted: str
    paid_amount: float = 0.0
    is_first_client_payment: bool = False
    source_atom_id: str = ""

    @property
    def record_date(self) -> str:
        return extract_date_part(self.payment_timestamp_shifted)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Transaction":
        return cls(
            id=_text(row, "Id"),
            source_atom_id=_text(row, "atomid"),
            client_id=_text(row, "McId"),
            payment_timestamp_shifted=_text(row, "PaymentDatetimeShifted"),
            paid_amount=parse_number(row.get("PaidSumOriginalCurrency")),
            is_first_client_payment=parse_bool(row.get("ch_isFirstClientPaid")),
        )


@dataclass(frozen=True)
class SourceData:
    date: str
    atom_id: str
    impressions: float = 0.0
    budget_spent: float = 0.0
    clicks: float = 0.0

    @property
    def record_date(self) -> str:
        return extract_date_part(self.date)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "SourceData":
        return cls(
            date=_text(row, "Date"),
            atom_id=_text(row, "AtomId"),
            impressions=parse_number(row.get("Shows")),
            budget_spent=parse_number(row.get("BudgetSpent")),
            clicks=parse_number(row.get("Clicks")),
        )


@dataclass(frozen=True)
class Atom:
    atom_id: str
    source_group_name: str
    name: str = ""
    source_name: str = ""
    groups_of_source_group_name: str = ""
    is_paid_name: str = ""
    campaign_id: str | None = None
    adset_id: str | None = None
    ad_id: str | None = None

    @property
    def is_paid(self) -> bool:
        return self.is_paid_name.strip().lower() == "paid"

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Atom":
        return cls(
            atom_id=_text(row, "AtomId"),
            name=_text(row, "Name"),
            source_name=_text(row, "SourceName"),
            source_group_name=_text(row, "SourceGroupName"),
            groups_of_source_group_name=_text(row, "GroupsOfSourceGroupName"),
            is_paid_name=_text(row, "IsPaidName"),
            campaign_id=_optional_text(row, "CampaignId"),
            adset_id=_optional_text(row, "AdsetId"),
            ad_id=_optional_text(row, "AdId"),
        )


@dataclass(frozen=True)
class MarketingDataset:
    """All collections loaded for one run. Read-only for the lifetime of the run."""

    sessions: tuple[Session, ...] = ()
    leads: tuple[Lead, ...] = ()
    contacts: tuple[Contact, ...] = ()
    contact2leads: tuple[Contact2Lead, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    source_data: tuple[SourceData, ...] = ()
    atoms: tuple[Atom, ...] = ()

    def filter_by_range(self, start: str, end: str) -> "MarketingDataset":
        """Restrict dated collections to ``start <= date < end``; directories are kept whole."""
        return replace(
            self,
            sessions=tuple(filter_by_range(self.sessions, start, end)),
            leads=tuple(filter_by_range(self.leads, start, end)),
            contacts=tuple(filter_by_range(self.contacts, start, end)),
            transactions=tuple(filter_by_range(self.transactions, start, end)),
            source_data=tuple(filter_by_range(self.source_data, start, end)),
        )

    def counts(self) -> dict[str, int]:
        return {
            "sessions": len(self.sessions),
            "leads": len(self.leads),
            "contacts": len(self.contacts),
            "contact2leads": len(self.contact2leads),
            "transactions": len(self.transactions),
            "source_data": len(self.source_data),
            "atoms": len(self.atoms),
        }
