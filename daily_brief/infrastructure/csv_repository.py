"""Infrastructure adapter for the CSV-based marketing data repository."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import polars as pl

from daily_brief.domain.models import (
    Atom,
    Contact,
    Contact2Lead,
    Lead,
    MarketingDataset,
    Session,
    SourceData,
    Transaction,
)
from daily_brief.ingestion import read_input_csv
from daily_brief.utils.logger import log


@dataclass(frozen=True)
class DatasetFile:
    suffix: str
    columns: tuple[str, ...]
    numeric_columns: tuple[str, ...] = ()
    boolean_columns: tuple[str, ...] = ()


SESSIONS_FILE = DatasetFile(
    "Sessions.csv",
    (
        "id",
        "Mcid",
        "UserPseudoId",
        "GaSessionId",
        "DatetimeShifted",
        "DeviceCategory",
        "DeviceMobileBrandName",
        "DeviceMobileModelName",
        "DeviceOperatingSystem",
        "DeviceOperatingSystemVersion",
        "GeoCountry",
        "GeoRegion",
        "GeoCity",
        "GeoSubContinent",
        "GeoMetro",
    ),
)
LEADS_FILE = DatasetFile(
    "Leads.csv",
    ("id", "atomid", "McId", "DatetimeCreatedShifted", "GoogleClientId", "ch_isFirst4ContactAttribution"),
    boolean_columns=("ch_isFirst4ContactAttribution",),
)
CONTACTS_FILE = DatasetFile(
    "Contacts.csv",
    (
        "id",
        "atomid",
        "McId",
        "DatetimeCreatedShifted",
        "GoogleClientId",
        "EntityCreatedWith",
        "ch_isFirst4ContactAttribution",
        "ch_isFirst",
    ),
    boolean_columns=("ch_isFirst4ContactAttribution", "ch_isFirst"),
)
CONTACTS2LEADS_FILE = DatasetFile("Contacts2Leads.csv", ("leadId", "contactId"))
TRANSACTIONS_FILE = DatasetFile(
    "Transactions.csv",
    ("Id", "atomid", "McId", "PaymentDatetimeShifted", "PaidSumOriginalCurrency", "ch_isFirstClientPaid"),
    numeric_columns=("PaidSumOriginalCurrency",),
    boolean_columns=("ch_isFirstClientPaid",),
)
SOURCE_DATA_FILE = DatasetFile(
    "SourceData.csv",
    ("Date", "AtomId", "Shows", "BudgetSpent", "Clicks"),
    numeric_columns=("Shows", "BudgetSpent", "Clicks"),
)
ATOMS_FILE = DatasetFile(
    "Atoms.csv",
    (
        "AtomId",
        "Name",
        "SourceName",
        "SourceGroupName",
        "GroupsOfSourceGroupName",
        "IsPaidName",
        "CampaignId",
        "AdsetId",
        "AdId",
    ),
)


def _load_records(data_dir: Path, prefix: str, dataset_file: DatasetFile, factory: Callable[[dict[str, Any]], Any]) -> tuple:
    frame: pl.DataFrame = read_input_csv(
        data_dir / f"{prefix}{dataset_file.suffix}",
        columns=dataset_file.columns,
        numeric_columns=dataset_file.numeric_columns,
        boolean_columns=dataset_file.boolean_columns,
    )
    return tuple(factory(row) for row in frame.iter_rows(named=True))


def load_marketing_dataset(data_dir: Path, prefix: str = "test") -> MarketingDataset:
    """Load all seven collections for ``prefix`` from ``data_dir``."""
    data_dir = Path(data_dir)
    log.info(f"Loading data from {data_dir} with prefix '{prefix}'")
    dataset = MarketingDataset(
        sessions=_load_records(data_dir, prefix, SESSIONS_FILE, Session.from_row),
        leads=_load_records(data_dir, prefix, LEADS_FILE, Lead.from_row),
        contacts=_load_records(data_dir, prefix, CONTACTS_FILE, Contact.from_row),
        contact2leads=_load_records(data_dir, prefix, CONTACTS2LEADS_FILE, Contact2Lead.from_row),
        transactions=_load_records(data_dir, prefix, TRANSACTIONS_FILE, Transaction.from_row),
        source_data=_load_records(data_dir, prefix, SOURCE_DATA_FILE, SourceData.from_row),
        atoms=_load_records(data_dir, prefix, ATOMS_FILE, Atom.from_row),
    )
    log.info(f"Data loaded: {dataset.counts()}")
    return dataset
