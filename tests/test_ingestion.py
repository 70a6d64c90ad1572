"""Tests for semicolon CSV ingestion and the dataset repository."""

from __future__ import annotations

from pathlib import Path

import polars as pl
import pytest

from daily_brief.infrastructure.csv_repository import load_marketing_dataset
from daily_brief.ingestion import normalize_frame, read_input_csv


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_read_input_csv_parses_semicolons_and_comma_decimals(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "testSourceData.csv",
        "Date;AtomId;Shows;BudgetSpent;Clicks\n2024-03-14;a1;100;12,5;7\n2024-03-14;a2;n/a;;3\n",
    )

    frame = read_input_csv(path, ["Date", "AtomId", "Shows", "BudgetSpent", "Clicks"], ["Shows", "BudgetSpent", "Clicks"])

    assert frame.height == 2
    assert frame["BudgetSpent"].to_list() == [pytest.approx(12.5), 0.0]
    assert frame["Shows"].to_list() == [100.0, 0.0]
    assert frame["AtomId"].to_list() == ["a1", "a2"]


def test_read_input_csv_missing_file_returns_empty_frame(tmp_path: Path) -> None:
    frame = read_input_csv(tmp_path / "absent.csv", ["Id", "PaidSumOriginalCurrency"], ["PaidSumOriginalCurrency"])

    assert frame.height == 0
    assert set(frame.columns) == {"Id", "PaidSumOriginalCurrency"}


def test_read_input_csv_strips_bom_and_fills_missing_columns(tmp_path: Path) -> None:
    path = _write(tmp_path / "testLeads.csv", "\ufeffid;McId\nl1;c1\n")

    frame = read_input_csv(path, ["id", "McId", "ch_isFirst4ContactAttribution"], boolean_columns=["ch_isFirst4ContactAttribution"])

    assert frame.columns[:2] == ["id", "McId"]
    assert frame["ch_isFirst4ContactAttribution"].to_list() == [False]


def test_read_input_csv_header_only_file(tmp_path: Path) -> None:
    path = _write(tmp_path / "testAtoms.csv", "AtomId;SourceGroupName\n")

    frame = read_input_csv(path, ["AtomId", "SourceGroupName"])

    assert frame.height == 0


def test_normalize_frame_coerces_booleans() -> None:
    frame = normalize_frame(
        pl.DataFrame({"flag": ["true", "TRUE", "1", "0", None]}),
        columns=["flag"],
        boolean_columns=["flag"],
    )

    assert frame["flag"].to_list() == [True, True, True, False, False]


def test_load_marketing_dataset_reads_prefixed_files(tmp_path: Path) -> None:
    _write(
        tmp_path / "testSessions.csv",
        "id;Mcid;UserPseudoId;DatetimeShifted;DeviceCategory\n"
        "s1;c1;ga1;2024-03-14 10:00:00;desktop\n"
        "s2;;ga2;2024-03-14 11:00:00;mobile\n",
    )
    _write(
        tmp_path / "testTransactions.csv",
        "Id;McId;PaymentDatetimeShifted;PaidSumOriginalCurrency;ch_isFirstClientPaid\n"
        "t1;c1;2024-03-14 12:00:00;99,5;true\n",
    )
    _write(
        tmp_path / "testAtoms.csv",
        "AtomId;Name;SourceName;SourceGroupName;GroupsOfSourceGroupName;IsPaidName\n"
        "a1;Brand;Google;Paid Search;Search;Paid\n",
    )

    dataset = load_marketing_dataset(tmp_path, prefix="test")

    assert dataset.counts() == {
        "sessions": 2,
        "leads": 0,
        "contacts": 0,
        "contact2leads": 0,
        "transactions": 1,
        "source_data": 0,
        "atoms": 1,
    }
    assert dataset.sessions[1].client_id is None
    assert dataset.sessions[1].identity == "ga2"
    assert dataset.transactions[0].paid_amount == pytest.approx(99.5)
    assert dataset.transactions[0].is_first_client_payment is True
    assert dataset.atoms[0].is_paid is True
