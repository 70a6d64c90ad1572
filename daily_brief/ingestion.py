"""Semicolon CSV ingestion with Polars-side type normalization."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Sequence

import polars as pl

from daily_brief.errors import BriefIngestError
from daily_brief.utils.logger import log

CSV_SEPARATOR = ";"
TRUE_LITERALS: list[str] = ["true", "1"]


def _normalize_headers(raw_headers: Sequence[Any]) -> list[str]:
    headers: list[str] = []
    seen: dict[str, int] = {}
    for idx, value in enumerate(raw_headers):
        text = str(value).lstrip("\ufeff").strip() if value not in (None, "") else ""
        base = text or f"column_{idx + 1}"
        count = seen.get(base, 0)
        name = base if count == 0 else f"{base}_{count + 1}"
        seen[base] = count + 1
        headers.append(name)
    return headers


def _text_expr(column_name: str) -> pl.Expr:
    return pl.col(column_name).cast(pl.Utf8, strict=False).str.strip_chars()


def _number_parsed_expr(column_name: str) -> pl.Expr:
    # Only the first comma is a decimal separator; "1,234.5" stays unparseable.
    return _text_expr(column_name).str.replace(",", ".", literal=True).cast(pl.Float64, strict=False)


def _number_expr(column_name: str) -> pl.Expr:
    parsed = _number_parsed_expr(column_name)
    return pl.when(parsed.is_finite()).then(parsed).otherwise(pl.lit(0.0)).alias(column_name)


def _number_parse_error_expr(column_name: str) -> pl.Expr:
    text_expr = _text_expr(column_name)
    parsed_expr = _number_parsed_expr(column_name)
    return (
        (text_expr.is_not_null() & (text_expr != "") & parsed_expr.is_null())
        .cast(pl.UInt32)
        .sum()
        .alias(column_name)
    )


def _bool_expr(column_name: str) -> pl.Expr:
    return (
        _text_expr(column_name)
        .str.to_lowercase()
        .is_in(TRUE_LITERALS)
        .fill_null(False)
        .alias(column_name)
    )


def _report_parse_errors(df: pl.DataFrame, numeric_columns: Sequence[str], context: str) -> Dict[str, int]:
    targets = [column for column in numeric_columns if column in df.columns]
    if df.is_empty() or not targets:
        return {}
    counts = df.select([_number_parse_error_expr(column) for column in targets]).row(0, named=True)
    errors = {column: int(count or 0) for column, count in counts.items() if count}
    if errors:
        log.warning(f"{context}: unparseable numeric values defaulted to 0 {errors}")
    return errors


def normalize_frame(
    df: pl.DataFrame,
    columns: Sequence[str],
    numeric_columns: Sequence[str] = (),
    boolean_columns: Sequence[str] = (),
    context: str = "frame",
) -> pl.DataFrame:
    """Ensure every expected column exists and coerce numeric/boolean columns."""
    if df.width == 0:
        df = pl.DataFrame(schema={column: pl.Utf8 for column in columns})
    df = df.rename(dict(zip(df.columns, _normalize_headers(df.columns))))
    missing = [column for column in columns if column not in df.columns]
    if missing:
        log.debug(f"{context}: missing columns filled with nulls {missing}")
        df = df.with_columns([pl.lit(None, dtype=pl.Utf8).alias(column) for column in missing])

    _report_parse_errors(df, numeric_columns, context)
    exprs = [_number_expr(column) for column in numeric_columns] + [_bool_expr(column) for column in boolean_columns]
    if exprs:
        df = df.with_columns(exprs)
    return df


def read_input_csv(
    path: str | Path,
    columns: Sequence[str],
    numeric_columns: Sequence[str] = (),
    boolean_columns: Sequence[str] = (),
) -> pl.DataFrame:
    """Read one semicolon CSV. A missing file yields an empty frame with the expected columns."""
    csv_path = Path(path)
    if not csv_path.exists():
        log.warning(f"File not found: {csv_path}")
        empty = pl.DataFrame(schema={column: pl.Utf8 for column in columns})
        return normalize_frame(empty, columns, numeric_columns, boolean_columns, context=csv_path.name)

    try:
        raw_df = pl.read_csv(
            csv_path,
            separator=CSV_SEPARATOR,
            infer_schema_length=0,
            raise_if_empty=False,
            truncate_ragged_lines=True,
            encoding="utf8-lossy",
        )
    except (OSError, pl.exceptions.PolarsError) as exc:
        raise BriefIngestError(f"Failed to read {csv_path}: {exc}") from exc

    return normalize_frame(raw_df, columns, numeric_columns, boolean_columns, context=csv_path.name)
