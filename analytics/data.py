from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Sequence, Union

import pandas as pd


Record = Dict[str, str]
FieldNames = Union[str, Sequence[str]]

# Leading-number parsing: "85%" -> 85, " 12.5 LPA" -> 12.5, "abc" -> NaN.
DECIMAL_PREFIX = r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
INTEGER_PREFIX = r"^\s*([+-]?\d+)"


class MissingFieldError(LookupError):
    """A field a dashboard aggregates over is absent from the sheet's header row."""

    def __init__(self, dashboard: str, field_name: str, candidates: Sequence[str], headers: Sequence[str]):
        self.dashboard = dashboard
        self.field_name = field_name
        self.candidates = list(candidates)
        self.headers = list(headers)
        expected = " or ".join(repr(c) for c in self.candidates)
        super().__init__(
            f"{dashboard}: expected column {expected} for '{field_name}' but the header row has {self.headers}"
        )

    def __str__(self) -> str:
        return str(self.args[0])


@dataclass(frozen=True)
class SheetTable:
    headers: List[str] = field(default_factory=list)
    records: List[Record] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)


def _cell(row: Sequence[object], index: int) -> str:
    if index >= len(row):
        return ""
    value = row[index]
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def rows_to_records(rows: Optional[Sequence[Sequence[object]]]) -> SheetTable:
    """Turn sheet rows into records keyed by the (verbatim) header row.

    Row 0 is the header row. Cells beyond a short row's end become "".
    An empty sheet or a header-only sheet yields no records.
    """
    if not rows:
        return SheetTable()
    headers = [_cell(rows[0], i) for i in range(len(rows[0]))]
    records: List[Record] = []
    for row in rows[1:]:
        record: Record = {}
        for index, header in enumerate(headers):
            record[header] = _cell(row, index)
        records.append(record)
    return SheetTable(headers=headers, records=records)


def _as_names(names: FieldNames) -> List[str]:
    return [names] if isinstance(names, str) else list(names)


def field_value(record: Record, names: FieldNames, default: str = "") -> str:
    """First non-empty value among the candidate field names, else ``default``."""
    for name in _as_names(names):
        value = record.get(name, "")
        if value:
            return value
    return default


def records_frame(table: SheetTable) -> pd.DataFrame:
    columns = list(dict.fromkeys(table.headers))
    if not table.records:
        return pd.DataFrame({c: pd.Series(dtype=object) for c in columns})
    return pd.DataFrame.from_records(table.records, columns=columns).astype(object)


def frame_records(df: pd.DataFrame) -> List[Record]:
    return df.to_dict(orient="records")


def field_series(df: pd.DataFrame, names: FieldNames, default: str = "") -> pd.Series:
    """Per-row first non-empty value across ``names`` (absent columns count as empty)."""
    out = pd.Series([""] * len(df), index=df.index, dtype=object)
    for name in reversed(_as_names(names)):
        if name not in df.columns:
            continue
        col = df[name].astype(object)
        out = col.where(col != "", out)
    if default:
        out = out.where(out != "", default)
    return out


def require_fields(
    dashboard: str, table: SheetTable, required: Dict[str, FieldNames]
) -> None:
    """Raise MissingFieldError when a required field has no matching header.

    A sheet without data rows is accepted as-is: an empty dashboard is not an error.
    """
    if not table.records:
        return
    present = set(table.headers)
    for field_name, names in required.items():
        candidates = _as_names(names)
        if not any(c in present for c in candidates):
            raise MissingFieldError(dashboard, field_name, candidates, table.headers)


def parse_numeric(values: pd.Series, *, integer: bool = False) -> pd.Series:
    """Leading-number parse of string cells; NaN where nothing parses."""
    if values.empty:
        return pd.Series(dtype=float, index=values.index)
    pattern = INTEGER_PREFIX if integer else DECIMAL_PREFIX
    extracted = values.astype(str).str.extract(pattern, expand=False)
    parsed = pd.to_numeric(extracted, errors="coerce").astype(float)
    return parsed.where(~parsed.isin([math.inf, -math.inf]))


def coerce_numeric(values: pd.Series, *, integer: bool = False) -> pd.Series:
    """Same as parse_numeric but malformed or missing cells count as 0."""
    return parse_numeric(values, integer=integer).fillna(0.0)


def parse_threshold(value: object) -> Optional[float]:
    if value is None:
        return None
    parsed = parse_numeric(pd.Series([str(value)])).iloc[0]
    if pd.isna(parsed):
        return None
    return float(parsed)


def round_half_up(value: object, ndigits: int = 2) -> float:
    """Round the exact binary value half away from zero (like JavaScript's toFixed)."""
    if value is None or pd.isna(value):
        return 0.0
    q = Decimal(10) ** -ndigits
    out = float(Decimal(float(value)).quantize(q, rounding=ROUND_HALF_UP))
    return out + 0.0  # -0.0 -> 0.0


def format_fixed(value: object, ndigits: int = 2) -> str:
    return f"{round_half_up(value, ndigits):.{ndigits}f}"


def percentage(part: float, whole: float) -> float:
    if not whole:
        return 0.0
    return min(100.0, max(0.0, 100.0 * float(part) / float(whole)))

