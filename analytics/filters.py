from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

import pandas as pd

from analytics.data import FieldNames, field_series, parse_numeric, parse_threshold


logger = logging.getLogger(__name__)

# query-string name -> DashboardFilters attribute
OPTION_NAMES: Dict[str, str] = {
    "program": "program",
    "category": "category",
    "year": "year",
    "status": "status",
    "faculty": "faculty",
    "department": "department",
    "type": "type",
    "semester": "semester",
    "course": "course",
    "gender": "gender",
    "batch": "batch",
    "academicYear": "academic_year",
    "result": "result",
    "journalName": "journal_name",
    "journalType": "journal_type",
    "minRating": "min_rating",
    "minPackage": "min_package",
}
THRESHOLD_OPTIONS = frozenset({"min_rating", "min_package"})


@dataclass(frozen=True)
class DashboardFilters:
    program: str = ""
    category: str = ""
    year: str = ""
    status: str = ""
    faculty: str = ""
    department: str = ""
    type: str = ""
    semester: str = ""
    course: str = ""
    gender: str = ""
    batch: str = ""
    academic_year: str = ""
    result: str = ""
    journal_name: str = ""
    journal_type: str = ""
    min_rating: Optional[float] = None
    min_package: Optional[float] = None

    def is_set(self, option: str) -> bool:
        value = getattr(self, option)
        return value is not None and value != ""


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def normalize_filters(raw: Optional[Mapping[str, Any]]) -> DashboardFilters:
    """Build DashboardFilters from query options; unknown names are ignored.

    Both camelCase query names and attribute names are accepted. A threshold
    that is not a number is dropped.
    """
    raw = raw or {}
    known = {f.name for f in fields(DashboardFilters)}
    values: Dict[str, Any] = {}
    for key, value in raw.items():
        attr = OPTION_NAMES.get(key, key if key in known else None)
        if attr is None:
            continue
        if attr in THRESHOLD_OPTIONS:
            if value is None or value == "":
                continue
            threshold = parse_threshold(value)
            if threshold is None:
                logger.warning("Ignoring non-numeric %s=%r", key, value)
                continue
            values[attr] = threshold
        else:
            values[attr] = _as_str(value)
    return DashboardFilters(**values)


def apply_filters(df: pd.DataFrame, filters: DashboardFilters, options: Mapping[str, FieldNames]) -> pd.DataFrame:
    """Keep rows satisfying every provided option the dashboard recognizes.

    ``options`` maps a DashboardFilters attribute to the column(s) it tests.
    Equality is exact and case-sensitive. Thresholds keep rows whose field
    parses to a number >= the threshold; unparseable fields never match.
    """
    mask = pd.Series(True, index=df.index)
    for option, names in options.items():
        if not filters.is_set(option):
            continue
        values = field_series(df, names)
        if option in THRESHOLD_OPTIONS:
            mask &= parse_numeric(values) >= getattr(filters, option)
        else:
            mask &= values == getattr(filters, option)
    out = df[mask]
    if len(out) != len(df):
        logger.debug("Filters kept %d of %d rows", len(out), len(df))
    return out


def active_filters(filters: DashboardFilters, options: Mapping[str, FieldNames]) -> Dict[str, Any]:
    """The applied options, keyed by query name (for echoing back to the client)."""
    query_names = {attr: name for name, attr in OPTION_NAMES.items()}
    return {query_names[o]: getattr(filters, o) for o in options if filters.is_set(o)}
