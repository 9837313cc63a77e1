"""Group-by summarizers shared by every dashboard.

Each summarizer takes a records frame (all cells are strings) and one or more
column names, and returns JSON-ready rows. Group keys are the raw cell values
(no trimming or case folding) and come out in first-seen order unless a sort
is requested. Sorts are stable so equal metrics keep first-seen order.
Numeric fields go through ``coerce_numeric``: malformed or missing cells
count as 0. An empty frame always yields an empty list.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from analytics.data import FieldNames, coerce_numeric, field_series, format_fixed, percentage, round_half_up

Rows = List[Dict[str, Any]]


def group_keys(df: pd.DataFrame, group: FieldNames, *, missing_label: Optional[str] = None) -> pd.Series:
    """Group key per row. Empty values stay "" unless ``missing_label`` is given."""
    return field_series(df, group, default=missing_label or "")


def _finish(
    frame: pd.DataFrame,
    *,
    key: str,
    sort_by: Optional[str] = None,
    sort_keys: bool = False,
    top_n: Optional[int] = None,
) -> Rows:
    if sort_keys:
        frame = frame.sort_values(key, kind="stable")
    elif sort_by is not None:
        frame = frame.sort_values(sort_by, ascending=False, kind="stable")
    if top_n is not None:
        frame = frame.head(max(0, int(top_n)))
    return frame.to_dict(orient="records")


def count_by(
    df: pd.DataFrame,
    group: FieldNames,
    *,
    key: str = "name",
    value: str = "value",
    missing_label: Optional[str] = None,
    sort_desc: bool = False,
    sort_keys: bool = False,
    top_n: Optional[int] = None,
) -> Rows:
    """Number of records per distinct group value."""
    if df.empty:
        return []
    keys = group_keys(df, group, missing_label=missing_label)
    counts = keys.groupby(keys, sort=False).size()
    frame = pd.DataFrame({key: counts.index.astype(object), value: counts.to_numpy().astype(int)})
    return _finish(frame, key=key, sort_by=value if sort_desc else None, sort_keys=sort_keys, top_n=top_n)


def sum_by(
    df: pd.DataFrame,
    group: FieldNames,
    value_field: FieldNames,
    *,
    key: str = "name",
    value: str = "value",
    integer: bool = False,
    missing_label: Optional[str] = None,
    sort_desc: bool = False,
    top_n: Optional[int] = None,
) -> Rows:
    """Sum of a coerced numeric field per group.

    With ``integer`` the cells are read as leading integers ("12.7" -> 12)
    and the sums come out as ints.
    """
    if df.empty:
        return []
    keys = group_keys(df, group, missing_label=missing_label)
    values = coerce_numeric(field_series(df, value_field), integer=integer)
    sums = values.groupby(keys, sort=False).sum()
    totals = sums.to_numpy().astype(int) if integer else sums.to_numpy().astype(float)
    frame = pd.DataFrame({key: sums.index.astype(object), value: totals})
    return _finish(frame, key=key, sort_by=value if sort_desc else None, top_n=top_n)


def average_by(
    df: pd.DataFrame,
    group: FieldNames,
    value_field: FieldNames,
    *,
    key: str,
    value: str,
    count_key: Optional[str] = None,
    sort_desc: bool = False,
    top_n: Optional[int] = None,
) -> Rows:
    """``total / count`` per group as a 2-decimal string, optionally with the count.

    A descending sort orders by the rounded average, i.e. by what the client sees.
    """
    if df.empty:
        return []
    keys = group_keys(df, group)
    values = coerce_numeric(field_series(df, value_field))
    grouped = values.groupby(keys, sort=False).agg(["sum", "size"])
    averages = [round_half_up(t / c) for t, c in zip(grouped["sum"], grouped["size"])]
    frame = pd.DataFrame({key: grouped.index.astype(object), value: [format_fixed(a) for a in averages]})
    if count_key:
        frame[count_key] = grouped["size"].to_numpy().astype(int)
    frame["_rank"] = averages
    rows = _finish(frame, key=key, sort_by="_rank" if sort_desc else None, top_n=top_n)
    for row in rows:
        row.pop("_rank")
    return rows


def rate_by(
    df: pd.DataFrame,
    group: FieldNames,
    status_field: FieldNames,
    rates: Mapping[str, str],
    *,
    key: str,
    counts: Optional[Mapping[str, str]] = None,
    total_key: str = "total",
) -> Rows:
    """Share of records per group whose status equals a target (case-insensitive).

    ``rates`` maps output field -> target value, rendered as a 2-decimal
    percentage; ``counts`` maps output field -> target value, rendered as a
    plain count of matches. The group size goes under ``total_key``.
    """
    if df.empty:
        return []
    counts = counts or {}
    keys = group_keys(df, group)
    status = field_series(df, status_field).str.lower()
    targets = {**rates, **counts}
    flags = pd.DataFrame({name: (status == target.lower()).astype(int) for name, target in targets.items()}, index=df.index)
    matched = flags.groupby(keys, sort=False).sum()
    totals = keys.groupby(keys, sort=False).size()

    rows: Rows = []
    for group_value, total in totals.items():
        row: Dict[str, Any] = {key: group_value}
        for name in rates:
            row[name] = format_fixed(percentage(matched.at[group_value, name], total))
        for name in counts:
            row[name] = int(matched.at[group_value, name])
        row[total_key] = int(total)
        rows.append(row)
    return rows


def rows_below(df: pd.DataFrame, value_field: FieldNames, cutoff: float) -> pd.DataFrame:
    """Records whose coerced field is strictly below ``cutoff`` (missing counts as 0)."""
    return df[coerce_numeric(field_series(df, value_field)) < cutoff]


def rows_equal_ci(df: pd.DataFrame, value_field: FieldNames, target: str) -> pd.DataFrame:
    """Records whose field equals ``target`` ignoring case."""
    return df[field_series(df, value_field).str.lower() == target.lower()]


def bucket_counts(
    values: pd.Series,
    edges: Sequence[float],
    labels: Sequence[str],
    *,
    key: str = "range",
    value: str = "count",
) -> Rows:
    """Count values into half-open ranges ``[edges[i], edges[i+1])``; every label is emitted."""
    bins = [-math.inf, *edges[1:-1], math.inf]
    buckets = pd.cut(values.astype(float), bins=bins, right=False, labels=list(labels))
    tally = buckets.value_counts().reindex(list(labels), fill_value=0)
    return [{key: label, value: int(n)} for label, n in tally.items()]


def threshold_rows(rows: Rows, metric: str, *, at_least: Optional[float] = None, below: Optional[float] = None) -> Rows:
    """Result rows whose (possibly string-formatted) metric passes the threshold."""
    out = []
    for row in rows:
        v = float(row[metric])
        if at_least is not None and v < at_least:
            continue
        if below is not None and v >= below:
            continue
        out.append(row)
    return out


def mean_of(rows: Rows, metric: str) -> str:
    """Unweighted mean of a per-group metric, 2 decimals; "0.00" for no rows."""
    if not rows:
        return format_fixed(0)
    return format_fixed(sum(float(r[metric]) for r in rows) / len(rows))
