from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from analytics.aggregations import count_by, group_keys, sum_by
from analytics.data import coerce_numeric, field_series, format_fixed, percentage
from analytics.schema import COLLABORATIONS, PATENTS, PUBLICATIONS

UNKNOWN = "Unknown"
TOP_FACULTY = 10
TOP_PARTNERS = 10


def _contains_ci(values: pd.Series, needle: str) -> int:
    return int(values.str.lower().str.contains(needle, regex=False).sum())


def top_faculty_publications(df: pd.DataFrame, *, top_n: int = TOP_FACULTY) -> List[Dict[str, Any]]:
    """Publications and citations per faculty, most published first.

    The department is the one on the faculty's first publication.
    """
    if df.empty:
        return []
    c = PUBLICATIONS.columns
    keys = group_keys(df, c["faculty"])
    frame = pd.DataFrame(
        {
            "department": field_series(df, c["department"]),
            "citations": coerce_numeric(field_series(df, c["citations"]), integer=True),
        },
        index=df.index,
    )
    grouped = (
        frame.groupby(keys, sort=False)
        .agg(department=("department", "first"), publications=("department", "size"), citations=("citations", "sum"))
        .rename_axis("name")
        .reset_index()
        .sort_values("publications", ascending=False, kind="stable")
        .head(top_n)
    )
    return [
        {
            "name": r["name"],
            "department": r["department"],
            "publications": int(r["publications"]),
            "citations": int(r["citations"]),
        }
        for r in grouped.to_dict(orient="records")
    ]


def compute_publications(df: pd.DataFrame) -> Dict[str, Any]:
    c = PUBLICATIONS.columns
    total = int(len(df))
    indexed = int((field_series(df, PUBLICATIONS.extras["indexed"]).str.lower() == "yes").sum()) if total else 0
    citations = int(coerce_numeric(field_series(df, c["citations"]), integer=True).sum()) if total else 0

    return {
        "yearWise": count_by(df, c["year"], key="year", value="count", sort_keys=True),
        "departmentWise": count_by(df, c["department"], sort_desc=True),
        "typeWise": count_by(df, c["type"], missing_label=UNKNOWN),
        "topFaculty": top_faculty_publications(df),
        "summary": {
            "totalPublications": total,
            "indexedCount": indexed,
            "indexedPercentage": format_fixed(percentage(indexed, total), 1),
            "totalCitations": citations,
        },
    }


def compute_patents(df: pd.DataFrame) -> Dict[str, Any]:
    c = PATENTS.columns
    total = int(len(df))
    granted = _contains_ci(field_series(df, c["status"]), "granted") if total else 0
    international = _contains_ci(field_series(df, c["scope"]), "international") if total else 0

    return {
        "yearWise": count_by(df, c["year"], key="year", value="count", sort_keys=True),
        "departmentWise": count_by(df, c["department"], sort_desc=True),
        "statusWise": count_by(df, c["status"], missing_label=UNKNOWN),
        "scopeWise": count_by(df, c["scope"], missing_label=UNKNOWN),
        "typeWise": count_by(df, c["type"], missing_label=UNKNOWN),
        "summary": {
            "totalPatents": total,
            "grantedCount": granted,
            "filedCount": total - granted,
            "internationalCount": international,
            "internationalPercentage": format_fixed(percentage(international, total), 1),
        },
    }


def compute_collaborations(df: pd.DataFrame) -> Dict[str, Any]:
    c = COLLABORATIONS.columns
    total = int(len(df))
    funding = float(coerce_numeric(field_series(df, c["funding"])).sum()) if total else 0.0

    return {
        "yearWise": count_by(df, c["year"], key="year", value="count", sort_keys=True),
        "typeWise": count_by(df, c["type"], missing_label=UNKNOWN),
        "fundingByType": sum_by(df, c["type"], c["funding"], missing_label=UNKNOWN, sort_desc=True),
        "topPartners": count_by(df, c["partner"], sort_desc=True, top_n=TOP_PARTNERS),
        "summary": {
            "totalCollaborations": total,
            "totalFunding": funding,
            "averageFunding": format_fixed(funding / total if total else 0.0),
            "uniquePartners": int(field_series(df, c["partner"]).nunique()) if total else 0,
        },
    }
