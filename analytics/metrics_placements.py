from __future__ import annotations

import math
from typing import Any, Dict

import pandas as pd

from analytics.aggregations import bucket_counts, count_by, rate_by, rows_equal_ci
from analytics.data import coerce_numeric, field_series, format_fixed, frame_records, percentage
from analytics.schema import PLACEMENT_ANALYSIS

PLACED = "placed"
PACKAGE_EDGES = (0.0, 5.0, 10.0, 15.0, 20.0, math.inf)
PACKAGE_LABELS = ("0-5 LPA", "5-10 LPA", "10-15 LPA", "15-20 LPA", "20+ LPA")


def compute_placement_analysis(df: pd.DataFrame) -> Dict[str, Any]:
    c = PLACEMENT_ANALYSIS.columns

    placed = rows_equal_ci(df, c["status"], PLACED)
    program_wise = rate_by(
        df,
        c["program"],
        c["status"],
        {"placementRate": PLACED},
        key="program",
        counts={"placedCount": PLACED},
        total_key="totalCount",
    )
    company_wise = count_by(placed, c["company"], key="company", value="studentsPlaced", sort_desc=True)

    packages = coerce_numeric(field_series(placed, c["package"]))
    package_ranges = bucket_counts(packages, PACKAGE_EDGES, PACKAGE_LABELS)
    avg_package = float(packages.mean()) if not packages.empty else 0.0
    max_package = float(packages.max()) if not packages.empty else 0.0

    return {
        "placedStudents": frame_records(placed),
        "programWisePlacements": program_wise,
        "companyWise": company_wise,
        "packageRanges": package_ranges,
        "avgPackage": format_fixed(avg_package),
        "maxPackage": format_fixed(max_package),
        "placementRate": format_fixed(percentage(len(placed), len(df))),
        "summary": {"totalStudents": int(len(df)), "placedCount": int(len(placed))},
    }
