from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from analytics.aggregations import sum_by
from analytics.schema import ADMISSION_TRENDS


def compute_admission_trends(df: pd.DataFrame) -> Dict[str, Any]:
    c = ADMISSION_TRENDS.columns
    admitted = c["admitted"]

    year_wise = sum_by(df, c["year"], admitted, key="year", value="admissions", integer=True)
    program_wise = sum_by(df, c["program"], admitted, key="program", value="admissions", integer=True)
    gender_wise = sum_by(df, c["gender"], admitted, integer=True)
    category_wise = sum_by(df, c["category"], admitted, integer=True)

    return {
        "yearWise": year_wise,
        "programWise": program_wise,
        "genderWise": gender_wise,
        "categoryWise": category_wise,
        "summary": {"totalAdmissions": int(sum(r["admissions"] for r in year_wise))},
    }
