from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from analytics.aggregations import average_by, mean_of, rate_by, rows_equal_ci
from analytics.data import frame_records
from analytics.schema import RESULT_ANALYSIS


def compute_result_analysis(df: pd.DataFrame) -> Dict[str, Any]:
    c = RESULT_ANALYSIS.columns

    program_stats = rate_by(
        df,
        c["program"],
        c["result"],
        {"passPercentage": "pass", "failPercentage": "fail"},
        key="program",
        total_key="total",
    )
    course_marks = average_by(df, c["course"], c["marks"], key="course", value="averageMarks")
    failed = rows_equal_ci(df, c["result"], "fail")

    return {
        "programStats": program_stats,
        "courseWiseMarks": course_marks,
        "failedStudents": frame_records(failed),
        "summary": {
            "averagePassRate": mean_of(program_stats, "passPercentage"),
            "totalStudents": int(len(df)),
            "failedCount": int(len(failed)),
        },
    }
