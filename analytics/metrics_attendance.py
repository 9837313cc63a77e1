from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from analytics.aggregations import average_by, mean_of, rows_below
from analytics.data import frame_records
from analytics.schema import ATTENDANCE_ANALYTICS

LOW_ATTENDANCE_CUTOFF = 75.0


def compute_attendance_analytics(df: pd.DataFrame) -> Dict[str, Any]:
    c = ATTENDANCE_ANALYTICS.columns

    course_wise = average_by(df, c["course"], c["attendance"], key="course", value="averageAttendance")
    semester_wise = average_by(df, c["semester"], c["attendance"], key="semester", value="averageAttendance")
    # blank/malformed attendance reads as 0, so those students are listed as low
    low = rows_below(df, c["attendance"], LOW_ATTENDANCE_CUTOFF)

    return {
        "courseWise": course_wise,
        "lowAttendance": frame_records(low),
        "semesterWise": semester_wise,
        "summary": {
            "averageAttendance": mean_of(course_wise, "averageAttendance"),
            "lowAttendanceCount": int(len(low)),
            "totalStudents": int(len(df)),
        },
    }
