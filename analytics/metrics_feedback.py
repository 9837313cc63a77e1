from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from analytics.aggregations import average_by, mean_of, threshold_rows
from analytics.schema import FEEDBACK_ANALYSIS

TOP_RATED_MIN = 4.0
LOW_RATED_BELOW = 3.0
TOP_RATED_CARDS = 6


def compute_feedback_analysis(df: pd.DataFrame) -> Dict[str, Any]:
    c = FEEDBACK_ANALYSIS.columns

    faculty_ratings = average_by(
        df,
        c["faculty"],
        c["rating"],
        key="faculty",
        value="averageRating",
        count_key="feedbackCount",
        sort_desc=True,
    )
    program_ratings = average_by(df, c["program"], c["rating"], key="program", value="averageRating")

    # faculty_ratings is already ranked, so the first cards are the best rated
    top_rated = threshold_rows(faculty_ratings, "averageRating", at_least=TOP_RATED_MIN)[:TOP_RATED_CARDS]
    low_rated = threshold_rows(faculty_ratings, "averageRating", below=LOW_RATED_BELOW)

    return {
        "facultyRatings": faculty_ratings,
        "programRatings": program_ratings,
        "topRatedFaculty": top_rated,
        "lowRatedFaculty": low_rated,
        "summary": {
            "overallRating": mean_of(faculty_ratings, "averageRating"),
            "totalFeedback": int(len(df)),
        },
    }
