from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from analytics.data import FieldNames

# ============================================================
# CANONICAL SHEET COLUMNS PER DASHBOARD
# ============================================================
#
# `columns` are the headers a dashboard aggregates over; a sheet with data
# rows must carry one of the candidates for each (first non-empty wins per
# row). `extras` are read when present. `filters` map DashboardFilters
# attributes to the column they test.


@dataclass(frozen=True)
class DashboardSchema:
    name: str
    sheet_columns: str
    columns: Dict[str, FieldNames]
    filters: Dict[str, FieldNames] = field(default_factory=dict)
    extras: Dict[str, FieldNames] = field(default_factory=dict)


ADMISSION_TRENDS = DashboardSchema(
    name="admission-trends",
    sheet_columns="A:E",
    columns={
        "year": "Year",
        "program": "Program",
        "gender": "Gender",
        "category": "Category",
        "admitted": "Students Admitted",
    },
    filters={
        "year": "Year",
        "program": "Program",
        "category": "Category",
        "gender": "Gender",
        "academic_year": "Academic Year",
    },
)

ATTENDANCE_ANALYTICS = DashboardSchema(
    name="attendance-analytics",
    sheet_columns="A:E",
    columns={
        "course": "Course",
        "semester": "Semester",
        "attendance": "Attendance %",
    },
    filters={
        "program": "Program",
        "semester": "Semester",
        "course": "Course",
        "batch": "Batch",
        "academic_year": "Academic Year",
    },
)

RESULT_ANALYSIS = DashboardSchema(
    name="result-analysis",
    sheet_columns="A:F",
    columns={
        "program": "Program",
        "course": "Course",
        "marks": "Marks",
        "result": "Result",
    },
    filters={
        "program": "Program",
        "semester": "Semester",
        "course": "Course",
        "result": "Result",
        "batch": "Batch",
        "academic_year": "Academic Year",
    },
)

FEEDBACK_ANALYSIS = DashboardSchema(
    name="feedback-analysis",
    sheet_columns="A:E",
    columns={
        "faculty": "Faculty",
        "program": "Program",
        "rating": "Rating",
    },
    filters={
        "program": "Program",
        "faculty": "Faculty",
        "min_rating": "Rating",
    },
)

PLACEMENT_ANALYSIS = DashboardSchema(
    name="placement-analysis",
    sheet_columns="A:E",
    columns={
        "program": ("program", "Program"),
        "company": "Company",
        "package": "Package (LPA)",
        "status": "Status",
    },
    filters={
        "program": ("program", "Program"),
        "status": "Status",
        "batch": "Batch",
        "min_package": "Package (LPA)",
    },
)

PUBLICATIONS = DashboardSchema(
    name="publications",
    sheet_columns="A:G",
    columns={
        "year": "Year",
        "faculty": "Faculty",
        "department": "Department",
        "type": "Type",
        "citations": "Citations",
    },
    filters={
        "year": "Year",
        "faculty": "Faculty",
        "department": "Department",
        "type": "Type",
        "journal_name": "Name of the Journal",
        "journal_type": "Type of Journal",
    },
    extras={"indexed": "Indexed (Yes/No)"},
)

PATENTS = DashboardSchema(
    name="patents",
    sheet_columns="A:G",
    columns={
        "year": "Year",
        "department": "Department",
        "status": ("Status (Filed/Granted)", "Status"),
        "scope": "National/International",
        "type": "Type",
    },
    filters={
        "year": "Year",
        "faculty": "Faculty",
        "department": "Department",
        "type": "Type",
        "status": ("Status (Filed/Granted)", "Status"),
    },
)

COLLABORATIONS = DashboardSchema(
    name="collaborations",
    sheet_columns="A:E",
    columns={
        "year": "Year",
        "type": "Type",
        "funding": "Funding (INR)",
        "partner": "Partner",
    },
    filters={
        "year": "Year",
        "faculty": "Faculty",
        "type": "Type",
    },
)

ALL_SCHEMAS = {
    s.name: s
    for s in (
        ADMISSION_TRENDS,
        ATTENDANCE_ANALYTICS,
        RESULT_ANALYSIS,
        FEEDBACK_ANALYSIS,
        PLACEMENT_ANALYSIS,
        PUBLICATIONS,
        PATENTS,
        COLLABORATIONS,
    )
}
