import pytest

from analytics.config import Settings
from analytics.dashboards import DashboardService


SHEET_IDS = {
    "ADMISSION_TRENDS_SHEET_ID": "admissions-sheet",
    "ATTENDANCE_ANALYTICS_SHEET_ID": "attendance-sheet",
    "RESULT_ANALYSIS_SHEET_ID": "results-sheet",
    "FEEDBACK_ANALYSIS_SHEET_ID": "feedback-sheet",
    "PLACEMENT_ANALYSIS_SHEET_ID": "placement-sheet",
    "RESEARCH_SHEET_ID": "research-sheet",
}


class FakeFetcher:
    """In-memory RowFetcher keyed by (sheet id, range)."""

    def __init__(self, sheets=None, error=None):
        self.sheets = sheets or {}
        self.error = error
        self.calls = []

    def fetch_rows(self, sheet_id, range_spec):
        self.calls.append((sheet_id, range_spec))
        if self.error is not None:
            raise self.error
        return self.sheets.get((sheet_id, range_spec), [])


@pytest.fixture
def settings():
    return Settings.from_env(SHEET_IDS)


@pytest.fixture
def admission_rows():
    return [
        ["Year", "Program", "Gender", "Category", "Students Admitted"],
        ["2023", "CS", "M", "General", "50"],
        ["2023", "CS", "F", "General", "30"],
        ["2022", "CS", "M", "General", "40"],
    ]


@pytest.fixture
def attendance_rows():
    return [
        ["Semester", "Program", "Course", "Student Name", "Attendance %"],
        ["1", "CS", "DBMS", "Asha", "70"],
        ["1", "CS", "DBMS", "Ravi", "80"],
        ["2", "IT", "DBMS", "Meera", ""],
        ["2", "IT", "OS", "Karan", "90%"],
    ]


@pytest.fixture
def result_rows():
    return [
        ["Student Name", "Program", "Semester", "Course", "Marks", "Result"],
        ["Asha", "CS", "1", "Math", "80", "Pass"],
        ["Ravi", "CS", "1", "Math", "30", "Fail"],
        ["Meera", "CS", "2", "Physics", "70", "pass"],
        ["Karan", "CS", "2", "Physics", "", "Fail"],
        ["Neha", "IT", "2", "Math", "abc", "FAIL"],
    ]


@pytest.fixture
def feedback_rows():
    return [
        ["Student Name", "Program", "Faculty", "Rating", "Comments"],
        ["S1", "CS", "Dr. A", "5", "Great"],
        ["S2", "IT", "Dr. A", "4", ""],
        ["S3", "CS", "Dr. B", "2", "Too fast"],
        ["S4", "IT", "Dr. C", "", ""],
        ["S5", "CS", "Dr. D", "4.5", "Clear"],
        ["S6", "IT", "Dr. E", "3", ""],
    ]


@pytest.fixture
def placement_rows():
    return [
        ["Student Name", "program", "Company", "Package (LPA)", "Status"],
        ["Asha", "CS", "Acme", "4.5", "Placed"],
        ["Ravi", "CS", "Globex", "9.9", "placed"],
        ["Meera", "IT", "Acme", "12", "Placed"],
        ["Karan", "IT", "Initech", "22", "PLACED"],
        ["Neha", "IT", "", "", "Not Placed"],
    ]


@pytest.fixture
def publication_rows():
    return [
        ["Year", "Faculty", "Department", "Title", "Type", "Indexed (Yes/No)", "Citations"],
        ["2023", "Dr. A", "CSE", "T1", "Journal", "Yes", "10"],
        ["2022", "Dr. B", "ECE", "T2", "Conference", "No", "5"],
        ["2023", "Dr. A", "CSE", "T3", "", "yes", "3.7"],
        ["2021", "Dr. C", "CSE", "T4", "Journal", "No", ""],
    ]


@pytest.fixture
def patent_rows():
    return [
        ["Year", "Faculty", "Department", "Patent Title", "Type", "Status (Filed/Granted)", "National/International"],
        ["2022", "Dr. A", "CSE", "P1", "Utility", "Granted", "International"],
        ["2023", "Dr. B", "ECE", "P2", "Design", "Filed", "National"],
        ["2023", "Dr. C", "CSE", "P3"],
    ]


@pytest.fixture
def collaboration_rows():
    return [
        ["Year", "Faculty", "Partner", "Type", "Funding (INR)"],
        ["2023", "Dr. A", "IIT", "Industry", "500000"],
        ["2022", "Dr. B", "MIT", "Academic", "250000.50"],
        ["2023", "Dr. C", "IIT", "Industry", ""],
        ["2024", "Dr. A", "TCS", "", "100"],
    ]


@pytest.fixture
def make_service(settings):
    def _make(sheets=None, error=None):
        fetcher = FakeFetcher(sheets, error)
        return DashboardService(fetcher, settings), fetcher

    return _make
