from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

# Query-string models: field names are the query parameter names the front
# end sends. Unknown parameters are ignored. Thresholds stay strings so a
# non-numeric value is dropped by the filter layer instead of failing the request.


class AdmissionFiltersModel(BaseModel):
    year: Optional[str] = None
    program: Optional[str] = None
    category: Optional[str] = None
    gender: Optional[str] = None
    academicYear: Optional[str] = None


class AttendanceFiltersModel(BaseModel):
    program: Optional[str] = None
    semester: Optional[str] = None
    course: Optional[str] = None
    batch: Optional[str] = None
    academicYear: Optional[str] = None


class ResultFiltersModel(BaseModel):
    program: Optional[str] = None
    semester: Optional[str] = None
    course: Optional[str] = None
    result: Optional[str] = None
    batch: Optional[str] = None
    academicYear: Optional[str] = None


class FeedbackFiltersModel(BaseModel):
    program: Optional[str] = None
    faculty: Optional[str] = None
    minRating: Optional[str] = None


class PlacementFiltersModel(BaseModel):
    program: Optional[str] = None
    status: Optional[str] = None
    batch: Optional[str] = None
    minPackage: Optional[str] = None


class PublicationFiltersModel(BaseModel):
    year: Optional[str] = None
    faculty: Optional[str] = None
    department: Optional[str] = None
    type: Optional[str] = None
    journalName: Optional[str] = None
    journalType: Optional[str] = None


class PatentFiltersModel(BaseModel):
    year: Optional[str] = None
    faculty: Optional[str] = None
    department: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None


class CollaborationFiltersModel(BaseModel):
    year: Optional[str] = None
    faculty: Optional[str] = None
    type: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    message: str
