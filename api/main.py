from __future__ import annotations

import logging
import math
from typing import Annotated

import numpy as np
import pandas as pd
from fastapi import APIRouter, Depends, FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from analytics.config import Settings
from analytics.dashboards import DashboardService
from analytics.sheets import GoogleSheetsClient
from api.schemas import (
    AdmissionFiltersModel,
    AttendanceFiltersModel,
    CollaborationFiltersModel,
    FeedbackFiltersModel,
    HealthResponse,
    PatentFiltersModel,
    PlacementFiltersModel,
    PublicationFiltersModel,
    ResultFiltersModel,
)


settings = Settings.from_env()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(title="University Analytics Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_service = DashboardService(GoogleSheetsClient(settings.credentials_path), settings)


def get_dashboard_service() -> DashboardService:
    return _service


Service = Annotated[DashboardService, Depends(get_dashboard_service)]


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


def _dashboard(name: str, filters: BaseModel, service: DashboardService) -> JSONResponse:
    try:
        data = service.build(name, filters.model_dump(exclude_none=True))
        return _json({"success": True, "data": data})
    except Exception as exc:
        logger.exception("%s failed", name)
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})


router = APIRouter(prefix="/api/dashboard", tags=["Dashboards"])


@router.get("/admission-trends")
def admission_trends(filters: Annotated[AdmissionFiltersModel, Query()], service: Service):
    return _dashboard("admission-trends", filters, service)


@router.get("/attendance-analytics")
def attendance_analytics(filters: Annotated[AttendanceFiltersModel, Query()], service: Service):
    return _dashboard("attendance-analytics", filters, service)


@router.get("/result-analysis")
def result_analysis(filters: Annotated[ResultFiltersModel, Query()], service: Service):
    return _dashboard("result-analysis", filters, service)


@router.get("/feedback-analysis")
def feedback_analysis(filters: Annotated[FeedbackFiltersModel, Query()], service: Service):
    return _dashboard("feedback-analysis", filters, service)


@router.get("/placement-analysis")
def placement_analysis(filters: Annotated[PlacementFiltersModel, Query()], service: Service):
    return _dashboard("placement-analysis", filters, service)


@router.get("/research/publications")
def publications(filters: Annotated[PublicationFiltersModel, Query()], service: Service):
    return _dashboard("publications", filters, service)


@router.get("/research/patents")
def patents(filters: Annotated[PatentFiltersModel, Query()], service: Service):
    return _dashboard("patents", filters, service)


@router.get("/research/collaborations")
def collaborations(filters: Annotated[CollaborationFiltersModel, Query()], service: Service):
    return _dashboard("collaborations", filters, service)


app.include_router(router)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"status": "OK", "message": "Server is running"}


def run() -> None:
    import uvicorn

    uvicorn.run("api.main:app", host="0.0.0.0", port=settings.port)
