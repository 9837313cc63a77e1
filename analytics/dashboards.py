from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Union

import pandas as pd

from analytics.config import Settings
from analytics.data import frame_records, records_frame, require_fields, rows_to_records
from analytics.filters import DashboardFilters, active_filters, apply_filters, normalize_filters
from analytics.metrics_admissions import compute_admission_trends
from analytics.metrics_attendance import compute_attendance_analytics
from analytics.metrics_feedback import compute_feedback_analysis
from analytics.metrics_placements import compute_placement_analysis
from analytics.metrics_research import compute_collaborations, compute_patents, compute_publications
from analytics.metrics_results import compute_result_analysis
from analytics.schema import (
    ADMISSION_TRENDS,
    ATTENDANCE_ANALYTICS,
    COLLABORATIONS,
    FEEDBACK_ANALYSIS,
    PATENTS,
    PLACEMENT_ANALYSIS,
    PUBLICATIONS,
    RESULT_ANALYSIS,
    DashboardSchema,
)
from analytics.sheets import RowFetcher


logger = logging.getLogger(__name__)

Rows = Sequence[Sequence[object]]
FilterInput = Union[DashboardFilters, Mapping[str, Any], None]


class UnknownDashboardError(KeyError):
    def __str__(self) -> str:
        return f"Unknown dashboard: {self.args[0]}"


@dataclass(frozen=True)
class Dashboard:
    schema: DashboardSchema
    compute: Callable[[pd.DataFrame], Dict[str, Any]]

    @property
    def name(self) -> str:
        return self.schema.name


DASHBOARDS: Dict[str, Dashboard] = {
    d.name: d
    for d in (
        Dashboard(ADMISSION_TRENDS, compute_admission_trends),
        Dashboard(ATTENDANCE_ANALYTICS, compute_attendance_analytics),
        Dashboard(RESULT_ANALYSIS, compute_result_analysis),
        Dashboard(FEEDBACK_ANALYSIS, compute_feedback_analysis),
        Dashboard(PLACEMENT_ANALYSIS, compute_placement_analysis),
        Dashboard(PUBLICATIONS, compute_publications),
        Dashboard(PATENTS, compute_patents),
        Dashboard(COLLABORATIONS, compute_collaborations),
    )
}


def get_dashboard(name: str) -> Dashboard:
    try:
        return DASHBOARDS[name]
    except KeyError:
        raise UnknownDashboardError(name) from None


def build_dashboard(name: str, rows: Optional[Rows], filters: FilterInput = None) -> Dict[str, Any]:
    """Normalize sheet rows, filter them and assemble one dashboard payload.

    The payload holds the dashboard's aggregates plus ``filters`` (the options
    that were applied) and ``raw`` (the filtered records).
    """
    dashboard = get_dashboard(name)
    table = rows_to_records(rows)
    require_fields(name, table, dashboard.schema.columns)

    f = filters if isinstance(filters, DashboardFilters) else normalize_filters(filters)
    df = apply_filters(records_frame(table), f, dashboard.schema.filters)

    payload = dashboard.compute(df)
    payload["filters"] = active_filters(f, dashboard.schema.filters)
    payload["raw"] = frame_records(df)
    return payload


build_admission_trends = partial(build_dashboard, ADMISSION_TRENDS.name)
build_attendance_analytics = partial(build_dashboard, ATTENDANCE_ANALYTICS.name)
build_result_analysis = partial(build_dashboard, RESULT_ANALYSIS.name)
build_feedback_analysis = partial(build_dashboard, FEEDBACK_ANALYSIS.name)
build_placement_analysis = partial(build_dashboard, PLACEMENT_ANALYSIS.name)
build_publications = partial(build_dashboard, PUBLICATIONS.name)
build_patents = partial(build_dashboard, PATENTS.name)
build_collaborations = partial(build_dashboard, COLLABORATIONS.name)


class DashboardService:
    """Fetches a dashboard's sheet and builds its payload on every call.

    Fetch and configuration errors propagate unchanged; nothing is cached.
    """

    def __init__(self, fetcher: RowFetcher, settings: Settings):
        self.fetcher = fetcher
        self.settings = settings

    def build(self, name: str, filters: FilterInput = None) -> Dict[str, Any]:
        get_dashboard(name)
        source = self.settings.source_for(name)
        rows = self.fetcher.fetch_rows(source.sheet_id, source.range)
        payload = build_dashboard(name, rows, filters)
        logger.debug("Built %s from %d rows (%d after filters)", name, max(len(rows) - 1, 0), len(payload["raw"]))
        return payload
