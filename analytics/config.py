from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from dotenv import load_dotenv

from analytics.schema import ALL_SCHEMAS

DEFAULT_CREDENTIALS_PATH = "./credentials.json"
DEFAULT_PORT = 5000

# dashboard -> (sheet id variable, sheet name variable, default sheet name)
SHEET_ENV: Dict[str, Tuple[str, str, str]] = {
    "admission-trends": ("ADMISSION_TRENDS_SHEET_ID", "ADMISSION_TRENDS_SHEET_NAME", "Sheet1"),
    "attendance-analytics": ("ATTENDANCE_ANALYTICS_SHEET_ID", "ATTENDANCE_ANALYTICS_SHEET_NAME", "Sheet1"),
    "result-analysis": ("RESULT_ANALYSIS_SHEET_ID", "RESULT_ANALYSIS_SHEET_NAME", "Sheet1"),
    "feedback-analysis": ("FEEDBACK_ANALYSIS_SHEET_ID", "FEEDBACK_ANALYSIS_SHEET_NAME", "Sheet1"),
    "placement-analysis": ("PLACEMENT_ANALYSIS_SHEET_ID", "PLACEMENT_ANALYSIS_SHEET_NAME", "Sheet1"),
    "publications": ("RESEARCH_SHEET_ID", "PUBLICATIONS_SHEET_NAME", "Publication"),
    "patents": ("RESEARCH_SHEET_ID", "PATENTS_SHEET_NAME", "Patent"),
    "collaborations": ("RESEARCH_SHEET_ID", "COLLABORATIONS_SHEET_NAME", "Collaboration"),
}


class ConfigurationError(RuntimeError):
    pass


@dataclass(frozen=True)
class SheetSource:
    sheet_id: Optional[str]
    sheet_name: str
    columns: str

    @property
    def range(self) -> str:
        return f"{self.sheet_name}!{self.columns}"


@dataclass(frozen=True)
class Settings:
    credentials_path: str = DEFAULT_CREDENTIALS_PATH
    sources: Dict[str, SheetSource] = field(default_factory=dict)
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, *, use_dotenv: bool = True) -> "Settings":
        """Read settings from ``env`` (default: os.environ, after loading a .env file)."""
        if env is None:
            if use_dotenv:
                load_dotenv()
            env = os.environ

        sources = {}
        for name, (id_var, name_var, default_name) in SHEET_ENV.items():
            sources[name] = SheetSource(
                sheet_id=(env.get(id_var) or "").strip() or None,
                sheet_name=env.get(name_var) or default_name,
                columns=ALL_SCHEMAS[name].sheet_columns,
            )

        origins = [o.strip() for o in (env.get("CORS_ALLOWED_ORIGINS") or "*").split(",") if o.strip()]
        try:
            port = int(env.get("PORT") or DEFAULT_PORT)
        except ValueError:
            port = DEFAULT_PORT

        return cls(
            credentials_path=env.get("GOOGLE_APPLICATION_CREDENTIALS") or DEFAULT_CREDENTIALS_PATH,
            sources=sources,
            cors_origins=origins or ["*"],
            port=port,
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )

    def source_for(self, dashboard: str) -> SheetSource:
        source = self.sources.get(dashboard)
        if source is None or not source.sheet_id:
            id_var = SHEET_ENV.get(dashboard, (f"{dashboard.upper()}_SHEET_ID",))[0]
            raise ConfigurationError(f"{id_var} is not set; cannot load the {dashboard} sheet")
        return source
