"""Value objects produced by the spreadsheet ingestion pipeline."""

from __future__ import annotations

from pydantic import Field

from statusboard.common.enums import HealthStatus
from statusboard.common.schemas import CamelModel

NO_ESCALATION = "None"


class NormalizedReport(CamelModel):
    """One project's status for one reporting week."""

    project_name: str = Field(..., min_length=1)
    week_number: int
    health_previous_week: HealthStatus = HealthStatus.GREEN
    health_current_week: HealthStatus = HealthStatus.GREEN
    update_for_current_week: str = ""
    plan_for_next_week: str = ""
    issues_challenges: str = ""
    path_to_green: str = ""
    resourcing_status: str = ""
    client_escalation: str = NO_ESCALATION
    tower: str = ""
    billing_model: str = ""
    fte: str = ""
    revenue: str = ""

    @property
    def has_escalation(self) -> bool:
        return has_escalation(self.client_escalation)


class FileFailure(CamelModel):
    path: str
    error: str


class IngestionBatch(CamelModel):
    reports: list[NormalizedReport] = Field(default_factory=list)
    failures: list[FileFailure] = Field(default_factory=list)
    files_processed: int = 0


def has_escalation(value: str | None) -> bool:
    """``"None"`` (any case) and blank both mean no client escalation."""
    text = (value or "").strip()
    return bool(text) and text.lower() != NO_ESCALATION.lower()
