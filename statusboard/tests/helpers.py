from pathlib import Path

from openpyxl import Workbook

from statusboard.common.exceptions import AIProviderError

HEADERS = [
    "Project Name",
    "Week",
    "Health Previous Week",
    "Health Current Week",
    "Update for Current Week",
    "Plan for Next Week",
    "Issues/Challenges",
    "Path to Green",
    "Resourcing Status",
    "Client Escalation",
    "Tower",
    "Billing Model",
    "FTE",
    "Revenue",
]


class ScriptedAIClient:
    """Stands in for ``AIClient``: replays canned answers or raises."""

    def __init__(self, responses=None, error: Exception | None = None):
        self.responses = list(responses or [])
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def complete(self, system, user, config, temperature=None):
        self.calls.append((system, user))
        if self.error is not None:
            raise self.error
        if not self.responses:
            raise AIProviderError("No scripted response left")
        return self.responses.pop(0)


def write_workbook(path: Path, rows: list[list], headers: list[str] | None = None) -> Path:
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(headers or HEADERS)
    for row in rows:
        sheet.append(row)
    workbook.save(path)
    return path


def report_row(name: str, current: str = "Green", previous: str = "Green", **overrides) -> list:
    values = {
        "Project Name": name,
        "Week": "Week 12",
        "Health Previous Week": previous,
        "Health Current Week": current,
        "Update for Current Week": "Sprint review done",
        "Plan for Next Week": "Start UAT",
        "Issues/Challenges": "",
        "Path to Green": "",
        "Resourcing Status": "Fully staffed",
        "Client Escalation": "None",
        "Tower": "Digital",
        "Billing Model": "T&M",
        "FTE": 6,
        "Revenue": 120000,
    }
    values.update(overrides)
    return [values[h] for h in HEADERS]
