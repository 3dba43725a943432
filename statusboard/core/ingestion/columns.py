"""Fuzzy header matching for loosely-named spreadsheet columns."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

# Canonical field -> accepted header synonyms, most preferred first.
COLUMN_SYNONYMS: dict[str, tuple[str, ...]] = {
    "project_name": ("Project Name", "Project", "Name"),
    "week_number": ("Week Number", "Week", "Week #"),
    "health_previous_week": (
        "Health Previous Week",
        "Previous Health",
        "Last Week Health",
    ),
    "health_current_week": (
        "Health Current Week",
        "Current Health",
        "This Week Health",
        "RAG Status",
        "Status",
    ),
    "update_for_current_week": (
        "Update Current Week",
        "Current Week Update",
        "This Week Update",
        "Update for Current Week",
    ),
    "plan_for_next_week": ("Plan Next Week", "Next Week Plan", "Plan for Next Week"),
    "issues_challenges": ("Issues Challenges", "Issues", "Challenges", "Issues/Challenges"),
    "path_to_green": ("Path to Green", "Path Green", "Recovery Plan"),
    "resourcing_status": ("Resourcing Status", "Resources", "Resource Status"),
    "client_escalation": ("Client Escalation", "Escalation", "Client Issues"),
    "tower": ("Tower", "Team Tower", "Tower Assignment"),
    "billing_model": ("Billing Model", "Billing", "Contract Type"),
    "fte": ("FTE", "Full Time Equivalent", "Team Size"),
    "revenue": ("Revenue", "Contract Value", "Project Value"),
}


def _label(value: Any) -> str:
    return str(value).strip().lower()


def find_column(headers: Sequence[Any], candidates: Sequence[str]) -> int | None:
    """Index of the best header for *candidates*, or ``None``.

    Candidates are tried in priority order; for each one the first header
    that equals or contains it (trimmed, case-insensitive) wins.
    """
    labels = [None if h is None else _label(h) for h in headers]
    for candidate in candidates:
        wanted = _label(candidate)
        if not wanted:
            continue
        for index, label in enumerate(labels):
            if label is None:
                continue
            if label == wanted or wanted in label:
                return index
    return None


def cell_to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def resolve_cell(headers: Sequence[Any], row: Sequence[Any], candidates: Sequence[str]) -> str:
    """Text of the matching cell in *row*; ``""`` when absent.  ``0`` stays ``"0"``."""
    index = find_column(headers, candidates)
    if index is None or index >= len(row):
        return ""
    return cell_to_text(row[index])
