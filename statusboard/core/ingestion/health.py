"""Map free-text RAG / colour cells onto ``HealthStatus``.

Weekly status sheets are filled in by hand, so the health columns hold
anything from ``"Red"`` to ``"yellow-ish"`` to a bare ``"A"``.  Every input
maps to exactly one of Red, Amber or Green.

Blank and unrecognised values resolve to Green.  This optimistic default
matches how the sheets have always been read: a project nobody flagged is
treated as healthy.  It also means a typo in a red cell shows up as Green.
"""

from __future__ import annotations

from typing import Any

from statusboard.common.enums import HealthStatus

_RED_ABBREVIATIONS = {"r"}
_AMBER_ABBREVIATIONS = {"y", "a"}
_GREEN_ABBREVIATIONS = {"g"}

_CANONICAL = {status.value: status for status in HealthStatus}


def normalize_health(value: Any) -> HealthStatus:
    """Return the health status for a raw cell value.  Never raises."""
    if value is None:
        return HealthStatus.GREEN

    raw = str(value).strip()
    if not raw:
        return HealthStatus.GREEN

    text = raw.lower()
    if "red" in text or text in _RED_ABBREVIATIONS:
        return HealthStatus.RED
    if "yellow" in text or "amber" in text or text in _AMBER_ABBREVIATIONS:
        return HealthStatus.AMBER
    if "green" in text or text in _GREEN_ABBREVIATIONS:
        return HealthStatus.GREEN

    if raw in _CANONICAL:
        return _CANONICAL[raw]

    return HealthStatus.GREEN
