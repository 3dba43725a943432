"""Best-effort mining of the portfolio analysis ``reason`` text.

The reason is free text written by an LLM, so nothing here is a structured
guarantee: a missing pattern yields the default, never an error.
"""

from __future__ import annotations

import re

from statusboard.core.analysis.schemas import RagMetrics

DEFAULT_RECOMMENDATION = "Review portfolio and address critical issues immediately"

_RECOMMEND_RE = re.compile(r"Recommend (.+?)(\.|$)", re.IGNORECASE)
_ACTION_RES = (
    re.compile(r"focus(.+?)(\.|$)", re.IGNORECASE),
    re.compile(r"attention(.+?)(\.|$)", re.IGNORECASE),
    re.compile(r"address(.+?)(\.|$)", re.IGNORECASE),
)
# A count binds to the first colour word after "<N> projects", without
# reaching past the next "<N> projects".
_METRIC_RE = re.compile(
    r"(\d+)\s*projects\b(?:(?!\d+\s*projects).)*?\b(green|amber|red)\b",
    re.IGNORECASE | re.DOTALL,
)


def extract_primary_recommendation(reason: str | None) -> str:
    if not reason:
        return DEFAULT_RECOMMENDATION

    match = _RECOMMEND_RE.search(reason)
    if match:
        return match.group(1).strip()

    for pattern in _ACTION_RES:
        match = pattern.search(reason)
        if match:
            return f"Focus on {match.group(1).strip()}"

    return DEFAULT_RECOMMENDATION


def extract_rag_metrics(reason: str | None) -> RagMetrics:
    """Project counts per colour; a colour that is never counted stays 0."""
    counts: dict[str, int] = {}
    for match in _METRIC_RE.finditer(reason or ""):
        counts.setdefault(match.group(2).lower(), int(match.group(1)))
    return RagMetrics(**counts)


def summarize_metrics(metrics: RagMetrics) -> str:
    if metrics.red > 10:
        return "High risk projects need immediate attention"
    if metrics.amber > 15:
        return "Several projects require monitoring"
    return "Portfolio showing stable performance"
