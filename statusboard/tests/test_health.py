import pytest

from statusboard.common.enums import HealthStatus
from statusboard.core.ingestion.health import normalize_health


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Red", HealthStatus.RED),
        ("  RED ", HealthStatus.RED),
        ("r", HealthStatus.RED),
        ("Reddish", HealthStatus.RED),
        ("Amber", HealthStatus.AMBER),
        ("Yellow", HealthStatus.AMBER),
        ("yellow-ish", HealthStatus.AMBER),
        ("A", HealthStatus.AMBER),
        ("y", HealthStatus.AMBER),
        ("Green", HealthStatus.GREEN),
        ("g", HealthStatus.GREEN),
    ],
)
def test_recognised_values(value, expected):
    assert normalize_health(value) == expected


@pytest.mark.parametrize("value", [None, "", "   ", "Unknown", "Blue", "n/a", 42])
def test_blank_and_unknown_default_to_green(value):
    assert normalize_health(value) == HealthStatus.GREEN


def test_red_wins_over_other_colours():
    # Colour words are checked red first
    assert normalize_health("Red trending to Green") == HealthStatus.RED
    assert normalize_health("amber/green") == HealthStatus.AMBER


def test_result_is_always_a_health_status():
    for value in ["Red", "?", None, 3.5, "GREEN"]:
        assert normalize_health(value) in set(HealthStatus)
