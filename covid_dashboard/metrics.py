"""Pure reshaping of a disease.sh timeline into dashboard figures."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, NamedTuple

Timeline = Dict[str, Dict[str, int]]

PIE_LABELS = ["Recovered", "Deaths", "Active Cases", "Remaining Population"]
PIE_COLORS = ["green", "red", "blue", "khaki"]


class Snapshot(NamedTuple):
    cases: int = 0
    recovered: int = 0
    deaths: int = 0


class Series(NamedTuple):
    label: str
    data: List[int]
    color: str
    fill: bool = False


class LineSeries(NamedTuple):
    labels: List[str]
    series: List[Series]


class PieSeries(NamedTuple):
    labels: List[str]
    values: List[int]
    colors: List[str]


EMPTY_SNAPSHOT = Snapshot()


def _latest(mapping) -> int:
    # upstream key order is chronological; never re-sorted here
    values = list((mapping or {}).values())
    if not values:
        return 0
    return values[-1] or 0


def compute_snapshot(timeline: Timeline) -> Snapshot:
    return Snapshot(
        cases=_latest(timeline.get("cases")),
        recovered=_latest(timeline.get("recovered")),
        deaths=_latest(timeline.get("deaths")),
    )


def compute_active(snapshot: Snapshot) -> int:
    """Cases not yet recovered or dead. Upstream anomalies can make this
    negative, so it is floored at zero."""
    return max(0, snapshot.cases - snapshot.recovered - snapshot.deaths)


def to_line_series(timeline: Timeline) -> LineSeries:
    # the cases dates are the shared x axis for all three lines
    labels = list(timeline["cases"].keys())
    return LineSeries(
        labels=labels,
        series=[
            Series("Cases", list(timeline["cases"].values()), "blue"),
            Series("Recovered", list(timeline["recovered"].values()), "green"),
            Series("Deaths", list(timeline["deaths"].values()), "red"),
        ],
    )


def to_pie_series(snapshot: Snapshot, total_population: int) -> PieSeries:
    remaining = total_population - snapshot.cases
    return PieSeries(
        labels=list(PIE_LABELS),
        values=[snapshot.recovered, snapshot.deaths, compute_active(snapshot), remaining],
        colors=list(PIE_COLORS),
    )


def format_millions(value) -> str:
    """One decimal place, ties rounded up ("1.25M" shows as "1.3M")."""
    millions = (Decimal(value) / Decimal(1_000_000)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{millions}M"
