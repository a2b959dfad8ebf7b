import pandas as pd
import plotly.express as px

from .metrics import LineSeries, PieSeries


def line_frame(line: LineSeries) -> pd.DataFrame:
    """Long-format frame (date, metric, value) for ``px.line``.

    Each series is paired with the shared date labels by position; a series
    longer or shorter than the labels is cut to the common length.
    """
    rows = []
    for s in line.series:
        for date, value in zip(line.labels, s.data):
            rows.append({"date": date, "metric": s.label, "value": value})
    df = pd.DataFrame(rows, columns=["date", "metric", "value"])
    df["date"] = pd.to_datetime(df["date"], format="%m/%d/%y", errors="coerce")
    return df


def line_figure(line: LineSeries, title: str = "Cases Over Time"):
    fig = px.line(
        line_frame(line),
        x="date",
        y="value",
        color="metric",
        color_discrete_map={s.label: s.color for s in line.series},
        labels={"value": "Count", "date": "Date", "metric": "Metric"},
        title=title,
    )
    return fig


def pie_figure(pie: PieSeries, title: str = "Population Impact"):
    df = pd.DataFrame({"label": pie.labels, "value": pie.values})
    fig = px.pie(
        df,
        names="label",
        values="value",
        color="label",
        color_discrete_map=dict(zip(pie.labels, pie.colors)),
        title=title,
    )
    return fig
