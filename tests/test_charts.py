from covid_dashboard.charts import line_figure, line_frame, pie_figure
from covid_dashboard.metrics import Snapshot, to_line_series, to_pie_series


def make_timeline():
    return {
        "cases": {"1/22/20": 10, "1/23/20": 20},
        "recovered": {"1/22/20": 1, "1/23/20": 5},
        "deaths": {"1/22/20": 0, "1/23/20": 1},
    }


def test_line_frame_is_long_format():
    df = line_frame(to_line_series(make_timeline()))
    assert list(df.columns) == ["date", "metric", "value"]
    assert len(df) == 6
    assert df["date"].min().year == 2020
    assert df.loc[df["metric"] == "Deaths", "value"].tolist() == [0, 1]


def test_line_figure_colours():
    fig = line_figure(to_line_series(make_timeline()))
    colours = {trace.name: trace.line.color for trace in fig.data}
    assert colours == {"Cases": "blue", "Recovered": "green", "Deaths": "red"}
    assert fig.layout.title.text == "Cases Over Time"


def test_pie_figure():
    pie = to_pie_series(Snapshot(20, 5, 1), 1000)
    fig = pie_figure(pie)
    assert list(fig.data[0].labels) == ["Recovered", "Deaths", "Active Cases", "Remaining Population"]
    assert list(fig.data[0].values) == [5, 1, 14, 980]
    assert fig.layout.title.text == "Population Impact"
