from pathlib import Path
import json

import pytest

from bootfit.report import (
    format_intervals,
    format_table_ascii,
    format_table_csv,
    format_table_markdown,
    save_results,
)
from bootfit.validation import IntervalTable, TermInterval


@pytest.fixture()
def table() -> IntervalTable:
    return IntervalTable(
        intervals=(
            TermInterval("funny[T.True]", -2.5, -3.1, -1.8, 0.33, (-2.4, -2.9, -2.0)),
            TermInterval("celebrity[T.True]", 1.2, 0.4, 2.0, 0.41, (1.0, 1.5, 0.9)),
        ),
        n_resamples=3,
        confidence_level=0.95,
        seed=42,
        keep_replicates=True,
    )


def test_format_ascii(table: IntervalTable):
    out = format_table_ascii(table)
    lines = out.splitlines()
    assert lines[0].startswith("95% percentile intervals")
    assert "Term" in lines[1] and "Std. Error" in lines[1]
    assert any("funny[T.True]" in ln and "-2.5000" in ln for ln in lines)


def test_format_markdown(table: IntervalTable):
    out = format_table_markdown(table)
    assert out.startswith("| Term | Estimate | Lower | Upper | Std. Error |")
    assert "| celebrity[T.True] | 1.2000 | 0.4000 | 2.0000 | 0.4100 |" in out


def test_format_csv(table: IntervalTable):
    lines = format_table_csv(table).splitlines()
    assert lines[0] == "term,point_estimate,lower,upper,std_error,confidence_level,n_resamples"
    assert lines[1].startswith("funny[T.True],-2.500000,-3.100000,-1.800000")
    assert len(lines) == 3


def test_format_csv_quotes_terms():
    t = IntervalTable((TermInterval('Q("a,b")', 1.0, 0.0, 2.0, 0.5),), 10, 0.9, 1, False)
    assert format_table_csv(t).splitlines()[1].startswith('"Q(""a,b"")",')


def test_format_json(table: IntervalTable):
    out = format_intervals(table, "json")
    assert isinstance(out, dict)
    assert out["seed"] == 42
    assert out["intervals"][0]["replicates"] == [-2.4, -2.9, -2.0]
    json.dumps(out)


def test_format_unknown(table: IntervalTable):
    with pytest.raises(ValueError):
        format_intervals(table, "xml")


def test_to_frame(table: IntervalTable):
    df = table.to_frame()
    assert list(df.columns) == ["term", "point_estimate", "lower", "upper", "std_error", "replicates"]
    assert df.loc[1, "term"] == "celebrity[T.True]"


def test_lookup_and_replicates_frame(table: IntervalTable):
    assert table["celebrity[T.True]"].width == pytest.approx(1.6)
    with pytest.raises(KeyError):
        table["missing"]
    long = table.replicates_frame()
    assert list(long.columns) == ["resample", "term", "estimate"]
    assert len(long) == 6


def test_replicates_frame_requires_replicates():
    t = IntervalTable((TermInterval("x", 1.0, 0.5, 1.5, 0.2),), 10, 0.95, 1, False)
    with pytest.raises(ValueError):
        t.replicates_frame()
    assert "replicates" not in t.to_dict()["intervals"][0]


def test_save_results(table: IntervalTable, tmp_path: Path):
    out = save_results(table, tmp_path / "nested" / "intervals.json", extra={"formula": "year ~ funny"})
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["formula"] == "year ~ funny"
    assert data["n_resamples"] == 3
    assert [i["term"] for i in data["intervals"]] == ["funny[T.True]", "celebrity[T.True]"]
