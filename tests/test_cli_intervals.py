from pathlib import Path
from unittest.mock import patch
import json

import numpy as np
import pandas as pd
import pytest
from click.testing import CliRunner

from bootfit.cli import cli
from bootfit.config import DATASET_URLS


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def csv_file(tmp_path: Path) -> Path:
    rng = np.random.default_rng(1)
    x = np.arange(40, dtype=float)
    frame = pd.DataFrame({"x": x, "flag": x % 3 == 0, "y": 2.0 * x + rng.normal(0.0, 1.0, size=40)})
    path = tmp_path / "data.csv"
    frame.to_csv(path, index=False)
    return path


def test_intervals_table_output(cli_runner, csv_file: Path):
    """Default run prints an ASCII table with one row per term."""

    result = cli_runner.invoke(
        cli,
        ["intervals", str(csv_file), "--formula", "y ~ x", "--resamples", "50", "--seed", "3"],
        catch_exceptions=False,
    )
    assert result.exit_code == 0, result.output
    assert "Term" in result.output
    assert "95% percentile intervals (50 resamples, seed=3)" in result.output


def test_intervals_writes_json(cli_runner, csv_file: Path, tmp_path: Path):
    out_file = tmp_path / "results" / "intervals.json"
    result = cli_runner.invoke(
        cli,
        [
            "intervals",
            str(csv_file),
            "--formula",
            "y ~ x + flag",
            "--resamples",
            "40",
            "--keep-replicates",
            "--intercept",
            "--output",
            str(out_file),
        ],
        catch_exceptions=False,
    )
    assert result.exit_code == 0, result.output
    data = json.loads(out_file.read_text(encoding="utf-8"))
    terms = [i["term"] for i in data["intervals"]]
    assert terms == ["Intercept", "flag[T.True]", "x"]
    assert all(len(i["replicates"]) == 40 for i in data["intervals"])
    assert data["formula"] == "y ~ x + flag"
    assert len(data["dataset_sha256"]) == 64
    x = data["intervals"][2]
    assert x["lower"] < 2.0 < x["upper"]


def test_intervals_csv_format(cli_runner, csv_file: Path):
    result = cli_runner.invoke(
        cli,
        ["intervals", str(csv_file), "--formula", "y ~ x", "--resamples", "20", "--format", "csv"],
    )
    assert result.exit_code == 0, result.output
    assert "term,point_estimate,lower,upper,std_error" in result.output


def test_intervals_parallel_same_as_sequential(cli_runner, csv_file: Path, tmp_path: Path):
    outs = []
    for workers in ("1", "3"):
        out_file = tmp_path / f"w{workers}.json"
        result = cli_runner.invoke(
            cli,
            ["intervals", str(csv_file), "--formula", "y ~ x", "--resamples", "30", "--workers", workers, "--output", str(out_file)],
        )
        assert result.exit_code == 0, result.output
        outs.append(json.loads(out_file.read_text(encoding="utf-8"))["intervals"])
    assert outs[0] == outs[1]


def test_intervals_invalid_confidence(cli_runner, csv_file: Path):
    result = cli_runner.invoke(cli, ["intervals", str(csv_file), "--formula", "y ~ x", "--confidence", "1.5"])
    assert result.exit_code != 0
    assert "between 0 and 1" in result.output


def test_intervals_missing_file(cli_runner, tmp_path: Path):
    result = cli_runner.invoke(cli, ["intervals", str(tmp_path / "nope.csv"), "--formula", "y ~ x"])
    assert result.exit_code != 0
    assert "Missing data file" in result.output


def test_intervals_missing_formula(cli_runner, csv_file: Path):
    result = cli_runner.invoke(cli, ["intervals", str(csv_file)])
    assert result.exit_code != 0
    assert "--formula is required" in result.output


def test_intervals_bad_column(cli_runner, csv_file: Path):
    """Unknown columns surface as a model fit error."""

    result = cli_runner.invoke(cli, ["intervals", str(csv_file), "--formula", "y ~ nope", "--resamples", "5"])
    assert result.exit_code != 0
    assert "model fit failed on original dataset" in result.output


def test_intervals_named_dataset(cli_runner, tmp_path: Path):
    """Named datasets resolve to their URL and default formula."""

    rng = np.random.default_rng(2)
    n = 60
    cols = ["funny", "show_product_quickly", "patriotic", "celebrity", "danger", "animals", "use_sex"]
    frame = pd.DataFrame({c: rng.permutation(np.array([True, False] * (n // 2))) for c in cols})
    frame["year"] = 2000 + rng.integers(0, 21, size=n)

    with patch("bootfit.commands.intervals.pd.read_csv", return_value=frame) as mock_read:
        result = cli_runner.invoke(cli, ["intervals", "superbowl", "--resamples", "20"], catch_exceptions=False)
    assert result.exit_code == 0, result.output
    mock_read.assert_called_once_with(DATASET_URLS["superbowl"])
    assert "funny[T.True]" in result.output


def test_intervals_tree_model(cli_runner, tmp_path: Path):
    rng = np.random.default_rng(5)
    year = rng.integers(1969, 2021, size=60)
    frame = pd.DataFrame({"year_aired": year, "imdb": rng.normal(7.5, 0.5, size=60), "monster_real": (year > 1990).astype(int)})
    path = tmp_path / "scooby.csv"
    frame.to_csv(path, index=False)
    result = cli_runner.invoke(
        cli,
        ["intervals", str(path), "--formula", "monster_real ~ year_aired + imdb", "--model", "tree", "--resamples", "15"],
    )
    assert result.exit_code == 0, result.output
    assert "year_aired" in result.output
