"""Compute bootstrap confidence intervals for a model fitted to a CSV dataset.

Examples
--------
  bootfit intervals data.csv --formula "y ~ x"
  bootfit intervals superbowl --resamples 1001 --keep-replicates --format markdown
  bootfit intervals scoobydoo.csv --formula "monster_real ~ year_aired + imdb" --model tree --max-depth 4
  bootfit intervals data.csv --formula "y ~ ." --workers 4 --output results/intervals.json
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any
import json

import click
import pandas as pd

from bootfit.config import Config, DATASET_FORMULAS, DATASET_URLS, OUTPUT_FORMATS
from bootfit.dataset import fingerprint
from bootfit.errors import BootstrapError
from bootfit.report import format_intervals, save_results
from bootfit.validation import estimate_intervals


def _build_fitter(model: str, formula: str, keep_intercept: bool, max_depth: int, seed: int) -> Any:
    if model == "ols":
        from bootfit.models.ols import OLSFitter

        return OLSFitter(formula, keep_intercept=keep_intercept)
    from bootfit.models.estimator import EstimatorFitter

    if model == "tree":
        from sklearn.tree import DecisionTreeClassifier

        return EstimatorFitter(DecisionTreeClassifier(max_depth=max_depth, random_state=seed), formula)
    if model == "logistic":
        from sklearn.linear_model import LogisticRegression

        return EstimatorFitter(LogisticRegression(max_iter=1000), formula, keep_intercept=keep_intercept)
    raise click.ClickException(f"Unsupported model: {model}")


@click.command(name="intervals")
@click.argument("data", type=str)
@click.option(
    "formula",
    "--formula",
    type=str,
    required=False,
    help="Model formula 'response ~ p1 + p2' ('y ~ .' for all columns)",
)
@click.option(
    "model",
    "--model",
    type=click.Choice(["ols", "logistic", "tree"], case_sensitive=False),
    default="ols",
    show_default=True,
    help="Model refit on each resample (tree reports feature importances)",
)
@click.option(
    "resamples",
    "--resamples",
    type=int,
    default=Config.BOOTSTRAP_N_RESAMPLES,
    show_default=True,
    help="Number of bootstrap resamples",
)
@click.option(
    "confidence",
    "--confidence",
    type=float,
    default=Config.BOOTSTRAP_CONFIDENCE_LEVEL,
    show_default=True,
    help="Confidence level in (0, 1)",
)
@click.option(
    "seed",
    "--seed",
    type=int,
    default=Config.RANDOM_SEED,
    show_default=True,
    help="Random seed",
)
@click.option(
    "keep_replicates",
    "--keep-replicates",
    is_flag=True,
    help="Include every replicate estimate in JSON output",
)
@click.option(
    "workers",
    "--workers",
    type=int,
    default=Config.N_WORKERS,
    show_default=True,
    help="Threads used to refit resamples",
)
@click.option(
    "keep_intercept",
    "--intercept",
    is_flag=True,
    default=Config.KEEP_INTERCEPT,
    help="Report the intercept term",
)
@click.option(
    "max_depth",
    "--max-depth",
    type=int,
    default=4,
    show_default=True,
    help="Tree depth (tree model only)",
)
@click.option(
    "fmt",
    "--format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default="table",
    show_default=True,
    help="Output format printed to stdout",
)
@click.option(
    "output",
    "--output",
    type=click.Path(path_type=Path),
    required=False,
    help="Write results JSON to this path",
)
@click.option(
    "progress",
    "--progress",
    is_flag=True,
    help="Show a progress bar",
)
def intervals(
    data: str,
    formula: str | None,
    model: str,
    resamples: int,
    confidence: float,
    seed: int,
    keep_replicates: bool,
    workers: int,
    keep_intercept: bool,
    max_depth: int,
    fmt: str,
    output: Path | None,
    progress: bool,
) -> None:
    """Bootstrap percentile intervals for each term of a fitted model.

    DATA is a CSV path, a URL, or one of the walkthrough dataset names.
    """

    try:
        model = model.lower()
        if resamples <= 0:
            raise click.ClickException("--resamples must be > 0.")
        if not (0.0 < confidence < 1.0):
            raise click.ClickException("--confidence must be between 0 and 1 (exclusive).")
        if workers <= 0:
            raise click.ClickException("--workers must be > 0.")

        source = DATASET_URLS.get(data, data)
        formula = formula or DATASET_FORMULAS.get(data)
        if not formula:
            raise click.ClickException("--formula is required for this dataset.")

        if "://" not in source and not Path(source).exists():
            raise click.ClickException(f"Missing data file: {source}")
        frame = pd.read_csv(source)
        click.echo(f"Loaded {len(frame)} rows x {len(frame.columns)} columns from {source}", err=True)

        fitter = _build_fitter(model, formula, keep_intercept, max_depth, seed)
        click.echo(f"Bootstrapping {model} fit of '{formula}' ({resamples} resamples)...", err=True)
        table = estimate_intervals(
            frame,
            fitter,
            num_resamples=resamples,
            confidence_level=confidence,
            keep_replicates=keep_replicates,
            random_seed=seed,
            n_workers=workers,
            progress=progress,
        )

        rendered = format_intervals(table, fmt)
        if isinstance(rendered, dict):
            click.echo(json.dumps(rendered, indent=2, ensure_ascii=False))
        else:
            click.echo(rendered)

        if output is not None:
            extra: dict[str, Any] = {
                "data": source,
                "formula": formula,
                "model_choice": model,
                "dataset_sha256": fingerprint(frame),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
            save_results(table, output, extra=extra)
            click.echo(f"Results saved: {output}", err=True)
    except click.ClickException:
        raise
    except (BootstrapError, KeyError, ValueError) as e:
        raise click.ClickException(str(e))
    except Exception as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)
