"""
Optional MLflow logging for arena runs.

MLflow is only imported when tracking is requested, so it stays an optional
extra. Tracking failures are logged and never abort a simulation.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional

from .arena import MatchSummary


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    """Yield True inside an active MLflow run, False when tracking is off or unavailable."""
    if not enabled:
        yield False
        return
    try:
        import mlflow  # type: ignore
    except ImportError:
        logging.warning("mlflow is not installed; continuing without tracking")
        yield False
        return
    try:
        if log_dir is not None:
            mlflow.set_tracking_uri((log_dir.resolve() / "mlruns").as_uri())
        run = mlflow.start_run(run_name=run_name)
    except Exception as e:
        logging.warning("Could not start mlflow run (%s); continuing without tracking", e)
        yield False
        return
    with run:
        yield True


def log_params(params: Dict[str, object]) -> None:
    try:
        import mlflow  # type: ignore

        mlflow.log_params(params)
    except Exception as e:
        logging.warning("mlflow log_params failed: %s", e)


def log_metrics(metrics: Dict[str, float]) -> None:
    try:
        import mlflow  # type: ignore

        mlflow.log_metrics(metrics)
    except Exception as e:
        logging.warning("mlflow log_metrics failed: %s", e)


def log_match_summary(summary: MatchSummary, seed: Optional[int] = None) -> None:
    log_params({
        "games": summary.games,
        "x_difficulty": summary.x_difficulty.name.lower(),
        "o_difficulty": summary.o_difficulty.name.lower(),
        "seed": seed,
    })
    total = summary.games or 1
    log_metrics({
        "x_wins": float(summary.x_wins),
        "o_wins": float(summary.o_wins),
        "draws": float(summary.draws),
        "draw_rate": summary.draws / total,
    })
