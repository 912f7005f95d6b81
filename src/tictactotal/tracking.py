"""
Experiment tracking helpers (optional MLflow backend).

MLflow is only imported when tracking is requested, so it stays an optional
dependency. Without it every helper is a no-op.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional

logger = logging.getLogger(__name__)

_active = False


def _mlflow():
    try:
        import mlflow  # type: ignore
    except ImportError:
        return None
    return mlflow


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    """Open an MLflow run when enabled and installed; yield whether one is active."""
    global _active
    mlflow = _mlflow() if enabled else None
    if mlflow is None:
        if enabled:
            logger.warning("mlflow is not installed; continuing without tracking")
        yield False
        return
    if log_dir is not None:
        mlflow.set_tracking_uri(Path(log_dir).resolve().joinpath("mlruns").as_uri())
    with mlflow.start_run(run_name=run_name):
        _active = True
        try:
            yield True
        finally:
            _active = False


def log_params(params: Dict[str, object]) -> None:
    if _active:
        _mlflow().log_params(params)
    else:
        logger.debug("params=%s", params)


def log_metrics(metrics: Dict[str, float]) -> None:
    if _active:
        _mlflow().log_metrics(metrics)
    else:
        logger.debug("metrics=%s", metrics)
