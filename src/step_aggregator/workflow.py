# Copyright 2025 Edward Clewer
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from step_aggregator.aggregation.aggregator import Aggregator
from step_aggregator.config_parsers.config_dataclass import AggregationConfig
from step_aggregator.config_parsers.config_parser import AggregationConfigParser
from step_aggregator.config_parsers.utils import ensure_output_dir, resolve_input_file
from step_aggregator.data.series_loader import load_series
from step_aggregator.exceptions import ConfigError, SeriesDataError
from step_aggregator.logging_utils import (
    configure_logging,
    generate_run_id,
    get_git_hash,
    log_run_metadata,
)
from step_aggregator.report.window_summary import summarize_windows

logger = logging.getLogger(__name__)

__all__ = [
    "run_aggregation",
    "load_config",
]


def load_config(config_path: Path | str) -> AggregationConfig:
    """Parse an aggregation configuration file."""
    parser = AggregationConfigParser(Path(config_path))
    return parser.load_config()


def setup_logging(run_id: str, log_dir: Path | None, level: str | int):
    configure_logging(run_id=run_id, log_dir=log_dir, level=level)
    return logging.getLogger(__name__)


def run_aggregation(
    config_path: Path | str,
    series_path: Path | str,
    *,
    log_level: str | int = "INFO",
    run_id: str | None = None,
    log_dir: Path | str | None = None,
    output_path: Path | str | None = None,
    timestamp_column: str = "timestamp",
    value_column: str = "value",
) -> pd.DataFrame:
    """
    Aggregate a series file over every window named in the configuration.

    Returns the per-window summary; also written as CSV when ``output_path`` is set.
    """
    run_identifier = run_id or generate_run_id()
    run_logger = setup_logging(
        run_identifier,
        Path(log_dir).expanduser() if log_dir is not None else None,
        log_level,
    )

    try:
        config = load_config(config_path)
        series_file = resolve_input_file(series_path, "series")
    except (ConfigError, FileNotFoundError):
        run_logger.exception(
            "failed to load aggregation configuration",
            extra={"config_path": str(Path(config_path).resolve())},
        )
        raise

    log_run_metadata(
        run_logger,
        aggregation_config=config,
        config_path=Path(config_path).resolve(),
        series_path=series_file,
        git_hash=get_git_hash(),
    )

    try:
        series = load_series(
            series_file,
            timestamp_column=timestamp_column,
            value_column=value_column,
        )
    except SeriesDataError:
        run_logger.exception("failed to load series", extra={"series_path": str(series_file)})
        raise

    aggregator = Aggregator.from_series(series)
    summary = summarize_windows(aggregator, config.windows, percentile=config.percentile)

    if output_path is not None:
        destination = Path(output_path).expanduser()
        ensure_output_dir(destination.parent)
        summary.to_csv(destination, index=False)
        run_logger.info("summary written", extra={"output_path": str(destination.resolve())})

    run_logger.info(
        "run complete",
        extra={
            "windows": len(summary),
            "undefined_windows": int(summary["average"].isna().sum()),
        },
    )
    return summary
