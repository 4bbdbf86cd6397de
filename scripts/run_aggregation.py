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

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

from step_aggregator.exceptions import StepAggregatorError
from step_aggregator.workflow import run_aggregation

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Aggregate a fixed-step series over configured windows.")
    parser.add_argument(
        "--config",
        required=True,
        type=Path,
        help="Path to the aggregation YAML configuration file.",
    )
    parser.add_argument(
        "--series",
        required=True,
        type=Path,
        help="Path to the series file (.csv or .parquet).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional CSV destination for the window summary.",
    )
    parser.add_argument(
        "--timestamp-column",
        default="timestamp",
        help="Name of the timestamp column (default: timestamp).",
    )
    parser.add_argument(
        "--value-column",
        default="value",
        help="Name of the value column (default: value).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level for the run (default: INFO).",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Optional directory receiving a per-run JSON log file.",
    )
    parser.add_argument(
        "--run-id",
        default=None,
        help="Optional run identifier; generated when omitted.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        summary = run_aggregation(
            args.config,
            args.series,
            log_level=args.log_level,
            run_id=args.run_id,
            log_dir=args.log_dir,
            output_path=args.output,
            timestamp_column=args.timestamp_column,
            value_column=args.value_column,
        )
    except (StepAggregatorError, FileNotFoundError):
        logger.exception("aggregation failed", extra={"config": str(args.config)})
        return 1

    with pd.option_context("display.max_rows", None, "display.width", 160):
        print(summary.to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
