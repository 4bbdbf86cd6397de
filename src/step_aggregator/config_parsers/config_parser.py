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

from typing import Any, Dict, List
from pathlib import Path
import yaml

from step_aggregator.config_parsers.config_dataclass import AggregationConfig, WindowConfig
from step_aggregator.config_parsers.utils import parse_epoch_seconds, validate_percentile
from step_aggregator.config_validation import validate_aggregation_config
from step_aggregator.exceptions import ConfigError


class AggregationConfigParser:
    """
    Parses and validates the aggregation YAML configuration file.

    Produces an AggregationConfig holding one WindowConfig per
    requested query window, with bounds resolved to epoch seconds.
    """

    def __init__(self, config_path: Path):
        self.config_path = Path(config_path)

        if not self.config_path.exists():
            raise FileNotFoundError(f"Aggregation config not found: {config_path}")

    # ------------------------------------------------------------------
    def load_config(self) -> AggregationConfig:
        """Load and validate the aggregation YAML into config dataclasses."""

        # --- Parse YAML ---
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                raw: Dict[str, Any] = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing YAML at {self.config_path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigError("Invalid aggregation config: root must be a mapping (YAML dict)")

        try:
            validated = validate_aggregation_config(raw)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

        windows: List[WindowConfig] = []
        seen_names: set[str] = set()

        # --- Build window dataclasses ---
        for entry in validated["windows"]:
            name = entry["name"]
            start = parse_epoch_seconds(entry["start"], f"{name}.start")
            end = parse_epoch_seconds(entry["end"], f"{name}.end")
            if end < start:
                raise ConfigError(f"Window '{name}' ends before it starts ({end} < {start})")

            if name in seen_names:
                raise ConfigError(f"Duplicate window name detected: '{name}'")
            seen_names.add(name)
            windows.append(WindowConfig(name=name, start=start, end=end))

        return AggregationConfig(
            schema_version=validated["schema_version"],
            percentile=validate_percentile(validated["percentile"]),
            windows=windows,
        )
