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

from datetime import date
from typing import Any, Dict, List

SUPPORTED_SCHEMA_VERSIONS = ("1.0",)


def _validate_schema_version(version: Any) -> str:
    known = ", ".join(SUPPORTED_SCHEMA_VERSIONS)
    if version is None:
        raise ValueError(
            f"Invalid aggregation configuration: must declare 'schema_version' (supported: [{known}])"
        )
    if str(version) not in SUPPORTED_SCHEMA_VERSIONS:
        raise ValueError(
            f"Invalid aggregation configuration: unsupported schema_version '{version}'. "
            f"Supported versions: [{known}]"
        )
    return str(version)


def _validate_bound(value: Any, *, idx: int, key: str) -> int | str | date:
    # bool is an int subclass but never a meaningful timestamp
    if isinstance(value, bool):
        raise ValueError(
            f"Invalid aggregation configuration: window #{idx} '{key}' must be an integer or timestamp string"
        )
    # YAML turns unquoted ISO timestamps into datetime objects
    if isinstance(value, (int, date)):
        return value
    if isinstance(value, str) and value.strip():
        return value.strip()
    raise ValueError(
        f"Invalid aggregation configuration: window #{idx} '{key}' must be an integer or timestamp string"
    )


def _validate_windows(items: Any) -> List[Dict[str, Any]]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise ValueError("Invalid aggregation configuration: 'windows' must be a list")

    normalized: List[Dict[str, Any]] = []
    allowed_keys = {"name", "start", "end"}

    for idx, entry in enumerate(items, start=1):
        if not isinstance(entry, dict):
            raise ValueError(
                f"Invalid aggregation configuration: window #{idx} must be a mapping"
            )

        extra = sorted(set(entry.keys()) - allowed_keys)
        if extra:
            raise ValueError(
                f"Invalid aggregation configuration: window #{idx} has unexpected keys {extra}"
            )

        missing = allowed_keys - set(entry.keys())
        if missing:
            raise ValueError(
                f"Invalid aggregation configuration: window #{idx} missing keys {sorted(missing)}"
            )

        name = entry["name"]
        if not isinstance(name, str) or not name.strip():
            raise ValueError(
                f"Invalid aggregation configuration: window #{idx} 'name' must be a non-empty string"
            )

        normalized.append(
            {
                "name": name.strip(),
                "start": _validate_bound(entry["start"], idx=idx, key="start"),
                "end": _validate_bound(entry["end"], idx=idx, key="end"),
            }
        )

    return normalized


def validate_aggregation_config(raw: dict) -> dict:
    """Validate aggregation YAML payload and return normalized mapping."""
    if not isinstance(raw, dict):
        raise ValueError("Invalid aggregation configuration: root must be a mapping")

    working = dict(raw)
    working["schema_version"] = _validate_schema_version(raw.get("schema_version"))

    allowed_root = {"schema_version", "percentile", "windows"}
    extra_root = sorted(set(working.keys()) - allowed_root)
    if extra_root:
        raise ValueError(f"Invalid aggregation configuration: unexpected keys {extra_root}")

    percentile = working.get("percentile", 95.0)
    if isinstance(percentile, bool) or not isinstance(percentile, (int, float)):
        raise ValueError("Invalid aggregation configuration: 'percentile' must be numeric")

    windows = _validate_windows(working.get("windows"))
    if not windows:
        raise ValueError("Invalid aggregation configuration: 'windows' cannot be empty")

    return {
        "schema_version": working["schema_version"],
        "percentile": float(percentile),
        "windows": windows,
    }
