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

from dataclasses import dataclass, field, asdict
from typing import List


@dataclass(frozen=True)
class WindowConfig:
    """One named query window, bounds in epoch seconds."""
    name: str
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass(kw_only=True)
class AggregationConfig:
    """
    Validated aggregation job description.
    Created by AggregationConfigParser and consumed by the reporting workflow.
    """
    schema_version: str
    percentile: float = 95.0
    windows: List[WindowConfig] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)
