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

"""Project-wide exception hierarchy."""

from __future__ import annotations


class StepAggregatorError(Exception):
    """Base exception for the step aggregator stack."""


class ConfigError(StepAggregatorError):
    """Raised when user-supplied configuration is invalid."""


class SeriesError(StepAggregatorError, ValueError):
    """Raised when timestamp/value arrays violate the series preconditions."""


class SeriesDataError(StepAggregatorError):
    """Raised when a series source cannot be accessed or parsed."""
