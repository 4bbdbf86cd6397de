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

"""Top-level exports for the step_aggregator package."""

__all__ = [
    "AggregateKind",
    "Aggregates",
    "Aggregator",
    "StepSeries",
    "run_aggregation",
    "summarize_windows",
]


def __getattr__(name):
    """Lazily import heavy submodules when their symbols are first accessed."""
    if name in ("AggregateKind", "Aggregates", "Aggregator", "StepSeries"):
        from step_aggregator.aggregation import (
            AggregateKind,
            Aggregates,
            Aggregator,
            StepSeries,
        )
        globals().update(
            AggregateKind=AggregateKind,
            Aggregates=Aggregates,
            Aggregator=Aggregator,
            StepSeries=StepSeries,
        )
        return globals()[name]

    if name == "run_aggregation":
        from step_aggregator.workflow import run_aggregation
        globals()["run_aggregation"] = run_aggregation
        return run_aggregation

    if name == "summarize_windows":
        from step_aggregator.report import summarize_windows
        globals()["summarize_windows"] = summarize_windows
        return summarize_windows

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
