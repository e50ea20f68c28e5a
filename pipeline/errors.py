"""pipeline.errors

Fatal error taxonomy.

Only stages whose failure must abort a run raise. Each fatal error carries
the stage it happened in so the run result (and the CI annotation) can say
where the run stopped. Degrade paths (no previous baseline, comment not
allowed) are values in :mod:`bench_ci.domain`, not exceptions.
"""

from __future__ import annotations


BUILD = "build"
BENCHMARK = "benchmark"
PACKAGE = "package"
PUBLISH = "publish"
COMPARE = "compare"


class PipelineError(Exception):
    """Base class for errors raised by the pipeline layer."""


class ConfigError(PipelineError):
    """Required configuration is missing or invalid."""


class StageFailed(PipelineError):
    """A stage failed and the run must stop."""

    stage = "unknown"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BuildFailed(StageFailed):
    stage = BUILD


class BenchmarkFailed(StageFailed):
    stage = BENCHMARK


class ResultFileMissing(StageFailed):
    stage = PACKAGE


class PackagingFailed(StageFailed):
    """The raw result exists but could not be copied into the results directory."""

    stage = PACKAGE


class ArtifactUploadFailed(StageFailed):
    stage = PUBLISH


class ComparisonUnavailable(StageFailed):
    """The comparison service is unreachable (not: a baseline is missing)."""

    stage = COMPARE
