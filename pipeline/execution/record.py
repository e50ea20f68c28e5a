"""pipeline.execution.record

Filesystem side effects for :mod:`pipeline.execution.run_pipeline`
(the artifact packager).

Rule
----
Only this module writes packaged artifacts. Contents are never transformed:
every artifact is a byte copy of the raw result the benchmark tool wrote.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from bench_ci.domain import ResultArtifact
from bench_ci.io import copy_file_atomic, reset_dir
from pipeline.errors import PackagingFailed, ResultFileMissing

from .model import PlannedArtifact


def package_artifacts(
    raw_result: Path,
    results_dir: Path,
    planned: Sequence[PlannedArtifact],
) -> List[ResultArtifact]:
    """Copy *raw_result* to every planned artifact path.

    The results directory is recreated first so only this run's files are
    uploaded. Raises ResultFileMissing if the benchmark produced no output
    and PackagingFailed if the results directory cannot be written.
    """

    src = Path(raw_result)
    if not src.is_file():
        raise ResultFileMissing(f"Expected benchmark result not found: {src}")

    artifacts: List[ResultArtifact] = []
    try:
        reset_dir(results_dir)
        for item in planned:
            copy_file_atomic(src, item.path)
            artifacts.append(ResultArtifact(path=item.path, published_name=item.published_name))
            print(f"  📦 {item.path.name} -> {item.published_name}")
    except OSError as e:
        raise PackagingFailed(f"Cannot write artifacts to {results_dir}: {e}") from e
    return artifacts
