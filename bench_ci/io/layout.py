"""bench_ci.io.layout

Canonical filesystem layout for one benchmark run.

This module centralizes:

* where the benchmark tool leaves its packed result
  (``<target>/criterion/<baseline>.json``)
* where packaged artifacts are staged for upload (``criterion-results/``)
* where the local markdown renderer writes its report

Relative directories are anchored under the checkout root so the pipeline
behaves the same regardless of the working directory it is started from.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

ARTIFACT_EXTENSION = ".json"
REPORT_EXTENSION = ".md"


def artifact_filename(identifier: str) -> str:
    """``master`` -> ``master.json``; ``deadbeef`` -> ``deadbeef.json``."""
    return f"{identifier}{ARTIFACT_EXTENSION}"


def _anchor(root: Path, path: Union[str, Path]) -> Path:
    p = Path(path)
    return p if p.is_absolute() else (root / p)


@dataclass(frozen=True)
class ResultsLayout:
    """Paths used by a run, all derived from the checkout root.

    Attributes
    ----------
    repo_root:
        The checked-out project (where ``git`` and ``cargo`` run).
    crate_dir:
        The benchmark crate (``cargo bench`` runs here).
    target_dir:
        Cargo target directory; criterion output lives in ``<target>/criterion``.
    results_dir:
        Staging directory for packaged artifacts.
    """

    repo_root: Path
    crate_dir: Path
    target_dir: Path
    results_dir: Path

    @classmethod
    def under(
        cls,
        repo_root: Union[str, Path],
        *,
        crate_dir: Union[str, Path] = "crates/bench",
        target_dir: Union[str, Path] = "target",
        results_dir: Union[str, Path] = "criterion-results",
    ) -> "ResultsLayout":
        root = Path(repo_root).resolve()
        return cls(
            repo_root=root,
            crate_dir=_anchor(root, crate_dir),
            target_dir=_anchor(root, target_dir),
            results_dir=_anchor(root, results_dir),
        )

    @property
    def criterion_dir(self) -> Path:
        return self.target_dir / "criterion"

    def raw_result(self, baseline_name: str) -> Path:
        """Packed result written by ``summarize pack <baseline_name>``."""
        return self.criterion_dir / artifact_filename(baseline_name)

    def artifact(self, identifier: str) -> Path:
        return self.results_dir / artifact_filename(identifier)

    def report(self, report_name: str) -> Path:
        """Markdown written by ``summarize markdown-report ... --report-name``."""
        return self.criterion_dir / f"{report_name}{REPORT_EXTENSION}"
