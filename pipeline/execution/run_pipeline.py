"""pipeline.execution.run_pipeline

One benchmark run, start to finish.

The stages run strictly in order::

    triggered -> built -> benchmarked -> packaged -> published
              -> compared -> commented | logged_fallback -> done

A :class:`~pipeline.errors.StageFailed` from any stage stops the run; the
result records the stage and nothing after it is attempted (in particular no
comment). Cleanup (CPU boost off, scratch directories emptied) runs on every
exit path and never changes the run status.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from bench_ci.domain import ResultArtifact
from bench_ci.io import empty_dir
from pipeline.comment import ResultPublisher, wrap_report
from pipeline.compare import ComparisonFetcher
from pipeline.config import PipelineConfig
from pipeline.errors import (
    BenchmarkFailed,
    BuildFailed,
    ConfigError,
    StageFailed,
)
from pipeline.publish import ArtifactPublisher
from tools.github import actions
from tools.machine import BoostControlError, CpuBoost

from .model import (
    BENCHMARKED,
    BUILT,
    COMMENTED,
    COMPARED,
    DONE,
    FAILURE,
    LOGGED_FALLBACK,
    PACKAGED,
    PUBLISHED,
    PipelineRequest,
    PipelineResult,
    RunPlan,
)
from .plan import plan_run
from .record import package_artifacts
from .runner import run_invocations

logger = logging.getLogger(__name__)


@dataclass
class RunDependencies:
    """Collaborators with side effects outside this process.

    Built by :func:`pipeline.wiring.build_run_dependencies`; tests pass fakes.
    """

    publisher: ArtifactPublisher
    fetcher: ComparisonFetcher
    commenter: ResultPublisher
    boost: Optional[CpuBoost] = None
    scratch_dirs: Sequence[Path] = field(default_factory=tuple)


def _set_boost(boost: Optional[CpuBoost], enabled: bool) -> None:
    if boost is None:
        return
    try:
        boost.set(enabled)
        print(f"  ⚙️  CPU boost {'on' if enabled else 'off'}")
    except BoostControlError as e:
        actions.warning(f"Could not turn CPU boost {'on' if enabled else 'off'}: {e}")


def cleanup(boost: Optional[CpuBoost], scratch_dirs: Sequence[Path]) -> List[str]:
    """Restore the machine. Returns error messages instead of raising."""

    errors: List[str] = []
    if boost is not None:
        try:
            boost.disable()
        except BoostControlError as e:
            errors.append(f"cpu boost: {e}")
    for d in scratch_dirs:
        errors.extend(empty_dir(Path(d)))

    for msg in errors:
        logger.warning("cleanup: %s", msg)
    return errors


def _dry_run_artifacts(plan: RunPlan) -> List[ResultArtifact]:
    return [ResultArtifact(path=a.path, published_name=a.published_name) for a in plan.artifacts]


def _execute(req: PipelineRequest, plan: RunPlan, deps: RunDependencies, result: PipelineResult) -> None:
    with actions.group("Build"):
        _set_boost(deps.boost, True)
        if req.skip_build:
            print("  (skip-build: using existing build)")
        else:
            result.executions += run_invocations(plan.build, dry_run=req.dry_run, error_cls=BuildFailed)
        result.advance(BUILT)

    # Measurements run with boost off.
    _set_boost(deps.boost, False)

    with actions.group("Benchmark"):
        print(f"  Baseline: {plan.baseline_name}")
        print(f"  Filter  : {plan.bench_filter or '(full suite)'}")
        result.executions += run_invocations(plan.bench, dry_run=req.dry_run, error_cls=BenchmarkFailed)
        result.advance(BENCHMARKED)

    with actions.group("Package"):
        if req.dry_run:
            result.artifacts = _dry_run_artifacts(plan)
        else:
            result.artifacts = package_artifacts(plan.raw_result, plan.results_dir, plan.artifacts)
        result.advance(PACKAGED)

    with actions.group("Upload"):
        result.uploaded_keys = deps.publisher.publish(result.artifacts, dry_run=req.dry_run)
        result.advance(PUBLISHED)

    if req.dry_run:
        print("  (dry-run: skipping comparison and comment)")
        result.advance(DONE)
        return

    report = deps.fetcher.fetch(plan.comparison)
    result.report = report
    result.advance(COMPARED)
    kind = "diff" if report.referenced else "single-baseline"
    print(f"  📊 {kind} report for {report.pair.current} ({report.source})")

    if req.skip_comment:
        print(wrap_report(report.markdown))
        result.advance(LOGGED_FALLBACK)
    else:
        outcome = deps.commenter.publish(report, plan.comment_target)
        result.comment = outcome
        result.advance(COMMENTED if outcome.ok else LOGGED_FALLBACK)

    result.advance(DONE)


def run_pipeline(req: PipelineRequest, cfg: PipelineConfig, deps: RunDependencies) -> PipelineResult:
    """Run every stage for ``req.trigger`` and return the outcome.

    Raises ConfigError (before any stage runs) if the trigger cannot be planned,
    e.g. a branch name that is not safe to use as a file name.
    """

    try:
        plan = plan_run(req.trigger, cfg)
    except ValueError as e:
        raise ConfigError(str(e)) from e
    result = PipelineResult(plan=plan)

    t = req.trigger
    print(f"\n🚀 Benchmark run: {t.event} @ {t.sha}")
    if t.is_pull_request:
        print(f"  Pull request: #{t.pr_number} (published as {plan.published_identifier})")
    else:
        print(f"  Branch      : {t.branch}")

    try:
        _execute(req, plan, deps, result)
    except StageFailed as e:
        result.status = FAILURE
        result.failed_stage = e.stage
        result.error = e.message
        actions.error(f"{e.stage} failed: {e.message}")
    finally:
        result.cleanup_errors = cleanup(deps.boost, deps.scratch_dirs)

    if result.ok:
        print(f"✅ Done ({result.state})")
    else:
        print(f"❌ Failed at {result.failed_stage} (last state: {result.state})")
    return result


__all__ = ["RunDependencies", "cleanup", "run_pipeline"]
