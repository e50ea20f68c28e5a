"""pipeline.execution.plan

Pure planning for :mod:`pipeline.execution.run_pipeline`.

Design rules
------------
This module should stay *pure*:
* no subprocess execution
* no filesystem access
* no network calls

Every "is this a pull-request run?" decision (filter, naming, artifact set,
comparison inputs, comment routing) is made here from the one
:class:`~bench_ci.domain.TriggerContext`, so they cannot disagree.
"""

from __future__ import annotations

from typing import List, Optional

from bench_ci.domain import CommentTarget, TriggerContext
from bench_ci.io import ResultsLayout, artifact_filename
from pipeline.benchmarks import BENCH_TARGETS, benchmark_filter
from pipeline.config import PipelineConfig
from pipeline.identifiers import baseline_name, published_filename, published_identifier

from .model import CommandInvocation, ComparisonSpec, PlannedArtifact, RunPlan

PREVIOUS_REVISION = "HEAD~1"


def build_invocations(cargo: str, layout: ResultsLayout) -> List[CommandInvocation]:
    return [
        CommandInvocation(step="build", cmd=[cargo, "build", "--release"], cwd=layout.crate_dir),
    ]


def bench_command(cargo: str, name: str, bench_filter: Optional[str]) -> List[str]:
    """``cargo bench --bench generic --bench special -- --save-baseline <name> [<filter>]``."""
    cmd = [cargo, "bench"]
    for target in BENCH_TARGETS:
        cmd += ["--bench", target]
    cmd += ["--", "--save-baseline", name]
    if bench_filter:
        cmd.append(bench_filter)
    return cmd


def pack_command(cargo: str, name: str) -> List[str]:
    """``cargo run --bin summarize pack <name>`` -> ``<target>/criterion/<name>.json``."""
    return [cargo, "run", "--bin", "summarize", "pack", name]


def bench_invocations(
    cargo: str, layout: ResultsLayout, name: str, bench_filter: Optional[str]
) -> List[CommandInvocation]:
    return [
        CommandInvocation(step="bench", cmd=bench_command(cargo, name, bench_filter), cwd=layout.crate_dir),
        CommandInvocation(step="pack", cmd=pack_command(cargo, name), cwd=layout.crate_dir),
    ]


def plan_artifacts(trigger: TriggerContext, layout: ResultsLayout, name: str) -> List[PlannedArtifact]:
    """Baseline-named copy always; commit-named copy on the branch path only.

    On the PR path the single ``branch.json`` is published as ``pr-<n>.json``.
    """
    identifiers = [name]
    if not trigger.is_pull_request and trigger.sha != name:
        identifiers.append(trigger.sha)

    return [
        PlannedArtifact(
            identifier=ident,
            path=layout.artifact(ident),
            published_name=published_filename(artifact_filename(ident), trigger),
        )
        for ident in identifiers
    ]


def comparison_spec_for(trigger: TriggerContext, *, main_baseline: str, name: str) -> ComparisonSpec:
    """PR: ``pr-<n>`` against the main baseline. Branch: the commit against its parent."""
    if trigger.is_pull_request:
        return ComparisonSpec(
            current=published_identifier(trigger),
            previous=main_baseline,
            local_current=name,
            local_previous=main_baseline,
        )
    return ComparisonSpec(
        current=trigger.sha,
        previous_revision=PREVIOUS_REVISION,
        local_current=name,
    )


def comment_target_for(trigger: TriggerContext) -> CommentTarget:
    if trigger.is_pull_request:
        return CommentTarget.pull_request(int(trigger.pr_number))
    return CommentTarget.commit(trigger.sha)


def plan_run(trigger: TriggerContext, cfg: PipelineConfig) -> RunPlan:
    """Build the complete plan for *trigger*."""

    layout = cfg.layout
    name = baseline_name(trigger)
    bench_filter = benchmark_filter(trigger.is_pull_request)

    return RunPlan(
        trigger=trigger,
        baseline_name=name,
        published_identifier=published_identifier(trigger),
        bench_filter=bench_filter,
        build=build_invocations(cfg.cargo, layout),
        bench=bench_invocations(cfg.cargo, layout, name, bench_filter),
        raw_result=layout.raw_result(name),
        results_dir=layout.results_dir,
        artifacts=plan_artifacts(trigger, layout, name),
        comparison=comparison_spec_for(trigger, main_baseline=cfg.main_baseline, name=name),
        comment_target=comment_target_for(trigger),
    )
