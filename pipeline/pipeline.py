"""pipeline.pipeline

This module defines a *single, high-level* object that represents this repo's
primary capabilities.

Callers (the CLI, CI scripts, tests) should not have to know that a run is
planned in :mod:`pipeline.execution.plan`, executed in
:mod:`pipeline.execution.run_pipeline` and that reports come from
:mod:`pipeline.compare`. The :class:`BenchmarkPipeline` facade gives them one
obvious entrypoint with a small API:

- ``plan(trigger)``: the resolved plan, no side effects
- ``run(request)``: the whole pipeline
- ``report(...)``: fetch or render a comparison report
- ``comment(...)``: post an existing report body to a target

Side-effecting collaborators are built lazily through ``deps_factory`` so
``plan`` works without storage or GitHub credentials.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional

from bench_ci.domain import CommentOutcome, CommentTarget, Report, TriggerContext
from pipeline.config import PipelineConfig
from pipeline.execution.model import ComparisonSpec, PipelineRequest, PipelineResult, RunPlan
from pipeline.execution.plan import plan_run
from pipeline.execution.run_pipeline import RunDependencies, run_pipeline

from .errors import ConfigError


class BenchmarkPipeline:
    """High-level facade over the pipeline.

    Callers should prefer using this object (built via :func:`pipeline.wiring.build_pipeline`)
    rather than importing low-level modules directly.
    """

    def __init__(
        self,
        cfg: PipelineConfig,
        *,
        deps_factory: Callable[..., RunDependencies],
    ) -> None:
        self.cfg = cfg
        self._deps_factory = deps_factory

    def plan(self, trigger: TriggerContext) -> RunPlan:
        try:
            return plan_run(trigger, self.cfg)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    def run(self, req: PipelineRequest) -> PipelineResult:
        deps = self._deps_factory(self.cfg, req.dry_run)
        return run_pipeline(req, self.cfg, deps)

    def report(self, current: str, previous: Optional[str] = None, *, local: bool = False) -> Optional[Report]:
        """Report for explicit identifiers.

        With ``local=True`` the report is rendered from ``<target>/criterion``
        (identifiers are local baseline names); otherwise it comes from the
        comparison service with the usual single-baseline fallbacks.
        """
        deps = self._deps_factory(self.cfg, upload=False, remote=not local)
        spec = ComparisonSpec(
            current=current,
            previous=previous,
            local_current=current,
            local_previous=previous,
        )
        if local:
            return deps.fetcher.render_local(spec)
        return deps.fetcher.fetch(spec)

    def comment(self, body: str, target: CommentTarget) -> CommentOutcome:
        deps = self._deps_factory(self.cfg, upload=False, remote=False)
        return deps.commenter.post_body(body, target)
