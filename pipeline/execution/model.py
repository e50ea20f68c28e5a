"""pipeline.execution.model

Shared data structures for a pipeline run.

The execution layer is split into:

* :mod:`pipeline.execution.plan`    – pure planning (what to run, under which names)
* :mod:`pipeline.execution.runner`  – subprocess execution (build, bench, pack)
* :mod:`pipeline.execution.record`  – filesystem side effects (packaging)
* :mod:`pipeline.execution.run_pipeline` – the stage sequence and cleanup

These dataclasses intentionally contain no side effects so they can be used
freely across the planner/runner/recorder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from bench_ci.domain import CommentOutcome, CommentTarget, Report, ResultArtifact, TriggerContext


def now_iso() -> str:
    """Return current UTC time as ISO-8601 string."""

    return datetime.now(timezone.utc).isoformat()


# Run states, in order. A run that fails stops at the last state it reached.
TRIGGERED = "triggered"
BUILT = "built"
BENCHMARKED = "benchmarked"
PACKAGED = "packaged"
PUBLISHED = "published"
COMPARED = "compared"
COMMENTED = "commented"
LOGGED_FALLBACK = "logged_fallback"
DONE = "done"

RUN_STATES: Sequence[str] = (
    TRIGGERED,
    BUILT,
    BENCHMARKED,
    PACKAGED,
    PUBLISHED,
    COMPARED,
    COMMENTED,
    LOGGED_FALLBACK,
    DONE,
)

SUCCESS = "success"
FAILURE = "failed"


@dataclass(frozen=True)
class CommandInvocation:
    """A planned external command."""

    step: str
    cmd: List[str]
    cwd: Path

    @property
    def command_str(self) -> str:
        return " ".join(self.cmd)


@dataclass(frozen=True)
class CommandExecution:
    """The result of executing a command invocation."""

    invocation: CommandInvocation
    exit_code: int
    started: str
    finished: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class PlannedArtifact:
    """A file the packager will write and the name it is published under."""

    identifier: str
    path: Path
    published_name: str


@dataclass(frozen=True)
class ComparisonSpec:
    """What to compare, decided before anything runs.

    ``previous`` is a fixed baseline name (PR path). On the branch path it is
    unknown until local history is inspected, so ``previous_revision`` names
    the git revision to resolve instead (``HEAD~1``).
    """

    current: str
    previous: Optional[str] = None
    previous_revision: Optional[str] = None

    # Names used when rendering locally from <target>/criterion.
    local_current: Optional[str] = None
    local_previous: Optional[str] = None


@dataclass(frozen=True)
class RunPlan:
    """Everything decided up front for one run."""

    trigger: TriggerContext
    baseline_name: str
    published_identifier: str
    bench_filter: Optional[str]
    build: List[CommandInvocation]
    bench: List[CommandInvocation]
    raw_result: Path
    results_dir: Path
    artifacts: List[PlannedArtifact]
    comparison: ComparisonSpec
    comment_target: CommentTarget

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trigger": self.trigger.to_dict(),
            "baseline_name": self.baseline_name,
            "published_identifier": self.published_identifier,
            "bench_filter": self.bench_filter,
            "build": [inv.command_str for inv in self.build],
            "bench": [inv.command_str for inv in self.bench],
            "raw_result": str(self.raw_result),
            "results_dir": str(self.results_dir),
            "artifacts": [
                {"path": str(a.path), "published_name": a.published_name} for a in self.artifacts
            ],
            "comparison": {
                "current": self.comparison.current,
                "previous": self.comparison.previous,
                "previous_revision": self.comparison.previous_revision,
            },
            "comment_target": self.comment_target.to_dict(),
        }


@dataclass(frozen=True)
class PipelineRequest:
    """Parameters for one pipeline run."""

    trigger: TriggerContext

    # execution
    dry_run: bool = False
    skip_build: bool = False
    skip_comment: bool = False


@dataclass
class PipelineResult:
    """Outcome of a run. ``state`` is the last state reached."""

    status: str = SUCCESS
    state: str = TRIGGERED
    failed_stage: Optional[str] = None
    error: Optional[str] = None

    plan: Optional[RunPlan] = None
    executions: List[CommandExecution] = field(default_factory=list)
    artifacts: List[ResultArtifact] = field(default_factory=list)
    uploaded_keys: List[str] = field(default_factory=list)
    report: Optional[Report] = None
    comment: Optional[CommentOutcome] = None
    cleanup_errors: List[str] = field(default_factory=list)
    reached: List[str] = field(default_factory=lambda: [TRIGGERED])

    def advance(self, state: str) -> None:
        self.state = state
        self.reached.append(state)

    @property
    def ok(self) -> bool:
        return self.status == SUCCESS

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "state": self.state,
            "reached": list(self.reached),
            "failed_stage": self.failed_stage,
            "error": self.error,
            "artifacts": [a.to_dict() for a in self.artifacts],
            "uploaded_keys": list(self.uploaded_keys),
            "report": (
                {
                    "pair": self.report.pair.to_dict(),
                    "referenced": self.report.referenced,
                    "source": self.report.source,
                }
                if self.report
                else None
            ),
            "comment": self.comment.to_dict() if self.comment else None,
            "cleanup_errors": list(self.cleanup_errors),
        }
