"""bench_ci.domain

Domain objects that form the *contract* between pipeline stages.

Key idea
--------
Every branching decision in a run (baseline naming, benchmark filter, comment
routing) derives from one immutable :class:`TriggerContext`. The remaining
types describe what flows between stages: artifacts, the comparison pair, the
rendered report and the outcome of posting it.
"""

from __future__ import annotations

from .results import (
    COMMIT_TARGET,
    FAILED,
    POSTED,
    PULL_REQUEST_TARGET,
    UNAUTHORIZED,
    CommentOutcome,
    CommentTarget,
    ComparisonPair,
    Report,
    ResultArtifact,
)
from .trigger import DISPATCH_EVENT, PUSH_EVENT, TriggerContext

__all__ = [
    "COMMIT_TARGET",
    "CommentOutcome",
    "CommentTarget",
    "ComparisonPair",
    "DISPATCH_EVENT",
    "FAILED",
    "POSTED",
    "PULL_REQUEST_TARGET",
    "PUSH_EVENT",
    "Report",
    "ResultArtifact",
    "TriggerContext",
    "UNAUTHORIZED",
]
