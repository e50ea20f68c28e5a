"""bench_ci.domain.results

Values that flow between the later pipeline stages.

Two degrade paths are modeled as *values* rather than exceptions:

* a missing previous baseline is ``ComparisonPair.previous is None``
* a comment that could not be posted is a :class:`CommentOutcome` whose
  ``kind`` is ``"unauthorized"`` or ``"failed"``

Both are expected steady states (first run on a branch, runs from forks) and
must never abort a run.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ResultArtifact:
    """One packaged result file and the name it is published under."""

    path: Path
    published_name: str

    @property
    def local_name(self) -> str:
        return self.path.name

    def to_dict(self) -> Dict[str, Any]:
        return {"path": str(self.path), "published_name": self.published_name}


@dataclass(frozen=True)
class ComparisonPair:
    """(current, previous) identifiers for a comparison request.

    Identifiers are baseline names (``master``, ``pr-17``) or commit SHAs.
    """

    current: str
    previous: Optional[str] = None

    @property
    def has_previous(self) -> bool:
        return bool(self.previous)

    def without_previous(self) -> "ComparisonPair":
        return ComparisonPair(current=self.current, previous=None)

    def to_dict(self) -> Dict[str, Any]:
        return {"current": self.current, "previous": self.previous}


@dataclass(frozen=True)
class Report:
    """Rendered markdown plus where it came from.

    ``referenced`` is False for a single-baseline report (current only, no diff
    column). ``source`` is ``"remote"`` (comparison service) or ``"local"``
    (``summarize markdown-report``).
    """

    markdown: str
    pair: ComparisonPair
    referenced: bool
    source: str = "remote"


PULL_REQUEST_TARGET = "pull_request"
COMMIT_TARGET = "commit"


@dataclass(frozen=True)
class CommentTarget:
    """Where a report comment goes: a pull request thread or a commit."""

    kind: str
    number: Optional[int] = None
    sha: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind == PULL_REQUEST_TARGET:
            if self.number is None:
                raise ValueError("A pull request comment target requires a number.")
        elif self.kind == COMMIT_TARGET:
            if not self.sha:
                raise ValueError("A commit comment target requires a sha.")
        else:
            raise ValueError(f"Unsupported comment target kind: {self.kind!r}")

    @classmethod
    def pull_request(cls, number: int) -> "CommentTarget":
        return cls(kind=PULL_REQUEST_TARGET, number=int(number))

    @classmethod
    def commit(cls, sha: str) -> "CommentTarget":
        return cls(kind=COMMIT_TARGET, sha=str(sha))

    def describe(self) -> str:
        if self.kind == PULL_REQUEST_TARGET:
            return f"issue '{self.number}'"
        return f"commit '{self.sha}'"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "number": self.number, "sha": self.sha}


POSTED = "posted"
UNAUTHORIZED = "unauthorized"
FAILED = "failed"


@dataclass(frozen=True)
class CommentOutcome:
    """Result of trying to post a comment.

    ``unauthorized`` (typically a fork without write credentials) and
    ``failed`` (anything else) are both non-fatal; they differ so callers can
    tell a permission problem from an infrastructure one.
    """

    kind: str
    comment_id: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def posted(cls, comment_id: int) -> "CommentOutcome":
        return cls(kind=POSTED, comment_id=comment_id)

    @classmethod
    def unauthorized(cls, error: str) -> "CommentOutcome":
        return cls(kind=UNAUTHORIZED, error=error)

    @classmethod
    def failed(cls, error: str) -> "CommentOutcome":
        return cls(kind=FAILED, error=error)

    @property
    def ok(self) -> bool:
        return self.kind == POSTED

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "comment_id": self.comment_id, "error": self.error}
