"""bench_ci.domain.trigger

The event that started a pipeline run.

A run is started either by a push to the main branch or by a manual
``workflow_dispatch``. A dispatch may be scoped to a pull request (an external
bot dispatches the workflow when someone asks for benchmarks on a PR) and may
override the ref that is checked out.

Every downstream decision keys on *one* question: is this a pull-request run?
That question is answered here, once, by :attr:`TriggerContext.is_pull_request`.
A dispatch without a PR number follows the branch path exactly like a push.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

PUSH_EVENT = "push"
DISPATCH_EVENT = "workflow_dispatch"

_HEADS_PREFIX = "refs/heads/"


@dataclass(frozen=True)
class TriggerContext:
    """Immutable description of what triggered the run.

    Attributes
    ----------
    event:
        ``"push"`` or ``"workflow_dispatch"``.
    sha:
        Commit SHA the run benchmarks (``GITHUB_SHA``).
    ref:
        Workflow ref, e.g. ``refs/heads/master``.
    head_ref:
        ``GITHUB_HEAD_REF`` when the platform provides one; preferred over
        ``ref`` when deriving the branch name.
    pr_number:
        Pull request number (dispatch only).
    ref_override:
        Ref explicitly checked out for a dispatch (dispatch only).
    """

    event: str
    sha: str
    ref: str = ""
    head_ref: Optional[str] = None
    pr_number: Optional[int] = None
    ref_override: Optional[str] = None

    def __post_init__(self) -> None:
        if self.event not in (PUSH_EVENT, DISPATCH_EVENT):
            raise ValueError(f"Unsupported trigger event: {self.event!r}")
        if not (self.sha or "").strip():
            raise ValueError("Trigger context requires a commit SHA.")
        if self.event == PUSH_EVENT and (self.pr_number is not None or self.ref_override):
            raise ValueError("A push trigger cannot carry a pull request number or ref override.")
        if self.pr_number is not None:
            # bool is a subclass of int; reject it explicitly.
            if isinstance(self.pr_number, bool) or not isinstance(self.pr_number, int):
                raise ValueError(f"pr_number must be an int, got {self.pr_number!r}")
            if self.pr_number <= 0:
                raise ValueError(f"pr_number must be positive, got {self.pr_number}")

    @classmethod
    def push(cls, *, sha: str, ref: str, head_ref: Optional[str] = None) -> "TriggerContext":
        return cls(event=PUSH_EVENT, sha=sha, ref=ref, head_ref=head_ref or None)

    @classmethod
    def dispatch(
        cls,
        *,
        sha: str,
        ref: str = "",
        pr_number: Optional[int] = None,
        ref_override: Optional[str] = None,
        head_ref: Optional[str] = None,
    ) -> "TriggerContext":
        return cls(
            event=DISPATCH_EVENT,
            sha=sha,
            ref=ref,
            head_ref=head_ref or None,
            pr_number=pr_number,
            ref_override=ref_override or None,
        )

    @property
    def is_pull_request(self) -> bool:
        return self.pr_number is not None

    @property
    def branch(self) -> str:
        """Branch name as the platform reports it (not normalized).

        ``GITHUB_HEAD_REF`` wins when set; otherwise ``refs/heads/`` is
        stripped from the ref.
        """
        if self.head_ref:
            return self.head_ref
        ref = self.ref or ""
        if ref.startswith(_HEADS_PREFIX):
            return ref[len(_HEADS_PREFIX):]
        return ref

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.event,
            "sha": self.sha,
            "ref": self.ref,
            "head_ref": self.head_ref,
            "pr_number": self.pr_number,
            "ref_override": self.ref_override,
            "is_pull_request": self.is_pull_request,
        }
