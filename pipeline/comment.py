"""pipeline.comment

Result publisher: posts the report as a comment on the pull request or the
commit.

Posting is best-effort. Runs from forks get a read-only token, so a refused
comment is an expected outcome: it is reported as a warning annotation and
the full comment body is written to the log instead. The run still succeeds.
"""

from __future__ import annotations

from typing import Optional, Protocol

from bench_ci.domain import PULL_REQUEST_TARGET, UNAUTHORIZED, CommentOutcome, CommentTarget, Report
from tools.github import actions
from tools.github.client import GitHubApiError, GitHubAuthError, split_repository

SUMMARY = "Benchmark results"
COMMENT_ID_OUTPUT = "comment-id"


class CommentClient(Protocol):
    def create_issue_comment(self, owner: str, repo: str, issue_number: int, body: str) -> int: ...

    def create_commit_comment(self, owner: str, repo: str, commit_sha: str, body: str) -> int: ...


def wrap_report(markdown: str, *, summary: str = SUMMARY) -> str:
    """Fold the report into a collapsed ``<details>`` block."""
    return f"<details><summary>{summary}</summary>\n\n{markdown}\n\n</details>"


class ResultPublisher:
    def __init__(self, client: Optional[CommentClient], repository: Optional[str]) -> None:
        self.client = client
        self.repository = repository

    def publish(self, report: Report, target: CommentTarget) -> CommentOutcome:
        return self.post_body(wrap_report(report.markdown), target)

    def post_body(self, body: str, target: CommentTarget) -> CommentOutcome:
        outcome = self._post(body, target)
        if outcome.ok:
            try:
                actions.set_output(COMMENT_ID_OUTPUT, outcome.comment_id)
            except OSError as e:
                # The comment exists; only the step output is lost.
                actions.warning(f"Could not write {COMMENT_ID_OUTPUT} step output: {e}")
        else:
            log_fallback(body, outcome)
        return outcome

    def _post(self, body: str, target: CommentTarget) -> CommentOutcome:
        if self.client is None:
            return CommentOutcome.failed("no GitHub client configured")
        try:
            owner, repo = split_repository(self.repository or "")
        except ValueError as e:
            return CommentOutcome.failed(str(e))

        try:
            if target.kind == PULL_REQUEST_TARGET:
                comment_id = self.client.create_issue_comment(owner, repo, int(target.number), body)
            else:
                comment_id = self.client.create_commit_comment(owner, repo, str(target.sha), body)
        except GitHubAuthError as e:
            return CommentOutcome.unauthorized(str(e))
        except GitHubApiError as e:
            return CommentOutcome.failed(str(e))

        print(f"  💬 Created comment id '{comment_id}' on {target.describe()} in '{owner}/{repo}'.")
        return CommentOutcome.posted(comment_id)


def log_fallback(body: str, outcome: CommentOutcome) -> None:
    """Warn, then print *body* verbatim so the results are still in the log."""

    actions.warning(f"Failed to comment: {outcome.error}")
    if outcome.kind == UNAUTHORIZED:
        print("Commenting is not possible from forks.")
    print("Logging here instead.")
    print(body)
