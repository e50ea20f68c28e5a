"""pipeline.compare

Comparison fetcher.

Resolves the previous baseline and obtains a rendered report. The fallback
chain never fails a run for lack of data:

1. ``previous`` known -> remote diff report (``/compare/<previous>/<current>``)
2. no previous, or the service does not know it -> remote single-baseline
   report (``/compare/<current>``)
3. the service does not know ``current`` either -> local single-baseline
   rendering with ``summarize markdown-report``
4. local rendering unavailable -> a placeholder report naming ``current``

Only a transport failure of the service aborts the run; it means the
infrastructure is broken, not that data is missing.

History precondition
--------------------
On the branch path the previous commit is ``HEAD~1`` of the checkout (for a
merge commit that is its first parent, i.e. the previous state of the
branch). The checkout must therefore contain at least two commits. A shallow
checkout that does not is deepened by one commit; if the parent still cannot
be resolved the comparison proceeds without a previous baseline.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from bench_ci.domain import ComparisonPair, Report
from pipeline.execution.model import ComparisonSpec
from tools import core_git
from tools.compare.client import ComparisonClient, ComparisonTransportError
from tools.compare.local import LocalRenderError, LocalReportRenderer

from .errors import ComparisonUnavailable

logger = logging.getLogger(__name__)

MIN_HISTORY_COMMITS = 2


class GitHistory:
    """Local-history lookups for one checkout."""

    def __init__(self, repo_root: Path, *, fetch_first: bool = True) -> None:
        self.repo_root = Path(repo_root)
        self.fetch_first = fetch_first

    def ensure_depth(self, min_commits: int = MIN_HISTORY_COMMITS) -> bool:
        """Make sure at least *min_commits* are reachable from HEAD."""
        count = core_git.commit_count(self.repo_root)
        if count is not None and count >= min_commits:
            return True
        if core_git.is_shallow_repository(self.repo_root):
            logger.info("shallow checkout with %s commit(s); deepening by %d", count, min_commits - 1)
            core_git.fetch(self.repo_root, deepen=min_commits - 1)
            count = core_git.commit_count(self.repo_root)
        return count is not None and count >= min_commits

    def parent_of(self, current: str, revision: str = "HEAD~1") -> Optional[str]:
        """Resolve *revision* relative to *current*; None when history is insufficient."""
        if self.fetch_first:
            res = core_git.fetch(self.repo_root)
            if not res.ok:
                logger.warning("git fetch failed (%s); using local history only", res.exit_code)

        if not self.ensure_depth():
            logger.warning("checkout has fewer than %d commits; no previous commit", MIN_HISTORY_COMMITS)
            return None

        head = core_git.get_git_commit(self.repo_root)
        if revision.startswith("HEAD") and head and current and head != current:
            # Checked-out HEAD is not the benchmarked commit; anchor on the commit itself.
            logger.warning("HEAD %s differs from %s; resolving parent of %s", head, current, current)
            revision = current + revision[len("HEAD"):]

        return core_git.resolve_revision(self.repo_root, revision)


def placeholder_report(current: str) -> str:
    return (
        f"No comparison data is available for `{current}` yet.\n\n"
        "The results were uploaded; a report will be available once the "
        "comparison service has indexed them."
    )


class ComparisonFetcher:
    def __init__(
        self,
        client: Optional[ComparisonClient],
        *,
        history: Optional[GitHistory] = None,
        local: Optional[LocalReportRenderer] = None,
    ) -> None:
        self.client = client
        self.history = history
        self.local = local

    def resolve_pair(self, spec: ComparisonSpec) -> ComparisonPair:
        if spec.previous:
            return ComparisonPair(current=spec.current, previous=spec.previous)
        previous: Optional[str] = None
        if spec.previous_revision and self.history is not None:
            previous = self.history.parent_of(spec.current, spec.previous_revision)
        return ComparisonPair(current=spec.current, previous=previous)

    def fetch(self, spec: ComparisonSpec, *, pair: Optional[ComparisonPair] = None) -> Report:
        """Obtain a report for *spec*. Raises ComparisonUnavailable on transport errors."""
        if self.client is None:
            raise ComparisonUnavailable("no comparison service configured (BENCH_COMPARE_URL)")
        pair = pair or self.resolve_pair(spec)
        try:
            if pair.previous:
                print(f"  Compare : {pair.previous} -> {pair.current}")
                markdown = self.client.fetch_comparison(pair.current, pair.previous)
                if markdown is not None:
                    return Report(markdown=markdown, pair=pair, referenced=True, source="remote")
                logger.info("no comparable baseline for %s; requesting single-baseline report", pair.previous)
            else:
                logger.info("no previous baseline for %s; requesting single-baseline report", pair.current)

            single = pair.without_previous()
            markdown = self.client.fetch_single(single.current)
            if markdown is not None:
                return Report(markdown=markdown, pair=single, referenced=False, source="remote")
        except ComparisonTransportError as e:
            raise ComparisonUnavailable(str(e)) from e

        return self._local_single(spec, pair.without_previous())

    def render_local(self, spec: ComparisonSpec) -> Optional[Report]:
        """Render from local results (before or instead of publishing)."""
        if self.local is None or not spec.local_current:
            return None
        previous = spec.local_previous
        if previous and not self.local.has_baseline(previous):
            previous = None
        markdown = self.local.render(spec.local_current, previous)
        if markdown is None:
            return None
        return Report(
            markdown=markdown,
            pair=ComparisonPair(current=spec.current, previous=spec.previous if previous else None),
            referenced=bool(previous),
            source="local",
        )

    def _local_single(self, spec: ComparisonSpec, pair: ComparisonPair) -> Report:
        if self.local is not None and spec.local_current:
            try:
                markdown = self.local.render(spec.local_current)
            except LocalRenderError as e:
                logger.warning("local report rendering failed: %s", e)
                markdown = None
            if markdown is not None:
                return Report(markdown=markdown, pair=pair, referenced=False, source="local")
        return Report(markdown=placeholder_report(pair.current), pair=pair, referenced=False, source="local")
