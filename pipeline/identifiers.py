"""pipeline.identifiers

Pure naming / identifier helpers (the baseline namer).

Why this module exists
----------------------
The baseline name is the join key between every stage: the benchmark tool
saves under it, the packager copies from it, the publisher uploads under it
and the comparison service looks it up by URL. Deriving it in one place
guarantees the stages agree.

Rules
-----
* branch path (push, or dispatch without a PR): the branch name with every
  ``/`` replaced by ``-`` (``feature/x`` -> ``feature-x``)
* PR path: the literal ``branch`` while benchmarking; the artifact is
  published as ``pr-<number>``
"""

from __future__ import annotations

from bench_ci.domain import TriggerContext
from bench_ci.io import ARTIFACT_EXTENSION, artifact_filename

__all__ = [
    "PR_BASELINE_NAME",
    "normalize_branch_name",
    "baseline_name",
    "pr_baseline_name",
    "published_identifier",
    "published_filename",
    "is_path_safe",
]


# Kept generic so the filtered PR run always saves under the same name.
PR_BASELINE_NAME = "branch"

_UNSAFE_CHARS = ("/", "\\", "\0", "?", "#", "%")


def normalize_branch_name(branch: str) -> str:
    """Replace every ``/`` with ``-``.

    Examples
    --------
    "master" -> "master"
    "feature/x" -> "feature-x"
    "user/fix/cpu-boost" -> "user-fix-cpu-boost"
    """
    return (branch or "").strip().replace("/", "-")


def is_path_safe(name: str) -> bool:
    """True if *name* can be used as a single filesystem and URL path segment."""
    if not name or name in (".", ".."):
        return False
    if ".." in name:
        return False
    if any(ch in name for ch in _UNSAFE_CHARS):
        return False
    return not any(ch.isspace() for ch in name)


def _checked(name: str, *, source: str) -> str:
    if not is_path_safe(name):
        raise ValueError(f"Cannot derive a path-safe baseline name from {source!r} (got {name!r}).")
    return name


def pr_baseline_name(pr_number: int) -> str:
    return f"pr-{int(pr_number)}"


def baseline_name(trigger: TriggerContext) -> str:
    """Name the benchmark tool saves results under for this run."""
    if trigger.is_pull_request:
        return PR_BASELINE_NAME
    return _checked(normalize_branch_name(trigger.branch), source=trigger.branch)


def published_identifier(trigger: TriggerContext) -> str:
    """Identifier the run's branch-level artifact is published under.

    Same as :func:`baseline_name` except on the PR path, where the generic
    ``branch`` is renamed to ``pr-<number>``.
    """
    if trigger.is_pull_request:
        return pr_baseline_name(int(trigger.pr_number))
    return baseline_name(trigger)


def published_filename(local_filename: str, trigger: TriggerContext) -> str:
    """Map a packaged file name to the object name it is uploaded as."""
    if trigger.is_pull_request and local_filename == artifact_filename(PR_BASELINE_NAME):
        return artifact_filename(published_identifier(trigger))
    if not local_filename.endswith(ARTIFACT_EXTENSION):
        raise ValueError(f"Unexpected artifact file name: {local_filename!r}")
    return local_filename
