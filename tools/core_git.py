"""tools/core_git.py

Git helpers for the benchmarked checkout.

The comparison stage needs the commit immediately preceding the pushed one.
That only works when the checkout carries enough history, so besides plain
revision lookups this module exposes the primitives used to check (and, for
shallow clones, extend) history depth:

* :func:`get_git_commit` / :func:`resolve_revision`
* :func:`commit_count` / :func:`is_shallow_repository`
* :func:`fetch`
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .core_cmd import CmdResult, run_cmd

GIT_TIMEOUT_SECONDS = 20
GIT_FETCH_TIMEOUT_SECONDS = 300
NOT_FOUND_EXIT_CODE = 127


def _git(repo_path: Path, *args: str, timeout_seconds: int = GIT_TIMEOUT_SECONDS) -> CmdResult:
    cmd = ["git", "-C", str(repo_path), *args]
    try:
        return run_cmd(cmd, timeout_seconds=timeout_seconds, print_stderr=False, print_stdout=False)
    except OSError as e:
        # git missing or repo_path unusable: report like a failed command.
        return CmdResult(
            exit_code=NOT_FOUND_EXIT_CODE,
            elapsed_seconds=0.0,
            command_str=" ".join(cmd),
            stdout="",
            stderr=str(e),
        )


def get_git_commit(repo_path: Path) -> Optional[str]:
    """Return the current commit SHA for the repo at repo_path.

    Returns None if repo_path is not a git repo or git is unavailable.
    """
    return resolve_revision(repo_path, "HEAD")


def resolve_revision(repo_path: Path, rev: str) -> Optional[str]:
    """Resolve *rev* (``HEAD~1``, a branch, a SHA) to a full commit SHA.

    Returns None when the revision does not exist in the local history.
    """
    res = _git(repo_path, "rev-parse", "--verify", "--quiet", f"{rev}^{{commit}}")
    sha = (res.stdout or "").strip()
    return sha if res.exit_code == 0 and sha else None


def commit_count(repo_path: Path, rev: str = "HEAD") -> Optional[int]:
    """Number of commits reachable from *rev* in the local history."""
    res = _git(repo_path, "rev-list", "--count", rev)
    if res.exit_code != 0:
        return None
    try:
        return int((res.stdout or "").strip())
    except ValueError:
        return None


def is_shallow_repository(repo_path: Path) -> bool:
    res = _git(repo_path, "rev-parse", "--is-shallow-repository")
    return res.exit_code == 0 and (res.stdout or "").strip() == "true"


def fetch(repo_path: Path, *, deepen: Optional[int] = None, remote: str = "origin") -> CmdResult:
    """``git fetch`` (optionally ``--deepen=N``). Never raises on failure."""
    args: List[str] = ["fetch", "--quiet"]
    if deepen:
        args.append(f"--deepen={int(deepen)}")
    args.append(remote)
    return _git(repo_path, *args, timeout_seconds=GIT_FETCH_TIMEOUT_SECONDS)
