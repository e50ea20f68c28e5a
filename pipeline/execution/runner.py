"""pipeline.execution.runner

Subprocess execution for :mod:`pipeline.execution.run_pipeline`.

Rule
----
Only this module starts the build and benchmark commands. Output is
streamed so long cargo runs are visible live in the CI log.
"""

from __future__ import annotations

from typing import List, Sequence, Type

from pipeline.errors import StageFailed
from tools.core_cmd import run_cmd

from .model import CommandExecution, CommandInvocation, now_iso


def run_invocation(inv: CommandInvocation, *, dry_run: bool) -> CommandExecution:
    """Execute one command invocation."""

    print("  Command :", inv.command_str)
    print("  Cwd     :", inv.cwd)
    if dry_run:
        print("  (dry-run: not executing)")
        t = now_iso()
        return CommandExecution(invocation=inv, exit_code=0, started=t, finished=t)

    started = now_iso()
    res = run_cmd(
        list(inv.cmd),
        cwd=inv.cwd,
        env={"CARGO_TERM_COLOR": "always"},
        capture=False,
    )
    finished = now_iso()
    return CommandExecution(
        invocation=inv,
        exit_code=int(res.exit_code),
        started=started,
        finished=finished,
    )


def run_invocations(
    invocations: Sequence[CommandInvocation],
    *,
    dry_run: bool,
    error_cls: Type[StageFailed],
) -> List[CommandExecution]:
    """Run invocations in order; the first non-zero exit raises *error_cls*.

    No retries: a failed benchmark leaves the machine in an unknown state,
    so the run stops and the next trigger starts over.
    """

    executions: List[CommandExecution] = []
    for inv in invocations:
        try:
            ex = run_invocation(inv, dry_run=dry_run)
        except (FileNotFoundError, PermissionError) as e:
            raise error_cls(f"{inv.step}: cannot execute {inv.cmd[0]!r}: {e}") from e
        executions.append(ex)
        if not ex.ok:
            raise error_cls(f"{inv.step}: `{inv.command_str}` exited with code {ex.exit_code}")
    return executions
