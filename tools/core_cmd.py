"""tools/core_cmd.py

Command-execution helpers shared across the cargo and git adapters.

This module deliberately avoids tool-specific knowledge. It provides:

* :func:`run_cmd` - run subprocesses (no shell=True), captured or streamed.
"""

from __future__ import annotations

import os
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

TIMEOUT_EXIT_CODE = 124


@dataclass(frozen=True)
class CmdResult:
    exit_code: int
    elapsed_seconds: float
    command_str: str
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def run_cmd(
    cmd: List[str],
    *,
    cwd: Optional[Path] = None,
    timeout_seconds: int = 0,
    env: Optional[Dict[str, str]] = None,
    capture: bool = True,
    input_text: Optional[str] = None,
    print_stderr: bool = True,
    print_stdout: bool = False,
) -> CmdResult:
    """Run a subprocess (no ``shell=True``).

    With ``capture=False`` output streams straight to this process's
    stdout/stderr (long cargo runs should be visible live in the CI log) and
    the returned ``stdout``/``stderr`` are empty.

    Never raises on non-zero exit codes; only raises on execution errors
    (e.g. binary not found). A timeout is reported as exit code 124.
    """
    t0 = time.time()

    # If env is provided, merge it onto the current process environment.
    env2 = None
    if env is not None:
        env2 = os.environ.copy()
        env2.update(env)

    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            text=True,
            capture_output=capture,
            input=input_text,
            timeout=timeout_seconds if timeout_seconds and timeout_seconds > 0 else None,
            env=env2,
        )
    except subprocess.TimeoutExpired as e:
        return CmdResult(
            exit_code=TIMEOUT_EXIT_CODE,
            elapsed_seconds=time.time() - t0,
            command_str=" ".join(cmd),
            stdout=e.stdout if isinstance(e.stdout, str) else "",
            stderr=e.stderr if isinstance(e.stderr, str) else "",
        )
    elapsed = time.time() - t0

    stdout = (proc.stdout or "") if capture else ""
    stderr = (proc.stderr or "") if capture else ""

    # Many tools write progress to stderr even on success.
    if capture and print_stderr and stderr:
        print(stderr, file=sys.stderr)
    if capture and print_stdout and stdout:
        print(stdout)

    return CmdResult(
        exit_code=proc.returncode,
        elapsed_seconds=elapsed,
        command_str=" ".join(cmd),
        stdout=stdout,
        stderr=stderr,
    )
