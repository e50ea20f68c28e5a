"""tools/compare/local.py

Local report rendering through the benchmark crate's ``summarize`` binary:

  cargo run --bin summarize markdown-report <current>.json [<previous>.json] --report-name <name>

``summarize`` resolves the JSON names against ``<target>/criterion`` and writes
``<target>/criterion/<name>.md``. Some versions print the report to stdout
instead, so stdout is used when the file does not appear.
"""

from __future__ import annotations

from typing import List, Optional

from bench_ci.io import ResultsLayout, artifact_filename, read_text

from ..core_cmd import CmdResult, run_cmd

DEFAULT_REPORT_NAME = "report"
SUMMARIZE_TIMEOUT_SECONDS = 1800


class LocalRenderError(RuntimeError):
    """``summarize markdown-report`` exited non-zero."""


def build_markdown_report_command(
    cargo: str,
    current: str,
    previous: Optional[str] = None,
    *,
    report_name: str = DEFAULT_REPORT_NAME,
) -> List[str]:
    cmd = [cargo, "run", "--bin", "summarize", "markdown-report", artifact_filename(current)]
    if previous:
        cmd.append(artifact_filename(previous))
    cmd += ["--report-name", report_name]
    return cmd


class LocalReportRenderer:
    def __init__(
        self,
        layout: ResultsLayout,
        *,
        cargo: str = "cargo",
        report_name: str = DEFAULT_REPORT_NAME,
    ) -> None:
        self.layout = layout
        self.cargo = cargo
        self.report_name = report_name

    def has_baseline(self, identifier: str) -> bool:
        return self.layout.raw_result(identifier).is_file()

    def render(self, current: str, previous: Optional[str] = None) -> Optional[str]:
        """Render a report; returns None if *current* has no local result.

        A *previous* without a local result is dropped (single-baseline report).
        """
        if not self.has_baseline(current):
            return None
        if previous and not self.has_baseline(previous):
            previous = None

        cmd = build_markdown_report_command(
            self.cargo, current, previous, report_name=self.report_name
        )
        report_path = self.layout.report(self.report_name)
        if report_path.exists():
            report_path.unlink()

        try:
            res: CmdResult = run_cmd(
                cmd,
                cwd=self.layout.crate_dir,
                timeout_seconds=SUMMARIZE_TIMEOUT_SECONDS,
                print_stderr=True,
            )
        except OSError as e:
            raise LocalRenderError(f"cannot run {cmd[0]!r}: {e}") from e
        if not res.ok:
            raise LocalRenderError(f"{res.command_str} exited with {res.exit_code}")

        if report_path.is_file():
            return read_text(report_path)
        return res.stdout
