from __future__ import annotations

from pathlib import Path

from bench_ci.io import read_text
from cli.common import trigger_from_args
from pipeline.comment import wrap_report
from pipeline.errors import ConfigError
from pipeline.execution.plan import comment_target_for
from pipeline.pipeline import BenchmarkPipeline


def run_comment(args, pipeline: BenchmarkPipeline) -> int:
    """Post a report file. A refused comment is logged, not an error."""
    if not args.report_file:
        raise ConfigError("comment mode requires --report-file")
    path = Path(args.report_file)
    if not path.is_file():
        raise ConfigError(f"Report file not found: {path}")

    target = comment_target_for(trigger_from_args(args))
    pipeline.comment(wrap_report(read_text(path)), target)
    return 0
