from __future__ import annotations

from pathlib import Path

from bench_ci.io import write_text_atomic
from pipeline.errors import ConfigError, StageFailed
from pipeline.pipeline import BenchmarkPipeline
from tools.compare.local import LocalRenderError


def run_report(args, pipeline: BenchmarkPipeline) -> int:
    if not args.current:
        raise ConfigError("report mode requires --current")

    try:
        report = pipeline.report(args.current, args.previous, local=bool(args.local))
    except (StageFailed, LocalRenderError) as e:
        print(f"❌ {e}")
        return 1
    if report is None:
        print(f"⚠️ No local result for '{args.current}'.")
        return 1

    if args.output:
        out = Path(args.output)
        write_text_atomic(out, report.markdown)
        print(f"📝 Wrote {'diff' if report.referenced else 'single-baseline'} report -> {out}")
    else:
        print(report.markdown)
    return 0
