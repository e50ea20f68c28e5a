#!/usr/bin/env python3
"""
CLI for the continuous benchmarking pipeline.

Modes:
  1) run     - build, benchmark, publish, compare and comment (CI default)
  2) plan    - print what a run would do for the current trigger, as JSON
  3) report  - fetch (or render locally) a comparison report
  4) comment - post an existing report file to the PR or commit

Usage:
  python bench_cli.py                                  # inside GitHub Actions
  python bench_cli.py --mode plan --event push --ref refs/heads/feature/x --sha deadbeef
  python bench_cli.py --mode run --event workflow_dispatch --pr-number 17 --sha cafebabe --dry-run
  python bench_cli.py --mode report --current pr-17 --previous master
  python bench_cli.py --mode report --local --current branch --previous master --output report.md
  python bench_cli.py --mode comment --pr-number 17 --event workflow_dispatch --report-file report.md
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from cli.args.base import add_base_args
from cli.args.report import add_report_args
from cli.dispatch import dispatch
from pipeline.errors import ConfigError
from pipeline.wiring import build_pipeline


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Continuous benchmarking: run, publish, compare, comment.")
    add_base_args(parser)
    add_report_args(parser)
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    try:
        # .env is loaded by the composition root so terminal runs behave like CI runs
        pipeline = build_pipeline(repo_root=Path(args.repo_root) if args.repo_root else None)
        code = dispatch(args, pipeline)
    except ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        raise SystemExit(2)
    raise SystemExit(code)


if __name__ == "__main__":
    main()
