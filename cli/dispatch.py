from __future__ import annotations

import argparse

from cli.commands.comment import run_comment
from cli.commands.plan import run_plan
from cli.commands.report import run_report
from cli.commands.run import run_pipeline_mode
from pipeline.pipeline import BenchmarkPipeline


def dispatch(args: argparse.Namespace, pipeline: BenchmarkPipeline) -> int:
    mode = args.mode or "run"

    if mode == "plan":
        return int(run_plan(args, pipeline))
    if mode == "report":
        return int(run_report(args, pipeline))
    if mode == "comment":
        return int(run_comment(args, pipeline))

    # default: the whole pipeline
    return int(run_pipeline_mode(args, pipeline))
