from __future__ import annotations

from cli.common import print_json, trigger_from_args
from pipeline.pipeline import BenchmarkPipeline


def run_plan(args, pipeline: BenchmarkPipeline) -> int:
    """Print the resolved plan. Nothing is executed."""
    plan = pipeline.plan(trigger_from_args(args))
    print_json(plan.to_dict())
    return 0
