from __future__ import annotations

from cli.common import print_json, trigger_from_args
from pipeline.execution.model import PipelineRequest
from pipeline.pipeline import BenchmarkPipeline


def run_pipeline_mode(args, pipeline: BenchmarkPipeline) -> int:
    req = PipelineRequest(
        trigger=trigger_from_args(args),
        dry_run=bool(args.dry_run),
        skip_build=bool(args.skip_build),
        skip_comment=bool(args.skip_comment),
    )
    result = pipeline.run(req)
    if args.json:
        print_json(result.to_dict())
    return result.exit_code
