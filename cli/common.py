"""cli.common

Small shared helpers for CLI command modules.

Every mode that needs a trigger resolves it the same way (flags first, then
the Actions environment), so the helper lives here rather than in each
command.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from bench_ci.domain import TriggerContext
from pipeline.trigger import resolve_trigger


def trigger_from_args(args) -> TriggerContext:
    return resolve_trigger(
        event=args.event,
        sha=args.sha,
        ref=args.ref,
        head_ref=args.head_ref,
        pr_number=args.pr_number,
        ref_override=args.ref_override,
    )


def print_json(data: Mapping[str, Any]) -> None:
    print(json.dumps(data, indent=2, sort_keys=True))
