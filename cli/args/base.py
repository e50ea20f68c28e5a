from __future__ import annotations

import argparse

MODES = ("run", "plan", "report", "comment")


def add_base_args(parser: argparse.ArgumentParser) -> None:
    """Register CLI flags that are shared across multiple modes.

    This includes:
    - mode selection
    - trigger overrides (default: the GitHub Actions environment)
    - execution knobs
    """

    parser.add_argument(
        "--mode",
        choices=MODES,
        default="run",
        help=(
            "run = build, benchmark, publish, compare and comment; "
            "plan = print the resolved plan as JSON; "
            "report = fetch/render a comparison report; "
            "comment = post an existing report file"
        ),
    )

    # Trigger overrides
    parser.add_argument(
        "--event",
        choices=["push", "workflow_dispatch"],
        help="Trigger event (default: $GITHUB_EVENT_NAME)",
    )
    parser.add_argument("--sha", help="Commit SHA under test (default: $GITHUB_SHA)")
    parser.add_argument("--ref", help="Workflow ref, e.g. refs/heads/master (default: $GITHUB_REF)")
    parser.add_argument("--head-ref", help="Head branch name (default: $GITHUB_HEAD_REF)")
    parser.add_argument(
        "--pr-number",
        help="(workflow_dispatch) Pull request number; selects the PR path",
    )
    parser.add_argument(
        "--ref-override",
        help="(workflow_dispatch) Ref that was checked out for the pull request",
    )

    parser.add_argument(
        "--repo-root",
        help="Checkout to benchmark (default: $BENCH_REPO_ROOT or the current directory)",
    )

    # Execution knobs
    parser.add_argument("--dry-run", action="store_true", help="Print commands but do not execute")
    parser.add_argument(
        "--skip-build",
        action="store_true",
        help="Reuse an existing release build instead of running cargo build",
    )
    parser.add_argument(
        "--skip-comment",
        action="store_true",
        help="Print the report to the log instead of posting a comment",
    )
    parser.add_argument("--json", action="store_true", help="Print the run result as JSON at the end")
