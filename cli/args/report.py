from __future__ import annotations

import argparse


def add_report_args(parser: argparse.ArgumentParser) -> None:
    """Register flags for the ``report`` and ``comment`` modes."""

    parser.add_argument(
        "--current",
        help="(report mode) Identifier to report on: baseline name, pr-<n> or commit SHA",
    )
    parser.add_argument(
        "--previous",
        help="(report mode) Identifier to compare against (omit for a single-baseline report)",
    )
    parser.add_argument(
        "--local",
        action="store_true",
        help="(report mode) Render from <target>/criterion with summarize instead of the comparison service",
    )
    parser.add_argument(
        "--output",
        help="(report mode) Write the markdown here instead of stdout",
    )
    parser.add_argument(
        "--report-file",
        help="(comment mode) Markdown report to post; wrapped in a collapsed details block",
    )
