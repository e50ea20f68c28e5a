"""CLI argument builder modules.

The top-level :mod:`bench_cli` is intentionally kept thin. Groups of flags are
registered via small "arg builder" functions housed here:

- :func:`cli.args.base.add_base_args`       (mode, trigger, execution knobs)
- :func:`cli.args.report.add_report_args`   (report/comment mode inputs)
"""

from __future__ import annotations

__all__ = [
    "base",
    "report",
]
