"""bench_ci

Core package for the continuous-benchmarking pipeline.

Why this exists
---------------
The orchestration code lives under top-level packages like ``pipeline``
(decisions + stage wiring) and ``tools`` (adapters for cargo, git, the object
store, the comparison service and GitHub).

Both sides need to agree on a small set of contracts:

* domain types (trigger context, artifacts, comparison pair, report, comment
  target/outcome)
* IO/layout rules (where raw results and packaged artifacts live)

Keeping those here, free of ``tools``/``pipeline`` imports, lets the CLI and
the adapters stay thin.
"""

from __future__ import annotations
