"""pipeline.benchmarks

Central registry of benchmark targets and benchmark groups.

Why this exists
---------------
Two facts about the suite must stay in sync:

- which cargo bench targets are run (``--bench generic --bench special``)
- which benchmark groups need a heavier external dependency (the sqlite
  comparison cases) and therefore must be excluded from PR runs

The PR filter is *derived* from this registry, so adding a group here is
enough for it to be picked up (or excluded) by pull-request runs.

These definitions are pure data: no subprocesses, no filesystem access.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence


@dataclass(frozen=True)
class BenchGroup:
    """One criterion benchmark group (first path segment of a case id)."""

    key: str
    label: str

    # Needs a persistent external dependency that is not available (or too
    # slow) in pull-request runs.
    requires_external: bool = False


# cargo bench targets, in the order they are passed to cargo.
BENCH_TARGETS: List[str] = ["generic", "special"]


# Canonical registry. Dict insertion order is the order used in the filter.
BENCH_GROUPS: Dict[str, BenchGroup] = {
    "special": BenchGroup(key="special", label="Special-purpose cases"),
    "stdb_module": BenchGroup(key="stdb_module", label="Database through a WASM module"),
    "stdb_raw": BenchGroup(key="stdb_raw", label="Database engine, raw API"),
    "sqlite": BenchGroup(key="sqlite", label="SQLite reference", requires_external=True),
}


PR_GROUPS: List[str] = [k for k, g in BENCH_GROUPS.items() if not g.requires_external]
EXTERNAL_GROUPS: List[str] = [k for k, g in BENCH_GROUPS.items() if g.requires_external]


def build_group_filter(groups: Sequence[str]) -> str:
    """``["special", "stdb_raw"]`` -> ``"(special|stdb_raw)"``."""
    keys = [str(g).strip() for g in groups if str(g).strip()]
    if not keys:
        raise ValueError("A benchmark filter needs at least one group.")
    unknown = [k for k in keys if k not in BENCH_GROUPS]
    if unknown:
        raise ValueError(f"Unknown benchmark group(s): {', '.join(unknown)}")
    return "(" + "|".join(keys) + ")"


# (special|stdb_module|stdb_raw)
PR_FILTER: str = build_group_filter(PR_GROUPS)


def benchmark_filter(is_pull_request: bool) -> Optional[str]:
    """Filter passed to the bench harness: PR runs only, never on push."""
    return PR_FILTER if is_pull_request else None
