"""pipeline.wiring

This module is the **composition root** for the Python runtime.

"Composition root" means: the single place where we *assemble* the running
application from its building blocks:

- load configuration / environment variables (``.env`` via python-dotenv)
- configure logging
- choose real vs stub implementations (tests pass their own factory)
- build the high-level pipeline facade object

Keeping this wiring in one place prevents configuration and dependency setup
from being duplicated across entrypoints (CLI, scripts, CI).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv as _load_dotenv

from pipeline.comment import ResultPublisher
from pipeline.compare import ComparisonFetcher, GitHistory
from pipeline.config import ENV_PATH, PipelineConfig
from pipeline.execution.run_pipeline import RunDependencies
from pipeline.pipeline import BenchmarkPipeline
from pipeline.publish import ArtifactPublisher
from tools.compare.client import ComparisonClient
from tools.compare.local import LocalReportRenderer
from tools.github.client import GitHubClient
from tools.machine import CpuBoost
from tools.storage.s3 import S3ArtifactStore

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def load_dotenv_if_present(dotenv_path: Path = ENV_PATH) -> bool:
    """Load ``KEY=VALUE`` lines into ``os.environ`` without overriding set keys."""

    if not dotenv_path.exists():
        return False
    return bool(_load_dotenv(dotenv_path, override=False))


def configure_logging(level: Optional[str] = None) -> None:
    lvl = (level or os.environ.get("BENCH_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=getattr(logging, lvl, logging.INFO), format=LOG_FORMAT)


def build_run_dependencies(
    cfg: PipelineConfig,
    dry_run: bool = False,
    *,
    upload: bool = True,
    remote: bool = True,
) -> RunDependencies:
    """Real collaborators for *cfg*.

    Storage (``upload``) and the comparison service (``remote``) are required
    for a real run and raise ConfigError when unconfigured. GitHub settings
    are optional: without them the comment degrades to log output like any
    other refused comment.
    """

    store = S3ArtifactStore(cfg.s3_config()) if upload and not dry_run else None

    client = None
    if remote and not dry_run:
        client = ComparisonClient(cfg.require_compare_url(), timeout_seconds=cfg.http_timeout_seconds)
    elif cfg.compare_url:
        client = ComparisonClient(cfg.compare_url, timeout_seconds=cfg.http_timeout_seconds)

    fetcher = ComparisonFetcher(
        client,
        history=GitHistory(cfg.repo_root),
        local=LocalReportRenderer(cfg.layout, cargo=cfg.cargo),
    )

    github = None
    if cfg.github_token:
        github = GitHubClient(
            cfg.github_token,
            api_url=cfg.github_api_url,
            timeout_seconds=cfg.http_timeout_seconds,
        )

    boost = None
    if cfg.manage_cpu_boost:
        candidate = CpuBoost(cfg.cpu_boost_path)
        if candidate.available:
            boost = candidate
        else:
            logging.getLogger(__name__).info("CPU boost control not available at %s", candidate.path)

    return RunDependencies(
        publisher=ArtifactPublisher(store),
        fetcher=fetcher,
        commenter=ResultPublisher(github, cfg.github_repository),
        boost=boost,
        scratch_dirs=cfg.scratch_dirs,
    )


def build_pipeline(
    *,
    load_dotenv: bool = True,
    environ: Optional[Mapping[str, str]] = None,
    repo_root: Optional[Path] = None,
    deps_factory: Optional[Callable[..., RunDependencies]] = None,
) -> BenchmarkPipeline:
    """Build the high-level pipeline facade.

    The environment is read once, after ``.env`` has been merged into it.
    """

    if load_dotenv:
        load_dotenv_if_present(ENV_PATH)
    configure_logging()

    cfg = PipelineConfig.from_env(environ, repo_root=repo_root)
    return BenchmarkPipeline(cfg, deps_factory=deps_factory or build_run_dependencies)
