"""pipeline.config

Environment-derived configuration.

Everything a run needs to know about its surroundings is read *once* into an
immutable :class:`PipelineConfig` by :meth:`PipelineConfig.from_env`. Stages
receive the config; none of them read ``os.environ`` on their own.

Required values are checked at the point of use (``require_*`` helpers), so
``plan`` mode works without storage or GitHub credentials.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple

from bench_ci.io import ResultsLayout
from tools.storage.s3 import DEFAULT_PREFIX, S3Config

from .errors import ConfigError

# Installation root (parent of pipeline/); holds the optional .env file.
ROOT_DIR: Path = Path(__file__).resolve().parents[1]
ENV_PATH: Path = ROOT_DIR / ".env"

DEFAULT_MAIN_BASELINE = "master"
DEFAULT_HTTP_TIMEOUT_SECONDS = 60.0


def _first(env: Mapping[str, str], *names: str) -> Optional[str]:
    for name in names:
        value = (env.get(name) or "").strip()
        if value:
            return value
    return None


def _flag(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _float(raw: Optional[str], default: float, *, name: str) -> float:
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


@dataclass(frozen=True)
class PipelineConfig:
    """Immutable configuration for one run."""

    repo_root: Path
    crate_dir: str = "crates/bench"
    target_dir: str = "target"
    results_dir: str = "criterion-results"
    main_baseline: str = DEFAULT_MAIN_BASELINE
    cargo: str = "cargo"

    # comparison service
    compare_url: Optional[str] = None
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS

    # artifact storage
    s3_bucket: Optional[str] = None
    s3_endpoint: Optional[str] = None
    s3_region: str = "us-east-1"
    s3_prefix: str = DEFAULT_PREFIX
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None

    # GitHub
    github_token: Optional[str] = None
    github_repository: Optional[str] = None
    github_api_url: str = "https://api.github.com"

    # machine preparation
    manage_cpu_boost: bool = True
    cpu_boost_path: Optional[Path] = None
    scratch_dirs: Tuple[Path, ...] = field(default_factory=tuple)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        repo_root: Optional[Path] = None,
    ) -> "PipelineConfig":
        env = os.environ if environ is None else environ

        root_raw = _first(env, "BENCH_REPO_ROOT")
        if repo_root is not None:
            root = Path(repo_root)
        elif root_raw:
            root = Path(root_raw).expanduser()
        else:
            root = Path.cwd()

        scratch_raw = _first(env, "BENCH_SCRATCH_DIRS") or ""
        scratch = tuple(Path(p.strip()) for p in scratch_raw.split(",") if p.strip())

        boost_raw = _first(env, "BENCH_CPU_BOOST_PATH")

        return cls(
            repo_root=root.resolve(),
            crate_dir=_first(env, "BENCH_CRATE_DIR") or "crates/bench",
            target_dir=_first(env, "BENCH_TARGET_DIR", "CARGO_TARGET_DIR") or "target",
            results_dir=_first(env, "BENCH_RESULTS_DIR") or "criterion-results",
            main_baseline=_first(env, "BENCH_MAIN_BASELINE") or DEFAULT_MAIN_BASELINE,
            cargo=_first(env, "BENCH_CARGO") or "cargo",
            compare_url=_first(env, "BENCH_COMPARE_URL"),
            http_timeout_seconds=_float(
                _first(env, "BENCH_HTTP_TIMEOUT"),
                DEFAULT_HTTP_TIMEOUT_SECONDS,
                name="BENCH_HTTP_TIMEOUT",
            ),
            s3_bucket=_first(env, "BENCH_S3_BUCKET"),
            s3_endpoint=_first(env, "BENCH_S3_ENDPOINT"),
            s3_region=_first(env, "BENCH_S3_REGION") or "us-east-1",
            s3_prefix=_first(env, "BENCH_S3_PREFIX") or DEFAULT_PREFIX,
            aws_access_key_id=_first(env, "AWS_KEY_ID", "AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=_first(env, "AWS_SECRET_ACCESS_KEY"),
            github_token=_first(env, "GITHUB_TOKEN", "GH_TOKEN"),
            github_repository=_first(env, "GITHUB_REPOSITORY"),
            github_api_url=_first(env, "GITHUB_API_URL") or "https://api.github.com",
            manage_cpu_boost=_flag(_first(env, "BENCH_MANAGE_CPU_BOOST"), True),
            cpu_boost_path=Path(boost_raw) if boost_raw else None,
            scratch_dirs=scratch,
        )

    @property
    def layout(self) -> ResultsLayout:
        return ResultsLayout.under(
            self.repo_root,
            crate_dir=self.crate_dir,
            target_dir=self.target_dir,
            results_dir=self.results_dir,
        )

    def require_compare_url(self) -> str:
        if not self.compare_url:
            raise ConfigError(_missing("BENCH_COMPARE_URL"))
        return self.compare_url

    def require_github_repository(self) -> str:
        if not self.github_repository:
            raise ConfigError(_missing("GITHUB_REPOSITORY"))
        return self.github_repository

    def s3_config(self) -> S3Config:
        missing = [
            name
            for name, value in (
                ("BENCH_S3_BUCKET", self.s3_bucket),
                ("AWS_KEY_ID", self.aws_access_key_id),
                ("AWS_SECRET_ACCESS_KEY", self.aws_secret_access_key),
            )
            if not value
        ]
        if missing:
            raise ConfigError(_missing(", ".join(missing)))
        return S3Config(
            bucket=str(self.s3_bucket),
            access_key_id=str(self.aws_access_key_id),
            secret_access_key=str(self.aws_secret_access_key),
            endpoint_url=self.s3_endpoint,
            region=self.s3_region,
            prefix=self.s3_prefix,
        )


def _missing(var: str) -> str:
    return f"Missing {var}. Put it in {ENV_PATH} (or export it in your shell)."
