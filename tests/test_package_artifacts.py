from pathlib import Path

import pytest

from bench_ci.domain import TriggerContext
from pipeline.config import PipelineConfig
from pipeline.errors import PackagingFailed, ResultFileMissing
from pipeline.execution.plan import plan_run
from pipeline.execution.record import package_artifacts

RAW = b'{"benchmarks": {"special/serialize": {"mean": 12.5}}}\n'


def _write_raw(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(RAW)


def test_push_writes_byte_identical_named_and_commit_copies(tmp_path: Path) -> None:
    plan = plan_run(TriggerContext.push(sha="abc123", ref="refs/heads/master"), PipelineConfig(repo_root=tmp_path))
    _write_raw(plan.raw_result)

    # leftovers from an earlier run must not be uploaded again
    plan.results_dir.mkdir(parents=True)
    (plan.results_dir / "stale.json").write_text("{}", encoding="utf-8")

    artifacts = package_artifacts(plan.raw_result, plan.results_dir, plan.artifacts)

    assert sorted(p.name for p in plan.results_dir.iterdir()) == ["abc123.json", "master.json"]
    assert [a.published_name for a in artifacts] == ["master.json", "abc123.json"]
    for a in artifacts:
        assert a.path.read_bytes() == RAW


def test_pull_request_writes_single_file(tmp_path: Path) -> None:
    t = TriggerContext.dispatch(sha="cafebabe", ref="refs/heads/master", pr_number=42)
    plan = plan_run(t, PipelineConfig(repo_root=tmp_path))
    _write_raw(plan.raw_result)

    artifacts = package_artifacts(plan.raw_result, plan.results_dir, plan.artifacts)

    assert [p.name for p in plan.results_dir.iterdir()] == ["branch.json"]
    assert len(artifacts) == 1
    assert artifacts[0].local_name == "branch.json"
    assert artifacts[0].published_name == "pr-42.json"
    assert artifacts[0].path.read_bytes() == RAW


def test_missing_raw_result_is_fatal(tmp_path: Path) -> None:
    plan = plan_run(TriggerContext.push(sha="abc123", ref="refs/heads/master"), PipelineConfig(repo_root=tmp_path))

    with pytest.raises(ResultFileMissing) as exc:
        package_artifacts(plan.raw_result, plan.results_dir, plan.artifacts)

    assert exc.value.stage == "package"
    assert not plan.results_dir.exists()


def test_unwritable_results_dir_is_a_package_failure(tmp_path: Path) -> None:
    plan = plan_run(TriggerContext.push(sha="abc123", ref="refs/heads/master"), PipelineConfig(repo_root=tmp_path))
    _write_raw(plan.raw_result)
    plan.results_dir.write_text("not a directory", encoding="utf-8")

    with pytest.raises(PackagingFailed) as exc:
        package_artifacts(plan.raw_result, plan.results_dir, plan.artifacts)

    assert exc.value.stage == "package"
    assert str(plan.results_dir) in exc.value.message
