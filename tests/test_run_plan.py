import json
import unittest
from pathlib import Path

from bench_ci.domain import COMMIT_TARGET, PULL_REQUEST_TARGET, TriggerContext
from pipeline.config import PipelineConfig
from pipeline.execution.plan import plan_run

ROOT = Path("/work/repo")


class TestRunPlan(unittest.TestCase):
    def setUp(self) -> None:
        self.cfg = PipelineConfig(repo_root=ROOT)

    def test_push_plan(self) -> None:
        t = TriggerContext.push(sha="deadbeef", ref="refs/heads/feature/x")
        plan = plan_run(t, self.cfg)

        self.assertEqual("feature-x", plan.baseline_name)
        self.assertIsNone(plan.bench_filter)
        self.assertEqual(["cargo", "build", "--release"], plan.build[0].cmd)
        self.assertEqual(
            ["cargo", "bench", "--bench", "generic", "--bench", "special", "--", "--save-baseline", "feature-x"],
            plan.bench[0].cmd,
        )
        self.assertEqual(["cargo", "run", "--bin", "summarize", "pack", "feature-x"], plan.bench[1].cmd)
        for inv in plan.build + plan.bench:
            self.assertEqual(ROOT / "crates" / "bench", inv.cwd)

        self.assertEqual(ROOT / "target" / "criterion" / "feature-x.json", plan.raw_result)
        self.assertEqual(
            ["feature-x.json", "deadbeef.json"],
            [a.published_name for a in plan.artifacts],
        )
        self.assertEqual(
            [ROOT / "criterion-results" / "feature-x.json", ROOT / "criterion-results" / "deadbeef.json"],
            [a.path for a in plan.artifacts],
        )

        self.assertEqual("deadbeef", plan.comparison.current)
        self.assertIsNone(plan.comparison.previous)
        self.assertEqual("HEAD~1", plan.comparison.previous_revision)

        self.assertEqual(COMMIT_TARGET, plan.comment_target.kind)
        self.assertEqual("deadbeef", plan.comment_target.sha)

    def test_pull_request_plan(self) -> None:
        t = TriggerContext.dispatch(sha="cafebabe", ref="refs/heads/master", pr_number=17)
        plan = plan_run(t, self.cfg)

        self.assertEqual("branch", plan.baseline_name)
        self.assertEqual("pr-17", plan.published_identifier)
        self.assertEqual("(special|stdb_module|stdb_raw)", plan.bench_filter)
        self.assertEqual("(special|stdb_module|stdb_raw)", plan.bench[0].cmd[-1])
        self.assertEqual("branch", plan.bench[0].cmd[-2])

        self.assertEqual(1, len(plan.artifacts))
        self.assertEqual(ROOT / "criterion-results" / "branch.json", plan.artifacts[0].path)
        self.assertEqual("pr-17.json", plan.artifacts[0].published_name)

        self.assertEqual("pr-17", plan.comparison.current)
        self.assertEqual("master", plan.comparison.previous)
        self.assertEqual("branch", plan.comparison.local_current)

        self.assertEqual(PULL_REQUEST_TARGET, plan.comment_target.kind)
        self.assertEqual(17, plan.comment_target.number)

    def test_main_baseline_is_configurable(self) -> None:
        cfg = PipelineConfig(repo_root=ROOT, main_baseline="main")
        t = TriggerContext.dispatch(sha="cafebabe", pr_number=3)
        self.assertEqual("main", plan_run(t, cfg).comparison.previous)

    def test_plan_is_deterministic_and_serializable(self) -> None:
        t = TriggerContext.push(sha="deadbeef", ref="refs/heads/master")
        a = plan_run(t, self.cfg)
        b = plan_run(t, self.cfg)
        self.assertEqual(a, b)
        data = json.loads(json.dumps(a.to_dict()))
        self.assertEqual("master", data["baseline_name"])
        self.assertEqual(["master.json", "deadbeef.json"], [x["published_name"] for x in data["artifacts"]])


if __name__ == "__main__":
    unittest.main()
