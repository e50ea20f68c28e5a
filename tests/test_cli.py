import json
import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path


REPO_ROOT = Path(__file__).resolve().parents[1]
CLI = REPO_ROOT / "bench_cli.py"


def _clean_env(**extra: str) -> dict:
    # The test run itself may be inside Actions; the CLI must only see our flags.
    env = {k: v for k, v in os.environ.items() if not k.startswith(("GITHUB_", "BENCH_", "PR_NUMBER"))}
    env.update(extra)
    return env


class TestCLIPlanMode(unittest.TestCase):
    def _run(self, *args: str, env: dict) -> subprocess.CompletedProcess:
        return subprocess.run(
            [sys.executable, str(CLI), *args],
            cwd=str(REPO_ROOT),
            env=env,
            capture_output=True,
            text=True,
        )

    def test_plan_for_pull_request_dispatch(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            proc = self._run(
                "--mode",
                "plan",
                "--event",
                "workflow_dispatch",
                "--sha",
                "cafebabe",
                "--ref",
                "refs/heads/master",
                "--pr-number",
                "17",
                env=_clean_env(BENCH_REPO_ROOT=td),
            )
            self.assertEqual(proc.returncode, 0, msg=proc.stderr)

            plan = json.loads(proc.stdout)
            self.assertEqual(plan["baseline_name"], "branch")
            self.assertEqual(plan["published_identifier"], "pr-17")
            self.assertEqual(plan["bench_filter"], "(special|stdb_module|stdb_raw)")
            self.assertEqual([a["published_name"] for a in plan["artifacts"]], ["pr-17.json"])
            self.assertEqual(plan["comparison"], {"current": "pr-17", "previous": "master", "previous_revision": None})
            self.assertEqual(plan["comment_target"]["kind"], "pull_request")
            self.assertTrue(plan["raw_result"].startswith(str(Path(td).resolve())))

    def test_plan_for_push_uses_branch_and_commit_names(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            proc = self._run(
                "--mode",
                "plan",
                "--event",
                "push",
                "--sha",
                "deadbeef",
                "--ref",
                "refs/heads/feature/x",
                env=_clean_env(BENCH_REPO_ROOT=td),
            )
            self.assertEqual(proc.returncode, 0, msg=proc.stderr)

            plan = json.loads(proc.stdout)
            self.assertEqual(plan["baseline_name"], "feature-x")
            self.assertIsNone(plan["bench_filter"])
            self.assertEqual(
                [a["published_name"] for a in plan["artifacts"]],
                ["feature-x.json", "deadbeef.json"],
            )
            self.assertEqual(plan["comparison"]["previous_revision"], "HEAD~1")

    def test_dry_run_reports_result_as_json(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            proc = self._run(
                "--mode",
                "run",
                "--dry-run",
                "--json",
                "--event",
                "push",
                "--sha",
                "deadbeef",
                "--ref",
                "refs/heads/master",
                env=_clean_env(BENCH_REPO_ROOT=td, BENCH_MANAGE_CPU_BOOST="false"),
            )
            self.assertEqual(proc.returncode, 0, msg=proc.stderr)

            # status lines come first; the result document is the tail of stdout
            result = json.loads(proc.stdout[proc.stdout.index("{\n") :])
            self.assertEqual(result["status"], "success")
            self.assertEqual(result["state"], "done")
            self.assertEqual(result["uploaded_keys"], [])
            self.assertEqual(
                [a["published_name"] for a in result["artifacts"]],
                ["master.json", "deadbeef.json"],
            )

    def test_missing_sha_is_a_config_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            proc = self._run(
                "--mode",
                "plan",
                "--event",
                "push",
                "--ref",
                "refs/heads/master",
                env=_clean_env(BENCH_REPO_ROOT=td),
            )
            self.assertEqual(proc.returncode, 2)
            self.assertIn("Missing commit SHA", proc.stderr)
            self.assertEqual(proc.stdout.strip(), "")


if __name__ == "__main__":
    unittest.main()
