import unittest
from pathlib import Path

from pipeline.config import PipelineConfig
from pipeline.errors import ConfigError
from pipeline.wiring import build_pipeline, build_run_dependencies

STORAGE = {
    "BENCH_S3_BUCKET": "bench",
    "AWS_KEY_ID": "key",
    "AWS_SECRET_ACCESS_KEY": "secret",
}


class TestRunDependencies(unittest.TestCase):
    def _cfg(self, **env: str) -> PipelineConfig:
        return PipelineConfig.from_env({"BENCH_MANAGE_CPU_BOOST": "false", **env}, repo_root=Path("/work/repo"))

    def test_real_run_requires_comparison_service(self) -> None:
        # Rejected while wiring, i.e. before anything is built or uploaded.
        with self.assertRaises(ConfigError) as ctx:
            build_run_dependencies(self._cfg(**STORAGE))
        self.assertIn("BENCH_COMPARE_URL", str(ctx.exception))

    def test_real_run_wires_every_collaborator(self) -> None:
        deps = build_run_dependencies(
            self._cfg(**STORAGE, BENCH_COMPARE_URL="https://bench.example", GITHUB_TOKEN="t", GITHUB_REPOSITORY="acme/db")
        )
        self.assertIsNotNone(deps.publisher.store)
        self.assertIsNotNone(deps.fetcher.client)
        self.assertIsNotNone(deps.commenter.client)
        self.assertIsNone(deps.boost)

    def test_dry_run_needs_no_credentials(self) -> None:
        deps = build_run_dependencies(self._cfg(), dry_run=True)
        self.assertIsNone(deps.publisher.store)
        self.assertIsNone(deps.fetcher.client)
        self.assertIsNone(deps.commenter.client)

    def test_build_pipeline_uses_given_environment(self) -> None:
        pipeline = build_pipeline(load_dotenv=False, environ={"BENCH_MAIN_BASELINE": "main"}, repo_root=Path("/work/repo"))
        self.assertEqual("main", pipeline.cfg.main_baseline)
        self.assertEqual(Path("/work/repo").resolve(), pipeline.cfg.repo_root)


if __name__ == "__main__":
    unittest.main()
