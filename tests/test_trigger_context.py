import json
import tempfile
import unittest
from pathlib import Path

from bench_ci.domain import DISPATCH_EVENT, PUSH_EVENT, TriggerContext
from pipeline.errors import ConfigError
from pipeline.trigger import parse_pr_number, resolve_trigger


class TestTriggerContext(unittest.TestCase):
    def test_push_cannot_carry_pull_request_fields(self) -> None:
        with self.assertRaises(ValueError):
            TriggerContext(event=PUSH_EVENT, sha="deadbeef", ref="refs/heads/master", pr_number=3)
        with self.assertRaises(ValueError):
            TriggerContext(event=PUSH_EVENT, sha="deadbeef", ref_override="refs/pull/3/head")

    def test_pr_number_must_be_positive_int(self) -> None:
        for bad in [0, -1, True, "17"]:
            with self.assertRaises(ValueError, msg=repr(bad)):
                TriggerContext(event=DISPATCH_EVENT, sha="deadbeef", pr_number=bad)

    def test_sha_is_required(self) -> None:
        with self.assertRaises(ValueError):
            TriggerContext.push(sha="  ", ref="refs/heads/master")

    def test_branch_strips_heads_prefix(self) -> None:
        t = TriggerContext.push(sha="deadbeef", ref="refs/heads/feature/x")
        self.assertEqual("feature/x", t.branch)
        self.assertFalse(t.is_pull_request)


class TestResolveTrigger(unittest.TestCase):
    def test_push_from_actions_environment(self) -> None:
        env = {
            "GITHUB_EVENT_NAME": "push",
            "GITHUB_SHA": "deadbeef",
            "GITHUB_REF": "refs/heads/feature/x",
        }
        t = resolve_trigger(environ=env, event_payload={})
        self.assertEqual(PUSH_EVENT, t.event)
        self.assertEqual("deadbeef", t.sha)
        self.assertEqual("feature/x", t.branch)
        self.assertIsNone(t.pr_number)

    def test_dispatch_inputs_from_event_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            event_path = Path(td) / "event.json"
            event_path.write_text(
                json.dumps({"inputs": {"pr_number": "17", "ref": "refs/pull/17/head"}}),
                encoding="utf-8",
            )
            env = {
                "GITHUB_EVENT_NAME": "workflow_dispatch",
                "GITHUB_SHA": "cafebabe",
                "GITHUB_REF": "refs/heads/master",
                "GITHUB_EVENT_PATH": str(event_path),
            }
            t = resolve_trigger(environ=env)

        self.assertTrue(t.is_pull_request)
        self.assertEqual(17, t.pr_number)
        self.assertEqual("refs/pull/17/head", t.ref_override)

    def test_malformed_event_file_is_a_config_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            event_path = Path(td) / "event.json"
            event_path.write_text("{not json", encoding="utf-8")
            env = {
                "GITHUB_EVENT_NAME": "workflow_dispatch",
                "GITHUB_SHA": "cafebabe",
                "GITHUB_REF": "refs/heads/master",
                "GITHUB_EVENT_PATH": str(event_path),
            }
            with self.assertRaises(ConfigError) as ctx:
                resolve_trigger(environ=env)

        self.assertIn("event.json", str(ctx.exception))

    def test_empty_pr_input_means_branch_path(self) -> None:
        env = {"GITHUB_EVENT_NAME": "workflow_dispatch", "GITHUB_SHA": "cafebabe", "GITHUB_REF": "refs/heads/master"}
        t = resolve_trigger(environ=env, event_payload={"inputs": {"pr_number": "", "ref": ""}})
        self.assertFalse(t.is_pull_request)
        self.assertIsNone(t.ref_override)

    def test_pr_number_env_fallback_and_flag_precedence(self) -> None:
        env = {
            "GITHUB_EVENT_NAME": "workflow_dispatch",
            "GITHUB_SHA": "cafebabe",
            "PR_NUMBER": "9",
        }
        self.assertEqual(9, resolve_trigger(environ=env, event_payload={}).pr_number)
        self.assertEqual(5, resolve_trigger(pr_number="#5", environ=env, event_payload={}).pr_number)

    def test_configuration_errors(self) -> None:
        base = {"GITHUB_SHA": "deadbeef", "GITHUB_REF": "refs/heads/master"}
        with self.assertRaises(ConfigError):
            resolve_trigger(environ={**base, "GITHUB_EVENT_NAME": "pull_request"}, event_payload={})
        with self.assertRaises(ConfigError):
            resolve_trigger(event="push", environ={"GITHUB_REF": "refs/heads/master"}, event_payload={})
        with self.assertRaises(ConfigError):
            resolve_trigger(event="push", pr_number="3", environ=base, event_payload={})

    def test_parse_pr_number(self) -> None:
        self.assertIsNone(parse_pr_number(None))
        self.assertIsNone(parse_pr_number(""))
        self.assertEqual(17, parse_pr_number("17"))
        self.assertEqual(17, parse_pr_number(" #17 "))
        self.assertEqual(4, parse_pr_number(4))
        for bad in ["abc", "0", "-2", "1.5"]:
            with self.assertRaises(ConfigError, msg=bad):
                parse_pr_number(bad)


if __name__ == "__main__":
    unittest.main()
