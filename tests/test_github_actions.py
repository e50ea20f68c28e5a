import json
from pathlib import Path

import pytest

from tools.github import actions


def test_set_output_appends_to_file(tmp_path: Path) -> None:
    out = tmp_path / "output"
    env = {"GITHUB_OUTPUT": str(out)}
    assert actions.set_output("comment-id", 12, environ=env)
    assert actions.set_output("status", "ok", environ=env)
    assert out.read_text(encoding="utf-8") == "comment-id=12\nstatus=ok\n"


def test_set_output_outside_actions_is_a_no_op() -> None:
    assert actions.set_output("comment-id", 12, environ={}) is False


def test_workflow_commands_escape_newlines(capsys) -> None:
    actions.warning("line one\nline two 100%")
    actions.error("boom")
    out = capsys.readouterr().out.splitlines()
    assert out == ["::warning::line one%0Aline two 100%25", "::error::boom"]


def test_group_outside_actions_prints_a_heading(monkeypatch, capsys) -> None:
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
    with actions.group("Build"):
        print("inside")
    assert capsys.readouterr().out == "\n== Build ==\ninside\n"


def test_group_inside_actions(monkeypatch, capsys) -> None:
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    with actions.group("Build"):
        print("inside")
    assert capsys.readouterr().out == "::group::Build\ninside\n::endgroup::\n"


def test_load_event_payload(tmp_path: Path) -> None:
    p = tmp_path / "event.json"
    p.write_text(json.dumps({"inputs": {"pr_number": "17"}}), encoding="utf-8")
    assert actions.load_event_payload({"GITHUB_EVENT_PATH": str(p)}) == {"inputs": {"pr_number": "17"}}
    assert actions.load_event_payload({}) == {}
    assert actions.load_event_payload({"GITHUB_EVENT_PATH": str(tmp_path / "missing.json")}) == {}


def test_load_event_payload_rejects_malformed_json(tmp_path: Path) -> None:
    p = tmp_path / "event.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(actions.EventPayloadError, match="event.json"):
        actions.load_event_payload({"GITHUB_EVENT_PATH": str(p)})
