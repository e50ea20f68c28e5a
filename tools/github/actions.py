"""tools/github/actions.py

GitHub Actions runtime helpers.

* workflow commands (``::warning::``, ``::error::``, ``::group::``) printed
  to stdout, which the runner turns into annotations / collapsible log groups
* step outputs appended to ``$GITHUB_OUTPUT``
* the triggering event payload from ``$GITHUB_EVENT_PATH``

Outside Actions these degrade to plain log lines and no-ops.
"""

from __future__ import annotations

import contextlib
import json
import os
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional


class EventPayloadError(ValueError):
    """The event payload file exists but is not a JSON document."""


def running_in_actions(environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    return (env.get("GITHUB_ACTIONS") or "").lower() == "true"


def _escape_data(message: str) -> str:
    # Workflow command data must not contain raw newlines.
    return str(message).replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def warning(message: str) -> None:
    print(f"::warning::{_escape_data(message)}", flush=True)


def error(message: str) -> None:
    print(f"::error::{_escape_data(message)}", flush=True)


@contextlib.contextmanager
def group(title: str) -> Iterator[None]:
    if not running_in_actions():
        print(f"\n== {title} ==", flush=True)
        yield
        return
    print(f"::group::{title}", flush=True)
    try:
        yield
    finally:
        print("::endgroup::", flush=True)


def set_output(name: str, value: Any, *, environ: Optional[Mapping[str, str]] = None) -> bool:
    """Append ``name=value`` to ``$GITHUB_OUTPUT``. Returns False outside Actions."""
    env = os.environ if environ is None else environ
    github_output = env.get("GITHUB_OUTPUT")
    if not github_output:
        return False
    with open(github_output, "a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")
    return True


def load_event_payload(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Read the JSON event payload. Returns {} if there is none.

    Raises EventPayloadError if the file is not valid JSON.
    """
    env = os.environ if environ is None else environ
    raw = env.get("GITHUB_EVENT_PATH")
    if not raw:
        return {}
    p = Path(raw)
    if not p.is_file():
        return {}
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except ValueError as e:
        raise EventPayloadError(f"Cannot parse event payload {p}: {e}") from e
    return data if isinstance(data, dict) else {}
