"""pipeline.trigger

Build the run's :class:`~bench_ci.domain.TriggerContext`.

Sources, in order of precedence:

1. explicit overrides (CLI flags)
2. the dispatch inputs in the event payload (``inputs.pr_number``,
   ``inputs.ref``) and ``PR_NUMBER`` in the environment
3. the standard Actions variables (``GITHUB_EVENT_NAME``, ``GITHUB_SHA``,
   ``GITHUB_REF``, ``GITHUB_HEAD_REF``)

The context is built once at the start of a run and never re-derived.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

from bench_ci.domain import DISPATCH_EVENT, PUSH_EVENT, TriggerContext
from tools.github.actions import EventPayloadError, load_event_payload

from .errors import ConfigError


def parse_pr_number(raw: Any) -> Optional[int]:
    """``""``/``None`` -> None; ``"17"``/``"#17"``/``17`` -> 17.

    The dispatch input defaults to the empty string, which means "not a PR run".
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip().lstrip("#")
        if not text:
            return None
        if not text.isdigit():
            raise ConfigError(f"pr_number must be a positive integer, got {raw!r}")
        value = int(text)
    if value <= 0:
        raise ConfigError(f"pr_number must be a positive integer, got {raw!r}")
    return value


def _dispatch_inputs(payload: Mapping[str, Any]) -> Dict[str, Any]:
    inputs = payload.get("inputs") if isinstance(payload, Mapping) else None
    return dict(inputs) if isinstance(inputs, Mapping) else {}


def resolve_trigger(
    *,
    event: Optional[str] = None,
    sha: Optional[str] = None,
    ref: Optional[str] = None,
    head_ref: Optional[str] = None,
    pr_number: Optional[Any] = None,
    ref_override: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    event_payload: Optional[Mapping[str, Any]] = None,
) -> TriggerContext:
    """Resolve the trigger from overrides + the Actions environment.

    Raises ConfigError for unsupported events or missing commit information.
    """
    env = os.environ if environ is None else environ

    event_name = (event or env.get("GITHUB_EVENT_NAME") or "").strip()
    if event_name not in (PUSH_EVENT, DISPATCH_EVENT):
        raise ConfigError(
            f"Unsupported or missing trigger event {event_name!r}; "
            f"expected {PUSH_EVENT!r} or {DISPATCH_EVENT!r} (set GITHUB_EVENT_NAME or --event)."
        )

    commit = (sha or env.get("GITHUB_SHA") or "").strip()
    if not commit:
        raise ConfigError("Missing commit SHA (set GITHUB_SHA or --sha).")

    workflow_ref = (ref or env.get("GITHUB_REF") or "").strip()
    head = (head_ref or env.get("GITHUB_HEAD_REF") or "").strip() or None

    if event_name == PUSH_EVENT:
        if pr_number not in (None, "") or ref_override:
            raise ConfigError("A push run cannot be scoped to a pull request.")
        if not workflow_ref and not head:
            raise ConfigError("Missing branch ref for a push run (set GITHUB_REF or --ref).")
        return TriggerContext.push(sha=commit, ref=workflow_ref, head_ref=head)

    if event_payload is not None:
        payload = event_payload
    else:
        try:
            payload = load_event_payload(env)
        except EventPayloadError as e:
            raise ConfigError(str(e)) from e
    inputs = _dispatch_inputs(payload)

    raw_pr = pr_number if pr_number not in (None, "") else inputs.get("pr_number")
    if raw_pr in (None, ""):
        raw_pr = env.get("PR_NUMBER")
    number = parse_pr_number(raw_pr)

    override = (ref_override or inputs.get("ref") or "").strip() or None

    if number is None and not workflow_ref and not head:
        raise ConfigError("Missing branch ref for a dispatch run (set GITHUB_REF or --ref).")

    return TriggerContext.dispatch(
        sha=commit,
        ref=workflow_ref,
        pr_number=number,
        ref_override=override,
        head_ref=head,
    )
