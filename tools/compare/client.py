"""tools/compare/client.py

All comparison-service HTTP calls live here.

The service renders a markdown diff between two uploaded baselines:

  GET <base>/compare/<baseline>/<candidate>   -> diff report
  GET <base>/compare/<candidate>              -> single-baseline report

A 404 means "no such baseline" and is returned as ``None``: a missing
previous baseline is an expected state, not an error. Anything else that is
not a 2xx (connection errors, timeouts, 5xx) means the service is unhealthy
and raises :class:`ComparisonTransportError`.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

import requests

DEFAULT_TIMEOUT_SECONDS = 60


class ComparisonTransportError(RuntimeError):
    """The comparison service could not be reached or answered with an error."""


def _segment(value: str) -> str:
    return quote(str(value), safe="")


class ComparisonClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def compare_url(self, current: str, previous: Optional[str] = None) -> str:
        if previous:
            return f"{self.base_url}/compare/{_segment(previous)}/{_segment(current)}"
        return f"{self.base_url}/compare/{_segment(current)}"

    def _get_markdown(self, url: str) -> Optional[str]:
        try:
            resp = self.session.get(url, timeout=self.timeout_seconds)
        except requests.RequestException as e:
            raise ComparisonTransportError(f"GET {url} failed: {e}") from e

        if resp.status_code == 404:
            return None
        if not resp.ok:
            raise ComparisonTransportError(
                f"GET {url} returned HTTP {resp.status_code}: {resp.text[:200]!r}"
            )
        return resp.text

    def fetch_comparison(self, current: str, previous: str) -> Optional[str]:
        """Diff report of *current* against *previous*; None if either is unknown."""
        return self._get_markdown(self.compare_url(current, previous))

    def fetch_single(self, current: str) -> Optional[str]:
        """Unreferenced report for *current* only; None if it is unknown."""
        return self._get_markdown(self.compare_url(current))
