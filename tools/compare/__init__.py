"""Comparison report sources.

Split into:
  - client.py : HTTP client for the remote comparison service
  - local.py  : local rendering via ``summarize markdown-report``

Both return markdown text, or ``None`` when the requested baseline does not
exist. Choosing between them is a pipeline decision (pipeline/compare.py).
"""
