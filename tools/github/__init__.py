"""GitHub integration modules.

Split into:
  - client.py  : REST calls (issue/commit comments)
  - actions.py : workflow commands, step outputs and the event payload

The pipeline decides *where* to comment; these modules only talk to GitHub.
"""
