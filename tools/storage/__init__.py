"""Remote artifact storage.

Split into:
  - s3.py : S3-compatible object store client (uploads only)

Reads never happen here; the comparison service fetches artifacts by URL.
"""
