"""tools/storage/s3.py

Uploads packaged benchmark artifacts to an S3-compatible bucket
(DigitalOcean Spaces, MinIO, AWS S3).

Objects are written under ``<prefix>/<filename>``. Re-uploading the same
name overwrites the previous object; that is how branch-latest baselines
(``master.json``) stay current while ``<sha>.json`` copies accumulate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "benchmarks"
JSON_CONTENT_TYPE = "application/json"


class ArtifactUploadError(RuntimeError):
    """Raised when an artifact could not be written to the bucket."""


@dataclass(frozen=True)
class S3Config:
    """Connection settings for the artifact bucket."""

    bucket: str
    access_key_id: str
    secret_access_key: str
    endpoint_url: Optional[str] = None
    region: str = "us-east-1"
    prefix: str = DEFAULT_PREFIX


def object_key(prefix: str, filename: str) -> str:
    """``("benchmarks", "master.json")`` -> ``"benchmarks/master.json"``."""
    clean_prefix = (prefix or "").strip("/")
    return f"{clean_prefix}/{filename}" if clean_prefix else filename


def build_s3_client(cfg: S3Config) -> Any:
    return boto3.client(
        "s3",
        endpoint_url=cfg.endpoint_url or None,
        aws_access_key_id=cfg.access_key_id,
        aws_secret_access_key=cfg.secret_access_key,
        region_name=cfg.region,
        config=Config(signature_version="s3v4"),
    )


class S3ArtifactStore:
    """Write-only view of the artifact bucket."""

    def __init__(self, cfg: S3Config, *, client: Any = None) -> None:
        self.cfg = cfg
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = build_s3_client(self.cfg)
        return self._client

    def upload(self, local_path: Path, filename: str) -> str:
        """Upload *local_path* as ``<prefix>/<filename>``; return the key.

        Raises ArtifactUploadError on any storage failure.
        """
        key = object_key(self.cfg.prefix, filename)
        try:
            self.client.upload_file(
                str(local_path),
                self.cfg.bucket,
                key,
                ExtraArgs={"ContentType": JSON_CONTENT_TYPE},
            )
        except (BotoCoreError, ClientError, S3UploadFailedError, OSError) as e:
            raise ArtifactUploadError(
                f"Upload of {local_path} to s3://{self.cfg.bucket}/{key} failed: {e}"
            ) from e

        logger.info("uploaded %s to s3://%s/%s", local_path.name, self.cfg.bucket, key)
        return key
