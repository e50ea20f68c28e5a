"""pipeline.publish

Artifact publisher: uploads every packaged artifact under its published name.

Upload runs on both paths and is required: the comparison service reads
artifacts back by URL, so a run whose upload failed cannot be compared and
is aborted.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from bench_ci.domain import ResultArtifact
from tools.storage.s3 import ArtifactUploadError

from .errors import ArtifactUploadFailed


class ArtifactStore(Protocol):
    def upload(self, local_path: Path, filename: str) -> str: ...


class ArtifactPublisher:
    def __init__(self, store: Optional[ArtifactStore]) -> None:
        self.store = store

    def publish(self, artifacts: Sequence[ResultArtifact], *, dry_run: bool = False) -> List[str]:
        """Upload *artifacts*; returns the object keys written."""
        keys: List[str] = []
        for artifact in artifacts:
            print(f"  ☁️  {artifact.local_name} -> {artifact.published_name}")
            if dry_run:
                print("  (dry-run: not uploading)")
                continue
            if self.store is None:
                raise ArtifactUploadFailed("no artifact store configured")
            try:
                keys.append(self.store.upload(artifact.path, artifact.published_name))
            except ArtifactUploadError as e:
                raise ArtifactUploadFailed(str(e)) from e
        return keys
