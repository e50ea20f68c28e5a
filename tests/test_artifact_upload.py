import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from botocore.exceptions import ClientError

from bench_ci.domain import ResultArtifact
from pipeline.errors import ArtifactUploadFailed
from pipeline.publish import ArtifactPublisher
from tools.storage.s3 import (
    ArtifactUploadError,
    S3ArtifactStore,
    S3Config,
    build_s3_client,
    object_key,
)

CFG = S3Config(
    bucket="spacetimedb-ci-benchmarks",
    access_key_id="key",
    secret_access_key="secret",
    endpoint_url="https://nyc3.digitaloceanspaces.com",
)


class TestS3ArtifactStore(unittest.TestCase):
    def test_upload_writes_under_prefix(self) -> None:
        client = MagicMock()
        store = S3ArtifactStore(CFG, client=client)

        key = store.upload(Path("/tmp/criterion-results/master.json"), "master.json")

        self.assertEqual("benchmarks/master.json", key)
        client.upload_file.assert_called_once_with(
            "/tmp/criterion-results/master.json",
            "spacetimedb-ci-benchmarks",
            "benchmarks/master.json",
            ExtraArgs={"ContentType": "application/json"},
        )

    def test_storage_errors_are_wrapped(self) -> None:
        client = MagicMock()
        client.upload_file.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}}, "PutObject"
        )
        store = S3ArtifactStore(CFG, client=client)
        with self.assertRaises(ArtifactUploadError):
            store.upload(Path("/tmp/x.json"), "x.json")

    def test_object_key(self) -> None:
        self.assertEqual("benchmarks/a.json", object_key("benchmarks", "a.json"))
        self.assertEqual("benchmarks/a.json", object_key("/benchmarks/", "a.json"))
        self.assertEqual("a.json", object_key("", "a.json"))

    def test_client_uses_custom_endpoint(self) -> None:
        with patch("tools.storage.s3.boto3.client") as mk:
            build_s3_client(CFG)
        args, kwargs = mk.call_args
        self.assertEqual(("s3",), args)
        self.assertEqual("https://nyc3.digitaloceanspaces.com", kwargs["endpoint_url"])
        self.assertEqual("key", kwargs["aws_access_key_id"])


class FakeStore:
    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.uploads = []

    def upload(self, local_path, filename):
        if filename == self.fail_on:
            raise ArtifactUploadError(f"upload of {filename} failed")
        self.uploads.append((Path(local_path).name, filename))
        return f"benchmarks/{filename}"


class TestArtifactPublisher(unittest.TestCase):
    def setUp(self) -> None:
        self.artifacts = [
            ResultArtifact(path=Path("/r/branch.json"), published_name="pr-17.json"),
        ]

    def test_uploads_under_published_name(self) -> None:
        store = FakeStore()
        keys = ArtifactPublisher(store).publish(self.artifacts)
        self.assertEqual(["benchmarks/pr-17.json"], keys)
        self.assertEqual([("branch.json", "pr-17.json")], store.uploads)

    def test_upload_failure_is_fatal(self) -> None:
        with self.assertRaises(ArtifactUploadFailed) as ctx:
            ArtifactPublisher(FakeStore(fail_on="pr-17.json")).publish(self.artifacts)
        self.assertEqual("publish", ctx.exception.stage)

    def test_dry_run_uploads_nothing(self) -> None:
        store = FakeStore()
        self.assertEqual([], ArtifactPublisher(store).publish(self.artifacts, dry_run=True))
        self.assertEqual([], store.uploads)
        self.assertEqual([], ArtifactPublisher(None).publish(self.artifacts, dry_run=True))

    def test_missing_store_is_fatal(self) -> None:
        with self.assertRaises(ArtifactUploadFailed):
            ArtifactPublisher(None).publish(self.artifacts)


if __name__ == "__main__":
    unittest.main()
