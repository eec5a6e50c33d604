from __future__ import annotations

import subprocess
from pathlib import Path

from bucketops.config import settings
from bucketops.domain.object_storage import ObjectStorage, StorageError

DEFAULT_REGION = "us-east-1"
COMMAND_NOT_FOUND = 127


class AwsCliObjectStorage(ObjectStorage):
    """Runs each operation through the aws command-line tool.

    Failures carry the tool's own exit code.
    """

    def __init__(self, bucket: str | None = None, executable: str | None = None) -> None:
        self._bucket = bucket or settings.bucket
        self._executable = executable or settings.aws_cli

    @property
    def bucket(self) -> str:
        return self._bucket

    def _run(self, *args: str) -> str:
        argv = [self._executable, *args]
        try:
            completed = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise StorageError(
                f"{self._executable}: command not found",
                returncode=COMMAND_NOT_FOUND,
            ) from exc

        output = completed.stdout.rstrip("\n")
        if completed.returncode != 0:
            raise StorageError(
                f"{' '.join(argv)} exited with {completed.returncode}",
                returncode=completed.returncode,
                output=output,
            )
        return output

    def bucket_exists(self) -> bool:
        try:
            self._run("s3api", "head-bucket", "--bucket", self._bucket)
        except StorageError as exc:
            if exc.returncode == COMMAND_NOT_FOUND:
                raise
            return False
        return True

    def create_bucket(self, region: str) -> str:
        args = ["s3api", "create-bucket", "--bucket", self._bucket, "--region", region]
        if region != DEFAULT_REGION:
            args += ["--create-bucket-configuration", f"LocationConstraint={region}"]
        return self._run(*args)

    def disable_public_access_block(self) -> str:
        return self._run(
            "s3api",
            "put-public-access-block",
            "--bucket",
            self._bucket,
            "--public-access-block-configuration",
            "BlockPublicAcls=false,IgnorePublicAcls=false,BlockPublicPolicy=false,RestrictPublicBuckets=false",
        )

    def put_bucket_policy(self, policy_path: Path) -> str:
        uri = Path(policy_path).resolve().as_uri()
        return self._run("s3api", "put-bucket-policy", "--bucket", self._bucket, "--policy", uri)

    def caller_identity(self) -> str:
        return self._run("sts", "get-caller-identity", "--output", "json")

    def upload_file(self, path: Path, key: str) -> str:
        return self._run("s3", "cp", str(path), f"s3://{self._bucket}/{key}")

    def list_objects(self) -> str:
        return self._run("s3", "ls", f"s3://{self._bucket}/", "--recursive")

    def delete_object(self, key: str) -> str:
        return self._run("s3", "rm", f"s3://{self._bucket}/{key}")
