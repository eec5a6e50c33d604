from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from botocore.client import Config
from boto3.exceptions import Boto3Error
from botocore.exceptions import BotoCoreError, ClientError
import boto3

from bucketops.config import settings
from bucketops.domain.object_storage import ObjectStorage, StorageError

DEFAULT_REGION = "us-east-1"
MISSING_BUCKET_CODES = {"404", "NoSuchBucket", "403", "Forbidden", "AccessDenied"}


@contextmanager
def _provider_errors(action: str) -> Iterator[None]:
    try:
        yield
    except ClientError as exc:
        raise StorageError(f"{action} failed: {exc}", returncode=1, output=str(exc)) from exc
    except (BotoCoreError, Boto3Error) as exc:
        raise StorageError(f"{action} failed: {exc}", returncode=1, output=str(exc)) from exc


def _render_json(response: dict[str, Any]) -> str:
    body = {key: value for key, value in response.items() if key != "ResponseMetadata"}
    return json.dumps(body, indent=4, default=str)


class S3ObjectStorage(ObjectStorage):
    def __init__(self, bucket: str | None = None, region: str | None = None) -> None:
        self._bucket = bucket or settings.bucket
        self._region = region or settings.region

        client_kwargs: dict[str, Any] = {
            "region_name": self._region,
            "endpoint_url": settings.s3_endpoint_url,
        }
        if settings.s3_access_key and settings.s3_secret_key:
            client_kwargs["aws_access_key_id"] = settings.s3_access_key
            client_kwargs["aws_secret_access_key"] = settings.s3_secret_key

        self._client = boto3.client(
            "s3",
            config=Config(signature_version="s3v4"),
            **client_kwargs,
        )
        sts_kwargs = {key: value for key, value in client_kwargs.items() if key != "endpoint_url"}
        self._sts = boto3.client("sts", **sts_kwargs)

    @property
    def bucket(self) -> str:
        return self._bucket

    def bucket_exists(self) -> bool:
        try:
            self._client.head_bucket(Bucket=self._bucket)
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in MISSING_BUCKET_CODES:
                return False
            raise StorageError(f"head-bucket failed: {exc}", returncode=1, output=str(exc)) from exc
        except BotoCoreError as exc:
            raise StorageError(f"head-bucket failed: {exc}", returncode=1, output=str(exc)) from exc
        return True

    def create_bucket(self, region: str) -> str:
        params: dict[str, Any] = {"Bucket": self._bucket}
        if region != DEFAULT_REGION:
            params["CreateBucketConfiguration"] = {"LocationConstraint": region}
        with _provider_errors("create-bucket"):
            response = self._client.create_bucket(**params)
        return _render_json(response)

    def disable_public_access_block(self) -> str:
        with _provider_errors("put-public-access-block"):
            self._client.put_public_access_block(
                Bucket=self._bucket,
                PublicAccessBlockConfiguration={
                    "BlockPublicAcls": False,
                    "IgnorePublicAcls": False,
                    "BlockPublicPolicy": False,
                    "RestrictPublicBuckets": False,
                },
            )
        return ""

    def put_bucket_policy(self, policy_path: Path) -> str:
        policy = Path(policy_path).read_text(encoding="utf-8")
        with _provider_errors("put-bucket-policy"):
            self._client.put_bucket_policy(Bucket=self._bucket, Policy=policy)
        return ""

    def caller_identity(self) -> str:
        with _provider_errors("get-caller-identity"):
            response = self._sts.get_caller_identity()
        return _render_json(response)

    def upload_file(self, path: Path, key: str) -> str:
        with _provider_errors("upload"):
            self._client.upload_file(str(path), self._bucket, key)
        return f"upload: {path} to s3://{self._bucket}/{key}"

    def list_objects(self) -> str:
        lines: list[str] = []
        with _provider_errors("list"):
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self._bucket):
                for obj in page.get("Contents", []):
                    modified = obj["LastModified"].strftime("%Y-%m-%d %H:%M:%S")
                    lines.append(f"{modified} {obj['Size']:>10} {obj['Key']}")
        return "\n".join(lines)

    def delete_object(self, key: str) -> str:
        with _provider_errors("delete"):
            self._client.delete_object(Bucket=self._bucket, Key=key)
        return f"delete: s3://{self._bucket}/{key}"
