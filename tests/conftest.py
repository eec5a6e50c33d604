from __future__ import annotations

from pathlib import Path

import pytest

from bucketops.domain.object_storage import ObjectStorage, StorageError
from bucketops.infrastructure.metrics import metrics


class StubStorage(ObjectStorage):
    def __init__(self, bucket: str = 'test-bucket', exists: bool = False) -> None:
        self._bucket = bucket
        self.exists = exists
        self.calls: list[tuple] = []
        self.failures: dict[str, StorageError] = {}
        self.objects: dict[str, bytes] = {}

    @property
    def bucket(self) -> str:
        return self._bucket

    def _call(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if name in self.failures:
            raise self.failures[name]

    def bucket_exists(self) -> bool:
        self._call('bucket_exists')
        return self.exists

    def create_bucket(self, region: str) -> str:
        self._call('create_bucket', region)
        self.exists = True
        return ''

    def disable_public_access_block(self) -> str:
        self._call('disable_public_access_block')
        return ''

    def put_bucket_policy(self, policy_path: Path) -> str:
        self._call('put_bucket_policy', policy_path)
        return ''

    def caller_identity(self) -> str:
        self._call('caller_identity')
        return '{\n    "Account": "123456789012"\n}'

    def upload_file(self, path: Path, key: str) -> str:
        self._call('upload_file', path, key)
        self.objects[key] = Path(path).read_bytes()
        return f'upload: {path} to s3://{self._bucket}/{key}'

    def list_objects(self) -> str:
        self._call('list_objects')
        return '\n'.join(f'2026-01-01 00:00:00 {len(data):>10} {key}' for key, data in self.objects.items())

    def delete_object(self, key: str) -> str:
        self._call('delete_object', key)
        self.objects.pop(key, None)
        return f'delete: s3://{self._bucket}/{key}'


@pytest.fixture
def stub_storage() -> StubStorage:
    return StubStorage()


@pytest.fixture(autouse=True)
def _reset_metrics() -> None:
    metrics.reset()
