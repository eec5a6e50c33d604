from __future__ import annotations

import subprocess

import pytest

from bucketops.domain.object_storage import StorageError
from bucketops.infrastructure import aws_cli_object_storage
from bucketops.infrastructure.aws_cli_object_storage import AwsCliObjectStorage


class FakeRun:
    def __init__(self, returncode: int = 0, stdout: str = '') -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.calls = []

    def __call__(self, argv, **kwargs):
        self.calls.append(argv)
        return subprocess.CompletedProcess(argv, self.returncode, stdout=self.stdout)


@pytest.fixture
def fake_run(monkeypatch):
    fake = FakeRun()
    monkeypatch.setattr(aws_cli_object_storage.subprocess, 'run', fake)
    return fake


def test_create_bucket_argv(fake_run) -> None:
    storage = AwsCliObjectStorage(bucket='demo', executable='aws')

    storage.create_bucket('us-east-1')
    storage.create_bucket('ap-south-1')

    assert fake_run.calls[0] == ['aws', 's3api', 'create-bucket', '--bucket', 'demo', '--region', 'us-east-1']
    assert fake_run.calls[1][-2:] == ['--create-bucket-configuration', 'LocationConstraint=ap-south-1']


def test_object_commands_argv(fake_run, tmp_path) -> None:
    storage = AwsCliObjectStorage(bucket='demo', executable='aws')
    policy = tmp_path / 'demo-policy.json'

    storage.put_bucket_policy(policy)
    storage.upload_file(tmp_path / 'file1.txt', 'file1.txt')
    storage.list_objects()
    storage.delete_object('file1.txt')
    storage.caller_identity()

    assert fake_run.calls[0][-1] == policy.resolve().as_uri()
    assert fake_run.calls[0][-1].startswith('file:///')
    assert fake_run.calls[1] == ['aws', 's3', 'cp', str(tmp_path / 'file1.txt'), 's3://demo/file1.txt']
    assert fake_run.calls[2] == ['aws', 's3', 'ls', 's3://demo/', '--recursive']
    assert fake_run.calls[3] == ['aws', 's3', 'rm', 's3://demo/file1.txt']
    assert fake_run.calls[4] == ['aws', 'sts', 'get-caller-identity', '--output', 'json']


def test_failure_keeps_cli_exit_code(fake_run) -> None:
    fake_run.returncode = 254
    fake_run.stdout = 'An error occurred (AccessDenied)\n'
    storage = AwsCliObjectStorage(bucket='demo', executable='aws')

    with pytest.raises(StorageError) as excinfo:
        storage.disable_public_access_block()

    assert excinfo.value.returncode == 254
    assert excinfo.value.output == 'An error occurred (AccessDenied)'


def test_bucket_exists_maps_failure_to_false(fake_run) -> None:
    storage = AwsCliObjectStorage(bucket='demo', executable='aws')

    assert storage.bucket_exists() is True
    fake_run.returncode = 254
    assert storage.bucket_exists() is False


def test_missing_executable(monkeypatch) -> None:
    def missing(argv, **kwargs):
        raise FileNotFoundError(argv[0])

    monkeypatch.setattr(aws_cli_object_storage.subprocess, 'run', missing)
    storage = AwsCliObjectStorage(bucket='demo', executable='no-such-aws')

    with pytest.raises(StorageError) as excinfo:
        storage.bucket_exists()

    assert excinfo.value.returncode == 127
