from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from bucketops.application.file_manager_use_case import FileManagerUseCase
from bucketops.application.provision_bucket_use_case import ProvisionBucketUseCase
from bucketops.config import settings
from bucketops.domain.object_storage import ObjectStorage, StorageError
from bucketops.infrastructure.aws_cli_object_storage import AwsCliObjectStorage
from bucketops.infrastructure.metrics import metrics
from bucketops.infrastructure.object_storage import S3ObjectStorage
from bucketops.infrastructure.run_log import RunLog

logger = logging.getLogger("bucketops.cli")
if not logger.handlers:
    logging.basicConfig(level=logging.INFO)

BACKENDS = ("sdk", "cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bucketops",
        description="Provision a public-read bucket and exercise upload, list and delete against it.",
    )
    parser.add_argument("region", nargs="?", default=settings.region)
    parser.add_argument("--bucket", default=settings.bucket)
    parser.add_argument("--backend", choices=BACKENDS, default=settings.backend)
    parser.add_argument("--log-dir", default=settings.log_dir)
    parser.add_argument("--policy-dir", default=settings.policy_dir)
    parser.add_argument("--test-file", default=settings.test_file)
    parser.add_argument("--owner-name", default=settings.owner_name)
    parser.add_argument("--metrics-file", help="write step counters in Prometheus text format")
    parser.add_argument("--skip-provision", action="store_true")
    parser.add_argument("--skip-demo", action="store_true")
    return parser


def create_storage(backend: str, bucket: str, region: str) -> ObjectStorage:
    if backend == "cli":
        return AwsCliObjectStorage(bucket=bucket)
    if backend == "sdk":
        return S3ObjectStorage(bucket=bucket, region=region)
    raise ValueError(f"Unknown storage backend: {backend}")


def provision(storage: ObjectStorage, region: str, policy_dir: str | Path) -> int:
    try:
        ProvisionBucketUseCase(storage, policy_dir).execute(region)
    except StorageError as exc:
        if exc.output:
            print(exc.output, file=sys.stderr)
        logger.error("provisioning failed (rc=%s): %s", exc.returncode, exc)
        return exc.returncode
    return 0


def run_file_manager(storage: ObjectStorage, log_dir: str | Path, owner_name: str, test_file: str) -> Path:
    with RunLog.open(log_dir) as run_log:
        FileManagerUseCase(storage, run_log, owner_name, test_file).execute()
        return run_log.path


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.backend not in BACKENDS:
        parser.error(f"invalid backend {args.backend!r} (choose from 'sdk', 'cli')")
    metrics.reset()
    storage = create_storage(args.backend, args.bucket, args.region)

    if not args.skip_provision:
        returncode = provision(storage, args.region, args.policy_dir)
        if returncode != 0:
            return returncode

    if not args.skip_demo:
        log_path = run_file_manager(storage, args.log_dir, args.owner_name, args.test_file)
        print(f"Combined deployment finished. See {log_path} for filemanager logs.")

    logger.info(json.dumps({"bucket": storage.bucket, "backend": args.backend, **metrics.snapshot()}))
    if args.metrics_file:
        Path(args.metrics_file).write_text(metrics.to_prometheus_text(), encoding="utf-8")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
