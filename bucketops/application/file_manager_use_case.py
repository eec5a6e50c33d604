from __future__ import annotations

from pathlib import Path

from bucketops.domain.object_storage import ObjectStorage
from bucketops.infrastructure.run_log import RunLog, StepResult


class FileManagerUseCase:
    def __init__(
        self,
        storage: ObjectStorage,
        run_log: RunLog,
        owner_name: str,
        test_file: str | Path,
    ) -> None:
        self._storage = storage
        self._log = run_log
        self._owner_name = owner_name
        self._test_file = Path(test_file)

    def execute(self) -> list[StepResult]:
        bucket = self._storage.bucket
        name = self._test_file.name
        results: list[StepResult] = []

        identity = self._log.run("aws sts get-caller-identity --output json", self._storage.caller_identity)
        results.append(identity)
        if identity.ok:
            self._log.info("Recorded AWS caller identity")
        else:
            self._log.warn("Unable to record AWS caller identity - check AWS CLI config/credentials")

        self._log.info("Creating test file for upload")
        self._test_file.write_text(f"My name is {self._owner_name}\n", encoding="utf-8")

        self._log.info(f"Uploading file {name} to bucket {bucket}")
        upload = self._log.run(
            f"aws s3 cp {self._test_file} s3://{bucket}/",
            self._storage.upload_file,
            self._test_file,
            name,
        )
        results.append(upload)
        if upload.ok:
            self._log.info(f"Upload successful: {name} -> s3://{bucket}/{name}")
        else:
            self._log.error(f"Upload failed: {name} -> s3://{bucket}/")

        self._log.info(f"Listing available files in {bucket}")
        listing = self._log.run(f"aws s3 ls s3://{bucket}/ --recursive", self._storage.list_objects)
        results.append(listing)
        if listing.ok:
            self._log.info(f"Listed files in {bucket}")
        else:
            self._log.error(f"Failed to list files in {bucket}")

        self._log.info(f"Deleting test file s3://{bucket}/{name}")
        delete = self._log.run(f"aws s3 rm s3://{bucket}/{name}", self._storage.delete_object, name)
        results.append(delete)
        if delete.ok:
            self._log.info(f"Deleted s3://{bucket}/{name}")
        else:
            self._log.error(f"Failed to delete s3://{bucket}/{name}")

        self._log.info("script completed")
        return results
