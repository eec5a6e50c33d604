from __future__ import annotations

import logging
from pathlib import Path

from bucketops.domain.object_storage import ObjectStorage
from bucketops.domain.policy import write_policy_file

logger = logging.getLogger("bucketops.provision")


class ProvisionBucketUseCase:
    def __init__(self, storage: ObjectStorage, policy_dir: str | Path) -> None:
        self._storage = storage
        self._policy_dir = Path(policy_dir)

    def execute(self, region: str) -> Path:
        """Create the bucket if needed and make its objects publicly readable.

        StorageError from any step propagates; nothing after the failed step runs.
        """
        bucket = self._storage.bucket
        print(f"Creating bucket: {bucket} in region: {region}")

        if self._storage.bucket_exists():
            print(f"Bucket {bucket} already exists or is accessible. Skipping create.")
        else:
            output = self._storage.create_bucket(region)
            if output:
                print(output)

        print("Disabling per-bucket public access block...")
        self._storage.disable_public_access_block()

        print("Writing public-read bucket policy...")
        policy_path = write_policy_file(bucket, self._policy_dir)
        logger.debug("policy written to %s", policy_path)

        self._storage.put_bucket_policy(policy_path)

        print(f"Bucket {bucket} created/configured. Example upload:")
        print(f"  aws s3 cp ./localfile.txt s3://{bucket}/localfile.txt --acl public-read")
        return policy_path
