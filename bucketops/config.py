from __future__ import annotations

import os
import tempfile


class Settings:
    bucket: str = os.getenv("BUCKETOPS_BUCKET", "mycapstone-s3bucket")
    region: str = os.getenv("BUCKETOPS_REGION", "us-east-1")
    backend: str = os.getenv("BUCKETOPS_BACKEND", "sdk").lower()
    aws_cli: str = os.getenv("BUCKETOPS_AWS_CLI", "aws")

    s3_endpoint_url: str | None = os.getenv("S3_ENDPOINT_URL")
    s3_access_key: str | None = os.getenv("S3_ACCESS_KEY")
    s3_secret_key: str | None = os.getenv("S3_SECRET_KEY")

    log_dir: str = os.getenv("BUCKETOPS_LOG_DIR", "logs")
    policy_dir: str = os.getenv("BUCKETOPS_POLICY_DIR", tempfile.gettempdir())
    output_max_lines: int = int(os.getenv("BUCKETOPS_OUTPUT_MAX_LINES", "2000"))

    owner_name: str = os.getenv("BUCKETOPS_OWNER_NAME", "Seun")
    test_file: str = os.getenv("BUCKETOPS_TEST_FILE", "file1.txt")


settings = Settings()
