from __future__ import annotations

import json
from pathlib import Path
from typing import Any

POLICY_VERSION = "2012-10-17"


def build_public_read_policy(bucket: str) -> dict[str, Any]:
    if not bucket:
        raise ValueError("Bucket name is required")

    return {
        "Version": POLICY_VERSION,
        "Statement": [
            {
                "Sid": "AllowPublicRead",
                "Effect": "Allow",
                "Principal": "*",
                "Action": ["s3:GetObject"],
                "Resource": [f"arn:aws:s3:::{bucket}/*"],
            }
        ],
    }


def policy_file_path(bucket: str, directory: str | Path) -> Path:
    return Path(directory) / f"{bucket}-policy.json"


def write_policy_file(bucket: str, directory: str | Path) -> Path:
    """Write the public-read policy for ``bucket`` and return the file path."""
    policy = build_public_read_policy(bucket)
    path = policy_file_path(bucket, directory)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(policy, indent=4) + "\n", encoding="utf-8")
    return path
