from __future__ import annotations

import sys

from bucketops.config import settings
from bucketops.presentation.cli import create_storage, provision


if __name__ == "__main__":
    region = sys.argv[1] if len(sys.argv) > 1 else settings.region
    storage = create_storage(settings.backend, settings.bucket, region)
    raise SystemExit(provision(storage, region, settings.policy_dir))
