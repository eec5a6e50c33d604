from __future__ import annotations

from bucketops.config import settings
from bucketops.presentation.cli import create_storage, run_file_manager


if __name__ == "__main__":
    storage = create_storage(settings.backend, settings.bucket, settings.region)
    log_path = run_file_manager(storage, settings.log_dir, settings.owner_name, settings.test_file)
    print(f"See {log_path} for filemanager logs.")
