from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class StorageError(RuntimeError):
    def __init__(self, message: str, returncode: int = 1, output: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.output = output or message


class ObjectStorage(ABC):
    """Bucket-scoped operations delegated to a cloud provider.

    Methods that print something when run through the provider's CLI return
    that text; every failure is raised as StorageError.
    """

    @property
    @abstractmethod
    def bucket(self) -> str: ...

    @abstractmethod
    def bucket_exists(self) -> bool: ...

    @abstractmethod
    def create_bucket(self, region: str) -> str: ...

    @abstractmethod
    def disable_public_access_block(self) -> str: ...

    @abstractmethod
    def put_bucket_policy(self, policy_path: Path) -> str: ...

    @abstractmethod
    def caller_identity(self) -> str: ...

    @abstractmethod
    def upload_file(self, path: Path, key: str) -> str: ...

    @abstractmethod
    def list_objects(self) -> str: ...

    @abstractmethod
    def delete_object(self, key: str) -> str: ...
