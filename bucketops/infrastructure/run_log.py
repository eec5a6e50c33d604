from __future__ import annotations

import logging
import sys
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from bucketops.config import settings
from bucketops.domain.object_storage import StorageError
from bucketops.infrastructure.metrics import metrics

LINE_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
FILE_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"
LEVEL_NAMES = {"WARNING": "WARN", "CRITICAL": "ERROR"}


class RunLogFormatter(logging.Formatter):
    converter = time.gmtime

    def __init__(self) -> None:
        super().__init__(LINE_FORMAT, datefmt=TIMESTAMP_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        short = LEVEL_NAMES.get(record.levelname)
        if short:
            line = line.replace(f"[{record.levelname}]", f"[{short}]", 1)
        return line


@dataclass
class StepResult:
    description: str
    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class RunLog:
    """Tees structured lines to stdout and a timestamped log file.

    Captured operation output goes to the file only.
    """

    def __init__(self, path: Path, max_output_lines: int | None = None) -> None:
        self.path = path
        self._max_output_lines = settings.output_max_lines if max_output_lines is None else max_output_lines

        self._logger = logging.getLogger("bucketops.run")
        self._output_logger = logging.getLogger("bucketops.run.output")
        self._reset_handlers()

        formatter = RunLogFormatter()
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        self._logger.addHandler(file_handler)
        self._logger.addHandler(console_handler)
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False

        raw_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        raw_handler.setFormatter(logging.Formatter("%(message)s"))
        self._output_logger.addHandler(raw_handler)
        self._output_logger.setLevel(logging.INFO)
        self._output_logger.propagate = False

    @classmethod
    def open(
        cls,
        log_dir: str | Path,
        now: datetime | None = None,
        max_output_lines: int | None = None,
    ) -> "RunLog":
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        stamp = (now or datetime.now(timezone.utc)).strftime(FILE_TIMESTAMP_FORMAT)
        return cls(directory / f"storage-{stamp}.log", max_output_lines=max_output_lines)

    def _reset_handlers(self) -> None:
        for logger in (self._logger, self._output_logger):
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()

    def close(self) -> None:
        self._reset_handlers()

    def __enter__(self) -> "RunLog":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warn(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)

    def _record_output(self, output: str) -> None:
        lines = output.splitlines()[: self._max_output_lines]
        if lines:
            self._output_logger.info("\n".join(lines))

    def run(self, description: str, operation: Callable[..., str], *args: object) -> StepResult:
        self.info(f"RUN: {description}")
        metrics.incr("steps_total")
        try:
            output = operation(*args) or ""
        except StorageError as exc:
            metrics.incr("steps_failed_total")
            self.error(f"FAILED(rc={exc.returncode}): {description}")
            self._record_output(exc.output)
            return StepResult(description=description, returncode=exc.returncode, output=exc.output)

        metrics.incr("steps_ok_total")
        self.info(f"OK: {description}")
        self._record_output(output)
        return StepResult(description=description, returncode=0, output=output)
