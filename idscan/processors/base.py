"""
Processor base class and the context shared by a batch run.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Any

from ..config import Config
from ..exceptions import IdScanError
from ..logger import get_logger, log_timing
from ..models import BatchStats, DocumentInput, ResultSet
from ..utils.timing import Timer


@dataclass
class ProcessingContext:
    """
    Everything a batch run reads and writes.

    `results` may be a working set that already holds records from an
    earlier run; new records are merged into it.
    """

    config: Config
    documents: List[DocumentInput] = field(default_factory=list)
    results: ResultSet = field(default_factory=ResultSet)
    stats: BatchStats = field(default_factory=BatchStats)


class BaseProcessor(ABC):
    """
    A batch step with validation, timing and the error policy of the
    package: recoverable `IdScanError`s and unexpected exceptions turn into
    a False result, non-recoverable ones reach the caller.
    """

    name: str = "BaseProcessor"

    def __init__(self, context: ProcessingContext):
        self.context = context
        self.config = context.config
        self.logger = get_logger(f"idscan.{self.name}")
        self._timer = Timer()

    @property
    def debug_mode(self) -> bool:
        return self.config.debug

    def _log(self, level: int, message: str, fields: dict) -> None:
        if fields:
            message = f"{message} " + " ".join(f"{k}={v}" for k, v in fields.items())
        self.logger.log(level, message)

    def log_debug(self, message: str, **fields: Any) -> None:
        """Per-document detail, emitted only with DEBUG enabled."""
        if self.debug_mode:
            self._log(logging.DEBUG, message, fields)

    def log_info(self, message: str, **fields: Any) -> None:
        self._log(logging.INFO, message, fields)

    def log_warning(self, message: str, **fields: Any) -> None:
        self._log(logging.WARNING, message, fields)

    def log_error(self, message: str, error: Optional[Exception] = None) -> None:
        if error is not None:
            message = f"{message}: {error}"
        self.logger.error(message, exc_info=bool(error) and self.debug_mode)

    @abstractmethod
    def process(self) -> bool:
        """Run the step; True when it finished."""

    def validate(self) -> bool:
        return True

    def run(self) -> bool:
        """
        Validate, then process.

        Raises:
            IdScanError: only errors marked non-recoverable (for example an
                OCR engine that cannot start)
        """
        self.log_info(f"Starting {self.name}", documents=len(self.context.documents))
        self._timer.restart()

        try:
            if not self.validate():
                self.log_error(f"{self.name} cannot run with the current configuration")
                return False
            finished = self.process()
        except IdScanError as e:
            self.log_error(f"{self.name} stopped after {self._timer.elapsed:.2f}s", error=e)
            if not e.recoverable:
                raise
            return False
        except Exception as e:
            self.log_error(f"{self.name} crashed after {self._timer.elapsed:.2f}s", error=e)
            return False

        log_timing(self.logger, self.name, self._timer.elapsed)
        return finished
