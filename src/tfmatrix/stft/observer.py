"""Optional instrumentation hook for STFT runs."""

from __future__ import annotations

import logging
from typing import Protocol

from .config import PROGRESS_EVERY

logger = logging.getLogger(__name__)


class STFTObserver(Protocol):
    """Receives timing and progress events. The core never requires one."""

    def on_phase(self, name: str, elapsed_s: float) -> None: ...

    def on_window(self, index: int, total: int) -> None: ...


class LoggingObserver:
    """Report phase timings and window progress through ``logging``."""

    def __init__(
        self,
        log: logging.Logger | None = None,
        *,
        level: int = logging.DEBUG,
        progress_every: int = PROGRESS_EVERY,
    ) -> None:
        self.logger = log or logger
        self.level = level
        self.progress_every = progress_every

    def on_phase(self, name: str, elapsed_s: float) -> None:
        self.logger.log(self.level, "%s completed in %.1f ms", name, elapsed_s * 1000.0)

    def on_window(self, index: int, total: int) -> None:
        if index > 0 and index % self.progress_every == 0:
            self.logger.log(
                self.level,
                "Processed %d/%d windows (%.1f%%)",
                index,
                total,
                index * 100.0 / total,
            )
