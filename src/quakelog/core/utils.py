"""
Utility helpers for QuakeLog.

This module provides:
- Logging setup from LoggingConfig
- A timing context manager for logging operation durations
"""

import logging
import time
from logging.handlers import RotatingFileHandler

from quakelog.core.config import LoggingConfig

logger = logging.getLogger(__name__)


def setup_logging(config: LoggingConfig, verbose: bool = False) -> None:
    """
    Configure the root logger.

    Args:
        config: Logging section of the application config
        verbose: Force DEBUG level regardless of config
    """
    level = logging.DEBUG if verbose else getattr(logging, config.level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.file:
        handlers.append(
            RotatingFileHandler(
                config.file,
                maxBytes=config.file_max_bytes,
                backupCount=config.file_backup_count,
            )
        )

    logging.basicConfig(level=level, format=config.format, handlers=handlers, force=True)


class PerformanceMonitor:
    """
    Context manager for monitoring performance of code blocks.

    Usage:
        with PerformanceMonitor("parsing log"):
            parse_log_file(...)
    """

    def __init__(self, operation_name: str, log_level: int = logging.INFO):
        self.operation_name = operation_name
        self.log_level = log_level
        self.start_time: float | None = None
        self.elapsed: float | None = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = time.perf_counter() - (self.start_time or 0)
        if exc_type is not None:
            logger.error(f"{self.operation_name} failed after {self.elapsed:.3f}s: {exc_val}")
        else:
            logger.log(self.log_level, f"{self.operation_name} completed in {self.elapsed:.3f}s")
        return False
