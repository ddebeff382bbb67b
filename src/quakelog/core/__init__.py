"""
QuakeLog Core - Shared infrastructure.

This module contains:
- config: Application configuration management
- utils: Logging setup and timing helpers
"""

from quakelog.core.config import (
    ExportConfig,
    LoggingConfig,
    ParserConfig,
    QuakeLogConfig,
    get_config,
    load_config,
    reset_config,
    set_config,
)
from quakelog.core.utils import PerformanceMonitor, setup_logging

__all__ = [
    "ExportConfig",
    "LoggingConfig",
    "ParserConfig",
    "QuakeLogConfig",
    "get_config",
    "load_config",
    "reset_config",
    "set_config",
    "PerformanceMonitor",
    "setup_logging",
]
