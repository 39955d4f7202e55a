"""
dashdock core - application infrastructure.

Provides:
- Signal: synchronous observer
- ConfigManager: pydantic-validated configuration with persistence
- setup_logging: loguru sinks for console and rotating log files
"""
from .events import Signal
from .config import (
    ConfigManager,
    AppConfig,
    GeneralSettings,
    LayoutSettings,
    SessionSettings,
)
from .logging import setup_logging

__all__ = [
    "Signal",
    "ConfigManager",
    "AppConfig",
    "GeneralSettings",
    "LayoutSettings",
    "SessionSettings",
    "setup_logging",
]
