"""Utility modules for worklog synchronizer."""

from worklog_sync.utils.logging import get_logger, setup_logging
from worklog_sync.utils.storage import StorageManager

__all__ = ["get_logger", "setup_logging", "StorageManager"]
