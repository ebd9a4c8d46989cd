"""Synchronization engine for worklogs."""

from worklog_sync.sync.engine import SyncEngine, SyncResult

__all__ = ["SyncEngine", "SyncResult"]
