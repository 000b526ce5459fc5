"""
git-obsidian-sync Core Module

File discovery, path resolution, commit metadata, the copy engine and
run orchestration.

Author: git-obsidian-sync Project
License: MIT
"""

from .orchestrator import SyncOrchestrator, SyncReport, run_sync
from .sync_engine import SyncEngine, SyncResult, SyncStatus

__all__ = ['SyncOrchestrator', 'SyncReport', 'run_sync', 'SyncEngine', 'SyncResult', 'SyncStatus']
