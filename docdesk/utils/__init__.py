"""
工具函数模块
"""

from .async_worker import AsyncWorker, CancellationToken, OperationCancelled
from .config_manager import ConfigManager, PreferenceStorageError
from .constants import ContentDefaults, StorageKeys, WorkerTimeouts, WorkspaceConstants
from .error_handler import handle_errors
from .formatters import is_external_link, join_url, normalize_base_url, slugify
from .worker_manager import WorkerManager

__all__ = [
    'AsyncWorker',
    'CancellationToken',
    'ConfigManager',
    'ContentDefaults',
    'handle_errors',
    'is_external_link',
    'join_url',
    'normalize_base_url',
    'OperationCancelled',
    'PreferenceStorageError',
    'slugify',
    'StorageKeys',
    'WorkerManager',
    'WorkerTimeouts',
    'WorkspaceConstants',
]
