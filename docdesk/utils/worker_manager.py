"""
Worker 管理器 - 集中管理 QThread Worker 的生命周期

提供统一的 Worker 注册、启动、清理机制，避免内存泄漏和重复代码。

用法示例:
    from docdesk.utils.worker_manager import WorkerManager
    from docdesk.utils.async_worker import AsyncWorker

    class MyComponent(QObject):
        def __init__(self):
            super().__init__()
            self.worker_manager = WorkerManager(self)

        def start_fetch(self):
            worker = AsyncWorker(client.fetch_text, path, token, token=token)
            worker.success.connect(self.on_success)
            self.worker_manager.start(worker, 'content_fetch')

        def shutdown(self):
            self.worker_manager.cleanup_all()
"""

import logging
from typing import Callable, Dict, Optional, Set

from PyQt6.QtCore import QObject, QThread

from .constants import WorkerTimeouts

logger = logging.getLogger(__name__)

# 停止 Worker 时需要断开的结果信号
_RESULT_SIGNALS = ('success', 'error', 'error_detail')


class WorkerManager:
    """Worker 生命周期管理器

    特性：
    - 支持命名 Worker（同名 Worker 会自动取消旧的）
    - 被取消的 Worker 不阻塞UI等待，断开结果信号后在后台自然结束
    - Worker 完成后自动释放引用
    - 销毁时统一取消并等待所有线程
    """

    def __init__(self, parent: Optional[QObject] = None):
        """
        初始化 WorkerManager

        Args:
            parent: 父对象（可选，用于日志标识）
        """
        self._parent_name = type(parent).__name__ if parent else 'Unknown'

        # 命名 Worker 字典：name -> worker
        self._named_workers: Dict[str, QThread] = {}

        # 已取消但线程尚未结束的 Worker（强引用，防止线程运行中被回收）
        self._retired_workers: Set[QThread] = set()

        self._is_cleaned_up = False

    def start(
        self,
        worker: QThread,
        name: str,
        on_finished: Optional[Callable] = None
    ) -> QThread:
        """
        启动并注册一个命名 Worker，同名的旧 Worker 会被取消

        Args:
            worker: QThread Worker 实例
            name: Worker 名称
            on_finished: Worker 完成后的额外回调（可选）

        Returns:
            启动的 Worker 实例
        """
        if self._is_cleaned_up:
            logger.warning(
                "WorkerManager for %s already cleaned up, cannot start worker",
                self._parent_name
            )
            return worker

        self.stop(name)
        self._named_workers[name] = worker

        def on_worker_finished():
            self._on_worker_finished(worker, name)
            if on_finished:
                try:
                    on_finished()
                except Exception as e:
                    logger.error("Worker finish callback error: %s", e)

        worker.finished.connect(on_worker_finished)
        worker.start()
        logger.debug("WorkerManager[%s]: Started worker '%s'", self._parent_name, name)
        return worker

    def stop(self, name: str):
        """
        取消指定名称的 Worker（不等待线程结束）

        Args:
            name: Worker 名称
        """
        worker = self._named_workers.pop(name, None)
        if worker is None:
            return
        logger.debug("WorkerManager[%s]: Cancelling worker '%s'", self._parent_name, name)
        self._cancel_worker(worker)
        if self._is_worker_running(worker):
            self._retired_workers.add(worker)

    def cleanup_all(self, wait_ms: int = WorkerTimeouts.DEFAULT_MS):
        """
        取消所有 Worker 并等待结束，之后不再接受新的 Worker

        在组件销毁时调用此方法。可以安全地多次调用。
        """
        if self._is_cleaned_up:
            return
        self._is_cleaned_up = True

        workers = list(self._named_workers.values()) + list(self._retired_workers)
        self._named_workers.clear()
        self._retired_workers.clear()

        for worker in workers:
            self._cancel_worker(worker)
            self._wait_worker(worker, wait_ms)

        logger.debug("WorkerManager[%s]: Cleaned up %d workers", self._parent_name, len(workers))

    def get_worker(self, name: str) -> Optional[QThread]:
        """获取指定名称的 Worker"""
        return self._named_workers.get(name)

    def _cancel_worker(self, worker: QThread):
        try:
            if hasattr(worker, 'cancel'):
                worker.cancel()
            # 断开结果信号（防止回调到已销毁或已切换的对象）
            for signal_name in _RESULT_SIGNALS:
                signal = getattr(worker, signal_name, None)
                if signal is None:
                    continue
                try:
                    signal.disconnect()
                except (TypeError, RuntimeError):
                    pass  # 信号可能未连接或对象已删除
        except RuntimeError as e:
            # C++ 对象可能已被删除
            logger.debug("WorkerManager[%s]: Worker already deleted: %s", self._parent_name, e)

    def _wait_worker(self, worker: QThread, wait_ms: int):
        try:
            if not worker.isRunning():
                return
            worker.quit()
            if not worker.wait(wait_ms):
                logger.warning(
                    "WorkerManager[%s]: Worker did not stop within %dms, force terminating",
                    self._parent_name, wait_ms
                )
                worker.terminate()
                worker.wait(WorkerTimeouts.FORCE_TERMINATE_MS)
        except RuntimeError as e:
            logger.debug("WorkerManager[%s]: Worker already deleted: %s", self._parent_name, e)

    def _on_worker_finished(self, worker: QThread, name: str):
        if self._named_workers.get(name) is worker:
            self._named_workers.pop(name, None)
        self._retired_workers.discard(worker)

    @property
    def active_worker_count(self) -> int:
        """获取活跃 Worker 数量（含已取消未结束的）"""
        workers = list(self._named_workers.values()) + list(self._retired_workers)
        return sum(1 for w in workers if self._is_worker_running(w))

    @staticmethod
    def _is_worker_running(worker: QThread) -> bool:
        try:
            return worker.isRunning()
        except (RuntimeError, AttributeError):
            return False
