"""
异步工作线程工具

提供QThread包装器，用于在后台执行耗时的网络请求，避免UI冻结

线程安全设计：
- 使用 CancellationToken（threading.Event）实现线程安全的取消机制
- 令牌会传入被执行的函数，函数内部可以协作式地中止
- 信号发射前检查取消状态，取消后不再发射任何信号
- 自动在线程完成后清理资源
"""

import logging
import threading
import traceback
from typing import Any, Callable, Dict, Optional

from PyQt6.QtCore import QThread, pyqtSignal


logger = logging.getLogger(__name__)


class OperationCancelled(Exception):
    """协作式取消时抛出的异常基类"""
    pass


class CancellationToken:
    """取消令牌

    同一个令牌由发起方持有（用于 cancel）并传入后台操作（用于检查）。
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        """请求取消（线程安全，可重复调用）"""
        self._event.set()

    def is_cancelled(self) -> bool:
        """是否已请求取消（线程安全）"""
        return self._event.is_set()

    def raise_if_cancelled(self, exc_factory: Callable[[], Exception] = OperationCancelled):
        """已取消时抛出异常"""
        if self._event.is_set():
            raise exc_factory()


class AsyncWorker(QThread):
    """异步调用工作线程

    用法:
        token = CancellationToken()
        worker = AsyncWorker(client.fetch_text, path, token, token=token)
        worker.success.connect(self.onSuccess)
        worker.error.connect(self.onError)
        worker.start()
        ...
        worker.cancel()  # 之后不会再有 success/error 信号
    """

    # 信号
    success = pyqtSignal(object)       # 成功时发射结果
    error = pyqtSignal(str)            # 失败时发射错误信息
    error_detail = pyqtSignal(dict)    # 失败时发射详细错误信息

    def __init__(self, func: Callable, *args, token: Optional[CancellationToken] = None, **kwargs):
        """初始化工作线程

        Args:
            func: 要执行的函数
            *args: 函数位置参数
            token: 取消令牌，不传时自动创建
            **kwargs: 函数关键字参数
        """
        super().__init__()
        self.func = func
        self.args = args
        self.kwargs = kwargs
        self.token = token or CancellationToken()
        self._func_name = getattr(func, '__name__', str(func))

        logger.debug("AsyncWorker created: func=%s, args=%s", self._func_name, self.args)

        # 线程完成后自动删除，防止内存泄漏
        self.finished.connect(self._on_finished)

    def _on_finished(self):
        """线程完成时的清理"""
        try:
            self.deleteLater()
        except RuntimeError:
            pass  # 对象可能已被删除

    def run(self):
        """线程执行入口"""
        logger.debug("AsyncWorker started: func=%s", self._func_name)

        try:
            if self.token.is_cancelled():
                logger.info("AsyncWorker cancelled before execution: func=%s", self._func_name)
                return

            result = self.func(*self.args, **self.kwargs)

            if not self.token.is_cancelled():
                self.success.emit(result)

        except Exception as e:
            self._handle_exception(e)

    def _handle_exception(self, e: Exception):
        """处理异常并发射错误信号"""
        # 已取消时（包括取消导致的传输异常）静默结束
        if self.token.is_cancelled() or isinstance(e, OperationCancelled):
            logger.debug("AsyncWorker cancelled: func=%s (%s)", self._func_name, type(e).__name__)
            return

        logger.warning(
            "AsyncWorker exception: func=%s, error_type=%s, error=%s",
            self._func_name, type(e).__name__, str(e)
        )

        detail = self._build_error_detail(e)
        self.error.emit(detail['message'])
        self.error_detail.emit(detail)

    def _build_error_detail(self, e: Exception) -> Dict[str, Any]:
        """构建详细错误信息"""
        detail = {
            'type': type(e).__name__,
            'message': getattr(e, 'message', None) or str(e) or type(e).__name__,
            'traceback': traceback.format_exc(),
            'func_name': self._func_name,
        }
        for attr in ['status_code', 'code']:
            if hasattr(e, attr):
                detail[attr] = getattr(e, attr)
        return detail

    def cancel(self):
        """取消任务（线程安全）

        正在进行的请求由被执行函数通过令牌协作式中止。
        """
        logger.debug("AsyncWorker.cancel() called: func=%s", self._func_name)
        self.token.cancel()

    def is_cancelled(self) -> bool:
        """检查是否已取消（线程安全）"""
        return self.token.is_cancelled()
