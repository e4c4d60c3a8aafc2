"""
错误处理装饰器 - 统一的异常处理

用于界面槽函数：异常被记录并吞掉，不会冒泡进 Qt 事件循环导致进程退出。

设计原则：
1. 不捕获系统异常（SystemExit、KeyboardInterrupt等）
2. 已知的API异常按警告记录
3. 对于未知异常，记录完整堆栈便于调试
"""

from functools import wraps
from typing import Any, Callable, Tuple, Type
import logging

logger = logging.getLogger(__name__)


# 不应被装饰器捕获的系统异常
_SYSTEM_EXCEPTIONS: Tuple[Type[BaseException], ...] = (
    SystemExit,
    KeyboardInterrupt,
    GeneratorExit,
)


def handle_errors(operation: str, default_return: Any = None):
    """
    处理函数中的异常

    Args:
        operation: 操作名称（用于日志）
        default_return: 异常时的默认返回值（默认None）

    Example:
        @handle_errors("切换文档")
        def _on_doc_clicked(self, item):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)

            except _SYSTEM_EXCEPTIONS:
                raise

            except Exception as e:
                from docdesk.api.exceptions import APIError

                if isinstance(e, APIError):
                    logger.warning("%s失败: %s", operation, e)
                else:
                    logger.exception("%s时发生未预期的错误: %s", operation, e)
                return default_return

        return wrapper
    return decorator
