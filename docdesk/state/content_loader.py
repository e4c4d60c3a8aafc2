"""
内容加载器

按解析后的路径拉取文档原文，每个路径在一次会话中只成功拉取一次。

协议：
1. 路径已在缓存中：立即返回 READY，不再请求
2. 否则发起异步请求，期间状态为 LOADING
3. 成功：写入缓存，状态变为 READY
4. 非成功状态码或传输失败：状态变为 ERROR（错误不缓存，重新选择即重试）
5. 被取代或销毁：取消进行中的请求，其结果不得写入缓存或影响新路径的状态

每个加载器实例任一时刻最多只有一个"存活"的请求。
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from docdesk.utils.async_worker import AsyncWorker, CancellationToken
from docdesk.utils.worker_manager import WorkerManager

logger = logging.getLogger(__name__)

# WorkerManager 中内容请求使用的名称
_FETCH_WORKER_NAME = "content_fetch"


class LoadStatus(Enum):
    """加载状态"""
    IDLE = "idle"        # 尚无路径（目录为空）
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class LoadState:
    """内容面板状态，LOADING/READY/ERROR 互斥"""
    path: Optional[str]
    status: LoadStatus
    content: Optional[str] = None
    error_message: Optional[str] = None


class ContentCache:
    """文档原文缓存

    以解析后的路径为键（不是文档ID），两个文档解析到同一路径时共享内容。
    条目只增不减：会话期间内容视为不可变，不淘汰也不失效。
    """

    def __init__(self):
        self._entries: Dict[str, str] = {}
        self._hits = 0
        self._misses = 0

    def get(self, path: str) -> Optional[str]:
        text = self._entries.get(path)
        if text is None:
            self._misses += 1
            return None
        self._hits += 1
        logger.debug("内容缓存命中: %s", path)
        return text

    def put(self, path: str, text: str):
        self._entries[path] = text
        logger.debug("内容缓存存入: %s", path)

    def contains(self, path: str) -> bool:
        """检查是否已缓存（不计入统计）"""
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def stats(self) -> Dict[str, Any]:
        """获取缓存统计"""
        total = self._hits + self._misses
        hit_rate = self._hits / total if total > 0 else 0
        return {
            'size': len(self._entries),
            'hits': self._hits,
            'misses': self._misses,
            'hit_rate': f"{hit_rate:.1%}",
        }


def default_worker_factory(func: Callable, path: str, token: CancellationToken) -> AsyncWorker:
    """创建在后台线程执行请求的 Worker"""
    return AsyncWorker(func, path, token, token=token)


class ContentLoader(QObject):
    """内容加载器

    用法:
        loader = ContentLoader(client)
        loader.state_changed.connect(self.render_state)
        loader.load(path)
        ...
        loader.shutdown()
    """

    state_changed = pyqtSignal(object)  # LoadState

    def __init__(
        self,
        client,
        cache: Optional[ContentCache] = None,
        worker_factory: Callable = default_worker_factory,
        parent=None,
    ):
        """
        Args:
            client: 提供 fetch_text(path, token) 与 source_url(path) 的内容源客户端
            cache: 内容缓存，默认新建
            worker_factory: (func, path, token) -> Worker，测试时可替换
            parent: 父对象
        """
        super().__init__(parent)
        self._client = client
        self._cache = cache if cache is not None else ContentCache()
        self._worker_factory = worker_factory
        self._workers = WorkerManager(self)

        self._state = LoadState(path=None, status=LoadStatus.IDLE)
        self._live_token: Optional[CancellationToken] = None
        self._live_path: Optional[str] = None
        self._is_shut_down = False

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def cache(self) -> ContentCache:
        return self._cache

    def source_url(self, path: str) -> str:
        """"在源处打开"的回退链接"""
        return self._client.source_url(path)

    def raw_url(self, path: str) -> str:
        return self._client.raw_url(path)

    def load(self, path: str) -> LoadState:
        """
        加载指定路径的内容

        同一路径已在加载中时保持原请求；其他任何进行中的请求都会被取消。

        Returns:
            调用后的状态（READY 或 LOADING）
        """
        if self._is_shut_down:
            logger.warning("ContentLoader已销毁，忽略加载请求: %s", path)
            return self._state

        if self._live_path == path and self._state.status == LoadStatus.LOADING:
            return self._state

        self.cancel()

        cached = self._cache.get(path)
        if cached is not None:
            self._set_state(LoadState(path=path, status=LoadStatus.READY, content=cached))
            return self._state

        token = CancellationToken()
        self._live_token = token
        self._live_path = path
        self._set_state(LoadState(path=path, status=LoadStatus.LOADING))

        worker = self._worker_factory(self._client.fetch_text, path, token)
        worker.success.connect(self._on_fetch_success)
        worker.error.connect(self._on_fetch_error)
        self._workers.start(worker, _FETCH_WORKER_NAME)
        logger.debug("内容请求已发起: %s", path)
        return self._state

    def cancel(self):
        """取消进行中的请求（如果有），被取消的请求不产生任何状态变化"""
        if self._live_token is None:
            return
        logger.debug("取消内容请求: %s", self._live_path)
        self._live_token.cancel()
        self._live_token = None
        self._live_path = None
        self._workers.stop(_FETCH_WORKER_NAME)

    def shutdown(self):
        """销毁时调用：取消请求并等待后台线程结束"""
        if self._is_shut_down:
            return
        self._is_shut_down = True
        self.cancel()
        self._workers.cleanup_all()

    def _is_live(self, worker) -> bool:
        token = getattr(worker, "token", None)
        return (
            token is not None
            and token is self._live_token
            and not token.is_cancelled()
        )

    @pyqtSlot(object)
    def _on_fetch_success(self, text):
        worker = self.sender()
        if not self._is_live(worker):
            logger.debug("丢弃已被取代的请求结果")
            return
        path = self._live_path
        self._live_token = None
        self._live_path = None
        self._cache.put(path, text)
        self._set_state(LoadState(path=path, status=LoadStatus.READY, content=text))

    @pyqtSlot(str)
    def _on_fetch_error(self, message):
        worker = self.sender()
        if not self._is_live(worker):
            logger.debug("丢弃已被取代的请求错误: %s", message)
            return
        path = self._live_path
        self._live_token = None
        self._live_path = None
        logger.warning("文档加载失败: %s - %s", path, message)
        self._set_state(LoadState(path=path, status=LoadStatus.ERROR, error_message=message))

    def _set_state(self, state: LoadState):
        self._state = state
        self.state_changed.emit(state)
