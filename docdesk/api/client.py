"""
内容源客户端

通过 HTTP(S) GET 拉取文档原文，并生成"在源处打开"的浏览链接。
请求在工作线程中执行，取消通过 CancellationToken 协作完成。
"""

import logging
from contextlib import closing
from typing import Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from docdesk.api.constants import RetryConfig, STREAM_CHUNK_SIZE, TimeoutConfig
from docdesk.api.exceptions import (
    APIError,
    ConnectionError as APIConnectionError,
    FetchCancelledError,
    TimeoutError as APITimeoutError,
    create_api_error,
)
from docdesk.utils.async_worker import CancellationToken
from docdesk.utils.constants import ContentDefaults
from docdesk.utils.formatters import join_url


logger = logging.getLogger(__name__)


class ContentClient:
    """内容源客户端

    支持两种使用方式：

    1. 直接使用：
        client = ContentClient()
        text = client.fetch_text("docs/README.md", CancellationToken())
        client.close()

    2. Context Manager：
        with ContentClient() as client:
            text = client.fetch_text("docs/README.md", CancellationToken())
    """

    def __init__(
        self,
        raw_base_url: str = ContentDefaults.RAW_BASE_URL,
        repo_base_url: str = ContentDefaults.REPO_BASE_URL,
        timeout: Tuple[int, int] = (TimeoutConfig.CONNECT, TimeoutConfig.READ_DEFAULT),
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            raw_base_url: 原始内容基础地址（程序化拉取）
            repo_base_url: 源码浏览基础地址（只用于生成链接）
            timeout: (连接超时, 读取超时)
            session: 可选的 Session（测试时注入）
        """
        self.raw_base_url = raw_base_url.rstrip('/')
        self.repo_base_url = repo_base_url.rstrip('/')
        self.timeout = timeout
        self._closed = False
        self.session = session if session is not None else self._create_session()
        logger.debug("ContentClient initialized: raw_base_url=%s", self.raw_base_url)

    def _create_session(self) -> requests.Session:
        """创建配置好的 Session

        只对连接错误和 502/503/504 状态码重试。
        """
        session = requests.Session()
        session.headers.update({'Accept': 'text/plain, text/markdown, */*'})

        retry_strategy = Retry(
            total=RetryConfig.TOTAL,
            backoff_factor=RetryConfig.BACKOFF_FACTOR,
            status_forcelist=list(RetryConfig.STATUS_FORCELIST),
            allowed_methods=["GET"],
            raise_on_status=False
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self):
        """显式关闭session，释放资源

        可以多次调用，只有第一次会实际关闭。
        """
        if self._closed:
            return

        self._closed = True
        try:
            self.session.close()
        except (OSError, RuntimeError, AttributeError) as e:
            logger.debug("关闭session时发生预期异常: %s", type(e).__name__)

    def raw_url(self, path: str) -> str:
        """文档原文地址"""
        return join_url(self.raw_base_url, path)

    def source_url(self, path: str) -> str:
        """源码浏览地址（"在源处打开"链接）"""
        return join_url(self.repo_base_url, path)

    def fetch_text(self, path: str, token: CancellationToken) -> str:
        """
        拉取文档原文

        正文以流式分块读取，每块之间检查取消令牌；取消后关闭连接并抛出
        FetchCancelledError。令牌已取消时发生的传输异常同样视为取消。

        Args:
            path: 相对仓库根目录的文档路径
            token: 取消令牌

        Returns:
            文档原文

        Raises:
            FetchCancelledError: 请求被取消
            APIError 及其子类: 非成功状态码或传输失败
        """
        if self._closed:
            raise APIError(message="ContentClient已关闭，请重新创建实例")

        url = self.raw_url(path)
        token.raise_if_cancelled(FetchCancelledError)
        logger.info("Content fetch start: %s", path)

        try:
            response = self.session.get(url, stream=True, timeout=self.timeout)
        except Exception as e:
            self._raise_transport_error(e, url, token)

        with closing(response):
            if not response.ok:
                logger.warning("Content fetch failed: %s -> status=%d", path, response.status_code)
                raise create_api_error(status_code=response.status_code)

            chunks = []
            try:
                for chunk in response.iter_content(chunk_size=STREAM_CHUNK_SIZE):
                    if token.is_cancelled():
                        logger.debug("Content fetch cancelled mid-body: %s", path)
                        raise FetchCancelledError()
                    if chunk:
                        chunks.append(chunk)
            except FetchCancelledError:
                raise
            except Exception as e:
                self._raise_transport_error(e, url, token)

            token.raise_if_cancelled(FetchCancelledError)
            body = b"".join(chunks)
            text = body.decode(self._detect_encoding(response), errors="replace")

        logger.info("Content fetch success: %s (%d bytes)", path, len(body))
        return text

    @staticmethod
    def _detect_encoding(response) -> str:
        # 未声明charset的 text/* 响应按UTF-8解码，而不是requests默认的ISO-8859-1
        content_type = response.headers.get('content-type', '') or ''
        if 'charset=' in content_type.lower() and response.encoding:
            return response.encoding
        return 'utf-8'

    def _raise_transport_error(self, exc: Exception, url: str, token: CancellationToken):
        """将传输异常转换为API异常并抛出

        此方法始终抛出异常，不会正常返回。
        """
        if token.is_cancelled():
            raise FetchCancelledError(original_error=exc)

        connect_timeout, read_timeout = self.timeout

        if isinstance(exc, requests.exceptions.ConnectTimeout):
            logger.warning("Content connect timeout: %s - %s", url, exc)
            raise APITimeoutError(
                message=f"Connection timed out after {connect_timeout}s",
                original_error=exc
            )
        elif isinstance(exc, requests.exceptions.ReadTimeout):
            logger.warning("Content read timeout: %s - %s", url, exc)
            raise APITimeoutError(
                message=f"Server did not respond within {read_timeout}s",
                original_error=exc
            )
        elif isinstance(exc, requests.exceptions.Timeout):
            logger.warning("Content request timeout: %s - %s", url, exc)
            raise APITimeoutError(original_error=exc)
        elif isinstance(exc, requests.exceptions.SSLError):
            logger.warning("Content SSL error: %s - %s", url, exc)
            raise APIConnectionError(message="SSL/TLS error", original_error=exc)
        elif isinstance(exc, requests.exceptions.ConnectionError):
            logger.warning("Content connection failed: %s - %s", url, exc)
            raise APIConnectionError(original_error=exc)
        elif isinstance(exc, requests.exceptions.ChunkedEncodingError):
            logger.warning("Content body interrupted: %s - %s", url, exc)
            raise APIError(message="Response body was interrupted", original_error=exc)
        elif isinstance(exc, requests.RequestException):
            logger.warning("Content request failed: %s - %s: %s", url, type(exc).__name__, exc)
            raise APIError(message=f"Request failed: {exc}", original_error=exc)
        else:
            logger.error("Content request unknown error: %s - %s: %s", url, type(exc).__name__, exc)
            raise APIError(message=f"Request failed: {type(exc).__name__}", original_error=exc)
