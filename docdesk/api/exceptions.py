"""
API 异常定义

提供分层的异常体系，让内容加载器能够区分不同类型的拉取错误。

异常层次：
- APIError (基类)
  - ClientError (4xx 客户端错误)
    - NotFoundError (404)
    - ForbiddenError (403)
    - RateLimitedError (429)
  - ServerError (5xx 服务端错误)
  - NetworkError (网络/连接错误)
    - ConnectionError (连接失败)
    - TimeoutError (请求超时)
  - FetchCancelledError (请求被取代或组件销毁，不属于用户可见错误)

用法示例：
    from docdesk.api.exceptions import NotFoundError, APIError

    try:
        text = client.fetch_text(path, token)
    except FetchCancelledError:
        return  # 静默
    except APIError as e:
        show_fallback(e.message)
"""

from docdesk.utils.async_worker import OperationCancelled


class APIError(Exception):
    """API 错误基类

    所有内容拉取相关的异常都继承自此类。

    Attributes:
        message: 错误消息（用户友好）
        status_code: HTTP 状态码（如果有）
        original_error: 原始异常（如果有）
    """

    def __init__(
        self,
        message: str,
        status_code: int = None,
        original_error: Exception = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.original_error = original_error

    def __str__(self):
        return self.message


# ==================== 客户端错误 (4xx) ====================

class ClientError(APIError):
    """客户端错误基类 (4xx)"""
    pass


class ForbiddenError(ClientError):
    """无权访问 (403)"""

    def __init__(self, message: str = "HTTP 403", **kwargs):
        super().__init__(message, status_code=403, **kwargs)


class NotFoundError(ClientError):
    """资源不存在 (404)

    请求的文档路径在内容源上不存在。
    """

    def __init__(self, message: str = "HTTP 404", **kwargs):
        super().__init__(message, status_code=404, **kwargs)


class RateLimitedError(ClientError):
    """请求过于频繁 (429)"""

    def __init__(self, message: str = "HTTP 429", **kwargs):
        super().__init__(message, status_code=429, **kwargs)


# ==================== 服务端错误 (5xx) ====================

class ServerError(APIError):
    """服务端错误基类 (5xx)"""
    pass


# ==================== 网络错误 ====================

class NetworkError(APIError):
    """网络错误基类

    表示网络层面的错误，如连接失败、超时等。
    """
    pass


class ConnectionError(NetworkError):
    """连接错误"""

    def __init__(self, message: str = "Failed to fetch", **kwargs):
        super().__init__(message, **kwargs)


class TimeoutError(NetworkError):
    """超时错误"""

    def __init__(self, message: str = "Request timed out", **kwargs):
        super().__init__(message, **kwargs)


# ==================== 取消 ====================

class FetchCancelledError(APIError, OperationCancelled):
    """请求已取消

    不是错误：被取代的请求或组件销毁时抛出，调用方必须静默处理。
    """

    def __init__(self, message: str = "Fetch cancelled", **kwargs):
        super().__init__(message, **kwargs)


# ==================== 工具函数 ====================

def create_api_error(status_code: int, message: str = None, **kwargs) -> APIError:
    """根据状态码创建对应的异常

    Args:
        status_code: HTTP 状态码
        message: 错误消息，默认 "HTTP <status_code>"
        **kwargs: 其他参数（original_error等）

    Returns:
        对应类型的 APIError 子类实例
    """
    message = message or f"HTTP {status_code}"

    error_map = {
        403: ForbiddenError,
        404: NotFoundError,
        429: RateLimitedError,
    }

    error_class = error_map.get(status_code)
    if error_class:
        return error_class(message, **kwargs)

    if 400 <= status_code < 500:
        return ClientError(message, status_code=status_code, **kwargs)
    elif 500 <= status_code < 600:
        return ServerError(message, status_code=status_code, **kwargs)

    return APIError(message, status_code=status_code, **kwargs)
