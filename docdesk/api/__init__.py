"""
内容源访问模块

主要导出:
    - ContentClient: 内容源客户端
    - 异常类: APIError 及其子类
"""

from .client import ContentClient
from .exceptions import (
    APIError,
    ClientError,
    ConnectionError,
    FetchCancelledError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    TimeoutError,
    create_api_error,
)

__all__ = [
    'APIError',
    'ClientError',
    'ConnectionError',
    'ContentClient',
    'create_api_error',
    'FetchCancelledError',
    'ForbiddenError',
    'NetworkError',
    'NotFoundError',
    'RateLimitedError',
    'ServerError',
    'TimeoutError',
]
