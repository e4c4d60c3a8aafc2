"""
API客户端常量定义

包含超时与重试配置等常量。
"""


class TimeoutConfig:
    """超时配置（秒）"""
    # 连接超时：建立TCP连接的超时时间
    CONNECT = 10
    # 读取超时：两次数据到达之间的最长等待
    READ_DEFAULT = 30


class RetryConfig:
    """重试配置"""
    TOTAL = 3
    BACKOFF_FACTOR = 0.5
    STATUS_FORCELIST = (502, 503, 504)


# 流式读取正文的分块大小（字节），每块之间检查一次取消令牌
STREAM_CHUNK_SIZE = 16 * 1024
