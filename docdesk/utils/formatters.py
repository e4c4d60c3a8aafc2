"""
通用格式化工具模块

提供链接拼接、标题锚点生成、地址校验等方法，避免代码重复
"""

import re
from typing import Optional
from urllib.parse import urlsplit

# 保留ASCII单词字符、CJK统一汉字、空白与连字符
_SLUG_STRIP_RE = re.compile(r"[^A-Za-z0-9_\u4e00-\u9fa5\s-]")
_WHITESPACE_RE = re.compile(r"\s+")
_EXTERNAL_LINK_RE = re.compile(r"^https?://", re.IGNORECASE)


def slugify(text: str) -> str:
    """
    从标题文本生成稳定的锚点标识

    规则：转小写，去掉非单词/非汉字/非空白/非连字符的字符，
    首尾去空白后把连续空白折叠为单个连字符。

    Args:
        text: 标题文本

    Returns:
        锚点标识，例如 "Quick Start!" -> "quick-start"
    """
    lowered = (text or "").lower()
    stripped = _SLUG_STRIP_RE.sub("", lowered).strip()
    return _WHITESPACE_RE.sub("-", stripped)


def is_external_link(url: str) -> bool:
    """判断链接是否指向外部（http/https）"""
    return bool(_EXTERNAL_LINK_RE.match(url or ""))


def join_url(base_url: str, path: str) -> str:
    """拼接基础地址与相对路径"""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def normalize_base_url(raw: Optional[str]) -> Optional[str]:
    """
    校验并规范化内容源基础地址

    只接受 http/https 地址，拒绝带用户信息（user:pass@）的地址，
    必须包含主机名。

    Args:
        raw: 原始地址

    Returns:
        去掉末尾斜杠的地址；无效时返回None
    """
    if not isinstance(raw, str):
        return None
    candidate = raw.strip()
    if not candidate:
        return None

    try:
        parts = urlsplit(candidate)
    except ValueError:
        return None

    if parts.scheme.lower() not in ("http", "https"):
        return None
    if parts.username or parts.password or "@" in parts.netloc:
        return None
    if not parts.hostname:
        return None

    return candidate.rstrip('/')


__all__ = [
    'is_external_link',
    'join_url',
    'normalize_base_url',
    'slugify',
]
