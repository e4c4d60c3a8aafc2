"""
配置管理工具

用于保存和加载应用配置（界面语言、主题模式、内容源地址）

持久化是尽力而为的：QSettings 读写失败时降级为仅内存模式，
本次会话内不再访问磁盘，也不会向调用方抛出异常。
"""

import logging
from typing import Any, Dict, Optional

from PyQt6.QtCore import QSettings

from .constants import ContentDefaults, StorageKeys
from .formatters import normalize_base_url

logger = logging.getLogger(__name__)


class PreferenceStorageError(Exception):
    """持久化存储读写失败（仅用于日志，不向外传播）"""
    pass


class ConfigManager:
    """应用配置管理器

    使用QSettings保存配置到本地INI文件
    """

    def __init__(self, organization="DocDesk", application="Workspace", settings=None):
        """初始化配置管理器

        Args:
            organization: 组织名称
            application: 应用名称
            settings: 可选的类QSettings对象（测试时注入）
        """
        self._memory: Dict[str, Any] = {}
        self._degraded = False
        try:
            self.settings = settings if settings is not None else QSettings(organization, application)
        except Exception as e:
            self.settings = None
            self._degrade(PreferenceStorageError(f"无法打开配置存储: {e}"))

    @property
    def is_degraded(self) -> bool:
        """是否已降级为仅内存模式"""
        return self._degraded

    def _degrade(self, error: Exception):
        if not self._degraded:
            logger.warning("[ConfigManager] 配置存储不可用，本次会话仅保存在内存中: %s", error)
        self._degraded = True

    def _read(self, key: str, default: Optional[str] = None) -> Optional[str]:
        if key in self._memory:
            return self._memory[key]
        if self._degraded or self.settings is None:
            return default
        try:
            value = self.settings.value(key, default)
        except Exception as e:
            self._degrade(PreferenceStorageError(f"读取 {key} 失败: {e}"))
            return default
        if value is None:
            return default
        return value if isinstance(value, str) else str(value)

    def _write(self, key: str, value: str):
        # 先写内存，保证即使磁盘失败本次会话仍然可用
        self._memory[key] = value
        if self._degraded or self.settings is None:
            return
        try:
            self.settings.setValue(key, value)
            self.settings.sync()
            status = self.settings.status()
        except Exception as e:
            self._degrade(PreferenceStorageError(f"写入 {key} 失败: {e}"))
            return
        if status != QSettings.Status.NoError:
            self._degrade(PreferenceStorageError(f"写入 {key} 失败: status={status}"))
            return
        logger.debug("[ConfigManager] 已保存 %s=%s", key, value)

    def get_language(self) -> Optional[str]:
        """获取界面语言代码

        Returns:
            str | None: 语言代码，未保存过返回None（由调用方校验）
        """
        return self._read(StorageKeys.LANGUAGE)

    def set_language(self, code: str):
        """保存界面语言代码"""
        self._write(StorageKeys.LANGUAGE, code)

    def get_theme_mode(self) -> Optional[str]:
        """获取主题模式

        Returns:
            str | None: 'system' / 'dark' / 'light'，未保存过返回None
        """
        return self._read(StorageKeys.THEME_MODE)

    def set_theme_mode(self, mode: str):
        """保存主题模式"""
        self._write(StorageKeys.THEME_MODE, mode)

    def get_raw_base_url(self) -> str:
        """获取原始内容基础地址，无效配置回退到默认值"""
        return self._get_base_url(StorageKeys.RAW_BASE_URL, ContentDefaults.RAW_BASE_URL)

    def set_raw_base_url(self, url: str):
        self._write(StorageKeys.RAW_BASE_URL, url)

    def get_repo_base_url(self) -> str:
        """获取源码浏览基础地址，无效配置回退到默认值"""
        return self._get_base_url(StorageKeys.REPO_BASE_URL, ContentDefaults.REPO_BASE_URL)

    def set_repo_base_url(self, url: str):
        self._write(StorageKeys.REPO_BASE_URL, url)

    def _get_base_url(self, key: str, default: str) -> str:
        raw = self._read(key)
        if raw is None:
            return default
        url = normalize_base_url(raw)
        if url is None:
            logger.warning("[ConfigManager] 忽略无效的内容源地址 %s=%r，使用默认值", key, raw)
            return default
        return url
