"""
偏好存储

持有两项持久化偏好（界面语言、主题模式），并把主题模式解析为实际主题。

解析规则：
- 主题模式为 dark/light 时，实际主题即该模式
- 主题模式为 system 时，实际主题跟随环境的配色信号实时变化

环境信号的订阅只在 system 模式下存在：离开 system 模式时释放，
回到 system 模式时重新获取并立即应用当前信号。
"""

import logging
from typing import Callable, Optional

from PyQt6.QtCore import QObject, Qt, pyqtSignal
from PyQt6.QtGui import QGuiApplication

from docdesk.models.catalog import Language
from docdesk.themes.themes import ResolvedTheme, ThemeMode

logger = logging.getLogger(__name__)


class Subscription:
    """环境信号订阅句柄，release() 可重复调用"""

    def __init__(self, release: Callable[[], None]):
        self._release = release
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def release(self):
        if not self._active:
            return
        self._active = False
        self._release()


class ColorSchemeSource:
    """环境配色信号的接口（"偏好深色"布尔值，可订阅）"""

    def prefers_dark(self) -> bool:
        raise NotImplementedError

    def subscribe(self, callback: Callable[[bool], None]) -> Subscription:
        raise NotImplementedError


class QtColorSchemeSource(ColorSchemeSource):
    """基于 QStyleHints 的环境配色信号（Qt 6.5+）

    平台未报告配色方案时视为不偏好深色。
    """

    def _style_hints(self):
        app = QGuiApplication.instance()
        return app.styleHints() if app is not None else None

    def prefers_dark(self) -> bool:
        hints = self._style_hints()
        if hints is None or not hasattr(hints, "colorScheme"):
            return False
        return hints.colorScheme() == Qt.ColorScheme.Dark

    def subscribe(self, callback: Callable[[bool], None]) -> Subscription:
        hints = self._style_hints()
        if hints is None or not hasattr(hints, "colorSchemeChanged"):
            logger.debug("当前平台不支持配色方案变化通知")
            return Subscription(lambda: None)

        def on_changed(scheme):
            callback(scheme == Qt.ColorScheme.Dark)

        hints.colorSchemeChanged.connect(on_changed)

        def release():
            try:
                hints.colorSchemeChanged.disconnect(on_changed)
            except (TypeError, RuntimeError):
                pass  # 对象可能已被删除

        return Subscription(release)


class PreferenceStore(QObject):
    """偏好存储

    用法:
        store = PreferenceStore(config_manager, QtColorSchemeSource())
        store.resolved_theme_changed.connect(theme_manager.apply)
        store.set_theme_mode(ThemeMode.DARK)
        ...
        store.close()  # 销毁时释放环境订阅
    """

    language_changed = pyqtSignal(object)        # Language
    theme_mode_changed = pyqtSignal(object)      # ThemeMode
    resolved_theme_changed = pyqtSignal(object)  # ResolvedTheme

    def __init__(self, config_manager, color_scheme: ColorSchemeSource, parent=None):
        """
        Args:
            config_manager: ConfigManager 实例（持久化存储）
            color_scheme: 环境配色信号
            parent: 父对象
        """
        super().__init__(parent)
        self._config = config_manager
        self._color_scheme = color_scheme
        self._subscription: Optional[Subscription] = None

        stored_language = self._config.get_language()
        self._language = Language.parse(stored_language) or Language.primary()
        if stored_language is not None and Language.parse(stored_language) is None:
            logger.info("忽略无法识别的语言配置 %r，使用默认值", stored_language)

        stored_mode = self._config.get_theme_mode()
        self._theme_mode = ThemeMode.parse(stored_mode) or ThemeMode.SYSTEM
        if stored_mode is not None and ThemeMode.parse(stored_mode) is None:
            logger.info("忽略无法识别的主题配置 %r，使用默认值", stored_mode)

        if self._theme_mode == ThemeMode.SYSTEM:
            self._acquire_subscription()
        self._resolved = self._compute_resolved()

        logger.info(
            "偏好已加载: language=%s, theme_mode=%s, resolved=%s",
            self._language.value, self._theme_mode.value, self._resolved.value
        )

    # ==================== 语言 ====================

    def get_language(self) -> Language:
        return self._language

    def set_language(self, language: Language):
        """设置界面语言并立即持久化"""
        if language == self._language:
            return
        self._language = language
        self._config.set_language(language.value)
        self.language_changed.emit(language)

    def toggle_language(self):
        """在中英文之间切换"""
        self.set_language(Language.ZH if self._language == Language.EN else Language.EN)

    # ==================== 主题 ====================

    def get_theme_mode(self) -> ThemeMode:
        return self._theme_mode

    def set_theme_mode(self, mode: ThemeMode):
        """设置主题模式并立即持久化

        进入 system 模式时获取环境订阅并立即应用当前信号，
        离开 system 模式时释放订阅。
        """
        if mode == self._theme_mode:
            return

        self._theme_mode = mode
        self._config.set_theme_mode(mode.value)

        if mode == ThemeMode.SYSTEM:
            self._acquire_subscription()
        else:
            self._release_subscription()

        self.theme_mode_changed.emit(mode)
        self._update_resolved()

    def cycle_theme_mode(self):
        """循环切换主题模式：system -> dark -> light -> system"""
        self.set_theme_mode(self._theme_mode.next())

    def get_resolved_theme(self) -> ResolvedTheme:
        return self._resolved

    @property
    def is_tracking_environment(self) -> bool:
        """当前是否持有环境信号订阅"""
        return self._subscription is not None and self._subscription.active

    def close(self):
        """释放环境订阅（销毁或进程退出时调用，可重复调用）"""
        self._release_subscription()

    # ==================== 内部方法 ====================

    def _compute_resolved(self, prefers_dark: Optional[bool] = None) -> ResolvedTheme:
        if self._theme_mode == ThemeMode.DARK:
            return ResolvedTheme.DARK
        if self._theme_mode == ThemeMode.LIGHT:
            return ResolvedTheme.LIGHT
        if prefers_dark is None:
            prefers_dark = self._color_scheme.prefers_dark()
        return ResolvedTheme.DARK if prefers_dark else ResolvedTheme.LIGHT

    def _update_resolved(self, prefers_dark: Optional[bool] = None):
        resolved = self._compute_resolved(prefers_dark)
        if resolved == self._resolved:
            return
        self._resolved = resolved
        self.resolved_theme_changed.emit(resolved)

    def _acquire_subscription(self):
        if self.is_tracking_environment:
            return
        self._subscription = self._color_scheme.subscribe(self._on_environment_changed)
        logger.debug("已订阅环境配色信号")

    def _release_subscription(self):
        if self._subscription is None:
            return
        self._subscription.release()
        self._subscription = None
        logger.debug("已释放环境配色信号订阅")

    def _on_environment_changed(self, prefers_dark: bool):
        # 已离开 system 模式的残留回调不得再驱动主题
        if self._theme_mode != ThemeMode.SYSTEM:
            return
        self._update_resolved(prefers_dark)
