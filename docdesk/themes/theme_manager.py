"""
ThemeManager 核心类

根据偏好存储解析出的实际主题（dark/light）选择调色板，
并生成应用级样式表。

性能优化：
- 信号防抖：短时间内多次切换只发射一次 theme_changed
"""

import logging

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .themes import DarkTheme, LightTheme, ResolvedTheme

logger = logging.getLogger(__name__)


class ThemeManager(QObject):
    """主题管理器

    由应用入口创建并注入各组件，不使用模块级单例。
    """

    theme_changed = pyqtSignal(str)  # 主题切换信号（防抖后发射）

    def __init__(self, resolved: ResolvedTheme = ResolvedTheme.DARK, parent=None):
        super().__init__(parent)
        self._resolved = resolved
        self._current_theme = DarkTheme if resolved == ResolvedTheme.DARK else LightTheme

        # 信号防抖机制：避免短时间内多次发射信号导致UI重复刷新
        self._debounce_timer = QTimer(self)
        self._debounce_timer.setSingleShot(True)
        self._debounce_timer.setInterval(50)
        self._debounce_timer.timeout.connect(self._do_emit_theme_changed)

    @property
    def resolved(self) -> ResolvedTheme:
        """当前实际主题"""
        return self._resolved

    @property
    def current_theme(self):
        """当前主题类"""
        return self._current_theme

    def is_dark_mode(self) -> bool:
        return self._resolved == ResolvedTheme.DARK

    def apply(self, resolved: ResolvedTheme):
        """应用实际主题

        Args:
            resolved: 偏好存储解析出的实际主题
        """
        if resolved == self._resolved:
            return
        self._resolved = resolved
        self._current_theme = DarkTheme if resolved == ResolvedTheme.DARK else LightTheme
        logger.info("主题已切换为 %s", resolved.value)
        self._debounce_timer.start()

    def _do_emit_theme_changed(self):
        """实际发射主题切换信号（由防抖计时器调用）"""
        self.theme_changed.emit(self._resolved.value)

    def build_stylesheet(self) -> str:
        """生成应用级样式表"""
        t = self._current_theme
        return f"""
            QWidget {{
                background-color: {t.BG_PRIMARY};
                color: {t.TEXT_PRIMARY};
                font-size: {t.FONT_SIZE_BASE};
            }}
            QLineEdit {{
                background-color: {t.BG_SECONDARY};
                border: 1px solid {t.BORDER_DEFAULT};
                border-radius: {t.RADIUS_MD};
                padding: 8px;
            }}
            QLineEdit:focus {{
                border-color: {t.PRIMARY};
            }}
            QPushButton {{
                background-color: {t.BG_TERTIARY};
                border: 1px solid {t.BORDER_DEFAULT};
                border-radius: {t.RADIUS_SM};
                padding: 6px 12px;
            }}
            QPushButton:checked {{
                background-color: {t.PRIMARY};
                color: {t.BUTTON_TEXT};
                border-color: {t.PRIMARY};
            }}
            QListWidget {{
                background-color: {t.BG_SECONDARY};
                border: 1px solid {t.BORDER_DEFAULT};
                border-radius: {t.RADIUS_LG};
            }}
            QListWidget::item:selected {{
                background-color: {t.PRIMARY_PALE};
                color: {t.TEXT_PRIMARY};
            }}
            QTextBrowser {{
                background-color: {t.BG_SECONDARY};
                border: 1px solid {t.BORDER_DEFAULT};
                border-radius: {t.RADIUS_LG};
                padding: 12px;
            }}
            QLabel#metaLabel, QLabel#pathLabel {{
                color: {t.TEXT_SECONDARY};
                font-size: {t.FONT_SIZE_SM};
            }}
            QLabel#readerStatus[state="error"] {{
                color: {t.ERROR};
            }}
            QFrame#paletteBackdrop {{
                background-color: {t.BG_OVERLAY};
            }}
            QFrame#palettePanel {{
                background-color: {t.BG_SECONDARY};
                border: 1px solid {t.BORDER_DEFAULT};
                border-radius: {t.RADIUS_LG};
            }}
        """
