"""
全局快捷键分发

在工作区挂载时注册一次（应用级事件过滤器），销毁时注销。
- Ctrl/Cmd + K：切换命令面板的打开/关闭
- Escape：只关闭已打开的面板，面板关闭时不做任何事

识别出的按键会被消费，不再传给获得焦点的控件。
"""

import logging

from PyQt6.QtCore import QCoreApplication, QEvent, QObject, Qt

logger = logging.getLogger(__name__)

# macOS 上 Qt 把 Command 映射为 ControlModifier，Control 映射为 MetaModifier
_COMMAND_MODIFIERS = Qt.KeyboardModifier.ControlModifier | Qt.KeyboardModifier.MetaModifier


class KeyboardDispatcher(QObject):
    """全局快捷键分发器"""

    def __init__(self, palette, parent=None):
        """
        Args:
            palette: CommandPalette 实例
            parent: 父对象
        """
        super().__init__(parent)
        self._palette = palette
        self._target = None

    @property
    def is_installed(self) -> bool:
        return self._target is not None

    def install(self, target: QObject = None):
        """注册事件过滤器（默认安装到应用实例），重复调用无副作用"""
        if self._target is not None:
            return
        target = target or QCoreApplication.instance()
        if target is None:
            logger.warning("没有可用的应用实例，快捷键未注册")
            return
        target.installEventFilter(self)
        self._target = target
        logger.debug("全局快捷键已注册")

    def uninstall(self):
        """注销事件过滤器，可重复调用"""
        if self._target is None:
            return
        try:
            self._target.removeEventFilter(self)
        except RuntimeError:
            pass  # 目标对象可能已被删除
        self._target = None
        logger.debug("全局快捷键已注销")

    def handle_key(self, key, modifiers) -> bool:
        """
        处理一次按键

        Args:
            key: Qt.Key
            modifiers: Qt.KeyboardModifier 组合

        Returns:
            True 表示按键已被消费
        """
        if key == Qt.Key.Key_K and modifiers & _COMMAND_MODIFIERS:
            self._palette.toggle()
            return True

        if key == Qt.Key.Key_Escape and self._palette.is_open:
            self._palette.close()
            return True

        return False

    def eventFilter(self, obj, event):
        if event.type() == QEvent.Type.KeyPress and not event.isAutoRepeat():
            if self.handle_key(event.key(), event.modifiers()):
                event.accept()
                return True
        return False
