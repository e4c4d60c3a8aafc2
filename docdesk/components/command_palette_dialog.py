"""
命令面板浮层

覆盖在主窗口之上的半透明背景 + 居中面板（输入框 + 结果列表）。
面板状态完全由 CommandPalette 持有，浮层只负责显示与转发输入：
- 输入框文本 -> set_query
- 回车 -> invoke_first
- 点击结果 -> invoke
- 点击背景 -> close
"""

import logging

from PyQt6.QtCore import QEvent, Qt, QTimer
from PyQt6.QtWidgets import (
    QFrame, QLabel, QLineEdit, QListWidget, QListWidgetItem, QVBoxLayout
)

from docdesk.models.catalog import Language
from docdesk.models.copy_text import text_for
from docdesk.utils.constants import WorkspaceConstants
from docdesk.utils.error_handler import handle_errors

logger = logging.getLogger(__name__)

_ENTRY_ROLE = Qt.ItemDataRole.UserRole


class CommandPaletteOverlay(QFrame):
    """命令面板浮层"""

    PANEL_WIDTH = 560

    def __init__(self, palette, parent):
        """
        Args:
            palette: CommandPalette 实例
            parent: 被覆盖的窗口（浮层跟随其尺寸）
        """
        super().__init__(parent)
        self._palette = palette
        self._language = Language.primary()
        self.setObjectName("paletteBackdrop")

        self._create_ui_structure()

        self._palette.opened.connect(self._on_opened)
        self._palette.closed.connect(self._on_closed)
        self._palette.query_changed.connect(self._on_query_changed)

        parent.installEventFilter(self)
        self.hide()

    def _create_ui_structure(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 96, 24, 24)
        layout.setAlignment(Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop)

        self.panel = QFrame(self)
        self.panel.setObjectName("palettePanel")
        self.panel.setFixedWidth(self.PANEL_WIDTH)
        panel_layout = QVBoxLayout(self.panel)
        panel_layout.setContentsMargins(12, 12, 12, 12)
        panel_layout.setSpacing(8)

        self.title_label = QLabel(self.panel)
        self.title_label.setObjectName("metaLabel")
        panel_layout.addWidget(self.title_label)

        self.input = QLineEdit(self.panel)
        self.input.textEdited.connect(self._palette.set_query)
        self.input.returnPressed.connect(self._on_return_pressed)
        panel_layout.addWidget(self.input)

        self.result_list = QListWidget(self.panel)
        self.result_list.itemClicked.connect(self._on_item_clicked)
        panel_layout.addWidget(self.result_list)

        layout.addWidget(self.panel)
        self.retranslate(self._language)

    def retranslate(self, language: Language):
        self._language = language
        self.title_label.setText(text_for(language, "command_palette"))
        self.input.setPlaceholderText(text_for(language, "palette_hint"))
        if self.isVisible():
            self.refresh_results()

    def refresh_results(self):
        """按当前查询重建结果列表"""
        self.result_list.clear()
        results = self._palette.results()[:WorkspaceConstants.PALETTE_MAX_VISIBLE_RESULTS]
        for entry in results:
            item = QListWidgetItem(f"{entry.label}\n{entry.hint}")
            item.setData(_ENTRY_ROLE, entry)
            self.result_list.addItem(item)
        if results:
            self.result_list.setCurrentRow(0)

    def visible_entry_ids(self):
        return [
            self.result_list.item(row).data(_ENTRY_ROLE).id
            for row in range(self.result_list.count())
        ]

    # ==================== 面板状态 ====================

    def _on_opened(self):
        self.setGeometry(self.parentWidget().rect())
        self.input.clear()
        self.refresh_results()
        self.show()
        self.raise_()
        # 先显示再聚焦，否则输入框拿不到焦点
        QTimer.singleShot(WorkspaceConstants.PALETTE_FOCUS_DELAY_MS, self.input.setFocus)

    def _on_closed(self):
        self.hide()
        self.input.clear()
        self.result_list.clear()

    def _on_query_changed(self, text: str):
        if self.input.text() != text:
            self.input.setText(text)
        if self._palette.is_open:
            self.refresh_results()

    # ==================== 用户输入 ====================

    @handle_errors("执行命令")
    def _on_return_pressed(self):
        self._palette.invoke_first()

    @handle_errors("执行命令")
    def _on_item_clicked(self, item: QListWidgetItem):
        entry = item.data(_ENTRY_ROLE)
        if entry is not None:
            self._palette.invoke(entry)

    def mousePressEvent(self, event):
        if not self.panel.geometry().contains(event.position().toPoint()):
            self._palette.close()
            event.accept()
            return
        super().mousePressEvent(event)

    def eventFilter(self, obj, event):
        if obj is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self.setGeometry(obj.rect())
        return super().eventFilter(obj, event)
