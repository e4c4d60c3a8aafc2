"""
主窗口 - 文档工作区

布局：
- 顶栏：标题、语言切换、主题模式（system/dark/light）、命令面板按钮
- 工作区：标题与说明、统计（总数/筛选后/当前文档）、搜索框、分类按钮
- 左侧文档列表，右侧阅读区（标题、路径、源链接、状态提示、Markdown 正文）

窗口只负责显示与转发用户输入，所有状态由 Workspace / PreferenceStore 持有。
"""

import html
import logging
from typing import Dict, List

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import (
    QButtonGroup, QFrame, QHBoxLayout, QLabel, QLineEdit, QListWidget,
    QListWidgetItem, QMainWindow, QPushButton, QScrollArea, QSplitter,
    QVBoxLayout, QWidget
)

from docdesk.components.command_palette_dialog import CommandPaletteOverlay
from docdesk.components.markdown_view import MarkdownView
from docdesk.models.catalog import CATEGORY_CHOICES, DocEntry, Language
from docdesk.models.copy_text import category_label, text_for
from docdesk.state.content_loader import LoadState, LoadStatus
from docdesk.state.keyboard import KeyboardDispatcher
from docdesk.themes.themes import ThemeMode
from docdesk.utils.constants import WorkspaceConstants
from docdesk.utils.error_handler import handle_errors

logger = logging.getLogger(__name__)

_DOC_ID_ROLE = Qt.ItemDataRole.UserRole


class MainWindow(QMainWindow):
    """主窗口 - 文档工作区"""

    def __init__(self, workspace, preferences, parent=None):
        """
        Args:
            workspace: Workspace 实例
            preferences: PreferenceStore 实例
            parent: 父组件
        """
        super().__init__(parent)
        self.workspace = workspace
        self.preferences = preferences
        self._category_buttons: Dict[object, QPushButton] = {}
        self._theme_buttons: Dict[ThemeMode, QPushButton] = {}
        self._language_buttons: Dict[Language, QPushButton] = {}
        self._is_closed = False

        self.setMinimumSize(960, 640)
        self.resize(1280, 820)

        self._create_ui_structure()
        self.palette_overlay = CommandPaletteOverlay(workspace.palette, self)

        self.keyboard = KeyboardDispatcher(workspace.palette, self)
        self.keyboard.install()

        self._connect_signals()
        self._retranslate()
        self._sync_theme_buttons(preferences.get_theme_mode())
        self._rebuild_doc_list(workspace.visible)
        self._render_load_state(workspace.loader.state)

    # ==================== 界面构建 ====================

    def _create_ui_structure(self):
        self.scroll_area = QScrollArea(self)
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setFrameShape(QFrame.Shape.NoFrame)
        self.setCentralWidget(self.scroll_area)

        content = QWidget()
        content.setObjectName("centralWidget")
        layout = QVBoxLayout(content)
        layout.setContentsMargins(24, 16, 24, 24)
        layout.setSpacing(16)
        self.scroll_area.setWidget(content)

        layout.addLayout(self._create_header())
        self.workspace_section = self._create_workspace_section()
        layout.addWidget(self.workspace_section, stretch=1)

    def _create_header(self) -> QHBoxLayout:
        header = QHBoxLayout()
        header.setSpacing(8)

        self.title_label = QLabel()
        self.title_label.setStyleSheet("font-size: 20px; font-weight: 600;")
        header.addWidget(self.title_label)
        header.addStretch()

        language_group = QButtonGroup(self)
        language_group.setExclusive(True)
        for language, caption in ((Language.EN, "EN"), (Language.ZH, "中文")):
            button = QPushButton(caption)
            button.setCheckable(True)
            button.setCursor(Qt.CursorShape.PointingHandCursor)
            button.clicked.connect(lambda _checked, lang=language: self._on_language_clicked(lang))
            language_group.addButton(button)
            self._language_buttons[language] = button
            header.addWidget(button)

        header.addSpacing(12)

        theme_group = QButtonGroup(self)
        theme_group.setExclusive(True)
        for mode in (ThemeMode.SYSTEM, ThemeMode.DARK, ThemeMode.LIGHT):
            button = QPushButton(mode.value)
            button.setCheckable(True)
            button.setCursor(Qt.CursorShape.PointingHandCursor)
            button.clicked.connect(lambda _checked, m=mode: self._on_theme_clicked(m))
            theme_group.addButton(button)
            self._theme_buttons[mode] = button
            header.addWidget(button)

        header.addSpacing(12)

        self.palette_button = QPushButton("⌘K")
        self.palette_button.setCursor(Qt.CursorShape.PointingHandCursor)
        self.palette_button.clicked.connect(self.workspace.palette.toggle)
        header.addWidget(self.palette_button)
        return header

    def _create_workspace_section(self) -> QWidget:
        section = QWidget()
        layout = QVBoxLayout(section)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(12)

        self.section_title = QLabel()
        self.section_title.setStyleSheet("font-size: 18px; font-weight: 600;")
        layout.addWidget(self.section_title)

        self.lead_label = QLabel()
        self.lead_label.setWordWrap(True)
        layout.addWidget(self.lead_label)

        meta_row = QHBoxLayout()
        self.indexed_label = QLabel()
        self.filtered_label = QLabel()
        self.active_label = QLabel()
        for label in (self.indexed_label, self.filtered_label, self.active_label):
            label.setObjectName("metaLabel")
            meta_row.addWidget(label)
        meta_row.addStretch()
        layout.addLayout(meta_row)

        self.search_input = QLineEdit()
        self.search_input.setClearButtonEnabled(True)
        self.search_input.textChanged.connect(self._on_search_changed)
        layout.addWidget(self.search_input)

        category_row = QHBoxLayout()
        category_group = QButtonGroup(self)
        category_group.setExclusive(True)
        for category in CATEGORY_CHOICES:
            button = QPushButton()
            button.setCheckable(True)
            button.setCursor(Qt.CursorShape.PointingHandCursor)
            button.clicked.connect(lambda _checked, c=category: self._on_category_clicked(c))
            category_group.addButton(button)
            self._category_buttons[category] = button
            category_row.addWidget(button)
        category_row.addStretch()
        layout.addLayout(category_row)
        self._category_buttons[self.workspace.category].setChecked(True)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.setMinimumHeight(520)

        list_container = QWidget()
        list_layout = QVBoxLayout(list_container)
        list_layout.setContentsMargins(0, 0, 0, 0)
        self.doc_list = QListWidget()
        self.doc_list.itemClicked.connect(self._on_doc_clicked)
        list_layout.addWidget(self.doc_list)
        self.empty_label = QLabel()
        self.empty_label.setObjectName("metaLabel")
        self.empty_label.setWordWrap(True)
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label.hide()
        list_layout.addWidget(self.empty_label)
        splitter.addWidget(list_container)

        splitter.addWidget(self._create_reader())
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 3)
        layout.addWidget(splitter, stretch=1)
        return section

    def _create_reader(self) -> QWidget:
        reader = QWidget()
        layout = QVBoxLayout(reader)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.reader_title = QLabel()
        self.reader_title.setStyleSheet("font-size: 18px; font-weight: 600;")
        self.reader_title.setWordWrap(True)
        layout.addWidget(self.reader_title)

        self.path_label = QLabel()
        self.path_label.setObjectName("pathLabel")
        self.path_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        layout.addWidget(self.path_label)

        self.source_links = QLabel()
        self.source_links.setTextFormat(Qt.TextFormat.RichText)
        self.source_links.setOpenExternalLinks(True)
        layout.addWidget(self.source_links)

        self.reader_status = QLabel()
        self.reader_status.setObjectName("readerStatus")
        self.reader_status.setWordWrap(True)
        self.reader_status.setTextFormat(Qt.TextFormat.RichText)
        self.reader_status.setOpenExternalLinks(True)
        self.reader_status.hide()
        layout.addWidget(self.reader_status)

        self.markdown_view = MarkdownView()
        layout.addWidget(self.markdown_view, stretch=1)
        return reader

    def _connect_signals(self):
        self.workspace.visible_changed.connect(self._rebuild_doc_list)
        self.workspace.selection.active_changed.connect(self._on_active_changed)
        self.workspace.loader.state_changed.connect(self._render_load_state)
        self.workspace.focus_search_requested.connect(self._focus_search)
        self.workspace.scroll_to_top_requested.connect(self._scroll_to_top)
        self.workspace.scroll_to_workspace_requested.connect(self._scroll_to_workspace)

        self.preferences.language_changed.connect(self._on_language_changed)
        self.preferences.theme_mode_changed.connect(self._sync_theme_buttons)

    # ==================== 文案与状态同步 ====================

    def _retranslate(self):
        language = self.workspace.language
        self.setWindowTitle(text_for(language, "window_title"))
        self.title_label.setText(text_for(language, "window_title"))
        self.section_title.setText(text_for(language, "docs_workspace"))
        self.lead_label.setText(text_for(language, "docs_lead"))
        self.search_input.setPlaceholderText(text_for(language, "search"))
        self.empty_label.setText(text_for(language, "empty"))
        self.palette_button.setToolTip(text_for(language, "command_palette"))
        for category, button in self._category_buttons.items():
            button.setText(category_label(language, category))
        for lang, button in self._language_buttons.items():
            button.setChecked(lang == language)
        self.palette_overlay.retranslate(language)
        self._update_meta()
        self._update_reader_header()
        state = self.workspace.loader.state
        # 正文与界面语言无关，只刷新状态文案
        if state.status != LoadStatus.READY:
            self._render_load_state(state)

    def _sync_theme_buttons(self, mode):
        button = self._theme_buttons.get(mode)
        if button is not None:
            button.setChecked(True)

    def _update_meta(self):
        language = self.workspace.language
        active = self.workspace.active_document()
        active_title = active.title.get(language) if active else "-"
        self.indexed_label.setText(
            f"{text_for(language, 'docs_indexed')}: {len(self.workspace.catalog)}"
        )
        self.filtered_label.setText(
            f"{text_for(language, 'docs_filtered')}: {len(self.workspace.visible)}"
        )
        self.active_label.setText(f"{text_for(language, 'docs_active')}: {active_title}")

    def _update_reader_header(self):
        language = self.workspace.language
        active = self.workspace.active_document()
        path = self.workspace.active_path()
        if active is None or path is None:
            self.reader_title.clear()
            self.path_label.clear()
            self.source_links.clear()
            return

        loader = self.workspace.loader
        self.reader_title.setText(active.title.get(language))
        self.path_label.setText(f"{text_for(language, 'source_label')}: {path}")
        self.source_links.setText(
            f'<a href="{html.escape(loader.source_url(path))}">'
            f'{html.escape(text_for(language, "open_on_github"))}</a>'
            f'&nbsp;&nbsp;·&nbsp;&nbsp;'
            f'<a href="{html.escape(loader.raw_url(path))}">'
            f'{html.escape(text_for(language, "open_raw"))}</a>'
        )

    def _rebuild_doc_list(self, visible: List[DocEntry]):
        language = self.workspace.language
        active = self.workspace.active_document()
        self.doc_list.blockSignals(True)
        self.doc_list.clear()
        for doc in visible:
            item = QListWidgetItem(f"{doc.title.get(language)}\n{doc.path}")
            item.setData(_DOC_ID_ROLE, doc.id)
            item.setToolTip(doc.summary.get(language))
            self.doc_list.addItem(item)
            if active is not None and doc.id == active.id:
                self.doc_list.setCurrentItem(item)
        self.doc_list.blockSignals(False)

        is_empty = not visible
        self.doc_list.setVisible(not is_empty)
        self.empty_label.setVisible(is_empty)
        self._update_meta()

    def _highlight_active(self):
        active = self.workspace.active_document()
        for row in range(self.doc_list.count()):
            item = self.doc_list.item(row)
            if active is not None and item.data(_DOC_ID_ROLE) == active.id:
                self.doc_list.setCurrentItem(item)
                return
        self.doc_list.clearSelection()

    def _render_load_state(self, state: LoadState):
        language = self.workspace.language
        status = state.status

        if status == LoadStatus.READY:
            self._set_reader_status(None)
            self.markdown_view.set_markdown_text(state.content)
            self.markdown_view.show()
        elif status == LoadStatus.LOADING:
            self._set_reader_status(html.escape(text_for(language, "loading")))
            self.markdown_view.hide()
        elif status == LoadStatus.ERROR:
            source_url = self.workspace.loader.source_url(state.path)
            self._set_reader_status(
                f'{html.escape(text_for(language, "fallback"))} '
                f'<a href="{html.escape(source_url)}">{html.escape(source_url)}</a>',
                error=True,
            )
            self.markdown_view.clear()
            self.markdown_view.hide()
        else:
            self._set_reader_status(None)
            self.markdown_view.clear()

    def _set_reader_status(self, rich_text, error: bool = False):
        self.reader_status.setProperty("state", "error" if error else "info")
        # 动态属性变化后需要重新应用样式表
        self.reader_status.style().unpolish(self.reader_status)
        self.reader_status.style().polish(self.reader_status)
        if rich_text is None:
            self.reader_status.clear()
            self.reader_status.hide()
        else:
            self.reader_status.setText(rich_text)
            self.reader_status.show()

    # ==================== 槽函数 ====================

    @handle_errors("切换语言")
    def _on_language_clicked(self, language: Language):
        self.preferences.set_language(language)

    @handle_errors("切换主题模式")
    def _on_theme_clicked(self, mode: ThemeMode):
        self.preferences.set_theme_mode(mode)

    @handle_errors("切换分类")
    def _on_category_clicked(self, category):
        self.workspace.set_category(category)

    @handle_errors("搜索文档")
    def _on_search_changed(self, text: str):
        self.workspace.set_query(text)

    @handle_errors("切换文档")
    def _on_doc_clicked(self, item: QListWidgetItem):
        doc_id = item.data(_DOC_ID_ROLE)
        if doc_id:
            self.workspace.select(doc_id)

    def _on_language_changed(self, language):
        self._retranslate()
        self._rebuild_doc_list(self.workspace.visible)

    def _on_active_changed(self, doc):
        self._highlight_active()
        self._update_meta()
        self._update_reader_header()

    def _focus_search(self):
        QTimer.singleShot(WorkspaceConstants.SEARCH_FOCUS_DELAY_MS, self._do_focus_search)

    def _do_focus_search(self):
        if self._is_closed:
            return
        self.search_input.setFocus(Qt.FocusReason.ShortcutFocusReason)
        self.search_input.selectAll()

    def _scroll_to_top(self):
        self.scroll_area.verticalScrollBar().setValue(0)
        self.markdown_view.verticalScrollBar().setValue(0)

    def _scroll_to_workspace(self):
        self.scroll_area.ensureWidgetVisible(self.workspace_section, 0, 0)

    # ==================== 生命周期 ====================

    def closeEvent(self, event):
        """窗口关闭时注销快捷键并取消进行中的请求"""
        if not self._is_closed:
            self._is_closed = True
            logger.info("主窗口关闭，清理工作区")
            self.keyboard.uninstall()
            self.workspace.shutdown()
        super().closeEvent(event)
