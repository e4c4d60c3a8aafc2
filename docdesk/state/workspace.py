"""
工作区状态引擎

组合各组件并维护数据流：
    偏好存储 -> 目录筛选 -> 选择控制器 -> 内容加载器
                         -> 命令面板（动态文档条目）

筛选状态（分类、关键字）由这里持有；分类、关键字或语言变化时同步重算可见集合，
随后保持选择有效，并让内容加载器跟随当前文档的解析路径。
"""

import logging
from typing import List, Optional, Sequence, Union

from PyQt6.QtCore import QObject, pyqtSignal

from docdesk.models.catalog import CATEGORY_ALL, Category, DocEntry, Language, coerce_category
from docdesk.models.copy_text import text_for
from docdesk.state.catalog_filter import filter_documents
from docdesk.state.palette import CommandPalette, PaletteEntry, build_document_entries
from docdesk.state.selection import SelectionController

logger = logging.getLogger(__name__)


class Workspace(QObject):
    """工作区状态引擎

    界面相关的动作（聚焦搜索框、滚动）通过信号交给界面层执行。
    """

    visible_changed = pyqtSignal(object)   # List[DocEntry]
    focus_search_requested = pyqtSignal()
    scroll_to_top_requested = pyqtSignal()
    scroll_to_workspace_requested = pyqtSignal()

    def __init__(
        self,
        catalog: Sequence[DocEntry],
        preferences,
        loader,
        selection: Optional[SelectionController] = None,
        parent=None,
    ):
        """
        Args:
            catalog: 文档目录
            preferences: PreferenceStore 实例
            loader: ContentLoader 实例
            selection: 选择控制器，默认按目录新建
            parent: 父对象
        """
        super().__init__(parent)
        self._catalog = list(catalog)
        self._preferences = preferences
        self._loader = loader
        self.selection = selection or SelectionController(self._catalog, parent=self)
        self.palette = CommandPalette(self.palette_entries, parent=self)

        self._category: Union[Category, str] = CATEGORY_ALL
        self._query = ""
        self._visible: List[DocEntry] = self._compute_visible()

        self._preferences.language_changed.connect(self._on_language_changed)
        self.selection.active_changed.connect(self._on_active_changed)

        self.selection.reconcile(self._visible)
        self.sync_content()

    # ==================== 只读属性 ====================

    @property
    def catalog(self) -> List[DocEntry]:
        return list(self._catalog)

    @property
    def category(self) -> Union[Category, str]:
        return self._category

    @property
    def query(self) -> str:
        return self._query

    @property
    def visible(self) -> List[DocEntry]:
        return list(self._visible)

    @property
    def language(self) -> Language:
        return self._preferences.get_language()

    @property
    def loader(self):
        return self._loader

    def active_document(self) -> Optional[DocEntry]:
        return self.selection.get_active()

    def active_path(self) -> Optional[str]:
        return self.selection.resolve_content_path(self.language)

    # ==================== 筛选 ====================

    def set_category(self, category: Union[Category, str]):
        """切换分类，接受 Category 或其字符串值

        Raises:
            ValueError: 未知分类
        """
        category = coerce_category(category)
        if category == self._category:
            return
        self._category = category
        self._refresh_visible()

    def set_query(self, query: str):
        query = query or ""
        if query == self._query:
            return
        self._query = query
        self._refresh_visible()

    # ==================== 选择与内容 ====================

    def select(self, doc_id: str):
        """切换当前文档（来自列表点击或命令面板）"""
        self.selection.set_active(doc_id)

    def sync_content(self):
        """让内容加载器跟随当前文档的解析路径"""
        path = self.active_path()
        if path is None:
            logger.error("目录为空，无法选择文档")
            return
        self._loader.load(path)

    def shutdown(self):
        """销毁时调用：关闭面板并取消进行中的请求"""
        self.palette.close()
        self._loader.shutdown()

    # ==================== 命令面板 ====================

    def palette_entries(self) -> List[PaletteEntry]:
        """静态动作 + 可见集合前10个文档，每次调用重建"""
        language = self.language
        resolved = self._preferences.get_resolved_theme()
        static_entries = [
            PaletteEntry(
                id="focus-search",
                label=text_for(language, "action_focus"),
                hint=text_for(language, "docs_workspace"),
                action=self._focus_search,
            ),
            PaletteEntry(
                id="top",
                label=text_for(language, "action_top"),
                hint="Home",
                action=self.scroll_to_top_requested.emit,
            ),
            PaletteEntry(
                id="theme",
                label=text_for(language, "action_theme"),
                hint=f"{text_for(language, 'status')}: {resolved.value}",
                action=self._preferences.cycle_theme_mode,
            ),
            PaletteEntry(
                id="locale",
                label=text_for(language, "action_locale"),
                hint=text_for(language, "language_switch"),
                action=self._preferences.toggle_language,
            ),
        ]
        return static_entries + build_document_entries(self._visible, language, self._open_document)

    def _focus_search(self):
        self.scroll_to_workspace_requested.emit()
        self.focus_search_requested.emit()

    def _open_document(self, doc_id: str):
        self.select(doc_id)
        self.scroll_to_workspace_requested.emit()

    # ==================== 内部方法 ====================

    def _compute_visible(self) -> List[DocEntry]:
        return filter_documents(self._catalog, self._category, self._query, self.language)

    def _refresh_visible(self):
        self._visible = self._compute_visible()
        logger.debug(
            "可见集合已更新: category=%s, query=%r, count=%d",
            getattr(self._category, "value", self._category), self._query, len(self._visible)
        )
        self.visible_changed.emit(self.visible)
        self.selection.reconcile(self._visible)

    def _on_language_changed(self, language):
        self._refresh_visible()
        # 选择未变时路径仍可能因语言覆盖而变化
        if self._loader.state.path == self.active_path():
            return
        self.sync_content()

    def _on_active_changed(self, doc):
        self.sync_content()
