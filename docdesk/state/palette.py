"""
命令面板

条目集合 = 静态工作区动作 + 当前可见集合中的文档条目（最多10个）。
匹配规则：对 "label hint" 做不区分大小写的子串包含；查询为空时按注册顺序返回全部条目。

条目集合每次按需重建，不维护可变的全局列表。
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from PyQt6.QtCore import QObject, pyqtSignal

from docdesk.models.catalog import DocEntry, Language
from docdesk.utils.constants import WorkspaceConstants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaletteEntry:
    """命令面板条目

    Attributes:
        id: 条目标识
        label: 显示名称
        hint: 提示文本（参与匹配）
        action: 无参数的可调用对象
    """
    id: str
    label: str
    hint: str
    action: Callable[[], None]


def build_document_entries(
    visible: Sequence[DocEntry],
    language: Language,
    on_select: Callable[[str], None],
    limit: int = WorkspaceConstants.PALETTE_MAX_DOC_ENTRIES,
) -> List[PaletteEntry]:
    """为可见集合的前 limit 个文档生成条目"""
    entries = []
    for doc in list(visible)[:limit]:
        entries.append(PaletteEntry(
            id=f"doc-{doc.id}",
            label=doc.title.get(language),
            hint=doc.path,
            action=lambda doc_id=doc.id: on_select(doc_id),
        ))
    return entries


def match_entries(entries: Sequence[PaletteEntry], query: str) -> List[PaletteEntry]:
    """按查询过滤条目，保持注册顺序"""
    normalized = (query or "").strip().lower()
    if not normalized:
        return list(entries)
    return [
        entry for entry in entries
        if normalized in f"{entry.label} {entry.hint}".lower()
    ]


class CommandPalette(QObject):
    """命令面板状态

    关闭（无论何种原因）时清空查询，面板不会带着残留文本重新打开。
    """

    opened = pyqtSignal()
    closed = pyqtSignal()
    query_changed = pyqtSignal(str)

    def __init__(self, entry_provider: Callable[[], List[PaletteEntry]], parent=None):
        """
        Args:
            entry_provider: 返回当前条目集合的函数（静态条目在前，文档条目在后）
            parent: 父对象
        """
        super().__init__(parent)
        self._entry_provider = entry_provider
        self._is_open = False
        self._query = ""

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def query(self) -> str:
        return self._query

    def open(self):
        """打开面板并重置查询"""
        self._set_query("")
        if self._is_open:
            return
        self._is_open = True
        logger.debug("命令面板已打开")
        self.opened.emit()

    def close(self):
        """关闭面板并清空查询"""
        if not self._is_open:
            self._set_query("")
            return
        self._is_open = False
        self._set_query("")
        logger.debug("命令面板已关闭")
        self.closed.emit()

    def toggle(self):
        if self._is_open:
            self.close()
        else:
            self.open()

    def set_query(self, text: str):
        self._set_query(text or "")

    def entries(self) -> List[PaletteEntry]:
        return list(self._entry_provider())

    def results(self) -> List[PaletteEntry]:
        return match_entries(self.entries(), self._query)

    def invoke(self, entry: PaletteEntry):
        """执行条目动作（恰好一次），然后关闭面板"""
        logger.info("执行命令面板条目: %s", entry.id)
        try:
            entry.action()
        finally:
            self.close()

    def invoke_first(self) -> Optional[PaletteEntry]:
        """执行第一个匹配结果（回车键），没有结果时不做任何事"""
        results = self.results()
        if not results:
            return None
        self.invoke(results[0])
        return results[0]

    def _set_query(self, text: str):
        if text == self._query:
            return
        self._query = text
        self.query_changed.emit(text)
