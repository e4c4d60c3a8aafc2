"""
选择控制器

跟踪当前激活的文档，并在可见集合变化时保持选择有效：
可见集合非空且不包含当前文档时，选择重置为可见集合的第一项。
"""

import logging
from typing import Dict, Optional, Sequence

from PyQt6.QtCore import QObject, pyqtSignal

from docdesk.models.catalog import DocEntry, Language
from docdesk.utils.constants import WorkspaceConstants

logger = logging.getLogger(__name__)


class SelectionController(QObject):
    """选择控制器"""

    active_changed = pyqtSignal(object)  # DocEntry

    def __init__(
        self,
        catalog: Sequence[DocEntry],
        initial_id: str = WorkspaceConstants.FALLBACK_DOC_ID,
        fallback_id: str = WorkspaceConstants.FALLBACK_DOC_ID,
        parent=None,
    ):
        super().__init__(parent)
        self._catalog = list(catalog)
        self._by_id: Dict[str, DocEntry] = {doc.id: doc for doc in self._catalog}
        self._fallback_id = fallback_id
        self._active_id = initial_id
        # 未知的初始ID规范为实际解析到的文档
        active = self.get_active()
        if active is not None:
            self._active_id = active.id

    @property
    def active_id(self) -> str:
        return self._active_id

    def get_active(self) -> Optional[DocEntry]:
        """当前激活的文档

        当前ID不在目录中时依次回退到固定的回退文档和目录第一项；
        目录为空时返回None。
        """
        doc = self._by_id.get(self._active_id) or self._by_id.get(self._fallback_id)
        if doc is not None:
            return doc
        return self._catalog[0] if self._catalog else None

    def set_active(self, doc_id: str):
        """切换激活文档，未知ID保持原选择不变"""
        if doc_id not in self._by_id:
            logger.warning("忽略未知的文档ID: %s", doc_id)
            return
        if doc_id == self._active_id:
            return
        self._active_id = doc_id
        logger.debug("激活文档: %s", doc_id)
        self.active_changed.emit(self._by_id[doc_id])

    def reconcile(self, visible: Sequence[DocEntry]):
        """可见集合变化后保持选择有效"""
        if not visible:
            return
        if any(doc.id == self._active_id for doc in visible):
            return
        self.set_active(visible[0].id)

    def resolve_content_path(self, language: Language) -> Optional[str]:
        """当前文档在指定语言下实际拉取的内容路径"""
        doc = self.get_active()
        return doc.path_for(language) if doc is not None else None
