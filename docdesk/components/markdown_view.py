"""
Markdown 阅读视图

基于 QTextBrowser.setMarkdown 渲染文档原文：
- 一到三级标题附加锚点（slugify 生成），支持文档内跳转
- http/https 链接交给系统浏览器打开
- "#anchor" 链接在当前文档内滚动
"""

import logging
from typing import Callable, List, Optional

from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QDesktopServices, QTextCharFormat, QTextCursor
from PyQt6.QtWidgets import QTextBrowser

from docdesk.utils.formatters import is_external_link, slugify

logger = logging.getLogger(__name__)

# 需要附加锚点的最大标题级别
_MAX_ANCHOR_LEVEL = 3


class MarkdownView(QTextBrowser):
    """Markdown 阅读视图"""

    def __init__(self, parent=None, link_opener: Optional[Callable[[QUrl], bool]] = None):
        """
        Args:
            parent: 父组件
            link_opener: 打开外部链接的函数，默认 QDesktopServices.openUrl
        """
        super().__init__(parent)
        self._link_opener = link_opener or QDesktopServices.openUrl
        self._anchors: List[str] = []

        # 所有链接自行处理，不让 QTextBrowser 在视图内导航
        self.setOpenLinks(False)
        self.setOpenExternalLinks(False)
        self.anchorClicked.connect(self._on_anchor_clicked)

    def set_markdown_text(self, text: str):
        """渲染 Markdown 文本并附加标题锚点"""
        self.setMarkdown(text or "")
        self._anchors = self._add_heading_anchors()
        self.verticalScrollBar().setValue(0)

    def anchor_names(self) -> List[str]:
        """当前文档的标题锚点（按出现顺序）"""
        return list(self._anchors)

    def _add_heading_anchors(self) -> List[str]:
        anchors = []
        block = self.document().begin()
        while block.isValid():
            level = block.blockFormat().headingLevel()
            if 1 <= level <= _MAX_ANCHOR_LEVEL:
                slug = slugify(block.text())
                if slug:
                    cursor = QTextCursor(block)
                    cursor.movePosition(
                        QTextCursor.MoveOperation.EndOfBlock,
                        QTextCursor.MoveMode.KeepAnchor,
                    )
                    fmt = QTextCharFormat()
                    fmt.setAnchor(True)
                    fmt.setAnchorNames([slug])
                    cursor.mergeCharFormat(fmt)
                    anchors.append(slug)
            block = block.next()
        return anchors

    def _on_anchor_clicked(self, url: QUrl):
        href = url.toString()
        if is_external_link(href):
            logger.debug("打开外部链接: %s", href)
            self._link_opener(url)
            return

        if href.startswith("#"):
            anchor = url.fragment()
            if anchor:
                self.scrollToAnchor(anchor)
            return

        # 仓库内相对链接没有可解析的基础地址
        logger.debug("忽略相对链接: %s", href)
