"""
界面组件
"""

from .command_palette_dialog import CommandPaletteOverlay
from .markdown_view import MarkdownView

__all__ = [
    'CommandPaletteOverlay',
    'MarkdownView',
]
