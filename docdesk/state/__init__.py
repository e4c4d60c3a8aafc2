"""
工作区状态引擎模块

主要导出:
    - PreferenceStore: 偏好存储（语言、主题模式、实际主题）
    - filter_documents: 目录筛选
    - SelectionController: 选择控制器
    - ContentLoader / ContentCache: 内容加载与缓存
    - CommandPalette / PaletteEntry: 命令面板
    - KeyboardDispatcher: 全局快捷键
    - Workspace: 组合以上组件的工作区
"""

from .catalog_filter import filter_documents
from .content_loader import ContentCache, ContentLoader, LoadState, LoadStatus
from .keyboard import KeyboardDispatcher
from .palette import CommandPalette, PaletteEntry, match_entries
from .preferences import ColorSchemeSource, PreferenceStore, QtColorSchemeSource, Subscription
from .selection import SelectionController
from .workspace import Workspace

__all__ = [
    'ColorSchemeSource',
    'CommandPalette',
    'ContentCache',
    'ContentLoader',
    'filter_documents',
    'KeyboardDispatcher',
    'LoadState',
    'LoadStatus',
    'match_entries',
    'PaletteEntry',
    'PreferenceStore',
    'QtColorSchemeSource',
    'SelectionController',
    'Subscription',
    'Workspace',
]
