"""
主题模块

主要导出:
    - ThemeManager: 主题管理器类
    - ThemeMode: 主题模式枚举 (SYSTEM/DARK/LIGHT)
    - ResolvedTheme: 实际主题枚举 (DARK/LIGHT)
    - LightTheme / DarkTheme: 主题调色板
"""

from .theme_manager import ThemeManager
from .themes import DarkTheme, LightTheme, ResolvedTheme, ThemeMode

__all__ = [
    'DarkTheme',
    'LightTheme',
    'ResolvedTheme',
    'ThemeManager',
    'ThemeMode',
]
