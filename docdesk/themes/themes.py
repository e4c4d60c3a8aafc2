"""
主题定义模块

包含主题模式枚举、亮色主题和深色主题的颜色定义。
"""

from enum import Enum
from typing import Optional


class ThemeMode(Enum):
    """主题模式枚举（用户偏好）"""
    SYSTEM = "system"  # 跟随系统
    DARK = "dark"      # 深色主题
    LIGHT = "light"    # 亮色主题

    @classmethod
    def parse(cls, value) -> Optional["ThemeMode"]:
        """解析存储的主题模式，无法识别时返回None"""
        if isinstance(value, ThemeMode):
            return value
        for member in cls:
            if member.value == value:
                return member
        return None

    def next(self) -> "ThemeMode":
        """循环切换顺序：system -> dark -> light -> system"""
        order = [ThemeMode.SYSTEM, ThemeMode.DARK, ThemeMode.LIGHT]
        return order[(order.index(self) + 1) % len(order)]


class ResolvedTheme(Enum):
    """实际应用的主题"""
    DARK = "dark"
    LIGHT = "light"


class DesignSystemConstants:
    """设计系统共享常量基类

    子类只需定义颜色相关属性。
    """
    RADIUS_SM = "4px"
    RADIUS_MD = "6px"
    RADIUS_LG = "8px"

    FONT_SIZE_SM = "12px"
    FONT_SIZE_BASE = "14px"


class LightTheme(DesignSystemConstants):
    """亮色主题"""
    PRIMARY = "#0F766E"
    PRIMARY_PALE = "#E6F6F4"

    ERROR = "#B42318"

    TEXT_PRIMARY = "#0F172A"
    TEXT_SECONDARY = "#475569"

    BG_PRIMARY = "#F8FAFC"
    BG_SECONDARY = "#FFFFFF"
    BG_TERTIARY = "#F1F5F9"
    BG_OVERLAY = "rgba(15, 23, 42, 0.35)"

    BORDER_DEFAULT = "#CBD5E1"

    BUTTON_TEXT = "#FFFFFF"


class DarkTheme(DesignSystemConstants):
    """深色主题"""
    PRIMARY = "#2DD4BF"
    PRIMARY_PALE = "#12302D"

    ERROR = "#F97066"

    TEXT_PRIMARY = "#E2E8F0"
    TEXT_SECONDARY = "#94A3B8"

    BG_PRIMARY = "#0B1120"
    BG_SECONDARY = "#111827"
    BG_TERTIARY = "#1E293B"
    BG_OVERLAY = "rgba(2, 6, 23, 0.6)"

    BORDER_DEFAULT = "#334155"

    BUTTON_TEXT = "#0B1120"
