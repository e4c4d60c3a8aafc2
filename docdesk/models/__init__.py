"""
数据模型模块
"""

from .catalog import (
    CATALOG,
    CATEGORY_ALL,
    CATEGORY_CHOICES,
    Category,
    DocEntry,
    Language,
    Localized,
    coerce_category,
    validate_catalog,
)
from .copy_text import category_label, text_for

__all__ = [
    'CATALOG',
    'CATEGORY_ALL',
    'CATEGORY_CHOICES',
    'Category',
    'category_label',
    'DocEntry',
    'Language',
    'Localized',
    'coerce_category',
    'text_for',
    'validate_catalog',
]
