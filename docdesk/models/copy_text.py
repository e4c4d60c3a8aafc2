"""
界面文案

按语言组织的界面字符串与分类标签。
"""

from typing import Dict

from .catalog import CATEGORY_ALL, Category, Language


COPY: Dict[Language, Dict[str, str]] = {
    Language.EN: {
        "window_title": "ZeroClaw Docs",
        "docs_workspace": "Documentation Workspace",
        "docs_lead": (
            "Browse, filter, and read project docs directly in-window. "
            "Open any item in GitHub when needed."
        ),
        "docs_indexed": "Indexed",
        "docs_filtered": "Filtered",
        "docs_active": "Active",
        "search": "Search docs by topic, path, or keyword",
        "command_palette": "Command palette",
        "source_label": "Source",
        "open_on_github": "Open on GitHub",
        "open_raw": "Open raw",
        "loading": "Loading document...",
        "fallback": "Document preview is unavailable right now. You can still open the source directly:",
        "empty": "No docs matched your current filter.",
        "palette_hint": "Type a command or document name",
        "action_focus": "Focus docs search",
        "action_top": "Back to top",
        "action_theme": "Cycle theme",
        "action_locale": "Toggle language",
        "status": "Current Theme",
        "language_switch": "EN -> 中文",
    },
    Language.ZH: {
        "window_title": "ZeroClaw 文档",
        "docs_workspace": "文档工作区",
        "docs_lead": "在窗口内直接浏览、过滤并阅读文档；需要时可一键跳转 GitHub 原文。",
        "docs_indexed": "总文档",
        "docs_filtered": "筛选后",
        "docs_active": "当前文档",
        "search": "按主题、路径或关键字搜索",
        "command_palette": "命令面板",
        "source_label": "来源",
        "open_on_github": "在 GitHub 打开",
        "open_raw": "打开原文",
        "loading": "文档加载中...",
        "fallback": "当前无法预览文档，你仍可直接打开源文件：",
        "empty": "当前筛选下没有匹配文档。",
        "palette_hint": "输入命令或文档名称",
        "action_focus": "聚焦文档搜索",
        "action_top": "回到顶部",
        "action_theme": "切换主题",
        "action_locale": "切换语言",
        "status": "当前主题",
        "language_switch": "中文 -> EN",
    },
}


CATEGORY_LABELS: Dict[Language, Dict[str, str]] = {
    Language.EN: {
        CATEGORY_ALL: "All",
        Category.CORE.value: "Core",
        Category.SETUP.value: "Setup",
        Category.OPERATIONS.value: "Operations",
        Category.SECURITY.value: "Security",
        Category.REFERENCE.value: "Reference",
        Category.INTERNATIONAL.value: "International",
    },
    Language.ZH: {
        CATEGORY_ALL: "全部",
        Category.CORE.value: "核心",
        Category.SETUP.value: "部署",
        Category.OPERATIONS.value: "运维",
        Category.SECURITY.value: "安全",
        Category.REFERENCE.value: "参考",
        Category.INTERNATIONAL.value: "多语言",
    },
}


def text_for(language: Language, key: str) -> str:
    """获取文案，缺失时回退到主语言"""
    table = COPY.get(language, COPY[Language.primary()])
    return table.get(key) or COPY[Language.primary()].get(key, key)


def category_label(language: Language, category) -> str:
    """获取分类标签，支持Category枚举或"All" """
    key = category.value if isinstance(category, Category) else category
    return CATEGORY_LABELS.get(language, CATEGORY_LABELS[Language.primary()]).get(key, key)
