"""
文档目录数据模型

编译期固定的文档条目列表。目录在运行时不可编辑，
每个条目都带有各语言的标题、摘要，以及可选的按语言覆盖路径。
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)


class Language(Enum):
    """界面语言枚举"""
    EN = "en"  # 主语言
    ZH = "zh"

    @classmethod
    def primary(cls) -> "Language":
        """默认语言"""
        return cls.EN

    @classmethod
    def parse(cls, value) -> Optional["Language"]:
        """解析语言代码，无法识别时返回None"""
        if isinstance(value, Language):
            return value
        for member in cls:
            if member.value == value:
                return member
        return None


class Category(Enum):
    """文档分类（封闭集合）"""
    CORE = "Core"
    SETUP = "Setup"
    OPERATIONS = "Operations"
    SECURITY = "Security"
    REFERENCE = "Reference"
    INTERNATIONAL = "International"


# 分类筛选中的"全部"选项，不属于任何条目的分类
CATEGORY_ALL = "All"

# 分类筛选的可选值（界面按此顺序展示）
CATEGORY_CHOICES: Tuple = (CATEGORY_ALL,) + tuple(Category)


def coerce_category(value: Union[Category, str]) -> Union[Category, str]:
    """把分类字符串规范为 Category，CATEGORY_ALL 原样返回

    Raises:
        ValueError: 未知分类
    """
    if isinstance(value, Category) or value == CATEGORY_ALL:
        return value
    return Category(value)


@dataclass(frozen=True)
class Localized:
    """按语言区分的文本对"""
    en: str
    zh: str

    def get(self, language: Language) -> str:
        return self.zh if language == Language.ZH else self.en

    def values(self) -> List[str]:
        return [self.en, self.zh]


@dataclass(frozen=True)
class DocEntry:
    """文档条目

    Attributes:
        id: 目录内唯一的标识
        category: 所属分类
        path: 默认内容路径（相对仓库根目录）
        title: 各语言标题
        summary: 各语言摘要
        path_overrides: 按语言覆盖的内容路径，(语言, 路径) 对组成的元组
        keywords: 搜索关键字
    """
    id: str
    category: Category
    path: str
    title: Localized
    summary: Localized
    path_overrides: Tuple[Tuple[Language, str], ...] = ()
    keywords: Tuple[str, ...] = ()

    def path_for(self, language: Language) -> str:
        """解析指定语言下实际拉取的内容路径

        有该语言的覆盖路径时使用覆盖路径，否则回退到默认路径。
        """
        for override_language, override in self.path_overrides:
            if override_language == language and override:
                return override
        return self.path


def validate_catalog(catalog: Sequence[DocEntry]) -> List[str]:
    """校验目录不变量

    Returns:
        问题描述列表，为空表示目录有效
    """
    problems = []
    seen = set()
    for doc in catalog:
        if doc.id in seen:
            problems.append(f"重复的文档ID: {doc.id}")
        seen.add(doc.id)
        for language in Language:
            if not doc.title.get(language):
                problems.append(f"{doc.id} 缺少 {language.value} 标题")
            if not doc.summary.get(language):
                problems.append(f"{doc.id} 缺少 {language.value} 摘要")
        if not doc.path:
            problems.append(f"{doc.id} 缺少默认路径")

    for problem in problems:
        logger.error("目录配置错误: %s", problem)
    return problems


def _doc(
    doc_id: str,
    category: Category,
    path: str,
    title: Tuple[str, str],
    summary: Tuple[str, str],
    zh_path: Optional[str] = None,
    keywords: Tuple[str, ...] = (),
) -> DocEntry:
    overrides = ((Language.ZH, zh_path),) if zh_path else ()
    return DocEntry(
        id=doc_id,
        category=category,
        path=path,
        title=Localized(*title),
        summary=Localized(*summary),
        path_overrides=overrides,
        keywords=keywords,
    )


CATALOG: Tuple[DocEntry, ...] = (
    _doc(
        "repo-readme", Category.CORE, "README.md",
        ("Repository README", "仓库 README"),
        ("Project overview, architecture, benchmarks, setup, and operations.",
         "项目总览、架构、基准、安装与运维入口。"),
        zh_path="README.zh-CN.md",
        keywords=("overview", "architecture", "benchmark", "quick start"),
    ),
    _doc(
        "docs-home", Category.CORE, "docs/README.md",
        ("Docs Hub", "文档总览"),
        ("Primary documentation hub for all ZeroClaw capabilities.",
         "ZeroClaw 全量文档的总入口。"),
        zh_path="docs/i18n/zh-CN/README.md",
        keywords=("docs", "hub", "summary"),
    ),
    _doc(
        "docs-summary", Category.CORE, "docs/SUMMARY.md",
        ("Docs Table of Contents", "文档目录"),
        ("Structured index for all docs sections and files.",
         "结构化文档目录与索引。"),
        zh_path="docs/i18n/zh-CN/SUMMARY.md",
        keywords=("toc", "summary", "index"),
    ),
    _doc(
        "one-click-bootstrap", Category.SETUP, "docs/one-click-bootstrap.md",
        ("One-Click Bootstrap", "一键安装"),
        ("Fast installer path for dependencies and ZeroClaw runtime.",
         "快速完成依赖与 ZeroClaw 运行时安装。"),
        zh_path="docs/i18n/zh-CN/one-click-bootstrap.md",
    ),
    _doc(
        "getting-started", Category.SETUP, "docs/getting-started/README.md",
        ("Getting Started", "快速开始"),
        ("Boot sequence, first commands, and onboarding flow.",
         "启动流程、首批命令与引导步骤。"),
    ),
    _doc(
        "network-deployment", Category.SETUP, "docs/network-deployment.md",
        ("Network Deployment", "网络部署"),
        ("Service setup, daemon/gateway, and network run modes.",
         "服务配置、daemon/gateway 与网络运行模式。"),
        zh_path="docs/i18n/zh-CN/network-deployment.md",
    ),
    _doc(
        "hardware", Category.SETUP, "docs/hardware/README.md",
        ("Hardware Guide", "硬件指南"),
        ("Board and hardware references for edge deployment.",
         "边缘部署相关板卡与硬件参考。"),
    ),
    _doc(
        "operations-runbook", Category.OPERATIONS, "docs/operations-runbook.md",
        ("Operations Runbook", "运维手册"),
        ("Operational procedures, incident handling, and checks.",
         "运维流程、故障处理与巡检实践。"),
        zh_path="docs/i18n/zh-CN/operations-runbook.md",
    ),
    _doc(
        "ops-overview", Category.OPERATIONS, "docs/operations/README.md",
        ("Operations Overview", "运维概览"),
        ("Operations section hub with runbooks and safeguards.",
         "运维章节入口，包含 runbook 与保障策略。"),
    ),
    _doc(
        "connectivity-probes", Category.OPERATIONS,
        "docs/operations/connectivity-probes-runbook.md",
        ("Connectivity Probes", "连通性探针"),
        ("Probe workflow and diagnosis guidelines.", "探针流程与诊断指南。"),
    ),
    _doc(
        "troubleshooting", Category.OPERATIONS, "docs/troubleshooting.md",
        ("Troubleshooting", "问题排查"),
        ("Systematic recovery checklist for common failures.",
         "常见故障的系统化排查与恢复清单。"),
        zh_path="docs/i18n/zh-CN/troubleshooting.md",
    ),
    _doc(
        "security-overview", Category.SECURITY, "docs/security/README.md",
        ("Security Overview", "安全概览"),
        ("Security architecture, controls, and policy model.",
         "安全架构、控制项与策略模型。"),
    ),
    _doc(
        "sandboxing", Category.SECURITY, "docs/sandboxing.md",
        ("Sandboxing", "沙箱机制"),
        ("Runtime sandbox boundaries and risk containment.",
         "运行时沙箱边界与风险隔离。"),
        zh_path="docs/i18n/zh-CN/sandboxing.md",
    ),
    _doc(
        "agnostic-security", Category.SECURITY, "docs/agnostic-security.md",
        ("Agnostic Security", "模型无关安全"),
        ("Provider-agnostic security stance and operating model.",
         "面向多模型的统一安全基线与运行方式。"),
        zh_path="docs/i18n/zh-CN/agnostic-security.md",
    ),
    _doc(
        "config-reference", Category.REFERENCE, "docs/config-reference.md",
        ("Config Reference", "配置参考"),
        ("All runtime configuration fields and defaults.",
         "运行时配置字段与默认值。"),
        zh_path="docs/i18n/zh-CN/config-reference.md",
    ),
    _doc(
        "commands-reference", Category.REFERENCE, "docs/commands-reference.md",
        ("Commands Reference", "命令参考"),
        ("CLI command map for onboarding, runtime, and tooling.",
         "覆盖引导、运行时与工具的 CLI 命令总览。"),
        zh_path="docs/i18n/zh-CN/commands-reference.md",
    ),
    _doc(
        "custom-providers", Category.REFERENCE, "docs/custom-providers.md",
        ("Custom Providers", "自定义模型提供方"),
        ("OpenAI-compatible and custom endpoint integration.",
         "OpenAI 兼容与自定义端点集成指南。"),
        zh_path="docs/i18n/zh-CN/custom-providers.md",
    ),
    _doc(
        "channels-reference", Category.REFERENCE, "docs/channels-reference.md",
        ("Channels Reference", "渠道参考"),
        ("Slack/Telegram/Discord/WhatsApp and channel wiring.",
         "Slack/Telegram/Discord/WhatsApp 等渠道配置。"),
        zh_path="docs/i18n/zh-CN/channels-reference.md",
    ),
    _doc(
        "reference-overview", Category.REFERENCE, "docs/reference/README.md",
        ("Reference Overview", "参考总览"),
        ("Reference section index across runtime internals.",
         "运行时内部参考索引。"),
    ),
    _doc(
        "resource-limits", Category.REFERENCE, "docs/resource-limits.md",
        ("Resource Limits", "资源限制"),
        ("CPU, memory, and execution constraints guide.",
         "CPU、内存与执行约束说明。"),
        zh_path="docs/i18n/zh-CN/resource-limits.md",
    ),
    _doc(
        "i18n-guide", Category.INTERNATIONAL, "docs/i18n-guide.md",
        ("i18n Guide", "国际化指南"),
        ("Localization strategy and docs translation workflow.",
         "本地化策略与文档翻译流程。"),
        zh_path="docs/i18n/zh-CN/i18n-guide.md",
    ),
    _doc(
        "zh-docs-home", Category.INTERNATIONAL, "docs/i18n/zh-CN/README.md",
        ("Chinese Docs Hub", "中文文档总览"),
        ("Chinese documentation index and translated content set.",
         "中文文档入口与翻译内容索引。"),
    ),
)


__all__ = [
    'CATALOG',
    'CATEGORY_ALL',
    'CATEGORY_CHOICES',
    'Category',
    'DocEntry',
    'Language',
    'Localized',
    'coerce_category',
    'validate_catalog',
]
