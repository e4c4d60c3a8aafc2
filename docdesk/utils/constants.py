"""
常量定义模块

集中管理项目中使用的常量，避免魔术数字散落在代码各处。

模块包含：
- WorkerTimeouts: Worker线程超时配置
- StorageKeys: 持久化配置的键名
- ContentDefaults: 内容源默认地址
- WorkspaceConstants: 工作区相关常量
"""


class WorkerTimeouts:
    """Worker 线程超时配置（毫秒）

    用于 QThread.wait() 方法的超时参数。
    """
    # 默认等待时间：用于一般 Worker 停止等待
    DEFAULT_MS = 1000

    # 强制终止前的等待时间：用于 terminate() 后的最终等待
    FORCE_TERMINATE_MS = 500


class StorageKeys:
    """QSettings 键名"""
    LANGUAGE = "preferences/language"
    THEME_MODE = "preferences/theme_mode"
    RAW_BASE_URL = "content/raw_base_url"
    REPO_BASE_URL = "content/repo_base_url"


class ContentDefaults:
    """内容源默认配置"""
    # 原始内容地址（程序化拉取）
    RAW_BASE_URL = "https://raw.githubusercontent.com/zeroclaw-labs/zeroclaw/main"
    # 源码浏览地址（仅用于生成"在源处打开"的链接，从不程序化拉取）
    REPO_BASE_URL = "https://github.com/zeroclaw-labs/zeroclaw/blob/main"


class WorkspaceConstants:
    """工作区相关常量"""
    # 目录无法提供有效选择时使用的回退文档
    FALLBACK_DOC_ID = "docs-home"

    # 命令面板中动态文档条目的上限
    PALETTE_MAX_DOC_ENTRIES = 10

    # 命令面板列表最多展示的结果数
    PALETTE_MAX_VISIBLE_RESULTS = 12

    # 打开面板后聚焦输入框的延迟（等待容器可见）
    PALETTE_FOCUS_DELAY_MS = 0

    # 从命令面板聚焦搜索框前等待滚动完成的延迟
    SEARCH_FOCUS_DELAY_MS = 300
