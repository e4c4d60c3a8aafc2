"""
DocDesk 文档工作区

在桌面窗口内浏览、筛选并预览远程仓库的文档，
通过命令面板（Ctrl/Cmd+K）快速执行工作区动作。
"""

__version__ = "0.1.0"
