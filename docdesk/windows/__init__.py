"""
窗口模块
"""

from .main_window import MainWindow

__all__ = ['MainWindow']
