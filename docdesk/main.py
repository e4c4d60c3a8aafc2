"""
主程序入口

启动 DocDesk 文档工作区桌面版。

组装顺序：
    ConfigManager -> PreferenceStore -> ThemeManager
    ContentClient -> ContentLoader -> Workspace -> MainWindow
"""

import logging
import os
import sys
import traceback
from pathlib import Path

from PyQt6.QtWidgets import QApplication, QMessageBox, QStyleFactory

from docdesk import __version__
from docdesk.api.client import ContentClient
from docdesk.models.catalog import CATALOG, validate_catalog
from docdesk.state.content_loader import ContentLoader
from docdesk.state.preferences import PreferenceStore, QtColorSchemeSource
from docdesk.state.workspace import Workspace
from docdesk.themes.theme_manager import ThemeManager
from docdesk.utils.config_manager import ConfigManager
from docdesk.windows.main_window import MainWindow

LOG_FILE = Path(__file__).parent / "docdesk_debug.log"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging() -> logging.Logger:
    """配置日志系统 - 同时输出到控制台和文件"""
    level_name = os.environ.get("DOCDESK_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(LOG_FILE, encoding='utf-8', mode='a'),
        ]
    )
    logger = logging.getLogger(__name__)
    if level_name != logging.getLevelName(level):
        logger.warning("无法识别的日志级别 %s，使用 INFO", level_name)
    return logger


def global_exception_handler(exc_type, exc_value, exc_traceback):
    """全局异常处理器 - 捕获未处理的异常并记录"""
    logger = logging.getLogger(__name__)

    # 忽略KeyboardInterrupt
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return

    error_msg = ''.join(traceback.format_exception(exc_type, exc_value, exc_traceback))
    logger.critical("未捕获的异常:\n%s", error_msg)

    # 尝试显示错误对话框（如果Qt应用还在运行）
    try:
        if QApplication.instance():
            msg_box = QMessageBox()
            msg_box.setIcon(QMessageBox.Icon.Critical)
            msg_box.setWindowTitle("DocDesk")
            msg_box.setText("程序发生未处理的错误。")
            msg_box.setDetailedText(error_msg)
            msg_box.exec()
    except RuntimeError as dialog_error:
        logger.warning("无法显示错误对话框: %s", type(dialog_error).__name__)

    sys.__excepthook__(exc_type, exc_value, exc_traceback)


def apply_global_theme(app: QApplication, theme_manager: ThemeManager):
    """应用全局主题样式"""
    app.setStyleSheet(theme_manager.build_stylesheet())


def main():
    """主函数"""
    logger = setup_logging()
    sys.excepthook = global_exception_handler

    logger.info("=" * 60)
    logger.info("DocDesk %s 启动", __version__)
    logger.info("Python版本: %s", sys.version)
    logger.info("日志文件: %s", LOG_FILE)
    logger.info("=" * 60)

    app = QApplication(sys.argv)
    app.setApplicationName("Workspace")
    app.setOrganizationName("DocDesk")
    # Fusion 样式保证 QSS 在各平台表现一致
    app.setStyle(QStyleFactory.create('Fusion'))

    if validate_catalog(CATALOG):
        logger.warning("文档目录存在配置错误，部分条目可能无法正常显示")

    config_manager = ConfigManager()
    preferences = PreferenceStore(config_manager, QtColorSchemeSource())

    theme_manager = ThemeManager(preferences.get_resolved_theme())
    preferences.resolved_theme_changed.connect(theme_manager.apply)
    theme_manager.theme_changed.connect(lambda _name: apply_global_theme(app, theme_manager))
    apply_global_theme(app, theme_manager)

    client = ContentClient(
        raw_base_url=config_manager.get_raw_base_url(),
        repo_base_url=config_manager.get_repo_base_url(),
    )
    loader = ContentLoader(client)
    workspace = Workspace(CATALOG, preferences, loader)

    window = MainWindow(workspace, preferences)

    def cleanup():
        logger.info("应用退出，释放资源")
        workspace.shutdown()
        preferences.close()
        client.close()

    app.aboutToQuit.connect(cleanup)

    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
