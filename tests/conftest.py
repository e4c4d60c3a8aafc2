"""Shared fixtures for the DocDesk test suite."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtCore import QObject, QSettings, pyqtSignal
from PyQt6.QtWidgets import QApplication

from docdesk.models.catalog import Category, DocEntry, Language, Localized
from docdesk.state.preferences import ColorSchemeSource, Subscription
from docdesk.utils.config_manager import ConfigManager


@pytest.fixture(scope="session")
def qapp():
    """Create a QApplication instance for the whole test session."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


class FakeSettings:
    """In-memory stand-in for QSettings."""

    def __init__(self, values=None, fail_on_write=False, status=QSettings.Status.NoError):
        self.values = dict(values or {})
        self.fail_on_write = fail_on_write
        self._status = status
        self.sync_count = 0

    def value(self, key, default=None):
        return self.values.get(key, default)

    def setValue(self, key, value):
        if self.fail_on_write:
            raise OSError("disk full")
        self.values[key] = value

    def sync(self):
        self.sync_count += 1

    def status(self):
        return self._status


class FakeColorScheme(ColorSchemeSource):
    """Controllable environment color-scheme signal."""

    def __init__(self, dark=False):
        self.dark = dark
        self._callbacks = []
        self.subscribe_calls = 0

    @property
    def subscriber_count(self):
        return len(self._callbacks)

    def prefers_dark(self):
        return self.dark

    def subscribe(self, callback):
        self.subscribe_calls += 1
        self._callbacks.append(callback)
        return Subscription(lambda: self._callbacks.remove(callback))

    def set_dark(self, dark):
        self.dark = dark
        for callback in list(self._callbacks):
            callback(dark)


class FakeWorker(QObject):
    """Worker double: never runs a thread, results are pushed by the test."""

    success = pyqtSignal(object)
    error = pyqtSignal(str)
    error_detail = pyqtSignal(dict)
    finished = pyqtSignal()

    def __init__(self, func, path, token):
        super().__init__()
        self.func = func
        self.path = path
        self.token = token
        self.started = False
        self._running = False

    def start(self):
        self.started = True
        self._running = True

    def cancel(self):
        self.token.cancel()

    def isRunning(self):
        return self._running

    def quit(self):
        pass

    def wait(self, _ms=None):
        self._running = False
        return True

    def finish(self, text):
        """Deliver a body the way AsyncWorker.run does."""
        self._running = False
        if not self.token.is_cancelled():
            self.success.emit(text)
        self.finished.emit()

    def fail(self, message):
        self._running = False
        if not self.token.is_cancelled():
            self.error.emit(message)
        self.finished.emit()


class WorkerFactory:
    """Records every worker the loader creates."""

    def __init__(self):
        self.workers = []

    def __call__(self, func, path, token):
        worker = FakeWorker(func, path, token)
        self.workers.append(worker)
        return worker

    @property
    def last(self):
        return self.workers[-1]

    def for_path(self, path):
        return [w for w in self.workers if w.path == path]


class FakeClient:
    """Content source double: only builds links, fetching goes through FakeWorker."""

    def fetch_text(self, path, token):
        raise AssertionError("fetch_text must run through the worker")

    def source_url(self, path):
        return f"https://github.com/acme/repo/blob/main/{path}"

    def raw_url(self, path):
        return f"https://raw.example.com/acme/repo/main/{path}"


def _entry(doc_id, category, path, title, summary, zh_path=None, keywords=()):
    return DocEntry(
        id=doc_id,
        category=category,
        path=path,
        title=Localized(*title),
        summary=Localized(*summary),
        path_overrides=((Language.ZH, zh_path),) if zh_path else (),
        keywords=keywords,
    )


SMALL_CATALOG = (
    _entry(
        "docs-home", Category.CORE, "docs/README.md",
        ("Docs Hub", "文档总览"),
        ("Primary documentation hub.", "文档总入口。"),
        zh_path="docs/i18n/zh-CN/README.md",
        keywords=("hub",),
    ),
    _entry(
        "one-click-bootstrap", Category.SETUP, "docs/one-click-bootstrap.md",
        ("One-Click Bootstrap", "一键安装"),
        ("Fast installer path.", "快速安装。"),
        zh_path="docs/i18n/zh-CN/one-click-bootstrap.md",
    ),
    _entry(
        "getting-started", Category.SETUP, "docs/getting-started/README.md",
        ("Getting Started", "快速开始"),
        ("Boot sequence and onboarding.", "启动流程与引导。"),
    ),
    _entry(
        "security-roadmap", Category.SECURITY, "docs/security-roadmap.md",
        ("Security Roadmap", "安全路线图"),
        ("Planned hardening work.", "计划中的安全加固。"),
        keywords=("sandbox",),
    ),
)


@pytest.fixture
def small_catalog():
    return SMALL_CATALOG


@pytest.fixture
def fake_settings():
    return FakeSettings()


@pytest.fixture
def config_manager(fake_settings):
    return ConfigManager(settings=fake_settings)


@pytest.fixture
def color_scheme():
    return FakeColorScheme(dark=False)


@pytest.fixture
def worker_factory():
    return WorkerFactory()


@pytest.fixture
def fake_client():
    return FakeClient()
