import pytest

from docdesk.models.catalog import Category, Language
from docdesk.state.content_loader import ContentLoader
from docdesk.state.preferences import PreferenceStore
from docdesk.state.workspace import Workspace
from docdesk.themes.themes import ThemeMode
from docdesk.windows.main_window import MainWindow

pytestmark = pytest.mark.usefixtures("qapp")


@pytest.fixture
def window(small_catalog, config_manager, color_scheme, fake_client, worker_factory):
    preferences = PreferenceStore(config_manager, color_scheme)
    loader = ContentLoader(fake_client, worker_factory=worker_factory)
    workspace = Workspace(small_catalog, preferences, loader)
    win = MainWindow(workspace, preferences)
    win.show()
    yield win
    win.close()
    preferences.close()


def test_initial_render_shows_loading_and_header(window, fake_client):
    assert window.reader_status.isVisibleTo(window)
    assert window.reader_status.text() == "Loading document..."
    assert window.reader_title.text() == "Docs Hub"
    assert fake_client.source_url("docs/README.md") in window.source_links.text()
    assert fake_client.raw_url("docs/README.md") in window.source_links.text()
    assert window.doc_list.count() == 4
    assert window.keyboard.is_installed


def test_ready_state_renders_markdown(window, worker_factory):
    worker_factory.last.finish("# Docs Hub\n\nWelcome.")
    assert not window.reader_status.isVisibleTo(window)
    assert "Welcome." in window.markdown_view.toPlainText()


def test_error_state_shows_fallback_with_source_link(window, worker_factory, fake_client):
    worker_factory.last.fail("HTTP 404")
    assert window.reader_status.property("state") == "error"
    assert "Document preview is unavailable" in window.reader_status.text()
    assert fake_client.source_url("docs/README.md") in window.reader_status.text()


def test_empty_filter_shows_hint(window):
    window.search_input.setText("nothing matches this")
    assert window.empty_label.isVisibleTo(window)
    assert not window.doc_list.isVisibleTo(window)
    assert window.filtered_label.text() == "Filtered: 0"


def test_category_button_filters_list(window):
    window._category_buttons[Category.SECURITY].click()
    assert window.doc_list.count() == 1
    assert window.reader_title.text() == "Security Roadmap"


def test_language_button_retranslates(window):
    window._language_buttons[Language.ZH].click()
    assert window.section_title.text() == "文档工作区"
    assert window.reader_title.text() == "文档总览"


def test_theme_buttons_follow_preferences(window):
    window.preferences.set_theme_mode(ThemeMode.DARK)
    assert window._theme_buttons[ThemeMode.DARK].isChecked()


def test_close_uninstalls_shortcuts_and_cancels_fetch(window, worker_factory):
    worker = worker_factory.last
    window.close()
    assert not window.keyboard.is_installed
    assert worker.token.is_cancelled()


def test_language_switch_does_not_rerender_unchanged_document(window, worker_factory, monkeypatch):
    window.workspace.select("getting-started")
    worker_factory.last.finish("# Getting Started\n\nBoot sequence.")
    rendered = []
    monkeypatch.setattr(window.markdown_view, "set_markdown_text", rendered.append)

    window._language_buttons[Language.ZH].click()

    assert rendered == []
    assert window.reader_title.text() == "快速开始"
    assert "Boot sequence." in window.markdown_view.toPlainText()


def test_language_switch_retranslates_loading_status(window):
    window._language_buttons[Language.ZH].click()
    assert window.reader_status.isVisibleTo(window)
    assert window.reader_status.text() == "文档加载中..."
