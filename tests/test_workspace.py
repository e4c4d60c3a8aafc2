import pytest

from docdesk.models.catalog import CATEGORY_ALL, Category, Language
from docdesk.state.content_loader import ContentLoader, LoadStatus
from docdesk.state.preferences import PreferenceStore
from docdesk.state.workspace import Workspace
from docdesk.themes.themes import ThemeMode

pytestmark = pytest.mark.usefixtures("qapp")


@pytest.fixture
def preferences(config_manager, color_scheme):
    store = PreferenceStore(config_manager, color_scheme)
    yield store
    store.close()


@pytest.fixture
def loader(fake_client, worker_factory):
    return ContentLoader(fake_client, worker_factory=worker_factory)


@pytest.fixture
def workspace(small_catalog, preferences, loader):
    ws = Workspace(small_catalog, preferences, loader)
    yield ws
    ws.shutdown()


def test_startup_loads_fallback_document(workspace, worker_factory):
    assert workspace.active_document().id == "docs-home"
    assert worker_factory.last.path == "docs/README.md"
    assert workspace.loader.state.status == LoadStatus.LOADING


def test_category_change_reconciles_selection_and_loads(workspace, worker_factory):
    workspace.set_category(Category.SETUP)

    assert [d.id for d in workspace.visible] == ["one-click-bootstrap", "getting-started"]
    assert workspace.active_document().id == "one-click-bootstrap"
    assert worker_factory.last.path == "docs/one-click-bootstrap.md"
    # 被取代的首个请求已取消
    assert worker_factory.workers[0].token.is_cancelled()


def test_empty_filter_keeps_active_document(workspace):
    visible_events = []
    workspace.visible_changed.connect(visible_events.append)

    workspace.set_query("no such document")

    assert workspace.visible == []
    assert visible_events == [[]]
    assert workspace.active_document().id == "docs-home"


def test_query_then_clear_restores_visible_set(workspace, small_catalog):
    workspace.set_query("bootstrap")
    assert [d.id for d in workspace.visible] == ["one-click-bootstrap"]
    workspace.set_query("")
    assert len(workspace.visible) == len(small_catalog)
    assert workspace.category == CATEGORY_ALL


def test_language_switch_reloads_override_path(workspace, preferences, worker_factory):
    worker_factory.last.finish("# Docs Hub")

    preferences.set_language(Language.ZH)

    assert workspace.active_path() == "docs/i18n/zh-CN/README.md"
    assert worker_factory.last.path == "docs/i18n/zh-CN/README.md"

    worker_factory.last.finish("# 文档总览")
    preferences.set_language(Language.EN)

    # 英文内容已缓存，不再请求
    assert workspace.loader.state.status == LoadStatus.READY
    assert workspace.loader.state.content == "# Docs Hub"
    assert len(worker_factory.for_path("docs/README.md")) == 1


def test_select_unknown_document_is_ignored(workspace):
    workspace.select("unknown")
    assert workspace.active_document().id == "docs-home"


def test_palette_entries_static_first_then_documents(workspace):
    ids = [entry.id for entry in workspace.palette_entries()]
    assert ids[:4] == ["focus-search", "top", "theme", "locale"]
    assert ids[4:] == [
        "doc-docs-home", "doc-one-click-bootstrap", "doc-getting-started", "doc-security-roadmap"
    ]


def test_palette_entries_follow_visible_set(workspace):
    workspace.set_category(Category.SECURITY)
    doc_ids = [e.id for e in workspace.palette_entries() if e.id.startswith("doc-")]
    assert doc_ids == ["doc-security-roadmap"]


def test_palette_theme_entry_cycles_mode(workspace, preferences):
    palette = workspace.palette
    palette.open()
    palette.set_query("cycle theme")
    palette.invoke_first()

    assert preferences.get_theme_mode() == ThemeMode.DARK
    assert not palette.is_open


def test_palette_theme_hint_shows_resolved_theme(workspace):
    theme_entry = next(e for e in workspace.palette_entries() if e.id == "theme")
    assert theme_entry.hint == "Current Theme: light"


def test_palette_locale_entry_toggles_language(workspace, preferences):
    locale_entry = next(e for e in workspace.palette_entries() if e.id == "locale")
    workspace.palette.open()
    workspace.palette.invoke(locale_entry)

    assert preferences.get_language() == Language.ZH
    relabeled = next(e for e in workspace.palette_entries() if e.id == "locale")
    assert relabeled.hint == "中文 -> EN"


def test_palette_document_entry_selects_and_scrolls(workspace, worker_factory):
    scrolls = []
    workspace.scroll_to_workspace_requested.connect(lambda: scrolls.append("workspace"))

    entry = next(e for e in workspace.palette_entries() if e.id == "doc-getting-started")
    workspace.palette.open()
    workspace.palette.invoke(entry)

    assert workspace.active_document().id == "getting-started"
    assert worker_factory.last.path == "docs/getting-started/README.md"
    assert scrolls == ["workspace"]


def test_focus_search_entry_requests_scroll_then_focus(workspace):
    events = []
    workspace.scroll_to_workspace_requested.connect(lambda: events.append("scroll"))
    workspace.focus_search_requested.connect(lambda: events.append("focus"))

    entry = next(e for e in workspace.palette_entries() if e.id == "focus-search")
    workspace.palette.open()
    workspace.palette.invoke(entry)

    assert events == ["scroll", "focus"]


def test_shutdown_cancels_in_flight_fetch(workspace, worker_factory):
    worker = worker_factory.last
    workspace.palette.open()

    workspace.shutdown()

    assert worker.token.is_cancelled()
    assert not workspace.palette.is_open


def test_empty_catalog_stays_idle(preferences, loader, worker_factory):
    ws = Workspace((), preferences, loader)
    assert ws.active_document() is None
    assert loader.state.status == LoadStatus.IDLE
    assert worker_factory.workers == []
    ws.shutdown()


def test_palette_round_trip_selects_sole_match(workspace):
    palette = workspace.palette
    palette.open()
    palette.set_query("security roadmap")

    results = palette.results()
    assert [e.id for e in results] == ["doc-security-roadmap"]

    palette.invoke(results[0])

    assert workspace.active_document().id == "security-roadmap"
    assert not palette.is_open
    assert palette.query == ""


def test_category_accepts_string_value(workspace):
    workspace.set_category("Setup")

    assert workspace.category is Category.SETUP
    assert [d.id for d in workspace.visible] == ["one-click-bootstrap", "getting-started"]


def test_unknown_category_is_rejected(workspace):
    with pytest.raises(ValueError):
        workspace.set_category("Gardening")
    assert workspace.category == CATEGORY_ALL


def test_language_switch_without_path_change_keeps_state(workspace, preferences, worker_factory):
    worker_factory.last.finish("# Docs Hub")
    workspace.select("getting-started")
    worker_factory.last.finish("# Getting Started")
    states = []
    workspace.loader.state_changed.connect(states.append)

    preferences.set_language(Language.ZH)

    assert states == []
    assert workspace.loader.state.content == "# Getting Started"


def test_language_switch_moving_selection_loads_once(workspace, preferences, worker_factory):
    worker_factory.last.finish("# Docs Hub")
    workspace.select("security-roadmap")
    worker_factory.last.finish("# Roadmap")
    workspace.select("docs-home")
    # 该关键字只匹配中文摘要
    workspace.set_query("安全加固")
    assert workspace.visible == []
    states = []
    workspace.loader.state_changed.connect(states.append)

    preferences.set_language(Language.ZH)

    assert workspace.active_document().id == "security-roadmap"
    assert [(s.path, s.status) for s in states] == [("docs/security-roadmap.md", LoadStatus.READY)]
