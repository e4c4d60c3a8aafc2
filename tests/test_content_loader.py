import pytest

from docdesk.state.content_loader import ContentCache, ContentLoader, LoadStatus

pytestmark = pytest.mark.usefixtures("qapp")


@pytest.fixture
def loader(fake_client, worker_factory):
    loader = ContentLoader(fake_client, worker_factory=worker_factory)
    yield loader
    loader.shutdown()


def _record_states(loader):
    states = []
    loader.state_changed.connect(states.append)
    return states


def test_initial_state_is_idle(loader):
    assert loader.state.status == LoadStatus.IDLE
    assert loader.state.path is None


def test_load_success_caches_and_becomes_ready(loader, worker_factory):
    states = _record_states(loader)

    assert loader.load("docs/a.md").status == LoadStatus.LOADING
    worker_factory.last.finish("# A")

    assert loader.state.status == LoadStatus.READY
    assert loader.state.content == "# A"
    assert loader.cache.contains("docs/a.md")
    assert [s.status for s in states] == [LoadStatus.LOADING, LoadStatus.READY]


def test_cached_path_is_not_fetched_again(loader, worker_factory):
    loader.load("docs/a.md")
    worker_factory.last.finish("# A")

    loader.load("docs/b.md")
    worker_factory.last.finish("# B")

    state = loader.load("docs/a.md")

    assert state.status == LoadStatus.READY
    assert state.content == "# A"
    assert len(worker_factory.for_path("docs/a.md")) == 1


def test_superseded_response_is_discarded(loader, worker_factory):
    loader.load("docs/a.md")
    first = worker_factory.last
    loader.load("docs/b.md")
    second = worker_factory.last

    assert first.token.is_cancelled()
    assert not second.token.is_cancelled()

    # A 在 B 之后才返回
    second.finish("# B")
    first.finish("# A")

    assert loader.state.path == "docs/b.md"
    assert loader.state.content == "# B"
    assert not loader.cache.contains("docs/a.md")


def test_stale_error_does_not_touch_new_path(loader, worker_factory):
    loader.load("docs/a.md")
    first = worker_factory.last
    loader.load("docs/b.md")

    first.fail("HTTP 500")

    assert loader.state.path == "docs/b.md"
    assert loader.state.status == LoadStatus.LOADING


def test_error_is_reported_and_not_cached(loader, worker_factory, fake_client):
    loader.load("docs/missing.md")
    worker_factory.last.fail("HTTP 404")

    state = loader.state
    assert state.status == LoadStatus.ERROR
    assert state.error_message == "HTTP 404"
    assert not loader.cache.contains("docs/missing.md")
    assert loader.source_url("docs/missing.md") == fake_client.source_url("docs/missing.md")


def test_error_then_reselect_retries(loader, worker_factory):
    loader.load("docs/a.md")
    worker_factory.last.fail("HTTP 503")
    loader.load("docs/a.md")

    assert loader.state.status == LoadStatus.LOADING
    assert len(worker_factory.for_path("docs/a.md")) == 2


def test_same_path_in_flight_is_not_restarted(loader, worker_factory):
    loader.load("docs/a.md")
    loader.load("docs/a.md")
    assert len(worker_factory.workers) == 1
    assert not worker_factory.last.token.is_cancelled()


def test_cancel_produces_no_state_change(loader, worker_factory):
    loader.load("docs/a.md")
    worker = worker_factory.last
    states = _record_states(loader)

    loader.cancel()
    worker.finish("# A")

    assert worker.token.is_cancelled()
    assert states == []
    assert loader.state.status == LoadStatus.LOADING
    assert len(loader.cache) == 0


def test_shutdown_cancels_and_ignores_further_loads(fake_client, worker_factory):
    loader = ContentLoader(fake_client, worker_factory=worker_factory)
    loader.load("docs/a.md")
    worker = worker_factory.last

    loader.shutdown()
    loader.load("docs/b.md")

    assert worker.token.is_cancelled()
    assert len(worker_factory.workers) == 1


def test_shared_cache_serves_paths_across_loaders(fake_client, worker_factory):
    cache = ContentCache()
    cache.put("docs/a.md", "# A")
    loader = ContentLoader(fake_client, cache=cache, worker_factory=worker_factory)

    assert loader.load("docs/a.md").status == LoadStatus.READY
    assert worker_factory.workers == []
    assert cache.stats["hits"] == 1
    loader.shutdown()


def test_rapid_selection_ends_on_last_path(loader, worker_factory):
    paths = [f"docs/{name}.md" for name in "abcde"]
    for path in paths:
        loader.load(path)

    # 以相反顺序返回
    for worker in reversed(worker_factory.workers):
        worker.finish(f"body of {worker.path}")

    assert loader.state.path == "docs/e.md"
    assert loader.state.content == "body of docs/e.md"
    assert len(loader.cache) == 1
