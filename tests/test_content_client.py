from unittest.mock import MagicMock

import pytest
import requests

from docdesk.api.client import ContentClient
from docdesk.api.exceptions import (
    APIError, ConnectionError as APIConnectionError, FetchCancelledError, NotFoundError,
    ServerError, TimeoutError as APITimeoutError, create_api_error
)
from docdesk.utils.async_worker import CancellationToken, OperationCancelled

RAW = "https://raw.example.com/acme/repo/main"
REPO = "https://github.com/acme/repo/blob/main"


def _response(status=200, chunks=(b"# Title\n",), content_type="text/plain"):
    response = MagicMock()
    response.ok = 200 <= status < 400
    response.status_code = status
    response.headers = {"content-type": content_type}
    response.encoding = None
    response.iter_content.return_value = iter(chunks)
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return ContentClient(RAW, REPO, session=session)


def test_builds_raw_and_source_urls(client):
    assert client.raw_url("docs/README.md") == f"{RAW}/docs/README.md"
    assert client.source_url("docs/README.md") == f"{REPO}/docs/README.md"


def test_fetch_text_streams_body(client, session):
    session.get.return_value = _response(chunks=(b"# Ti", b"tle\n", "中文".encode("utf-8")))

    text = client.fetch_text("docs/README.md", CancellationToken())

    assert text == "# Title\n中文"
    session.get.assert_called_once_with(
        f"{RAW}/docs/README.md", stream=True, timeout=client.timeout
    )


def test_not_found_maps_to_http_status_message(client, session):
    response = _response(status=404)
    session.get.return_value = response

    with pytest.raises(NotFoundError) as exc_info:
        client.fetch_text("docs/missing.md", CancellationToken())

    assert str(exc_info.value) == "HTTP 404"
    assert exc_info.value.status_code == 404
    response.close.assert_called_once()


def test_server_error_status(client, session):
    session.get.return_value = _response(status=500)
    with pytest.raises(ServerError, match="HTTP 500"):
        client.fetch_text("docs/a.md", CancellationToken())


def test_already_cancelled_token_skips_request(client, session):
    token = CancellationToken()
    token.cancel()

    with pytest.raises(FetchCancelledError):
        client.fetch_text("docs/a.md", token)

    session.get.assert_not_called()


def test_cancel_mid_stream_closes_response(client, session):
    token = CancellationToken()

    def chunks():
        yield b"first"
        token.cancel()
        yield b"second"

    response = _response()
    response.iter_content.return_value = chunks()
    session.get.return_value = response

    with pytest.raises(FetchCancelledError) as exc_info:
        client.fetch_text("docs/a.md", token)

    assert isinstance(exc_info.value, OperationCancelled)
    response.close.assert_called_once()


def test_connection_error_maps_to_network_error(client, session):
    session.get.side_effect = requests.exceptions.ConnectionError("refused")
    with pytest.raises(APIConnectionError) as exc_info:
        client.fetch_text("docs/a.md", CancellationToken())
    assert str(exc_info.value) == "Failed to fetch"


def test_read_timeout_maps_to_timeout_error(client, session):
    session.get.side_effect = requests.exceptions.ReadTimeout("slow")
    with pytest.raises(APITimeoutError):
        client.fetch_text("docs/a.md", CancellationToken())


def test_transport_error_after_cancel_is_reported_as_cancelled(client, session):
    token = CancellationToken()

    def get(*_args, **_kwargs):
        token.cancel()
        raise requests.exceptions.ConnectionError("aborted")

    session.get.side_effect = get
    with pytest.raises(FetchCancelledError):
        client.fetch_text("docs/a.md", token)


def test_declared_charset_is_respected(client, session):
    response = _response(chunks=("café".encode("latin-1"),), content_type="text/plain; charset=ISO-8859-1")
    response.encoding = "ISO-8859-1"
    session.get.return_value = response

    assert client.fetch_text("docs/a.md", CancellationToken()) == "café"


def test_closed_client_refuses_requests(client, session):
    client.close()
    client.close()
    session.close.assert_called_once()
    with pytest.raises(APIError):
        client.fetch_text("docs/a.md", CancellationToken())


def test_create_api_error_defaults():
    assert isinstance(create_api_error(404), NotFoundError)
    assert isinstance(create_api_error(502), ServerError)
    assert str(create_api_error(418)) == "HTTP 418"
