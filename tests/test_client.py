from unittest.mock import patch

import pytest
import requests
from conftest import make_item, make_response

from opensub.client import SearchClient, build_search_url, get_with_retries
from opensub.errors import HttpStatusError, ResponseFormatError, TransportError, UrlBuildError
from opensub.types import SearchResult

GET = "opensub.client.requests.Session.get"


def test_client_sends_user_agent_header():
    with SearchClient() as client:
        assert client.session.headers["X-User-Agent"] == "TemporaryUserAgent"


def test_client_requires_user_agent():
    with pytest.raises(ValueError):
        SearchClient(user_agent="")


def test_search_parses_results_in_server_order():
    items = [make_item(3), make_item(1), make_item(2, Extra={"nested": True})]
    with patch(GET, return_value=make_response(body=items)) as mock_get, SearchClient(timeout=10) as client:
        results = client.search("query-matrix/sublanguageid-eng")

    mock_get.assert_called_once_with(
        "https://rest.opensubtitles.org/search/query-matrix/sublanguageid-eng", timeout=10
    )
    assert [r.file_id for r in results] == ["1003", "1001", "1002"]
    assert results[0] == SearchResult(
        file_id="1003",
        file_name="release.3.srt",
        release_name="Release.3.720p",
        movie_name="The Matrix",
        download_link="https://dl.opensubtitles.org/en/download/file/1003.gz",
    )


def test_search_empty_array():
    with patch(GET, return_value=make_response(body=[])), SearchClient() as client:
        assert client.search("query-nothing") == []


def test_search_http_status_error():
    with patch(GET, return_value=make_response(503)), SearchClient() as client:
        with pytest.raises(HttpStatusError) as exc_info:
            client.search("query-matrix")

    assert exc_info.value.status_code == 503
    assert "503" in str(exc_info.value)


def test_search_transport_error():
    with patch(GET, side_effect=requests.exceptions.ConnectionError("refused")), SearchClient() as client:
        with pytest.raises(TransportError, match="refused"):
            client.search("query-matrix")


def test_search_timeout_is_transport_error():
    with patch(GET, side_effect=requests.exceptions.Timeout("timed out")), SearchClient() as client:
        with pytest.raises(TransportError):
            client.search("query-matrix")


@pytest.mark.parametrize(
    "text",
    [
        '{"error": "x"}',
        "<html>Service down</html>",
        '["not an object"]',
        '[{"IDSubtitleFile": "1"}]',
    ],
)
def test_search_malformed_body(text):
    """
    Tests that a body that is not an array of subtitle records is a format error, not zero results.
    """
    with patch(GET, return_value=make_response(text=text)), SearchClient() as client:
        with pytest.raises(ResponseFormatError):
            client.search("query-matrix")


def test_null_fields_become_empty_strings():
    with patch(GET, return_value=make_response(body=[make_item(1, MovieReleaseName=None)])):
        with SearchClient() as client:
            results = client.search("query-matrix")

    assert results[0].release_name == ""


def test_build_search_url_empty_path():
    assert build_search_url("") == "https://rest.opensubtitles.org/search/"


@pytest.mark.parametrize("path", ["query-a b", "query-a?b", "query-a#b", "query-a\nb"])
def test_build_search_url_rejects_unencoded_path(path):
    with pytest.raises(UrlBuildError):
        build_search_url(path)


def test_build_search_url_rejects_bad_base():
    with pytest.raises(UrlBuildError):
        build_search_url("query-matrix", base_url="ftp:/nowhere")


def test_get_with_retries_retries_server_errors():
    session = requests.Session()
    responses = [make_response(503), make_response(body=[])]
    with patch(GET, side_effect=responses) as mock_get, patch("opensub.client.time.sleep") as mock_sleep:
        response = get_with_retries(session, "https://example.org", retries=3, backoff_factor=1)

    assert response.status_code == 200
    assert mock_get.call_count == 2
    mock_sleep.assert_called_once_with(1)


def test_get_with_retries_does_not_retry_client_errors():
    session = requests.Session()
    with patch(GET, return_value=make_response(404)) as mock_get, patch("opensub.client.time.sleep"):
        with pytest.raises(requests.exceptions.HTTPError):
            get_with_retries(session, "https://example.org", retries=3)

    assert mock_get.call_count == 1


def test_get_with_retries_gives_up():
    session = requests.Session()
    error = requests.exceptions.ConnectionError("down")
    with patch(GET, side_effect=error) as mock_get, patch("opensub.client.time.sleep") as mock_sleep:
        with pytest.raises(requests.exceptions.ConnectionError):
            get_with_retries(session, "https://example.org", retries=3, backoff_factor=2)

    assert mock_get.call_count == 3
    assert [c.args[0] for c in mock_sleep.call_args_list] == [2, 4]
