import json
from typing import Any

import pytest
import requests

SEARCH_URL = "https://rest.opensubtitles.org/search/query-matrix/sublanguageid-eng"


def make_response(status_code: int = 200, body: Any = None, text: str | None = None) -> requests.Response:
    """Builds a real requests.Response so raise_for_status() and json() behave as in production."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = {200: "OK", 404: "Not Found", 503: "Service Unavailable"}.get(status_code, "")
    response.url = SEARCH_URL
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    payload = text if text is not None else json.dumps(body if body is not None else [])
    response._content = payload.encode("utf-8")
    return response


def make_item(index: int, **overrides: Any) -> dict[str, Any]:
    """One element of a search response, as the API returns it."""
    item = {
        "IDSubtitleFile": str(1000 + index),
        "SubFileName": f"release.{index}.srt",
        "MovieReleaseName": f"Release.{index}.720p",
        "MovieName": "The Matrix",
        "SubDownloadLink": f"https://dl.opensubtitles.org/en/download/file/{1000 + index}.gz",
        "SubLanguageID": "eng",
        "IDMovieImdb": "133093",
    }
    item.update(overrides)
    return item


@pytest.fixture
def no_config(tmp_path):
    """Path to a config file that does not exist."""
    return str(tmp_path / "missing.yaml")
