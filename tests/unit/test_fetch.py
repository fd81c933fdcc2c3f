import pytest
import requests

from sitemap_crawler.errors import FetchError, UnsupportedContentError
from sitemap_crawler.fetch import FetchResult, PageFetcher
from sitemap_crawler.links import Link

URL = "https://example.com/"


def _response(status_code=200, content_type="text/html; charset=utf-8", body=b""):
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = URL
    if content_type is not None:
        resp.headers["Content-Type"] = content_type
    resp._content = body
    resp._content_consumed = True
    return resp


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


def _fetcher(session, **kwargs):
    fetcher = PageFetcher(**kwargs)
    fetcher._local.session = session
    fetcher._sessions.append(session)
    return fetcher


def test_fetch_returns_status_type_and_body():
    session = FakeSession(_response(body=b"<a href='/x'>x</a>"))
    fetcher = _fetcher(session, timeout_s=3.0)

    result = fetcher.fetch(URL)

    assert result == FetchResult(URL, 200, "text/html; charset=utf-8", b"<a href='/x'>x</a>")
    assert session.calls[0][1]["timeout"] == 3.0


def test_get_links_parses_html():
    session = FakeSession(_response(body=b'<p><a href="/about">About  us</a></p>'))

    assert _fetcher(session).get_links(URL) == [Link(href="/about", text="About us")]


def test_get_links_rejects_non_2xx():
    session = FakeSession(_response(status_code=500, body=b"<a href='/x'>x</a>"))

    with pytest.raises(FetchError) as exc_info:
        _fetcher(session).get_links(URL)

    assert exc_info.value.status_code == 500
    assert not isinstance(exc_info.value, UnsupportedContentError)


@pytest.mark.parametrize("content_type", ["image/png", "application/json", "", None])
def test_get_links_rejects_non_html(content_type):
    session = FakeSession(_response(content_type=content_type, body=b"\x89PNG"))

    with pytest.raises(UnsupportedContentError):
        _fetcher(session).get_links(URL)


def test_network_error_becomes_fetch_error():
    session = FakeSession(error=requests.Timeout("read timed out"))

    with pytest.raises(FetchError) as exc_info:
        _fetcher(session).fetch(URL)

    assert exc_info.value.status_code is None
    assert "timed out" in str(exc_info.value)


def test_session_is_created_per_thread_with_user_agent():
    fetcher = PageFetcher(user_agent="TestAgent/2.0")

    session = fetcher.session

    assert session is fetcher.session
    assert session.headers["User-Agent"] == "TestAgent/2.0"
    fetcher.close()


def test_close_closes_sessions():
    session = FakeSession(_response())
    with _fetcher(session):
        pass

    assert session.closed
