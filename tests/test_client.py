# tests/test_client.py
"""
Client façade and HTTP transport, exercised through ``httpx.MockTransport``.
No network access is needed.
"""

import io

import httpx
import pytest
from PIL import Image

from furextract.core.config import Settings
from furextract.core.exceptions import ScrapeError
from furextract.models.submission import AnimationContent, ImageContent
from furextract.services.transport.client import FurAffinityClient
from furextract.services.transport.http import HttpTransport

BASE = "https://www.furaffinity.net"


def _png() -> bytes:
    buf = io.BytesIO()
    Image.linear_gradient("L").resize((64, 64)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def settings() -> Settings:
    return Settings(COOKIE_A="cookie-a", COOKIE_B="cookie-b", USER_AGENT="furextract tests")


def _client(settings, extractor, handler) -> FurAffinityClient:
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return FurAffinityClient(HttpTransport(settings, client=http), extractor, base_url=BASE)


# -------------------------------------------------------------------
# Request shape
# -------------------------------------------------------------------
def test_headers_and_cookies_are_sent(settings, extractor, front_page):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["cookie"] = request.headers["cookie"]
        seen["ua"] = request.headers["user-agent"]
        return httpx.Response(200, text=front_page)

    with _client(settings, extractor, handler) as client:
        assert client.latest_id() == 52981234

    assert seen["url"] == f"{BASE}/"
    assert seen["cookie"] == "a=cookie-a; b=cookie-b"
    assert seen["ua"] == "furextract tests"


def test_submission_url(settings, extractor, image_page):
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request.url.path)
        return httpx.Response(200, text=image_page)

    client = _client(settings, extractor, handler)
    sub = client.get_submission(31209021)

    assert requested == ["/view/31209021/"]
    assert sub.artist == "deadrussiansoul"


# -------------------------------------------------------------------
# Outcomes
# -------------------------------------------------------------------
def test_missing_submission_is_none(settings, extractor, load_fixture):
    page = load_fixture("submission_not_found.html")
    client = _client(settings, extractor, lambda request: httpx.Response(200, text=page))

    assert client.get_submission(34426892) is None


def test_client_error_status_is_still_parsed(settings, extractor, load_fixture):
    page = load_fixture("system_error.html")
    client = _client(settings, extractor, lambda request: httpx.Response(404, text=page))

    assert client.get_submission(1) is None


@pytest.mark.parametrize("status", [500, 502, 503])
def test_server_error_is_retryable(settings, extractor, status):
    client = _client(settings, extractor, lambda request: httpx.Response(status, text="oops"))

    with pytest.raises(ScrapeError) as exc_info:
        client.get_submission(1)

    assert exc_info.value.retry is True
    assert str(status) in exc_info.value.message


def test_transport_failure_is_retryable(settings, extractor):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(settings, extractor, handler)

    with pytest.raises(ScrapeError) as exc_info:
        client.latest_id()

    assert exc_info.value.retry is True


def test_redirect_loop_is_retryable(settings, extractor):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302, headers={"location": str(request.url)})

    client = _client(settings, extractor, handler)

    with pytest.raises(ScrapeError) as exc_info:
        client.get_submission(1)

    assert exc_info.value.retry is True


def test_undecodable_body_is_retryable(settings, extractor):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            headers={"content-encoding": "gzip"},
            stream=httpx.ByteStream(b"not gzip"),
        )

    client = _client(settings, extractor, handler)

    with pytest.raises(ScrapeError) as exc_info:
        client.latest_id()

    assert exc_info.value.retry is True


def test_redirects_are_followed(settings, extractor, front_page):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/":
            return httpx.Response(301, headers={"location": f"{BASE}/index/"})
        return httpx.Response(200, text=front_page)

    client = _client(settings, extractor, handler)

    assert client.latest_id() == 52981234


def test_parse_failure_propagates(settings, extractor):
    client = _client(settings, extractor, lambda request: httpx.Response(200, text="<html></html>"))

    with pytest.raises(ScrapeError) as exc_info:
        client.get_submission(1)

    assert exc_info.value.retry is False


def test_online_counts(settings, extractor, front_page):
    client = _client(settings, extractor, lambda request: httpx.Response(200, text=front_page))

    counts = client.online_counts()

    assert counts.total == 10366
    assert counts.other == 598


# -------------------------------------------------------------------
# Fingerprinting through the façade
# -------------------------------------------------------------------
def test_calc_image_hash_downloads_image(settings, extractor, image_page):
    png = _png()
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request.url.host)
        if request.url.host == "d.furaffinity.net":
            return httpx.Response(200, content=png)
        return httpx.Response(200, text=image_page)

    client = _client(settings, extractor, handler)
    sub = client.get_submission(31209021)
    hashed = client.calc_image_hash(sub, keep_raw=True)

    assert isinstance(sub.content, ImageContent)
    assert requested == ["www.furaffinity.net", "d.furaffinity.net"]
    assert hashed.fingerprint.content_size == len(png)
    assert hashed.fingerprint.raw_bytes == png
    assert sub.fingerprint is None


def test_calc_image_hash_skips_animation(settings, extractor, animation_page):
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200, text=animation_page)

    client = _client(settings, extractor, handler)
    sub = client.get_submission(1)
    result = client.calc_image_hash(sub)

    assert isinstance(sub.content, AnimationContent)
    assert result is sub
    assert len(requested) == 1  # no binary fetch


def test_corrupt_image_is_not_retryable(settings, extractor, image_page):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "d.furaffinity.net":
            return httpx.Response(200, content=b"<html>403</html>")
        return httpx.Response(200, text=image_page)

    client = _client(settings, extractor, handler)
    sub = client.get_submission(31209021)

    with pytest.raises(ScrapeError) as exc_info:
        client.calc_image_hash(sub)

    assert exc_info.value.retry is False


def test_image_server_error_is_retryable(settings, extractor, image_page):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "d.furaffinity.net":
            return httpx.Response(504)
        return httpx.Response(200, text=image_page)

    client = _client(settings, extractor, handler)
    sub = client.get_submission(31209021)

    with pytest.raises(ScrapeError) as exc_info:
        client.calc_image_hash(sub)

    assert exc_info.value.retry is True


# -------------------------------------------------------------------
# Settings
# -------------------------------------------------------------------
def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("FURAFFINITY_COOKIE_A", "env-a")
    monkeypatch.setenv("FURAFFINITY_SELECTOR_PROFILE", "current")
    monkeypatch.setenv("FURAFFINITY_TIMEOUT", "2.5")

    settings = Settings()

    assert settings.COOKIE_A == "env-a"
    assert settings.TIMEOUT == 2.5
    assert settings.BASE_URL == BASE


def test_create_uses_settings(settings):
    client = FurAffinityClient.create(settings)
    try:
        assert client.base_url == BASE
        assert client.extractor.profile.submission.image == "#submissionImg"
        assert isinstance(client.transport, HttpTransport)
    finally:
        client.close()
