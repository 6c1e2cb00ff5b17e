from __future__ import annotations

import json

import httpx
import pytest

from archive_harvester.engine import FetchError, Fetcher, TimestampedURL, build_sources
from archive_harvester.engine.sources import CommonCrawlSource, WaybackSource


def _fetcher(make_settings, handler, **overrides) -> Fetcher:
    return Fetcher(make_settings(**overrides), transport=httpx.MockTransport(handler))


def test_wayback_query_url(make_settings) -> None:
    source = WaybackSource(_fetcher(make_settings, lambda r: httpx.Response(200)), "http://cdx.test/cdx")
    assert source.build_url("a.com", False) == "http://cdx.test/cdx?url=*.a.com/*&output=json&collapse=urlkey"
    assert source.build_url("a.com", True) == "http://cdx.test/cdx?url=a.com/*&output=json&collapse=urlkey"


def test_wayback_fetch_skips_header_and_bad_rows(make_settings) -> None:
    rows = [
        ["urlkey", "timestamp", "original", "mimetype", "statuscode", "digest", "length"],
        ["com,a)/x", "20180101000000", "http://a.com/x", "text/html", "200", "ABC", "10"],
        ["com,a)/short", "20180101000000"],
        "not-a-row",
        ["com,a)/y", "20190101000000", "http://a.com/y?id=1", "text/html", "200", "DEF", "12"],
    ]
    captured: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(str(request.url))
        return httpx.Response(200, text=json.dumps(rows))

    fetcher = _fetcher(make_settings, handler)
    source = WaybackSource(fetcher, "http://cdx.test/cdx")
    records = source.fetch("a.com", False)
    fetcher.close()

    assert records == [
        TimestampedURL(url="http://a.com/x", date="20180101000000"),
        TimestampedURL(url="http://a.com/y?id=1", date="20190101000000"),
    ]
    assert len(captured) == 1
    assert "a.com" in captured[0]


@pytest.mark.parametrize("body", ["<html>busy</html>", '{"error": "x"}'])
def test_wayback_rejects_malformed_top_level(body: str) -> None:
    with pytest.raises(ValueError):
        WaybackSource.parse(body)


def test_wayback_empty_body_has_no_records() -> None:
    assert WaybackSource.parse("") == []
    assert WaybackSource.parse("[]") == []


def test_commoncrawl_query_url(make_settings) -> None:
    source = CommonCrawlSource(
        _fetcher(make_settings, lambda r: httpx.Response(200)), "http://index.test", "CC-MAIN-2018-22"
    )
    assert (
        source.build_url("a.com", False)
        == "http://index.test/CC-MAIN-2018-22-index?url=*.a.com/*&output=json"
    )
    assert source.build_url("a.com", True) == "http://index.test/CC-MAIN-2018-22-index?url=a.com/*&output=json"


def test_commoncrawl_streams_ndjson(make_settings) -> None:
    body = "\n".join(
        [
            json.dumps({"urlkey": "com,a)/x", "timestamp": "20180520000000", "url": "http://a.com/x"}),
            "{broken",
            json.dumps({"error": "No Captures found for: a.com/*"}),
            json.dumps(["not", "an", "object"]),
            json.dumps({"url": "http://a.com/y", "timestamp": 20180521}),
        ]
    )
    fetcher = _fetcher(make_settings, lambda r: httpx.Response(200, text=body))
    source = CommonCrawlSource(fetcher, "http://index.test", "CC-MAIN-2018-22")
    records = source.fetch("a.com", False)
    fetcher.close()

    assert records == [
        TimestampedURL(url="http://a.com/x", date="20180520000000"),
        TimestampedURL(url="http://a.com/y", date=""),
    ]


def test_fetcher_wraps_transport_errors(make_settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = _fetcher(make_settings, handler)
    with pytest.raises(FetchError):
        fetcher.get("http://cdx.test/cdx")
    with pytest.raises(FetchError):
        list(fetcher.iter_lines("http://index.test/x"))
    fetcher.close()


def test_fetcher_sends_configured_user_agent(make_settings) -> None:
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["ua"] = request.headers.get("User-Agent", "")
        return httpx.Response(503, text="[]")

    with _fetcher(make_settings, handler, user_agent="harvester-test/1.0") as fetcher:
        response = fetcher.get("http://cdx.test/cdx")

    assert seen["ua"] == "harvester-test/1.0"
    assert response.status_code == 503
    assert response.text == "[]"


def test_build_sources_follows_settings(make_settings) -> None:
    settings = make_settings(sources=["commoncrawl", "wayback"], commoncrawl_index="CC-MAIN-2024-10")
    with Fetcher(settings) as fetcher:
        sources = build_sources(settings, fetcher)
    assert [source.name for source in sources] == ["commoncrawl", "wayback"]
    assert sources[0].index == "CC-MAIN-2024-10"
