"""
Source acquisition tests
HTTP is stubbed with httpx.MockTransport; async calls run under asyncio.run
"""

import asyncio
import json

import httpx
import pytest

from apps.taxonomy.models import IdentifierEntry, PlatformImageRef, UnicodeLiteral
from apps.taxonomy.sources import (
    SourceFetcher,
    load_identifier_file,
    load_reference_file,
    parse_identifier_map,
)
from core.config import get_config
from core.exceptions import FetchError, SourceFormatError

EMOJI_JSON = {
    "+1": "https://github.githubassets.com/images/icons/emoji/unicode/1f44d.png?v8",
    "octocat": "https://github.githubassets.com/images/icons/emoji/octocat.png?v8",
}
REFERENCE_TEXT = "@@people-&-body\n@hand-fingers-closed\n1F44D\tthumbs up\n"


@pytest.fixture
def requests_seen():
    return []


@pytest.fixture
def fetcher(requests_seen):
    config = get_config()

    def handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        url = str(request.url)
        if url == config.github_emojis_url:
            return httpx.Response(200, json=EMOJI_JSON)
        if url == config.unicode_emoji_list_url:
            return httpx.Response(200, text=REFERENCE_TEXT)
        return httpx.Response(404, text="not found")

    return SourceFetcher(transport=httpx.MockTransport(handler))


class TestSourceFetcher:
    def test_fetch_json(self, fetcher):
        data = asyncio.run(fetcher.fetch_json(get_config().github_emojis_url))

        assert data == EMOJI_JSON

    def test_fetch_text(self, fetcher):
        text = asyncio.run(fetcher.fetch_text(get_config().unicode_emoji_list_url))

        assert text == REFERENCE_TEXT

    def test_custom_headers_sent(self, fetcher, requests_seen):
        asyncio.run(
            fetcher.fetch_json(
                get_config().github_emojis_url, headers={"User-Agent": "tester"}
            )
        )

        assert requests_seen[0].headers["User-Agent"] == "tester"

    def test_non_200_is_fatal(self, fetcher):
        with pytest.raises(FetchError) as exc_info:
            asyncio.run(fetcher.fetch_text("https://example.com/missing"))

        assert exc_info.value.status_code == 404
        assert exc_info.value.context["url"] == "https://example.com/missing"

    def test_transport_error_is_fatal(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        fetcher = SourceFetcher(transport=httpx.MockTransport(handler))

        with pytest.raises(FetchError) as exc_info:
            asyncio.run(fetcher.fetch_text("https://example.com/list.txt"))

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.cause, httpx.ConnectError)

    def test_invalid_json_is_fatal(self):
        fetcher = SourceFetcher(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, text="{"))
        )

        with pytest.raises(FetchError):
            asyncio.run(fetcher.fetch_json("https://example.com/emojis"))

    def test_fetch_sources_fetches_both(self, fetcher, requests_seen):
        identifier_map, reference_text = asyncio.run(fetcher.fetch_sources())

        assert identifier_map == EMOJI_JSON
        assert reference_text == REFERENCE_TEXT
        assert len(requests_seen) == 2

    def test_fetch_sources_identifies_client(self, fetcher, requests_seen):
        asyncio.run(fetcher.fetch_sources())

        github_request = next(
            r for r in requests_seen if str(r.url) == get_config().github_emojis_url
        )
        assert github_request.headers["User-Agent"] == get_config().user_agent

    def test_fetch_sources_fails_when_either_fails(self):
        config = get_config()

        def handler(request):
            if str(request.url) == config.github_emojis_url:
                return httpx.Response(403, text="rate limited")
            return httpx.Response(200, text=REFERENCE_TEXT)

        fetcher = SourceFetcher(transport=httpx.MockTransport(handler))

        with pytest.raises(FetchError) as exc_info:
            asyncio.run(fetcher.fetch_sources())

        assert exc_info.value.status_code == 403


class TestParseIdentifierMap:
    def test_decodes_in_source_order(self):
        entries = parse_identifier_map(EMOJI_JSON)

        assert entries == [
            IdentifierEntry("+1", UnicodeLiteral(chr(0x1F44D))),
            IdentifierEntry(
                "octocat", PlatformImageRef("octocat", EMOJI_JSON["octocat"])
            ),
        ]

    def test_rejects_non_object(self):
        with pytest.raises(SourceFormatError):
            parse_identifier_map(["+1"])

    def test_rejects_non_string_locator(self):
        with pytest.raises(SourceFormatError):
            parse_identifier_map({"+1": 42})

    def test_rejects_undecodable_locator(self):
        with pytest.raises(SourceFormatError) as exc_info:
            parse_identifier_map({"bad": "https://x/emoji/unicode/zz.png"})

        assert isinstance(exc_info.value.cause, ValueError)


class TestLocalFiles:
    def test_load_identifier_file(self, tmp_path):
        path = tmp_path / "emojis.json"
        path.write_text(json.dumps(EMOJI_JSON), encoding="utf-8")

        assert load_identifier_file(path) == EMOJI_JSON

    def test_load_identifier_file_invalid_json(self, tmp_path):
        path = tmp_path / "emojis.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SourceFormatError):
            load_identifier_file(path)

    def test_load_reference_file(self, tmp_path):
        path = tmp_path / "full-emoji-list.txt"
        path.write_text(REFERENCE_TEXT, encoding="utf-8")

        assert load_reference_file(path) == REFERENCE_TEXT

    def test_load_identifier_file_not_utf8(self, tmp_path):
        path = tmp_path / "emojis.json"
        path.write_bytes(b'{"a": "\xff"}')

        with pytest.raises(SourceFormatError) as exc_info:
            load_identifier_file(path)

        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    def test_load_reference_file_not_utf8(self, tmp_path):
        path = tmp_path / "full-emoji-list.txt"
        path.write_bytes(b"@@flags\n\xff\xfe\n")

        with pytest.raises(SourceFormatError) as exc_info:
            load_reference_file(path)

        assert isinstance(exc_info.value.cause, UnicodeDecodeError)
