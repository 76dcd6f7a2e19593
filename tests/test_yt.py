"""Tests for YouTubeSearch: search pages, continuation pages and direct video resolution."""

import pytest

from fakes import (
    FakeFetcher,
    FlakyFetcher,
    continuation_block,
    initial_data,
    item_section,
    reel_renderer,
    results_page,
    video_block,
    watch_page,
)

from ytsearch.errors import DecodeError, FetchError, InvalidVideoLink, MissingRequiredSection, PayloadNotFound
from ytsearch.utils import search_url, watch_url
from ytsearch.yt import PLACEHOLDER_TITLE, YouTubeSearch, search_with_retries

SEARCH_API = "https://www.youtube.com/youtubei/v1/search"


def search_client(query: str, blocks) -> YouTubeSearch:
    return YouTubeSearch(FakeFetcher({search_url(query): results_page(initial_data(blocks))}))


def test_search_returns_every_video_in_order() -> None:
    ids = ["id1", "id2", "id3"]
    response = search_client("lofi", [item_section(*[video_block(i) for i in ids])]).search("lofi")
    assert [r.id for r in response.results] == ids
    assert response.continuation_token == ""
    assert response.has_more is False


def test_search_with_continuation_marker() -> None:
    blocks = [item_section(video_block("a"), {"reelItemRenderer": reel_renderer("s")}), continuation_block("NEXT")]
    response = search_client("lofi", blocks).search("lofi")
    assert [r.id for r in response.results] == ["a", "s"]
    assert response.continuation_token == "NEXT"
    assert response.has_more is True


def test_zero_results_can_still_have_more() -> None:
    response = search_client("q", [item_section({"adSlotRenderer": {}}), continuation_block("T")]).search("q")
    assert response.results == []
    assert response.has_more is True


def test_query_is_trimmed_and_blank_query_is_empty() -> None:
    client = search_client("lofi", [video_block("a")])
    assert [r.id for r in client.search("  lofi ").results] == ["a"]
    assert client.search("   ").results == []


def test_search_fetch_error_propagates() -> None:
    with pytest.raises(FetchError):
        YouTubeSearch(FakeFetcher()).search("anything")


def test_search_without_payload() -> None:
    client = YouTubeSearch(FakeFetcher({search_url("q"): "<html>consent</html>"}))
    with pytest.raises(PayloadNotFound):
        client.search("q")


def test_search_with_broken_payload() -> None:
    client = YouTubeSearch(FakeFetcher({search_url("q"): results_page("{broken: }")}))
    with pytest.raises(DecodeError):
        client.search("q")


def test_search_without_results_section() -> None:
    client = YouTubeSearch(FakeFetcher({search_url("q"): results_page({"contents": {}})}))
    with pytest.raises(MissingRequiredSection):
        client.search("q")


def test_continuation_issues_follow_up_request() -> None:
    page = {
        "onResponseReceivedCommands": [{
            "appendContinuationItemsAction": {"continuationItems": [
                item_section(video_block("p2a"), video_block("p2b")),
                continuation_block("PAGE3"),
            ]}
        }]
    }
    fetcher = FakeFetcher(posts=[page])
    response = YouTubeSearch(fetcher).search("lofi", "PAGE2")

    assert [r.id for r in response.results] == ["p2a", "p2b"]
    assert response.continuation_token == "PAGE3"
    assert fetcher.requests == [SEARCH_API]
    assert fetcher.posted[0]["continuation"] == "PAGE2"
    assert fetcher.posted[0]["context"]["client"]["clientName"] == "WEB"


def test_last_page_has_no_more() -> None:
    page = {"onResponseReceivedCommands": [{"appendContinuationItemsAction": {"continuationItems": [video_block("z")]}}]}
    response = YouTubeSearch(FakeFetcher(posts=[page])).search("lofi", "LAST")
    assert [r.id for r in response.results] == ["z"]
    assert response.has_more is False


def test_continuation_response_without_items() -> None:
    with pytest.raises(MissingRequiredSection):
        YouTubeSearch(FakeFetcher(posts=[{"responseContext": {}}])).search("lofi", "TOKEN")


def test_empty_token_behaves_like_first_page() -> None:
    client = search_client("lofi", [video_block("a")])
    assert client.search("lofi", "") == client.search("lofi")


PLAYER = {
    "videoDetails": {
        "videoId": "dQw4w9WgXcQ",
        "title": "Never Gonna Give You Up",
        "author": "Rick Astley",
        "lengthSeconds": "213",
        "channelId": "UCuAXFkgsw1L7xaCfnd5JJOw",
        "isLiveContent": False,
    }
}


def test_resolve_direct_video() -> None:
    fetcher = FakeFetcher({watch_url("dQw4w9WgXcQ"): watch_page(PLAYER)})
    response = YouTubeSearch(fetcher).resolve_direct_video("dQw4w9WgXcQ")

    assert len(response.results) == 1
    assert response.has_more is False
    result = response.results[0]
    assert result.title == "Never Gonna Give You Up"
    assert result.channel_name == "Rick Astley"
    assert result.duration_sec == 213
    assert result.duration == "3:33"
    assert result.channel_url == "https://www.youtube.com/channel/UCuAXFkgsw1L7xaCfnd5JJOw"
    assert result.is_short is False
    assert result.is_live is False
    assert fetcher.requests == [watch_url("dQw4w9WgXcQ")]


def test_metadata_id_supersedes_requested_id() -> None:
    fetcher = FakeFetcher({watch_url("requested"): watch_page({"videoDetails": {"videoId": "canonical"}})})
    result = YouTubeSearch(fetcher).resolve_direct_video("requested").results[0]
    assert result.id == "canonical"
    assert result.url == "https://www.youtube.com/watch?v=canonical"
    assert result.thumbnail == "https://i.ytimg.com/vi/canonical/hqdefault.jpg"


def test_resolve_defaults_missing_fields() -> None:
    player = {"videoDetails": {"lengthSeconds": "abc", "isLiveContent": True}}
    fetcher = FakeFetcher({watch_url("vid"): watch_page(player)})
    result = YouTubeSearch(fetcher).resolve_direct_video("vid").results[0]
    assert result.id == "vid"
    assert result.title == ""
    assert result.duration_sec == 0
    assert result.duration == ""
    assert result.channel_url == ""
    assert result.is_live is True


@pytest.mark.parametrize(
    "pages",
    [
        {},
        {watch_url("vid"): "<html>no player here</html>"},
        {watch_url("vid"): watch_page("{broken: json}")},
    ],
)
def test_resolve_falls_back_to_placeholder(pages) -> None:
    response = YouTubeSearch(FakeFetcher(pages)).resolve_direct_video("vid")
    assert len(response.results) == 1
    assert response.has_more is False
    result = response.results[0]
    assert result.title == PLACEHOLDER_TITLE
    assert result.id == "vid"
    assert "vid" in result.url
    assert "vid" in result.thumbnail
    assert result.duration == ""
    assert result.duration_sec == 0


def test_lookup_routes_links_to_direct_resolution() -> None:
    fetcher = FakeFetcher({watch_url("dQw4w9WgXcQ"): watch_page(PLAYER)})
    response = YouTubeSearch(fetcher).lookup("https://youtu.be/dQw4w9WgXcQ")
    assert response.results[0].title == "Never Gonna Give You Up"


def test_lookup_routes_text_to_search() -> None:
    response = search_client("metallica live", [video_block("m1")]).lookup(" metallica live ")
    assert [r.id for r in response.results] == ["m1"]


def test_lookup_blank_input() -> None:
    assert YouTubeSearch(FakeFetcher()).lookup("  ").results == []


def test_lookup_link_without_id() -> None:
    with pytest.raises(InvalidVideoLink):
        YouTubeSearch(FakeFetcher()).lookup("https://www.youtube.com/feed/trending")


def test_search_with_retries_recovers() -> None:
    fetcher = FlakyFetcher(2, {search_url("q"): results_page(initial_data([video_block("a")]))})
    response = search_with_retries(YouTubeSearch(fetcher), "q", delay=0)
    assert [r.id for r in response.results] == ["a"]
    assert len(fetcher.requests) == 3


def test_search_with_retries_gives_up() -> None:
    fetcher = FlakyFetcher(5, {})
    with pytest.raises(FetchError):
        search_with_retries(YouTubeSearch(fetcher), "q", max_attempts=3, delay=0)
    assert len(fetcher.requests) == 3


def test_invalid_link_is_not_retried() -> None:
    fetcher = FakeFetcher()
    with pytest.raises(InvalidVideoLink):
        search_with_retries(YouTubeSearch(fetcher), "https://www.youtube.com/feed/trending", delay=0)
    assert fetcher.requests == []
