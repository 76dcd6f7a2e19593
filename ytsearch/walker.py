from typing import Any, List, Optional

from .data_models import NormalizedResult, WalkStats
from .renderers import (
    parse_reel_shelf,
    parse_rich_item,
    parse_shelf,
    parse_short_renderer,
    parse_video_renderer,
)
from .settings import logger, MAX_SECTION_DEPTH
from .tree import as_str, deep_get

CONTINUATION_KEY = "continuationItemRenderer"


def walk_contents(
    blocks: Any,
    stats: Optional[WalkStats] = None,
    depth: int = 0,
) -> List[NormalizedResult]:
    """
    Collect results from a list of content blocks in document order.

    A block is tried against every variant in turn (video, short, rich item,
    shelf, reel shelf) and every hit is kept. Item sections are walked again.
    """
    if stats is None:
        stats = WalkStats()
    if not isinstance(blocks, list):
        return []

    results: List[NormalizedResult] = []

    for block in blocks:
        stats.blocks += 1
        if not isinstance(block, dict):
            stats.drop("not_a_mapping")
            continue
        if CONTINUATION_KEY in block:
            continue

        matched = False

        video = deep_get(block, "videoRenderer")
        if video is not None:
            matched = True
            _append(results, parse_video_renderer(video), stats)

        short = deep_get(block, "reelItemRenderer")
        if short is not None:
            matched = True
            _append(results, parse_short_renderer(short), stats)

        rich = deep_get(block, "richItemRenderer")
        if rich is not None:
            matched = True
            _append(results, parse_rich_item(rich), stats)

        shelf = deep_get(block, "shelfRenderer")
        if shelf is not None:
            matched = True
            _extend(results, parse_shelf(shelf, stats), stats)

        reel_shelf = deep_get(block, "reelShelfRenderer")
        if reel_shelf is not None:
            matched = True
            _extend(results, parse_reel_shelf(reel_shelf, stats), stats)

        section = deep_get(block, "itemSectionRenderer", "contents")
        if section is not None:
            matched = True
            if depth >= MAX_SECTION_DEPTH:
                logger.warning(f"Skipping item section nested {depth + 1} levels deep")
                stats.drop("depth_limit")
            else:
                results.extend(walk_contents(section, stats, depth + 1))

        if not matched:
            stats.drop("unrecognized")

    return results


def _append(results: List[NormalizedResult], parsed: Optional[NormalizedResult], stats: WalkStats):
    if parsed is None:
        stats.drop("missing_id")
    else:
        results.append(parsed)
        stats.emitted += 1


def _extend(results: List[NormalizedResult], parsed: List[NormalizedResult], stats: WalkStats):
    results.extend(parsed)
    stats.emitted += len(parsed)


def find_continuation(blocks: Any) -> str:
    """Token of the last continuation marker in ``blocks``, or "" when there is none."""
    token = ""
    if not isinstance(blocks, list):
        return token
    for block in blocks:
        value = as_str(deep_get(
            block, CONTINUATION_KEY, "continuationEndpoint", "continuationCommand", "token"
        ))
        if value:
            token = value
    return token
