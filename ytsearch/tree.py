"""
Total, non-raising accessors for the decoded ytInitialData tree.

The tree is whatever ``json.loads`` produced: dicts, lists and scalars.
``None`` is the "absent" result; an explicit JSON null reads as absent too.
"""
from typing import Any, Iterable, List, Sequence, Union

Key = Union[str, int]


def _index(key: Key):
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str) and key.isdecimal():
        return int(key)
    return None


def deep_get(node: Any, *keys: Key) -> Any:
    """
    Follow ``keys`` from ``node``.

    Mappings are indexed by key, lists by integer-formatted keys that are in
    range. Any other step (scalar node, bad index, missing key, null value)
    returns None.
    """
    current = node
    for key in keys:
        if isinstance(current, dict):
            if not isinstance(key, str):
                return None
            current = current.get(key)
        elif isinstance(current, list):
            idx = _index(key)
            if idx is None or idx < 0 or idx >= len(current):
                return None
            current = current[idx]
        else:
            return None

        if current is None:
            return None

    return current


def as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def get_text(node: Any, *keys: Key) -> str:
    """Walk like deep_get, then unwrap a string or a {"text"|"simpleText": str} node."""
    value = deep_get(node, *keys)
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        text = value.get("text")
        if isinstance(text, str):
            return text
        simple_text = value.get("simpleText")
        if isinstance(simple_text, str):
            return simple_text
    return ""


def first_text(node: Any, *paths: Sequence[Key]) -> str:
    # First non-empty text in path order wins
    for path in paths:
        text = get_text(node, *path)
        if text:
            return text
    return ""


def iter_list(node: Any, *keys: Key) -> List[Any]:
    value = deep_get(node, *keys)
    return value if isinstance(value, list) else []


def any_path(items: Iterable[Any], *keys: Key) -> bool:
    return any(deep_get(item, *keys) is not None for item in items)
