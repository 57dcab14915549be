"""Generic search over untyped JSON trees.

The platform does not expose a stable schema: the entities we need (posts,
accounts, cursors) sit at arbitrary depths, tagged by a discriminator field
rather than by a fixed path. These helpers find them by key/value instead of
by position.
"""

from __future__ import annotations

from typing import Any, Union

JSONValue = Union[dict[str, Any], list[Any], str, int, float, bool, None]


def _stringify(value: Any) -> str | None:
    """String form of a scalar field, JSON spelling for booleans and null."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        # 1.0 and 1e20 compare equal to "1" and "100000000000000000000".
        return str(int(value))
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def find_by_filter(data: JSONValue, key: str, value: str) -> list[dict[str, Any]]:
    """Return every mapping in `data` whose field `key` stringifies to `value`.

    - Lists are searched element by element, in order.
    - A matching mapping is added before its own children, and its children
      are still searched: the platform nests same-shaped entities inside each
      other (e.g. a quoted post inside a post).
    - Scalars and `None` contribute nothing.

    The result follows document traversal order, which for parsed JSON is
    the order of the source text.
    """

    matches: list[dict[str, Any]] = []
    _collect(data, key, value, matches)
    return matches


def _collect(data: JSONValue, key: str, value: str, out: list[dict[str, Any]]) -> None:
    if isinstance(data, list):
        for item in data:
            _collect(item, key, value, out)
    elif isinstance(data, dict):
        if key in data and _stringify(data[key]) == value:
            out.append(data)
        for child in data.values():
            _collect(child, key, value, out)


def find_first_by_filter(data: JSONValue, key: str, value: str) -> dict[str, Any] | None:
    """First match of `find_by_filter` in traversal order, or `None`."""

    matches = find_by_filter(data, key, value)
    return matches[0] if matches else None


def get_path(data: JSONValue, *path: str) -> Any:
    """Walk nested mappings along `path`; `None` as soon as a step is missing."""

    current: Any = data
    for step in path:
        if not isinstance(current, dict):
            return None
        current = current.get(step)
    return current
