"""Parsing and selection of file dialog filters.

A filter spec is a comma separated list of simple filters such as
``".*,.cpp,.h"``, optionally mixed with named collections written as
``"Source files{.cpp,.h,.hpp}"``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Filter:
    """A filter: a simple extension, or a named collection of extensions."""

    name: str = ""
    collection: frozenset[str] = field(default_factory=frozenset)

    def is_empty(self) -> bool:
        """True when the filter has neither a name nor a collection."""
        return not self.name and not self.collection

    def matches(self, ext: str) -> bool:
        """True when ``ext`` is the filter itself or one of its collection."""
        return self.name == ext or ext in self.collection


def _split_collection(text: str) -> frozenset[str]:
    return frozenset(token for token in text.split(",") if token)


def parse_filters(spec: str | None) -> list[Filter]:
    """Parse a filter spec into its filters, in the order they appear.

    ``None`` or an empty spec means directory mode and gives no filters.
    Raises ValueError when a collection's opening brace is never closed.
    """
    if not spec:
        return []

    filters: list[Filter] = []
    start = 0
    pos = 0
    length = len(spec)

    while pos < length:
        brace = spec.find("{", pos)
        comma = spec.find(",", pos)
        candidates = [i for i in (brace, comma) if i != -1]
        if not candidates:
            break
        pos = min(candidates)

        name = spec[start:pos]
        if spec[pos] == "{":
            close = spec.find("}", pos + 1)
            if close == -1:
                raise ValueError(
                    f"unclosed filter collection in {spec!r} at position {pos}"
                )
            infos = Filter(name, _split_collection(spec[pos + 1:close]))
            pos = close + 1
        else:
            infos = Filter(name)
            pos += 1

        start = pos
        if not infos.is_empty():
            filters.append(infos)

    token = spec[start:]
    if token:
        filters.append(Filter(token))

    return filters


def find_filter_for_ext(
    filters: Iterable[Filter], ext: str, current: Filter | None = None
) -> Filter:
    """Choose the filter that covers ``ext``.

    Every filter is checked in turn, by its own name and then by its
    collection; the last one that matches wins. With no match the
    ``current`` filter is kept, and if that is empty the first filter is
    taken. With no filters at all, ``current`` is returned unchanged.
    """
    filters = list(filters)
    selected = current if current is not None else Filter()
    if not filters:
        return selected

    if ext:
        for infos in filters:
            if ext == infos.name or ext in infos.collection:
                selected = infos

    if selected.is_empty():
        selected = filters[0]
    return selected