"""Directory bookmarks of the file dialog and their text form.

Bookmarks are stored as one string of ``name##path`` pairs joined by ``##``.
``##`` is reserved by the widget toolkit, so a name typed into an input
field cannot contain it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from igfd.pathutils import split_string

_SEPARATOR = "##"


@dataclass
class Bookmark:
    """A named shortcut to a directory."""

    name: str
    path: str


def serialize_bookmarks(bookmarks: Iterable[Bookmark]) -> str:
    """Return the bookmarks as ``name##path`` pairs joined by ``##``."""
    return _SEPARATOR.join(
        f"{bookmark.name}{_SEPARATOR}{bookmark.path}" for bookmark in bookmarks
    )


def deserialize_bookmarks(text: str) -> list[Bookmark]:
    """Read bookmarks back from the text made by :func:`serialize_bookmarks`.

    The text is split on ``#`` with empty pieces dropped, and the pieces are
    taken two by two as name and path. A trailing name without a path, as a
    hand-edited file may leave, is ignored. Empty text gives no bookmarks.
    """
    tokens = split_string(text, "#", False)
    names = tokens[0::2]
    paths = tokens[1::2]
    return [Bookmark(name, path) for name, path in zip(names, paths)]