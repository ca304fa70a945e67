"""Directory entries of the file dialog: scanning, sorting and filtering."""

from __future__ import annotations

import enum
import locale
import os
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from igfd.filters import Filter
from igfd.pathutils import PATH_SEP, format_file_size, lower_for_search

DATE_TIME_FORMAT = "%Y/%m/%d %H:%M"


class EntryType(enum.Enum):
    """Kind of a directory entry."""

    NONE = " "
    FILE = "f"
    DIRECTORY = "d"
    LINK = "l"


class SortField(enum.Enum):
    """Column the file list can be sorted by."""

    NONE = 0
    FILENAME = 1
    TYPE = 2
    SIZE = 3
    DATE = 4


@dataclass
class FileEntry:
    """One line of the file list."""

    file_name: str
    type: EntryType = EntryType.NONE
    file_path: str = ""
    ext: str = ""
    file_size: int = 0
    formatted_file_size: str = ""
    modif_date: str = ""

    @property
    def search_name(self) -> str:
        """Lower-case name used for case-insensitive searching."""
        return lower_for_search(self.file_name)

    @property
    def is_directory(self) -> bool:
        return self.type is EntryType.DIRECTORY


def complete_entry(entry: FileEntry) -> FileEntry:
    """Fill in size and modification date of ``entry`` from the file system.

    ``.`` and ``..`` are left alone, as are entries that cannot be stat'ed.
    Directories get a date but no size. The entry is returned.
    """
    if entry.file_name in (".", ".."):
        return entry
    full_path = entry.file_path + PATH_SEP + entry.file_name
    try:
        stat_result = os.stat(full_path)
    except OSError:
        return entry
    if not entry.is_directory:
        entry.file_size = stat_result.st_size
        entry.formatted_file_size = format_file_size(entry.file_size)
    entry.modif_date = time.strftime(
        DATE_TIME_FORMAT, time.localtime(stat_result.st_mtime)
    )
    return entry


def _name_key(entry: FileEntry) -> tuple:
    name = entry.file_name
    if name.startswith("."):
        # Dot names come first; a lone "." sorts after the other dot names.
        return (0, name == ".", 0, name[1:].lower())
    return (1, False, 0 if entry.is_directory else 1, name.lower())


def _directories_first(attribute: str) -> Callable[[FileEntry], tuple]:
    """Build a sort key putting directories first, then ordering by ``attribute``."""

    def key(entry: FileEntry) -> tuple:
        rank = 0 if entry.is_directory else 1
        return (rank, getattr(entry, attribute))

    return key


_SORT_KEYS = {
    SortField.FILENAME: _name_key,
    SortField.TYPE: _directories_first("ext"),
    SortField.SIZE: _directories_first("file_size"),
    SortField.DATE: _directories_first("modif_date"),
}


def sort_entries(
    entries: Iterable[FileEntry], field: SortField, descending: bool = False
) -> list[FileEntry]:
    """Return the entries sorted by ``field``.

    In ascending order directories come before files; for file names, names
    starting with a dot come first and comparison ignores case. Descending
    order is the exact reverse. ``SortField.NONE`` keeps the given order.
    """
    entries = list(entries)
    key = _SORT_KEYS.get(field)
    if key is None:
        return entries
    return sorted(entries, key=key, reverse=descending)


def _entry_type(dir_entry: os.DirEntry) -> EntryType:
    try:
        if dir_entry.is_symlink():
            return EntryType.LINK
        if dir_entry.is_dir(follow_symlinks=False):
            return EntryType.DIRECTORY
        if dir_entry.is_file(follow_symlinks=False):
            return EntryType.FILE
    except OSError:
        pass
    return EntryType.NONE


def _listing(path: str) -> list[tuple[str, EntryType]]:
    with os.scandir(path) as iterator:
        items = [(d.name, _entry_type(d)) for d in iterator]
    items.append((".", EntryType.DIRECTORY))
    items.append(("..", EntryType.DIRECTORY))
    items.sort(key=lambda item: locale.strxfrm(item[0]))
    return items


def scan_directory(
    path: str,
    selected_filter: Filter | None,
    directory_mode: bool,
    hide_hidden: bool = False,
) -> list[FileEntry]:
    """List the entries of ``path`` that the dialog should show.

    Entries come in locale collation order and include ``..`` (and ``.`` in
    directory mode). Files and links whose extension is not covered by the
    selected filter are left out, unless the filter is ``.*``. A directory
    that cannot be read gives an empty list.
    """
    try:
        listing = _listing(path)
    except OSError:
        return []

    result: list[FileEntry] = []
    for name, entry_type in listing:
        if not name or (name == "." and not directory_mode):
            continue
        if hide_hidden and name != ".." and name.startswith("."):
            if not directory_mode or name != ".":
                continue

        entry = FileEntry(file_name=name, type=entry_type, file_path=path)

        if entry_type in (EntryType.FILE, EntryType.LINK):
            dot = name.rfind(".")
            if dot != -1:
                entry.ext = name[dot:]
            if (
                not directory_mode
                and selected_filter is not None
                and not selected_filter.is_empty()
                and not selected_filter.matches(entry.ext)
                and selected_filter.name != ".*"
            ):
                continue

        result.append(complete_entry(entry))
    return result


def filter_entries(
    entries: Iterable[FileEntry], search_tag: str, directory_mode: bool
) -> list[FileEntry]:
    """Keep the entries matching ``search_tag``; only directories in directory mode."""
    shown: list[FileEntry] = []
    for entry in entries:
        if (
            search_tag
            and search_tag not in entry.search_name
            and search_tag not in entry.file_name
        ):
            continue
        if directory_mode and not entry.is_directory:
            continue
        shown.append(entry)
    return shown