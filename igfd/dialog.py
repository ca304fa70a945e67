"""State and behaviour of the file dialog, independent of any drawing."""

from __future__ import annotations

import enum
import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from igfd import pathutils
from igfd.bookmarks import Bookmark, deserialize_bookmarks, serialize_bookmarks
from igfd.entries import (
    FileEntry,
    SortField,
    filter_entries,
    scan_directory,
    sort_entries,
)
from igfd.filters import Filter, find_filter_for_ext, parse_filters
from igfd.pathutils import PATH_SEP, parse_path_file_name, split_string

MAX_FILE_NAME_LENGTH = 1024

_WINDOWS = os.name == "nt"

SidePane = Callable[[str, Any], bool]


class DialogFlags(enum.IntFlag):
    """Options given when a dialog is opened."""

    NONE = 0
    CONFIRM_OVERWRITE = 1 << 0
    DONT_SHOW_HIDDEN_FILES = 1 << 1
    DISABLE_CREATE_DIRECTORY_BUTTON = 1 << 2
    HIDE_COLUMN_TYPE = 1 << 3
    HIDE_COLUMN_SIZE = 1 << 4
    HIDE_COLUMN_DATE = 1 << 5
    DEFAULT = 0


@dataclass
class ExtensionInfo:
    """Display settings for files of one extension."""

    color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    icon: str = ""


class FileDialog:
    """A file or directory chooser.

    Opening with a filter spec gives a file chooser; opening with no filters
    gives a directory chooser. A side pane, when given, is called with the
    current filter name and the user data and returns whether the dialog may
    be validated.
    """

    def __init__(self) -> None:
        self.key = ""
        self.title = ""
        self.modal = False
        self.file_name = ""
        self.side_pane: SidePane | None = None
        self.side_pane_width = 0.0

        self._shown = False
        self._filters_spec = ""
        self._default_file_name = ""
        self._default_ext = ""
        self._flags = DialogFlags.NONE
        self._user_datas: Any = None
        self._count_selection_max = 1

        self._filters: list[Filter] = []
        self._selected_filter = Filter()
        self._current_path = ""
        self._decomposition: list[str] = []
        self._fs_root = PATH_SEP
        self._file_list: list[FileEntry] = []
        self._filtered_list: list[FileEntry] = []
        self._selected: set[str] = set()
        self._last_selected = ""
        self._search_tag = ""
        self._sort_field = SortField.FILENAME
        self._descending = {field: False for field in SortField}
        self._extension_infos: dict[str, ExtensionInfo] = {}
        self._bookmarks: list[Bookmark] = []
        self._is_ok = False
        self._overwrite_pending = False

    # ------------------------------------------------------------------
    # opening and closing

    def _prepare(
        self,
        key: str,
        title: str,
        filters: str | None,
        count_selection_max: int,
        user_datas: Any,
        flags: DialogFlags,
        side_pane: SidePane | None,
        side_pane_width: float,
    ) -> None:
        self.key = key
        self.title = title
        self.modal = False
        self._user_datas = user_datas
        self._flags = DialogFlags(flags)
        self._count_selection_max = count_selection_max
        self.side_pane = side_pane
        self.side_pane_width = float(side_pane_width) if side_pane else 0.0
        self._is_ok = False
        self._overwrite_pending = False
        self._search_tag = ""
        self._selected.clear()
        self._parse_filters(filters)

    def _parse_filters(self, spec: str | None) -> None:
        self._filters_spec = spec or ""
        self._filters = parse_filters(spec)
        kept = next(
            (f for f in self._filters if f.name == self._selected_filter.name), None
        )
        if kept is not None:
            self._selected_filter = kept
        elif self._filters:
            self._selected_filter = self._filters[0]
        else:
            self._selected_filter = Filter()

    def _start(self, path: str) -> None:
        path = path or "."
        default = self._default_file_name
        prefix = path + PATH_SEP
        if default.startswith(prefix):
            default = default[len(prefix):]
        if default:
            self.set_default_file_name(default)
            self._selected_filter = find_filter_for_ext(
                self._filters, self._default_ext, self._selected_filter
            )
        elif self._directory_mode:
            self.set_default_file_name(".")
        self._current_path = ""
        self._decomposition = []
        self._file_list = []
        self._scan_dir(path)
        self._shown = True

    def open_dialog(
        self,
        key: str,
        title: str,
        filters: str | None,
        path: str,
        file_name: str = "",
        count_selection_max: int = 1,
        user_datas: Any = None,
        flags: DialogFlags = DialogFlags.NONE,
        side_pane: SidePane | None = None,
        side_pane_width: float = 250.0,
    ) -> None:
        """Open a dialog on ``path`` with ``file_name`` in the name field.

        Does nothing if a dialog is already opened.
        """
        if self._shown:
            return
        self._prepare(
            key, title, filters, count_selection_max, user_datas, flags,
            side_pane, side_pane_width,
        )
        self._default_ext = ""
        self.set_default_file_name(file_name)
        self._start(path)

    def open_dialog_from_path(
        self,
        key: str,
        title: str,
        filters: str | None,
        file_path_name: str,
        count_selection_max: int = 1,
        user_datas: Any = None,
        flags: DialogFlags = DialogFlags.NONE,
        side_pane: SidePane | None = None,
        side_pane_width: float = 250.0,
    ) -> None:
        """Open a dialog whose path and file name come from ``file_path_name``."""
        if self._shown:
            return
        self._prepare(
            key, title, filters, count_selection_max, user_datas, flags,
            side_pane, side_pane_width,
        )
        parts = parse_path_file_name(file_path_name)
        if parts.is_ok:
            path = parts.path
            full_name = f"{parts.name}.{parts.ext}"
            self.set_default_file_name(full_name)
            self._selected.add(full_name)
            self._default_ext = "." + parts.ext
        else:
            path = "."
            self.set_default_file_name("")
            self._default_ext = ""
        self._selected_filter = find_filter_for_ext(
            self._filters, self._default_ext, self._selected_filter
        )
        self._start(path)

    def open_modal(
        self,
        key: str,
        title: str,
        filters: str | None,
        path: str,
        file_name: str = "",
        count_selection_max: int = 1,
        user_datas: Any = None,
        flags: DialogFlags = DialogFlags.NONE,
        side_pane: SidePane | None = None,
        side_pane_width: float = 250.0,
    ) -> None:
        """Like :meth:`open_dialog`, as a modal dialog."""
        if self._shown:
            return
        self.open_dialog(
            key, title, filters, path, file_name, count_selection_max,
            user_datas, flags, side_pane, side_pane_width,
        )
        self.modal = True

    def open_modal_from_path(
        self,
        key: str,
        title: str,
        filters: str | None,
        file_path_name: str,
        count_selection_max: int = 1,
        user_datas: Any = None,
        flags: DialogFlags = DialogFlags.NONE,
        side_pane: SidePane | None = None,
        side_pane_width: float = 250.0,
    ) -> None:
        """Like :meth:`open_dialog_from_path`, as a modal dialog."""
        if self._shown:
            return
        self.open_dialog_from_path(
            key, title, filters, file_path_name, count_selection_max,
            user_datas, flags, side_pane, side_pane_width,
        )
        self.modal = True

    def close(self) -> None:
        """Close the dialog."""
        self.key = ""
        self._shown = False

    def is_opened(self, key: str | None = None) -> bool:
        """Tell whether a dialog is opened, with the given key if one is given."""
        if key is None:
            return self._shown
        return self._shown and self.key == key

    def opened_key(self) -> str:
        """Return the key of the opened dialog, or an empty string."""
        return self.key if self._shown else ""

    # ------------------------------------------------------------------
    # results

    @property
    def _directory_mode(self) -> bool:
        return not self._filters_spec

    def is_ok(self) -> bool:
        """True when the dialog was validated, False when cancelled."""
        return self._is_ok

    def selection(self) -> dict[str, str]:
        """Map each selected file name to its full path, in name order."""
        base = self.current_path()
        if _WINDOWS or self._fs_root != base:
            base += PATH_SEP
        return {name: base + name for name in sorted(self._selected)}

    def file_path_name(self) -> str:
        """Return the current path joined with the current file name."""
        result = self.current_path()
        name = self.current_file_name()
        if name:
            if _WINDOWS or self._fs_root != result:
                result += PATH_SEP
            result += name
        return result

    def current_path(self) -> str:
        """Return the current directory; in directory mode, with the chosen one."""
        path = self._current_path
        if self._directory_mode:
            chosen = self.file_name
            if chosen and chosen != ".":
                path = chosen if not path else path + PATH_SEP + chosen
        return path

    def current_file_name(self) -> str:
        """Return the name field, with its extension replaced by the filter's.

        The extension is replaced only for a simple filter without ``*``.
        Directory mode gives an empty string.
        """
        if self._directory_mode:
            return ""
        result = self.file_name
        selected = self._selected_filter
        if not selected.collection and "*" not in selected.name and result != selected.name:
            dot = result.rfind(".")
            if dot != -1:
                result = result[:dot]
            result += selected.name
        return result

    def current_filter(self) -> str:
        """Return the name of the selected filter."""
        return self._selected_filter.name

    def user_datas(self) -> Any:
        """Return the user data given when the dialog was opened."""
        return self._user_datas

    # ------------------------------------------------------------------
    # extension display settings

    def set_extension_info(
        self,
        ext: str,
        color: tuple[float, float, float, float],
        icon: str = "",
    ) -> None:
        """Set the color and icon shown for files with extension ``ext``."""
        self._extension_infos[ext] = ExtensionInfo(tuple(color), icon)

    def get_extension_info(self, ext: str) -> ExtensionInfo | None:
        """Return the settings for ``ext``, or None if there are none."""
        return self._extension_infos.get(ext)

    def clear_extension_infos(self) -> None:
        """Forget all extension settings."""
        self._extension_infos.clear()

    # ------------------------------------------------------------------
    # navigation and listing

    def set_default_file_name(self, file_name: str) -> None:
        """Put ``file_name`` in the name field."""
        self._default_file_name = file_name
        self.file_name = file_name[: MAX_FILE_NAME_LENGTH - 1]

    def set_path(self, path: str) -> None:
        """Go to ``path`` and list it; an unreadable path falls back to ``.``."""
        self._current_path = path
        self._file_list = []
        self._decomposition = []
        if self._directory_mode:
            self.set_default_file_name(".")
        self._scan_dir(path)

    def _set_current_dir(self, path: str) -> None:
        if not os.path.isdir(path):
            path = "."
        real = os.path.realpath(path)
        if len(real) > 1 and real.endswith(PATH_SEP):
            real = real[:-1]
        self._current_path = real
        self._decomposition = split_string(real, PATH_SEP, False)
        if _WINDOWS:
            if self._decomposition:
                self._fs_root = self._decomposition[0]
        else:
            self._decomposition.insert(0, PATH_SEP)

    def _scan_dir(self, path: str) -> None:
        if not self._decomposition:
            self._set_current_dir(path)
        if not self._decomposition:
            return
        scan_path = self._current_path
        if _WINDOWS and scan_path == self._fs_root:
            scan_path += PATH_SEP
        self._file_list = scan_directory(
            scan_path,
            self._selected_filter,
            self._directory_mode,
            bool(self._flags & DialogFlags.DONT_SHOW_HIDDEN_FILES),
        )
        self._sort(self._sort_field, False)

    def _sort(self, field: SortField, can_change_order: bool) -> None:
        if field is not SortField.NONE:
            if can_change_order and self._sort_field is field:
                self._descending[field] = not self._descending[field]
            self._file_list = sort_entries(
                self._file_list, field, self._descending[field]
            )
            self._sort_field = field
        self._apply_filtering()

    def _apply_filtering(self) -> None:
        self._filtered_list = filter_entries(
            self._file_list, self._search_tag, self._directory_mode
        )

    def select_filter(self, name: str) -> None:
        """Select the filter called ``name`` and list the directory again.

        Raises ValueError if no filter has that name.
        """
        for infos in self._filters:
            if infos.name == name:
                self._selected_filter = infos
                self.set_path(self._current_path)
                return
        raise ValueError(f"no filter named {name!r}")

    def set_search(self, tag: str) -> None:
        """Show only entries whose name contains ``tag``; empty shows all."""
        self._search_tag = tag
        self._apply_filtering()

    def sort_by(self, field: SortField) -> None:
        """Sort by ``field``; sorting twice by the same field reverses the order."""
        self._sort(field, True)

    def visible_entries(self) -> list[FileEntry]:
        """Return the entries currently shown, in display order."""
        return list(self._filtered_list)

    # ------------------------------------------------------------------
    # selection

    def _update_name_field(self) -> None:
        if len(self._selected) == 1:
            self.file_name = next(iter(self._selected))[: MAX_FILE_NAME_LENGTH - 1]
        else:
            self.file_name = f"{len(self._selected)} files Selected"

    def _add_to_selection(self, name: str, set_last: bool) -> None:
        self._selected.add(name)
        self._update_name_field()
        if set_last:
            self._last_selected = name

    def _remove_from_selection(self, name: str) -> None:
        self._selected.discard(name)
        self._update_name_field()

    def _toggle(self, name: str) -> None:
        if name in self._selected:
            self._remove_from_selection(name)
        else:
            self._add_to_selection(name, True)

    def select_file_name(
        self, entry: FileEntry, ctrl: bool = False, shift: bool = False
    ) -> None:
        """Select ``entry`` as a click would, with Ctrl or Shift held if given.

        Ctrl toggles the entry within the selection limit; Shift selects the
        range from the last selected entry; a plain click selects only it.
        """
        limit = self._count_selection_max
        if ctrl:
            if limit == 0 or len(self._selected) < limit:
                self._toggle(entry.file_name)
        elif shift:
            if limit != 1:
                self._select_range(entry.file_name, limit)
        else:
            self._selected.clear()
            self.file_name = ""
            self._add_to_selection(entry.file_name, True)

    def _select_range(self, target: str, limit: int) -> None:
        self._selected.clear()
        started = False
        saved = ""
        for infos in self._file_list:
            name = infos.file_name
            if self._search_tag and self._search_tag not in name:
                continue
            if name == self._last_selected:
                started = True
                self._add_to_selection(self._last_selected, False)
            elif started:
                if limit == 0 or len(self._selected) < limit:
                    self._add_to_selection(name, False)
                else:
                    if saved:
                        self._last_selected = saved
                    break
            if name == target:
                if not started:
                    saved = self._last_selected
                    self._last_selected = target
                    target = saved
                    started = True
                    self._add_to_selection(self._last_selected, False)
                else:
                    if saved:
                        self._last_selected = saved
                    break

    def select_directory(self, entry: FileEntry) -> bool:
        """Enter the directory ``entry`` (``..`` goes up); True if the path changed."""
        if entry.file_name == "..":
            if len(self._decomposition) <= 1:
                return False
            self.set_path(self.compose_path(len(self._decomposition) - 2))
            return True
        if not _WINDOWS and self._fs_root == self._current_path:
            new_path = self._current_path + entry.file_name
        else:
            new_path = self._current_path + PATH_SEP + entry.file_name
        if not pathutils.is_directory(new_path):
            return False
        self.set_path(new_path)
        return True

    def compose_path(self, index: int) -> str:
        """Return the path made of the current path's components up to ``index``.

        Raises IndexError if ``index`` is not a component position.
        """
        if not 0 <= index < len(self._decomposition):
            raise IndexError(f"path component {index} out of range")
        result = ""
        for part in reversed(self._decomposition[: index + 1]):
            if not result:
                result = part
            elif not _WINDOWS and part == self._fs_root:
                result = part + result
            else:
                result = part + PATH_SEP + result
        if not _WINDOWS and not result.startswith(PATH_SEP):
            result = PATH_SEP + result
        return result

    def create_directory(self, name: str) -> bool:
        """Create ``name`` in the current directory and enter it.

        Returns False for an empty name or an existing directory; raises
        OSError if the directory cannot be made.
        """
        if not name:
            return False
        new_path = self._current_path + PATH_SEP + name
        created = pathutils.create_directory(new_path)
        if created:
            self.set_path(new_path)
        return created

    # ------------------------------------------------------------------
    # validation

    def validate(self, ok: bool) -> bool:
        """Press OK (``ok`` True) or Cancel; True when the dialog is finished.

        OK is refused while the name field is empty or the side pane says no.
        With CONFIRM_OVERWRITE and an existing file, OK waits for
        :meth:`confirm_overwrite`. Raises RuntimeError if no dialog is opened.
        """
        if not self._shown:
            raise RuntimeError("no dialog is opened")
        if not ok:
            self._is_ok = False
            return True
        if not self.file_name:
            return False
        if self.side_pane is not None and not self.side_pane(
            self.current_filter(), self._user_datas
        ):
            return False
        self._is_ok = True
        if not self._flags & DialogFlags.CONFIRM_OVERWRITE:
            return True
        if not os.path.exists(self.file_path_name()):
            return True
        self._is_ok = False
        self._overwrite_pending = True
        return False

    def confirm_overwrite(self, confirmed: bool) -> bool:
        """Answer the overwrite question; True when the dialog is finished with OK.

        Raises RuntimeError when no overwrite question is pending.
        """
        if not self._overwrite_pending:
            raise RuntimeError("no overwrite confirmation is pending")
        self._overwrite_pending = False
        self._is_ok = confirmed
        return confirmed

    # ------------------------------------------------------------------
    # bookmarks

    def add_bookmark(self) -> Bookmark | None:
        """Bookmark the current directory under its last component's name."""
        if not self._decomposition:
            return None
        bookmark = Bookmark(self._decomposition[-1], self._current_path)
        self._bookmarks.append(bookmark)
        return bookmark

    def serialize_bookmarks(self) -> str:
        """Return the bookmarks in their text form."""
        return serialize_bookmarks(self._bookmarks)

    def deserialize_bookmarks(self, text: str) -> None:
        """Replace the bookmarks with those read from ``text``; empty text is ignored."""
        if text:
            self._bookmarks = deserialize_bookmarks(text)