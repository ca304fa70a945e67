# igfd

`igfd` is a file dialog that does no drawing. It holds the state a file or directory chooser needs. Your UI code reads that state and changes it through method calls. The package handles:

- filter strings, including named collections such as `Source{.cpp,.h},.md`
- directory scanning, where only the entries covered by the selected filter are listed
- sorting by name, type, size or date, in either direction
- searching by name
- selecting one file, or several with ctrl-click and shift-click
- breadcrumb path components
- creating directories
- asking before an existing file is overwritten
- bookmarks

The package uses only the standard library.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Choosing a file

```python
from igfd.dialog import FileDialog, DialogFlags

dialog = FileDialog()
dialog.open_dialog(
    "open", "Choose File", "Source files{.py,.pyi},.md,.*", ".", "",
    count_selection_max=0,
)

for entry in dialog.visible_entries():
    print(entry.type, entry.file_name, entry.formatted_file_size, entry.modif_date)

# The user clicks a file:
entries = dialog.visible_entries()
dialog.select_file_name(entries[0], ctrl=False, shift=False)

if dialog.validate(True):
    if dialog.is_ok():
        print(dialog.file_path_name())
        print(dialog.selection())  # {file name: full path}
    dialog.close()
```

### Opening

`open_dialog(key, title, filters, path, file_name, ...)` opens the dialog on a directory. `open_dialog_from_path(key, title, filters, file_path_name, ...)` takes the directory and the file name from a single path. The selected filter is then the one that covers the file's extension. `open_modal` and `open_modal_from_path` do the same, and also set `dialog.modal`.

All four accept these options:

- `count_selection_max`: the number of files that can be selected. `0` means no limit. The default is 1.
- `user_datas`: any value. `user_datas()` returns it.
- `flags`: a `DialogFlags` value.
- `side_pane` and `side_pane_width`: a callable that is called with the current filter name and the user data. If it returns `False`, OK is refused.

While a dialog is open, further calls to the open methods do nothing. To check the state, use `is_opened(key)` and `opened_key()`. `close()` closes the dialog.

### Directory mode

To choose a directory instead of a file, pass `None` as the filters. Only directories are listed. `current_path()` then includes the directory the user selected, and `current_file_name()` is empty.

### Navigation, search and sorting

- `set_path(path)` goes to a directory and lists it. A path that does not exist falls back to `.`.
- `select_directory(entry)` enters a listed directory. Passing the `..` entry goes up one level.
- `compose_path(index)` builds a path from the current path's components, up to the one at `index`. This is the path a breadcrumb button would lead to.
- `create_directory(name)` creates a directory inside the current one and enters it.
- `select_filter(name)` selects a filter by name and lists the directory again.
- `set_search(tag)` shows only the entries whose name contains `tag`. The search matches the lower-case name or the name as written.
- `sort_by(SortField.SIZE)` sorts by a column. Sorting by the same column again reverses the order.

### Extensions, colours and icons

To set display settings for an extension, call `set_extension_info(".py", (1.0, 1.0, 0.0, 0.9), "[PY]")`. `get_extension_info(".py")` returns the `ExtensionInfo`, or `None` if none is set. `clear_extension_infos()` forgets all settings.

### File name and filter

`current_file_name()` returns the name field. When the selected filter is a simple extension without `*`, that extension replaces the extension in the name. `file_path_name()` joins the current path and this name.

### Confirming an overwrite

Open the dialog with `DialogFlags.CONFIRM_OVERWRITE`. When the chosen file already exists, `validate(True)` returns `False`. Ask the user, then pass the answer to `confirm_overwrite(...)`. It returns `True` when the user confirmed.

`validate` raises `RuntimeError` if no dialog is open. `confirm_overwrite` raises `RuntimeError` if no question is pending.

### Bookmarks

- `add_bookmark()` bookmarks the current directory.
- `serialize_bookmarks()` returns all bookmarks as one string, which you can store.
- `deserialize_bookmarks(text)` replaces the bookmarks with those read from such a string.

## Other modules

- `igfd.filters`: `Filter`, `parse_filters` and `find_filter_for_ext`.
- `igfd.entries`: `FileEntry`, `EntryType`, `SortField`, `scan_directory`, `sort_entries`, `filter_entries` and `complete_entry`.
- `igfd.pathutils`: `parse_path_file_name`, `format_file_size` and `split_string`, plus `is_directory`, `create_directory` and `drives_list`. `drives_list` returns the drive letters on Windows and an empty list elsewhere.
- `igfd.bookmarks`: `Bookmark`, `serialize_bookmarks` and `deserialize_bookmarks`. The text format is `name##path##name##path`.

## What it does not do

- The package draws nothing and handles no keyboard or mouse input. Your UI code renders the entries and calls the methods above.
- It has no command-line program.
- `FileDialog` does not offer a list of drives. On Windows, call `pathutils.drives_list()` yourself.
- Bookmarks are kept in memory only. Saving them to a file and loading them back is up to your code.