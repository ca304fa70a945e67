import re

import pytest

from igfd.entries import (
    EntryType,
    FileEntry,
    SortField,
    complete_entry,
    filter_entries,
    scan_directory,
    sort_entries,
)
from igfd.filters import Filter


def _names(entries):
    return [e.file_name for e in entries]


@pytest.fixture
def mixed_entries():
    return [
        FileEntry("c", EntryType.FILE, ext="", file_size=5, modif_date="2021/01/03 10:00"),
        FileEntry(".", EntryType.DIRECTORY),
        FileEntry("b.txt", EntryType.FILE, ext=".txt", file_size=50, modif_date="2021/01/01 10:00"),
        FileEntry(".git", EntryType.DIRECTORY),
        FileEntry("A", EntryType.DIRECTORY, modif_date="2021/01/02 10:00"),
        FileEntry("..", EntryType.DIRECTORY),
    ]


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "a.cpp").write_bytes(b"0123456789")
    (tmp_path / "b.h").write_text("x")
    (tmp_path / "c.txt").write_text("x")
    (tmp_path / ".hidden").write_text("x")
    (tmp_path / "sub").mkdir()
    return tmp_path


def test_sort_by_name_ascending(mixed_entries):
    result = sort_entries(mixed_entries, SortField.FILENAME)
    assert _names(result) == ["..", ".git", ".", "A", "b.txt", "c"]


def test_sort_by_name_descending_is_reverse(mixed_entries):
    asc = sort_entries(mixed_entries, SortField.FILENAME)
    desc = sort_entries(mixed_entries, SortField.FILENAME, descending=True)
    assert _names(desc) == list(reversed(_names(asc)))


def test_sort_name_ignores_case():
    entries = [FileEntry("beta", EntryType.FILE), FileEntry("Alpha", EntryType.FILE)]
    assert _names(sort_entries(entries, SortField.FILENAME)) == ["Alpha", "beta"]


def test_sort_none_keeps_order(mixed_entries):
    assert sort_entries(mixed_entries, SortField.NONE) == mixed_entries


def test_sort_by_type_puts_directories_first():
    entries = [
        FileEntry("x.txt", EntryType.FILE, ext=".txt"),
        FileEntry("d", EntryType.DIRECTORY),
        FileEntry("y.cpp", EntryType.FILE, ext=".cpp"),
    ]
    result = sort_entries(entries, SortField.TYPE)
    assert _names(result) == ["d", "y.cpp", "x.txt"]


def test_sort_by_size(mixed_entries):
    files = [e for e in mixed_entries if e.type is EntryType.FILE]
    result = sort_entries(files, SortField.SIZE)
    sizes = [e.file_size for e in result]
    assert sizes == sorted(sizes)
    desc = sort_entries(files, SortField.SIZE, descending=True)
    assert [e.file_size for e in desc] == sorted(sizes, reverse=True)


def test_sort_by_date_directories_first(mixed_entries):
    result = sort_entries(mixed_entries, SortField.DATE)
    dirs = [e for e in result if e.type is EntryType.DIRECTORY]
    assert result[: len(dirs)] == dirs
    file_dates = [e.modif_date for e in result[len(dirs):]]
    assert file_dates == sorted(file_dates)


def test_filter_entries_search_case_insensitive(mixed_entries):
    assert _names(filter_entries(mixed_entries, "b.t", False)) == ["b.txt"]
    assert _names(filter_entries(mixed_entries, "a", False)) == ["A"]


def test_filter_entries_directory_mode(mixed_entries):
    result = filter_entries(mixed_entries, "", True)
    assert all(e.type is EntryType.DIRECTORY for e in result)
    assert len(result) == 4


def test_filter_entries_without_tag_keeps_all(mixed_entries):
    assert filter_entries(mixed_entries, "", False) == mixed_entries


def test_scan_with_simple_filter(tree):
    names = _names(scan_directory(str(tree), Filter(".cpp"), False))
    assert "a.cpp" in names
    assert "sub" in names
    assert ".." in names
    assert "." not in names
    assert "b.h" not in names
    assert "c.txt" not in names


def test_scan_with_collection_filter(tree):
    flt = Filter("Source", frozenset({".cpp", ".h"}))
    names = _names(scan_directory(str(tree), flt, False))
    assert {"a.cpp", "b.h"} <= set(names)
    assert "c.txt" not in names


def test_scan_with_wildcard_keeps_all_files(tree):
    names = _names(scan_directory(str(tree), Filter(".*"), False))
    assert {"a.cpp", "b.h", "c.txt", ".hidden", "sub"} <= set(names)


def test_scan_directory_mode_includes_dot(tree):
    names = _names(scan_directory(str(tree), None, True))
    assert "." in names and ".." in names


def test_scan_hide_hidden(tree):
    names = _names(scan_directory(str(tree), Filter(".*"), False, hide_hidden=True))
    assert ".hidden" not in names
    assert ".." in names
    dir_names = _names(scan_directory(str(tree), None, True, hide_hidden=True))
    assert "." in dir_names
    assert ".hidden" not in dir_names


def test_scan_sets_types_and_extensions(tree):
    entries = {e.file_name: e for e in scan_directory(str(tree), Filter(".*"), False)}
    assert entries["sub"].type is EntryType.DIRECTORY
    assert entries["a.cpp"].type is EntryType.FILE
    assert entries["a.cpp"].ext == ".cpp"
    assert entries["a.cpp"].file_path == str(tree)
    assert entries["a.cpp"].file_size == 10


def test_scan_missing_directory(tmp_path):
    assert scan_directory(str(tmp_path / "missing"), None, True) == []


def test_complete_entry_file(tree):
    entry = complete_entry(FileEntry("a.cpp", EntryType.FILE, file_path=str(tree)))
    assert entry.file_size == 10
    assert entry.formatted_file_size == "10 o"
    assert re.fullmatch(r"\d{4}/\d{2}/\d{2} \d{2}:\d{2}", entry.modif_date)


def test_complete_entry_directory_has_no_size(tree):
    entry = complete_entry(FileEntry("sub", EntryType.DIRECTORY, file_path=str(tree)))
    assert entry.file_size == 0
    assert entry.formatted_file_size == ""
    assert re.fullmatch(r"\d{4}/\d{2}/\d{2} \d{2}:\d{2}", entry.modif_date)


def test_complete_entry_skips_parent(tree):
    entry = complete_entry(FileEntry("..", EntryType.DIRECTORY, file_path=str(tree)))
    assert entry.modif_date == ""


def test_search_name_is_lower():
    assert FileEntry("ReadMe.MD").search_name == "readme.md"