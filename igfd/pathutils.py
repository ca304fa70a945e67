"""Path and string helpers used by the file dialog."""

from __future__ import annotations

import os
import string
from dataclasses import dataclass

PATH_SEP = os.sep

_WINDOWS = os.name == "nt"


@dataclass
class PathParts:
    """A path split into its directory, base name and extension."""

    path: str = ""
    name: str = ""
    ext: str = ""
    is_ok: bool = False


def split_string(text: str, delimiter: str, push_empty: bool) -> list[str]:
    """Split ``text`` on ``delimiter``, keeping empty tokens only if asked."""
    if not text:
        return []
    return [token for token in text.split(delimiter) if token or push_empty]


def parse_path_file_name(path_file_name: str) -> PathParts:
    """Split a file path name into directory, name and extension.

    Both slash kinds are treated as separators. The extension is whatever
    follows the last dot, and is given without the dot.
    """
    parts = PathParts()
    if not path_file_name:
        return parts

    pfn = path_file_name.replace("\\", PATH_SEP).replace("/", PATH_SEP)

    last_slash = pfn.rfind(PATH_SEP)
    if last_slash != -1:
        parts.name = pfn[last_slash + 1:]
        parts.path = pfn[:last_slash]
        parts.is_ok = True

    last_point = pfn.rfind(".")
    if last_point != -1:
        if not parts.is_ok:
            parts.name = pfn
            parts.is_ok = True
        parts.ext = pfn[last_point + 1:]
        parts.name = parts.name.replace("." + parts.ext, "")

    return parts


def format_file_size(size: int) -> str:
    """Format a byte count in o, Ko, Mo or Go; zero gives an empty string."""
    if size == 0:
        return ""
    lo = 1024.0
    ko = lo * 1024.0
    mo = ko * 1024.0
    value = float(size)
    if value < lo:
        return f"{value:.0f} o"
    if value < ko:
        return f"{value / lo:.2f} Ko"
    if value < mo:
        return f"{value / ko:.2f} Mo"
    return f"{value / mo:.2f} Go"


def lower_for_search(file_name: str) -> str:
    """Return the lower-case form of a file name used for searching."""
    return file_name.lower()


def is_directory(name: str) -> bool:
    """Tell whether ``name`` names an existing directory."""
    return bool(name) and os.path.isdir(name)


def create_directory(name: str) -> bool:
    """Create the directory ``name`` with any missing parents.

    Returns True when a directory was created, False when the name is empty
    or the directory already exists. Raises OSError if creation fails.
    """
    if not name or is_directory(name):
        return False
    os.makedirs(name, exist_ok=True)
    return True


def drives_list() -> list[str]:
    """List the logical drives (such as ``C:``); empty outside Windows."""
    if not _WINDOWS:
        return []
    return [
        f"{letter}:"
        for letter in string.ascii_uppercase
        if os.path.isdir(f"{letter}:\\")
    ]