"""Object path parsing helpers.

This module centralizes how upload paths are split into folder,
base name, and extension so router and middleware agree on them.
"""

from __future__ import annotations

from core.constants import EXTENSION_SEPARATOR, PATH_SEPARATOR


def parent_folder_name(file_path: str) -> str:
    """Return the folder segment immediately preceding the file name.

    Args:
        file_path: Object path such as ``articles/2024/post.md``.

    Returns:
        The immediate parent folder, or ``""`` for objects at the bucket root.
    """
    parent_path = file_path.rpartition(PATH_SEPARATOR)[0]
    return parent_path.rpartition(PATH_SEPARATOR)[2]


def base_name(file_path: str) -> str:
    """Return the final path segment of an object path."""
    return file_path.rpartition(PATH_SEPARATOR)[2]


def file_extension(file_path: str) -> str:
    """Return the text after the final dot of the base name.

    Args:
        file_path: Object path.

    Returns:
        Extension without the dot, or ``""`` when the name has none.
    """
    head, separator, tail = base_name(file_path).rpartition(EXTENSION_SEPARATOR)
    if not separator:
        return ""
    return tail


def file_stem(file_path: str) -> str:
    """Return the base name with its final extension removed."""
    name = base_name(file_path)
    head, separator, _ = name.rpartition(EXTENSION_SEPARATOR)
    if not separator:
        return name
    return head
