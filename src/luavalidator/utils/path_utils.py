"""
Path utilities for reading Lua sources from disk.

This module provides the small set of file system helpers the validator's
file entry points need: directory creation, source file checks and
collecting Lua files from a directory tree. All functions use pathlib.Path
for cross-platform compatibility.

Examples:
    >>> from luavalidator.utils.path_utils import collect_lua_files
    >>> collect_lua_files(Path("scripts"))
    [PosixPath('scripts/main.lua'), PosixPath('scripts/util.luau')]
"""

from __future__ import annotations

import os
from pathlib import Path
LUA_EXTENSIONS: tuple[str, ...] = (".lua", ".luau")


def ensure_directory(path: Path) -> Path:
    """
    Create directory if it doesn't exist, including parents.

    Args:
        path: Directory path to create.

    Returns:
        The directory path.

    Raises:
        OSError: If the directory cannot be created.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def is_lua_file(path: Path) -> bool:
    """
    Check if path points to an existing .lua or .luau file.

    Examples:
        >>> is_lua_file(Path("script.lua"))
        True
        >>> is_lua_file(Path("script.txt"))
        False
    """
    return path.exists() and path.is_file() and path.suffix.lower() in LUA_EXTENSIONS


def is_readable(path: Path) -> bool:
    """Check if path exists and has read permissions."""
    return path.exists() and os.access(path, os.R_OK)


def collect_lua_files(path: Path) -> list[Path]:
    """
    Expand a file or directory argument into a sorted list of Lua files.

    A file is returned as-is regardless of its extension, so callers can
    validate sources saved under any name. Directories are searched
    recursively for .lua and .luau files.

    Args:
        path: File or directory to expand.

    Returns:
        List of file paths, sorted for a stable report order.

    Raises:
        FileNotFoundError: If the path does not exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"Path not found: {path}")

    if path.is_file():
        return [path]

    return sorted(p for p in path.rglob("*") if is_lua_file(p))
