"""
Utility modules for file handling and logging.

This package provides:
- Path utilities for locating and checking Lua source files
- Logging infrastructure with file and console output

Examples:
    >>> from luavalidator.utils import collect_lua_files, setup_logger
    >>> files = collect_lua_files(Path("scripts"))
    >>> logger = setup_logger("luavalidator")
"""

from .path_utils import (
    LUA_EXTENSIONS,
    ensure_directory,
    is_lua_file,
    is_readable,
    collect_lua_files,
)

from .logger import (
    setup_logger,
    get_logger,
    add_file_handler,
    add_console_handler,
    VALID_LOG_LEVELS,
)

__all__ = [
    "LUA_EXTENSIONS",
    "ensure_directory",
    "is_lua_file",
    "is_readable",
    "collect_lua_files",
    "setup_logger",
    "get_logger",
    "add_file_handler",
    "add_console_handler",
    "VALID_LOG_LEVELS",
]
