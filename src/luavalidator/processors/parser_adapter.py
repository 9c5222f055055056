"""Syntax checking of Lua source through luaparser.

luaparser signals a malformed chunk by raising. This adapter is the only
place that sees those exceptions: it parses the source, and on failure turns
the exception into a single ``LUA_SYNTAX`` diagnostic carrying the position
the parser reported.

The lexer and parser are built here rather than through
``luaparser.ast.parse`` so that no ANTLR console listener is attached:
errors are raised, never printed. Building the AST is skipped since only
the grammar decides whether a chunk is well formed.

Positions are read from whichever of these the exception provides, in order:
    - ``lineno``/``offset`` attributes (Python ``SyntaxError``, 1-based)
    - ``line``/``column`` attributes on the exception or its ``token``
      (0-based column)
    - a ``(line,column):`` message prefix (0-based column)
    - an ANTLR style ``line L:C`` fragment in the message (0-based column)

Example:
    >>> check_syntax("local x = 1") is None
    True
    >>> diagnostic = check_syntax("local x = (")
    >>> diagnostic.code
    'LUA_SYNTAX'
"""

from __future__ import annotations

import re

from antlr4 import CommonTokenStream, InputStream, Token
from antlr4.error.ErrorListener import ErrorListener
from antlr4.error.ErrorStrategy import BailErrorStrategy
from antlr4.error.Errors import ParseCancellationException
from luaparser.ast import SyntaxException
from luaparser.parser.LuaLexer import LuaLexer
from luaparser.parser.LuaParser import LuaParser

from luavalidator.core.diagnostics import (
    CODE_LUA_SYNTAX,
    KIND_SYNTAX,
    SEVERITY_ERROR,
    Diagnostic,
)
from luavalidator.processors.positions import clamp_position
from luavalidator.utils.logger import get_logger

logger = get_logger("luavalidator.processors.parser_adapter")

DEFAULT_SYNTAX_MESSAGE = "Syntax error"

_PREFIX_POSITION = re.compile(r"^\s*\((\d+),\s*(\d+)\)")
_ANTLR_POSITION = re.compile(r"\bline (\d+):(\d+)")

# luaparser wraps every failure as "syntax errors: <detail>"
_LUAPARSER_PREFIX = re.compile(r"^syntax errors:?\s*")
_ANTLR_LOCATION_PREFIX = re.compile(r"^line \d+:\d+:?\s*")


class _RaisingErrorListener(ErrorListener):
    """Turns the first lexer or parser error into a SyntaxException."""

    def syntaxError(self, recognizer, offendingSymbol, line, column, msg, e):
        raise SyntaxException(f"line {line}:{column}: {msg}")


def _cancellation_error(exc: ParseCancellationException) -> SyntaxException:
    # BailErrorStrategy wraps the RecognitionException without reporting it
    cause = exc.args[0] if exc.args else None
    message = getattr(cause, "message", None)
    error = SyntaxException(message if isinstance(message, str) else "")
    token = getattr(cause, "offendingToken", None)
    if token is not None:
        error.token = token
    return error


def parse_chunk(source: str) -> None:
    """Run the luaparser grammar over ``source`` without printing anything.

    Raises:
        SyntaxException: On the first lexer or parser error.
    """
    listener = _RaisingErrorListener()

    lexer = LuaLexer(InputStream(source))
    lexer.removeErrorListeners()
    lexer.addErrorListener(listener)

    token_stream = CommonTokenStream(lexer, channel=Token.DEFAULT_CHANNEL)
    parser = LuaParser(token_stream)
    parser.removeErrorListeners()
    parser.addErrorListener(listener)
    parser._errHandler = BailErrorStrategy()

    try:
        parser.start_()
    except ParseCancellationException as e:
        raise _cancellation_error(e) from e

    if parser.getNumberOfSyntaxErrors() > 0:
        raise SyntaxException("syntax errors")


def is_syntax_exception(exc: BaseException) -> bool:
    """Tell a parse failure apart from an unexpected parser crash.

    Python ``SyntaxError`` subclasses, luaparser's ``SyntaxException`` and
    exceptions raised from the ANTLR runtime count as syntax errors.
    """
    if isinstance(exc, SyntaxError):
        return True
    exc_type = type(exc)
    if "Syntax" in exc_type.__name__:
        return True
    return exc_type.__module__.split(".", 1)[0] in ("luaparser", "antlr4")


def extract_position(exc: BaseException) -> tuple[int | None, int | None]:
    """Return the 1-based (line, column) an exception reports, if any."""
    if isinstance(exc, SyntaxError):
        return exc.lineno, exc.offset

    holder = getattr(exc, "token", None) or exc
    line = getattr(holder, "line", None)
    column = getattr(holder, "column", None)
    if isinstance(line, int):
        return line, column + 1 if isinstance(column, int) else None

    message = str(exc)
    for pattern in (_PREFIX_POSITION, _ANTLR_POSITION):
        match = pattern.search(message)
        if match:
            return int(match.group(1)), int(match.group(2)) + 1

    return None, None


def syntax_message(exc: BaseException) -> str:
    """Return the parser's own message, or DEFAULT_SYNTAX_MESSAGE if it has none.

    The ``syntax errors:`` wrapper and a leading ``line L:C:`` location are
    dropped since the diagnostic carries the position itself.
    """
    message = exc.msg if isinstance(exc, SyntaxError) and exc.msg else str(exc)
    message = _LUAPARSER_PREFIX.sub("", message.strip(), count=1)
    message = _ANTLR_LOCATION_PREFIX.sub("", message, count=1).strip()
    if not message or message == "None":
        return DEFAULT_SYNTAX_MESSAGE
    return message


def syntax_diagnostic(source: str, exc: BaseException) -> Diagnostic:
    """Build the LUA_SYNTAX diagnostic for a parse failure."""
    line, column = clamp_position(source, *extract_position(exc))
    return Diagnostic(
        line=line,
        column=column,
        message=syntax_message(exc),
        kind=KIND_SYNTAX,
        severity=SEVERITY_ERROR,
        code=CODE_LUA_SYNTAX,
    )


def check_syntax(source: str) -> Diagnostic | None:
    """Parse ``source`` and report the first syntax error, if any.

    Args:
        source: Lua source code.

    Returns:
        None when the source parses, otherwise one error diagnostic.

    Raises:
        Exception: Only for failures that are not syntax errors (for example
            RecursionError on pathologically nested input). The validator's
            outer boundary converts those into a diagnostic.
    """
    try:
        parse_chunk(source)
    except Exception as e:
        if not is_syntax_exception(e):
            raise
        diagnostic = syntax_diagnostic(source, e)
        logger.debug(f"Syntax error at line {diagnostic.line}, column {diagnostic.column}: {diagnostic.message}")
        return diagnostic
    return None
