from __future__ import annotations

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound


def _resolve_lexer(language: str = "bnf"):
    try:
        return get_lexer_by_name(language)
    except ClassNotFound:
        return get_lexer_by_name("text")


def highlight_bnf(source: str, enabled: bool = True) -> str:
    """Colour BNF source for a terminal; returns source unchanged when disabled."""
    if not enabled:
        return source
    return highlight(source, _resolve_lexer("bnf"), TerminalFormatter())
