"""
Colours for the cfgevo CLI.

Terminals and non-terminals get their own colour wherever sentences, rules or
trees are printed; status tags ([partial], [error]) and section headers use
the accent colours. Colour is off when NO_COLOR is set or stdout is not a TTY.
"""
from __future__ import annotations

import os
import shutil
import sys
from dataclasses import dataclass
from typing import Iterable

import colorama

from cfgevo.grammar import NonTerminal, Symbol

colorama.init()

HEADER_WIDTH = (20, 80)


def is_color_enabled() -> bool:
    if os.getenv("NO_COLOR"):
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


@dataclass(frozen=True)
class Palette:
    accent: str = colorama.Fore.CYAN + colorama.Style.BRIGHT
    success: str = colorama.Fore.GREEN + colorama.Style.BRIGHT
    error: str = colorama.Fore.RED + colorama.Style.BRIGHT
    dim: str = colorama.Style.DIM
    terminal: str = colorama.Fore.GREEN
    nonterminal: str = colorama.Fore.MAGENTA
    reset: str = colorama.Style.RESET_ALL


class Styler:
    def __init__(self, palette: Palette = Palette(), enabled: bool | None = None) -> None:
        self.palette = palette
        self.enabled = is_color_enabled() if enabled is None else enabled

    def apply(self, color_code: str, text: str) -> str:
        if not (self.enabled and color_code):
            return text
        return f"{color_code}{text}{self.palette.reset}"

    def tag(self, name: str, kind: str = "accent") -> str:
        """Bracketed status word, e.g. ``[error]``; kind names a palette colour."""
        color = getattr(self.palette, kind, self.palette.accent)
        return self.apply(self.palette.dim, "[") + self.apply(color, name) + self.apply(self.palette.dim, "]")

    def symbol(self, symbol: Symbol) -> str:
        """A grammar symbol in its BNF form (``<name>`` or an escaped terminal)."""
        if isinstance(symbol, NonTerminal):
            return self.apply(self.palette.nonterminal, str(symbol))
        return self.apply(self.palette.terminal, str(symbol))

    def sentence(self, symbols: Iterable[Symbol]) -> str:
        # Same text as codec.to_string, coloured per symbol kind.
        parts = []
        for s in symbols:
            if isinstance(s, NonTerminal):
                parts.append(self.apply(self.palette.nonterminal, str(s)))
            else:
                parts.append(self.apply(self.palette.terminal, s.value))
        return "".join(parts)

    def header(self, title: str, ch: str = "-") -> str:
        low, high = HEADER_WIDTH
        width = min(max(shutil.get_terminal_size(fallback=(80, 24)).columns, low), high)
        return self.apply(self.palette.accent, f" {title.strip()} ") + "\n" + self.apply(self.palette.dim, ch * width)


styler = Styler()
