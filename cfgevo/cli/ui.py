#!/usr/bin/env python3
"""
Plain ASCII output helpers for the CLI: section headers, aligned tables and
a coloured rendering of derivation trees.
"""
from __future__ import annotations

from typing import Iterable, List, Sequence

from cfgevo.cli.style import styler
from cfgevo.derivation_tree import DerivationNode
from cfgevo.grammar import Grammar


def section(title: str, ch: str = "-") -> str:
    return styler.header(title, ch=ch)


def _to_str_grid(rows: Iterable[Sequence[object]]) -> List[List[str]]:
    return [["" if x is None else str(x) for x in r] for r in rows]


def table(columns: Sequence[str], rows: Iterable[Sequence[object]]) -> str:
    """Build an aligned ASCII table with a dashed separator after the header."""
    cols = [str(c) for c in columns]
    data = _to_str_grid(rows)

    widths = [len(c) for c in cols]
    for r in data:
        for i, cell in enumerate(r):
            if i < len(widths):
                widths[i] = max(widths[i], len(cell))
            else:
                widths.append(len(cell))

    def fmt_row(items: Sequence[str]) -> str:
        return " | ".join(val.ljust(widths[i]) for i, val in enumerate(items)).rstrip()

    head = fmt_row(cols)
    sep = styler.apply(styler.palette.dim, "-+-".join("-" * w for w in widths))
    body = "\n".join(fmt_row(r) for r in data)
    return f"{head}\n{sep}\n{body}" if body else f"{head}\n{sep}"


def rule_table(grammar: Grammar) -> str:
    rows = [
        [i, str(rule.start), len(rule.alternatives)]
        for i, rule in enumerate(grammar.rules)
    ]
    return table(["#", "Rule", "Alternatives"], rows)


def tree_string(root: DerivationNode) -> str:
    lines = []
    stack = [(root, 0)]
    while stack:
        node, indent = stack.pop()
        lines.append("  " * indent + "- " + styler.symbol(node.symbol))
        stack.extend((child, indent + 1) for child in reversed(node.children))
    return "\n".join(lines)
