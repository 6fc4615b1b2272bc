'''
Derivation engines.

Both generators start from the grammar's start symbol and keep rewriting
non-terminals with the alternative picked by a SymbolIndex. They stop when
nothing is left to expand, or when ``limit`` expansions have been made.
Non-terminals without a rule are never expanded and stay in the output, as
do non-terminals left over when the limit is reached.
'''
from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from cfgevo.codons import SymbolIndex
from cfgevo.derivation_tree import DerivationNode
from cfgevo.grammar import Grammar, NonTerminal, Rule, Symbol
from cfgevo.logging_config import setup_logger

DEFAULT_LIMIT = 1000


class Expansion(Enum):
    # Every non-terminal of the current sentence is expanded in one pass.
    LEFT_TO_RIGHT = "left-to-right"
    # Only the leftmost expandable non-terminal is expanded per step.
    LEFT_MOST = "left-most"


def select(rule: Rule, index: SymbolIndex) -> Tuple[Symbol, ...]:
    """Return the symbols of the alternative of rule chosen by index."""
    bound = len(rule.alternatives)
    choice = index.next(rule, bound)
    if not 0 <= choice < bound:
        raise IndexError(f"Symbol index returned {choice} for {rule.start}, outside [0, {bound}).")
    return rule.alternatives[choice].symbols


def _check_limit(limit: int) -> int:
    if limit < 1:
        raise ValueError(f"Expansion limit must be at least 1, got {limit}.")
    return limit


class SentenceGenerator:
    """Derives a flat list of symbols from a grammar."""

    def __init__(
        self,
        index: SymbolIndex,
        limit: int = DEFAULT_LIMIT,
        expansion: Expansion = Expansion.LEFT_TO_RIGHT,
    ):
        self.index = index
        self.limit = _check_limit(limit)
        self.expansion = expansion
        self.logger = setup_logger(__name__)

    def generate(self, grammar: Grammar) -> List[Symbol]:
        start = grammar.rule(grammar.start)
        symbols = list(select(start, self.index))
        steps = 1
        if self.expansion is Expansion.LEFT_MOST:
            symbols, steps = self._left_most(grammar, symbols, steps)
        else:
            symbols, steps = self._left_to_right(grammar, symbols, steps)

        if steps >= self.limit:
            self.logger.debug(f"Derivation stopped at the expansion limit ({self.limit})")
        return symbols

    def _left_to_right(self, grammar: Grammar, symbols: List[Symbol], steps: int):
        expanded = True
        while expanded and steps < self.limit:
            expanded = False
            result: List[Symbol] = []
            for position, symbol in enumerate(symbols):
                if steps >= self.limit:
                    result.extend(symbols[position:])
                    break
                rule = grammar.rule(symbol) if isinstance(symbol, NonTerminal) else None
                if rule is None:
                    result.append(symbol)
                else:
                    result.extend(select(rule, self.index))
                    steps += 1
                    expanded = True
            symbols = result
        return symbols, steps

    def _left_most(self, grammar: Grammar, symbols: List[Symbol], steps: int):
        while steps < self.limit:
            found = _first_expandable(grammar, symbols)
            if found is None:
                break
            position, rule = found
            symbols[position:position + 1] = select(rule, self.index)
            steps += 1
        return symbols, steps


def _first_expandable(grammar: Grammar, symbols: List[Symbol]) -> Optional[Tuple[int, Rule]]:
    for position, symbol in enumerate(symbols):
        if isinstance(symbol, NonTerminal):
            rule = grammar.rule(symbol)
            if rule is not None:
                return position, rule
    return None


class DerivationTreeGenerator:
    """Derives a derivation tree, expanding the leftmost expandable leaf each step.

    "Leftmost" is depth-first pre-order, so the leaves of the result read the
    same as the output of SentenceGenerator with Expansion.LEFT_MOST, given
    the same sequence of index decisions.
    """

    def __init__(self, index: SymbolIndex, limit: int = DEFAULT_LIMIT):
        self.index = index
        self.limit = _check_limit(limit)
        self.logger = setup_logger(__name__)

    def generate(self, grammar: Grammar) -> DerivationNode:
        root = DerivationNode(grammar.start)
        steps = 0
        while steps < self.limit:
            leaf, rule = self._first_expandable_leaf(grammar, root)
            if leaf is None:
                break
            for symbol in select(rule, self.index):
                leaf.attach(symbol)
            steps += 1

        if steps >= self.limit:
            self.logger.debug(f"Derivation tree stopped at the expansion limit ({self.limit})")
        return root

    @staticmethod
    def _first_expandable_leaf(grammar: Grammar, root: DerivationNode):
        for leaf in root.leaves():
            if isinstance(leaf.symbol, NonTerminal):
                rule = grammar.rule(leaf.symbol)
                if rule is not None:
                    return leaf, rule
        return None, None
