'''
Immutable model of a context-free grammar.

A grammar is an ordered list of production rules. Each rule maps a
non-terminal start symbol to one or more alternative expressions, and every
expression is a non-empty sequence of terminal and non-terminal symbols.
Once built, a Grammar never changes and can be shared by any number of
derivations.
'''
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from cfgevo.tokenizer import QUOTE, escape


class GrammarValidationError(ValueError):
    pass


@dataclass(frozen=True)
class NonTerminal:
    name: str

    def __str__(self):
        return f"<{self.name}>"


@dataclass(frozen=True)
class Terminal:
    value: str

    def __post_init__(self):
        if QUOTE in self.value:
            raise GrammarValidationError(
                f"Terminal {self.value!r} holds a quote character, which BNF source cannot express."
            )

    def __str__(self):
        return escape(self.value)


Symbol = Union[Terminal, NonTerminal]

# Empty terminal, used for the empty alternative of optional and repeated parts.
EPSILON = Terminal("")


def _check_symbol(symbol) -> Symbol:
    if not isinstance(symbol, (Terminal, NonTerminal)):
        raise GrammarValidationError(f"Not a grammar symbol: {symbol!r}")
    return symbol


@dataclass(frozen=True)
class Expression:
    symbols: Tuple[Symbol, ...]

    def __post_init__(self):
        symbols = tuple(_check_symbol(s) for s in self.symbols)
        if not symbols:
            raise GrammarValidationError("The list of symbols must not be empty.")
        object.__setattr__(self, "symbols", symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    def __str__(self):
        return " ".join(str(s) for s in self.symbols)


@dataclass(frozen=True)
class Rule:
    start: NonTerminal
    alternatives: Tuple[Expression, ...]

    def __post_init__(self):
        if not isinstance(self.start, NonTerminal):
            raise GrammarValidationError(f"Rule start must be a non-terminal: {self.start!r}")
        alternatives = tuple(self.alternatives)
        if not alternatives:
            raise GrammarValidationError(
                f"The list of alternatives of rule {self.start} must not be empty."
            )
        for alternative in alternatives:
            if not isinstance(alternative, Expression):
                raise GrammarValidationError(f"Not an expression: {alternative!r}")
        object.__setattr__(self, "alternatives", alternatives)

    def __str__(self):
        return f"{self.start} ::= " + " | ".join(str(e) for e in self.alternatives)


class Grammar:
    """A context-free grammar.

    The start symbol is the start of the first rule. ``non_terminals`` and
    ``terminals`` list every distinct symbol in the order it is first seen:
    rule starts and symbols inside alternatives, rule by rule.
    """

    __slots__ = ("_rules", "_index", "_non_terminals", "_terminals", "_start")

    def __init__(self, rules: Iterable[Rule]):
        rules = tuple(rules)
        if not rules:
            raise GrammarValidationError("The given list of rules must not be empty.")
        for rule in rules:
            if not isinstance(rule, Rule):
                raise GrammarValidationError(f"Not a rule: {rule!r}")

        index: Dict[NonTerminal, Rule] = {}
        non_terminals: Dict[NonTerminal, None] = {}
        terminals: Dict[Terminal, None] = {}
        for rule in rules:
            index.setdefault(rule.start, rule)
            non_terminals.setdefault(rule.start)
            for expression in rule.alternatives:
                for symbol in expression:
                    if isinstance(symbol, NonTerminal):
                        non_terminals.setdefault(symbol)
                    else:
                        terminals.setdefault(symbol)

        self._rules = rules
        self._index = index
        self._non_terminals = tuple(non_terminals)
        self._terminals = tuple(terminals)
        self._start = rules[0].start

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    @property
    def non_terminals(self) -> Tuple[NonTerminal, ...]:
        return self._non_terminals

    @property
    def terminals(self) -> Tuple[Terminal, ...]:
        return self._terminals

    @property
    def start(self) -> NonTerminal:
        return self._start

    def rule(self, start: NonTerminal) -> Optional[Rule]:
        """Return the first rule for the given start symbol, or None."""
        if not isinstance(start, NonTerminal):
            raise TypeError(f"Rule lookup needs a non-terminal, got {start!r}")
        return self._index.get(start)

    def generate(self, index, limit: int = 1000) -> List[Symbol]:
        """Derive a sentence with the standard (left-to-right) generator."""
        from cfgevo.generators import SentenceGenerator

        return SentenceGenerator(index, limit).generate(self)

    @classmethod
    def parse(cls, text: str) -> "Grammar":
        from cfgevo.bnf import parse

        return parse(text)

    def __eq__(self, other):
        if not isinstance(other, Grammar):
            return NotImplemented
        return self._rules == other._rules

    def __hash__(self):
        return hash(self._rules)

    def __str__(self):
        return "\n".join(str(rule) for rule in self._rules)

    def __repr__(self):
        return f"Grammar(start={self._start}, rules={len(self._rules)})"
