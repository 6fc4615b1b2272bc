'''
Symbol indexes: the strategies that pick which alternative of a rule is used
next during a derivation.

The standard implementations read codons (non-negative integers) from a
finite sequence and wrap around to the start once the sequence is used up.
Readers keep a cursor, so every derivation needs its own instances.
'''
from __future__ import annotations

from typing import Dict, Iterable, Protocol, Sequence, Tuple

from cfgevo.grammar import Grammar, NonTerminal, Rule

BITS_PER_CODON = 8


class SymbolIndex(Protocol):
    def next(self, rule: Rule, bound: int) -> int:
        """Return the index of the alternative of rule to use, in [0, bound)."""
        ...


class Codons:
    """Wrapping codon reader over a fixed sequence of integers.

    next() returns ``codons[position] % bound`` and advances the position,
    starting again at 0 after the last codon.
    """

    def __init__(self, values: Iterable[int]):
        values = tuple(int(v) for v in values)
        if not values:
            raise ValueError("Codons need at least one value.")
        if any(v < 0 for v in values):
            raise ValueError("Codon values must not be negative.")
        self._values: Tuple[int, ...] = values
        self._position = 0

    @classmethod
    def of_ints(cls, genes: Iterable[int]) -> "Codons":
        return cls(genes)

    @classmethod
    def of_bits(cls, bits: Sequence) -> "Codons":
        """Read every 8 bits as one unsigned byte codon.

        Bit ``8 * k + i`` is bit ``i`` (least significant first) of codon k;
        trailing bits that do not fill a byte are ignored.
        """
        count = len(bits) // BITS_PER_CODON
        if count == 0:
            raise ValueError(f"At least {BITS_PER_CODON} bits are needed, got {len(bits)}.")
        values = []
        for k in range(count):
            byte = 0
            for i in range(BITS_PER_CODON):
                if bits[k * BITS_PER_CODON + i]:
                    byte |= 1 << i
            values.append(byte)
        return cls(values)

    @property
    def values(self) -> Tuple[int, ...]:
        return self._values

    @property
    def position(self) -> int:
        return self._position

    def next(self, rule: Rule, bound: int) -> int:
        if bound < 1:
            raise ValueError(f"Bound must be positive, got {bound}.")
        value = self._values[self._position] % bound
        self._position = (self._position + 1) % len(self._values)
        return value

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self):
        return f"Codons(length={len(self._values)}, position={self._position})"


class RuleCodons:
    """One independent codon reader per rule, selected by the rule's start symbol."""

    def __init__(self, grammar: Grammar, codons: Sequence[Codons]):
        if len(codons) != len(grammar.rules):
            raise ValueError(
                f"Expected one codon reader per rule ({len(grammar.rules)}), got {len(codons)}."
            )
        self._codons: Dict[NonTerminal, Codons] = {}
        for rule, reader in zip(grammar.rules, codons):
            self._codons.setdefault(rule.start, reader)

    def next(self, rule: Rule, bound: int) -> int:
        try:
            reader = self._codons[rule.start]
        except KeyError:
            raise KeyError(f"No codons for rule {rule.start}") from None
        return reader.next(rule, bound)
