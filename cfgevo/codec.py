'''
Codecs connect numeric genomes to grammar derivations.

A genotype is a sequence of chromosomes; a chromosome is a sequence of
integers (or of bits for bit codecs). A GrammarCodec describes the genotype
layout an optimizer has to produce (``encoding``) and decodes a genotype into
a sentence of the grammar (``decode``). Decoding depends on nothing but the
chromosome values, so equal genotypes always give equal sentences.
'''
from __future__ import annotations

import random
from typing import Callable, List, Literal, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cfgevo.codons import BITS_PER_CODON, Codons, RuleCodons, SymbolIndex
from cfgevo.generators import DEFAULT_LIMIT, SentenceGenerator
from cfgevo.grammar import Grammar, NonTerminal, Symbol
from cfgevo.logging_config import setup_logger

logger = setup_logger(__name__)

Chromosome = Sequence[int]
Genotype = Sequence[Chromosome]


class ChromosomeSpec(BaseModel):
    """Value range [lower, upper) and length of one chromosome.

    With ``max_length`` set, the length of a new chromosome is drawn from
    [length, max_length) instead of being fixed.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["integer", "bit"] = "integer"
    lower: int = Field(default=0, ge=0)
    upper: int
    length: int = Field(ge=1)
    max_length: Optional[int] = None

    @model_validator(mode="after")
    def _check_range(self):
        if self.upper <= self.lower:
            raise ValueError(f"Empty codon range [{self.lower}, {self.upper}).")
        if self.kind == "bit" and (self.lower, self.upper) != (0, 2):
            raise ValueError("Bit chromosomes have the value range [0, 2).")
        if self.max_length is not None and self.max_length <= self.length:
            raise ValueError(f"Empty length range [{self.length}, {self.max_length}).")
        return self

    def random(self, rng: random.Random) -> List[int]:
        length = self.length if self.max_length is None else rng.randrange(self.length, self.max_length)
        return [rng.randrange(self.lower, self.upper) for _ in range(length)]


def to_string(symbols: Sequence[Symbol]) -> str:
    """Concatenate a sentence; left-over non-terminals render as <name>."""
    return "".join(
        str(symbol) if isinstance(symbol, NonTerminal) else symbol.value
        for symbol in symbols
    )


def generate(grammar: Grammar, index: SymbolIndex, limit: int = DEFAULT_LIMIT) -> List[Symbol]:
    return SentenceGenerator(index, limit).generate(grammar)


class GrammarCodec:
    def __init__(self, encoding: Sequence[ChromosomeSpec], decoder: Callable[[Genotype], List[Symbol]]):
        if not encoding:
            raise ValueError("A codec needs at least one chromosome.")
        self.encoding = tuple(encoding)
        self._decoder = decoder

    def decode(self, genotype: Genotype) -> List[Symbol]:
        if len(genotype) != len(self.encoding):
            raise ValueError(
                f"Expected {len(self.encoding)} chromosomes, got {len(genotype)}."
            )
        return self._decoder(genotype)

    def decode_string(self, genotype: Genotype) -> str:
        return to_string(self.decode(genotype))

    def new_genotype(self, rng: Optional[random.Random] = None) -> List[List[int]]:
        rng = rng or random.Random()
        return [spec.random(rng) for spec in self.encoding]

    @classmethod
    def of(
        cls,
        grammar: Grammar,
        length: Callable[[int], int],
        generator: Callable[[SymbolIndex], SentenceGenerator],
    ) -> "GrammarCodec":
        """Codec with one chromosome per rule, in rule order.

        The chromosome of a rule with n alternatives holds values in [0, n)
        and has ``length(n)`` codons. For

            <expr> ::= '(' <expr> <op> <expr> ')' | <var>
            <op>   ::= + | - | * | /
            <var>  ::= x | 1 | 2 | 3 | 4

        the layout is ``[0, 2) x length(2)``, ``[0, 4) x length(4)`` and
        ``[0, 5) x length(5)``.
        """
        encoding = [
            ChromosomeSpec(upper=len(rule.alternatives), length=length(len(rule.alternatives)))
            for rule in grammar.rules
        ]
        logger.debug(f"Rule codec layout: {[(s.upper, s.length) for s in encoding]}")

        def decoder(genotype: Genotype) -> List[Symbol]:
            index = RuleCodons(grammar, [Codons.of_ints(chromosome) for chromosome in genotype])
            return generator(index).generate(grammar)

        return cls(encoding, decoder)


def _bounds(value) -> Tuple[int, int]:
    if isinstance(value, range):
        return value.start, value.stop
    lower, upper = value
    return lower, upper


def int_codec(
    grammar: Grammar,
    codon_range: Sequence[int],
    codon_count: Union[int, Sequence[int]],
    limit: int = DEFAULT_LIMIT,
) -> GrammarCodec:
    """Classic encoding: one integer chromosome shared by every rule.

    codon_range is ``(lower, upper)``, upper exclusive; a ``range`` works too.
    codon_count is a fixed chromosome length, or a ``(min, max)`` pair (or
    ``range``) from which new genotypes draw their length, max exclusive.
    """
    lower, upper = _bounds(codon_range)
    if isinstance(codon_count, int):
        spec = ChromosomeSpec(lower=lower, upper=upper, length=codon_count)
    else:
        shortest, longest = _bounds(codon_count)
        spec = ChromosomeSpec(lower=lower, upper=upper, length=shortest, max_length=longest)

    def decoder(genotype: Genotype) -> List[Symbol]:
        return generate(grammar, Codons.of_ints(genotype[0]), limit)

    return GrammarCodec([spec], decoder)


def bit_codec(grammar: Grammar, codon_count: int, limit: int = DEFAULT_LIMIT) -> GrammarCodec:
    """Classic encoding on bits: every 8 bits of the chromosome are one codon."""
    spec = ChromosomeSpec(kind="bit", lower=0, upper=2, length=codon_count * BITS_PER_CODON)

    def decoder(genotype: Genotype) -> List[Symbol]:
        return generate(grammar, Codons.of_bits(genotype[0]), limit)

    return GrammarCodec([spec], decoder)


def rule_codec(
    grammar: Grammar,
    length: Callable[[int], int],
    limit: int = DEFAULT_LIMIT,
) -> GrammarCodec:
    """One chromosome per rule, decoded with the standard sentence generator."""
    return GrammarCodec.of(grammar, length, lambda index: SentenceGenerator(index, limit))
