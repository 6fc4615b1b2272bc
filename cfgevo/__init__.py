"""
cfgevo: context-free grammars in BNF, and codon-driven derivation of
sentences and derivation trees (grammatical evolution).
"""
from cfgevo.grammar import (
    EPSILON,
    Expression,
    Grammar,
    GrammarValidationError,
    NonTerminal,
    Rule,
    Symbol,
    Terminal,
)
from cfgevo.tokenizer import BnfLexicalError, BnfParseError, BnfSyntaxError
from cfgevo.bnf import escape, format_grammar, parse
from cfgevo.codons import Codons, RuleCodons, SymbolIndex
from cfgevo.derivation_tree import DerivationNode
from cfgevo.generators import DerivationTreeGenerator, Expansion, SentenceGenerator
from cfgevo.codec import (
    ChromosomeSpec,
    GrammarCodec,
    bit_codec,
    generate,
    int_codec,
    rule_codec,
    to_string,
)

__version__ = "0.1.0"

__all__ = [
    "EPSILON",
    "Expression",
    "Grammar",
    "GrammarValidationError",
    "NonTerminal",
    "Rule",
    "Symbol",
    "Terminal",
    "BnfLexicalError",
    "BnfParseError",
    "BnfSyntaxError",
    "escape",
    "format_grammar",
    "parse",
    "Codons",
    "RuleCodons",
    "SymbolIndex",
    "DerivationNode",
    "DerivationTreeGenerator",
    "Expansion",
    "SentenceGenerator",
    "ChromosomeSpec",
    "GrammarCodec",
    "bit_codec",
    "generate",
    "int_codec",
    "rule_codec",
    "to_string",
]
