import dataclasses

import pytest

from cfgevo.bnf import parse
from cfgevo.grammar import (
    EPSILON,
    Expression,
    Grammar,
    GrammarValidationError,
    NonTerminal,
    Rule,
    Terminal,
)


def test_symbols_compare_by_value():
    assert NonTerminal("a") == NonTerminal("a")
    assert Terminal("a") == Terminal("a")
    assert Terminal("a") != NonTerminal("a")
    assert len({Terminal("x"), Terminal("x"), NonTerminal("x")}) == 2


def test_symbols_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        NonTerminal("a").name = "b"


def test_expression_requires_symbols():
    with pytest.raises(GrammarValidationError):
        Expression(())


def test_expression_rejects_non_symbols():
    with pytest.raises(GrammarValidationError):
        Expression(("x",))


def test_expression_copies_its_input():
    symbols = [Terminal("x")]
    expression = Expression(symbols)
    symbols.append(Terminal("y"))
    assert len(expression) == 1
    assert isinstance(expression.symbols, tuple)


def test_rule_requires_alternatives():
    with pytest.raises(GrammarValidationError):
        Rule(NonTerminal("a"), ())


def test_rule_start_must_be_nonterminal():
    with pytest.raises(GrammarValidationError):
        Rule(Terminal("a"), (Expression((Terminal("x"),)),))


def test_grammar_requires_rules():
    with pytest.raises(GrammarValidationError):
        Grammar([])


def test_validation_errors_are_value_errors():
    with pytest.raises(ValueError):
        Grammar([])


def test_derived_collections_in_first_seen_order():
    grammar = parse("<a> ::= <b> <c> | x\n<c> ::= <d> y | x\n")
    assert grammar.non_terminals == tuple(NonTerminal(n) for n in ["a", "b", "c", "d"])
    assert grammar.terminals == (Terminal("x"), Terminal("y"))
    assert grammar.start == NonTerminal("a")


def test_rule_lookup(expr_grammar):
    assert expr_grammar.rule(NonTerminal("op")).start == NonTerminal("op")
    assert expr_grammar.rule(NonTerminal("missing")) is None


def test_rule_lookup_needs_nonterminal(expr_grammar):
    with pytest.raises(TypeError):
        expr_grammar.rule(Terminal("op"))


def test_grammar_is_read_only(xy_grammar):
    with pytest.raises(AttributeError):
        xy_grammar.start = NonTerminal("other")
    assert isinstance(xy_grammar.rules, tuple)


@pytest.mark.parametrize(
    "symbol, text",
    [
        (NonTerminal("expr"), "<expr>"),
        (NonTerminal("my rule"), "<my rule>"),
        (Terminal("x"), "x"),
        (Terminal("a b"), "'a b'"),
        (Terminal("|"), "'|'"),
        (EPSILON, "''"),
    ],
)
def test_symbol_rendering(symbol, text):
    assert str(symbol) == text


def test_rule_and_grammar_rendering():
    grammar = parse("<s> ::= 'x' <s> | y\n<t> ::= 'a b'")
    assert str(grammar.rules[0]) == "<s> ::= x <s> | y"
    assert str(grammar) == "<s> ::= x <s> | y\n<t> ::= 'a b'"


def test_equal_grammars_hash_equal():
    assert hash(parse("<a> ::= x")) == hash(parse("<a>   ::=   'x'"))


@pytest.mark.parametrize("value", ["'", "it's", "a'b'c"])
def test_terminal_rejects_quote_character(value):
    with pytest.raises(GrammarValidationError):
        Terminal(value)
