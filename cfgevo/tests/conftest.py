import pytest

from cfgevo.bnf import parse
from cfgevo.grammar import Expression, NonTerminal, Rule, Terminal

EXPR_GRAMMAR = (
    "<expr> ::= <num> | <var> | '(' <expr> <op> <expr> ')'\n"
    "<op> ::= '+' | - | '*' | /\n"
    "<var> ::= x | y\n"
    "<num> ::= 0 | 1 | 2 | 3 | 4 | 5 | 6 | 7 | 8 | 9\n"
)


def make_rule(name: str, count: int) -> Rule:
    """Rule <name> with `count` single-terminal alternatives 0..count-1."""
    return Rule(
        NonTerminal(name),
        tuple(Expression((Terminal(str(i)),)) for i in range(count)),
    )


@pytest.fixture
def expr_grammar():
    return parse(EXPR_GRAMMAR)


@pytest.fixture
def xy_grammar():
    return parse("<s> ::= 'x' <s> | 'y'\n")


@pytest.fixture
def op_grammar():
    return parse("<op> ::= '+' | '-'")
