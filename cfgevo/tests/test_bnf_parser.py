import pytest

from cfgevo.bnf import format_grammar, parse
from cfgevo.grammar import EPSILON, Expression, Grammar, NonTerminal, Rule, Terminal
from cfgevo.tokenizer import BnfLexicalError, BnfSyntaxError, TokenType

N = NonTerminal
T = Terminal


def E(*symbols):
    return Expression(symbols)


def alternatives(grammar, name):
    return [list(e.symbols) for e in grammar.rule(N(name)).alternatives]


def test_parse_recursive_rule(xy_grammar):
    assert xy_grammar.rules == (
        Rule(N("s"), (E(T("x"), N("s")), E(T("y")))),
    )
    assert xy_grammar.start == N("s")


def test_parse_expression_grammar(expr_grammar):
    assert [r.start for r in expr_grammar.rules] == [N("expr"), N("op"), N("var"), N("num")]
    assert alternatives(expr_grammar, "op") == [[T("+")], [T("-")], [T("*")], [T("/")]]
    assert alternatives(expr_grammar, "expr")[2] == [T("("), N("expr"), N("op"), N("expr"), T(")")]
    assert len(expr_grammar.rule(N("num")).alternatives) == 10


def test_rules_need_no_line_breaks():
    grammar = parse("<a> ::= x <b> <b> ::= y | z")
    assert [r.start for r in grammar.rules] == [N("a"), N("b")]
    assert alternatives(grammar, "a") == [[T("x"), N("b")]]
    assert alternatives(grammar, "b") == [[T("y")], [T("z")]]


def test_nonterminal_names_may_contain_spaces_and_hyphens():
    grammar = parse("<my rule> ::= <other-rule>\n<other-rule> ::= x")
    assert grammar.start == N("my rule")
    assert grammar.rule(N("other-rule")) is not None


def test_empty_quoted_terminal_is_epsilon():
    grammar = parse("<a> ::= x | ''")
    assert alternatives(grammar, "a")[1] == [EPSILON]


def test_optional_is_lowered_to_aux_rule():
    grammar = parse("<a> ::= x [y] z")
    assert alternatives(grammar, "a") == [[T("x"), N("a-opt-1"), T("z")]]
    assert grammar.rules[-1] == Rule(N("a-opt-1"), (E(T("y")), E(EPSILON)))


def test_zero_or_more_is_lowered_to_right_recursive_rule():
    grammar = parse("<a> ::= {x | y}")
    aux = N("a-star-1")
    assert alternatives(grammar, "a") == [[aux]]
    assert alternatives(grammar, "a-star-1") == [[EPSILON], [T("x"), aux], [T("y"), aux]]


def test_one_or_more_has_no_empty_alternative():
    grammar = parse("<a> ::= (x | y)")
    aux = N("a-plus-1")
    assert alternatives(grammar, "a-plus-1") == [[T("x")], [T("y")], [T("x"), aux], [T("y"), aux]]


def test_aux_rules_follow_source_rules():
    grammar = parse("<a> ::= [x] <b>\n<b> ::= {y}")
    assert [r.start.name for r in grammar.rules] == ["a", "b", "a-opt-1", "b-star-2"]
    assert grammar.start == N("a")


def test_nested_brackets():
    grammar = parse("<a> ::= [x {y}]")
    assert [r.start.name for r in grammar.rules] == ["a", "a-star-1", "a-opt-2"]
    assert alternatives(grammar, "a-opt-2") == [[T("x"), N("a-star-1")], [EPSILON]]


def test_fresh_names_avoid_source_names():
    grammar = parse("<a> ::= [x]\n<a-opt-1> ::= z")
    assert alternatives(grammar, "a") == [[N("a-opt-2")]]
    assert alternatives(grammar, "a-opt-1") == [[T("z")]]
    assert alternatives(grammar, "a-opt-2") == [[T("x")], [EPSILON]]


def test_fresh_names_avoid_names_used_before_definition():
    grammar = parse("<a> ::= [x] <a-opt-1>")
    assert alternatives(grammar, "a") == [[N("a-opt-2"), N("a-opt-1")]]


def test_duplicate_rules_are_kept_and_first_wins():
    grammar = parse("<a> ::= x\n<a> ::= y")
    assert len(grammar.rules) == 2
    assert alternatives(grammar, "a") == [[T("x")]]


def test_grammar_parse_classmethod():
    assert Grammar.parse("<a> ::= x") == parse("<a> ::= x")


@pytest.mark.parametrize(
    "source, expected, actual",
    [
        ("<a> x", "ASSIGN", TokenType.ID),
        ("<a> <b> ::= x", "ASSIGN", TokenType.LT),
        ("<a> ::= [x)", "RBRACKET", TokenType.RPAREN),
        ("<a> ::= [x", "RBRACKET", TokenType.EOF),
        ("<a> ::= {x]", "RBRACE", TokenType.RBRACKET),
        ("<a> ::= (x", "RPAREN", TokenType.EOF),
        ("<a> ::= x ]", "LT", TokenType.RBRACKET),
        ("<a> ::= | x", "symbol", TokenType.BAR),
        ("<a> ::=", "symbol", TokenType.EOF),
        ("<> ::= x", "ID", TokenType.GT),
        ("<a ::= x", "GT", TokenType.ASSIGN),
        ("x ::= y", "LT", TokenType.ID),
        ("", "LT", TokenType.EOF),
    ],
)
def test_syntax_errors(source, expected, actual):
    with pytest.raises(BnfSyntaxError) as err:
        parse(source)
    assert err.value.expected == expected
    assert err.value.actual.type is actual
    assert expected in str(err.value)


def test_lexical_error_propagates():
    with pytest.raises(BnfLexicalError):
        parse("<a> ::= \x01")


@pytest.mark.parametrize(
    "source",
    [
        "<s> ::= 'x' <s> | 'y'",
        "<a> ::= 'a b' | '' | '::=' | '<'\n<b> ::= x+1",
        "<a> ::= x [y] {z | w} (v)",
        "<expr> ::= ( <expr> <op> <expr> ) | <num>\n<op> ::= + | -\n<num> ::= 0 | 1",
    ],
)
def test_format_then_parse_round_trips(source):
    grammar = parse(source)
    assert parse(format_grammar(grammar)) == grammar


def test_round_trip_keeps_rules_of_the_expression_grammar(expr_grammar):
    text = format_grammar(expr_grammar)
    assert text.splitlines()[0] == "<expr> ::= <num> | <var> | '(' <expr> <op> <expr> ')'"
    assert parse(text) == expr_grammar


@pytest.mark.parametrize(
    "source, name",
    [
        ("<a 1> ::= x", "a 1"),
        ("<x -y> ::= z", "x -y"),
        ("<a  b> ::= x", "a  b"),
        ("<expr 2-b> ::= x", "expr 2-b"),
    ],
)
def test_nonterminal_name_is_kept_verbatim(source, name):
    assert parse(source).start == N(name)


def test_spacing_inside_names_is_significant():
    grammar = parse("<a  b> ::= <a b>\n<a b> ::= x")
    assert [r.start for r in grammar.rules] == [N("a  b"), N("a b")]
    assert alternatives(grammar, "a  b") == [[N("a b")]]


def test_names_with_spaces_and_digits_round_trip():
    grammar = Grammar([
        Rule(N("expr 2"), (E(N("x -y"), T("+"), N("a  b")),)),
        Rule(N("x -y"), (E(T("1")),)),
        Rule(N("a  b"), (E(T("2")),)),
    ])
    assert format_grammar(grammar).splitlines()[0] == "<expr 2> ::= <x -y> + <a  b>"
    assert parse(format_grammar(grammar)) == grammar


def test_aux_names_avoid_names_with_spaces():
    grammar = parse("<a> ::= [x] <a-opt-1>\n<a-opt-1> ::= <b 2>\n<b 2> ::= y")
    assert alternatives(grammar, "a") == [[N("a-opt-2"), N("a-opt-1")]]
    assert grammar.rule(N("b 2")) is not None
