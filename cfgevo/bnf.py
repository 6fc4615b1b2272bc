'''
Recursive-descent parser for grammars written in BNF.

    <expr> ::= <num> | <var> | '(' <expr> <op> <expr> ')'
    <op>   ::= '+' | - | '*' | /
    <var>  ::= x | y
    <num>  ::= 0 | 1 | 2 | 3 | 4 | 5 | 6 | 7 | 8 | 9

Rules have no terminator: a rule ends where the next ``<name> ::=`` begins.
The bracket forms ``[X]`` (optional), ``{X}`` (zero or more) and ``(X)``
(one or more) are lowered into auxiliary rules with fresh names, which are
appended after the rules of the source.
'''
from __future__ import annotations

from typing import List, Set

from cfgevo.grammar import (
    EPSILON,
    Expression,
    Grammar,
    NonTerminal,
    Rule,
    Symbol,
    Terminal,
)
from cfgevo.logging_config import setup_logger
from cfgevo.tokenizer import (  # noqa: F401  (escape and errors are re-exported)
    BnfLexicalError,
    BnfParseError,
    BnfSyntaxError,
    Token,
    TokenType,
    escape,
    tokenize,
)

logger = setup_logger(__name__)

OPTIONAL = "opt"
ZERO_OR_MORE = "star"
ONE_OR_MORE = "plus"

_CLOSING = {
    TokenType.LBRACKET: (TokenType.RBRACKET, OPTIONAL),
    TokenType.LBRACE: (TokenType.RBRACE, ZERO_OR_MORE),
    TokenType.LPAREN: (TokenType.RPAREN, ONE_OR_MORE),
}


def nonterminal_names(tokens: List[Token]) -> Set[str]:
    """Collect every name written between angle brackets."""
    return {
        tokens[i + 1].value
        for i in range(len(tokens) - 2)
        if tokens[i].type is TokenType.LT
        and tokens[i + 1].type is TokenType.ID
        and tokens[i + 2].type is TokenType.GT
    }


class BnfParser:
    def __init__(self, text: str):
        self.tokens = tokenize(text)
        self.pos = 0
        self.names = nonterminal_names(self.tokens)
        self._counter = 0
        self._aux_rules: List[Rule] = []

    @property
    def la(self) -> Token:
        return self.tokens[self.pos]

    def _consume(self) -> Token:
        token = self.tokens[self.pos]
        if token.type is not TokenType.EOF:
            self.pos += 1
        return token

    def _match(self, type_: TokenType) -> Token:
        if self.la.type is not type_:
            raise BnfSyntaxError(type_.name, self.la)
        return self._consume()

    def parse(self) -> Grammar:
        rules: List[Rule] = []
        while self.la.type is not TokenType.EOF:
            rules.append(self._rule())
        if not rules:
            raise BnfSyntaxError(TokenType.LT.name, self.la)

        seen = set()
        for rule in rules:
            if rule.start in seen:
                logger.warning(f"Duplicate rule for {rule.start}; only the first one is used")
            seen.add(rule.start)

        logger.debug(f"Parsed {len(rules)} rules, synthesized {len(self._aux_rules)} auxiliary rules")
        return Grammar(rules + self._aux_rules)

    def _rule(self) -> Rule:
        head = self._nonterminal()
        self._match(TokenType.ASSIGN)
        return Rule(head, tuple(self._alternatives(head)))

    def _nonterminal(self) -> NonTerminal:
        self._match(TokenType.LT)
        name = self._match(TokenType.ID).value
        self._match(TokenType.GT)
        return NonTerminal(name)

    def _alternatives(self, head: NonTerminal) -> List[Expression]:
        alternatives = [self._alternative(head)]
        while self.la.type is TokenType.BAR:
            self._consume()
            alternatives.append(self._alternative(head))
        return alternatives

    def _alternative(self, head: NonTerminal) -> Expression:
        symbols: List[Symbol] = []
        while self._at_element():
            symbols.append(self._element(head))
        if not symbols:
            raise BnfSyntaxError("symbol", self.la)
        return Expression(tuple(symbols))

    def _at_element(self) -> bool:
        type_ = self.la.type
        if type_ is TokenType.LT:
            return not self._at_rule_head()
        return type_ in (
            TokenType.QUOTED_STRING,
            TokenType.STRING,
            TokenType.ID,
            TokenType.LBRACKET,
            TokenType.LBRACE,
            TokenType.LPAREN,
        )

    def _at_rule_head(self) -> bool:
        # LT ID GT ASSIGN
        ahead = [t.type for t in self.tokens[self.pos:self.pos + 4]]
        return ahead == [TokenType.LT, TokenType.ID, TokenType.GT, TokenType.ASSIGN]

    def _element(self, head: NonTerminal) -> Symbol:
        token = self.la
        if token.type is TokenType.LT:
            return self._nonterminal()
        if token.type in (TokenType.QUOTED_STRING, TokenType.STRING, TokenType.ID):
            self._consume()
            return Terminal(token.value)

        closing, kind = _CLOSING[token.type]
        self._consume()
        body = self._alternatives(head)
        self._match(closing)
        return self._lower(head, kind, body)

    def _fresh(self, head: NonTerminal, kind: str) -> NonTerminal:
        while True:
            self._counter += 1
            name = f"{head.name}-{kind}-{self._counter}"
            if name not in self.names:
                self.names.add(name)
                return NonTerminal(name)

    def _lower(self, head: NonTerminal, kind: str, body: List[Expression]) -> NonTerminal:
        aux = self._fresh(head, kind)
        if kind == OPTIONAL:
            alternatives = body + [Expression((EPSILON,))]
        elif kind == ZERO_OR_MORE:
            alternatives = [Expression((EPSILON,))] + [Expression(e.symbols + (aux,)) for e in body]
        else:
            alternatives = body + [Expression(e.symbols + (aux,)) for e in body]
        self._aux_rules.append(Rule(aux, tuple(alternatives)))
        return aux


def parse(text: str) -> Grammar:
    """Parse a complete grammar from its BNF source."""
    return BnfParser(text).parse()


def format_grammar(grammar: Grammar) -> str:
    """Render a grammar as BNF source; parse(format_grammar(g)) == g."""
    return str(grammar) + "\n"
