'''
Single-pass tokenizer for the BNF dialect used to write grammars.

The tokenizer looks at one character at a time and classifies it in a fixed
order: whitespace is skipped, then structural punctuation, then identifier
starts, then the quote character. Any other printable run of characters is a
bare terminal (STRING). Everything else is a lexical error.
'''
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List


class TokenType(Enum):
    ASSIGN = "::="
    BAR = "|"
    LT = "<"
    GT = ">"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    QUOTED_STRING = "QUOTED_STRING"
    STRING = "STRING"
    ID = "ID"
    EOF = "EOF"


ASSIGN = "::="
QUOTE = "'"

PUNCTUATION = {
    "|": TokenType.BAR,
    "<": TokenType.LT,
    ">": TokenType.GT,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}


class BnfParseError(ValueError):
    """Base class of all errors raised while reading grammar source."""


class BnfLexicalError(BnfParseError):
    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(f"Got invalid character {char!r} at position {position}.")


class BnfSyntaxError(BnfParseError):
    def __init__(self, expected: str, actual: "Token"):
        self.expected = expected
        self.actual = actual
        self.position = actual.position
        super().__init__(
            f"Expected {expected} but got {actual} at position {actual.position}."
        )


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    position: int

    def __str__(self):
        return f"{self.type.name}({self.value!r})"


def is_id_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def is_id_part(ch: str) -> bool:
    return ch.isalnum() or ch in "_-"


def is_name_part(ch: str) -> bool:
    # Non-terminal names between angle brackets may also hold spaces.
    return is_id_part(ch) or ch == " "


class BnfTokenizer:
    """Turns grammar source into tokens, one call to next() at a time."""

    def __init__(self, text: str):
        if not isinstance(text, str):
            raise TypeError("grammar source must be a string")
        self.text = text
        self.pos = 0

    @property
    def c(self) -> str | None:
        return self.text[self.pos] if self.pos < len(self.text) else None

    def _at_assign(self) -> bool:
        return self.text.startswith(ASSIGN, self.pos)

    def _ends_bare_run(self, ch: str | None) -> bool:
        return (
            ch is None
            or ch.isspace()
            or ch in PUNCTUATION
            or ch == QUOTE
            or self._at_assign()
            or not ch.isprintable()
        )

    def next(self) -> Token:
        while self.c is not None:
            ch = self.c
            if ch.isspace():
                self.pos += 1
                continue
            start = self.pos
            if self._at_assign():
                self.pos += len(ASSIGN)
                return Token(TokenType.ASSIGN, ASSIGN, start)
            if ch in PUNCTUATION:
                self.pos += 1
                return Token(PUNCTUATION[ch], ch, start)
            if is_id_start(ch):
                if self.text[start - 1:start] == "<":
                    name = self._bracketed_name()
                    if name is not None:
                        return name
                return self._identifier()
            if ch == QUOTE:
                return self._quoted_string()
            if ch.isprintable():
                return self._string(start)
            raise BnfLexicalError(ch, start)
        return Token(TokenType.EOF, "<EOF>", self.pos)

    def _bracketed_name(self) -> Token | None:
        """Read `name` of `<name>` as one ID token, spaces included.

        Returns None (consuming nothing) when no `>` closes the run.
        """
        start = end = self.pos
        while end < len(self.text) and is_name_part(self.text[end]):
            end += 1
        if self.text[end:end + 1] != ">":
            return None
        self.pos = end
        return Token(TokenType.ID, self.text[start:end], start)

    def _identifier(self) -> Token:
        start = self.pos
        while self.c is not None and is_id_part(self.c):
            self.pos += 1
        # "x+1" is one bare terminal, not an identifier followed by "+1"
        if not self._ends_bare_run(self.c):
            return self._string(start)
        return Token(TokenType.ID, self.text[start:self.pos], start)

    def _quoted_string(self) -> Token:
        start = self.pos
        end = self.text.find(QUOTE, start + 1)
        if end < 0:
            self.pos = len(self.text)
            raise BnfSyntaxError(
                "closing quote of QUOTED_STRING", Token(TokenType.EOF, "<EOF>", self.pos)
            )
        self.pos = end + 1
        return Token(TokenType.QUOTED_STRING, self.text[start + 1:end], start)

    def _string(self, start: int) -> Token:
        while not self._ends_bare_run(self.c):
            self.pos += 1
        return Token(TokenType.STRING, self.text[start:self.pos], start)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next()
            yield token
            if token.type is TokenType.EOF:
                return


def tokenize(text: str) -> List[Token]:
    """Return every token of text, the trailing EOF token included."""
    return list(BnfTokenizer(text))


def escape(value: str) -> str:
    """Render a terminal value so that the tokenizer reads it back unchanged.

    Plain runs are returned as they are; values that are empty or contain
    whitespace, punctuation, the assignment operator or non-printable
    characters are single-quoted. The dialect has no escape for the quote
    character itself, so values containing it are rejected with ValueError.
    """
    if QUOTE in value:
        raise ValueError(f"Cannot render {value!r}: terminals cannot contain {QUOTE}")
    needs_quotes = (
        not value
        or ASSIGN in value
        or any(ch.isspace() or ch in PUNCTUATION or not ch.isprintable() for ch in value)
    )
    return f"{QUOTE}{value}{QUOTE}" if needs_quotes else value
