"""PHP array catalog parser.

Reads translation files of the form::

    <?php
    return [
        'welcome' => 'Welcome, :name',
        'auth' => array('failed' => 'These credentials do not match.'),
    ];

The returned array literal is tokenized and read without executing any PHP.
Only literal values are supported: strings (including ``.`` concatenation
of string literals), numbers, booleans, null and nested arrays.
"""

from __future__ import annotations

import re
from typing import Any

from transcheck.parsers.base import BaseParser, OrderedPairs, ParserError, flatten_pairs

_TOKEN_RE = re.compile(
    r"""
      (?P<ws>\s+)
    | (?P<comment>//[^\n]*|\#[^\n]*|/\*.*?\*/)
    | (?P<open_tag><\?php|<\?)
    | (?P<close_tag>\?>)
    | (?P<sq>'(?:[^'\\]|\\.)*')
    | (?P<dq>"(?:[^"\\]|\\.)*")
    | (?P<arrow>=>)
    | (?P<number>-?\d+(?:\.\d+)?)
    | (?P<var>\$[A-Za-z_][A-Za-z0-9_]*)
    | (?P<word>[A-Za-z_\\][A-Za-z0-9_\\]*)
    | (?P<punct>::|[\[\](){},;.=:?!<>+\-*/&|@])
    """,
    re.VERBOSE | re.DOTALL,
)

_DQ_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "v": "\v",
    "e": "\x1b",
    "f": "\f",
    "\\": "\\",
    "$": "$",
    '"': '"',
}


def _unquote_single(literal: str) -> str:
    body = literal[1:-1]
    return re.sub(r"\\([\\'])", r"\1", body)


def _unquote_double(literal: str) -> str:
    body = literal[1:-1]
    return re.sub(
        r"\\(.)",
        lambda m: _DQ_ESCAPES.get(m.group(1), m.group(0)),
        body,
        flags=re.DOTALL,
    )


def tokenize(source: str) -> list[tuple[str, str]]:
    """Split PHP source into (kind, text) tokens, dropping whitespace and comments.

    Raises:
        ParserError: On a character that starts no known token.
    """
    tokens: list[tuple[str, str]] = []
    pos = 0
    while pos < len(source):
        match = _TOKEN_RE.match(source, pos)
        if match is None:
            line = source.count("\n", 0, pos) + 1
            raise ParserError(f"Unexpected character {source[pos]!r} on line {line}")
        kind = match.lastgroup or ""
        if kind not in ("ws", "comment", "open_tag", "close_tag"):
            tokens.append((kind, match.group()))
        pos = match.end()
    return tokens


class _ArrayReader:
    """Recursive-descent reader for the value following ``return``."""

    def __init__(self, tokens: list[tuple[str, str]], start: int) -> None:
        self.tokens = tokens
        self.pos = start

    def _peek(self) -> tuple[str, str]:
        if self.pos >= len(self.tokens):
            return ("eof", "")
        return self.tokens[self.pos]

    def _next(self) -> tuple[str, str]:
        token = self._peek()
        if token[0] == "eof":
            raise ParserError("Unexpected end of file")
        self.pos += 1
        return token

    def _expect(self, text: str) -> None:
        kind, value = self._next()
        if value != text:
            raise ParserError(f"Expected '{text}' but found '{value}'")

    def read_value(self) -> Any:
        kind, text = self._next()

        if kind in ("sq", "dq"):
            value = _unquote_single(text) if kind == "sq" else _unquote_double(text)
            # String concatenation with the "." operator
            while self._peek() == ("punct", "."):
                self.pos += 1
                next_kind, next_text = self._next()
                if next_kind == "sq":
                    value += _unquote_single(next_text)
                elif next_kind == "dq":
                    value += _unquote_double(next_text)
                else:
                    raise ParserError(f"Unsupported concatenation with '{next_text}'")
            return value

        if kind == "punct" and text == "[":
            return self._read_array("]")

        if kind == "word":
            lowered = text.lower()
            if lowered == "array":
                self._expect("(")
                return self._read_array(")")
            if lowered == "true":
                return True
            if lowered == "false":
                return False
            if lowered == "null":
                return None

        if kind == "number":
            return float(text) if "." in text else int(text)

        raise ParserError(f"Unsupported expression '{text}' in array literal")

    def _read_array(self, closing: str) -> OrderedPairs:
        pairs = OrderedPairs()
        next_index = 0
        while True:
            if self._peek() == ("punct", closing):
                self.pos += 1
                return pairs

            key_or_value = self.read_value()
            if self._peek()[0] == "arrow":
                self.pos += 1
                key: Any = key_or_value
                value = self.read_value()
                if isinstance(key, int) and not isinstance(key, bool):
                    next_index = max(next_index, key + 1)
            else:
                key = next_index
                value = key_or_value
                next_index += 1
            pairs.append((key, value))

            kind, text = self._peek()
            if (kind, text) == ("punct", ","):
                self.pos += 1
            elif (kind, text) != ("punct", closing):
                raise ParserError(f"Expected ',' or '{closing}' but found '{text}'")


class PhpParser(BaseParser):
    """Parser for PHP files returning a translation array (Laravel style)."""

    kind = "php"
    extensions = ("php",)

    def _load_entries(self) -> list[tuple[str, Any]]:
        tokens = tokenize(self.read_text())
        for index, (kind, text) in enumerate(tokens):
            if kind == "word" and text.lower() == "return":
                data = _ArrayReader(tokens, index + 1).read_value()
                break
        else:
            raise ParserError(f"No return statement found in {self.file_name}")

        if not isinstance(data, OrderedPairs):
            raise ParserError(f"{self.file_name} does not return an array")
        return flatten_pairs(data)
