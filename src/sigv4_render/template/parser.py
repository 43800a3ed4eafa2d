"""Template parsing utilities.

Two kinds of placeholder are recognized:

- variable expressions: ``{{ user.id }}``, ``{{{ items[0] }}}``
- call expressions: ``{{ $name('literal', 1, true, null) }}``

Call expressions are parsed by a small recursive-descent parser limited to
a sigil-prefixed name and a parenthesized argument list. Literal arguments
(strings, numbers, true, false, null) keep their value; any other argument
expression is skipped and passed as None.
"""

import re
from collections.abc import Iterator
from typing import Any

from .types import ParsedCall

# Two or three opening braces, two or three closing braces (counts independent)
PLACEHOLDER_PATTERN = re.compile(r"\{\{\{?[\s$\w.\[\]'\"]+\}\}\}?")

# Start of a call candidate; the argument list is left to the parser
CALL_START_PATTERN = re.compile(r"\{\{\{?\s*(\$[A-Za-z0-9_]+)\s*\(")

_WORD_PATTERN = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_NUMBER_PATTERN = re.compile(r"-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?")

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "\\": "\\",
    "'": "'",
    '"': '"',
}

_KEYWORDS: dict[str, Any] = {"true": True, "false": False, "null": None}

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_OPENERS.values())


def has_templates(text: str) -> bool:
    """Check if text contains an opening placeholder delimiter."""
    return "{{" in text


def find_placeholders(text: str) -> list[str]:
    """Return every variable placeholder in text, braces included."""
    return PLACEHOLDER_PATTERN.findall(text)


def placeholder_path(placeholder: str) -> str:
    """Strip braces and surrounding whitespace from a placeholder."""
    return placeholder.replace("{", "").replace("}", "").strip()


def is_whole_value(text: str) -> bool:
    """Check if text is exactly one variable placeholder.

    E.g., ``"{{ user }}"`` and ``"  {{user}} "`` are whole values,
    ``"id={{ user }}"`` is not.
    """
    matches = find_placeholders(text)
    return len(matches) == 1 and matches[0] == text.strip()


class CallSyntaxError(ValueError):
    """Raised internally when a call candidate does not fit the grammar."""


class _CallParser:
    """Cursor over one call candidate."""

    def __init__(self, text: str, pos: int):
        self.text = text
        self.pos = pos

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _expect(self, char: str) -> None:
        if self._peek() != char:
            raise CallSyntaxError(f"expected {char!r} at {self.pos}")
        self.pos += 1

    def parse_arguments(self) -> list[Any]:
        """Parse ``arg (, arg)* )`` after the opening parenthesis."""
        args: list[Any] = []
        self._skip_ws()
        if self._peek() == ")":
            self.pos += 1
            return args

        while True:
            self._skip_ws()
            args.append(self.parse_argument())
            self._skip_ws()
            char = self._peek()
            if char == ",":
                self.pos += 1
            elif char == ")":
                self.pos += 1
                return args
            else:
                raise CallSyntaxError(f"unexpected {char!r} in argument list")

    def parse_argument(self) -> Any:
        """Parse one argument; anything but a bare literal becomes None."""
        start = self.pos
        try:
            value = self.parse_literal()
            self._skip_ws()
            if self._peek() in (",", ")"):
                return value
        except CallSyntaxError:
            pass
        self.pos = start
        self.skip_expression()
        return None

    def parse_literal(self) -> Any:
        char = self._peek()
        if char in ("'", '"'):
            return self.parse_string(char)
        if char == "-" or char.isdigit():
            return self.parse_number()
        return self.parse_keyword()

    def skip_expression(self) -> None:
        """Skip to the next top-level comma or closing parenthesis."""
        start = self.pos
        stack: list[str] = []
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char in ("'", '"', "`"):
                self._skip_quoted(char)
                continue
            if char in _OPENERS:
                stack.append(_OPENERS[char])
            elif char in _CLOSERS:
                if not stack:
                    if char != ")":
                        raise CallSyntaxError(f"unbalanced {char!r} at {self.pos}")
                    break
                if stack.pop() != char:
                    raise CallSyntaxError(f"mismatched {char!r} at {self.pos}")
            elif char == "," and not stack:
                break
            self.pos += 1
        else:
            raise CallSyntaxError("unterminated argument list")
        if not self.text[start : self.pos].strip():
            raise CallSyntaxError(f"empty argument at {start}")

    def _skip_quoted(self, quote: str) -> None:
        self.pos += 1
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char == "\\":
                self.pos += 2
                continue
            self.pos += 1
            if char == quote:
                return
        raise CallSyntaxError("unterminated string")

    def parse_string(self, quote: str) -> str:
        self.pos += 1
        out: list[str] = []
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char == quote:
                self.pos += 1
                return "".join(out)
            if char == "\\":
                out.append(self._parse_escape())
                continue
            out.append(char)
            self.pos += 1
        raise CallSyntaxError("unterminated string")

    def _parse_escape(self) -> str:
        self.pos += 1
        char = self._peek()
        if not char:
            raise CallSyntaxError("dangling escape")
        if char == "u":
            digits = self.text[self.pos + 1 : self.pos + 5]
            if len(digits) != 4 or not all(c in "0123456789abcdefABCDEF" for c in digits):
                raise CallSyntaxError("bad unicode escape")
            self.pos += 5
            return chr(int(digits, 16))
        self.pos += 1
        return _ESCAPES.get(char, char)

    def parse_number(self) -> int | float:
        match = _NUMBER_PATTERN.match(self.text, self.pos)
        if not match:
            raise CallSyntaxError(f"bad number at {self.pos}")
        self.pos = match.end()
        literal = match.group(0)
        if any(c in literal for c in ".eE"):
            return float(literal)
        return int(literal)

    def parse_keyword(self) -> Any:
        match = _WORD_PATTERN.match(self.text, self.pos)
        if not match or match.group(0) not in _KEYWORDS:
            raise CallSyntaxError(f"not a literal at {self.pos}")
        self.pos = match.end()
        return _KEYWORDS[match.group(0)]

    def parse_close(self) -> None:
        """Consume ``}}`` or ``}}}`` after the argument list."""
        self._skip_ws()
        self._expect("}")
        self._expect("}")
        if self._peek() == "}":
            self.pos += 1


def iter_calls(text: str) -> Iterator[ParsedCall]:
    """Yield each well-formed call expression in text, left to right.

    Malformed candidates are skipped, never raised. Candidates that start
    inside an earlier call (e.g. in one of its string arguments) are ignored.
    """
    consumed = 0
    for match in CALL_START_PATTERN.finditer(text):
        if match.start() < consumed:
            continue
        parser = _CallParser(text, match.end())
        try:
            args = parser.parse_arguments()
            parser.parse_close()
        except CallSyntaxError:
            continue
        consumed = parser.pos
        yield ParsedCall(
            name=match.group(1),
            args=tuple(args),
            start=match.start(),
            end=parser.pos,
        )


def try_parse_call(text: str) -> ParsedCall | None:
    """Return the first call expression in text, or None."""
    return next(iter_calls(text), None)
