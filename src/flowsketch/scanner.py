"""
Scanner module for the flowchart DSL.

Converts raw DSL text into a flat, ordered list of tokens. The scanner is
total: every input string produces a token list, and characters that match no
rule are skipped silently so that a half-typed diagram never fails to scan.

Syntax:
    [Label]            Rectangle (process step)
    {Label}            Diamond (decision)
    (Label)            Ellipse (start/end)
    [[Label]]          Database
    A -> B             Connection
    A --> B            Dashed connection
    A -> "label" -> B  Labeled connection
    @direction TB      Directive
    # comment          Ignored to end of line
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .models import NodeShape


class TokenKind(Enum):
    """Kinds of token produced by the scanner."""

    NODE = "node"
    ARROW = "arrow"
    LABEL = "label"
    DIRECTIVE = "directive"
    NEWLINE = "newline"


@dataclass(frozen=True)
class Token:
    """
    A single scanned token.

    Attributes:
        kind: Token kind.
        value: Label text for node and label tokens, "name value" for
               directives, the arrow text for arrows, "\\n" for newlines.
        shape: Shape kind, set for node tokens only.
        dashed: True for "-->" arrows.
    """

    kind: TokenKind
    value: str
    shape: Optional[NodeShape] = None
    dashed: bool = False

    @property
    def directive_name(self) -> str:
        return self.value.split(" ", 1)[0]

    @property
    def directive_value(self) -> str:
        parts = self.value.split(" ", 1)
        return parts[1] if len(parts) > 1 else ""

    def __str__(self) -> str:
        if self.kind == TokenKind.NODE:
            return f"node<{self.shape.value}>({self.value!r})"
        if self.kind == TokenKind.ARROW:
            return "arrow(dashed)" if self.dashed else "arrow"
        if self.kind == TokenKind.NEWLINE:
            return "newline"
        return f"{self.kind.value}({self.value!r})"


# Opening delimiter -> (closing delimiter, shape) for depth-aware node labels.
_BRACKETED_SHAPES = {
    "[": ("]", NodeShape.RECTANGLE),
    "{": ("}", NodeShape.DIAMOND),
    "(": (")", NodeShape.ELLIPSE),
}

NEWLINE = Token(TokenKind.NEWLINE, "\n")
ARROW = Token(TokenKind.ARROW, "->")
DASHED_ARROW = Token(TokenKind.ARROW, "-->", dashed=True)


def _is_name_char(char: str) -> bool:
    return char.isascii() and char.isalnum()


class Scanner:
    """
    Character-by-character scanner over an immutable input string.

    Rules are tried in priority order at each position; longer patterns
    ("[[", "-->") are checked before their prefixes.

    Example:
        >>> [str(t) for t in Scanner("[A] -> {B}").scan()]
        ["node<rectangle>('A')", 'arrow', "node<diamond>('B')"]
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def scan(self) -> List[Token]:
        """Scan the whole input and return the token list."""
        return list(self.tokens())

    def tokens(self) -> Iterator[Token]:
        """Yield tokens lazily from the current position to end of input."""
        text = self.text
        length = len(text)

        while self.pos < length:
            char = text[self.pos]

            if char == " " or char == "\t":
                self.pos += 1
            elif char == "\n":
                self.pos += 1
                yield NEWLINE
            elif char == "#":
                self._skip_comment()
            elif char == "@":
                yield self._scan_directive()
            elif text.startswith("[[", self.pos):
                yield self._scan_database()
            elif char in _BRACKETED_SHAPES:
                yield self._scan_bracketed(char)
            elif text.startswith("-->", self.pos):
                self.pos += 3
                yield DASHED_ARROW
            elif text.startswith("->", self.pos):
                self.pos += 2
                yield ARROW
            elif char == '"':
                yield self._scan_quoted()
            else:
                self.pos += 1

    def _skip_comment(self) -> None:
        end = self.text.find("\n", self.pos)
        self.pos = len(self.text) if end == -1 else end

    def _scan_directive(self) -> Token:
        text = self.text
        length = len(text)
        self.pos += 1  # skip @

        start = self.pos
        while self.pos < length and _is_name_char(text[self.pos]):
            self.pos += 1
        name = text[start : self.pos]

        start = self.pos
        while self.pos < length and text[self.pos] not in "\n#":
            self.pos += 1
        value = text[start : self.pos].strip()

        return Token(TokenKind.DIRECTIVE, f"{name} {value}")

    def _scan_database(self) -> Token:
        start = self.pos + 2
        end = self.text.find("]]", start)
        if end == -1:
            end = len(self.text)
        self.pos = end + 2
        label = self.text[start:end].strip()
        return Token(TokenKind.NODE, label, shape=NodeShape.DATABASE)

    def _scan_bracketed(self, opener: str) -> Token:
        closer, shape = _BRACKETED_SHAPES[opener]
        label, self.pos = _read_balanced(self.text, self.pos + 1, opener, closer)
        return Token(TokenKind.NODE, label.strip(), shape=shape)

    def _scan_quoted(self) -> Token:
        text = self.text
        length = len(text)
        self.pos += 1  # skip opening quote

        chars = []
        while self.pos < length and text[self.pos] != '"':
            if text[self.pos] == "\\" and self.pos + 1 < length:
                self.pos += 1
            chars.append(text[self.pos])
            self.pos += 1
        self.pos += 1  # skip closing quote

        return Token(TokenKind.LABEL, "".join(chars))


def _read_balanced(text: str, pos: int, opener: str, closer: str) -> Tuple[str, int]:
    """
    Read label text up to the closer that balances an already-consumed opener.

    Returns the label (excluding the outermost closer) and the position just
    past it, or end of input if the label is unterminated.
    """
    depth = 1
    start = pos
    length = len(text)

    while pos < length:
        char = text[pos]
        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return text[start:pos], pos + 1
        pos += 1

    return text[start:pos], pos


def tokenize(text: str) -> List[Token]:
    """
    Convenience function to scan DSL text.

    Args:
        text: DSL source text

    Returns:
        Ordered list of tokens
    """
    return Scanner(text).scan()
