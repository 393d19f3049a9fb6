import enum
import re
from dataclasses import dataclass
from typing import Dict, Iterator, List


class TokenType(enum.Enum):
    """Token types."""
    # White spaces
    SPACE = "SPACE"
    NEW_LINE = "NEW_LINE"

    # Structural
    OPEN_BRACKET = "OPEN_BRACKET"  # (
    CLOSE_BRACKET = "CLOSE_BRACKET"  # )
    SEMICOLON = "SEMICOLON"

    # Statements
    LET = "LET"

    # Atomic expressions
    NUMBER = "NUMBER"
    NAME = "NAME"

    # Complex expressions
    PLUS = "PLUS"
    MINUS = "MINUS"
    MUL = "MUL"
    ASSIGN = "ASSIGN"

    # Technical
    UNKNOWN = "UNKNOWN"
    END = "END"


@dataclass(frozen=True)
class Position:
    """Position in source code."""
    file: str  # File path
    abs: int  # Absolute position in characters
    line: int  # Line number
    in_line: int  # Position in line

    def __repr__(self):
        return f"{self.file}:{self.line}:{self.in_line}"


class Token:
    """Represents a token in a text."""

    def __init__(self, token_type: TokenType, text: str, pos: Position):
        self.type: TokenType = token_type
        self.text: str = text
        self.pos: Position = pos

    def __repr__(self):
        return f"<{self.type.name} {repr(self.text)} {self.pos}>"


class Lexer:
    """Lexical analyzer."""
    default_patterns = {
        TokenType.SPACE: r"[ \t\r]+",
        TokenType.NEW_LINE: r"\n",
        TokenType.SEMICOLON: r";",
        TokenType.NAME: r"(?!let(?!\w))[^\W\d]\w*",
        TokenType.NUMBER: r"[0-9]+",
        TokenType.OPEN_BRACKET: r"\(",
        TokenType.CLOSE_BRACKET: r"\)",
        TokenType.PLUS: r"\+",
        TokenType.MINUS: r"\-",
        TokenType.MUL: r"\*",
        TokenType.ASSIGN: r"=",
        TokenType.LET: r"let",
    }

    def __init__(self, patterns=None):
        self.patterns: Dict[TokenType, str] = patterns or Lexer.default_patterns
        regex_entries = []
        for token_type, pattern in self.patterns.items():
            regex_entries.append(f"(?P<{token_type.name}>{pattern})")
        final_regex = "|".join(regex_entries)
        self.regex: re.Pattern = re.compile(final_regex)

    def iter_tokens(self, text: str, file: str = "<code>") -> Iterator[Token]:
        """Split text in tokens."""
        abs_pos, line_num, line_start = 0, 0, 0
        for match in self.regex.finditer(text):
            start, end = match.span()

            # Text skipped between two matches is not covered by any pattern
            if start != abs_pos:
                skipped_pos = Position(file, abs_pos, line_num, abs_pos - line_start)
                yield Token(TokenType.UNKNOWN, text[abs_pos:start], skipped_pos)

            token_type = TokenType[match.lastgroup]
            yield Token(token_type, text[start:end], Position(file, start, line_num, start - line_start))

            abs_pos = end
            if token_type == TokenType.NEW_LINE:
                line_num += 1
                line_start = end

        if abs_pos != len(text):
            yield Token(TokenType.UNKNOWN, text[abs_pos:], Position(file, abs_pos, line_num, abs_pos - line_start))

        yield Token(TokenType.END, '', Position(file, len(text), line_num, len(text) - line_start))

    def tokens(self, text: str, file: str = "<code>") -> List[Token]:
        return list(self.iter_tokens(text, file))
