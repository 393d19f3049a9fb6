from typing import Callable, Optional, Dict

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer as BasePromptLexer

from tuma.lexer import Lexer, TokenType

TokenStyles = Dict[TokenType, str]


class PromptLexer(BasePromptLexer):
    DEFAULT_STYLE: TokenStyles = {
        # Special
        TokenType.SPACE: "class:pygments.whitespace",
        TokenType.NEW_LINE: "class:pygments.whitespace",
        TokenType.END: "class:pygments.whitespace",
        TokenType.UNKNOWN: "class:pygments.error",

        # Keywords:
        TokenType.LET: "class:pygments.keyword",

        # Punctuation:
        TokenType.OPEN_BRACKET: "class:pygments.punctuation",
        TokenType.CLOSE_BRACKET: "class:pygments.punctuation",
        TokenType.SEMICOLON: "class:pygments.punctuation",

        # Operators:
        TokenType.PLUS: "class:pygments.operator",
        TokenType.MINUS: "class:pygments.operator",
        TokenType.MUL: "class:pygments.operator",
        TokenType.ASSIGN: "class:pygments.operator",

        # Atoms:
        TokenType.NAME: "class:pygments.name",
        TokenType.NUMBER: "class:pygments.number",
    }

    def __init__(self, lexer: Lexer, style: Optional[TokenStyles] = None):
        self.lexer: Lexer = lexer
        self.token_styles: TokenStyles = style or self.DEFAULT_STYLE

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        tokens = self.lexer.tokens(text=document.text)

        lines: Dict[int, StyleAndTextTuples] = {}
        for token in tokens:
            # Newlines separate prompt lines and are not rendered
            if token.type == TokenType.NEW_LINE:
                continue
            line = lines.setdefault(token.pos.line, [])
            style = self.token_styles[token.type]
            line.append((style, token.text))

        def get_tokens(line_number: int) -> StyleAndTextTuples:
            """Get tokens by line."""
            return lines.get(line_number, [])

        return get_tokens


Prompt = Callable[[str], str]
