from typing import Collection, Union, Sequence, Iterator

from tuma.lexer import Token, TokenType

TokenSelector = Union[TokenType, Collection[TokenType]]


class UnexpectedToken(Exception):
    def __init__(self, actual: Token, expected: TokenSelector) -> None:
        super().__init__(f"Unexpected {describe(actual)}, expected {_expected_names(expected)}")
        self.actual: Token = actual
        self.expected: TokenSelector = expected


def describe(token: Token) -> str:
    """Human-readable token description."""
    if token.type == TokenType.END:
        return "end of input"
    elif token.type == TokenType.UNKNOWN:
        return f"character {repr(token.text[0])}"
    return f"{token.type.name} {repr(token.text)}"


def _expected_names(sel: TokenSelector) -> str:
    if isinstance(sel, TokenType):
        return sel.name
    return " or ".join(token_type.name for token_type in sel)


def _match(token: Token, sel: TokenSelector) -> bool:
    """Match token with the selector."""
    if isinstance(sel, TokenType):
        return token.type == sel
    elif isinstance(sel, Collection):
        return token.type in sel
    else:
        raise ValueError(f"Unsupported token selector: {sel}")


def _unpack(items: Collection[Token]) -> Union[Collection[Token], Token]:
    """Replace the collection with single item by its only item."""
    if isinstance(items, Collection) and len(items) == 1:
        return next(iter(items))
    return items


class TokenStream:
    def __init__(self, tokens: Sequence[Token], position: int = 0):
        self.tokens: Sequence[Token] = tuple(tokens)
        self.position = position
        if len(self.tokens) == 0 or self.tokens[-1].type != TokenType.END:
            raise ValueError("The last token must be the token stream 'END'")

    def match(self, *selectors: TokenSelector) -> bool:
        """Check if tokens in the stream match the given selectors."""
        matched = 0
        for token, sel in zip(self, selectors):
            if not _match(token, sel):
                return False
            matched += 1
        return matched == len(selectors)

    def take(self, *selectors: TokenSelector) -> Union[Token, Sequence[Token]]:
        """Consume tokens from the stream while ensuring they match given selectors."""
        tokens = []
        for token, sel in zip(self, selectors):
            if not _match(token, sel):
                raise UnexpectedToken(token, sel)
            tokens.append(token)
        if len(tokens) < len(selectors):
            raise UnexpectedToken(self.tokens[-1], selectors[len(tokens)])
        self.position = min(self.position + len(tokens), len(self.tokens) - 1)
        return _unpack(tokens)

    def __iter__(self) -> Iterator[Token]:
        """Iterate over tokens starting from the current position."""
        for i in range(self.position, len(self.tokens)):
            yield self.tokens[i]

    @property
    def current(self) -> Token:
        """Get current token."""
        return self.tokens[self.position]
